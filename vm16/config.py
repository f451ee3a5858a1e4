"""
vm16 - Architecture Constants + Run Configuration

The architecture values are fixed; nothing at runtime may change them.
RunConfig holds the knobs the runner exposes (step limit, tracing,
logging, pre-queued input) and is built from parsed CLI arguments.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


# =============================================================================
#  ARCHITECTURE
# =============================================================================
MEMORY_SIZE = 32768            # 15-bit address space, one word per cell
NUM_REGISTERS = 8
MODULO = 32768                 # arithmetic wraps into the literal range

REGISTER_BASE = 32768          # word 32768 names register 0
INVALID_WORD_START = REGISTER_BASE + NUM_REGISTERS   # 32776 and up

WORD_MASK = 0xFFFF             # storage width of memory/registers/stack
VALUE_MASK = 0x7FFF            # 15-bit value / address range
ADDRESS_MASK = MEMORY_SIZE - 1


# =============================================================================
#  RUNTIME DEFAULTS
# =============================================================================
DEFAULT_MAX_STEPS = None       # None = run until halt or error
DEFAULT_LOG_LEVEL = logging.WARNING
LOGGER_NAME = "vm16"


@dataclass
class RunConfig:
    """Options for a single run of the machine."""
    max_steps: Optional[int] = DEFAULT_MAX_STEPS
    trace: bool = False
    log_level: int = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None
    input_file: Optional[Path] = None

    @classmethod
    def from_args(cls, args) -> "RunConfig":
        """Build from an argparse namespace (see vm16run.py)."""
        if args.quiet:
            level = logging.ERROR
        elif args.verbose == 0:
            level = DEFAULT_LOG_LEVEL
        elif args.verbose == 1:
            level = logging.INFO
        else:  # -vv or more
            level = logging.DEBUG

        # Tracing is emitted at DEBUG, so it forces the console down to it
        if args.trace:
            level = logging.DEBUG

        return cls(
            max_steps=args.max_steps,
            trace=args.trace,
            log_level=level,
            log_file=Path(args.log_file) if args.log_file else None,
            input_file=Path(args.input_file) if args.input_file else None,
        )
