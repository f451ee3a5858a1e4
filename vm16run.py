#!/usr/bin/env python3
"""
vm16run - run a program image on the vm16 machine

Usage:
    python vm16run.py <image.bin> [--max-steps N] [--trace] [--input-file F]
                                  [-v] [-q] [--log-file F]

Program output goes to stdout byte for byte; program input is read from
stdin, after any bytes queued with --input-file. Diagnostics go to
stderr (and --log-file).

Exit codes:
    0  program halted
    1  machine error (invalid opcode, stack underflow, end of input, ...)
    2  image could not be read or decoded
    3  --max-steps reached

Examples:
    python vm16run.py challenge.bin
    python vm16run.py challenge.bin --input-file walkthrough.txt
    python vm16run.py test.bin --trace --max-steps 500 --log-file trace.log
"""

import argparse
import sys

from vm16 import __version__
from vm16.config import RunConfig, LOGGER_NAME
from vm16.emu import VirtualMachine, StopReason
from vm16.errors import ImageFormatError
from vm16.log import setup_logging
from vm16.periph.console import ConsoleDevice

EXIT_HALT = 0
EXIT_MACHINE_ERROR = 1
EXIT_BAD_IMAGE = 2
EXIT_TIMEOUT = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vm16run",
        description="Run a 16-bit word program image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("image", help="Program image (little-endian 16-bit words)")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Stop after N instructions (default: unlimited)")
    parser.add_argument("--trace", action="store_true",
                        help="Log every instruction at DEBUG level")
    parser.add_argument("--input-file",
                        help="Feed this file to the program before reading stdin")
    parser.add_argument("--verbose", "-v", action="count", default=0,
                        help="Increase verbosity (-v, -vv)")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Only report errors")
    parser.add_argument("--log-file", help="Write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"vm16run {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = RunConfig.from_args(args)
    log = setup_logging(LOGGER_NAME, config.log_level, config.log_file)

    console = ConsoleDevice(sys.stdin.buffer, sys.stdout.buffer)
    vm = VirtualMachine(console, trace=config.trace)

    try:
        vm.load_image(args.image)
        if config.input_file is not None:
            console.inject_rx(config.input_file.read_bytes())
    except OSError as e:
        log.error("Cannot read %s: %s", e.filename or args.image, e.strerror or e)
        return EXIT_BAD_IMAGE
    except ImageFormatError as e:
        log.error("Bad image %s: %s", args.image, e)
        return EXIT_BAD_IMAGE

    result = vm.run(max_steps=config.max_steps)

    if result.reason is StopReason.HALT:
        return EXIT_HALT
    if result.reason is StopReason.TIMEOUT:
        return EXIT_TIMEOUT

    # The engine has already logged the error itself
    log.debug("Memory around $%04X:\n%s", result.ip, vm.mem.hexdump(result.ip & ~7, 32))
    return EXIT_MACHINE_ERROR


if __name__ == "__main__":
    sys.exit(main())
