"""
vm16 - Character Console Device

Byte-oriented terminal for the ``out`` and ``in`` instructions.

  out  - low 8 bits of the operand go to the output stream, flushed
         immediately; with no output stream they collect in tx_buffer
  in   - one byte from the RX queue if anything was injected, otherwise
         one blocking byte read from the input stream

End of input, a read fault, or having no input stream at all is an
InputReadFailure. There is no default character. A write or flush fault
on the output stream is an OutputWriteFailure.

Streams are binary (``sys.stdout.buffer``/``sys.stdin.buffer`` in the
runner, ``io.BytesIO`` in tests). Either may be None: output then only
lands in tx_buffer, input only comes from the RX queue.
"""

import logging
from collections import deque
from typing import BinaryIO, Optional

from ..errors import InputReadFailure, OutputWriteFailure

logger = logging.getLogger(__name__)


class ConsoleDevice:

    def __init__(self, input_stream: Optional[BinaryIO] = None,
                 output_stream: Optional[BinaryIO] = None):
        self.input_stream = input_stream
        self.output_stream = output_stream

        # TX log: bytes written while no output stream is attached
        self.tx_buffer: bytearray = bytearray()

        # RX injection queue, drained before the input stream is touched
        self._rx_queue: deque = deque()

    # --- Program side ---

    def write_char(self, value: int):
        """Emit the low byte of ``value``."""
        byte = value & 0xFF
        if self.output_stream is None:
            self.tx_buffer.append(byte)
            return

        try:
            self.output_stream.write(bytes([byte]))
            self.output_stream.flush()
        except OSError as e:
            raise OutputWriteFailure(str(e)) from e

    def read_char(self) -> int:
        """Block for one input byte and return its value (0..255)."""
        if self._rx_queue:
            return self._rx_queue.popleft()

        if self.input_stream is None:
            raise InputReadFailure("no input stream")

        try:
            data = self.input_stream.read(1)
        except OSError as e:
            raise InputReadFailure(str(e)) from e

        if not data:
            raise InputReadFailure("end of input")
        return data[0]

    # --- External API (runner / test harness) ---

    def inject_rx(self, data: bytes):
        """Queue bytes to be read by ``in`` ahead of the input stream.

        Example:
            console.inject_rx(b"take tablet\\n")
        """
        self._rx_queue.extend(data)
        logger.debug("Queued %d input bytes (%d pending)", len(data), len(self._rx_queue))

    @property
    def pending_input(self) -> int:
        return len(self._rx_queue)

    @property
    def output(self) -> bytes:
        """Bytes written since the last reset while no output stream was attached."""
        return bytes(self.tx_buffer)

    def reset(self):
        self.tx_buffer.clear()
        self._rx_queue.clear()
