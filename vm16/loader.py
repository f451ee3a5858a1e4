"""
vm16 - Program Image Loader

Image format: a flat file of 16-bit words, little-endian (low byte
first), loaded verbatim at address $0000. No header, no checksum.

Word values are not checked here. An image may contain words that are
invalid as instructions; they only fail if the machine executes them.
"""

import logging
import struct
from pathlib import Path
from typing import List, Union

from .config import MEMORY_SIZE
from .errors import ImageFormatError

logger = logging.getLogger(__name__)


def words_from_bytes(data: bytes) -> List[int]:
    """Decode little-endian word pairs. An odd trailing byte is an error."""
    if len(data) % 2:
        raise ImageFormatError(
            f"Image is {len(data)} bytes; expected an even number of bytes")
    count = len(data) // 2
    if count > MEMORY_SIZE:
        raise ImageFormatError(
            f"Image is {count} words; memory holds {MEMORY_SIZE}")
    return list(struct.unpack(f'<{count}H', data))


def words_to_bytes(words: List[int]) -> bytes:
    """Encode words as a little-endian image (used to build test images)."""
    return struct.pack(f'<{len(words)}H', *words)


def read_image(path: Union[str, Path]) -> List[int]:
    """Read and decode an image file."""
    path = Path(path)
    data = path.read_bytes()
    words = words_from_bytes(data)
    logger.info("Read image %s: %d bytes, %d words", path.name, len(data), len(words))
    return words
