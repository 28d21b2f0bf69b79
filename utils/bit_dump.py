"""Debug dump of raw major frames."""

import logging

logger = logging.getLogger(__name__)


def format_bits(buffer: bytes) -> str:
    """
    Render a buffer as space separated bytes of bits.

    Bytes are written from the last to the first, each most significant bit
    first, i.e. the buffer read as one little-endian number.
    """
    return " ".join(f"{byte:08b}" for byte in reversed(buffer))


def dump_frame(buffer: bytes, frame_number: int) -> None:
    """Debug sink: log the bits of one major frame."""
    logger.debug(f"Major Frame {frame_number} Dump")
    logger.debug(format_bits(buffer))
