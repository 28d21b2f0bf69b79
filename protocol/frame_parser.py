"""Frame parsing utilities."""

from typing import Iterable, Sequence, Tuple

from .constants import (
    BYTE_ORDERS, DEFAULT_BYTE_ORDER, FRAME_SIZE, HEADER_MARKERS,
    MAJOR_FRAME_LENGTH, MAX_MINOR_FRAME_VALUE, MINOR_FRAME_LENGTH
)


class FrameShapeError(ValueError):
    """Buffer does not have the fixed major frame shape."""
    pass


class FrameParser:
    """Major frame encode/decode and header scanning."""

    @staticmethod
    def check_byte_order(byteorder: str) -> str:
        if byteorder not in BYTE_ORDERS:
            raise ValueError(f"Invalid byte order {byteorder!r}: expected one of {BYTE_ORDERS}")
        return byteorder

    @staticmethod
    def unpack_major_frame(buffer: bytes, byteorder: str = DEFAULT_BYTE_ORDER) -> Tuple[int, ...]:
        """
        Split a 128-byte buffer into its 16 minor frame values.

        Args:
            buffer: raw major frame
            byteorder: byte order of each 8-byte minor frame

        Returns:
            Tuple of 16 unsigned 64-bit values

        Raises:
            FrameShapeError: buffer is not exactly MAJOR_FRAME_LENGTH bytes
        """
        FrameParser.check_byte_order(byteorder)
        if len(buffer) != MAJOR_FRAME_LENGTH:
            raise FrameShapeError(
                f"Invalid major frame length: need {MAJOR_FRAME_LENGTH}, got {len(buffer)}"
            )

        return tuple(
            int.from_bytes(buffer[offset:offset + MINOR_FRAME_LENGTH], byteorder=byteorder)
            for offset in range(0, MAJOR_FRAME_LENGTH, MINOR_FRAME_LENGTH)
        )

    @staticmethod
    def pack_major_frame(minor_frames: Iterable[int], byteorder: str = DEFAULT_BYTE_ORDER) -> bytes:
        """Serialize 16 minor frame values into a 128-byte buffer."""
        FrameParser.check_byte_order(byteorder)
        values = list(minor_frames)
        if len(values) != FRAME_SIZE:
            raise FrameShapeError(f"Invalid minor frame count: need {FRAME_SIZE}, got {len(values)}")

        buffer = bytearray()
        for value in values:
            if not 0 <= value <= MAX_MINOR_FRAME_VALUE:
                raise ValueError(f"Minor frame value out of range: {value}")
            buffer.extend(int(value).to_bytes(MINOR_FRAME_LENGTH, byteorder=byteorder))
        return bytes(buffer)

    @staticmethod
    def scan_header(minor_frames: Sequence[int]) -> int:
        """
        Count the leading run of header markers.

        Only membership in {H1, H2} is checked, not alternation. A zero value
        ends the header like any other non-marker.
        """
        header_length = 0
        for value in minor_frames:
            if value not in HEADER_MARKERS:
                break
            header_length += 1
        return header_length
