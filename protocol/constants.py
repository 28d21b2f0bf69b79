"""Protocol constants for major/minor frame processing."""

# Frame geometry
FRAME_SIZE = 16  # minor frames per major frame
MINOR_FRAME_LENGTH = 8  # bytes (one unsigned 64-bit value)
MAJOR_FRAME_LENGTH = FRAME_SIZE * MINOR_FRAME_LENGTH
HEADER_WIDTH = 4  # header minor frames emitted by the simulator
MAX_MINOR_FRAME_VALUE = 2 ** 64 - 1

# Session timing (seconds)
HALF_MINUTE = 30
ONE_MINUTE = 60

# Header markers
H1 = 0x0ABCABCABCABCFFF
H2 = 0x0CBACBACBACBAFFF
HEADER_MARKERS = frozenset((H1, H2))

# Byte order of each minor frame on the wire. Not negotiated: both ends
# have to be configured with the same value.
DEFAULT_BYTE_ORDER = "little"
BYTE_ORDERS = ("little", "big")
