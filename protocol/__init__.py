"""Protocol module for major frame processing."""

from .constants import (
    FRAME_SIZE, MINOR_FRAME_LENGTH, MAJOR_FRAME_LENGTH, HEADER_WIDTH,
    HALF_MINUTE, ONE_MINUTE, H1, H2, HEADER_MARKERS, DEFAULT_BYTE_ORDER
)
from .commands import Command, UnknownCommand, decode, describe, parse_health
from .frame_parser import FrameParser, FrameShapeError
from .dispatcher import FrameDispatcher, FrameOutcome
from .generator import FrameGenerator
from .session import FrameCounter, ProcessorSession, SimulatorSession
from .transport import (
    TransportError, SocketTransport, SerialTransport,
    accept_connection, open_connection, open_serial
)

__all__ = [
    "FRAME_SIZE", "MINOR_FRAME_LENGTH", "MAJOR_FRAME_LENGTH", "HEADER_WIDTH",
    "HALF_MINUTE", "ONE_MINUTE", "H1", "H2", "HEADER_MARKERS", "DEFAULT_BYTE_ORDER",
    "Command", "UnknownCommand", "decode", "describe", "parse_health",
    "FrameParser", "FrameShapeError", "FrameDispatcher", "FrameOutcome",
    "FrameGenerator", "FrameCounter", "ProcessorSession", "SimulatorSession",
    "TransportError", "SocketTransport", "SerialTransport",
    "accept_connection", "open_connection", "open_serial"
]
