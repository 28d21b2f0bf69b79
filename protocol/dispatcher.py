"""Command dispatch for the post-header region of a major frame."""

import logging
from enum import Enum
from typing import Callable, Optional, Sequence

from .commands import Command, DecodedCommand, UnknownCommand, decode
from .constants import DEFAULT_BYTE_ORDER
from .frame_parser import FrameParser, FrameShapeError

logger = logging.getLogger(__name__)

CommandSink = Callable[[Command], None]


class FrameOutcome(Enum):
    """Session decision after one major frame."""
    CONTINUE = "continue"
    TERMINATE = "terminate"


class FrameDispatcher:
    """Walks minor frames after the header and acts on each command."""

    def __init__(self, sink: Optional[CommandSink] = None):
        self.sink = sink
        self.frame_number: Optional[int] = None

    def begin_frame(self, frame_number: int) -> None:
        """Tell the dispatcher (and a sink that cares) which frame comes next."""
        self.frame_number = frame_number
        begin = getattr(self.sink, "begin_frame", None)
        if begin is not None:
            begin(frame_number)

    def dispatch(self, minor_frames: Sequence[int], header_length: int) -> FrameOutcome:
        """
        Process the commands of one major frame.

        Iteration starts right after the header and stops at the first zero
        value, KILL, unknown code, or END. END itself is not reported.

        Args:
            minor_frames: the 16 minor frame values
            header_length: number of header minor frames to skip

        Returns:
            FrameOutcome.TERMINATE on KILL or an unknown code, otherwise CONTINUE
        """
        for index in range(header_length, len(minor_frames)):
            value = minor_frames[index]
            if value == 0:
                # frame ended without an explicit sentinel
                return FrameOutcome.CONTINUE

            command = decode(value)
            if isinstance(command, UnknownCommand):
                logger.warning(f"Protocol violation: {command} at minor frame {index}, terminating session")
                return FrameOutcome.TERMINATE

            if command is Command.END:
                logger.debug("END of major frame.")
                return FrameOutcome.CONTINUE

            self._report(command)

            if command is Command.KILL:
                return FrameOutcome.TERMINATE

        return FrameOutcome.CONTINUE

    def dispatch_frame(self, buffer: bytes, byteorder: str = DEFAULT_BYTE_ORDER) -> FrameOutcome:
        """Decode, scan and dispatch a raw 128-byte major frame."""
        try:
            minor_frames = FrameParser.unpack_major_frame(buffer, byteorder)
        except FrameShapeError as e:
            logger.warning(f"Protocol violation: {e}, terminating session")
            return FrameOutcome.TERMINATE

        header_length = FrameParser.scan_header(minor_frames)
        return self.dispatch(minor_frames, header_length)

    def _report(self, command: DecodedCommand) -> None:
        if self.sink is None:
            return
        try:
            self.sink(command)
        except Exception as e:
            # sink is fire-and-forget; it must never change the outcome
            logger.error(f"Command sink failed for {command.name}: {e}")
