"""Processor and simulator session loops."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .constants import DEFAULT_BYTE_ORDER, MAJOR_FRAME_LENGTH
from .dispatcher import FrameDispatcher, FrameOutcome
from .frame_parser import FrameParser
from .generator import FrameGenerator

logger = logging.getLogger(__name__)

DebugSink = Callable[[bytes, int], None]


@dataclass
class FrameCounter:
    """Per-session major frame sequence number, starting at 1."""
    value: int = 1

    def increment(self) -> int:
        current = self.value
        self.value += 1
        return current


class ProcessorSession:
    """Ground side: receive major frames until the spacecraft sends KILL."""

    def __init__(self, transport, dispatcher: Optional[FrameDispatcher] = None,
                 debug: bool = False, debug_sink: Optional[DebugSink] = None,
                 byteorder: str = DEFAULT_BYTE_ORDER):
        self.transport = transport
        self.dispatcher = dispatcher or FrameDispatcher()
        self.debug = debug
        self.debug_sink = debug_sink
        self.byteorder = FrameParser.check_byte_order(byteorder)
        self.counter = FrameCounter()

    def process_next_frame(self) -> FrameOutcome:
        """Receive and handle exactly one major frame.

        The debug sink only sees full 128-byte buffers; a short read is
        logged and terminates the session.
        """
        buffer = self.transport.read(MAJOR_FRAME_LENGTH)

        if len(buffer) != MAJOR_FRAME_LENGTH:
            logger.warning(
                f"Short read on major frame {self.counter.value}: "
                f"expected {MAJOR_FRAME_LENGTH} bytes, got {len(buffer)}"
            )
            self.counter.increment()
            return FrameOutcome.TERMINATE

        if self.debug and self.debug_sink is not None:
            self.debug_sink(buffer, self.counter.value)

        minor_frames = FrameParser.unpack_major_frame(buffer, self.byteorder)
        header_length = FrameParser.scan_header(minor_frames)

        logger.info(f"Major Frame {self.counter.value}")
        self.dispatcher.begin_frame(self.counter.value)
        outcome = self.dispatcher.dispatch(minor_frames, header_length)

        self.counter.increment()
        return outcome

    def run(self) -> int:
        """
        Process frames until TERMINATE.

        Returns the number of frames processed. TransportError propagates;
        the transport is closed on every exit path.
        """
        try:
            while self.process_next_frame() is FrameOutcome.CONTINUE:
                pass
        finally:
            self.transport.close()
        frames = self.counter.value - 1
        logger.info(f"Session terminated after {frames} major frames.")
        return frames


class SimulatorSession:
    """Spacecraft side: send generated frames until the KILL frame is out."""

    def __init__(self, transport, generator: Optional[FrameGenerator] = None,
                 debug: bool = False, debug_sink: Optional[DebugSink] = None):
        self.transport = transport
        self.generator = generator or FrameGenerator()
        self.debug = debug
        self.debug_sink = debug_sink
        self.counter = FrameCounter()

    def send_next_frame(self) -> bool:
        """
        Write one major frame.

        Returns False once there is nothing left to send. The final KILL
        frame is transmitted but not counted or dumped.
        """
        try:
            buffer = self.generator.next_buffer()
        except StopIteration:
            return False

        self.transport.write(buffer)

        if not self.generator.finished:
            if self.debug and self.debug_sink is not None:
                self.debug_sink(buffer, self.counter.value)
            logger.info(f"Major Frame {self.counter.increment()} has been sent to MDP.")
        return not self.generator.finished

    def run(self) -> int:
        """Send frames until the generator is exhausted; returns frames counted."""
        logger.info("Preparing data dump sequence.")
        try:
            while self.send_next_frame():
                pass
        finally:
            self.transport.close()
        frames = self.counter.value - 1
        logger.info(f"KILL frame sent after {frames} major frames, closing connection.")
        return frames
