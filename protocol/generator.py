"""Major frame generation for the spacecraft simulator."""

import logging
import time
from typing import Callable, Optional, Tuple

from .commands import HEALTH_STATUSES, Command
from .constants import DEFAULT_BYTE_ORDER, FRAME_SIZE, H1, H2, HALF_MINUTE, HEADER_WIDTH
from .frame_parser import FrameParser

logger = logging.getLogger(__name__)


class FrameGenerator:
    """
    Produces SOH check frames until the session duration has elapsed.

    Each frame is a 4-slot H1/H2 header followed by SOH/health pairs. The
    pairs are repeated across the payload so that losing any single minor
    frame still leaves a complete health report. The last slot is END, or
    KILL once the duration is reached; nothing is generated after KILL.
    """

    def __init__(self, duration_s: float = 0, health: Command = Command.GOOD,
                 clock: Callable[[], float] = time.monotonic,
                 byteorder: str = DEFAULT_BYTE_ORDER):
        if duration_s < 0:
            raise ValueError(f"Invalid session duration {duration_s}: must be >= 0")
        if health not in HEALTH_STATUSES:
            raise ValueError(f"Invalid health status {health!r}: expected GOOD or BAD")

        self.duration_s = duration_s or HALF_MINUTE
        self.health = Command(health)
        self.byteorder = FrameParser.check_byte_order(byteorder)
        self._clock = clock
        self._start_time: Optional[float] = None
        self._finished = False

    @property
    def finished(self) -> bool:
        """True once the KILL frame has been produced."""
        return self._finished

    def __iter__(self):
        return self

    def __next__(self) -> Tuple[int, ...]:
        if self._finished:
            raise StopIteration

        now = self._clock()
        if self._start_time is None:
            self._start_time = now
        kill = (now - self._start_time) >= self.duration_s

        frame = self.build_frame(self.health, kill)
        if kill:
            logger.info(f"Session duration of {self.duration_s}s reached, generating KILL frame")
            self._finished = True
        return frame

    def next_buffer(self) -> bytes:
        """Next major frame packed for the wire."""
        return FrameParser.pack_major_frame(next(self), self.byteorder)

    @staticmethod
    def build_header() -> Tuple[int, ...]:
        return tuple(H1 if index % 2 == 0 else H2 for index in range(HEADER_WIDTH))

    @staticmethod
    def build_frame(health: Command, kill: bool) -> Tuple[int, ...]:
        """Header + SOH/health alternation + terminal sentinel."""
        payload_width = FRAME_SIZE - HEADER_WIDTH
        payload = []
        for index in range(payload_width - 1):
            payload.append(Command.SOH.value if index % 2 == 0 else health.value)
        payload.append(Command.KILL.value if kill else Command.END.value)
        return FrameGenerator.build_header() + tuple(payload)
