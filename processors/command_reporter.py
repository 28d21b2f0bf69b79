"""Command reporting sink for the frame dispatcher."""

import logging
from typing import Callable, Dict, List, Optional

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from protocol.commands import Command, describe

logger = logging.getLogger(__name__)


class CommandReporter:
    """Logs every issued command and forwards it to extra sinks.

    Callable, so an instance can be handed straight to FrameDispatcher.
    Only per-command counts are kept.
    """

    def __init__(self, sinks: Optional[List[Callable[[Command], None]]] = None):
        self.sinks = list(sinks or [])
        self.stats: Dict[Command, int] = {}
        self.frame_number: Optional[int] = None
        self.last_command: Optional[Command] = None

    def begin_frame(self, frame_number: int) -> None:
        """Current major frame number, passed on to sinks that record it."""
        self.frame_number = frame_number
        for sink in self.sinks:
            begin = getattr(sink, "begin_frame", None)
            if begin is not None:
                begin(frame_number)

    def __call__(self, command: Command) -> None:
        logger.info(describe(command))

        self.last_command = command
        self.stats[command] = self.stats.get(command, 0) + 1

        for sink in self.sinks:
            try:
                sink(command)
            except Exception as e:
                logger.error(f"Command sink {sink!r} failed for {command.name}: {e}")

    def summary(self) -> str:
        """One-line count of commands seen so far."""
        if not self.stats:
            return "no commands issued"
        return ", ".join(f"{command.name}={count}" for command, count in self.stats.items())
