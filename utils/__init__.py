"""Utility functions."""

from .logging_setup import setup_logging
from .bit_dump import dump_frame, format_bits

__all__ = ["setup_logging", "dump_frame", "format_bits"]
