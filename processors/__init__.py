"""Processors module for issued command handling."""

from .command_reporter import CommandReporter

__all__ = ["CommandReporter"]
