"""Command table: maps 64-bit wire codes to the closed command set."""

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class Command(IntEnum):
    """Telemetry commands carried in minor frames."""
    KILL = 0xA83732340C01F07C
    SOH = 0x7B5BAD595E238E38
    GOOD = 0x56D2B19ED61DA482
    BAD = 0x70CCE976EA97BC7C
    END = 0xFFFFFFFFFFFFFFFF
    ICING_ALARM = 0x111636480DE784FF
    OVERHEAT_ALARM = 0x3F5897499134DA54
    SENSOR_1_ALARM = 0x146BB88485A0B17B
    SENSOR_2_ALARM = 0x1116395028409722
    SENSOR_3_ALARM = 0x1139C6736D1C49A7
    SENSOR_4_ALARM = 0x0CEEE2C5E648074A
    SENSOR_5_ALARM = 0x78023A955400C1EA


@dataclass(frozen=True)
class UnknownCommand:
    """Any minor frame value outside the command set."""
    code: int
    name: str = "UNKNOWN"

    def __str__(self) -> str:
        return f"UNKNOWN({self.code:016X})"


DecodedCommand = Union[Command, UnknownCommand]

_COMMANDS_BY_CODE = {command.value: command for command in Command}

COMMAND_LABELS = {
    Command.KILL: "KILL",
    Command.SOH: "SOH",
    Command.GOOD: "GOOD Health",
    Command.BAD: "BAD Health",
    Command.END: "END",
    Command.ICING_ALARM: "ICING",
    Command.OVERHEAT_ALARM: "OVERHEAT",
    Command.SENSOR_1_ALARM: "SENSOR_1_ALARM",
    Command.SENSOR_2_ALARM: "SENSOR_2_ALARM",
    Command.SENSOR_3_ALARM: "SENSOR_3_ALARM",
    Command.SENSOR_4_ALARM: "SENSOR_4_ALARM",
    Command.SENSOR_5_ALARM: "SENSOR_5_ALARM",
}

HEALTH_STATUSES = (Command.GOOD, Command.BAD)


def decode(code: int) -> DecodedCommand:
    """
    Decode a minor frame value into a command.

    Args:
        code: unsigned 64-bit minor frame value

    Returns:
        The matching Command, or UnknownCommand(code) when nothing matches
    """
    command = _COMMANDS_BY_CODE.get(code)
    if command is None:
        return UnknownCommand(code)
    return command


def describe(command: DecodedCommand) -> str:
    """Log line for an issued command."""
    if isinstance(command, UnknownCommand):
        return f"Unknown command {command.code:X} received."
    return f"{COMMAND_LABELS[command]} command {command.value:X} has been issued."


def parse_health(name: str) -> Command:
    """Map a health status name ("good"/"bad") to its command."""
    try:
        command = Command[name.strip().upper()]
    except KeyError:
        command = None
    if command not in HEALTH_STATUSES:
        raise ValueError(f"Invalid health status {name!r}: expected GOOD or BAD")
    return command
