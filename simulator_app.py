"""
Spacecraft Simulator

Client that connects to the Mission Data Processor and streams SOH check
frames until the configured duration has elapsed, then sends KILL.
"""

import argparse
import sys

from config import config
from protocol import (FrameGenerator, SimulatorSession, TransportError,
                      open_connection, open_serial, parse_health)
from utils import dump_frame, setup_logging

logger = setup_logging()


def _health(value: str):
    try:
        return parse_health(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def _seconds(value: str) -> float:
    try:
        seconds = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid duration {value!r}")
    if seconds < 0:
        raise argparse.ArgumentTypeError(f"Invalid duration {value!r}: must be >= 0")
    return seconds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Spacecraft simulator: send SOH telemetry frames to the MDP.")
    parser.add_argument(
        "host", nargs="?", default=config.MDP_HOST,
        help=f"MDP host (default: {config.MDP_HOST})"
    )
    parser.add_argument(
        "port", type=int, nargs="?", default=config.MDP_PORT,
        help=f"MDP port (default: {config.MDP_PORT})"
    )
    parser.add_argument(
        "seconds", type=_seconds, nargs="?", default=str(config.SESSION_DURATION_S),
        help="Session duration in seconds, 0 means 30 (default: %(default)s)"
    )
    parser.add_argument(
        "--debug", action="store_true", default=config.DEBUG_FRAME_DUMP,
        help="Dump the bits of every sent major frame"
    )
    parser.add_argument(
        "--health", type=_health, default=config.HEALTH_STATUS,
        help=f"Health status reported in SOH checks: good or bad (default: {config.HEALTH_STATUS})"
    )
    parser.add_argument(
        "--serial", default=None, metavar="URL",
        help="Write frames to a serial port / pyserial URL instead of TCP"
    )
    parser.add_argument(
        "--byte-order", choices=("little", "big"), default=config.FRAME_BYTE_ORDER,
        help=f"Minor frame byte order (default: {config.FRAME_BYTE_ORDER})"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.debug:
        setup_logging("DEBUG")

    generator = FrameGenerator(args.seconds, args.health, byteorder=args.byte_order)

    try:
        if args.serial:
            transport = open_serial(args.serial, config.SERIAL_BAUD_RATE)
        else:
            transport = open_connection(args.host, args.port)

        SimulatorSession(transport, generator, debug=args.debug, debug_sink=dump_frame).run()
    except TransportError as e:
        logger.error(f"Transport error: {e}")
        return 1
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Exiting due to KeyboardInterrupt.")
