"""
Mission Data Processor (MDP)

Ground-side server: waits for one spacecraft simulator to connect, then
processes major frames until the KILL command is received.
"""

import argparse
import sys

from config import config
from processors import CommandReporter
from protocol import (FrameDispatcher, ProcessorSession, TransportError,
                      accept_connection, open_serial)
from storage import InfluxDBClient
from utils import dump_frame, setup_logging

logger = setup_logging()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Mission Data Processor: receive simulated telemetry frames.")
    parser.add_argument(
        "port", type=int, nargs="?", default=config.MDP_PORT,
        help=f"TCP port to listen on (default: {config.MDP_PORT})"
    )
    parser.add_argument(
        "--debug", action="store_true", default=config.DEBUG_FRAME_DUMP,
        help="Dump the bits of every received major frame"
    )
    parser.add_argument(
        "--host", default=None,
        help="Local address to bind (default: all interfaces)"
    )
    parser.add_argument(
        "--ipv6", action="store_true", default=config.USE_IPV6,
        help="Listen on IPv6 instead of IPv4"
    )
    parser.add_argument(
        "--serial", default=None, metavar="URL",
        help="Read frames from a serial port / pyserial URL instead of TCP"
    )
    parser.add_argument(
        "--influx", action="store_true", default=config.ENABLE_INFLUXDB,
        help="Store issued commands in InfluxDB"
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

    influx = InfluxDBClient(role="mdp") if args.influx else None
    reporter = CommandReporter(sinks=[influx] if influx is not None else None)

    try:
        if args.serial:
            transport = open_serial(args.serial, config.SERIAL_BAUD_RATE)
        else:
            transport = accept_connection(args.port, host=args.host, ipv6=args.ipv6)

        session = ProcessorSession(
            transport,
            FrameDispatcher(sink=reporter),
            debug=args.debug,
            debug_sink=dump_frame,
            byteorder=args.byte_order
        )
        session.run()
    except TransportError as e:
        logger.error(f"Transport error: {e}")
        return 1
    finally:
        if influx is not None:
            influx.close()

    logger.info(f"Commands issued: {reporter.summary()}")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Exiting due to KeyboardInterrupt.")
