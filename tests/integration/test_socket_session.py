"""End-to-end simulator -> processor sessions over real sockets."""

import os
import socket
import sys
import threading
import time

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))

from processors import CommandReporter
from protocol import (Command, FrameDispatcher, FrameGenerator, ProcessorSession,
                      SimulatorSession, SocketTransport, accept_connection,
                      open_connection)


class StepClock:
    """Clock that advances one second per reading."""

    def __init__(self):
        self.now = 0.0

    def __call__(self):
        value = self.now
        self.now += 1.0
        return value


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def _run_simulator(transport, generator, results):
    results["sent"] = SimulatorSession(transport, generator).run()


class TestSocketPairSession:

    @pytest.mark.parametrize("health", [Command.GOOD, Command.BAD])
    def test_full_session(self, health):
        sim_sock, mdp_sock = socket.socketpair()
        results = {}
        generator = FrameGenerator(5, health, clock=StepClock())
        thread = threading.Thread(
            target=_run_simulator, args=(SocketTransport(sim_sock), generator, results)
        )
        thread.start()

        reporter = CommandReporter()
        processed = ProcessorSession(SocketTransport(mdp_sock), FrameDispatcher(sink=reporter)).run()
        thread.join(timeout=10)

        assert not thread.is_alive()
        assert results["sent"] == 5
        assert processed == 6
        assert Command.END not in reporter.stats
        assert reporter.stats[Command.KILL] == 1
        assert reporter.stats[health] == 6 * 5
        assert reporter.stats[Command.SOH] == 6 * 6
        assert reporter.last_command is Command.KILL

    def test_peer_disconnect_ends_session(self):
        sim_sock, mdp_sock = socket.socketpair()
        sim_sock.close()

        assert ProcessorSession(SocketTransport(mdp_sock)).run() == 1


class TestTcpSession:

    def test_accept_and_connect(self):
        port = _free_port()
        accepted = {}

        def serve():
            accepted["transport"] = accept_connection(port, host="127.0.0.1")

        server = threading.Thread(target=serve)
        server.start()

        client = None
        deadline = time.monotonic() + 5
        while client is None:
            try:
                client = open_connection("127.0.0.1", port, timeout=1)
            except OSError:
                if time.monotonic() > deadline:
                    raise
                time.sleep(0.05)
        server.join(timeout=5)

        results = {}
        sim = threading.Thread(
            target=_run_simulator,
            args=(client, FrameGenerator(2, Command.GOOD, clock=StepClock()), results)
        )
        sim.start()
        processed = ProcessorSession(accepted["transport"]).run()
        sim.join(timeout=10)

        assert results["sent"] == 2
        assert processed == 3
