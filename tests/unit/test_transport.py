"""Tests for socket and serial transports."""

import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

import socket
from unittest.mock import MagicMock, patch

import pytest
import serial

from protocol.constants import MAJOR_FRAME_LENGTH
from protocol.transport import (SerialTransport, SocketTransport, TransportError,
                                accept_connection, open_connection, open_serial)


@pytest.fixture
def socket_pair():
    left, right = socket.socketpair()
    yield left, right
    left.close()
    right.close()


class TestSocketTransport:

    def test_write_then_read(self, socket_pair):
        left, right = socket_pair
        sender = SocketTransport(left)
        receiver = SocketTransport(right)

        payload = bytes(range(MAJOR_FRAME_LENGTH))
        assert sender.write(payload) == MAJOR_FRAME_LENGTH
        assert receiver.read(MAJOR_FRAME_LENGTH) == payload

    def test_read_reassembles_partial_chunks(self):
        sock = MagicMock()
        sock.recv.side_effect = [b"a" * 50, b"b" * 50, b"c" * 28]

        data = SocketTransport(sock).read(MAJOR_FRAME_LENGTH)

        assert data == b"a" * 50 + b"b" * 50 + b"c" * 28
        assert sock.recv.call_count == 3

    def test_read_returns_short_on_eof(self, socket_pair):
        left, right = socket_pair
        left.sendall(b"\x01" * 10)
        left.close()

        assert SocketTransport(right).read(MAJOR_FRAME_LENGTH) == b"\x01" * 10

    def test_read_error(self):
        sock = MagicMock()
        sock.recv.side_effect = ConnectionResetError("reset by peer")

        with pytest.raises(TransportError):
            SocketTransport(sock).read(MAJOR_FRAME_LENGTH)

    def test_write_error(self):
        sock = MagicMock()
        sock.sendall.side_effect = BrokenPipeError("broken pipe")

        with pytest.raises(TransportError):
            SocketTransport(sock).write(b"\x00" * MAJOR_FRAME_LENGTH)

    def test_close_is_idempotent(self):
        sock = MagicMock()
        transport = SocketTransport(sock)

        transport.close()
        transport.close()

        assert transport.closed
        sock.close.assert_called_once()

    def test_transport_error_is_io_error(self):
        assert issubclass(TransportError, IOError)


class TestSerialTransport:

    def test_read_write(self):
        port = MagicMock()
        port.read.return_value = b"\x02" * MAJOR_FRAME_LENGTH
        port.write.return_value = MAJOR_FRAME_LENGTH
        transport = SerialTransport(port)

        assert transport.read(MAJOR_FRAME_LENGTH) == b"\x02" * MAJOR_FRAME_LENGTH
        assert transport.write(b"\x00" * MAJOR_FRAME_LENGTH) == MAJOR_FRAME_LENGTH
        port.read.assert_called_once_with(MAJOR_FRAME_LENGTH)
        port.flush.assert_called_once()

    def test_serial_errors_become_transport_errors(self):
        port = MagicMock()
        port.read.side_effect = serial.SerialException("device disconnected")
        port.write.side_effect = serial.SerialException("device disconnected")
        transport = SerialTransport(port)

        with pytest.raises(TransportError):
            transport.read(MAJOR_FRAME_LENGTH)
        with pytest.raises(TransportError):
            transport.write(b"\x00")

    def test_close_once(self):
        port = MagicMock()
        transport = SerialTransport(port)
        transport.close()
        transport.close()
        port.close.assert_called_once()


class TestConnectionSetup:

    @patch('protocol.transport.serial.serial_for_url')
    def test_open_serial(self, mock_for_url):
        transport = open_serial("loop://", 115200)

        mock_for_url.assert_called_once_with("loop://", baudrate=115200)
        assert transport.port is mock_for_url.return_value

    @patch('protocol.transport.serial.serial_for_url')
    def test_open_serial_failure(self, mock_for_url):
        mock_for_url.side_effect = serial.SerialException("no such port")
        with pytest.raises(TransportError):
            open_serial("/dev/does-not-exist", 115200)

    def test_loopback_serial_round_trip(self):
        transport = open_serial("loop://", 115200)
        try:
            transport.write(b"\x07" * MAJOR_FRAME_LENGTH)
            assert transport.read(MAJOR_FRAME_LENGTH) == b"\x07" * MAJOR_FRAME_LENGTH
        finally:
            transport.close()

    @patch('protocol.transport.socket.create_connection')
    def test_open_connection(self, mock_create):
        transport = open_connection("::1", 5000)

        mock_create.assert_called_once_with(("::1", 5000), timeout=None)
        assert transport.sock is mock_create.return_value

    @patch('protocol.transport.socket.create_connection')
    def test_open_connection_refused(self, mock_create):
        mock_create.side_effect = ConnectionRefusedError("refused")
        with pytest.raises(TransportError):
            open_connection("127.0.0.1", 5000)

    @pytest.mark.parametrize("ipv6, family, bind_host", [
        (False, socket.AF_INET, "0.0.0.0"),
        (True, socket.AF_INET6, "::"),
    ])
    @patch('protocol.transport.socket.socket')
    def test_accept_connection_family(self, mock_socket, ipv6, family, bind_host):
        server = mock_socket.return_value.__enter__.return_value
        conn = MagicMock()
        server.accept.return_value = (conn, ("peer", 1234))

        transport = accept_connection(5000, ipv6=ipv6)

        mock_socket.assert_called_once_with(family, socket.SOCK_STREAM)
        server.bind.assert_called_once_with((bind_host, 5000))
        server.listen.assert_called_once_with(32)
        assert transport.sock is conn

    @patch('protocol.transport.socket.socket')
    def test_accept_connection_bind_failure(self, mock_socket):
        server = mock_socket.return_value.__enter__.return_value
        server.bind.side_effect = OSError("address in use")

        with pytest.raises(TransportError):
            accept_connection(5000)
