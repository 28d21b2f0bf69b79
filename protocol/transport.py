"""Blocking byte-stream transports and connection setup."""

import logging
import socket
from typing import Optional

import serial

logger = logging.getLogger(__name__)


class TransportError(IOError):
    """I/O failure on the session transport. Fatal, never retried."""
    pass


class SocketTransport:
    """Transport over a connected stream socket."""

    def __init__(self, sock: socket.socket):
        self.sock = sock
        self._closed = False

    def read(self, size: int) -> bytes:
        """Read up to `size` bytes; fewer only if the peer closed the stream."""
        data = bytearray()
        try:
            while len(data) < size:
                chunk = self.sock.recv(size - len(data))
                if not chunk:
                    break
                data.extend(chunk)
        except OSError as e:
            raise TransportError(f"Socket read failed: {e}") from e
        return bytes(data)

    def write(self, data: bytes) -> int:
        try:
            self.sock.sendall(data)
        except OSError as e:
            raise TransportError(f"Socket write failed: {e}") from e
        return len(data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self.sock.close()
        except OSError as e:
            logger.warning(f"Error closing socket: {e}")

    @property
    def closed(self) -> bool:
        return self._closed


class SerialTransport:
    """Transport over a pyserial port (serial line or socket:// URL)."""

    def __init__(self, port):
        self.port = port
        self._closed = False

    def read(self, size: int) -> bytes:
        try:
            return bytes(self.port.read(size))
        except serial.SerialException as e:
            raise TransportError(f"Serial read failed on {self.port.port}: {e}") from e

    def write(self, data: bytes) -> int:
        try:
            written = self.port.write(data)
            self.port.flush()
        except serial.SerialException as e:
            raise TransportError(f"Serial write failed on {self.port.port}: {e}") from e
        return written if written is not None else len(data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.port.close()

    @property
    def closed(self) -> bool:
        return self._closed


def accept_connection(port: int, host: Optional[str] = None, ipv6: bool = False,
                      backlog: int = 32) -> SocketTransport:
    """
    Bind, listen and accept a single client connection.

    Args:
        port: TCP port to listen on
        host: local address to bind, all interfaces when None
        ipv6: listen on an AF_INET6 socket instead of AF_INET
        backlog: listen backlog

    Returns:
        SocketTransport for the accepted connection. The listening socket is
        closed once the client is accepted.
    """
    family = socket.AF_INET6 if ipv6 else socket.AF_INET
    bind_host = host if host is not None else ("::" if ipv6 else "0.0.0.0")
    try:
        with socket.socket(family, socket.SOCK_STREAM) as server:
            server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            server.bind((bind_host, port))
            server.listen(backlog)
            logger.info(f"Waiting for client connection to port: {port}.")
            conn, address = server.accept()
    except OSError as e:
        raise TransportError(f"Could not accept connection on port {port}: {e}") from e

    logger.info(f"Spacecraft has connected to MDP on port: {port} (from {address[0]}).")
    return SocketTransport(conn)


def open_connection(host: str, port: int, timeout: Optional[float] = None) -> SocketTransport:
    """Connect to a listening processor. Address family follows `host`."""
    try:
        sock = socket.create_connection((host, port), timeout=timeout)
    except OSError as e:
        raise TransportError(f"Could not connect to {host}:{port}: {e}") from e
    # blocking mode for the session itself
    sock.settimeout(None)
    logger.info(f"Have connected to MDP at {host}:{port}.")
    return SocketTransport(sock)


def open_serial(url: str, baud: int) -> SerialTransport:
    """Open a serial port (or any pyserial URL such as socket://host:port)."""
    try:
        port = serial.serial_for_url(url, baudrate=baud)
    except serial.SerialException as e:
        raise TransportError(f"Could not open serial port {url}: {e}") from e
    logger.info(f"Serial port {url} opened at {baud} baud.")
    return SerialTransport(port)
