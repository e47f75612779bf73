"""Shared pytest fixtures for the gelf_udp test suite."""

import socket

import pytest

from gelf_udp.pool import BufferPool


class RecordingSocket:
    """Stand-in for a connected UDP socket that records every datagram sent.

    ``fail_on`` is the 1-based send call that raises; ``short_by`` makes every
    send report that many bytes fewer than it was given.
    """

    def __init__(self, fail_on: int | None = None, short_by: int = 0):
        self.sent: list[bytes] = []
        self.calls = 0
        self.closed = False
        self._fail_on = fail_on
        self._short_by = short_by

    def send(self, data) -> int:
        self.calls += 1
        if self._fail_on is not None and self.calls == self._fail_on:
            raise OSError("network is unreachable")
        self.sent.append(bytes(data))
        return len(data) - self._short_by

    def close(self):
        self.closed = True


@pytest.fixture()
def make_socket():
    """Factory fixture returning RecordingSocket instances."""
    return RecordingSocket


@pytest.fixture()
def pool() -> BufferPool:
    return BufferPool()


@pytest.fixture()
def udp_receiver():
    """Bind a UDP socket on an ephemeral loopback port and yield (socket, address)."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5.0)
    host, port = sock.getsockname()
    yield sock, f"{host}:{port}"
    sock.close()
