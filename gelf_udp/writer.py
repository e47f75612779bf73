"""UDP GELF writer: compresses records and ships them as one or more datagrams."""

import logging
import os
import socket
import sys

from gelf_udp.caller import find_caller
from gelf_udp.chunker import (
    CHUNK_SIZE,
    MAX_CHUNKS,
    chunk_count,
    iter_chunks,
    new_message_id,
    validate_chunk_size,
)
from gelf_udp.compression import (
    CompressType,
    compress,
    parse_compress_type,
    validate_level,
)
from gelf_udp.config import WriterConfig
from gelf_udp.errors import ChunkLimitError, ShortWriteError
from gelf_udp.message import Message, construct_message
from gelf_udp.metrics import WriterMetrics
from gelf_udp.pool import BufferPool

logger = logging.getLogger(__name__)

DEFAULT_COMPRESSION_LEVEL = 1  # zlib.Z_BEST_SPEED


def parse_address(addr: str) -> tuple[str, int]:
    """Split "host:port" (or "[v6addr]:port") into (host, port)."""
    host, sep, port = addr.rpartition(":")
    if not sep or not host or not port:
        raise ValueError(f"Address must be host:port, got {addr!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    try:
        return host, int(port)
    except ValueError:
        raise ValueError(f"Invalid port in address {addr!r}") from None


def dial_udp(addr: str) -> socket.socket:
    """Open a UDP socket connected to ``addr`` so that plain ``send`` can be used."""
    host, port = parse_address(addr)
    family, socktype, proto, _, sockaddr = socket.getaddrinfo(host, port, type=socket.SOCK_DGRAM)[0]
    sock = socket.socket(family, socktype, proto)
    try:
        sock.connect(sockaddr)
    except OSError:
        sock.close()
        raise
    return sock


class UDPWriter:
    """Sends GELF messages to one collector over UDP.

    Safe to share between threads: every send is a sequence of independent
    datagram writes, and scratch buffers come from a lock-guarded pool.
    Send errors are raised to the caller, never logged here, so the writer
    can back a logging handler without recursing into itself.
    """

    def __init__(
        self,
        addr: str,
        compress_type=CompressType.GZIP,
        compression_level: int = DEFAULT_COMPRESSION_LEVEL,
        chunk_size: int = CHUNK_SIZE,
        facility: str | None = None,
        hostname: str | None = None,
        pool: BufferPool | None = None,
        metrics: WriterMetrics | None = None,
        sock=None,
    ):
        self._compress_type = parse_compress_type(compress_type)
        self._compression_level = validate_level(compression_level)
        self._chunk_size = validate_chunk_size(chunk_size)
        self.addr = addr
        self.hostname = hostname or socket.gethostname()
        self.facility = facility if facility is not None else os.path.basename(sys.argv[0])
        self.pool = pool if pool is not None else BufferPool()
        self.metrics = metrics if metrics is not None else WriterMetrics()
        self._sock = sock if sock is not None else dial_udp(addr)

        logger.debug(
            "UDP writer for %s (compression=%s level=%d chunk_size=%d)",
            addr, self._compress_type.name, self._compression_level, self._chunk_size,
        )

    @classmethod
    def from_config(cls, config: WriterConfig, **kwargs) -> "UDPWriter":
        return cls(
            config.address,
            compress_type=config.compression,
            compression_level=config.compression_level,
            chunk_size=config.chunk_size,
            facility=config.facility or None,
            **kwargs,
        )

    @property
    def compress_type(self) -> CompressType:
        return self._compress_type

    @property
    def compression_level(self) -> int:
        return self._compression_level

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    def write_message(self, message: Message):
        """Serialize ``message`` and send it. Assumes all fields are filled in."""
        with self.pool.borrow() as buf:
            message.marshal_json(buf)
            payload = buf.getvalue()
        self.send_payload(payload)

    def send_payload(self, payload):
        """Compress an already serialized record and send it as one or more datagrams."""
        try:
            data = compress(payload, self._compress_type, self._compression_level, self.pool)
            total = chunk_count(data, self._chunk_size)
            if total > 1:
                self._write_chunked(data, total)
            else:
                self._write_datagram(data)
        except Exception:
            self.metrics.record_failure()
            raise
        self.metrics.record_send(total, len(data))

    def write(self, data) -> int:
        """Stream-sink adapter: wrap ``data`` in a message from the calling site.

        Returns ``len(data)`` as passed in, not the number of bytes on the wire.
        """
        file, line = find_caller()
        message = construct_message(data, self.hostname, self.facility, file, line)
        self.write_message(message)
        return len(data)

    def flush(self):
        """Nothing is buffered; present so the writer can serve as a stream."""

    def close(self):
        if self._sock is not None:
            logger.debug("Closing UDP writer for %s", self.addr)
            sock, self._sock = self._sock, None
            sock.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def _write_chunked(self, data, total: int):
        if total > MAX_CHUNKS:
            raise ChunkLimitError(total, MAX_CHUNKS)
        message_id = new_message_id()
        for datagram in iter_chunks(data, message_id, self._chunk_size):
            self._write_datagram(datagram)

    def _write_datagram(self, datagram):
        sock = self._sock
        if sock is None:
            raise OSError("write to closed UDP writer")
        written = sock.send(datagram)
        if written != len(datagram):
            raise ShortWriteError(written, len(datagram))
