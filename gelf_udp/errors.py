"""Exceptions raised by the GELF UDP transport."""


class GELFError(Exception):
    """Base class for errors synthesized by this package.

    Transport and codec failures are not wrapped: ``OSError`` from the socket
    and ``zlib.error`` from the compressor reach the caller unchanged.
    """


class ShortWriteError(GELFError, OSError):
    """The socket accepted fewer bytes than the datagram holds."""

    def __init__(self, written: int, expected: int):
        self.written = written
        self.expected = expected
        super().__init__(f"bad write ({written}/{expected})")


class ChunkLimitError(GELFError, ValueError):
    """The compressed message needs more chunks than the wire format allows."""

    def __init__(self, chunks: int, limit: int):
        self.chunks = chunks
        self.limit = limit
        super().__init__(f"message needs {chunks} chunks, limit is {limit}")
