"""Compression selection: gzip, zlib or passthrough into pooled buffers."""

import gzip
import zlib
from enum import IntEnum

from gelf_udp.pool import BufferPool

MIN_LEVEL = zlib.Z_DEFAULT_COMPRESSION  # -1
MAX_LEVEL = zlib.Z_BEST_COMPRESSION  # 9


class CompressType(IntEnum):
    GZIP = 0
    ZLIB = 1
    NONE = 2


def parse_compress_type(value) -> CompressType:
    """Accept a CompressType, its integer value, or its name ("gzip", "zlib", "none").

    Raises:
        ValueError: If the value names no known compression type.
    """
    if isinstance(value, str):
        try:
            return CompressType[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unsupported compression type: {value!r}") from None
    try:
        return CompressType(value)
    except ValueError:
        raise ValueError(f"Unsupported compression type: {value!r}") from None


def validate_level(level: int) -> int:
    if not MIN_LEVEL <= level <= MAX_LEVEL:
        raise ValueError(f"Compression level must be in {MIN_LEVEL}..{MAX_LEVEL}, got {level}")
    return level


class ZlibStreamWriter:
    """Write/close wrapper around ``zlib.compressobj`` emitting into a file object."""

    def __init__(self, fileobj, level: int):
        self._fileobj = fileobj
        self._compressor = zlib.compressobj(level)

    def write(self, data) -> int:
        self._fileobj.write(self._compressor.compress(data))
        return len(data)

    def close(self):
        if self._compressor is None:
            return
        compressor, self._compressor = self._compressor, None
        self._fileobj.write(compressor.flush())


def _open_stream(buf, compress_type: CompressType, level: int):
    if compress_type is CompressType.GZIP:
        return gzip.GzipFile(fileobj=buf, mode="wb", compresslevel=level)
    if compress_type is CompressType.ZLIB:
        return ZlibStreamWriter(buf, level)
    raise AssertionError(f"unknown compression type {compress_type!r}")


def compress(payload, compress_type: CompressType, level: int, pool: BufferPool):
    """Return ``payload`` encoded for the wire.

    ``NONE`` hands back the payload object itself. Gzip and zlib stream the
    payload into one pooled buffer, which is released before returning on
    every path. A failed write still closes the stream; the write error wins.
    """
    if compress_type is CompressType.NONE:
        return payload
    if compress_type not in (CompressType.GZIP, CompressType.ZLIB):
        raise AssertionError(f"unknown compression type {compress_type!r}")

    with pool.borrow() as buf:
        stream = _open_stream(buf, compress_type, level)
        try:
            stream.write(payload)
        except Exception:
            try:
                stream.close()
            except Exception:
                pass
            raise
        stream.close()
        return buf.getvalue()
