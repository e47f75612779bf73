"""GELF chunking: planning and framing of oversized payloads.

Chunk datagram layout:
  Bytes 0-1:  magic 0x1e 0x0f
  Bytes 2-9:  message id, shared by every chunk of one message
  Byte  10:   sequence index, 0-based
  Byte  11:   total chunk count
  Bytes 12-:  chunk data

Payloads that fit in one datagram are sent as-is, with no chunk header.
"""

import os
import struct

CHUNK_MAGIC = b"\x1e\x0f"
MESSAGE_ID_LEN = 8
CHUNK_HEADER_FORMAT = "!2s8sBB"
CHUNK_HEADER_LEN = struct.calcsize(CHUNK_HEADER_FORMAT)  # 12

# Kept below (path MTU - IP/UDP headers) for common links.
CHUNK_SIZE = 1420
CHUNK_DATA_LEN = CHUNK_SIZE - CHUNK_HEADER_LEN

# GELF receivers discard messages with more chunks than this.
MAX_CHUNKS = 128


def validate_chunk_size(chunk_size: int) -> int:
    if chunk_size <= CHUNK_HEADER_LEN:
        raise ValueError(
            f"Chunk size must exceed the {CHUNK_HEADER_LEN}-byte chunk header, got {chunk_size}"
        )
    return chunk_size


def chunk_data_capacity(chunk_size: int = CHUNK_SIZE) -> int:
    """Data bytes carried by each chunk after its header."""
    return chunk_size - CHUNK_HEADER_LEN


def chunk_count(data, chunk_size: int = CHUNK_SIZE) -> int:
    """Number of datagrams needed to send ``data``; 1 means no chunking."""
    size = len(data)
    if size <= chunk_size:
        return 1
    capacity = chunk_data_capacity(chunk_size)
    return -(-size // capacity)


def new_message_id() -> bytes:
    return os.urandom(MESSAGE_ID_LEN)


def chunk_header(message_id: bytes, sequence: int, total: int) -> bytes:
    """Pack the 12-byte header for chunk ``sequence`` of ``total``."""
    if len(message_id) != MESSAGE_ID_LEN:
        raise ValueError(f"Message id must be {MESSAGE_ID_LEN} bytes, got {len(message_id)}")
    return struct.pack(CHUNK_HEADER_FORMAT, CHUNK_MAGIC, message_id, sequence, total)


def iter_chunks(data, message_id: bytes, chunk_size: int = CHUNK_SIZE):
    """Yield the framed datagrams for ``data`` in sequence order.

    Slices with the same capacity ``chunk_count`` plans with, so the
    number of datagrams yielded always equals ``chunk_count(data, chunk_size)``.
    """
    view = memoryview(data)
    capacity = chunk_data_capacity(chunk_size)
    total = chunk_count(data, chunk_size)
    for sequence in range(total):
        start = sequence * capacity
        end = min(len(view), start + capacity)
        yield chunk_header(message_id, sequence, total) + view[start:end]
