"""Tests for gelf_udp/chunker.py — chunk planning and framing."""

import math
import os

import pytest

from gelf_receiver import parse_chunk
from gelf_udp.chunker import (
    CHUNK_DATA_LEN,
    CHUNK_HEADER_LEN,
    CHUNK_SIZE,
    chunk_count,
    chunk_data_capacity,
    chunk_header,
    iter_chunks,
    new_message_id,
    validate_chunk_size,
)


class TestConstants:
    def test_reference_sizes(self):
        assert CHUNK_SIZE == 1420
        assert CHUNK_HEADER_LEN == 12
        assert CHUNK_DATA_LEN == 1408

    def test_capacity_follows_chunk_size(self):
        assert chunk_data_capacity(512) == 500


class TestChunkCount:
    @pytest.mark.parametrize("size", [0, 1, 100, CHUNK_SIZE - 1, CHUNK_SIZE])
    def test_fits_in_one_datagram(self, size):
        assert chunk_count(b"x" * size) == 1

    @pytest.mark.parametrize("size", [CHUNK_SIZE + 1, 2 * CHUNK_DATA_LEN, 2 * CHUNK_DATA_LEN + 1, 5000, 100_000])
    def test_oversized_uses_ceiling(self, size):
        assert chunk_count(b"x" * size) == math.ceil(size / CHUNK_DATA_LEN)

    def test_exact_multiple_has_no_empty_trailing_chunk(self):
        data = b"x" * (3 * CHUNK_DATA_LEN)
        assert chunk_count(data) == 3
        assert all(len(d) > CHUNK_HEADER_LEN for d in iter_chunks(data, new_message_id()))

    def test_custom_chunk_size(self):
        assert chunk_count(b"x" * 100, chunk_size=50) == math.ceil(100 / 38)


class TestValidateChunkSize:
    def test_rejects_sizes_without_room_for_data(self):
        with pytest.raises(ValueError):
            validate_chunk_size(CHUNK_HEADER_LEN)

    def test_accepts_sizes_above_header(self):
        assert validate_chunk_size(CHUNK_HEADER_LEN + 1) == CHUNK_HEADER_LEN + 1


class TestChunkHeader:
    def test_layout(self):
        message_id = bytes(range(8))
        header = chunk_header(message_id, 2, 5)
        assert len(header) == CHUNK_HEADER_LEN
        assert header[:2] == b"\x1e\x0f"
        assert header[2:10] == message_id
        assert header[10] == 2
        assert header[11] == 5

    def test_rejects_wrong_id_length(self):
        with pytest.raises(ValueError):
            chunk_header(b"short", 0, 2)


class TestIterChunks:
    def test_scenario_5000_bytes(self):
        data = os.urandom(5000)
        datagrams = list(iter_chunks(data, new_message_id()))
        assert len(datagrams) == 4
        assert [len(d) for d in datagrams[:3]] == [CHUNK_SIZE] * 3
        assert len(datagrams[3]) - CHUNK_HEADER_LEN == 5000 - 3 * 1408 == 776

    def test_reassembly_restores_payload(self):
        data = os.urandom(20_000)
        message_id = new_message_id()
        parsed = [parse_chunk(d) for d in iter_chunks(data, message_id)]

        assert {p[0] for p in parsed} == {message_id}
        assert [p[1] for p in parsed] == list(range(len(parsed)))
        assert {p[2] for p in parsed} == {len(parsed)}
        assert b"".join(p[3] for p in parsed) == data

    def test_single_datagram_still_framed_when_iterated(self):
        datagrams = list(iter_chunks(b"tiny", new_message_id()))
        assert len(datagrams) == 1
        assert parse_chunk(datagrams[0])[1:] == (0, 1, b"tiny")


class TestMessageId:
    def test_length(self):
        assert len(new_message_id()) == 8

    def test_unique_over_large_sample(self):
        ids = {new_message_id() for _ in range(10_000)}
        assert len(ids) == 10_000
