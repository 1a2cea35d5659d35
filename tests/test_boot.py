import io

import pytest

from qlcore.boot import EndOfFile, ReadOnly, StreamBootSource, StringBootSource


def test_string_source_reads_in_chunks():
    src = StringBootSource("LRUN flp1_boot")
    parts = []
    while True:
        chunk = src.read(4)
        if not chunk:
            break
        assert len(chunk) <= 4
        parts.append(chunk)
    assert b"".join(parts) == b"LRUN flp1_boot"


def test_string_source_pending_then_end():
    src = StringBootSource("ab")
    assert src.pending() is True
    assert src.read(10) == b"ab"
    with pytest.raises(EndOfFile):
        src.pending()


def test_string_source_zero_count_reads_nothing():
    src = StringBootSource("abc")
    assert src.read(0) == b""
    assert src.read(3) == b"abc"


def test_string_source_stops_at_nul():
    src = StringBootSource(b"run\0ignored")
    assert src.read(100) == b"run"


def test_string_source_is_read_only():
    with pytest.raises(ReadOnly):
        StringBootSource("x").write(b"y")


def test_stream_source_round_trip():
    payload = b"10 PRINT 1\n20 STOP\n"
    src = StreamBootSource(io.BytesIO(payload))
    assert src.read(len(payload)) == payload
    assert src.read(5) == b""


def test_stream_source_pending_keeps_byte():
    src = StreamBootSource(io.BytesIO(b"xyz"))
    assert src.pending() is True
    assert src.pending() is True
    assert src.read(2) == b"xy"
    assert src.read(5) == b"z"


def test_stream_source_single_byte_after_pending():
    src = StreamBootSource(io.BytesIO(b"qr"))
    src.pending()
    assert src.read(1) == b"q"
    assert src.read(1) == b"r"


def test_stream_source_end_of_file():
    src = StreamBootSource(io.BytesIO(b""))
    with pytest.raises(EndOfFile):
        src.pending()


def test_stream_source_is_read_only():
    with pytest.raises(ReadOnly):
        StreamBootSource(io.BytesIO(b"a")).write(b"b")