import pytest

from qlcore.memory import Memory


def test_size_must_be_positive():
    with pytest.raises(ValueError):
        Memory(0)


def test_length():
    assert len(Memory(64)) == 64


def test_long_is_big_endian():
    mem = Memory(16)
    mem.write_long(0, 0x12345678)
    assert mem.read_bytes(0, 4) == bytes([0x12, 0x34, 0x56, 0x78])
    assert mem.read_word(0) == 0x1234
    assert mem.read_byte(3) == 0x78


def test_word_round_trip():
    mem = Memory(8)
    mem.write_word(2, 0xBEEF)
    assert mem.read_word(2) == 0xBEEF


def test_writes_are_masked():
    mem = Memory(8)
    mem.write_byte(0, 0x1FF)
    mem.write_word(2, -1)
    mem.write_long(4, -1)
    assert mem.read_byte(0) == 0xFF
    assert mem.read_word(2) == 0xFFFF
    assert mem.read_long(4) == 0xFFFFFFFF


def test_bytes_round_trip():
    mem = Memory(32)
    mem.write_bytes(10, b"JSL1")
    assert mem.read_bytes(10, 4) == b"JSL1"


@pytest.mark.parametrize("addr", [-1, 7, 8])
def test_long_out_of_range(addr):
    mem = Memory(8)
    with pytest.raises(IndexError):
        mem.read_long(addr)


def test_write_bytes_out_of_range():
    mem = Memory(4)
    with pytest.raises(IndexError):
        mem.write_bytes(2, b"abc")


def test_negative_length_rejected():
    with pytest.raises(ValueError):
        Memory(4).read_bytes(0, -1)


def test_look_for_finds_value():
    mem = Memory(64)
    mem.write_long(6, 0x40E7007C)
    assert mem.look_for(0, 0x40E7007C, 10) == 6


def test_look_for_missing_returns_none():
    mem = Memory(64)
    assert mem.look_for(0, 0x40E7007C, 10) is None


def test_look_for_last_position_not_counted():
    mem = Memory(64)
    mem.write_long(6, 0x12BC000E)
    assert mem.look_for(0, 0x12BC000E, 4) is None
    assert mem.look_for(0, 0x12BC000E, 5) == 6


def test_look_for_stops_at_end_of_memory():
    mem = Memory(8)
    assert mem.look_for(0, 0xE9080000, 1000) is None