from fractions import Fraction

import pytest

from qlcore.basext import (
    BasicExtension,
    ExtensionKind,
    build_link_table,
    encode_qlfloat,
    mangle_count,
)

SOURCE_EXTENSIONS = [
    BasicExtension("Kill_UQLX", ExtensionKind.PROCEDURE),
    BasicExtension("UQLX_RELEASE$", ExtensionKind.FUNCTION),
    BasicExtension("getXenv$", ExtensionKind.FUNCTION),
    BasicExtension("getXargC", ExtensionKind.FUNCTION),
    BasicExtension("getXarg$", ExtensionKind.FUNCTION),
    BasicExtension("getXres", ExtensionKind.FUNCTION),
    BasicExtension("getYres", ExtensionKind.FUNCTION),
    BasicExtension("SCR_XLIM", ExtensionKind.FUNCTION),
    BasicExtension("SCR_YLIM", ExtensionKind.FUNCTION),
    BasicExtension("SCR_LLEN", ExtensionKind.FUNCTION),
    BasicExtension("SCR_BASE", ExtensionKind.FUNCTION),
    BasicExtension("EMU_SPEED", ExtensionKind.PROCEDURE),
]


def _decode(data):
    exponent = int.from_bytes(data[:2], "big")
    mantissa = int.from_bytes(data[2:], "big", signed=True)
    return Fraction(mantissa) * Fraction(2) ** (exponent - 0x81F)


def _word(data, pos):
    return int.from_bytes(data[pos:pos + 2], "big")


def _parse(table, base):
    """Return [(count, [(name, slot_address), ...]), ...] for both groups."""
    groups = []
    pos = 0
    for _ in range(2):
        count = _word(table, pos)
        pos += 2
        entries = []
        while True:
            offset = _word(table, pos)
            if offset == 0:
                pos += 2
                break
            length = table[pos + 2]
            name = table[pos + 3:pos + 3 + length].decode("latin-1")
            entries.append((name, base + pos + offset))
            pos += 3 + length
            pos += pos & 1
        groups.append((count, entries))
    return groups, pos


def test_mangle_count_keeps_count_when_names_are_short():
    assert mangle_count(21, 3) == 3
    assert mangle_count(0, 5) == 5


def test_mangle_count_averages_long_names():
    assert mangle_count(100, 2) == 13


def test_mangle_count_never_below_count():
    for total in range(0, 200):
        for count in range(1, 10):
            assert mangle_count(total, count) >= count


def test_encode_one():
    assert encode_qlfloat(1) == bytes([0x08, 0x01, 0x40, 0, 0, 0])


def test_encode_minus_one():
    assert encode_qlfloat(-1) == bytes([0x08, 0x00, 0x80, 0, 0, 0])


def test_encode_zero():
    assert encode_qlfloat(0) == bytes(6)


@pytest.mark.parametrize(
    "value",
    list(range(-300, 301))
    + [2**31 - 1, -(2**31), 2**24, -(2**24) - 1, 0x01000000, 131072, 65535],
)
def test_encode_round_trip(value):
    encoded = encode_qlfloat(value)
    assert len(encoded) == 6
    assert _decode(encoded) == value


@pytest.mark.parametrize("value", [1, 7, 255, 4096, 2**31 - 1, -2, -1000])
def test_mantissa_is_normalised(value):
    mantissa = int.from_bytes(encode_qlfloat(value)[2:], "big")
    assert (mantissa >> 30) in (1, 2)


@pytest.mark.parametrize("value", [2**31, -(2**31) - 1])
def test_encode_out_of_range(value):
    with pytest.raises(ValueError):
        encode_qlfloat(value)


def test_link_table_layout_for_source_extensions():
    base = 0x30000
    table, entry_points = build_link_table(SOURCE_EXTENSIONS, base)
    (proc_count, procs), (fun_count, funs) = _parse(table, base)[0]

    assert [name for name, _ in procs] == ["Kill_UQLX", "EMU_SPEED"]
    assert [name for name, _ in funs] == [
        ext.name for ext in SOURCE_EXTENSIONS
        if ext.kind is ExtensionKind.FUNCTION
    ]
    assert proc_count == mangle_count(18, 2)
    fun_total = sum(len(name) for name, _ in funs)
    assert fun_count == mangle_count(fun_total, 10)
    for name, address in procs + funs:
        assert entry_points[name] == address


def test_link_table_ends_with_extra_marker():
    table, _ = build_link_table(SOURCE_EXTENSIONS, 0x30000)
    _, end = _parse(table, 0x30000)
    assert end + 2 == len(table)
    assert table[-2:] == b"\0\0"


def test_entry_points_are_consecutive_words_after_table():
    base = 0x40000
    table, entry_points = build_link_table(SOURCE_EXTENSIONS, base)
    addresses = sorted(entry_points.values())
    assert addresses[0] >= base + len(table)
    assert all(b - a == 2 for a, b in zip(addresses, addresses[1:]))
    assert len(addresses) == len(SOURCE_EXTENSIONS)


def test_procedures_take_first_slots():
    exts = [
        BasicExtension("FN_A", ExtensionKind.FUNCTION),
        BasicExtension("PROC_B", ExtensionKind.PROCEDURE),
    ]
    _, entry_points = build_link_table(exts, 0x20000)
    assert entry_points["PROC_B"] + 2 == entry_points["FN_A"]


def test_odd_base_rejected():
    with pytest.raises(ValueError):
        build_link_table(SOURCE_EXTENSIONS, 0x30001)


def test_bad_kind_rejected():
    with pytest.raises(ValueError):
        build_link_table([BasicExtension("X", 3)], 0x30000)