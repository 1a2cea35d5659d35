import pytest

from qlcore.patterns import expand_pattern


def _matches(pattern, opcode):
    bits = f"{opcode:016b}"
    return all(p == "x" or p == b for p, b in zip(pattern, bits))


def test_fixed_pattern_single_opcode():
    assert expand_pattern("0100111001110001") == [0x4E71]


@pytest.mark.parametrize(
    "pattern",
    [
        "0000000000xxxxxx",
        "0000xxx100001xxx",
        "0001xxxxxx000xxx",
        "0101xxxx11001xxx",
        "0110xxxxxxxxxxx0",
        "010011100100xxxx",
    ],
)
def test_expansion_invariants(pattern):
    result = expand_pattern(pattern)
    assert len(result) == 2 ** pattern.count("x")
    assert result == sorted(set(result))
    assert all(_matches(pattern, op) for op in result)


def test_full_line_covers_range():
    assert expand_pattern("0001xxxxxxxxxxxx") == list(range(0x1000, 0x2000))


def test_sub_pattern_is_subset():
    wide = set(expand_pattern("0001xxxxxxxxxxxx"))
    narrow = set(expand_pattern("0001xxx000000xxx"))
    assert narrow < wide


@pytest.mark.parametrize("pattern", ["0101", "01010101010101010", ""])
def test_wrong_length_rejected(pattern):
    with pytest.raises(ValueError):
        expand_pattern(pattern)


def test_invalid_character_rejected():
    with pytest.raises(ValueError):
        expand_pattern("[card-number]xxx")