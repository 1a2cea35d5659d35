"""Expansion of 16-bit opcode bit patterns."""

from __future__ import annotations

from itertools import product

_WIDTH = 16


def expand_pattern(pattern):
    """Return every opcode matching ``pattern``, in ascending order.

    The pattern is 16 characters of ``0``, ``1`` or ``x``, most
    significant bit first; each ``x`` stands for either bit value.
    """
    if len(pattern) != _WIDTH:
        raise ValueError(f"pattern must be {_WIDTH} characters: {pattern!r}")
    bad = set(pattern) - {"0", "1", "x"}
    if bad:
        raise ValueError(f"invalid characters {sorted(bad)} in {pattern!r}")

    base = 0
    free_bits = []
    for index, char in enumerate(pattern):
        weight = 1 << (_WIDTH - 1 - index)
        if char == "1":
            base |= weight
        elif char == "x":
            free_bits.append(weight)

    opcodes = {
        base + sum(weight for weight, on in zip(free_bits, choice) if on)
        for choice in product((False, True), repeat=len(free_bits))
    }
    return sorted(opcodes)