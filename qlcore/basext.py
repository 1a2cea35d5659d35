"""SuperBASIC extension link tables and QL floating-point encoding."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

_INT32_MIN = -(1 << 31)
_INT32_MAX = (1 << 31) - 1
_EXPONENT_BIAS = 0x81F


class ExtensionKind(enum.IntEnum):
    """Whether a SuperBASIC extension is a function or a procedure."""

    FUNCTION = 1
    PROCEDURE = 2


@dataclass(frozen=True)
class BasicExtension:
    """A named SuperBASIC keyword implemented by the emulator."""

    name: str
    kind: ExtensionKind
    command: Optional[Callable[..., int]] = None


def mangle_count(total_size, count):
    """Return the entry count word SuperBASIC expects for a name table.

    BP.INIT treats the count as a space estimate; short names must be
    reported as a larger, averaged count.
    """
    if count * 7 >= total_size:
        return count
    return (total_size + count + 7) // 8


def encode_qlfloat(value):
    """Encode a 32-bit signed integer as a 6-byte QL floating-point number.

    The result is a 16-bit exponent followed by a 32-bit two's-complement
    mantissa, both big-endian.
    """
    if not _INT32_MIN <= value <= _INT32_MAX:
        raise ValueError(f"{value} does not fit in 32 bits")
    if value == 0:
        return bytes(6)
    if value == -1:
        exponent, mantissa = _EXPONENT_BIAS - 31, 0x80000000
    else:
        negative = value < 0
        magnitude = ~value if negative else value
        shift = 31 - magnitude.bit_length()
        mantissa = (magnitude << shift) & 0xFFFFFFFF
        if negative:
            mantissa ^= (0xFFFFFFFF << shift) & 0xFFFFFFFF
        exponent = _EXPONENT_BIAS - shift
    return exponent.to_bytes(2, "big") + mantissa.to_bytes(4, "big")


def _encoded_name(extension):
    if not isinstance(extension.kind, ExtensionKind):
        raise ValueError(
            f"wrong basic extension type {extension.kind!r} "
            f"for {extension.name!r}"
        )
    return extension.name.encode("latin-1")


def build_link_table(extensions, base):
    """Lay out a BP.INIT name table for ``extensions`` placed at ``base``.

    Procedures come first, then functions, each group in the given order.
    Every extension gets a two-byte instruction slot after the table.
    Returns ``(table, entry_points)``: the table bytes to store at ``base``
    and a dict mapping each name to the address of its instruction slot.
    """
    if base & 1:
        raise ValueError(f"link table address {base:#x} is not word aligned")
    exts = list(extensions)
    names = {id(ext): _encoded_name(ext) for ext in exts}

    table_size = 2 + 2 + 4 + 2
    table_size += sum(
        (((len(names[id(ext)]) + 1) >> 1) << 1) + 2 for ext in exts
    )
    slots_offset = ((table_size + 6 + 10) >> 1) << 1

    table = bytearray()
    entry_points = {}
    slot = 0

    def emit(kind):
        nonlocal slot
        group = [ext for ext in exts if ext.kind is kind]
        total = sum(len(names[id(ext)]) for ext in group)
        table.extend(mangle_count(total, len(group)).to_bytes(2, "big"))
        for ext in group:
            raw = names[id(ext)]
            slot_offset = slots_offset + 2 * slot
            entry_points[ext.name] = base + slot_offset
            slot += 1
            offset = (slot_offset - len(table)) & 0xFFFF
            stored = raw[: len(raw) & 0xFF]
            table.extend(offset.to_bytes(2, "big"))
            table.append(len(stored))
            table.extend(stored)
            if len(table) & 1:
                table.append(0)
        table.extend(b"\0\0")

    emit(ExtensionKind.PROCEDURE)
    emit(ExtensionKind.FUNCTION)
    table.extend(b"\0\0")

    if len(table) > slots_offset:
        raise ValueError("basic extension table overlaps its entry points")
    return bytes(table), entry_points