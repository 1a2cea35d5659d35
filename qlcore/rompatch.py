"""Detection and patching of QL ROM images held in emulated memory."""

from __future__ import annotations

import re
from dataclasses import dataclass

_ROM_SCAN_LIMIT = 48 * 1024

_BOOT_PATCH_ADDRESSES = (
    0x842A,  # Minerva 1.89
    0x83CA,  # Minerva 1.98
    0x83CC,  # Minerva 1.98a1
    0x4BE6,  # JS
)

_SCRDEF_MARKER = 0x20000
_SCRDEF_SEARCH_LIMIT = 24000
_SCRDEF_SIZE = 14

_DEFAULT_XRES = 512
_DEFAULT_YRES = 256


@dataclass
class ScreenSpecs:
    """Layout of the emulated screen memory."""

    qm_lo: int = 128 * 1024
    qm_hi: int = 128 * 1024 + 32 * 1024
    qm_len: int = 0x8000
    linel: int = 128
    yres: int = _DEFAULT_YRES
    xres: int = _DEFAULT_XRES


def _find_signature(memory, signature):
    """Return True if ``signature`` starts within the ROM scan window."""
    end = min(len(memory), _ROM_SCAN_LIMIT + len(signature) - 1)
    window = memory.read_bytes(0, end)
    index = window.find(signature)
    return 0 <= index < _ROM_SCAN_LIMIT


def test_minerva(memory):
    """Return True if the ROM looks like Minerva (contains ``JSL1``)."""
    return _find_signature(memory, b"JSL1")


def test_minerva_version(memory, version):
    """Return True if the first four characters of ``version`` occur in ROM."""
    signature = version.encode("latin-1")[:4]
    if len(signature) < 4:
        raise ValueError(f"version string too short: {version!r}")
    return _find_signature(memory, signature)


def patch_boot_device(memory, device):
    """Replace the ``mdv1`` boot device name in known ROMs with ``device``.

    Returns the list of addresses that were patched.
    """
    encoded = device.encode("latin-1")
    if not encoded:
        return []
    replacement = encoded[:4].ljust(4, b"\0")
    patched = []
    for addr in _BOOT_PATCH_ADDRESSES:
        if addr + 4 > len(memory):
            continue
        if memory.read_bytes(addr, 4).lower() == b"mdv1":
            memory.write_bytes(addr, replacement)
            patched.append(addr)
    return patched


def patch_ram_bugs(memory):
    """Fix the ROM bugs that crash a QL fitted with large RAM.

    Returns True when the final patch in the sequence was applied.
    """
    fixes = (
        (0x250, 0xD6C028CB, 6, 0xD7C0),
        (0x3120, 0xD2C02001, 250, 0xD3C0),
        (0x4330, 0x90023DBC, 120, 0x9802),
    )
    for start, signature, limit, replacement in fixes:
        found = memory.look_for(start, signature, limit)
        if found is None:
            return False
        memory.write_word(found, replacement)
    return True


def patch_pointer_environment(memory, start, screen):
    """Rewrite the Pointer Environment screen definition for ``screen``.

    The search begins at ``start``. Returns the address of the patched
    definition, or None if none was found.
    """
    pos = start
    while True:
        found = memory.look_for(pos, _SCRDEF_MARKER, _SCRDEF_SEARCH_LIMIT)
        if found is None or found + _SCRDEF_SIZE > len(memory):
            return None
        if (
            memory.read_long(found + 4) == 0x8000
            and memory.read_word(found + 8) == 0x80
            and memory.read_word(found + 10) == 0x200
            and memory.read_word(found + 12) == 0x100
        ):
            memory.write_long(found, screen.qm_lo)
            memory.write_long(found + 4, screen.qm_len)
            memory.write_word(found + 8, screen.linel)
            memory.write_word(found + 10, screen.xres)
            memory.write_word(found + 12, screen.yres)
            return found
        pos = found + 2


_NUMBER = re.compile(r"\s*([+-]?\d+)")


def parse_screen(geometry):
    """Parse an ``NxM`` geometry into ``(xres, yres)``.

    Each dimension is raised to at least the standard 512x256. Raises
    ValueError for a malformed geometry.
    """
    usage = (
        f"Bad geometry: {geometry}. "
        "Please use 'nXm' where n=x size, m=y size"
    )
    first = _NUMBER.match(geometry)
    if first is None:
        raise ValueError(usage)
    rest = geometry[first.end():]
    if not rest or rest[0] not in "xX":
        raise ValueError(usage)
    second = _NUMBER.match(rest, 1)
    if second is None:
        raise ValueError(usage)
    xres = max(int(first.group(1)), _DEFAULT_XRES)
    yres = max(int(second.group(1)), _DEFAULT_YRES)
    return xres, yres