"""Big-endian byte-addressed memory as seen by the 68000 core."""

from __future__ import annotations


class Memory:
    """A flat block of emulated RAM/ROM with big-endian accessors."""

    def __init__(self, size):
        if size <= 0:
            raise ValueError(f"memory size must be positive, got {size}")
        self._data = bytearray(size)

    def __len__(self):
        return len(self._data)

    def _check(self, addr, width):
        if addr < 0 or addr + width > len(self._data):
            raise IndexError(
                f"access of {width} byte(s) at {addr:#x} outside memory of "
                f"size {len(self._data):#x}"
            )

    def _read(self, addr, width):
        self._check(addr, width)
        return int.from_bytes(self._data[addr:addr + width], "big")

    def _write(self, addr, width, value):
        self._check(addr, width)
        masked = value & ((1 << (8 * width)) - 1)
        self._data[addr:addr + width] = masked.to_bytes(width, "big")

    def read_byte(self, addr):
        """Return the unsigned byte at ``addr``."""
        return self._read(addr, 1)

    def read_word(self, addr):
        """Return the unsigned big-endian 16-bit word at ``addr``."""
        return self._read(addr, 2)

    def read_long(self, addr):
        """Return the unsigned big-endian 32-bit long at ``addr``."""
        return self._read(addr, 4)

    def write_byte(self, addr, value):
        """Store the low 8 bits of ``value`` at ``addr``."""
        self._write(addr, 1, value)

    def write_word(self, addr, value):
        """Store the low 16 bits of ``value`` big-endian at ``addr``."""
        self._write(addr, 2, value)

    def write_long(self, addr, value):
        """Store the low 32 bits of ``value`` big-endian at ``addr``."""
        self._write(addr, 4, value)

    def read_bytes(self, addr, length):
        """Return ``length`` raw bytes starting at ``addr``."""
        if length < 0:
            raise ValueError(f"negative length {length}")
        self._check(addr, length)
        return bytes(self._data[addr:addr + length])

    def write_bytes(self, addr, data):
        """Copy ``data`` into memory starting at ``addr``."""
        data = bytes(data)
        self._check(addr, len(data))
        self._data[addr:addr + len(data)] = data

    def look_for(self, addr, value, limit):
        """Search word-aligned steps from ``addr`` for the long ``value``.

        At most ``limit - 1`` positions are examined, matching the ROM
        scanner this mirrors. Returns the address of the match or None.
        """
        for step in range(max(limit - 1, 0)):
            pos = addr + 2 * step
            if pos < 0 or pos + 4 > len(self._data):
                return None
            if self.read_long(pos) == value & 0xFFFFFFFF:
                return pos
        return None