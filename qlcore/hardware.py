"""Emulation of the QL's 8049 intelligent peripheral controller (IPC)."""

from __future__ import annotations

import enum
from collections import deque

_CHAR_BUFFER_LEN = 50
_MAX_KEYS_PER_READ = 7

# Number of parameter bytes that follow each IPC command nibble.
_PARAM_LENGTHS = (0, 0, 0, 0, 0, 0, 0, 0, 0, 1, 16, 0, 0, 0, 0, 0)

_CMD_STATUS = 1
_CMD_READ_KEYBOARD = 8
_CMD_KEY_ROW = 9


class Modifier(enum.IntFlag):
    """Modifier keys as recorded with queued key presses."""

    NONE = 0
    ALT = 1
    CTRL = 2
    SHIFT = 4


class IPC:
    """Keyboard queue and command protocol of the IPC."""

    def __init__(self, key_rows=None):
        rows = list(key_rows) if key_rows is not None else [0] * 8
        if len(rows) != 8:
            raise ValueError(f"expected 8 keyboard rows, got {len(rows)}")
        self.key_rows = rows
        self.held = Modifier.NONE
        self.key_down = False
        self.sound_on = False
        self.pending_ch1_receive = False
        self.pending_ch2_receive = False
        self.ascii_char = 0

        self._keys = [(0, 0, 0)] * _CHAR_BUFFER_LEN
        self._head = 0
        self._tail = 0

        self._command = 0
        self._params = []
        self._params_needed = 0
        self._reply = deque()

    def queue_key(self, modifiers, code, ascii_char):
        """Queue a key press with its modifiers, key code and character."""
        mod_code = int(Modifier(modifiers) & (Modifier.SHIFT | Modifier.CTRL | Modifier.ALT))
        self._keys[self._tail] = (mod_code, code & 0xFF, ascii_char & 0xFFFF)
        self._tail = (self._tail + 1) % _CHAR_BUFFER_LEN

    def pending(self):
        """Return the number of queued key presses."""
        return (self._tail - self._head) % _CHAR_BUFFER_LEN

    def _pop_key(self):
        entry = self._keys[self._head]
        self._head = (self._head + 1) % _CHAR_BUFFER_LEN
        return entry

    def write(self, value):
        """Accept one byte written by the CPU to the IPC."""
        if self._params_needed:
            self._params_needed -= 1
            self._params.append(value & 0xFF)
        else:
            self._command = value & 0x0F
            self._params_needed = _PARAM_LENGTHS[self._command]
            self._params = []
        if not self._params_needed:
            self.do_command(self._command)

    def read(self):
        """Return the next reply byte, or 0 when no reply is pending."""
        if not self._reply:
            return 0
        byte, ascii_char = self._reply.popleft()
        self.ascii_char = ascii_char
        return byte

    def do_command(self, command):
        """Execute an IPC command and prepare its reply bytes."""
        self._reply.clear()
        if command == _CMD_STATUS:
            status = 0
            if self.pending() or self.key_down:
                status |= 1
            if self.sound_on:
                status |= 2
            if self.pending_ch1_receive:
                status |= 16
            if self.pending_ch2_receive:
                status |= 32
            self._reply.append((status, 0))
        elif command == _CMD_READ_KEYBOARD:
            count = min(self.pending(), _MAX_KEYS_PER_READ)
            header = count | (8 if self.key_down else 0)
            self._reply.append((header, 0))
            for _ in range(count):
                mod_code, code, ascii_char = self._pop_key()
                self._reply.append((mod_code, ascii_char))
                self._reply.append((code, ascii_char))
        elif command == _CMD_KEY_ROW:
            row = self._params[0] if self._params else 0
            self._reply.append((self.key_row(row), 0))

    def key_row(self, row):
        """Return the state byte of keyboard ``row``, with modifiers on row 7."""
        if not 0 <= row < len(self.key_rows):
            raise IndexError(f"keyboard row {row} out of range")
        mod = 0
        if row == 7:
            mod = (
                (1 if self.held & Modifier.SHIFT else 0)
                + (4 if self.held & Modifier.ALT else 0)
                + (2 if self.held & Modifier.CTRL else 0)
            )
        return (self.key_rows[row] + mod) & 0xFF

    def reset(self):
        """Empty the keyboard queue and forget any held key."""
        self._head = self._tail = 0
        self.key_down = False
        self.ascii_char = 0