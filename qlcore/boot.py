"""Sources feeding the read-only BOOT device."""

from __future__ import annotations


class EndOfFile(EOFError):
    """The boot source has no more data."""


class ReadOnly(PermissionError):
    """The boot device cannot be written to."""


class StringBootSource:
    """Boot input taken from a fixed command string."""

    def __init__(self, text):
        data = text.encode("latin-1") if isinstance(text, str) else bytes(text)
        self._data = data.split(b"\0", 1)[0]
        self._pos = 0

    def pending(self):
        """Return True if data is waiting; raise EndOfFile when exhausted."""
        if self._pos < len(self._data):
            return True
        raise EndOfFile("boot string exhausted")

    def read(self, count):
        """Return up to ``count`` bytes; empty once the string is consumed."""
        if count <= 0 or self._pos >= len(self._data):
            return b""
        chunk = self._data[self._pos:self._pos + count]
        self._pos += len(chunk)
        return chunk

    def write(self, data):
        """The boot device is read-only."""
        raise ReadOnly("boot device is read-only")


class StreamBootSource:
    """Boot input taken from a binary stream such as a file or stdin."""

    def __init__(self, stream):
        self._stream = stream
        self._peeked = None

    def _raw_read(self, count):
        return self._stream.read(count) or b""

    def pending(self):
        """Return True if a byte is available; raise EndOfFile at the end."""
        if self._peeked is not None:
            return True
        byte = self._raw_read(1)
        if byte:
            self._peeked = byte
            return True
        raise EndOfFile("boot stream exhausted")

    def read(self, count):
        """Return up to ``count`` bytes, including any byte seen by pending."""
        if count <= 0:
            return b""
        head = b""
        if self._peeked is not None:
            head, self._peeked = self._peeked, None
            count -= 1
        rest = self._raw_read(count) if count > 0 else b""
        return head + rest

    def write(self, data):
        """The boot device is read-only."""
        raise ReadOnly("boot device is read-only")