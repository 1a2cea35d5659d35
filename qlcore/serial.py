"""Serial line speed codes and the byte translations of QL serial channels."""

from __future__ import annotations

import enum
import sys

try:
    import termios as _termios
except ImportError:  # not available on every platform
    _termios = None

# Terminal speed codes as used by Linux, for hosts without termios.
_LINUX_CODES = {
    "B300": 7,
    "B600": 8,
    "B1200": 9,
    "B2400": 11,
    "B4800": 12,
    "B9600": 13,
    "B19200": 14,
    "B38400": 15,
    "B57600": 0o10001,
    "B115200": 0o10002,
}

_CTRL_Z = 26
_CR = 13
_LF = 10


def _code(name):
    if _termios is not None and hasattr(_termios, name):
        return getattr(_termios, name)
    return _LINUX_CODES[name]


def _speed_table():
    table = [
        (300, _code("B300")),
        (600, _code("B600")),
        (1200, _code("B1200")),
        (2400, _code("B2400")),
        (4800, _code("B4800")),
        (9600, _code("B9600")),
        (19200, _code("B19200")),
        (38400, _code("B38400")),
    ]
    if sys.platform.startswith("linux"):
        # Linux reaches the higher rates through B38400 plus port flags.
        table += [(57600, _code("B38400")), (115200, _code("B38400"))]
    else:
        table += [(57600, _code("B57600")), (115200, _code("B115200"))]
    return tuple(table)


_SPEEDS = _speed_table()


class Translation(enum.IntEnum):
    """Byte translation applied on a serial channel."""

    RAW = -1
    CTRL_Z = 0
    CR_LF = 1
    PLAIN = 2


def baud_to_code(baud):
    """Return the terminal speed code for ``baud``; ValueError if unsupported."""
    for rate, code in _SPEEDS:
        if baud and rate == baud:
            return code
    raise ValueError(f"unsupported baud rate {baud!r}")


def code_to_baud(code):
    """Return the first baud rate using speed ``code``; ValueError if unknown."""
    for rate, rate_code in _SPEEDS:
        if code and rate_code == code:
            return rate
    raise ValueError(f"unknown speed code {code!r}")


def encode_output(data, mode):
    """Return the bytes actually sent for ``data`` under translation ``mode``.

    With CR_LF every line feed goes out as a carriage return. With CTRL_Z
    output stops after the first end-of-file byte (26), which is sent.
    """
    mode = Translation(mode)
    data = bytes(data)
    if mode is Translation.RAW:
        return data
    out = bytearray()
    for byte in data:
        if mode is Translation.CR_LF and byte == _LF:
            byte = _CR
        out.append(byte)
        if mode is Translation.CTRL_Z and byte == _CTRL_Z:
            break
    return bytes(out)


def decode_input(data, mode):
    """Translate received ``data`` under ``mode``.

    Returns ``(decoded, end_of_file)``. With CR_LF carriage returns become
    line feeds. With CTRL_Z reading stops at the first byte 26, which is
    kept, and ``end_of_file`` is True.
    """
    mode = Translation(mode)
    data = bytes(data)
    if mode is Translation.RAW:
        return data, False
    out = bytearray()
    for byte in data:
        if mode is Translation.CR_LF and byte == _CR:
            byte = _LF
        out.append(byte)
        if mode is Translation.CTRL_Z and byte == _CTRL_Z:
            return bytes(out), True
    return bytes(out), False