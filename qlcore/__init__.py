"""Core components of a Sinclair QL emulator: memory, opcode table, ROM patching, boot sources, IPC keyboard, SuperBASIC tables and serial helpers."""

__version__ = "0.1.0"

__all__ = [
    "basext",
    "boot",
    "hardware",
    "memory",
    "opcodes",
    "patterns",
    "rompatch",
    "serial",
]