# qlcore

Building blocks for a Sinclair QL emulator, written in plain Python with no
third-party dependencies.

## What is inside

- `qlcore.memory`: `Memory(size)` is a big-endian byte-addressed store.
  It has `read_byte`/`read_word`/`read_long`, the matching `write_*`
  methods (values are masked to width), `read_bytes`/`write_bytes`, and
  `look_for(addr, value, limit)`. `look_for` scans word-aligned positions for
  a 32-bit value and returns the address where it was found, or `None`.
  Accesses outside the memory raise `IndexError`.
- `qlcore.patterns`: `expand_pattern(pattern)` turns a 16-character
  pattern of `0`, `1` and `x`, such as `"0000xxx100xxxxxx"`, into the sorted
  list of every opcode it matches.
- `qlcore.opcodes`: `OpcodeTable` is the full 65536-entry 68000 dispatch
  table, and `build_table()` returns one shared instance.
  `handler(opcode)` gives the handler name for an opcode (`"invalid"` for
  unassigned ones). `opcodes_for(name)` lists the opcodes that dispatch to a
  handler.
- `qlcore.boot`: sources for the read-only BOOT device.
  `StringBootSource(text)` takes its input from a string and
  `StreamBootSource(stream)` from a binary stream. Both have `pending()`,
  `read(count)` and `write(data)`. `pending()` raises `EndOfFile` once the
  source is drained, and `write` always raises `ReadOnly`.
- `qlcore.rompatch`: ROM detection and patching on a `Memory`.
  - `test_minerva` and `test_minerva_version` detect the ROM.
  - `patch_boot_device` replaces the `mdv1` boot name and returns the patched
    addresses.
  - `patch_ram_bugs` applies the large-RAM fixes.
  - `patch_pointer_environment` rewrites the screen definition from a
    `ScreenSpecs` and returns its address or `None`.
  - `parse_screen("NxM")` returns `(xres, yres)`, each at least 512x256, and
    raises `ValueError` on bad input.
- `qlcore.basext`: SuperBASIC extension tables.
  - `BasicExtension` and `ExtensionKind` (`FUNCTION`, `PROCEDURE`) describe
    an extension.
  - `mangle_count` computes the table's entry count.
  - `encode_qlfloat` encodes a 32-bit integer as a 6-byte QL float.
  - `build_link_table(extensions, base)` returns the table bytes and a map
    from each name to its entry address.
- `qlcore.hardware`: `IPC`, the keyboard and status controller, and
  the `Modifier` flags (`ALT`, `CTRL`, `SHIFT`).
  - Queue key presses with `queue_key` and count them with `pending`.
  - Send command bytes with `write` and read the replies with `read`.
  - `key_row` reads keyboard rows; the modifiers held in `held` are added on
    row 7.
  - `reset` empties the queue.
- `qlcore.serial`: speed code lookup and channel byte translation.
  - `baud_to_code` and `code_to_baud` look up terminal speed codes and raise
    `ValueError` when the value is unknown.
  - `encode_output` and `decode_input` apply a `Translation` mode (`RAW`,
    `CTRL_Z`, `CR_LF`, `PLAIN`).

## Example

```python
from qlcore.memory import Memory
from qlcore.opcodes import build_table
from qlcore.rompatch import parse_screen

mem = Memory(0x10000)
mem.write_long(0x100, 0x40E7007C)
assert mem.read_word(0x100) == 0x40E7
assert mem.look_for(0x100, 0x40E7007C, 10) == 0x100

table = build_table()
print(table.handler(0x4E75))      # rts

print(parse_screen("800x600"))    # (800, 600)
```

## What this package does not do

- It does not execute 68000 instructions. The opcode table only names the
  handler for each opcode.
- It has no sound output, no screen display, no file or microdrive storage,
  and no network devices.
- It provides no command to start an emulator.

## Running the tests

```
pip install -e .[test]
pytest
```