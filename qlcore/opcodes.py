"""Dispatch table mapping every 16-bit 68000 opcode to a handler name."""

from __future__ import annotations

from collections import defaultdict
from functools import lru_cache

from .patterns import expand_pattern

INVALID = "invalid"

_TABLE_SIZE = 0x10000
# Opcodes 8 .. 0xEFFF start out invalid; the rest are filled by patterns.
_INVALID_RANGE = range(8, 61440)

# Later entries override earlier ones where patterns overlap.
# Patterns may carry underscores between nibbles for readability.
_ENTRIES = (
    ("0000000000xxxxxx", "ori_b"),
    ("0000000001xxxxxx", "ori_w"),
    ("0000000010xxxxxx", "ori_l"),
    ("0000_0000_0011_1100", "ori_to_ccr"),
    ("0000_0000_0111_1100", "ori_to_sr"),
    ("0000xxx100xxxxxx", "btst_d"),
    ("0000xxx101xxxxxx", "bchg_d"),
    ("0000xxx110xxxxxx", "bclr_d"),
    ("0000xxx111xxxxxx", "bset_d"),
    ("0000xxx100001xxx", "movep_w_mr"),
    ("0000xxx101001xxx", "movep_l_mr"),
    ("0000xxx110001xxx", "movep_w_rm"),
    ("0000xxx111001xxx", "movep_l_rm"),
    ("0000001000xxxxxx", "andi_b"),
    ("0000001001xxxxxx", "andi_w"),
    ("0000001010xxxxxx", "andi_l"),
    ("0000_0010_0011_1100", "andi_to_ccr"),
    ("0000_0010_0111_1100", "andi_to_sr"),
    ("0000010000xxxxxx", "subi_b"),
    ("0000010001xxxxxx", "subi_w"),
    ("0000010010xxxxxx", "subi_l"),
    ("0000011000xxxxxx", "addi_b"),
    ("0000011001xxxxxx", "addi_w"),
    ("0000011010xxxxxx", "addi_l"),
    ("0000100000xxxxxx", "btst_s"),
    ("0000100001xxxxxx", "bchg_s"),
    ("0000100010xxxxxx", "bclr_s"),
    ("0000100011xxxxxx", "bset_s"),
    ("0000101000xxxxxx", "eori_b"),
    ("0000101001xxxxxx", "eori_w"),
    ("0000101010xxxxxx", "eori_l"),
    ("0000_1010_0011_1100", "eori_to_ccr"),
    ("0000_1010_0111_1100", "eori_to_sr"),
    ("0000110000xxxxxx", "cmpi_b"),
    ("0000110001xxxxxx", "cmpi_w"),
    ("0000110010xxxxxx", "cmpi_l"),
    ("0001xxxxxxxxxxxx", "move_b"),
    ("0001xxxxxx000xxx", "move_b_from_dn"),
    ("0001xxx000xxxxxx", "move_b_to_dn"),
    ("0001xxx000000xxx", "move_b_reg"),
    ("0010xxxxxxxxxxxx", "move_l"),
    ("0010xxxxxx000xxx", "move_l_from_dn"),
    ("0010xxx000xxxxxx", "move_l_to_dn"),
    ("0010xxx000000xxx", "move_l_reg"),
    ("0010xxx001xxxxxx", "movea_l"),
    ("0010xxx001001xxx", "movea_l_an"),
    ("0011xxxxxxxxxxxx", "move_w"),
    ("0011xxxxxx000xxx", "move_w_from_dn"),
    ("0011xxx000xxxxxx", "move_w_to_dn"),
    ("0011xxx000000xxx", "move_w_reg"),
    ("0011xxx001xxxxxx", "movea_w"),
    ("0100000000xxxxxx", "negx_b"),
    ("0100000001xxxxxx", "negx_w"),
    ("0100000010xxxxxx", "negx_l"),
    ("0100000011xxxxxx", "move_from_sr"),
    ("0100xxx110xxxxxx", "chk"),
    ("0100xxx111xxxxxx", "lea"),
    ("0100001000xxxxxx", "clr_b"),
    ("0100001001xxxxxx", "clr_w"),
    ("0100001010xxxxxx", "clr_l"),
    ("0100010000xxxxxx", "neg_b"),
    ("0100010001xxxxxx", "neg_w"),
    ("0100010010xxxxxx", "neg_l"),
    ("0100010011xxxxxx", "move_to_ccr"),
    ("0100011000xxxxxx", "not_b"),
    ("0100011001xxxxxx", "not_w"),
    ("0100011010xxxxxx", "not_l"),
    ("0100011011xxxxxx", "move_to_sr"),
    ("0100100000xxxxxx", "nbcd"),
    ("0100100001xxxxxx", "pea"),
    ("0100100001000xxx", "swap"),
    ("0100100010xxxxxx", "movem_save_w"),
    ("0100100010000xxx", "ext_w"),
    ("0100100011xxxxxx", "movem_save_l"),
    ("0100100011000xxx", "ext_l"),
    ("0100101000xxxxxx", "tst_b"),
    ("0100101001xxxxxx", "tst_w"),
    ("0100101010xxxxxx", "tst_l"),
    ("0100101011xxxxxx", "tas"),
    ("0100101011111xxx", INVALID),
    ("010010101111100x", "tas"),
    ("0100_1010_1111_1100", "illegal"),
    ("0100110010xxxxxx", "movem_load_w"),
    ("0100110011xxxxxx", "movem_load_l"),
    ("010011100100xxxx", "trap"),
    ("0100_1110_0100_0000", "trap0"),
    ("0100_1110_0100_0001", "trap1"),
    ("0100_1110_0100_0010", "trap2"),
    ("0100_1110_0100_0011", "trap3"),
    ("0100111001010xxx", "link_ins"),
    ("0100111001011xxx", "unlk"),
    ("0100111001100xxx", "move_to_usp"),
    ("0100111001101xxx", "move_from_usp"),
    ("0100_1110_0111_0000", "reset"),
    ("0100_1110_0111_0001", "nop"),
    ("0100_1110_0111_0010", "stop"),
    ("0100_1110_0111_0011", "rte"),
    ("0100_1110_0111_0101", "rts"),
    ("0100_1110_0111_0110", "trapv"),
    ("0100_1110_0111_0111", "rtr"),
    ("0100111010xxxxxx", "jsr"),
    ("0100_1110_1011_1010", "jsr_displ"),
    ("0100111011xxxxxx", "jmp"),
    ("0101xxx000xxxxxx", "addq_b"),
    ("0101xxx001xxxxxx", "addq_w"),
    ("0101xxx010xxxxxx", "addq_l"),
    ("0101xxx001001xxx", "addq_an"),
    ("0101xxx010001xxx", "addq_an"),
    ("0101100001001xxx", "addq_4_an"),
    ("0101100010001xxx", "addq_4_an"),
    ("0101xxxx11xxxxxx", "scc"),
    ("0101000011xxxxxx", "st"),
    ("0101000111xxxxxx", "sf"),
    ("0101xxxx11001xxx", "dbcc"),
    ("0101000111001xxx", "dbf"),
    ("0101xxx100xxxxxx", "subq_b"),
    ("0101xxx101xxxxxx", "subq_w"),
    ("0101xxx110xxxxxx", "subq_l"),
    ("0101xxx101001xxx", "subq_an"),
    ("0101xxx110001xxx", "subq_an"),
    ("0101100101001xxx", "subq_4_an"),
    ("0101100110001xxx", "subq_4_an"),
    ("0110xxxxxxxxxxx0", "bcc_s"),
    ("0110xxxxxxxxxxx1", "bcc_bad"),
    ("01100110xxxxxxx0", "bne_s"),
    ("01101010xxxxxxx0", "bpl_s"),
    ("01101011xxxxxxx0", "bmi_s"),
    ("01101100xxxxxxx0", "bge_s"),
    ("01101101xxxxxxx0", "blt_s"),
    ("01101110xxxxxxx0", "bgt_s"),
    ("01101111xxxxxxx0", "ble_s"),
    ("01100101xxxxxxx0", "bcs_s"),
    ("01100100xxxxxxx0", "bccc_s"),
    ("01100111xxxxxxx0", "beq_s"),
    ("0110xxxx00000000", "bcc_l"),
    ("0110_0111_0000_0000", "beq_l"),
    ("0110_0110_0000_0000", "bne_l"),
    ("01100000xxxxxxx0", "bra_s"),
    ("0110_0000_0000_0000", "bra_l"),
    ("01100001xxxxxxxx", "bsr"),
    ("0111xxx0xxxxxxxx", "moveq"),
    ("1000xxx000xxxxxx", "or_b_dn"),
    ("1000xxx001xxxxxx", "or_w_dn"),
    ("1000xxx010xxxxxx", "or_l_dn"),
    ("1000xxx100xxxxxx", "or_b_ea"),
    ("1000xxx101xxxxxx", "or_w_ea"),
    ("1000xxx110xxxxxx", "or_l_ea"),
    ("1000xxx011xxxxxx", "divu"),
    ("1000xxx10000xxxx", "sbcd"),
    ("1000xxx111xxxxxx", "divs"),
    ("1001xxx000xxxxxx", "sub_b_dn"),
    ("1001xxx001xxxxxx", "sub_w_dn"),
    ("1001xxx010xxxxxx", "sub_l_dn"),
    ("1001xxx100xxxxxx", "sub_b_ea"),
    ("1001xxx101xxxxxx", "sub_w_ea"),
    ("1001xxx110xxxxxx", "sub_l_ea"),
    ("1001xxx011xxxxxx", "sub_w_an"),
    ("1001xxx111xxxxxx", "sub_l_an"),
    ("1001xxx100000xxx", "subx_b_r"),
    ("1001xxx101000xxx", "subx_w_r"),
    ("1001xxx110000xxx", "subx_l_r"),
    ("1001xxx100001xxx", "subx_b_m"),
    ("1001xxx101001xxx", "subx_w_m"),
    ("1001xxx110001xxx", "subx_l_m"),
    ("1011xxx000xxxxxx", "cmp_b"),
    ("1011xxx001xxxxxx", "cmp_w"),
    ("1011xxx010xxxxxx", "cmp_l"),
    ("1011xxx000000xxx", "cmp_b_dn"),
    ("1011xxx000101xxx", "cmp_b_dan"),
    ("1011xxx001000xxx", "cmp_w_dn"),
    ("1011xxx010000xxx", "cmp_l_dn"),
    ("1011xxx011xxxxxx", "cmpa_w"),
    ("1011xxx111xxxxxx", "cmpa_l"),
    ("1011xxx111001xxx", "cmpa_l_an"),
    ("1011xxx100xxxxxx", "eor_b"),
    ("1011xxx101xxxxxx", "eor_w"),
    ("1011xxx110xxxxxx", "eor_l"),
    ("1011xxx100001xxx", "cmpm_b"),
    ("1011xxx101001xxx", "cmpm_w"),
    ("1011xxx110001xxx", "cmpm_l"),
    ("1100xxx000xxxxxx", "and_b_dn"),
    ("1100xxx001xxxxxx", "and_w_dn"),
    ("1100xxx010xxxxxx", "and_l_dn"),
    ("1100xxx010000xxx", "and_l_dn_dn"),
    ("1100xxx100xxxxxx", "and_b_ea"),
    ("1100xxx101xxxxxx", "and_w_ea"),
    ("1100xxx110xxxxxx", "and_l_ea"),
    ("1100xxx011xxxxxx", "mulu"),
    ("1100xxx10000xxxx", "abcd"),
    ("1100xxx101000xxx", "exg_d"),
    ("1100xxx101001xxx", "exg_a"),
    ("1100xxx110001xxx", "exg_ad"),
    ("1100xxx111xxxxxx", "muls"),
    ("1101xxx000xxxxxx", "add_b_dn"),
    ("1101xxx001xxxxxx", "add_w_dn"),
    ("1101xxx010xxxxxx", "add_l_dn"),
    ("1101xxx000000xxx", "add_b_dn_dn"),
    ("1101xxx001000xxx", "add_w_dn_dn"),
    ("1101xxx010000xxx", "add_l_dn_dn"),
    ("1101xxx100xxxxxx", "add_b_ea"),
    ("1101xxx101xxxxxx", "add_w_ea"),
    ("1101xxx110xxxxxx", "add_l_ea"),
    ("1101xxx011xxxxxx", "add_w_an"),
    ("1101xxx111xxxxxx", "add_l_an"),
    ("1101xxx011000xxx", "add_w_an_dn"),
    ("1101xxx111000xxx", "add_l_an_dn"),
    ("1101xxx100000xxx", "addx_b_r"),
    ("1101xxx101000xxx", "addx_w_r"),
    ("1101xxx110000xxx", "addx_l_r"),
    ("1101xxx100001xxx", "addx_b_m"),
    ("1101xxx101001xxx", "addx_w_m"),
    ("1101xxx110001xxx", "addx_l_m"),
    ("1110xxx000001xxx", "lsr_b_i"),
    ("1110xxx100001xxx", "lsl_b_i"),
    ("1110001000001xxx", "lsr1_b"),
    ("1110001100001xxx", "lsl1_b"),
    ("1110xxx001001xxx", "lsr_w_i"),
    ("1110xxx101001xxx", "lsl_w_i"),
    ("1110001001001xxx", "lsr1_w"),
    ("1110001101001xxx", "lsl1_w"),
    ("1110xxx010001xxx", "lsr_l_i"),
    ("1110xxx110001xxx", "lsl_l_i"),
    ("1110001010001xxx", "lsr1_l"),
    ("1110001110001xxx", "lsl1_l"),
    ("1110010110001xxx", "lsl2_l"),
    ("1110xxx000101xxx", "lsr_b_r"),
    ("1110xxx100101xxx", "lsl_b_r"),
    ("1110xxx001101xxx", "lsr_w_r"),
    ("1110xxx101101xxx", "lsl_w_r"),
    ("1110xxx010101xxx", "lsr_l_r"),
    ("1110xxx110101xxx", "lsl_l_r"),
    ("1110xxx000000xxx", "asr_b_i"),
    ("1110xxx100000xxx", "asl_b_i"),
    ("1110xxx001000xxx", "asr_w_i"),
    ("1110xxx101000xxx", "asl_w_i"),
    ("1110xxx010000xxx", "asr_l_i"),
    ("1110xxx110000xxx", "asl_l_i"),
    ("1110xxx000100xxx", "asr_b_r"),
    ("1110xxx100100xxx", "asl_b_r"),
    ("1110xxx001100xxx", "asr_w_r"),
    ("1110xxx101100xxx", "asl_w_r"),
    ("1110xxx010100xxx", "asr_l_r"),
    ("1110xxx110100xxx", "asl_l_r"),
    ("1110xxx000010xxx", "roxr_b_i"),
    ("1110xxx100010xxx", "roxl_b_i"),
    ("1110xxx001010xxx", "roxr_w_i"),
    ("1110xxx101010xxx", "roxl_w_i"),
    ("1110xxx010010xxx", "roxr_l_i"),
    ("1110xxx110010xxx", "roxl_l_i"),
    ("1110xxx000110xxx", "roxr_b_r"),
    ("1110xxx100110xxx", "roxl_b_r"),
    ("1110xxx001110xxx", "roxr_w_r"),
    ("1110xxx101110xxx", "roxl_w_r"),
    ("1110xxx010110xxx", "roxr_l_r"),
    ("1110xxx110110xxx", "roxl_l_r"),
    ("1110xxx000011xxx", "ror_b_i"),
    ("1110xxx100011xxx", "rol_b_i"),
    ("1110xxx001011xxx", "ror_w_i"),
    ("1110xxx101011xxx", "rol_w_i"),
    ("1110xxx010011xxx", "ror_l_i"),
    ("1110xxx110011xxx", "rol_l_i"),
    ("1110xxx000111xxx", "ror_b_r"),
    ("1110xxx100111xxx", "rol_b_r"),
    ("1110xxx001111xxx", "ror_w_r"),
    ("1110xxx101111xxx", "rol_w_r"),
    ("1110xxx010111xxx", "ror_l_r"),
    ("1110xxx110111xxx", "rol_l_r"),
    ("1110000011xxxxxx", "asr_m"),
    ("1110000111xxxxxx", "asl_m"),
    ("1110001011xxxxxx", "lsr_m"),
    ("1110001111xxxxxx", "lsl_m"),
    ("1110010011xxxxxx", "roxr_m"),
    ("1110010111xxxxxx", "roxl_m"),
    ("1110011011xxxxxx", "ror_m"),
    ("1110011111xxxxxx", "rol_m"),
    ("1010xxxxxxxxxxxx", "code1010"),
    ("1111xxxxxxxxxxxx", "code1111"),
)


class OpcodeTable:
    """Complete 65536-entry mapping from opcode to handler name."""

    def __init__(self):
        names = [None] * _TABLE_SIZE
        for opcode in _INVALID_RANGE:
            names[opcode] = INVALID
        for pattern, name in _ENTRIES:
            for opcode in expand_pattern(pattern.replace("_", "")):
                names[opcode] = name
        self._names = tuple(names)

        by_name = defaultdict(list)
        for opcode, name in enumerate(self._names):
            by_name[name].append(opcode)
        self._by_name = {name: tuple(ops) for name, ops in by_name.items()}

    def __len__(self):
        return len(self._names)

    def handler(self, opcode):
        """Return the handler name for ``opcode``."""
        if not 0 <= opcode < _TABLE_SIZE:
            raise ValueError(f"opcode {opcode!r} outside 0..0xFFFF")
        return self._names[opcode]

    def opcodes_for(self, name):
        """Return the ascending list of opcodes dispatched to ``name``."""
        return list(self._by_name.get(name, ()))


@lru_cache(maxsize=None)
def build_table():
    """Return the shared, fully populated opcode table."""
    return OpcodeTable()