"""
MOS 6502 Instruction Set Definition
===================================

This module defines how a 6502 opcode byte is classified into a mnemonic and
an addressing mode, how many bytes each instruction occupies, and how operand
values are rendered in standard assembler syntax.

Opcode Layout
-------------
Most 6502 opcodes follow the bit pattern ``aaabbbcc``:

- ``cc``  (bits 0-1): instruction family
- ``aaa`` (bits 5-7): instruction index within the family
- ``bbb`` (bits 2-4): addressing-mode index within the family

The irregular opcodes (stack operations, register transfers, flag operations,
conditional branches, BRK/RTI/RTS and JSR) do not fit this pattern and are
looked up in explicit tables before the family decoding is attempted.

Addressing Modes
----------------
1. **IMPLIED**: No operand (RTS, CLC)                    1 byte
2. **ACCUMULATOR**: Operates on A (ASL A)                1 byte
3. **IMMEDIATE**: Literal value (LDA #$41)               2 bytes
4. **ZERO_PAGE**: Address $00-$FF (LDA $40)              2 bytes
5. **ZERO_PAGE_X / ZERO_PAGE_Y**: Indexed zero page      2 bytes
6. **ABSOLUTE**: Full 16-bit address (LDA $1234)         3 bytes
7. **ABSOLUTE_X / ABSOLUTE_Y**: Indexed absolute         3 bytes
8. **INDEXED_INDIRECT**: (zp,X)                          2 bytes
9. **INDIRECT_INDEXED**: (zp),Y                          2 bytes
10. **RELATIVE**: Signed branch displacement             2 bytes

The 6502 is little-endian: a 16-bit operand is stored low byte first.

Every function here is total over the 256 byte values. Bit patterns that do
not name a valid instruction are reported through tagged values
(``mnemonic=None`` or ``AddressingMode.ILLEGAL``) rather than exceptions, so
that arbitrary data can always be decoded.

Reference
---------
- MOS MCS6500 Microcomputer Family Programming Manual
- http://www.llx.com/Neil/a2/opcodes.html
"""

from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing import Dict, Optional, Tuple


# =============================================================================
# Bit Field Masks
# =============================================================================

FAMILY_MASK = 0b11
INSTRUCTION_MASK = 0b111
ADDRESSING_MODE_MASK = 0b111

INSTRUCTION_SHIFT = 5
ADDRESSING_MODE_SHIFT = 2


# =============================================================================
# Output Sentinels
# =============================================================================

UNKNOWN_INSTRUCTION = "???"  # Opcode with no defined instruction
UNKNOWN_OPERAND = "???"      # Defined instruction with an illegal mode
TRUNCATED_OPERAND = "END"    # Operand bytes run past the decode range
END_OF_RANGE = ".END"        # Decoder has no more bytes to decode


# =============================================================================
# Enumerations
# =============================================================================

class OpcodeFamily(IntEnum):
    """The low two bits of an opcode."""
    FAMILY_00 = 0b00
    FAMILY_01 = 0b01
    FAMILY_10 = 0b10
    FAMILY_11 = 0b11


class AddressingMode(Enum):
    """
    6502 addressing modes.

    ILLEGAL is not a real 6502 mode; it tags addressing-mode bit patterns
    that are invalid for the instruction family.
    """
    IMPLIED = auto()           # No operand (RTS)
    ACCUMULATOR = auto()       # A
    IMMEDIATE = auto()         # #$xx
    ZERO_PAGE = auto()         # $xx
    ZERO_PAGE_X = auto()       # $xx,X
    ZERO_PAGE_Y = auto()       # $xx,Y
    ABSOLUTE = auto()          # $xxxx
    ABSOLUTE_X = auto()        # $xxxx,X
    ABSOLUTE_Y = auto()        # $xxxx,Y
    INDEXED_INDIRECT = auto()  # ($xx,X)
    INDIRECT_INDEXED = auto()  # ($xx),Y
    RELATIVE = auto()          # $xx (raw signed displacement)
    ILLEGAL = auto()           # ???

    def __str__(self) -> str:
        """Return human-readable name for listings and JSON output."""
        return self.name.lower().replace("_", "-")


# =============================================================================
# Operand Sizes and Templates
# =============================================================================

OPERAND_SIZE: Dict[AddressingMode, int] = {
    AddressingMode.IMPLIED: 0,
    AddressingMode.ACCUMULATOR: 0,
    AddressingMode.IMMEDIATE: 1,
    AddressingMode.ZERO_PAGE: 1,
    AddressingMode.ZERO_PAGE_X: 1,
    AddressingMode.ZERO_PAGE_Y: 1,
    AddressingMode.ABSOLUTE: 2,
    AddressingMode.ABSOLUTE_X: 2,
    AddressingMode.ABSOLUTE_Y: 2,
    AddressingMode.INDEXED_INDIRECT: 1,
    AddressingMode.INDIRECT_INDEXED: 1,
    AddressingMode.RELATIVE: 1,
    AddressingMode.ILLEGAL: 0,
}

# "{}" receives the zero-padded hex value
OPERAND_TEMPLATE: Dict[AddressingMode, str] = {
    AddressingMode.IMMEDIATE: "#${}",
    AddressingMode.ZERO_PAGE: "${}",
    AddressingMode.ZERO_PAGE_X: "${},X",
    AddressingMode.ZERO_PAGE_Y: "${},Y",
    AddressingMode.ABSOLUTE: "${}",
    AddressingMode.ABSOLUTE_X: "${},X",
    AddressingMode.ABSOLUTE_Y: "${},Y",
    AddressingMode.INDEXED_INDIRECT: "(${},X)",
    AddressingMode.INDIRECT_INDEXED: "(${}),Y",
    AddressingMode.RELATIVE: "${}",
}


# =============================================================================
# Irregular Opcodes
# =============================================================================
# These opcodes are intercepted before family decoding. Several of them sit
# in bit positions that the family tables would otherwise misread (e.g. $0A
# vs $08, $8A vs $88).
# =============================================================================

BRK_OPCODE = 0x00
JSR_OPCODE = 0x20

# BRK is followed by a padding byte that the CPU skips on return
BRK_LENGTH = 2

SINGLE_BYTE_OPCODES: Dict[int, str] = {
    0x00: "BRK",
    0x40: "RTI",
    0x60: "RTS",

    # Stack
    0x08: "PHP",
    0x28: "PLP",
    0x48: "PHA",
    0x68: "PLA",

    # Register increment/decrement
    0x88: "DEY",
    0xC8: "INY",
    0xCA: "DEX",
    0xE8: "INX",

    # Register transfers
    0xA8: "TAY",
    0x98: "TYA",
    0xAA: "TAX",
    0x8A: "TXA",
    0xBA: "TSX",
    0x9A: "TXS",

    # Flags
    0x18: "CLC",
    0x38: "SEC",
    0x58: "CLI",
    0x78: "SEI",
    0xB8: "CLV",
    0xD8: "CLD",
    0xF8: "SED",

    0xEA: "NOP",
}

BRANCH_OPCODES: Dict[int, str] = {
    0x10: "BPL",
    0x30: "BMI",
    0x50: "BVC",
    0x70: "BVS",
    0x90: "BCC",
    0xB0: "BCS",
    0xD0: "BNE",
    0xF0: "BEQ",
}


# =============================================================================
# Family Tables
# =============================================================================
# Indexed by (opcode >> 5) & 0b111 and (opcode >> 2) & 0b111 respectively.
# None marks an index with no legal instruction or mode.
# =============================================================================

FAMILY_MNEMONICS: Dict[OpcodeFamily, Tuple[Optional[str], ...]] = {
    OpcodeFamily.FAMILY_00: (None, "BIT", "JMP", "JMP", "STY", "LDY", "CPY", "CPX"),
    OpcodeFamily.FAMILY_01: ("ORA", "AND", "EOR", "ADC", "STA", "LDA", "CMP", "SBC"),
    OpcodeFamily.FAMILY_10: ("ASL", "ROL", "LSR", "ROR", "STX", "LDX", "DEC", "INC"),
    OpcodeFamily.FAMILY_11: (None,) * 8,
}

FAMILY_ADDRESSING_MODES: Dict[OpcodeFamily, Tuple[AddressingMode, ...]] = {
    OpcodeFamily.FAMILY_00: (
        AddressingMode.IMMEDIATE,
        AddressingMode.ZERO_PAGE,
        AddressingMode.ILLEGAL,
        AddressingMode.ABSOLUTE,
        AddressingMode.ILLEGAL,
        AddressingMode.ZERO_PAGE_X,
        AddressingMode.ILLEGAL,
        AddressingMode.ABSOLUTE_X,
    ),
    OpcodeFamily.FAMILY_01: (
        AddressingMode.INDEXED_INDIRECT,
        AddressingMode.ZERO_PAGE,
        AddressingMode.IMMEDIATE,
        AddressingMode.ABSOLUTE,
        AddressingMode.INDIRECT_INDEXED,
        AddressingMode.ZERO_PAGE_X,
        AddressingMode.ABSOLUTE_Y,
        AddressingMode.ABSOLUTE_X,
    ),
    OpcodeFamily.FAMILY_10: (
        AddressingMode.IMMEDIATE,
        AddressingMode.ZERO_PAGE,
        AddressingMode.ACCUMULATOR,
        AddressingMode.ABSOLUTE,
        AddressingMode.ILLEGAL,
        AddressingMode.ZERO_PAGE_X,
        AddressingMode.ILLEGAL,
        AddressingMode.ABSOLUTE_X,
    ),
    OpcodeFamily.FAMILY_11: (AddressingMode.ILLEGAL,) * 8,
}


# =============================================================================
# Opcode Information
# =============================================================================

@dataclass(frozen=True)
class OpcodeInfo:
    """
    Classification of a single opcode byte.

    Attributes:
        opcode: The opcode byte
        mnemonic: Instruction mnemonic, or None for an unknown opcode
        family: Instruction family (low two bits)
        mode: Addressing mode (ILLEGAL for invalid bit patterns)
        size: Total instruction length in bytes (see INSTRUCTION_LENGTHS)
    """
    opcode: int
    mnemonic: Optional[str]
    family: OpcodeFamily
    mode: AddressingMode
    size: int

    @property
    def is_known(self) -> bool:
        return self.mnemonic is not None

    @property
    def operand_size(self) -> int:
        return self.size - 1

    def __repr__(self) -> str:
        return (
            f"OpcodeInfo(opcode=${self.opcode:02X}, mnemonic={self.mnemonic!r}, "
            f"mode={self.mode}, size={self.size})"
        )


# =============================================================================
# Bit Field Extraction
# =============================================================================

def instruction_family(opcode: int) -> OpcodeFamily:
    """Return the family selector (low two bits) of an opcode."""
    return OpcodeFamily(opcode & FAMILY_MASK)


def instruction_index(opcode: int) -> int:
    """Return the 3-bit instruction index (bits 5-7) of an opcode."""
    return (opcode >> INSTRUCTION_SHIFT) & INSTRUCTION_MASK


def addressing_mode_index(opcode: int) -> int:
    """Return the 3-bit addressing-mode index (bits 2-4) of an opcode."""
    return (opcode >> ADDRESSING_MODE_SHIFT) & ADDRESSING_MODE_MASK


def family_mnemonic(family: OpcodeFamily, index: int) -> Optional[str]:
    """
    Look up the mnemonic for an instruction index within a family.

    Returns:
        The mnemonic, or None if the family has no instruction at that index.
    """
    return FAMILY_MNEMONICS[OpcodeFamily(family)][index & INSTRUCTION_MASK]


def resolve_addressing_mode(family: OpcodeFamily, mode_index: int) -> AddressingMode:
    """
    Resolve a family's addressing-mode index to an AddressingMode.

    Invalid combinations resolve to AddressingMode.ILLEGAL.
    """
    return FAMILY_ADDRESSING_MODES[OpcodeFamily(family)][mode_index & ADDRESSING_MODE_MASK]


# =============================================================================
# Classification
# =============================================================================

def _classify_uncached(opcode: int) -> Tuple[Optional[str], OpcodeFamily, AddressingMode]:
    family = instruction_family(opcode)

    if opcode in SINGLE_BYTE_OPCODES:
        return SINGLE_BYTE_OPCODES[opcode], family, AddressingMode.IMPLIED
    if opcode in BRANCH_OPCODES:
        return BRANCH_OPCODES[opcode], family, AddressingMode.RELATIVE
    if opcode == JSR_OPCODE:
        return "JSR", family, AddressingMode.ABSOLUTE

    mnemonic = family_mnemonic(family, instruction_index(opcode))
    if mnemonic is None:
        return None, family, AddressingMode.ILLEGAL

    return mnemonic, family, resolve_addressing_mode(family, addressing_mode_index(opcode))


def _build_length_table() -> Tuple[int, ...]:
    """
    Build the opcode -> instruction length table.

    The length is one opcode byte plus the operand width of the resolved
    addressing mode. BRK is the only exception: it is followed by a padding
    byte that is never rendered.
    """
    lengths = []
    for opcode in range(256):
        _, _, mode = _classify_uncached(opcode)
        lengths.append(1 + OPERAND_SIZE[mode])
    lengths[BRK_OPCODE] = BRK_LENGTH
    return tuple(lengths)


INSTRUCTION_LENGTHS: Tuple[int, ...] = _build_length_table()


def _build_opcode_table() -> Tuple[OpcodeInfo, ...]:
    table = []
    for opcode in range(256):
        mnemonic, family, mode = _classify_uncached(opcode)
        table.append(OpcodeInfo(
            opcode=opcode,
            mnemonic=mnemonic,
            family=family,
            mode=mode,
            size=INSTRUCTION_LENGTHS[opcode],
        ))
    return tuple(table)


OPCODE_TABLE: Tuple[OpcodeInfo, ...] = _build_opcode_table()


def classify(opcode: int) -> OpcodeInfo:
    """
    Classify an opcode byte.

    Args:
        opcode: Opcode value; only the low 8 bits are used

    Returns:
        OpcodeInfo for the byte. Never raises.
    """
    return OPCODE_TABLE[opcode & 0xFF]


def instruction_length(opcode: int) -> int:
    """Return the total length in bytes (1-3) of the instruction at opcode."""
    return INSTRUCTION_LENGTHS[opcode & 0xFF]


# =============================================================================
# Operand Formatting
# =============================================================================

def format_operand(mode: AddressingMode, value: int = 0) -> str:
    """
    Render an operand value in assembler syntax.

    Args:
        mode: The addressing mode
        value: The operand value (already assembled little-endian for
               2-byte operands); ignored by modes without an operand byte

    Returns:
        Operand text, e.g. "#$41", "$1234,X", "A", or "" for implied
    """
    if mode == AddressingMode.IMPLIED:
        return ""
    if mode == AddressingMode.ACCUMULATOR:
        return "A"
    if mode == AddressingMode.ILLEGAL:
        return UNKNOWN_OPERAND

    digits = OPERAND_SIZE[mode] * 2
    return OPERAND_TEMPLATE[mode].format(f"{value:0{digits}X}")


def operand_value(operand_bytes: bytes) -> int:
    """Assemble 1 or 2 little-endian operand bytes into an integer."""
    if not operand_bytes:
        return 0
    if len(operand_bytes) == 1:
        return operand_bytes[0]
    return operand_bytes[0] | (operand_bytes[1] << 8)
