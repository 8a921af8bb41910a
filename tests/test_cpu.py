"""
Unit Tests for the 6502 CPU Definitions
=======================================

Tests for opcode classification, addressing-mode resolution, operand
formatting and the instruction-length table.

Run tests with:
    pytest tests/test_cpu.py -v
"""

import pytest
from disasm6502.cpu import (
    AddressingMode,
    OpcodeFamily,
    OPCODE_TABLE,
    INSTRUCTION_LENGTHS,
    SINGLE_BYTE_OPCODES,
    BRANCH_OPCODES,
    BRK_LENGTH,
    UNKNOWN_OPERAND,
    instruction_family,
    instruction_index,
    addressing_mode_index,
    family_mnemonic,
    resolve_addressing_mode,
    classify,
    instruction_length,
    format_operand,
    operand_value,
)


# =============================================================================
# Bit Field Extraction
# =============================================================================

class TestBitFields:
    """Tests for the aaabbbcc opcode layout."""

    def test_family(self):
        assert instruction_family(0x6D) == OpcodeFamily.FAMILY_01
        assert instruction_family(0xA2) == OpcodeFamily.FAMILY_10
        assert instruction_family(0xAC) == OpcodeFamily.FAMILY_00
        assert instruction_family(0xFF) == OpcodeFamily.FAMILY_11

    def test_instruction_index(self):
        assert instruction_index(0x6D) == 0b011   # ADC
        assert instruction_index(0xE1) == 0b111   # SBC

    def test_addressing_mode_index(self):
        assert addressing_mode_index(0x6D) == 0b011  # absolute
        assert addressing_mode_index(0x71) == 0b100  # (zp),Y


# =============================================================================
# Family Tables
# =============================================================================

class TestFamilyTables:
    """Tests for family mnemonic and addressing-mode lookup."""

    @pytest.mark.parametrize("index,mnemonic", list(enumerate(
        ["ORA", "AND", "EOR", "ADC", "STA", "LDA", "CMP", "SBC"]
    )))
    def test_family_01_mnemonics(self, index, mnemonic):
        assert family_mnemonic(OpcodeFamily.FAMILY_01, index) == mnemonic

    @pytest.mark.parametrize("index,mnemonic", list(enumerate(
        [None, "BIT", "JMP", "JMP", "STY", "LDY", "CPY", "CPX"]
    )))
    def test_family_00_mnemonics(self, index, mnemonic):
        assert family_mnemonic(OpcodeFamily.FAMILY_00, index) == mnemonic

    @pytest.mark.parametrize("index,mnemonic", list(enumerate(
        ["ASL", "ROL", "LSR", "ROR", "STX", "LDX", "DEC", "INC"]
    )))
    def test_family_10_mnemonics(self, index, mnemonic):
        assert family_mnemonic(OpcodeFamily.FAMILY_10, index) == mnemonic

    def test_family_11_has_no_instructions(self):
        for index in range(8):
            assert family_mnemonic(OpcodeFamily.FAMILY_11, index) is None

    def test_family_00_modes(self):
        expected = [
            AddressingMode.IMMEDIATE, AddressingMode.ZERO_PAGE,
            AddressingMode.ILLEGAL, AddressingMode.ABSOLUTE,
            AddressingMode.ILLEGAL, AddressingMode.ZERO_PAGE_X,
            AddressingMode.ILLEGAL, AddressingMode.ABSOLUTE_X,
        ]
        modes = [resolve_addressing_mode(OpcodeFamily.FAMILY_00, i) for i in range(8)]
        assert modes == expected

    def test_family_01_modes(self):
        expected = [
            AddressingMode.INDEXED_INDIRECT, AddressingMode.ZERO_PAGE,
            AddressingMode.IMMEDIATE, AddressingMode.ABSOLUTE,
            AddressingMode.INDIRECT_INDEXED, AddressingMode.ZERO_PAGE_X,
            AddressingMode.ABSOLUTE_Y, AddressingMode.ABSOLUTE_X,
        ]
        modes = [resolve_addressing_mode(OpcodeFamily.FAMILY_01, i) for i in range(8)]
        assert modes == expected

    def test_family_10_modes(self):
        expected = [
            AddressingMode.IMMEDIATE, AddressingMode.ZERO_PAGE,
            AddressingMode.ACCUMULATOR, AddressingMode.ABSOLUTE,
            AddressingMode.ILLEGAL, AddressingMode.ZERO_PAGE_X,
            AddressingMode.ILLEGAL, AddressingMode.ABSOLUTE_X,
        ]
        modes = [resolve_addressing_mode(OpcodeFamily.FAMILY_10, i) for i in range(8)]
        assert modes == expected

    def test_family_11_modes_are_illegal(self):
        for index in range(8):
            assert resolve_addressing_mode(OpcodeFamily.FAMILY_11, index) == AddressingMode.ILLEGAL


# =============================================================================
# Classification
# =============================================================================

class TestClassify:
    """Tests for whole-opcode classification."""

    def test_table_covers_every_byte(self):
        assert len(OPCODE_TABLE) == 256
        for opcode, info in enumerate(OPCODE_TABLE):
            assert info.opcode == opcode

    def test_single_byte_opcodes_are_implied(self):
        for opcode, mnemonic in SINGLE_BYTE_OPCODES.items():
            info = classify(opcode)
            assert info.mnemonic == mnemonic
            assert info.mode == AddressingMode.IMPLIED

    def test_branches_are_relative(self):
        for opcode, mnemonic in BRANCH_OPCODES.items():
            info = classify(opcode)
            assert info.mnemonic == mnemonic
            assert info.mode == AddressingMode.RELATIVE
            assert info.size == 2

    def test_jsr_is_absolute(self):
        info = classify(0x20)
        assert info.mnemonic == "JSR"
        assert info.mode == AddressingMode.ABSOLUTE
        assert info.size == 3

    def test_single_byte_table_takes_precedence(self):
        """$8A would decode as STX accumulator through the family tables."""
        assert classify(0x8A).mnemonic == "TXA"
        assert classify(0xEA).mnemonic == "NOP"

    def test_generic_family_opcode(self):
        info = classify(0x6D)
        assert info.mnemonic == "ADC"
        assert info.family == OpcodeFamily.FAMILY_01
        assert info.mode == AddressingMode.ABSOLUTE
        assert info.operand_size == 2

    def test_accumulator(self):
        info = classify(0x0A)
        assert info.mnemonic == "ASL"
        assert info.mode == AddressingMode.ACCUMULATOR
        assert info.size == 1

    def test_unknown_family_00_index_0(self):
        for opcode in (0x04, 0x0C, 0x14, 0x1C):
            info = classify(opcode)
            assert info.mnemonic is None
            assert not info.is_known

    def test_family_11_is_unknown(self):
        for opcode in range(0x03, 0x100, 4):
            assert classify(opcode).mnemonic is None

    def test_illegal_mode_keeps_mnemonic(self):
        info = classify(0xB2)
        assert info.mnemonic == "LDX"
        assert info.mode == AddressingMode.ILLEGAL

    def test_value_masked_to_byte(self):
        assert classify(0x16D) == classify(0x6D)


# =============================================================================
# Instruction Length Table
# =============================================================================

class TestInstructionLengths:
    """Tests for the opcode -> length table."""

    def test_every_length_in_range(self):
        assert len(INSTRUCTION_LENGTHS) == 256
        assert set(INSTRUCTION_LENGTHS) <= {1, 2, 3}

    def test_brk_has_padding_byte(self):
        assert instruction_length(0x00) == BRK_LENGTH == 2

    @pytest.mark.parametrize("opcode,length", [
        (0xEA, 1),  # NOP
        (0x0A, 1),  # ASL A
        (0xA9, 2),  # LDA #
        (0xA5, 2),  # LDA zp
        (0xD0, 2),  # BNE
        (0x61, 2),  # ADC (zp,X)
        (0x71, 2),  # ADC (zp),Y
        (0x6D, 3),  # ADC abs
        (0x79, 3),  # ADC abs,Y
        (0x20, 3),  # JSR
        (0x12, 1),  # ASL illegal mode
        (0xFF, 1),  # family 11
        (0x04, 1),  # unknown family 00
    ])
    def test_lengths(self, opcode, length):
        assert instruction_length(opcode) == length

    def test_matches_classification(self):
        for opcode in range(1, 256):
            assert instruction_length(opcode) == classify(opcode).size


# =============================================================================
# Operand Formatting
# =============================================================================

class TestFormatOperand:
    """Tests for operand rendering."""

    @pytest.mark.parametrize("mode,value,text", [
        (AddressingMode.IMMEDIATE, 0x05, "#$05"),
        (AddressingMode.ZERO_PAGE, 0xAB, "$AB"),
        (AddressingMode.ZERO_PAGE_X, 0x00, "$00,X"),
        (AddressingMode.ZERO_PAGE_Y, 0x10, "$10,Y"),
        (AddressingMode.ABSOLUTE, 0xF00F, "$F00F"),
        (AddressingMode.ABSOLUTE, 0x0012, "$0012"),
        (AddressingMode.ABSOLUTE_X, 0xBEEF, "$BEEF,X"),
        (AddressingMode.ABSOLUTE_Y, 0x0000, "$0000,Y"),
        (AddressingMode.INDEXED_INDIRECT, 0x0F, "($0F,X)"),
        (AddressingMode.INDIRECT_INDEXED, 0xF0, "($F0),Y"),
        (AddressingMode.RELATIVE, 0xFE, "$FE"),
    ])
    def test_templates(self, mode, value, text):
        assert format_operand(mode, value) == text

    def test_accumulator(self):
        assert format_operand(AddressingMode.ACCUMULATOR) == "A"

    def test_implied_is_empty(self):
        assert format_operand(AddressingMode.IMPLIED) == ""

    def test_illegal(self):
        assert format_operand(AddressingMode.ILLEGAL) == UNKNOWN_OPERAND

    def test_operand_value_little_endian(self):
        assert operand_value(bytes([0x0F, 0xF0])) == 0xF00F
        assert operand_value(bytes([0x42])) == 0x42
        assert operand_value(b"") == 0
