"""
disasm6502 CPU Package
======================

CPU architecture definitions shared by the disassembler and the command-line
tool: opcode classification, addressing modes, operand rendering and the
instruction-length table for the MOS 6502.

Usage:
    from disasm6502.cpu import classify, instruction_length, AddressingMode

    info = classify(0x6D)
    print(info.mnemonic, info.mode, info.size)   # ADC absolute 3
"""

from disasm6502.cpu.mos6502 import (
    # Core types
    AddressingMode,
    OpcodeFamily,
    OpcodeInfo,
    # Tables
    OPCODE_TABLE,
    INSTRUCTION_LENGTHS,
    OPERAND_SIZE,
    SINGLE_BYTE_OPCODES,
    BRANCH_OPCODES,
    FAMILY_MNEMONICS,
    FAMILY_ADDRESSING_MODES,
    BRK_OPCODE,
    BRK_LENGTH,
    JSR_OPCODE,
    # Sentinels
    UNKNOWN_INSTRUCTION,
    UNKNOWN_OPERAND,
    TRUNCATED_OPERAND,
    END_OF_RANGE,
    # Functions
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

__all__ = [
    "AddressingMode",
    "OpcodeFamily",
    "OpcodeInfo",
    "OPCODE_TABLE",
    "INSTRUCTION_LENGTHS",
    "OPERAND_SIZE",
    "SINGLE_BYTE_OPCODES",
    "BRANCH_OPCODES",
    "FAMILY_MNEMONICS",
    "FAMILY_ADDRESSING_MODES",
    "BRK_OPCODE",
    "BRK_LENGTH",
    "JSR_OPCODE",
    "UNKNOWN_INSTRUCTION",
    "UNKNOWN_OPERAND",
    "TRUNCATED_OPERAND",
    "END_OF_RANGE",
    "instruction_family",
    "instruction_index",
    "addressing_mode_index",
    "family_mnemonic",
    "resolve_addressing_mode",
    "classify",
    "instruction_length",
    "format_operand",
    "operand_value",
]
