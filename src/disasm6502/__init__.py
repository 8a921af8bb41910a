"""
disasm6502 - MOS 6502 Disassembler
==================================

This package decodes MOS 6502 machine code into standard assembler syntax.

Main Components
---------------
- **cpu**: 6502 opcode classification, addressing modes, instruction lengths
- **disassembler**: The decoder with its forward-only cursor
- **rom**: Unpacking of ROM images stored as signed 32-bit words
- **cli**: The ``disasm6502`` command-line tool

Quick Start
-----------
Disassemble a byte buffer:
    >>> from disasm6502 import MOS6502Disassembler
    >>> MOS6502Disassembler(bytes([0x6D, 0x0F, 0xF0, 0x60])).decode_all()
    ['ADC $F00F', 'RTS', '.END']

Step through instructions one at a time:
    >>> disasm = MOS6502Disassembler(bytes([0xA9, 0x41]))
    >>> disasm.decode_next()
    'LDA #$41'
    >>> disasm.decode_next()
    '.END'

Or use the command-line tool:
    $ disasm6502 rom.bin --address 0xC000

Reference Documentation
-----------------------
- 6502 instruction set: http://www.6502.org/tutorials/6502opcodes.html
- Opcode bit layout: http://www.llx.com/Neil/a2/opcodes.html
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from disasm6502.cpu import (
    AddressingMode,
    OpcodeFamily,
    OpcodeInfo,
    classify,
    instruction_length,
    END_OF_RANGE,
    TRUNCATED_OPERAND,
    UNKNOWN_INSTRUCTION,
    UNKNOWN_OPERAND,
)
from disasm6502.disassembler import (
    MOS6502Disassembler,
    DisassembledInstruction,
    DecodeStatus,
    disassemble,
)
from disasm6502.rom import PackedRom, unpack_words, parse_packed_words
from disasm6502.config import DisassemblerConfig
from disasm6502.errors import (
    Disasm6502Error,
    RomError,
    RomFormatError,
    ConfigError,
)

__all__ = [
    # Version info
    "__version__",
    # CPU definitions
    "AddressingMode",
    "OpcodeFamily",
    "OpcodeInfo",
    "classify",
    "instruction_length",
    "END_OF_RANGE",
    "TRUNCATED_OPERAND",
    "UNKNOWN_INSTRUCTION",
    "UNKNOWN_OPERAND",
    # Disassembler
    "MOS6502Disassembler",
    "DisassembledInstruction",
    "DecodeStatus",
    "disassemble",
    # ROM images
    "PackedRom",
    "unpack_words",
    "parse_packed_words",
    # Configuration
    "DisassemblerConfig",
    # Exception hierarchy
    "Disasm6502Error",
    "RomError",
    "RomFormatError",
    "ConfigError",
]
