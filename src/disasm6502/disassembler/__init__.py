"""
disasm6502 Disassembler Module
==============================

Decodes MOS 6502 machine code into assembler text.

Usage:
    from disasm6502.disassembler import MOS6502Disassembler

    disasm = MOS6502Disassembler(rom_bytes, start=0, end=0x100)
    for line in disasm.decode_all():
        print(line)
"""

from .mos6502 import (
    MOS6502Disassembler,
    DisassembledInstruction,
    DecodeStatus,
    disassemble,
)

__all__ = [
    "MOS6502Disassembler",
    "DisassembledInstruction",
    "DecodeStatus",
    "disassemble",
]
