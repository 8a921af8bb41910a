"""
MOS 6502 Disassembler
=====================

Disassembles 6502 machine code into human-readable assembly language.

The disassembler owns a forward-only cursor (the program counter, ``pc``)
over a fixed ``[start, end)`` range of a byte buffer. Each decode step reads
one opcode, classifies it, renders its operand and advances the cursor by the
instruction length from the length table. Once the cursor reaches the end of
the range the disassembler is exhausted and every further step returns the
``.END`` sentinel.

Decoding never fails. Arbitrary data decodes to something:

    - Unknown opcodes render as ``???`` and occupy one byte
    - Illegal addressing modes keep the mnemonic with a ``???`` operand
    - An operand running past the end of the range renders as ``END`` and
      stops decoding without reading beyond the range

Relative branches are shown with their raw displacement byte; no branch
targets or labels are computed.

Usage:
    disasm = MOS6502Disassembler(rom_bytes)

    # Everything, with the trailing .END sentinel
    lines = disasm.decode_all()

    # One step at a time
    disasm = MOS6502Disassembler(rom_bytes, start=0x10, end=0x40)
    text = disasm.decode_next()

    # Lazily, alongside addresses
    for instr in MOS6502Disassembler(rom_bytes).instructions():
        print(f"{instr.offset:04X}  {instr.text}")
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, List, Optional

from disasm6502.cpu.mos6502 import (
    AddressingMode,
    BRK_OPCODE,
    END_OF_RANGE,
    TRUNCATED_OPERAND,
    UNKNOWN_INSTRUCTION,
    classify,
    format_operand,
    instruction_length,
    operand_value,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Data Structures
# =============================================================================

class DecodeStatus(Enum):
    """Outcome of a single decode step."""
    OK = auto()
    UNKNOWN_OPCODE = auto()   # No instruction for this byte
    ILLEGAL_MODE = auto()     # Known instruction, invalid addressing mode
    TRUNCATED = auto()        # Operand runs past the end of the range

    def __str__(self) -> str:
        return self.name.lower()


@dataclass
class DisassembledInstruction:
    """
    Represents a single disassembled 6502 instruction.

    Attributes:
        offset: Position of the opcode in the byte buffer
        opcode: The opcode byte
        mnemonic: The instruction mnemonic, or "???" for an unknown opcode
        mode: The addressing mode
        operand_str: Formatted operand (may be empty)
        size: Number of bytes the cursor advanced over
        raw_bytes: The bytes actually read for this instruction
        status: Whether the instruction decoded cleanly
    """
    offset: int
    opcode: int
    mnemonic: str
    mode: AddressingMode
    operand_str: str
    size: int
    raw_bytes: bytes
    status: DecodeStatus = DecodeStatus.OK

    @property
    def text(self) -> str:
        """The instruction as assembler text: MNEMONIC or MNEMONIC OPERAND."""
        if self.operand_str:
            return f"{self.mnemonic} {self.operand_str}"
        return self.mnemonic

    def __str__(self) -> str:
        return self.text

    def format_listing(self, base_address: int = 0, show_bytes: bool = True) -> str:
        """
        Format as a listing line: ADDRESS: [BYTES] MNEMONIC OPERAND

        Args:
            base_address: Address of buffer offset 0
            show_bytes: Include the raw instruction bytes
        """
        address = (base_address + self.offset) & 0xFFFF
        if not show_bytes:
            return f"${address:04X}: {self.text}"

        # Pad to the widest instruction (3 bytes = 8 chars with spaces)
        hex_bytes = " ".join(f"{b:02X}" for b in self.raw_bytes).ljust(8)
        return f"${address:04X}: {hex_bytes}  {self.text}"

    def to_dict(self, base_address: int = 0) -> dict:
        """Convert to dictionary for JSON serialization."""
        address = (base_address + self.offset) & 0xFFFF
        return {
            "address": f"${address:04X}",
            "address_int": address,
            "offset": self.offset,
            "opcode": f"${self.opcode:02X}",
            "mnemonic": self.mnemonic,
            "mode": str(self.mode),
            "operand": self.operand_str,
            "text": self.text,
            "size": self.size,
            "bytes": [f"${b:02X}" for b in self.raw_bytes],
            "status": str(self.status),
        }


# =============================================================================
# MOS 6502 Disassembler
# =============================================================================

class MOS6502Disassembler:
    """
    Stateful disassembler over a fixed range of a byte buffer.

    The cursor is private to each instance and only moves forward. To decode
    the same range again, construct a new disassembler. Instances are not
    thread-safe; decoders over disjoint ranges may run independently, provided
    each range starts on an instruction boundary.

    Attributes:
        _data: The byte buffer (never modified)
        _start: First offset of the decode range
        _end: Offset one past the last byte of the decode range
        _pc: Current cursor position
    """

    def __init__(self, data: bytes, start: int = 0, end: Optional[int] = None):
        """
        Initialize the disassembler.

        Args:
            data: Bytes-like buffer containing machine code
            start: First offset to decode (clamped to the buffer)
            end: Offset to stop at, exclusive (default: end of buffer,
                 clamped to the buffer and never before start)
        """
        self._data = bytes(data)
        length = len(self._data)

        self._start = min(max(start, 0), length)
        if end is None:
            end = length
        self._end = max(min(end, length), self._start)
        self._pc = self._start

    # -------------------------------------------------------------------------
    # Cursor State
    # -------------------------------------------------------------------------

    @property
    def pc(self) -> int:
        """Current cursor position."""
        return self._pc

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def exhausted(self) -> bool:
        """True once the cursor has reached the end of the range."""
        return self._pc >= self._end

    @property
    def remaining(self) -> int:
        """Number of bytes left in the decode range."""
        return self._end - self._pc

    def _read8(self) -> int:
        value = self._data[self._pc]
        self._pc += 1
        return value

    def _read_bytes(self, count: int) -> bytes:
        chunk = self._data[self._pc:self._pc + count]
        self._pc += count
        return chunk

    # -------------------------------------------------------------------------
    # Decoding
    # -------------------------------------------------------------------------

    def decode_next_instruction(self) -> Optional[DisassembledInstruction]:
        """
        Decode the instruction at the cursor and advance past it.

        Returns:
            DisassembledInstruction, or None if the range is exhausted
        """
        if self.exhausted:
            return None

        offset = self._pc
        opcode = self._read8()
        info = classify(opcode)
        length = instruction_length(opcode)

        if not info.is_known:
            logger.debug(f"Unknown opcode ${opcode:02X} at offset {offset}")
            return DisassembledInstruction(
                offset=offset,
                opcode=opcode,
                mnemonic=UNKNOWN_INSTRUCTION,
                mode=info.mode,
                operand_str="",
                size=1,
                raw_bytes=bytes([opcode]),
                status=DecodeStatus.UNKNOWN_OPCODE,
            )

        if info.mode == AddressingMode.ILLEGAL:
            logger.debug(f"Illegal addressing mode for {info.mnemonic} (${opcode:02X}) at offset {offset}")
            return DisassembledInstruction(
                offset=offset,
                opcode=opcode,
                mnemonic=info.mnemonic,
                mode=info.mode,
                operand_str=format_operand(info.mode),
                size=1,
                raw_bytes=bytes([opcode]),
                status=DecodeStatus.ILLEGAL_MODE,
            )

        if opcode == BRK_OPCODE:
            # The padding byte is skipped but never read
            self._pc = min(offset + length, self._end)
            return DisassembledInstruction(
                offset=offset,
                opcode=opcode,
                mnemonic=info.mnemonic,
                mode=info.mode,
                operand_str="",
                size=self._pc - offset,
                raw_bytes=self._data[offset:self._pc],
            )

        if offset + length > self._end:
            logger.debug(
                f"Truncated {info.mnemonic} at offset {offset}: "
                f"needs {length} bytes, {self._end - offset} available"
            )
            self._pc = self._end
            return DisassembledInstruction(
                offset=offset,
                opcode=opcode,
                mnemonic=info.mnemonic,
                mode=info.mode,
                operand_str=TRUNCATED_OPERAND,
                size=self._end - offset,
                raw_bytes=bytes([opcode]),
                status=DecodeStatus.TRUNCATED,
            )

        operand_bytes = self._read_bytes(info.operand_size)
        return DisassembledInstruction(
            offset=offset,
            opcode=opcode,
            mnemonic=info.mnemonic,
            mode=info.mode,
            operand_str=format_operand(info.mode, operand_value(operand_bytes)),
            size=length,
            raw_bytes=bytes([opcode]) + operand_bytes,
        )

    def decode_next(self) -> str:
        """
        Decode the next instruction as text.

        Returns:
            The instruction text, or ".END" once the range is exhausted.
            Repeated calls after exhaustion keep returning ".END".
        """
        instr = self.decode_next_instruction()
        if instr is None:
            return END_OF_RANGE
        return instr.text

    def instructions(self) -> Iterator[DisassembledInstruction]:
        """
        Lazily decode the rest of the range, one instruction per pull.

        The generator shares this disassembler's cursor; it is not
        restartable.
        """
        while True:
            instr = self.decode_next_instruction()
            if instr is None:
                return
            yield instr

    def __iter__(self) -> Iterator[str]:
        """Lazily decode the rest of the range as instruction text."""
        for instr in self.instructions():
            yield instr.text

    def decode_all(self) -> List[str]:
        """
        Decode the rest of the range.

        Returns:
            Instruction texts in order, followed by one ".END" sentinel
        """
        result = list(self)
        result.append(END_OF_RANGE)
        return result

    def disassemble_to_text(
        self,
        base_address: int = 0,
        show_bytes: bool = True,
        include_end: bool = True,
    ) -> str:
        """
        Decode the rest of the range and return a formatted listing.

        Args:
            base_address: Address of buffer offset 0, used for display only
            show_bytes: Include raw instruction bytes in each line
            include_end: Finish the listing with the ".END" sentinel

        Returns:
            Multi-line string with one instruction per line
        """
        lines = [
            instr.format_listing(base_address, show_bytes)
            for instr in self.instructions()
        ]
        if include_end:
            lines.append(END_OF_RANGE)
        return "\n".join(lines)


def disassemble(data: bytes, start: int = 0, end: Optional[int] = None) -> List[str]:
    """
    Disassemble a byte range in one call.

    Equivalent to ``MOS6502Disassembler(data, start, end).decode_all()``.
    """
    return MOS6502Disassembler(data, start, end).decode_all()
