"""
disasm6502 Error Hierarchy
==========================

This module defines the exception hierarchy for the package. All exceptions
inherit from Disasm6502Error, allowing callers to catch every package error
with a single except clause.

Exception Hierarchy
-------------------
Disasm6502Error (base)
├── RomError (ROM image handling)
│   └── RomFormatError - malformed packed word list
└── ConfigError - invalid configuration value

Decoding itself never raises. Unknown opcodes, illegal addressing modes and
truncated operands are reported through DecodeStatus on each decoded
instruction; these exceptions only cover loading and configuring input.

Error messages follow this format:
    error: description
    hint: suggestion for fixing (when available)
"""

from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class Disasm6502Error(Exception):
    """
    Base exception for all disasm6502 errors.

        try:
            rom = PackedRom.from_file("rom.txt")
        except Disasm6502Error as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# ROM Exceptions
# =============================================================================

class RomError(Disasm6502Error):
    """
    Base exception for ROM image errors.

    Attributes:
        message: The error description
        position: Index of the offending word or token (optional)
        hint: A suggestion for fixing the error (optional)
    """

    def __init__(
        self,
        message: str,
        position: Optional[int] = None,
        hint: Optional[str] = None,
    ):
        self.message = message
        self.position = position
        self.hint = hint
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with position and hint.

        Example output:
            error: word 3: value 4294967296 does not fit in a signed 32-bit word
            hint: words must be in the range -2147483648..2147483647
        """
        if self.position is not None:
            parts = [f"error: word {self.position}: {self.message}"]
        else:
            parts = [f"error: {self.message}"]

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class RomFormatError(RomError):
    """
    Malformed packed ROM input.

    Raised when a packed word list contains a token that is not an integer,
    or an integer that does not fit in a signed 32-bit word.
    """
    pass


# =============================================================================
# Configuration Exceptions
# =============================================================================

class ConfigError(Disasm6502Error):
    """
    Invalid configuration value.

    Attributes:
        name: The setting (usually an environment variable name)
        value: The rejected value
    """

    def __init__(self, name: str, value: str, expected: str):
        self.name = name
        self.value = value
        self.expected = expected
        super().__init__(f"error: invalid value {value!r} for {name}: expected {expected}")
