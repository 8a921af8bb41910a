"""
disasm6502 Configuration
========================

Output defaults for the command-line disassembler. Configuration can come
from:
- Default values (defined here)
- Environment variables (DisassemblerConfig.from_env)
- Command-line options, which override both

Environment variables (all optional):
    DISASM6502_BASE_ADDRESS: Display address of the first byte (0x/$/decimal)
    DISASM6502_SHOW_BYTES:   Include raw bytes in listings (1/0, true/false, yes/no, on/off)
    DISASM6502_END_MARKER:   Finish listings with the .END line
    DISASM6502_PACKED:       Treat input files as packed 32-bit word lists
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from disasm6502.errors import ConfigError


ENV_PREFIX = "DISASM6502_"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def parse_address(text: str) -> int:
    """
    Parse an address written as 0x-hex, $-hex or decimal.

    Raises:
        ValueError: If the text is not a number
    """
    text = text.strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    if text.startswith("$"):
        return int(text[1:], 16)
    return int(text)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigError(name, value, "a boolean (1/0, true/false, yes/no, on/off)")


@dataclass
class DisassemblerConfig:
    """
    Output configuration for disassembly listings.

    Attributes:
        base_address: Address shown for offset 0 of the input (default: 0)
        show_bytes: Include raw instruction bytes in listings (default: True)
        end_marker: Finish listings with the .END sentinel (default: True)
        packed: Input is a packed 32-bit word list rather than raw bytes
    """
    base_address: int = 0
    show_bytes: bool = True
    end_marker: bool = True
    packed: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DisassemblerConfig":
        """
        Create DisassemblerConfig from environment variables.

        Args:
            environ: Mapping to read instead of os.environ

        Raises:
            ConfigError: If a variable is set to an invalid value
        """
        env = os.environ if environ is None else environ
        config = cls()

        name = ENV_PREFIX + "BASE_ADDRESS"
        if address := env.get(name):
            try:
                config.base_address = parse_address(address)
            except ValueError:
                raise ConfigError(name, address, "an address (0x/$ hex or decimal)") from None
            if not 0 <= config.base_address <= 0xFFFF:
                raise ConfigError(name, address, "an address in 0x0000-0xFFFF")

        if (value := env.get(ENV_PREFIX + "SHOW_BYTES")) is not None:
            config.show_bytes = _parse_bool(ENV_PREFIX + "SHOW_BYTES", value)

        if (value := env.get(ENV_PREFIX + "END_MARKER")) is not None:
            config.end_marker = _parse_bool(ENV_PREFIX + "END_MARKER", value)

        if (value := env.get(ENV_PREFIX + "PACKED")) is not None:
            config.packed = _parse_bool(ENV_PREFIX + "PACKED", value)

        return config
