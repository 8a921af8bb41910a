"""
Packed ROM Images
=================

Some ROM dumps are distributed as lists of signed 32-bit integers rather than
raw bytes (for example, embedded as an int array in source code). This module
reinterprets such a word list as the little-endian byte stream the
disassembler operates on.

    >>> PackedRom([-99]).to_bytes()
    b'\\x9d\\xff\\xff\\xff'

Text Format
-----------
``parse_packed_words()`` accepts words separated by commas and/or whitespace.
Each word may be decimal, ``0x`` hex or ``$`` hex, with an optional sign.
``#`` and ``;`` start a comment that runs to the end of the line.

    ; reset handler
    0x60EAA9A2, -99, $0000FF00
"""

import logging
import re
import struct
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from disasm6502.errors import RomFormatError

# Logger for this module
logger = logging.getLogger(__name__)


INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

WORD_SIZE = 4

_COMMENT_RE = re.compile(r"[#;].*$", re.MULTILINE)
_SEPARATOR_RE = re.compile(r"[\s,]+")
_WORD_RE = re.compile(r"^([+-]?)(0[xX][0-9A-Fa-f]+|\$[0-9A-Fa-f]+|[0-9]+)$")


def parse_word(token: str, position: Optional[int] = None) -> int:
    """
    Parse a single word token.

    Args:
        token: Text such as "-99", "0x1F", "$FF"
        position: Token index for error reporting

    Returns:
        The integer value (not yet range-checked)

    Raises:
        RomFormatError: If the token is not an integer literal
    """
    match = _WORD_RE.match(token)
    if not match:
        raise RomFormatError(
            f"invalid word {token!r}",
            position=position,
            hint="use decimal, 0x-prefixed hex or $-prefixed hex",
        )

    sign, digits = match.groups()
    if digits.startswith("$"):
        value = int(digits[1:], 16)
    elif digits[:2].lower() == "0x":
        value = int(digits, 16)
    else:
        value = int(digits, 10)

    return -value if sign == "-" else value


def parse_packed_words(text: str) -> List[int]:
    """
    Parse a packed word list from text.

    Raises:
        RomFormatError: If any token is not an integer literal
    """
    text = _COMMENT_RE.sub("", text)
    tokens = [t for t in _SEPARATOR_RE.split(text) if t]
    return [parse_word(token, position) for position, token in enumerate(tokens)]


def unpack_words(words: Iterable[int]) -> bytes:
    """
    Reinterpret signed 32-bit words as little-endian bytes.

    Args:
        words: Integers in the signed 32-bit range

    Returns:
        Four bytes per word, least significant byte first

    Raises:
        RomFormatError: If a word does not fit in a signed 32-bit integer
    """
    words = list(words)
    for position, word in enumerate(words):
        if not INT32_MIN <= word <= INT32_MAX:
            raise RomFormatError(
                f"value {word} does not fit in a signed 32-bit word",
                position=position,
                hint=f"words must be in the range {INT32_MIN}..{INT32_MAX}",
            )

    data = struct.pack(f"<{len(words)}i", *words)
    logger.debug(f"Unpacked {len(words)} words into {len(data)} bytes")
    return data


class PackedRom:
    """
    A ROM image stored as signed 32-bit words.

    Attributes:
        words: The packed words, in memory order
    """

    def __init__(self, words: Sequence[int]):
        self.words = list(words)

    @classmethod
    def from_text(cls, text: str) -> "PackedRom":
        """Create a PackedRom from a comma/whitespace separated word list."""
        return cls(parse_packed_words(text))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PackedRom":
        """
        Create a PackedRom from a text file containing a word list.

        Raises:
            RomFormatError: If the file is not UTF-8 text or holds an invalid word
        """
        path = Path(path)
        logger.debug(f"Reading packed ROM from {path}")
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError:
            raise RomFormatError(
                "input is not a text word list",
                hint="packed input must be UTF-8 text; omit --packed for raw binary images",
            ) from None
        return cls.from_text(text)

    def to_bytes(self) -> bytes:
        """Return the ROM as raw little-endian bytes."""
        return unpack_words(self.words)

    def __len__(self) -> int:
        """Size of the unpacked image in bytes."""
        return len(self.words) * WORD_SIZE
