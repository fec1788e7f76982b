"""Character classification and normalisation tables."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = ["TokenType", "CharMap", "CharMapper"]


class TokenType(str, Enum):
    """Class of a character, and of the token built from such characters.

    Each member is keyed by the single character used in the token table.
    A character outside the known set still gives a member of its own,
    so a table may use any type codes it likes.
    """

    UNKNOWN = "U"
    DELIMITER = "D"
    PERSIAN = "P"
    ENGLISH = "E"
    DIGIT = "N"
    PUNCTUATION = "S"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str) and len(value) == 1:
            member = str.__new__(cls, value)
            member._name_ = f"CODE_{ord(value)}"
            member._value_ = value
            return cls._value2member_map_.setdefault(value, member)
        return None


@dataclass(frozen=True)
class CharMap:
    """How one UTF-16 code unit is normalised and classified."""

    normed: str = ""
    code: int = 0
    token_type: TokenType = TokenType.UNKNOWN

    def is_diacritic(self) -> bool:
        return 0x064B <= self.code <= 0x0652

    def is_line_break(self) -> bool:
        return self.code in (0x0A, 0x0D)


_EMPTY = CharMap()


def _split(letter: int) -> tuple[int, int]:
    if not 0 <= letter <= 0xFFFF:
        raise ValueError(f"letter out of the 16-bit range: {letter!r}")
    return letter >> 8, letter & 0xFF


class CharMapper:
    """Two-level table from UTF-16 code units to :class:`CharMap` values.

    A letter whose 256-entry row holds no mapping at all maps to itself
    as an unknown character; a letter missing from a row that does hold
    mappings maps to an empty, unknown :class:`CharMap`.
    """

    def __init__(self) -> None:
        self._rows: dict[int, dict[int, CharMap]] = {}

    def set(self, letter: int, char_map: CharMap) -> None:
        row, col = _split(letter)
        self._rows.setdefault(row, {})[col] = char_map

    def get(self, letter: int) -> CharMap:
        row, col = _split(letter)
        cells = self._rows.get(row)
        if cells is not None:
            return cells.get(col, _EMPTY)
        return CharMap(chr(letter), letter, TokenType.UNKNOWN)