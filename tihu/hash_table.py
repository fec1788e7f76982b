"""Root-word dictionary: words with part of speech, pronunciation and affix flags."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from os import PathLike
from typing import Iterable

__all__ = [
    "USER_WORDS",
    "hash_key",
    "decode_flags",
    "HashEntry",
    "HashTable",
]

log = logging.getLogger(__name__)

USER_WORDS = 1000
"""Approximate number of user-defined words reserved in the table size."""

ROTATE_LEN = 5
_MASK = (1 << 64) - 1
_INT_MAX = (1 << 31) - 1
_POINTER_SIZE = 8
_INT = re.compile(r"\s*([+-]?\d+)")


def _char(byte: int) -> int:
    # bytes are widened as signed chars would be
    return byte if byte < 0x80 else (byte - 0x100) & _MASK


def _rotate(value: int) -> int:
    low = (value >> (32 - ROTATE_LEN)) & ((1 << ROTATE_LEN) - 1)
    return ((value << ROTATE_LEN) | low) & _MASK


def hash_key(word: str, table_size: int) -> int:
    """Load-and-rotate hash of the UTF-8 bytes of ``word``, in ``range(table_size)``."""
    if table_size <= 0:
        raise ValueError(f"table size must be positive: {table_size!r}")
    data = word.encode("utf-8")
    value = 0
    for byte in data[:4]:
        value = ((value << 8) | _char(byte)) & _MASK
    for byte in data[4:]:
        value = _rotate(value) ^ _char(byte)
    return value % table_size


def decode_flags(flags: str) -> list[int]:
    """Decode a flag string, two bytes per flag, keeping the given order."""
    data = flags.encode("utf-8")
    if len(data) % 2:
        log.warning("error: bad flag vector: %s", flags)
    return [(high << 8) + low for high, low in zip(data[::2], data[1::2])]


def _stoi(text: str, line_no: int) -> int:
    match = _INT.match(text)
    if match is None:
        raise ValueError(f"line {line_no}: invalid integer: {text!r}")
    return int(match.group(1))


@dataclass(frozen=True)
class HashEntry:
    """One dictionary record for a root word."""

    word: str
    pos: str = ""
    pron: str = ""
    lemma: str = ""
    freq: int = 0
    flags: tuple[int, ...] = ()

    def has_flag(self, flag: int) -> bool:
        """True if ``flag`` is null or carried by this entry."""
        return not flag or flag in self.flags


class HashTable:
    """Dictionary of root words; homonyms are kept in the order they were added."""

    def __init__(self) -> None:
        self.table_size = 0
        self._entries: dict[str, list[HashEntry]] = {}

    def load(self, path: str | PathLike[str]) -> None:
        """Read a word list whose first line holds the word count.

        Every other line holds ``word[/flags] pos pron freq lemma``.
        """
        with open(path, encoding="utf-8") as handle:
            header = handle.readline().split()
            count = _stoi(header[0] if header else "", 1)
            if count == 0:
                raise ValueError(f"error: empty dic file {path}")

            size = count + USER_WORDS + 5
            if size % 2 == 0:
                size += 1
            if size <= 0 or size >= (_INT_MAX - 1) // _POINTER_SIZE:
                raise ValueError(
                    "error: line 1: missing or bad word count in the dic file"
                )

            self.table_size = size
            self._entries = {}

            for line_no, line in enumerate(handle, start=2):
                pieces = line.split()
                if not pieces:
                    continue
                pieces += [""] * (5 - len(pieces))
                word, pos, pron, freq, lemma = pieces[:5]
                word, _, affixes = word.partition("/")
                self.add_word(
                    word, lemma, pos, pron, decode_flags(affixes), _stoi(freq, line_no)
                )

    def add_word(
        self,
        word: str,
        lemma: str,
        pos: str,
        pron: str,
        flags: Iterable[int],
        freq: int,
    ) -> HashEntry:
        """Add a record; a word already present gains a homonym."""
        entry = HashEntry(word, pos, pron, lemma, freq, tuple(sorted(flags)))
        self._entries.setdefault(word, []).append(entry)
        return entry

    def lookup(self, text: str) -> list[HashEntry]:
        """All records for ``text``, first added first; empty if none."""
        return list(self._entries.get(text, ()))