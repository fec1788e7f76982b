"""Affix rules indexed for fast matching against words."""

from __future__ import annotations

import logging
import re
from bisect import bisect_left
from dataclasses import dataclass
from os import PathLike
from typing import Callable, Iterator, Optional, Protocol

from .affix_entry import AffixEntry, PrefixEntry, SuffixEntry
from .hash_table import HashEntry

__all__ = ["DictEntry", "AffixManager"]

log = logging.getLogger(__name__)

ZWNJ = "\u200c"
FLAG_NULL = 0
_WILDCARD = ord(".")
_INT = re.compile(r"\s*([+-]?\d+)")


class _Dictionary(Protocol):
    def lookup(self, text: str) -> list[HashEntry]: ...


class _Word(Protocol):
    frequency: int

    def add_entry(self, entry: object) -> None: ...


@dataclass(frozen=True)
class DictEntry:
    """A reading of a word: its stem, part of speech and pronunciation."""

    stem: str
    pos: str
    pron: str


def _concat(first: str, second: str) -> str:
    return first + second


def _stoi(text: str, line_no: int) -> int:
    match = _INT.match(text)
    if match is None:
        raise ValueError(f"line {line_no}: invalid integer: {text!r}")
    return int(match.group(1))


def _flag(text: str) -> int:
    data = text.encode("utf-8") + b"\0\0"
    return (data[0] << 8) + data[1]


class _SortedBucket:
    """Entries kept in ascending key order; an equal key goes before older ones."""

    def __init__(self) -> None:
        self.keys: list = []
        self.entries: list[AffixEntry] = []

    def add(self, key, entry: AffixEntry) -> None:
        index = bisect_left(self.keys, key)
        self.keys.insert(index, key)
        self.entries.insert(index, entry)

    def __iter__(self):
        return zip(self.keys, self.entries)


def _rev_match(rkey: bytes, text: bytes) -> bool:
    """True if the reversed key ends ``text``; ``.`` in the key matches any byte."""
    if len(rkey) > len(text):
        return False
    return all(k == t or k == _WILDCARD for k, t in zip(rkey, reversed(text)))


class AffixManager:
    """Prefix and suffix rules, checked against a dictionary of root words."""

    def __init__(
        self,
        dictionary: _Dictionary,
        join_pron: Callable[[str, str], str] = _concat,
    ) -> None:
        self.dictionary = dictionary
        self.join_pron = join_pron
        self._prefixes: dict[str, _SortedBucket] = {}
        self._suffixes: dict[bytes, _SortedBucket] = {}

    def load(self, path: str | PathLike[str]) -> None:
        """Read an affix file of ``PFX``/``SFX`` blocks.

        A block header holds the type, a two-character flag and the number of
        entries; each entry line holds type, flag, appended text, part of
        speech and pronunciation.  An underscore in the appended text stands
        for a zero-width non-joiner.
        """
        with open(path, encoding="utf-8") as handle:
            lines = enumerate(handle, start=1)
            for line_no, line in lines:
                pieces = line.split()
                if pieces and pieces[0][:3] in ("PFX", "SFX"):
                    self._parse_affix(pieces[0][0], pieces[1:], line_no, lines)

    def _parse_affix(
        self,
        afx_type: str,
        header: list[str],
        line_no: int,
        lines: Iterator[tuple[int, str]],
    ) -> None:
        header = header + [""] * (2 - len(header))
        flag = _flag(header[0])
        count = _stoi(header[1], line_no)
        if count <= 0:
            log.warning("error: line %d: bad affix entry count.", line_no)
            return

        entries: list[AffixEntry] = []
        for _ in range(count):
            entry_no, line = next(lines, (line_no + 1, ""))
            pieces = line.split()
            if len(pieces) < 5:
                log.warning("error: line %d: wrong affix entry.", entry_no)
                break
            _type, _flag_text, append, pos, pron = pieces[:5]
            kind = SuffixEntry if afx_type == "S" else PrefixEntry
            entries.append(
                kind(self, flag, append.replace("_", ZWNJ), pron, pos)
            )

        for entry in entries:
            if isinstance(entry, SuffixEntry):
                self.add_suffix(entry)
            else:
                self.add_prefix(entry)

    def add_prefix(self, entry: PrefixEntry) -> None:
        key = entry.append
        self._prefixes.setdefault(key[:1], _SortedBucket()).add(key, entry)

    def add_suffix(self, entry: SuffixEntry) -> None:
        rkey = entry.append.encode("utf-8")[::-1]
        self._suffixes.setdefault(rkey[:1], _SortedBucket()).add(rkey, entry)

    def lookup(self, text: str) -> list[HashEntry]:
        """Dictionary records for the root word ``text``."""
        return self.dictionary.lookup(text)

    def _matching_prefixes(self, text: str) -> Iterator[PrefixEntry]:
        bucket = self._prefixes.get(text[:1])
        if bucket is None:
            return
        for key, entry in list(bucket):
            if text.startswith(key):
                yield entry

    def _matching_suffixes(self, text: str) -> Iterator[SuffixEntry]:
        data = text.encode("utf-8")
        bucket = self._suffixes.get(data[-1:])
        if bucket is None:
            return
        for rkey, entry in list(bucket):
            if _rev_match(rkey, data):
                yield entry

    def affix_check(self, text: str, needflag: int, word: _Word) -> None:
        """Tag ``word`` with every reading of ``text`` as root plus affixes."""
        self.prefix_check(text, needflag, word)
        self.suffix_check(text, None, needflag, word)

    def prefix_check(self, text: str, needflag: int, word: _Word) -> None:
        for entry in self._matching_prefixes(text):
            entry.check_word(text, needflag, word)

    def suffix_check(
        self,
        text: str,
        prefix: Optional[PrefixEntry],
        needflag: int,
        word: _Word,
    ) -> None:
        if not text:
            return
        for entry in self._matching_suffixes(text):
            entry.check_word(text, prefix, needflag, word)

    def is_prefix(self, prefix: str) -> bool:
        """True if some prefix rule's text starts ``prefix``."""
        return any(True for _ in self._matching_prefixes(prefix))

    def parse_entry(
        self,
        hentry: HashEntry,
        prefix: Optional[PrefixEntry],
        suffix: Optional[SuffixEntry],
        word: _Word,
    ) -> None:
        """Add to ``word`` the reading of ``hentry`` with the given affixes."""
        pos = hentry.pos
        pron = hentry.pron

        if prefix is not None:
            if prefix.pos != ".":
                if prefix.pos.startswith("*"):
                    attr = prefix.pos[1:]
                    if attr not in pos:
                        pos = f"{pos}_{attr}"
                else:
                    pos = prefix.pos
            pron = self.join_pron(prefix.pron, pron)

        if suffix is not None:
            if suffix.pos != ".":
                pos = suffix.pos
            pron = self.join_pron(pron, suffix.pron)

        word.add_entry(DictEntry(hentry.lemma, pos, pron))
        word.frequency = hentry.freq