"""Dictionary tagging of tokens: compounds, affixes and run-together words."""

from __future__ import annotations

from os import PathLike
from typing import Sequence

from .affix_manager import FLAG_NULL, AffixManager
from .char_map import TokenType
from .hash_table import HashTable
from .tokenizer import Word

__all__ = ["MAX_COMPOUND", "compound_text", "can_be_detached", "Lexicon"]

MAX_COMPOUND = 4
"""Largest number of tokens joined into one compound word."""

ZWNJ = "\u200c"

_DETACHING_LETTERS = frozenset("\u0627\u062f\u0630\u0631\u0632\u0698\u0648")
_VERB_PREFIXES = ("\u0645\u06cc", "\u0646\u0645\u06cc")  # mi, nemi


def compound_text(parts: Sequence[str]) -> str:
    """Join the parts of a compound with zero-width non-joiners."""
    return ZWNJ.join(parts)


def can_be_detached(text: str) -> bool:
    """True if a word may end after ``text``.

    That is the case when the last letter does not join the next one, or
    when ``text`` is one of the verb prefixes *mi* and *nemi*.
    """
    if not text:
        return False
    return text[-1] in _DETACHING_LETTERS or text in _VERB_PREFIXES


def _utf16_length(text: str) -> int:
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


class Lexicon:
    """Tags Persian tokens with their dictionary readings."""

    def __init__(self) -> None:
        self.dictionary = HashTable()
        self.affixes = AffixManager(self.dictionary)

    def load(
        self,
        affix_path: str | PathLike[str] = "./data/lexicon.aff",
        dic_path: str | PathLike[str] = "./data/lexicon.dic",
    ) -> None:
        """Read the affix rules, then the word list."""
        self.affixes.load(affix_path)
        self.dictionary.load(dic_path)

    def check_word(self, text: str) -> bool:
        """True if ``text`` is a root word of the dictionary."""
        return bool(text) and bool(self.dictionary.lookup(text))

    def tag_word(self, word: Word, text: str) -> bool:
        """Add every reading of ``text`` to ``word``; true if it has any."""
        if not text:
            return False
        for hentry in self.dictionary.lookup(text):
            self.affixes.parse_entry(hentry, None, None, word)
        self.affixes.affix_check(text, FLAG_NULL, word)
        return bool(word.entries)

    def can_be_compound_word(self, compound: Sequence[str]) -> bool:
        """True unless the last part of a compound cannot end one."""
        if len(compound) <= 1:
            return True
        last = compound[-1]
        if last in _VERB_PREFIXES:
            return False
        return not self.affixes.is_prefix(last)

    def make_compound(self, words: Sequence[Word], index: int, count: int) -> list[str]:
        """Texts of up to ``count`` Persian words from ``index`` that may form a compound."""
        while True:
            compound: list[str] = []
            for word in words[index:index + max(count, 0)]:
                if not word.is_persian_word():
                    break
                compound.append(word.text)
            if self.can_be_compound_word(compound):
                return compound
            count = len(compound) - 1

    def tag_compound(self, words: list[Word], index: int) -> bool:
        """Tag the longest compound starting at ``index``, merging its words."""
        count = MAX_COMPOUND
        while count > 0:
            compound = self.make_compound(words, index, count)
            if not compound:
                return False

            text = compound_text(compound)
            word = words[index]
            if self.tag_word(word, text):
                if len(compound) > 1:
                    word.text = text
                    word.length = len(text.encode("utf-8"))
                    del words[index + 1:index + len(compound)]
                return True

            count = len(compound) - 1
        return False

    def breakdown(self, words: list[Word], index: int) -> bool:
        """Split a run-together word at ``index`` into dictionary words.

        On success the word is replaced in place by its parts, the first of
        which then sits at ``index``.
        """
        original = words[index]
        text = original.text
        partials: list[str] = []
        start = 0

        while start < len(text):
            partial = ""
            for end in range(start + 1, len(text) + 1):
                candidate = text[start:end]
                if (can_be_detached(candidate) or end == len(text)) and self.check_word(
                    candidate
                ):
                    partial = candidate
            if not partial:
                return False
            partials.append(partial)
            start += len(partial)

        if len(partials) <= 1:
            return False

        offset = original.offset
        parts: list[Word] = []
        for partial in partials:
            length = _utf16_length(partial)
            parts.append(
                Word(
                    text=partial,
                    offset=offset,
                    length=length,
                    token_type=TokenType.PERSIAN,
                )
            )
            offset += length

        words[index:index + 1] = parts
        return True

    def parse(self, words: list[Word]) -> list[Word]:
        """Tag every Persian word of ``words`` in place and return the list."""
        index = 0
        while index < len(words):
            if words[index].is_persian_word() and not self.tag_compound(words, index):
                if self.breakdown(words, index):
                    continue
            index += 1
        return words