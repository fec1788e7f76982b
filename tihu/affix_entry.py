"""Prefix and suffix rules and how they match a word against the dictionary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from .hash_table import HashEntry

__all__ = ["AffixEntry", "PrefixEntry", "SuffixEntry"]


class _Manager(Protocol):
    def lookup(self, text: str) -> list[HashEntry]: ...

    def parse_entry(
        self,
        hentry: HashEntry,
        prefix: Optional["PrefixEntry"],
        suffix: Optional["SuffixEntry"],
        word: Any,
    ) -> None: ...

    def suffix_check(
        self, text: str, prefix: Optional["PrefixEntry"], needflag: int, word: Any
    ) -> None: ...


@dataclass(eq=False)
class AffixEntry:
    """One affix rule: the text it adds, its pronunciation and part of speech."""

    manager: _Manager = field(repr=False)
    flag: int = 0
    append: str = ""
    pron: str = ""
    pos: str = ""

    @property
    def key(self) -> str:
        """The string the rule is indexed and searched by."""
        return self.append


class PrefixEntry(AffixEntry):
    """A rule that adds text at the start of a root word."""

    def check_word(self, text: str, needflag: int, word: Any) -> None:
        """Strip this prefix from ``text`` and tag ``word`` with any roots found.

        ``text`` is expected to start with the prefix.  The stripped text is
        then offered to the manager's suffix check as well.
        """
        if len(text) <= len(self.append):
            return
        root = text[len(self.append):]
        for hentry in self.manager.lookup(root):
            if hentry.has_flag(needflag):
                self.manager.parse_entry(hentry, self, None, word)
        self.manager.suffix_check(root, self, needflag, word)


class SuffixEntry(AffixEntry):
    """A rule that adds text at the end of a root word."""

    @property
    def key(self) -> str:
        return self.append[::-1]

    def check_word(
        self, text: str, prefix: Optional[PrefixEntry], needflag: int, word: Any
    ) -> None:
        """Strip this suffix from ``text`` and tag ``word`` with matching roots.

        A root qualifies only if it carries both this rule's flag and
        ``needflag``.
        """
        if len(self.append) > len(text):
            return
        root = text[: len(text) - len(self.append)]
        for hentry in self.manager.lookup(root):
            if hentry.has_flag(self.flag) and hentry.has_flag(needflag):
                self.manager.parse_entry(hentry, prefix, self, word)