"""Split text into normalised tokens, extracting inline events."""

from __future__ import annotations

import logging
import re
import struct
from dataclasses import dataclass, field
from enum import Enum
from os import PathLike
from typing import Any

from .char_map import CharMap, CharMapper, TokenType

__all__ = ["EventType", "Event", "Word", "Tokenizer"]

log = logging.getLogger(__name__)

ZWNJ = "\u200c"
HE = "\u0647"
HAMZE = "\u0654"
LAM = "\u0644"
ALEF = "\u0627"

_INT = re.compile(r"\s*([+-]?\d+)")


class EventType(Enum):
    UNKNOWN = "unknown"
    BOOKMARK = "mark"
    VOLUME_RATIO = "volume"
    PITCH_RATIO = "pitch"
    SPEED_RATIO = "speed"
    SILENCE = "silence"
    SPELL_OUT = "spell"


@dataclass(frozen=True)
class Event:
    event_type: EventType
    value: str


@dataclass
class Word:
    """A token of text together with what later stages learn about it."""

    text: str = ""
    offset: int = 0
    length: int = 0
    token_type: TokenType = TokenType.UNKNOWN
    has_diacritic: bool = False
    is_end_of_paragraph: bool = False
    frequency: int = 0
    events: list[Event] = field(default_factory=list)
    entries: list[Any] = field(default_factory=list)

    def add_event(self, event_type: EventType, value: str) -> None:
        self.events.append(Event(event_type, value))

    def add_entry(self, entry: Any) -> None:
        self.entries.append(entry)

    def is_persian_word(self) -> bool:
        return self.token_type is TokenType.PERSIAN


def _stoi(text: str) -> int:
    match = _INT.match(text)
    if match is None:
        raise ValueError(f"invalid integer: {text!r}")
    return int(match.group(1))


def _units(text: str) -> list[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    return [unit for (unit,) in struct.iter_unpack("<H", data)]


def _from_units(units: list[int]) -> str:
    data = struct.pack(f"<{len(units)}H", *units)
    return data.decode("utf-16-le", "surrogatepass")


def _join_surrogates(text: str) -> str:
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le", "surrogatepass")


class Tokenizer:
    """Turns raw text into a list of :class:`Word` tokens."""

    def __init__(self) -> None:
        self.char_mapper = CharMapper()
        self._offset = 0

    def load(self, path: str | PathLike[str] = "./data/tokens.txt") -> None:
        """Read the token table: code, letter, normed code, normed form, type."""
        with open(path, encoding="utf-8") as handle:
            for line_no, line in enumerate(handle, start=1):
                pieces = line.split()
                if len(pieces) < 5:
                    log.warning("error: line %d: wrong token type.", line_no)
                    break
                code_l, _letter, code_n, normed, type_code = pieces[:5]
                char_map = CharMap(normed, _stoi(code_n), TokenType(type_code[0]))
                self.char_mapper.set(_stoi(code_l), char_map)

        self.char_mapper.set(ord("\t"), CharMap("\t", ord("\t"), TokenType.DELIMITER))
        self.char_mapper.set(ord(" "), CharMap(" ", ord(" "), TokenType.DELIMITER))

    def tokenize(self, text: str, offset: int = 0) -> list[Word]:
        """Split ``text`` into words; offsets count UTF-16 code units."""
        words: list[Word] = []
        units = _units(text) + [0]
        normed = ""
        token_type = TokenType.DELIMITER
        length = 0
        word = Word()
        self._offset = offset
        i = 0

        while True:
            unit = units[i]
            char_map = self.char_mapper.get(unit)

            if token_type != char_map.token_type:
                if token_type != TokenType.DELIMITER:
                    if normed.endswith(ZWNJ):
                        normed = normed[:-1]
                    if normed:
                        word.text = _join_surrogates(normed)
                        word.offset = self._offset
                        word.length = length
                        word.token_type = token_type
                        words.append(word)
                        word = Word()
                normed = ""
                self._offset += length
                length = 0
                token_type = char_map.token_type

            if not unit:
                break

            if token_type is TokenType.PERSIAN:
                if char_map.is_diacritic():
                    word.has_diacritic = True
                normed = self._append_persian(normed, char_map)
            elif token_type is TokenType.PUNCTUATION:
                event_size = self._parse_events(word, units, i)
                if event_size == 1:
                    # a doubled slash
                    i += 1
                elif event_size > 1:
                    i += event_size
                    token_type = TokenType.DELIMITER
                    continue
                else:
                    normed += char_map.normed
            elif token_type is TokenType.DELIMITER:
                if char_map.is_line_break() and words:
                    words[-1].is_end_of_paragraph = True
            else:
                normed += char_map.normed

            length += 1
            i += 1

        return words

    @staticmethod
    def _append_persian(normed: str, char_map: CharMap) -> str:
        code = char_map.code
        if code == 0x200C:
            if normed and not normed.endswith(ZWNJ):
                normed += ZWNJ
        elif code == 0x0640:
            pass
        elif code == 0x0621:
            # a hamza counts only after HE; elsewhere it is dropped
            if normed.endswith(HE):
                normed += HE + HAMZE
        elif code == 0x06C0:
            normed += HE + HAMZE
        elif code == 0xFEFB:
            normed += LAM + ALEF
        elif code == 0xFDF2:
            normed += ALEF + LAM + LAM + HE
        else:
            normed += char_map.normed
        return normed

    def _parse_events(self, word: Word, units: list[int], start: int) -> int:
        """Consume ``/type:value/`` events at ``start``; return units used."""
        slash, colon_char = ord("/"), ord(":")
        end_of_text = units.index(0, start)
        pos = start

        while units[pos] == slash:
            if units[pos + 1] == slash:
                pos += 1
                break
            try:
                colon = units.index(colon_char, pos + 1, end_of_text)
                end_tag = units.index(slash, colon + 1, end_of_text)
            except ValueError:
                log.warning("Wrong event at offset %d", self._offset)
                break

            event_name = _from_units(units[pos + 1:colon]).lower()
            value = _from_units(units[colon + 1:end_tag])

            if event_name == "offset":
                self._offset = _stoi(value)
            else:
                try:
                    event_type = EventType(event_name)
                except ValueError:
                    event_type = EventType.UNKNOWN
                if event_type is EventType.UNKNOWN and event_name == "unknown":
                    event_type = EventType.UNKNOWN
                word.add_event(event_type, value)

            pos = end_tag + 1

        return pos - start