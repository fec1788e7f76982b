# tihu

Text-processing front end for Persian speech synthesis: a tokenizer driven
by a character table, a word lexicon with prefix/suffix analysis, and a
helper for building WAV headers. Pure Python, no dependencies.

## Install

    pip install .

For the test suite:

    pip install ".[test]"
    pytest

## Tokenizing

`tihu.tokenizer.Tokenizer` reads a character table and splits text into
`Word` objects. Each line of the table holds five whitespace-separated
fields: the character's code, the character itself, the code of its
normalised form, the normalised text and a one-letter token type (see
`tihu.char_map.TokenType`). Reading stops, with a logged warning, at the
first line with fewer fields. Tab and space are always delimiters.

```python
from tihu.tokenizer import Tokenizer

tokenizer = Tokenizer()
tokenizer.load("data/tokens.txt")          # the default path is ./data/tokens.txt

for word in tokenizer.tokenize("سلام دنیا", 0):
    print(word.text, word.offset, word.length, word.is_persian_word())
```

A token is a run of characters of the same type; delimiters separate
tokens and are not kept. Offsets and lengths count UTF-16 code units. A
line break marks the preceding word with `is_end_of_paragraph`.

Inside Persian tokens the text is normalised: tatweel is dropped, ZWNJs are
collapsed and never start or end a word, the lam-alef and Allah ligatures
are expanded, heh with yeh above becomes heh plus hamza, and a hamza is kept
(as heh plus hamza) only after heh. A diacritic sets `has_diacritic` on the
word; what it contributes to the text is whatever the table normalises it
to.

Inline events written as `/type:value/` are taken out of the text. The
types `mark`, `volume`, `pitch`, `speed`, `silence` and `spell` (see
`EventType`) are attached as `Event` objects to the next word produced; any
other type is attached as `EventType.UNKNOWN`; `offset` sets the running
offset instead. A doubled slash is not an event and is dropped.

The character table itself lives in `tihu.char_map`:
`CharMapper.set(letter, char_map)` and `CharMapper.get(letter)` for 16-bit
codes, with `CharMap` holding the normalised text, code and type. An
unmapped code comes back as a `CharMap` of type `TokenType.UNKNOWN`; a code
outside 0–0xFFFF raises `ValueError`.

## Lexicon

`tihu.lexicon.Lexicon` combines a dictionary file with an affix file.

- The dictionary file has the word count on its first line (zero raises
  `ValueError`), then one record per line: `word[/flags] pos pron freq
  lemma`, where the flags are two characters each. Repeated words are kept
  as homonyms.
- The affix file holds `PFX` and `SFX` blocks. A block header gives the
  type, a two-character flag and the number of entries; each entry line
  gives type, flag, appended text, part of speech and pronunciation. An
  underscore in the appended text stands for a ZWNJ.

```python
from tihu.lexicon import Lexicon
from tihu.tokenizer import Tokenizer

lexicon = Lexicon()
lexicon.load("data/lexicon.aff", "data/lexicon.dic")   # these are the defaults

tokenizer = Tokenizer()
tokenizer.load("data/tokens.txt")
words = tokenizer.tokenize("می‌روم به خانه", 0)

lexicon.parse(words)
for word in words:
    print(word.text, [(e.stem, e.pos, e.pron) for e in word.entries])
```

`parse` works on the word list in place and returns it. For each Persian
word it first tries to join up to `MAX_COMPOUND` (four) neighbouring
Persian words into a ZWNJ-separated compound that the lexicon can tag
(`tag_compound`), merging them into one word on success. Failing that it
tries to split a run-together word into dictionary words (`breakdown`),
cutting only after letters that do not join the next one or after the verb
prefixes *mi* and *nemi* (`can_be_detached`).

Single lookups are available too: `check_word(text)` tests the dictionary
alone, while `tag_word(word, text)` also strips prefixes and suffixes and
adds every matching reading to `word.entries` as a
`tihu.affix_manager.DictEntry` (stem, part of speech, pronunciation).

The lower layers can be used on their own: `tihu.hash_table.HashTable`
(`load`, `add_word`, `lookup`) for the dictionary, and
`tihu.affix_manager.AffixManager` (`load`, `add_prefix`, `add_suffix`,
`affix_check`, `is_prefix`, …) for affix analysis, with the rules
themselves in `tihu.affix_entry`.

## WAV headers

`tihu.wav.wav_header(channels, sample_rate, bits_per_sample, data_size)`
returns the 44-byte (`WAVE_HEADER_SIZE`) linear-PCM header for a block of
raw samples:

```python
from tihu.wav import wav_header

pcm = b"\x00\x00" * 22050
with open("out.wav", "wb") as fh:
    fh.write(wav_header(1, 22050, 16, len(pcm)))
    fh.write(pcm)
```

## What it does not do

The package prepares text only. It does not produce speech or audio
samples, play sound, or provide a command-line tool, server or graphical
interface; `wav_header` only builds the header for samples produced
elsewhere. No character table, dictionary or affix file ships with it.