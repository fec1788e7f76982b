import pytest

from tihu.affix_entry import PrefixEntry, SuffixEntry
from tihu.affix_manager import AffixManager, DictEntry
from tihu.hash_table import HashTable, decode_flags
from tihu.tokenizer import Word

ZWNJ = "\u200c"
FLAG_NULL = 0


def make_manager(tmp_path, affixes, words):
    table = HashTable()
    for word, pos, pron, flags, freq in words:
        table.add_word(word, word, pos, pron, decode_flags(flags), freq)
    manager = AffixManager(table)
    path = tmp_path / "lexicon.aff"
    path.write_text(affixes, encoding="utf-8")
    manager.load(path)
    return manager


def test_suffix_from_file(tmp_path):
    manager = make_manager(
        tmp_path,
        "SFX AA 1\nSFX AA ها N hA\n",
        [("کتاب", "N_SING", "ketAb", "AA", 5)],
    )
    word = Word()
    manager.affix_check("کتابها", FLAG_NULL, word)
    assert word.entries == [DictEntry("کتاب", "N", "ketAbhA")]
    assert word.frequency == 5


def test_suffix_needs_flag_on_root(tmp_path):
    manager = make_manager(
        tmp_path,
        "SFX AA 1\nSFX AA ها N hA\n",
        [("کتاب", "N_SING", "ketAb", "", 5)],
    )
    word = Word()
    manager.affix_check("کتابها", FLAG_NULL, word)
    assert word.entries == []


def test_underscore_becomes_zwnj(tmp_path):
    manager = make_manager(
        tmp_path,
        "SFX AA 1\nSFX AA _ها N hA\n",
        [("کتاب", "N_SING", "ketAb", "AA", 1)],
    )
    word = Word()
    manager.affix_check("کتاب" + ZWNJ + "ها", FLAG_NULL, word)
    assert [e.pron for e in word.entries] == ["ketAbhA"]


def test_prefix_star_pos_appends_attribute(tmp_path):
    manager = make_manager(
        tmp_path,
        "PFX BB 1\nPFX BB نا *NEG nA\n",
        [("دان", "ADJ", "dAn", "", 2)],
    )
    word = Word()
    manager.prefix_check("نادان", FLAG_NULL, word)
    assert word.entries == [DictEntry("دان", "ADJ_NEG", "nAdAn")]


def test_prefix_star_pos_already_present(tmp_path):
    manager = make_manager(
        tmp_path,
        "PFX BB 1\nPFX BB نا *NEG nA\n",
        [("دان", "ADJ_NEG", "dAn", "", 2)],
    )
    word = Word()
    manager.prefix_check("نادان", FLAG_NULL, word)
    assert [e.pos for e in word.entries] == ["ADJ_NEG"]


def test_prefix_dot_pos_keeps_root_pos(tmp_path):
    manager = make_manager(
        tmp_path,
        "PFX BB 1\nPFX BB می . mi\n",
        [("رود", "V", "ravad", "", 2)],
    )
    word = Word()
    manager.affix_check("میرود", FLAG_NULL, word)
    assert word.entries == [DictEntry("رود", "V", "miravad")]


def test_prefix_crossed_with_suffix(tmp_path):
    manager = make_manager(
        tmp_path,
        "PFX BB 1\nPFX BB نا *NEG nA\nSFX AA 1\nSFX AA ها N hA\n",
        [("دان", "ADJ", "dAn", "AA", 3)],
    )
    word = Word()
    manager.affix_check("نادانها", FLAG_NULL, word)
    assert DictEntry("دان", "N", "nAdAnhA") in word.entries


def test_is_prefix(tmp_path):
    manager = make_manager(tmp_path, "PFX BB 1\nPFX BB نا *NEG nA\n", [])
    assert manager.is_prefix("نادان")
    assert manager.is_prefix("نا")
    assert not manager.is_prefix("دان")
    assert not manager.is_prefix("")


def test_malformed_entry_stops_block_but_not_file(tmp_path):
    manager = make_manager(
        tmp_path,
        "PFX BB 2\nPFX BB نا *NEG\nSFX AA 1\nSFX AA ها N hA\n",
        [("کتاب", "N_SING", "ketAb", "AA", 5)],
    )
    assert not manager.is_prefix("نادان")
    word = Word()
    manager.affix_check("کتابها", FLAG_NULL, word)
    assert len(word.entries) == 1


def test_zero_count_block_is_skipped(tmp_path):
    manager = make_manager(
        tmp_path,
        "PFX BB 0\nSFX AA 1\nSFX AA ها N hA\n",
        [("کتاب", "N_SING", "ketAb", "AA", 5)],
    )
    word = Word()
    manager.affix_check("کتابها", FLAG_NULL, word)
    assert [e.stem for e in word.entries] == ["کتاب"]


def test_bad_count_raises(tmp_path):
    with pytest.raises(ValueError):
        make_manager(tmp_path, "SFX AA many\n", [])


def test_missing_file_raises(tmp_path):
    manager = AffixManager(HashTable())
    with pytest.raises(OSError):
        manager.load(tmp_path / "absent.aff")


def test_prefix_order_sorted_ties_newest_first():
    table = HashTable()
    table.add_word("bc", "bc", "R", "r", [], 1)
    table.add_word("c", "c", "R", "r", [], 1)
    manager = AffixManager(table)
    manager.add_prefix(PrefixEntry(manager, 0, "ab", "x", "FIRST"))
    manager.add_prefix(PrefixEntry(manager, 0, "a", "y", "SHORT"))
    manager.add_prefix(PrefixEntry(manager, 0, "ab", "z", "SECOND"))
    word = Word()
    manager.prefix_check("abc", FLAG_NULL, word)
    assert [e.pos for e in word.entries] == ["SHORT", "SECOND", "FIRST"]


def test_suffix_wildcard_matches_any_character():
    table = HashTable()
    table.add_word("root", "root", "R", "r", decode_flags("AA"), 1)
    manager = AffixManager(table)
    flag = decode_flags("AA")[0]
    manager.add_suffix(SuffixEntry(manager, flag, "x.z", "s", "S"))
    word = Word()
    manager.suffix_check("rootxyz", None, FLAG_NULL, word)
    assert word.entries == [DictEntry("root", "S", "rs")]


def test_suffix_check_on_empty_text_does_nothing():
    manager = AffixManager(HashTable())
    manager.add_suffix(SuffixEntry(manager, 0, "a", "s", "S"))
    word = Word()
    manager.suffix_check("", None, FLAG_NULL, word)
    assert word.entries == []


def test_parse_entry_uses_join_pron():
    table = HashTable()
    hentry = table.add_word("dan", "dan", "ADJ", "dAn", [], 7)
    manager = AffixManager(table, join_pron=lambda a, b: f"{a}-{b}")
    prefix = PrefixEntry(manager, 0, "na", "nA", ".")
    suffix = SuffixEntry(manager, 0, "ha", "hA", ".")
    word = Word()
    manager.parse_entry(hentry, prefix, suffix, word)
    assert word.entries == [DictEntry("dan", "ADJ", "nA-dAn-hA")]
    assert word.frequency == 7


def test_lookup_delegates_to_dictionary():
    table = HashTable()
    entry = table.add_word("dan", "dan", "ADJ", "dAn", [], 7)
    manager = AffixManager(table)
    assert manager.lookup("dan") == [entry]
    assert manager.lookup("nope") == []