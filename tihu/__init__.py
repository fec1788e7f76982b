"""Persian tokenizer, affix-aware lexicon and WAV header helper."""

__version__ = "0.1.0"

__all__ = ["affix_entry", "affix_manager", "char_map", "hash_table", "lexicon", "tokenizer", "wav"]