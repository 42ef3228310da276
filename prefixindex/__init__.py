"""Prefix index — compressed trie resolving keys by unique prefix."""

from prefixindex.tree import (
    LINEAR_SCAN_LIMIT,
    Edge,
    Node,
    Outcome,
    PrefixAmbiguous,
    PrefixError,
    PrefixIndex,
    PrefixNotFound,
    Result,
    matching_chars,
)
from prefixindex.loader import load_word_list, load_words
from prefixindex.debug import dump, iter_dump

__all__ = [
    "LINEAR_SCAN_LIMIT",
    "Edge",
    "Node",
    "Outcome",
    "PrefixAmbiguous",
    "PrefixError",
    "PrefixIndex",
    "PrefixNotFound",
    "Result",
    "dump",
    "iter_dump",
    "load_word_list",
    "load_words",
    "matching_chars",
]
