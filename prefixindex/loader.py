"""Bulk loading of word lists into a prefix index."""

from __future__ import annotations

import logging
import os
from typing import Iterable

from prefixindex.tree import PrefixIndex

log = logging.getLogger("prefixindex")


def _insert_words(lines: Iterable[str], index: PrefixIndex[str]) -> int:
    count = 0
    for line in lines:
        word = line.strip()
        if word:
            index.insert(word, word)
            count += 1
    return count


def load_words(lines: Iterable[str], index: PrefixIndex[str] | None = None) -> PrefixIndex[str]:
    """Insert each non-blank line as a key whose value is the word itself."""
    if index is None:
        index = PrefixIndex()
    _insert_words(lines, index)
    return index


def load_word_list(
    path: str | os.PathLike[str],
    index: PrefixIndex[str] | None = None,
    encoding: str = "utf-8",
) -> PrefixIndex[str]:
    """Load a one-word-per-line file such as ``/usr/share/dict/words``.

    The logged count is the number of non-blank lines read from *path*,
    not the size of the index they were added to.
    """
    if index is None:
        index = PrefixIndex()
    with open(path, "r", encoding=encoding) as f:
        count = _insert_words(f, index)
    log.info("Loaded %s words from %s", f"{count:,}", path)
    return index
