from __future__ import annotations

import logging
import os

import pytest

from prefixindex import Outcome, PrefixIndex, load_word_list, load_words

DICT_PATH = "/usr/share/dict/words"


def test_load_words_skips_blank_lines() -> None:
    index = load_words(["apple\n", "  \n", "armor\n", "\n", "applepie"])
    assert list(index) == ["apple", "applepie", "armor"]
    assert index.find_unique("arm").value == "armor"


def test_load_words_into_existing_index() -> None:
    index = PrefixIndex()
    index.insert("zebra", "stripes")
    returned = load_words(["zealot"], index)
    assert returned is index
    assert index.find_unique("zeb").value == "stripes"
    assert index.find_unique("ze").outcome is Outcome.AMBIGUOUS


def test_load_word_list(tmp_path, caplog) -> None:
    path = tmp_path / "words.txt"
    path.write_text("status\nstash\n\nshow\n", encoding="utf-8")

    with caplog.at_level(logging.INFO, logger="prefixindex"):
        index = load_word_list(path)

    assert len(index) == 3
    assert index.find_key("stat").value == "status"
    assert index.find_all_keys("st") == ["stash", "status"]
    assert "Loaded 3 words from" in caplog.text


def test_load_word_list_counts_lines_not_index_size(tmp_path, caplog) -> None:
    index = load_words(["alpha", "beta", "gamma", "delta", "epsilon"])
    path = tmp_path / "words.txt"
    path.write_text("zebra\nzebra\n", encoding="utf-8")

    with caplog.at_level(logging.INFO, logger="prefixindex"):
        returned = load_word_list(path, index)

    assert returned is index
    assert len(index) == 6
    assert "Loaded 2 words from" in caplog.text
    assert "Loaded 6 words" not in caplog.text


def test_load_word_list_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_word_list(tmp_path / "nope.txt")


@pytest.mark.skipif(not os.path.exists(DICT_PATH), reason="no system word list")
def test_system_dictionary() -> None:
    index = load_word_list(DICT_PATH)
    words = list(index)
    for word in words[:: max(len(words) // 500, 1)]:
        assert index.find_key(word).value == word
    for prefix in ["ab", "co", "de", "dea"]:
        assert index.find_unique(prefix).outcome is Outcome.AMBIGUOUS
