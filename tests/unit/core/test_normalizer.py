"""Tests for query normalization."""

from meow.core.normalizer import STOPWORDS, normalize


def test_removes_filler_words() -> None:
    assert normalize("please find the hostel fees yesterday") == "hostel fees"


def test_all_stopwords_falls_back_to_raw_query() -> None:
    assert normalize("the a is") == "the a is"


def test_stopwords_are_case_insensitive() -> None:
    assert normalize("Find THE Invoice") == "Invoice"


def test_collapses_whitespace() -> None:
    assert normalize("  tax    return\t2024 ") == "tax return 2024"


def test_keeps_surviving_token_case() -> None:
    assert normalize("my Hostel Fees") == "Hostel Fees"


def test_stopword_list_covers_time_words() -> None:
    assert {"yesterday", "today"} <= STOPWORDS
