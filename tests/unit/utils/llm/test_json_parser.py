"""Tests for JSON recovery from chatty model output."""

import pytest

from meow.utils.llm.json_parser import extract_json_object, parse_json_response


def test_extract_first_to_last_brace() -> None:
    raw = 'Here you go: {"choice": 2, "confidence": 0.8} -- done'
    assert extract_json_object(raw) == '{"choice": 2, "confidence": 0.8}'


@pytest.mark.parametrize("raw", ["", "no braces", "} reversed {", "{ only open"])
def test_extract_returns_none_without_object(raw: str) -> None:
    assert extract_json_object(raw) is None


def test_parse_direct() -> None:
    assert parse_json_response('{"intent": "search"}') == {"intent": "search"}


def test_parse_markdown_fence() -> None:
    raw = 'Sure!\n```json\n{"intent": "open", "query": "cv"}\n```'
    assert parse_json_response(raw) == {"intent": "open", "query": "cv"}


def test_parse_with_surrounding_prose() -> None:
    raw = 'I think {"intent": "search", "query": "tax"} is right.'
    assert parse_json_response(raw) == {"intent": "search", "query": "tax"}


@pytest.mark.parametrize("raw", ["", "   ", "[1, 2]", "{not json}", "nothing"])
def test_parse_failures_return_none(raw: str) -> None:
    assert parse_json_response(raw) is None
