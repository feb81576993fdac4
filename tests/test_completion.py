import pytest

from quotelex import tokenize
from quotelex.interface.completion import quote_token, split_current_token, suggest


@pytest.mark.parametrize(
    ("text", "parts", "prefix"),
    [
        ("", [], ""),
        ("foo", ["foo"], "foo"),
        ("foo ba", ["foo", "ba"], "ba"),
        ("foo ", ["foo", ""], ""),
        ('foo "hello wo', ["foo", "hello wo"], "hello wo"),
        ("foo bar\\", ["foo", "bar"], "bar"),
        ("foo a\\\\", ["foo", "a\\"], "a\\"),
        ("foo a\\ ", ["foo", "a "], "a "),
    ],
)
def test_split_current_token(text: str, parts: list[str], prefix: str) -> None:
    assert split_current_token(text) == (parts, prefix)


def test_suggest_filters_sorts_and_dedups() -> None:
    assert suggest("run g", ["go", "get", "put", "go"]) == ["get", "go"]


def test_suggest_after_whitespace_offers_everything() -> None:
    assert suggest("run ", ["b", "a"]) == ["a", "b"]


def test_suggest_inside_open_quote() -> None:
    assert suggest("open 'my f", ["my file", "my folder", "other"]) == ["my file", "my folder"]


@pytest.mark.parametrize(
    ("token", "expected"),
    [
        ("plain", "plain"),
        ("a b", '"a b"'),
        ("", '""'),
        ('say "hi"', '"say \\"hi\\""'),
        ("it's", '"it\'s"'),
    ],
)
def test_quote_token(token: str, expected: str) -> None:
    assert quote_token(token) == expected


@pytest.mark.parametrize("token", ["C:\\dir\\file", "tab\there", 'mix "of" \'all\' \\', ""])
def test_quote_token_survives_tokenize(token: str) -> None:
    assert tokenize(quote_token(token)) == [token]
