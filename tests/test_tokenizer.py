from concurrent.futures import ThreadPoolExecutor

import pytest

from quotelex import BufferOverrunError, ParseError, tokenize, tokenize_lenient
from quotelex.interface import tokenizer


def test_empty_input_yields_no_tokens() -> None:
    assert tokenize("") == []


def test_lenient_empty_input_yields_one_blank_token() -> None:
    assert tokenize_lenient("") == [""]


def test_lenient_matches_strict_for_non_empty_input() -> None:
    for text in ("a b c", "'x y' z", "a "):
        assert tokenize_lenient(text) == tokenize(text)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("a b c", ["a", "b", "c"]),
        ("'hello world' foo", ["hello world", "foo"]),
        ('"hello world" foo', ["hello world", "foo"]),
        ("a\\ b", ["a b"]),
        ('"unterminated', ["unterminated"]),
        ("'unterminated single", ["unterminated single"]),
        ("a   \t\n  b", ["a", "b"]),
        ("   leading", ["leading"]),
        ("it's", ["it's"]),
        ('a"b c"', ['a"b', 'c"']),
        ('"it\'s"', ["it's"]),
        ("'say \"hi\"'", ['say "hi"']),
        ('"say \\"hi\\""', ['say "hi"']),
        ("'a\\'b'", ["a'b"]),
        ("a\\\\b", ["a\\b"]),
        ("\\'quoted\\'", ["'quoted'"]),
        ("'ab'cd", ["ab", "cd"]),
        ("'' x", ["", "x"]),
        ('""', [""]),
        ("héllo wörld 🎉", ["héllo", "wörld", "🎉"]),
        ("a　b c", ["a", "b", "c"]),
    ],
)
def test_tokenize(text: str, expected: list[str]) -> None:
    assert tokenize(text) == expected


def test_trailing_whitespace_ends_with_empty_token() -> None:
    assert tokenize("a ") == ["a", ""]
    assert tokenize("   ") == [""]


def test_whitespace_runs_do_not_produce_empty_tokens() -> None:
    tokens = tokenize("one    two \t\t three")
    assert tokens == ["one", "two", "three"]
    assert "" not in tokens


def test_trailing_backslash_raises_buffer_overrun() -> None:
    with pytest.raises(BufferOverrunError) as excinfo:
        tokenize("trailing\\")
    err = excinfo.value
    assert isinstance(err, ParseError)
    assert isinstance(err, ValueError)
    assert err.position == 8
    assert err.input == "trailing\\"
    assert err.message == "Buffer overrun while parsing args"


def test_lone_backslash_reports_position_zero() -> None:
    with pytest.raises(BufferOverrunError) as excinfo:
        tokenize("\\")
    assert excinfo.value.position == 0


def test_trailing_backslash_inside_quotes_raises() -> None:
    with pytest.raises(BufferOverrunError) as excinfo:
        tokenize('"abc\\')
    assert excinfo.value.position == 4


def test_lenient_still_raises_on_trailing_backslash() -> None:
    with pytest.raises(BufferOverrunError):
        tokenize_lenient("x\\")


def test_round_trip_of_plain_words() -> None:
    text = "  deploy   --force\tservice-a  v1.2.3 "
    tokens = [t for t in tokenize(text) if t]
    assert tokenize(" ".join(tokens)) == tokens


def test_cursor_rejects_reads_past_end() -> None:
    state = tokenizer._TokenizerState("")
    assert not state.has_more()
    with pytest.raises(BufferOverrunError) as excinfo:
        state.peek()
    assert excinfo.value.position == -1


def test_quote_mismatch_is_reported_as_parse_error() -> None:
    state = tokenizer._TokenizerState("'abc'")
    with pytest.raises(ParseError) as excinfo:
        tokenizer._parse_quoted(state, '"', [])
    assert not isinstance(excinfo.value, BufferOverrunError)
    assert excinfo.value.position == 0


def test_concurrent_calls_are_independent() -> None:
    inputs = [f"cmd-{i} 'arg {i}' x\\ {i}" for i in range(50)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(tokenize, inputs))
    for i, tokens in enumerate(results):
        assert tokens == [f"cmd-{i}", f"arg {i}", f"x {i}"]
