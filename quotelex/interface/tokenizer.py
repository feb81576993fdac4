#!/usr/bin/env python3
# quotelex/interface/tokenizer.py
from __future__ import annotations

"""
Quote-aware argument tokenizer.

Rough grammar (a greedy scanner with one code point of lookahead, not a
proper CFG):

    WHITESPACE   := str.isspace()
    CHAR         := any code point
    ESCAPE       := '\\' CHAR
    QUOTE        := "'" | '"'
    UNQUOTED_ARG := (CHAR | ESCAPE)+ WHITESPACE
    QUOTED_ARG   := QUOTE (CHAR | ESCAPE)* QUOTE?
    ARGS         := ((UNQUOTED_ARG | QUOTED_ARG) WHITESPACE+)+

Python strings index by code point, so the cursor and every reported
position count Unicode scalar values.

Malformed input is tolerated: a missing closing quote ends the argument at
end of input. Only a read past the end of the buffer (a trailing backslash)
raises.
"""

from .errors import BufferOverrunError, ParseError

CHAR_BACKSLASH = "\\"
CHAR_SINGLE_QUOTE = "'"
CHAR_DOUBLE_QUOTE = '"'

_QUOTES = (CHAR_SINGLE_QUOTE, CHAR_DOUBLE_QUOTE)


class _TokenizerState:
    """Read cursor over one input string. Lives for a single tokenize call."""

    __slots__ = ("buffer", "index")

    def __init__(self, buffer: str) -> None:
        self.buffer = buffer
        self.index = -1

    def has_more(self) -> bool:
        return self.index + 1 < len(self.buffer)

    def peek(self) -> str:
        if not self.has_more():
            raise self.overrun()
        return self.buffer[self.index + 1]

    def next(self) -> str:
        if not self.has_more():
            raise self.overrun()
        self.index += 1
        return self.buffer[self.index]

    def error(self, message: str) -> ParseError:
        return ParseError(message, self.buffer, self.index)

    def overrun(self) -> BufferOverrunError:
        return BufferOverrunError("Buffer overrun while parsing args", self.buffer, self.index)


def tokenize(text: str) -> list[str]:
    """
    Split `text` into arguments, respecting quotes and backslash escapes.

    Returns [] for empty input. Raises BufferOverrunError when the input ends
    with a dangling backslash.
    """
    if not text:
        return []

    state = _TokenizerState(text)
    tokens: list[str] = []
    while state.has_more():
        _skip_whitespace(state)
        tokens.append(_next_arg(state))
    return tokens


def tokenize_lenient(text: str) -> list[str]:
    """Like tokenize(), but empty input yields a single empty argument."""
    if not text:
        return [""]
    return tokenize(text)


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------

def _skip_whitespace(state: _TokenizerState) -> None:
    while state.has_more() and state.peek().isspace():
        state.next()


def _next_arg(state: _TokenizerState) -> str:
    # Whitespace may have consumed the rest of the input: that is an empty arg.
    chars: list[str] = []
    if state.has_more():
        first = state.peek()
        if first in _QUOTES:
            _parse_quoted(state, first, chars)
        else:
            _parse_unquoted(state, chars)
    return "".join(chars)


def _parse_quoted(state: _TokenizerState, quote: str, chars: list[str]) -> None:
    opening = state.next()
    if opening != quote:
        raise state.error(
            f"Actual next character {opening!r} did not match expected quotation character {quote!r}")

    while state.has_more():
        current = state.peek()
        if current == quote:
            state.next()
            return
        if current == CHAR_BACKSLASH:
            _parse_escape(state, chars)
        else:
            chars.append(state.next())


def _parse_unquoted(state: _TokenizerState, chars: list[str]) -> None:
    while state.has_more():
        current = state.peek()
        if current.isspace():
            return
        if current == CHAR_BACKSLASH:
            _parse_escape(state, chars)
        else:
            chars.append(state.next())


def _parse_escape(state: _TokenizerState, chars: list[str]) -> None:
    state.next()  # backslash
    chars.append(state.next())
