#!/usr/bin/env python3
# quotelex/interface/completion.py
from __future__ import annotations

"""
Command line completion utilities.

Splits a partially typed line into finished tokens plus the prefix that is
currently being typed, and filters candidate words against that prefix.
Built on the lenient tokenizer, so unterminated quotes are simply part of the
prefix.
"""

from typing import Iterable

from .tokenizer import CHAR_BACKSLASH, CHAR_DOUBLE_QUOTE, tokenize_lenient


def split_current_token(raw_input: str) -> tuple[list[str], str]:
    """
    Return (parts, current_prefix).

    Behavior:
      - Empty input -> ([], "").
      - Trailing whitespace yields an empty last token (a new one is starting).
      - A dangling trailing backslash is ignored (the user is mid-escape).
    """
    if not raw_input:
        return [], ""

    if _ends_with_dangling_escape(raw_input):
        raw_input = raw_input[:-1]
    parts = tokenize_lenient(raw_input)
    return parts, parts[-1]


def _ends_with_dangling_escape(text: str) -> bool:
    # An odd run of trailing backslashes leaves the last one unpaired.
    run = len(text) - len(text.rstrip(CHAR_BACKSLASH))
    return run % 2 == 1


def suggest(text_before_cursor: str, candidates: Iterable[str]) -> list[str]:
    """Return sorted, unique candidates that start with the current prefix."""
    _, current_prefix = split_current_token(text_before_cursor)
    return sorted({word for word in candidates if word.startswith(current_prefix)})


def quote_token(token: str) -> str:
    """
    Render a token so that tokenize() gives it back unchanged.

    Plain words pass through; anything with whitespace, quotes or backslashes
    (or the empty string) is double-quoted with inner '"' and '\\' escaped.
    """
    if token and not any(ch.isspace() or ch in "'\"\\" for ch in token):
        return token
    escaped = token.replace(CHAR_BACKSLASH, CHAR_BACKSLASH * 2)
    escaped = escaped.replace(CHAR_DOUBLE_QUOTE, CHAR_BACKSLASH + CHAR_DOUBLE_QUOTE)
    return f'"{escaped}"'
