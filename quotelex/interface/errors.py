#!/usr/bin/env python3
# quotelex/interface/errors.py
from __future__ import annotations

"""
Tokenizer error types.

ParseError carries the full input and the cursor position where scanning
stopped, which is enough for a caller to draw a caret under the offending
code point.
"""

import unicodedata


def _cell_padding(ch: str) -> str:
    if ch == "\t":
        return "\t"
    return "  " if unicodedata.east_asian_width(ch) in ("W", "F") else " "


class ParseError(ValueError):
    """
    Raised when an input line cannot be split into arguments.

    Attributes:
        message: Human-readable description.
        input: The complete original input string.
        position: Zero-based code point index of the cursor (-1 = nothing consumed).
    """

    def __init__(self, message: str, input: str, position: int) -> None:
        super().__init__(message)
        self.message = message
        self.input = input
        self.position = position

    def __str__(self) -> str:
        return f"{self.message} (at position {self.position})"

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(message={self.message!r}, "
                f"input={self.input!r}, position={self.position})")

    def render(self) -> str:
        """
        Return the input followed by a caret line pointing at `position`.

        The padding mirrors tabs and takes two cells for wide (CJK, emoji)
        code points, so the caret lines up on a terminal.
        """
        if not self.input:
            return "^"
        column = min(max(self.position, 0), len(self.input) - 1)
        padding = "".join(_cell_padding(ch) for ch in self.input[:column])
        return f"{self.input}\n{padding}^"


class BufferOverrunError(ParseError):
    """The cursor was asked to read past the end of the input."""
