#!/usr/bin/env python3
# quotelex/__init__.py
from __future__ import annotations
"""
Quote-aware command line tokenizer.

    >>> from quotelex import tokenize
    >>> tokenize("say 'hello world' now")
    ['say', 'hello world', 'now']
"""

from quotelex.interface.errors import BufferOverrunError, ParseError
from quotelex.interface.tokenizer import tokenize, tokenize_lenient

__version__ = "0.1.0"

__all__ = [
    "tokenize",
    "tokenize_lenient",
    "ParseError",
    "BufferOverrunError",
    "__version__",
]
