#!/usr/bin/env python3
# quotelex/interface/__init__.py
from __future__ import annotations

"""
Tokenizer and interactive console interface.

Provides:
- Quote-aware tokenizer (strict and lenient entry points) and its error types.
- Completion helpers built on the lenient tokenizer.
- CLI frontends with history and completion (prompt_toolkit / readline / plain).
"""

from .errors import ParseError, BufferOverrunError
from .tokenizer import tokenize, tokenize_lenient

# Completion before cli (cli depends on it)
from .completion import split_current_token, suggest, quote_token

from .cli import (
    BaseCLI,
    PromptToolkitCLI,
    ReadlineCLI,
    TokenHistory,
    make_cli,
    process_line,
    render_tokens,
    run_repl,
)

__all__ = [
    # errors
    "ParseError",
    "BufferOverrunError",
    # tokenizer
    "tokenize",
    "tokenize_lenient",
    # completion
    "split_current_token",
    "suggest",
    "quote_token",
    # cli
    "BaseCLI",
    "PromptToolkitCLI",
    "ReadlineCLI",
    "TokenHistory",
    "make_cli",
    "process_line",
    "render_tokens",
    "run_repl",
]
