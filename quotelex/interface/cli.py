#!/usr/bin/env python3
# quotelex/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) prompt_toolkit (rich completion + history)
    2) readline (basic completion + history)
    3) plain input (last resort)

Every frontend completes from the tokens seen in earlier lines.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from quotelex.interface.completion import quote_token, split_current_token, suggest
from quotelex.interface.errors import ParseError
from quotelex.interface.tokenizer import tokenize, tokenize_lenient
from quotelex.ui import colorize, format_table, print_line

logger = logging.getLogger("quotelex.cli")

EXIT_WORDS: tuple[str, ...] = ("exit", "quit")


class TokenHistory:
    """Bounded, insertion-ordered set of tokens seen so far."""

    def __init__(self, max_tokens: int = 1000) -> None:
        self.max_tokens = max_tokens
        self._tokens: dict[str, None] = {}

    def add(self, tokens: Iterable[str]) -> None:
        for token in tokens:
            if not token:
                continue
            self._tokens.pop(token, None)
            self._tokens[token] = None
        while len(self._tokens) > self.max_tokens:
            del self._tokens[next(iter(self._tokens))]

    def __iter__(self):
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def complete(self, text_before_cursor: str) -> list[str]:
        """Return quoted candidates for the token under the cursor."""
        return [quote_token(word) for word in suggest(text_before_cursor, self)]


def render_tokens(tokens: list[str]) -> str:
    """Render tokens as an index/token table; tokens shown with repr()."""
    if not tokens:
        return "(no tokens)"
    return format_table([[i, repr(t)] for i, t in enumerate(tokens)], headers=["#", "Token"])


def process_line(line: str, *, lenient: bool = False) -> Optional[list[str]]:
    """
    Tokenize one line and print the result table.
    Returns the tokens, or None when the line could not be parsed.
    """
    tokenizer: Callable[[str], list[str]] = tokenize_lenient if lenient else tokenize
    try:
        tokens = tokenizer(line)
    except ParseError as exc:
        logger.warning("Parse error: %s", exc)
        print_line(colorize(f"[ERROR] {exc.message}", "red"))
        print_line(exc.render())
        return None
    logger.debug("Tokenized %r into %d token(s)", line, len(tokens))
    print_line(render_tokens(tokens))
    return tokens


class BaseCLI:
    """
    Plain `input()` frontend and base interface for the others.

    This base also provides context manager support to guarantee teardown.
    """

    def __init__(self, history: TokenHistory, *, prompt: str = "> ") -> None:
        self.history = history
        self.prompt = prompt

    def setup(self) -> None:
        pass

    def get_line(self) -> str:
        return input(self.prompt)

    def teardown(self) -> None:
        pass

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except Exception:
            logger.debug("Frontend teardown failed", exc_info=True)


# ===== Preferred: prompt_toolkit =====
class PromptToolkitCLI(BaseCLI):
    """Rich line editor with history and live completion."""

    def __init__(self, history: TokenHistory, *, prompt: str = "> ",
                 history_file: Optional[Path] = None, enable_completion: bool = True) -> None:
        super().__init__(history, prompt=prompt)
        from prompt_toolkit import PromptSession
        from prompt_toolkit.completion import Completer, Completion
        from prompt_toolkit.history import FileHistory, InMemoryHistory

        token_history = history

        class _Completer(Completer):
            def get_completions(self, document, complete_event):
                text_before_cursor = document.text_before_cursor
                # Replace the raw text of the current token, quotes included.
                _, current_prefix = split_current_token(text_before_cursor)
                replace_len = _raw_token_length(text_before_cursor, current_prefix)
                for word in token_history.complete(text_before_cursor):
                    yield Completion(word, start_position=-replace_len)

        self.history_file = history_file
        line_history = FileHistory(str(history_file)) if history_file else InMemoryHistory()
        self._session = PromptSession(
            history=line_history,
            completer=_Completer() if enable_completion else None,
            complete_while_typing=enable_completion,
        )

    def setup(self) -> None:
        if self.history_file is not None:
            self.history_file.parent.mkdir(parents=True, exist_ok=True)
            self.history_file.touch(exist_ok=True)

    def get_line(self) -> str:
        return self._session.prompt(self.prompt)


# ===== Fallback: readline =====
class ReadlineCLI(BaseCLI):
    """Fallback editor with basic completion and history."""

    def __init__(self, history: TokenHistory, *, prompt: str = "> ",
                 history_file: Optional[Path] = None, enable_completion: bool = True) -> None:
        super().__init__(history, prompt=prompt)
        import readline

        self.readline = readline
        self.history_file = history_file
        self.enable_completion = enable_completion

    def setup(self) -> None:
        if self.history_file is not None:
            try:
                self.readline.read_history_file(str(self.history_file))
            except OSError:
                logger.debug("No readable history at %s", self.history_file)

        if not self.enable_completion:
            return

        # Whole-line completion; the tokenizer decides where tokens start.
        self.readline.set_completer_delims("")

        def _complete(text_fragment: str, state_index: int) -> Optional[str]:
            buffer_text = self.readline.get_line_buffer()
            _, current_prefix = split_current_token(buffer_text)
            head = buffer_text[:len(buffer_text) - _raw_token_length(buffer_text, current_prefix)]
            matches = [head + word for word in self.history.complete(buffer_text)]
            return matches[state_index] if state_index < len(matches) else None

        self.readline.set_completer(_complete)
        self.readline.parse_and_bind("tab: complete")

    def teardown(self) -> None:
        if self.history_file is None:
            return
        try:
            self.readline.write_history_file(str(self.history_file))
        except OSError:
            logger.warning("Could not write history to %s", self.history_file)


def _raw_token_length(text_before_cursor: str, current_prefix: str) -> int:
    """
    Length of the raw text (quotes/escapes included) that produced the
    current prefix: everything after the last unescaped, unquoted whitespace.
    """
    if not current_prefix and (not text_before_cursor or text_before_cursor[-1].isspace()):
        return 0
    for start in range(len(text_before_cursor)):
        if start:
            previous = start - 1
            if not text_before_cursor[previous].isspace() or _is_escaped(text_before_cursor, previous):
                continue
        tail = text_before_cursor[start:]
        if tail and not tail[0].isspace() and split_current_token(tail)[0] == [current_prefix]:
            return len(tail)
    return len(current_prefix)


def _is_escaped(text: str, index: int) -> bool:
    run = 0
    while index - run - 1 >= 0 and text[index - run - 1] == "\\":
        run += 1
    return run % 2 == 1


def make_cli(history: TokenHistory, *, prompt: str = "> ",
             history_file: Optional[Path] = None, enable_completion: bool = True) -> BaseCLI:
    """
    Factory to select the best available CLI frontend at runtime.
    """
    try:
        return PromptToolkitCLI(history, prompt=prompt, history_file=history_file,
                                enable_completion=enable_completion)
    except Exception:
        # Missing package or no usable console (e.g. Windows without a screen buffer)
        logger.debug("prompt_toolkit unavailable, trying readline", exc_info=True)
    try:
        return ReadlineCLI(history, prompt=prompt, history_file=history_file,
                           enable_completion=enable_completion)
    except ImportError:
        logger.debug("readline unavailable, using plain input")
    return BaseCLI(history, prompt=prompt)


def run_repl(cli: BaseCLI, *, lenient: bool = False) -> int:
    """Read lines until exit/quit/EOF, printing the tokens of each."""
    with cli:
        while True:
            try:
                line = cli.get_line()
            except (EOFError, KeyboardInterrupt):
                print_line()
                return 0
            if line.strip() in EXIT_WORDS:
                return 0
            tokens = process_line(line, lenient=lenient)
            if tokens:
                cli.history.add(tokens)
