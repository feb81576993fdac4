#!/usr/bin/env python3
# quotelex/__main__.py
from __future__ import annotations
"""
Console entry point.

    quotelex "a 'b c' d\\ e"        one-shot: print the tokens of each LINE
    quotelex --json "a b"           one-shot: print a JSON array per LINE
    quotelex                        interactive loop (exit/quit/Ctrl-D to leave)
"""

import argparse
import json
import sys
from typing import Sequence

from quotelex import __version__
from quotelex.config import load_config
from quotelex.interface import (
    ParseError,
    TokenHistory,
    make_cli,
    process_line,
    run_repl,
    tokenize,
    tokenize_lenient,
)
from quotelex.ui import colorize, init_logger, print_line

EXIT_CONFIG_ERROR = 1
EXIT_PARSE_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="quotelex",
        description="Split command lines into arguments, honoring quotes and backslash escapes.",
    )
    parser.add_argument("lines", nargs="*", metavar="LINE",
                        help="line(s) to tokenize; omit to start the interactive loop")
    parser.add_argument("--lenient", action=argparse.BooleanOptionalAction, default=None,
                        help="empty input yields one empty argument (overrides LENIENT)")
    parser.add_argument("--json", action="store_true",
                        help="print each result as a JSON array")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _run_json(lines: Sequence[str], *, lenient: bool) -> int:
    status = 0
    for line in lines:
        try:
            tokens = tokenize_lenient(line) if lenient else tokenize(line)
        except ParseError as exc:
            print_line(colorize(f"[ERROR] {exc.message}", "red"), file=sys.stderr)
            print_line(exc.render(), file=sys.stderr)
            status = EXIT_PARSE_ERROR
            continue
        print_line(json.dumps(tokens, ensure_ascii=False))
    return status


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config()
    except ValueError as exc:
        print_line(colorize(f"[FAILED] Load configuration ({exc})", "red"), file=sys.stderr)
        return EXIT_CONFIG_ERROR

    lenient = config.lenient if args.lenient is None else args.lenient
    logger = init_logger(
        "quotelex",
        level=args.log_level or config.log_level or "WARNING",
        logfile=config.log_file_path,
    )
    logger.debug("Configuration: %s", config)

    if args.lines:
        if args.json:
            return _run_json(args.lines, lenient=lenient)
        results = [process_line(line, lenient=lenient) for line in args.lines]
        return EXIT_PARSE_ERROR if any(r is None for r in results) else 0

    cli = make_cli(
        TokenHistory(config.max_history_tokens),
        prompt=config.prompt,
        history_file=config.history_file_path,
        enable_completion=config.enable_completion,
    )
    logger.debug("Using %s frontend", type(cli).__name__)
    return run_repl(cli, lenient=lenient)


if __name__ == "__main__":
    sys.exit(main())
