import io
import logging

from quotelex.ui import ANSI, ColorizingStreamHandler, PlainFormatter, colorize, format_table, init_logger, strip_ansi


def test_colorize_and_strip() -> None:
    text = colorize("hi", "red", "bold")
    assert text.startswith(ANSI["red"] + ANSI["bold"])
    assert text.endswith(ANSI["reset"])
    assert strip_ansi(text) == "hi"
    assert colorize("hi", "no-such-style") == "hi"


def test_format_table() -> None:
    table = format_table([[1, "a"]], headers=["#", "Token"])
    assert table.splitlines() == [
        "-------------",
        "| # | Token |",
        "| - | ----- |",
        "| 1 | a     |",
        "-------------",
    ]


def test_format_table_ignores_ansi_width() -> None:
    table = format_table([[colorize("ab", "red")], ["abc"]])
    assert strip_ansi(table).splitlines()[1] == "| ab  |"


def test_stream_handler_strips_ansi_when_not_a_tty() -> None:
    stream = io.StringIO()
    handler = ColorizingStreamHandler(stream=stream)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    record = logging.LogRecord("t", logging.WARNING, __file__, 1, colorize("hi", "red"), None, None)
    handler.emit(record)
    assert stream.getvalue() == "[WARNING] hi\n"


def test_plain_formatter_strips_ansi() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "%s", (colorize("x", "green"),), None)
    assert PlainFormatter("%(message)s").format(record) == "x"


def test_init_logger_is_idempotent_and_writes_file(tmp_path) -> None:
    logfile = tmp_path / "quotelex.log"
    logger = init_logger("quotelex.test.init", level="DEBUG", logfile=logfile)
    try:
        again = init_logger("quotelex.test.init", level=logging.INFO, logfile=logfile)
        assert again is logger
        assert len(logger.handlers) == 2
        assert logger.level == logging.INFO
        logger.info(colorize("hello", "red"))
        for handler in logger.handlers:
            handler.flush()
        assert logfile.read_text(encoding="utf-8").rstrip().endswith("[INFO] quotelex.test.init: hello")
    finally:
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
