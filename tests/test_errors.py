from quotelex import BufferOverrunError, ParseError


def test_render_points_caret_at_position() -> None:
    err = ParseError("bad", "trailing\\", 8)
    assert err.render() == "trailing\\\n        ^"


def test_render_clamps_before_first_code_point() -> None:
    err = BufferOverrunError("Buffer overrun while parsing args", "abc", -1)
    assert err.render() == "abc\n^"


def test_render_empty_input() -> None:
    assert ParseError("bad", "", -1).render() == "^"


def test_str_includes_position() -> None:
    err = ParseError("bad thing", "abc", 2)
    assert str(err) == "bad thing (at position 2)"
    assert "input='abc'" in repr(err)


def test_render_mirrors_tabs_before_caret() -> None:
    err = ParseError("bad", "a\tb\\", 3)
    assert err.render() == "a\tb\\\n \t ^"


def test_render_uses_two_cells_for_wide_characters() -> None:
    err = ParseError("bad", "名前 🎉x\\", 4)
    assert err.render() == "名前 🎉x\\\n" + " " * 7 + "^"
