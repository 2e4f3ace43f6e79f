import pytest

from templog.log.message import get_indentation, indent_lines, sprint, sprintf


@pytest.mark.parametrize(
    "values, expected",
    [
        (("took ", 3, 4, "ms"), "took 3 4ms"),
        (("a", "b"), "ab"),
        ((1, 2.5, None), "1 2.5 None"),
        (("x", 1, "y"), "x1y"),
        ((), ""),
    ],
)
def test_sprint(values, expected):
    assert sprint(*values) == expected


def test_sprintf():
    assert sprintf("%s=%d", ("retries", 3)) == "retries=3"
    assert sprintf("100%", ()) == "100%"
    with pytest.raises(TypeError):
        sprintf("%d", ("x",))


@pytest.mark.parametrize(
    "rendered, expected",
    [
        ("[INFO] %s", 7),
        ("\x1b[48;5;2mblah: %s", 6),
        ("\x1b[1m[WARN]\x1b[0m %s", 7),
        ("header\nline: %s", 6),
        ("no marker", 9),
        ("%s", 0),
    ],
)
def test_get_indentation(rendered, expected):
    assert get_indentation(rendered) == expected


def test_indent_lines():
    assert indent_lines("a\nb\nc", 2) == "a\n  b\n  c"
    assert indent_lines("single", 4) == "single"
