import re

from beartype.typing import Tuple

from templog.constants import MESSAGE_MARKER

ANSI_ESCAPE_PATTERN = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")


def sprint(*values) -> str:
    """
    Join values into a message body.

    Values are converted with str() and concatenated, a space is put between
    two neighbours only when neither of them is a string.

    Example:
        sprint("took ", 3, 4, "ms") == "took 3 4ms"
    """
    parts = []
    for index, value in enumerate(values):
        if index and not isinstance(value, str) and not isinstance(values[index - 1], str):
            parts.append(" ")
        parts.append(str(value))
    return "".join(parts)


def sprintf(format: str, values: Tuple) -> str:
    """printf-style message body, the format is used verbatim when there are no values"""
    if not values:
        return format
    return format % values


def get_indentation(rendered: str) -> int:
    """Visible width of the rendered template before the message, on its last line"""
    head = rendered.split(MESSAGE_MARKER, 1)[0]
    last_line = head.rsplit("\n", 1)[-1]
    return len(ANSI_ESCAPE_PATTERN.sub("", last_line))


def indent_lines(message: str, indentation: int) -> str:
    return message.replace("\n", "\n" + " " * indentation)
