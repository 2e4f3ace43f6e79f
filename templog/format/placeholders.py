"""
Placeholders - named functions filling `${name}` and `${name:arg}` tokens

A placeholder is any callable taking the level of the record being rendered
and the raw argument text of the token, returning the replacement text:

    def placeholder(level: Level, argument: str) -> str

Built-in placeholders:
- level: `${level:FORMAT:ALIGNMENT:SHORT}`, e.g. `${level:[%s]:right:true}`
- line: line number of the logging call
- file: file name of the logging call, `${file:long}` for the full path
- time: current time, `${time:timestamp}` or `${time:%H\\:%M}` (strftime layout)

Arguments are split on `:`, use `\\:` to put a literal colon into a field.

Placeholders which need the location of the logging call are marked with
`uses_call_site` and receive it as the `call_site` keyword argument, the
location is captured by the logger, placeholders never walk the stack.
"""

import os
import re
import time
from threading import Lock
from types import MappingProxyType
from typing import Any, Callable, Hashable, Optional, Tuple

from beartype.typing import Dict

from templog.call_site import CallSite
from templog.constants import (
    LEVEL_COLUMN_WIDTH,
    LEVEL_COLUMN_WIDTH_SHORT,
    MESSAGE_MARKER,
    PLACEHOLDER_TIME_DEFAULT_LAYOUT,
    PLACEHOLDER_UNKNOWN_VALUE,
)
from templog.level import Level

Placeholder = Callable[[Level, str], str]

ARGUMENT_SEPARATOR = re.compile(r"(?<!\\):")
ESCAPED_SEPARATOR = "\\:"
TRUE_VALUES = ("true", "yes", "1")


def uses_call_site(placeholder):
    """Mark placeholder as one that receives the `call_site` keyword argument"""
    placeholder.uses_call_site = True
    return placeholder


def cacheable(placeholder):
    """Mark placeholder whose output depends only on (level, argument)"""
    placeholder.cacheable = True
    return placeholder


def unescape_argument(argument: str) -> str:
    return argument.replace(ESCAPED_SEPARATOR, ":")


def split_argument(argument: str) -> Tuple[str, ...]:
    """
    Split placeholder argument on unescaped colons.

    Example:
        split_argument("[%s]\\::right:true") == ("[%s]:", "right", "true")
    """
    return tuple(unescape_argument(field) for field in ARGUMENT_SEPARATOR.split(argument))


class PlaceholderCache:
    """
    Process-wide memo for deterministic placeholder work.

    Stores outputs of placeholders marked `cacheable` keyed by
    (name, placeholder, level, argument) and results of argument splitting.
    Any change of a placeholder registry must call invalidate(), the cache is
    always dropped as a whole.
    """

    def __init__(self, max_size: int = 1024):
        self.max_size = max_size
        self._values: Dict[Hashable, str] = {}
        self._arguments: Dict[str, Tuple[str, ...]] = {}
        self._lock = Lock()
        self._hit_count = 0
        self._miss_count = 0

    def _store(self, storage: dict, key: Hashable, value: Any) -> None:
        if len(storage) >= self.max_size:
            # drop the oldest entry
            del storage[next(iter(storage))]
        storage[key] = value

    def get_or_compute(self, name: str, placeholder: Placeholder, level: Level, argument: str) -> str:
        key = (name, placeholder, level, argument)
        with self._lock:
            if key in self._values:
                self._hit_count += 1
                return self._values[key]
            self._miss_count += 1

        value = str(placeholder(level, argument))

        with self._lock:
            self._store(self._values, key, value)
        return value

    def split_argument(self, argument: str) -> Tuple[str, ...]:
        with self._lock:
            fields = self._arguments.get(argument)
        if fields is None:
            fields = split_argument(argument)
            with self._lock:
                self._store(self._arguments, argument, fields)
        return fields

    def invalidate(self) -> None:
        with self._lock:
            self._values.clear()
            self._arguments.clear()

    def get_stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "hit_count": self._hit_count,
                "miss_count": self._miss_count,
                "size": len(self._values) + len(self._arguments),
            }


placeholder_cache = PlaceholderCache()


@cacheable
def placeholder_level(level: Level, argument: str) -> str:
    """
    Level of the record.

    Argument fields: format (default "%s"), alignment ("left", "right" or empty)
    and short flag ("true", "yes", "1"). With an alignment the level name is
    padded to a column of 7 characters, 5 for short names.

    Example:
        placeholder_level(Level.DEBUG, "[%s]:left") == "[DEBUG]  "
    """
    level = Level(level)
    fields = placeholder_cache.split_argument(argument) + ("", "", "")
    layout, alignment, short = fields[0] or MESSAGE_MARKER, fields[1], fields[2]

    if short.lower() in TRUE_VALUES:
        value, width = level.to_string_short(), LEVEL_COLUMN_WIDTH_SHORT
    else:
        value, width = level.to_string(), LEVEL_COLUMN_WIDTH

    rendered = layout.replace(MESSAGE_MARKER, value, 1)
    padding = " " * max(width - len(value), 0)
    if alignment == "left":
        return rendered + padding
    if alignment == "right":
        return padding + rendered
    return rendered


@uses_call_site
def placeholder_line(_level: Level, _argument: str, call_site: Optional[CallSite] = None) -> str:
    if call_site is None:
        return PLACEHOLDER_UNKNOWN_VALUE
    return str(call_site.lineno)


@uses_call_site
def placeholder_file(_level: Level, argument: str, call_site: Optional[CallSite] = None) -> str:
    if call_site is None:
        return PLACEHOLDER_UNKNOWN_VALUE
    if argument == "long":
        return call_site.filename
    return os.path.basename(call_site.filename)


def placeholder_time(_level: Level, argument: str) -> str:
    if argument == "timestamp":
        return str(int(time.time()))
    layout = unescape_argument(argument) or PLACEHOLDER_TIME_DEFAULT_LAYOUT
    return time.strftime(layout)


DEFAULT_PLACEHOLDERS = MappingProxyType(
    {
        "level": placeholder_level,
        "line": placeholder_line,
        "file": placeholder_file,
        "time": placeholder_time,
    }
)
