"""
Format - template compiler and renderer used by Log instances

A template is plain text with placeholder tokens:

    ${name}             placeholder without argument
    ${name:arg1:arg2}   placeholder with argument "arg1:arg2"
    ${prefix}           prefix of the logger, always available
    %s                  place of the message, filled by the logger

Tokens with names that are not registered are left in the output as is.

Usage:
    from templog.format.format import Format

    format = Format("[${level}] ${file}:${line} %s")
    format.set_placeholder("pid", lambda level, argument: str(os.getpid()))
    header = format.render(Level.INFO, prefix="worker")
"""

import re
from abc import ABC, abstractmethod
from typing import NamedTuple, Optional

from beartype.typing import Dict, List, Mapping

from templog.call_site import CallSite
from templog.constants import DEFAULT_FORMATTING, PREFIX_TOKEN
from templog.format.placeholders import DEFAULT_PLACEHOLDERS, Placeholder, PlaceholderCache, placeholder_cache
from templog.format.rwlock import ReadWriteLock
from templog.level import Level

PLACEHOLDER_PATTERN = re.compile(r"\$\{([A-Za-z0-9_]+)(?::([^}]+))?\}")


class Formatter(ABC):
    """
    Renderer of the header part of log records, implemented by Format.
    Custom renderers should inherit from this class.
    """

    @abstractmethod
    def set_placeholders(self, placeholders: Mapping[str, Placeholder]) -> None:
        raise NotImplementedError

    @abstractmethod
    def set_placeholder(self, name: str, placeholder: Placeholder) -> None:
        raise NotImplementedError

    @abstractmethod
    def get_placeholders(self) -> Dict[str, Placeholder]:
        raise NotImplementedError

    @abstractmethod
    def render(self, level: Level, prefix: str = "", call_site: Optional[CallSite] = None) -> str:
        """Return the template for a record of given level, the message goes to its first `%s`"""
        raise NotImplementedError

    @abstractmethod
    def reset(self) -> None:
        raise NotImplementedError


class Replacement(NamedTuple):
    value: str
    name: str
    placeholder: Placeholder
    argument: str


class Format(Formatter):
    """
    Template renderer with lazily compiled placeholder replacements.

    The template is scanned once, on the first render after construction or
    after any change of placeholders; every token with a registered name
    becomes one replacement. Rendering runs the replacements in order, each
    one substituting the first occurrence of its token text.

    Renders may run from many threads at once, placeholder changes and
    compilation are exclusive.
    """

    def __init__(
        self,
        raw_format: str = DEFAULT_FORMATTING,
        placeholders: Optional[Mapping[str, Placeholder]] = None,
        cache: Optional[PlaceholderCache] = None,
    ):
        """
        Initialize format.

        Args:
            raw_format: Template text
            placeholders: Placeholders by name (default: level, line, file and time)
            cache: Memo for cacheable placeholders (default: process-wide cache)
        """
        self.raw_format = raw_format
        self._lock = ReadWriteLock()
        self._cache = cache if cache is not None else placeholder_cache
        self._compiled = False
        self._replacements: List[Replacement] = []
        self._placeholders: Dict[str, Placeholder] = {}
        self.set_placeholders(DEFAULT_PLACEHOLDERS if placeholders is None else placeholders)

    def __repr__(self):
        return f"{type(self).__name__}({self.raw_format!r})"

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def replacements(self) -> List[Replacement]:
        """Copy of the compiled replacements, empty until first render"""
        with self._lock.read_lock():
            return list(self._replacements)

    def set_placeholders(self, placeholders: Mapping[str, Placeholder]) -> None:
        """Replace all placeholders, names missing in `placeholders` are dropped"""
        with self._lock.write_lock():
            self._placeholders = dict(placeholders)
            self._invalidate()

    def set_placeholder(self, name: str, placeholder: Placeholder) -> None:
        """Add or replace a single placeholder, keeping the others"""
        with self._lock.write_lock():
            self._placeholders[name] = placeholder
            self._invalidate()

    def get_placeholders(self) -> Dict[str, Placeholder]:
        with self._lock.read_lock():
            return dict(self._placeholders)

    def reset(self) -> None:
        """Drop compiled replacements, next render compiles the template again"""
        with self._lock.write_lock():
            self._reset()

    def render(self, level: Level, prefix: str = "", call_site: Optional[CallSite] = None) -> str:
        rendered = self.raw_format
        for replacement in self._compiled_replacements():
            value = self._run(replacement, level, call_site)
            rendered = rendered.replace(replacement.value, value, 1)

        if prefix:
            return rendered.replace(PREFIX_TOKEN, prefix + " ")
        return rendered.replace(PREFIX_TOKEN, "")

    def _run(self, replacement: Replacement, level: Level, call_site: Optional[CallSite]) -> str:
        placeholder = replacement.placeholder
        if getattr(placeholder, "uses_call_site", False):
            return str(placeholder(level, replacement.argument, call_site=call_site))
        if getattr(placeholder, "cacheable", False):
            return self._cache.get_or_compute(replacement.name, placeholder, level, replacement.argument)
        return str(placeholder(level, replacement.argument))

    def _compiled_replacements(self) -> List[Replacement]:
        # compile swaps in a new list, so the returned one is never mutated
        with self._lock.read_lock():
            if self._compiled:
                return self._replacements

        with self._lock.write_lock():
            if not self._compiled:
                self._compile()
            return self._replacements

    def _compile(self):
        replacements = []
        for match in PLACEHOLDER_PATTERN.finditer(self.raw_format):
            name = match.group(1)
            placeholder = self._placeholders.get(name)
            if placeholder is None:
                # unknown placeholder stays in the output verbatim
                continue
            replacements.append(Replacement(match.group(0), name, placeholder, match.group(2) or ""))

        self._replacements = replacements
        self._compiled = True

    def _reset(self):
        self._replacements = []
        self._compiled = False

    def _invalidate(self):
        self._reset()
        self._cache.invalidate()
