"""
Log - leveled logger rendering records through a format template

Usage:
    from templog.log.logger import Log

    log = Log(level=Level.DEBUG, format=Format("[${level}] ${file}:${line} %s"))
    log.info("Operation completed in ", 1.5, "s")
    log.debugf("loaded %d items from %s", 100, path)

    db_log = log.new_child_with_prefix("db")
    db_log.warning("slow query")

Every logging method accepts `stacklevel`, wrappers around a logger should
pass `stacklevel=2` (plus one per extra layer) to keep `${file}` and `${line}`
pointing at their caller.
"""

import sys
import weakref
from abc import ABC, abstractmethod
from threading import Lock
from typing import Any, Callable, Optional

from templog.call_site import CallSite
from templog.constants import DEFAULT_FORMATTING, FATAL_EXIT_STATUS, FAULT_MAPPING, MESSAGE_MARKER
from templog.exceptions import OutputError
from templog.format.format import Format, Formatter
from templog.level import Level
from templog.log.message import get_indentation, indent_lines, sprint, sprintf
from templog.output.output import Output, SmartOutput

DEFAULT_LEVEL = Level.INFO


class Logger(ABC):
    """
    Leveled logging interface implemented by Log and Discarder.

    Libraries can keep a module variable with a Discarder and let the
    application inject a real logger:

        log: Logger = new_discarder()

        def set_log(logger: Logger):
            global log
            log = logger
    """

    @abstractmethod
    def fatal(self, *values, stacklevel: int = 1): ...

    @abstractmethod
    def fatalf(self, format: str, *values, stacklevel: int = 1): ...

    @abstractmethod
    def error(self, *values, stacklevel: int = 1): ...

    @abstractmethod
    def errorf(self, format: str, *values, stacklevel: int = 1): ...

    @abstractmethod
    def warning(self, *values, stacklevel: int = 1): ...

    @abstractmethod
    def warningf(self, format: str, *values, stacklevel: int = 1): ...

    @abstractmethod
    def print(self, *values, stacklevel: int = 1): ...

    @abstractmethod
    def printf(self, format: str, *values, stacklevel: int = 1): ...

    @abstractmethod
    def info(self, *values, stacklevel: int = 1): ...

    @abstractmethod
    def infof(self, format: str, *values, stacklevel: int = 1): ...

    @abstractmethod
    def debug(self, *values, stacklevel: int = 1): ...

    @abstractmethod
    def debugf(self, format: str, *values, stacklevel: int = 1): ...

    @abstractmethod
    def trace(self, *values, stacklevel: int = 1): ...

    @abstractmethod
    def tracef(self, format: str, *values, stacklevel: int = 1): ...


class Log(Logger):
    """
    Logger writing records of enabled levels to an Output.

    A record is written when the level of the logger is equal to or above
    the level of the record, FATAL records are always written. Records are
    built from the template rendered by the formatter: its first `%s` is
    replaced with the message and a newline is appended.

    Write failures never reach the caller, they are reported to the
    diagnostics stream (default: sys.stderr).

    Example:
        log = Log(output=sys.stdout, format=Format("${level:%s:left} %s"))
        log.warning("disk usage at ", 91, "%")
        # WARNING disk usage at 91%
    """

    def __init__(
        self,
        level: Level = DEFAULT_LEVEL,
        format: Optional[Formatter] = None,
        output: Any = None,
        exiter: Optional[Callable[[int], Any]] = None,
        diagnostics: Any = None,
    ):
        """
        Initialize log.

        Args:
            level: Minimum severity to write (default: INFO)
            format: Formatter of records (default: Format with DEFAULT_FORMATTING)
            output: SmartOutput or plain sink (default: Output to sys.stderr)
            exiter: Called with exit status after fatal records (default: sys.exit)
            diagnostics: Stream for write failures (default: sys.stderr at the time of failure)
        """
        self._level = Level(level)
        self._format = format if format is not None else Format(DEFAULT_FORMATTING)
        self._output = self._as_smart_output(output)
        self._exiter = exiter
        self._diagnostics = diagnostics
        self._prefix = ""
        self._indent_lines = False
        self._shift_indent = 0
        self._inherit_level = False
        self._children = weakref.WeakSet()
        self._lock = Lock()

    @staticmethod
    def _as_smart_output(output: Any) -> SmartOutput:
        if isinstance(output, SmartOutput):
            return output
        return Output(output)

    def set_level(self, level: Level) -> None:
        """
        Set the logging level of this log and of its children.

        A child that calls set_level itself stops following its parent.
        """
        with self._lock:
            self._inherit_level = False
            self._apply_level(Level(level))

    def _apply_level(self, level: Level):
        self._level = level
        for child in list(self._children):
            child._inherit(level)

    def _inherit(self, level: Level):
        with self._lock:
            if self._inherit_level:
                self._apply_level(level)

    def get_level(self) -> Level:
        return self._level

    def set_format(self, format: Formatter) -> None:
        with self._lock:
            self._format = format

    def get_format(self) -> Formatter:
        return self._format

    def set_output(self, output: Any) -> None:
        """Set output of this log, plain sinks are wrapped into a new Output"""
        output = self._as_smart_output(output)
        with self._lock:
            self._output = output

    def get_output(self) -> SmartOutput:
        return self._output

    def close(self) -> None:
        """Close file sinks of the output, writing after close opens them again"""
        close = getattr(self._output, "close", None)
        if close is not None:
            close()

    def set_indent_lines(self, value: bool) -> None:
        """
        Indent continuation lines of multi-line messages under the first one.

            [INFO] before-new-line
                   after-new-line
        """
        with self._lock:
            self._indent_lines = bool(value)

    def set_shift_indent(self, value: int) -> None:
        """Fixed number of spaces added to continuation lines, on top of set_indent_lines"""
        if value < 0:
            raise ValueError(FAULT_MAPPING["negative_shift_indent"].format(value=value))
        with self._lock:
            self._shift_indent = value

    def set_prefix(self, prefix: str) -> None:
        """Prefix is written in place of the `${prefix}` token, followed by a space"""
        with self._lock:
            self._prefix = prefix

    def get_prefix(self) -> str:
        return self._prefix

    def set_exiter(self, exiter: Optional[Callable[[int], Any]]) -> None:
        with self._lock:
            self._exiter = exiter

    def new_child(self) -> "Log":
        """
        Create a log sharing the output of this one.

        The child starts with the current level, format and indentation of
        this log and follows later set_level calls on it.
        """
        with self._lock:
            child = Log(
                level=self._level,
                format=self._format,
                output=self._output,
                exiter=self._exiter,
                diagnostics=self._diagnostics,
            )
            child._indent_lines = self._indent_lines
            child._shift_indent = self._shift_indent
            child._inherit_level = True
            self._children.add(child)
        return child

    def new_child_with_prefix(self, prefix: str) -> "Log":
        child = self.new_child()
        child.set_prefix(prefix)
        return child

    def fatal(self, *values, stacklevel: int = 1):
        """Log record with FATAL level and exit with status 1. Values are joined like sprint()."""
        self._write(Level.FATAL, sprint(*values), CallSite.capture(stacklevel))
        self._exit()

    def fatalf(self, format: str, *values, stacklevel: int = 1):
        """Log record with FATAL level and exit with status 1. Arguments are handled like `format % values`."""
        self._write(Level.FATAL, self._sprintf(format, values), CallSite.capture(stacklevel))
        self._exit()

    def error(self, *values, stacklevel: int = 1):
        self._log(Level.ERROR, values, stacklevel)

    def errorf(self, format: str, *values, stacklevel: int = 1):
        self._logf(Level.ERROR, format, values, stacklevel)

    def warning(self, *values, stacklevel: int = 1):
        self._log(Level.WARNING, values, stacklevel)

    def warningf(self, format: str, *values, stacklevel: int = 1):
        self._logf(Level.WARNING, format, values, stacklevel)

    def print(self, *values, stacklevel: int = 1):
        """Same as info()"""
        self._log(Level.INFO, values, stacklevel)

    def printf(self, format: str, *values, stacklevel: int = 1):
        """Same as infof()"""
        self._logf(Level.INFO, format, values, stacklevel)

    def info(self, *values, stacklevel: int = 1):
        self._log(Level.INFO, values, stacklevel)

    def infof(self, format: str, *values, stacklevel: int = 1):
        self._logf(Level.INFO, format, values, stacklevel)

    def debug(self, *values, stacklevel: int = 1):
        self._log(Level.DEBUG, values, stacklevel)

    def debugf(self, format: str, *values, stacklevel: int = 1):
        self._logf(Level.DEBUG, format, values, stacklevel)

    def trace(self, *values, stacklevel: int = 1):
        self._log(Level.TRACE, values, stacklevel)

    def tracef(self, format: str, *values, stacklevel: int = 1):
        self._logf(Level.TRACE, format, values, stacklevel)

    # _log and _logf must be called directly from the public methods,
    # the call site is taken `stacklevel` frames above that method
    def _log(self, level: Level, values: tuple, stacklevel: int):
        if self._level < level:
            return
        self._write(level, sprint(*values), CallSite.capture(stacklevel + 1))

    def _logf(self, level: Level, format: str, values: tuple, stacklevel: int):
        if self._level < level:
            return
        self._write(level, self._sprintf(format, values), CallSite.capture(stacklevel + 1))

    def _sprintf(self, format: str, values: tuple) -> str:
        try:
            return sprintf(format, values)
        except (TypeError, ValueError, KeyError) as e:
            self._report(FAULT_MAPPING["bad_format_string"].format(format=format, values=values, error=e))
            return f"{format} {values!r}"

    def _write(self, level: Level, message: str, call_site: Optional[CallSite]):
        with self._lock:
            rendered = self._format.render(level, self._prefix, call_site)

            indentation = self._get_indentation(rendered)
            if indentation:
                message = indent_lines(message, indentation)

            record = rendered.replace(MESSAGE_MARKER, message, 1) + "\n"
            try:
                self._output.write_with_level(record.encode("utf-8", errors="backslashreplace"), level)
            except (OutputError, OSError) as e:
                self._report(FAULT_MAPPING["write_failed"].format(error=e))

    def _get_indentation(self, rendered: str) -> int:
        indentation = self._shift_indent
        if self._indent_lines:
            indentation += get_indentation(rendered)
        return indentation

    def _report(self, text: str):
        stream = self._diagnostics if self._diagnostics is not None else sys.stderr
        stream.write(text)

    def _exit(self):
        exiter = self._exiter if self._exiter is not None else sys.exit
        exiter(FATAL_EXIT_STATUS)
