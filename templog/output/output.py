"""
Output - level-aware router of log records to sinks

A sink is any object with a `write()` method: binary streams and files get
bytes, text streams (sys.stderr, StringIO, ...) get decoded text.

Usage:
    from templog.output.output import Output

    output = Output(sys.stderr).set_level_writer_condition(
        Level.ERROR, sys.stderr, FileSink("/var/log/app/errors.log")
    )
    output.write_with_level(b"[ERROR] disk is full\n", Level.ERROR)
"""

import io
import sys
from abc import ABC, abstractmethod
from threading import Lock
from typing import Any, Optional

from beartype.typing import Dict, List

from templog.exceptions import NoWritersError, OutputError
from templog.level import Level
from templog.output.file_sink import FileSink


class SmartOutput(ABC):
    """
    Destination of log records that knows the level of each record.
    Log wraps every plain sink it's given into an Output.
    """

    @abstractmethod
    def write_with_level(self, data: bytes, level: Level) -> int:
        raise NotImplementedError


class Output(SmartOutput):
    """
    Routes each record to the sinks configured for its level.

    By default every level is routed to the single sink given to the
    constructor. Routing table changes and writes are serialized by one lock,
    so records written through the same Output never interleave.

    Example:
        output = Output(buffer).set_level_writer_condition(Level.WARNING, buffer1, buffer2)
        output.write_with_level(b"INFO 1\\n", Level.INFO)      # buffer only
        output.write_with_level(b"WARNING 2\\n", Level.WARNING)  # buffer1 and buffer2
    """

    def __init__(self, sink: Any = None):
        """
        Initialize output.

        Args:
            sink: Sink for all levels (default: sys.stderr)
        """
        sink = sink if sink is not None else sys.stderr
        self._conditions: Dict[Level, List[Any]] = {level: [sink] for level in Level}
        self._lock = Lock()

    def set_level_writer_condition(self, level: Level, *sinks: Any) -> "Output":
        """
        Replace sinks of a single level, other levels are untouched.

        Args:
            level: Level to route
            *sinks: New sinks for the level, none leaves the level unrouted

        Returns:
            This output, for chaining
        """
        with self._lock:
            self._conditions[Level(level)] = list(sinks)
        return self

    def get_level_writers(self, level: Level) -> List[Any]:
        with self._lock:
            return list(self._conditions.get(level, []))

    def close(self) -> None:
        """Close file sinks of every level, streams are left open"""
        with self._lock:
            sinks = {id(sink): sink for writers in self._conditions.values() for sink in writers}
        for sink in sinks.values():
            if isinstance(sink, FileSink):
                sink.close()

    def write_with_level(self, data: bytes, level: Level) -> int:
        """
        Write data to every sink of the level.

        Every sink is tried even when an earlier one failed.

        Returns:
            Number of bytes reported by the last sink

        Raises:
            NoWritersError: if no sink is configured for the level
            OutputError: if any sink failed, after all sinks were tried
        """
        with self._lock:
            sinks = self._conditions.get(level)
            if not sinks:
                raise NoWritersError(level)

            written = 0
            errors = []
            for sink in sinks:
                try:
                    written = self._write_to(sink, data)
                except (OSError, ValueError, TypeError) as e:
                    errors.append((sink, e))

        if errors:
            raise OutputError(level, errors) from errors[0][1]
        return written

    @staticmethod
    def _write_to(sink: Any, data: bytes) -> int:
        if isinstance(sink, io.TextIOBase):
            sink.write(data.decode("utf-8", errors="replace"))
            sink.flush()
            return len(data)

        written: Optional[int] = sink.write(data)
        return len(data) if written is None else written
