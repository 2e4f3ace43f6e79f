"""
File Sink - appending file destination for log records

Features:
- Thread-safe write operations
- Lazy opening, the file is created on the first write
- Automatic directory creation
- Accepts both bytes and text

Usage:
    from templog.output.file_sink import FileSink

    with FileSink("/var/log/app/app.log") as sink:
        sink.write(b"[INFO] started\\n")
"""

import os
from pathlib import Path
from threading import Lock
from typing import Union


class FileSink:
    """
    Appends log records to a file.

    Example:
        sink = FileSink("/var/log/app/app.log", fsync=True)
        output = Output(sys.stderr).set_level_writer_condition(Level.ERROR, sys.stderr, sink)
    """

    def __init__(self, filepath: Union[str, Path], encoding: str = "utf-8", fsync: bool = False):
        """
        Initialize file sink.

        Args:
            filepath: Path to log file
            encoding: Encoding used for text written to the sink (default: utf-8)
            fsync: Force every write to disk (default: False)
        """
        self.filepath = Path(filepath)
        self.encoding = encoding
        self.fsync = fsync
        self._file = None
        self._lock = Lock()
        self._ensure_directory()

    def __repr__(self):
        return f"{type(self).__name__}({str(self.filepath)!r})"

    @property
    def closed(self) -> bool:
        return self._file is None or self._file.closed

    def _ensure_directory(self):
        """Create log directory if it doesn't exist"""
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

    def write(self, content: Union[bytes, str]) -> int:
        """
        Append content to the file.

        Args:
            content: Record to write, should include the trailing newline

        Returns:
            Number of bytes written
        """
        if isinstance(content, str):
            content = content.encode(self.encoding)

        with self._lock:
            if self._file is None or self._file.closed:
                self._file = open(self.filepath, "ab")

            written = self._file.write(content)
            self._file.flush()
            if self.fsync:
                os.fsync(self._file.fileno())
            return written

    def flush(self):
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                os.fsync(self._file.fileno())

    def close(self):
        """
        Close file handle.

        Writing after close opens the file again.
        """
        with self._lock:
            if self._file and not self._file.closed:
                self._file.flush()
                self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
