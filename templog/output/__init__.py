from templog.output.file_sink import FileSink
from templog.output.output import Output, SmartOutput

__all__ = [
    "FileSink",
    "Output",
    "SmartOutput",
]
