"""
Leveled loggers rendering records through format templates

Usage:
    from templog.log import get_logger

    log = get_logger("worker")
    log.infof("processed %d jobs", 12)

Configuration:
    # Via environment variables
    export TEMPLOG_LOG_LEVEL=DEBUG
    export TEMPLOG_LOG_FILE=/var/log/app/app.log

    # Via configuration file
    from templog.log import LoggerFactory
    LoggerFactory.configure(config_path="templog.yml")
"""

from typing import Optional

from templog.log.discarder import Discarder, new_discarder
from templog.log.factory import LoggerFactory
from templog.log.logger import Log, Logger

__all__ = [
    "Discarder",
    "Log",
    "Logger",
    "LoggerFactory",
    "get_logger",
    "new_discarder",
]


def get_logger(name: Optional[str] = None) -> Log:
    return LoggerFactory.get_logger(name)
