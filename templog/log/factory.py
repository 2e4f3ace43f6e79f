from threading import Lock
from typing import Optional

from beartype.typing import Dict

from templog.log.logger import Log


class LoggerFactory:
    """
    Owner of the default Log of the application.

    Named loggers are children of the default one with the name as prefix,
    they are cached and share its output and format.
    """

    _default: Optional[Log] = None
    _loggers: Dict[str, Log] = {}
    _lock = Lock()

    @classmethod
    def configure(cls, config_path: Optional[str] = None, **overrides) -> Log:
        """
        Build the default logger from configuration and drop cached children.

        Args:
            config_path: Path to YAML configuration file (optional)
            **overrides: Configuration keys taking precedence over file and environment

        Example:
            LoggerFactory.configure("templog.yml", level="DEBUG")
        """
        from templog.config import LoggingConfig

        log = LoggingConfig.build_logger(config_path, **overrides)
        cls.set_logger(log)
        return log

    @classmethod
    def set_logger(cls, log: Log) -> None:
        """Replace the default logger, file sinks of the previous one are closed"""
        with cls._lock:
            previous = cls._default
            cls._default = log
            cls._loggers = {}
        if previous is not None and previous is not log:
            previous.close()

    @classmethod
    def get_logger(cls, name: Optional[str] = None) -> Log:
        """
        Get the default logger, or its child prefixed with `name`.

        Example:
            log = LoggerFactory.get_logger("db")
            log.info("connected")   # 2024-01-01 10:00:00 [INFO]: db connected
        """
        with cls._lock:
            if cls._default is None:
                cls._default = Log()
            if not name:
                return cls._default
            if name not in cls._loggers:
                cls._loggers[name] = cls._default.new_child_with_prefix(name)
            return cls._loggers[name]

    @classmethod
    def reset(cls):
        """
        Forget the default logger and all cached children.

        Useful for testing.
        """
        with cls._lock:
            previous = cls._default
            cls._default = None
            cls._loggers = {}
        if previous is not None:
            previous.close()
