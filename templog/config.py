"""
Configuration System - logging configuration for templog

Provides centralized configuration loading from multiple sources
with precedence handling and environment variable substitution.
"""

import os
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml
from beartype.roar import BeartypeCallHintViolation
from beartype.typing import Dict, List, Tuple
from serde import SerdeError, deserialize, field, from_dict, serialize

from templog.constants import DEFAULT_FORMATTING, FAULT_MAPPING
from templog.exceptions import ConfigError
from templog.format.format import Format
from templog.level import Level, level_names
from templog.log.logger import Log
from templog.output.file_sink import FileSink
from templog.output.output import Output

ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

VALID_OUTPUTS = ("stderr", "stdout", "file")


@serialize
@deserialize
@dataclass
class LogSettings:
    """Validated logging configuration"""

    level: str = "INFO"
    format: str = DEFAULT_FORMATTING
    output: str = "stderr"
    file_path: Optional[str] = None
    indent_lines: bool = False
    shift_indent: int = 0
    prefix: str = ""
    level_outputs: Dict[str, List[str]] = field(default_factory=dict)


class LoggingConfig:
    """
    Centralized logging configuration for templog.

    Reads from file, environment variables, or overrides with
    proper precedence handling.

    Example configuration file (templog.yml):
        logging:
          level: DEBUG
          format: '${time} ${level:[%s]\\::right:true} ${file}:${line} %s'
          output: file          # stderr, stdout, file
          file_path: /var/log/${APP_ENV}/app.log
          indent_lines: true
          shift_indent: 2
          prefix: api
          level_outputs:        # per-level destinations, replacing `output`
            ERROR: [stderr, "/var/log/${APP_ENV}/errors.log"]
            FATAL: [stderr, "/var/log/${APP_ENV}/errors.log"]
    """

    DEFAULT_CONFIG = {
        "level": "INFO",
        "format": DEFAULT_FORMATTING,
        "output": "stderr",  # stderr, stdout, file
        "file_path": None,
        "indent_lines": False,
        "shift_indent": 0,
        "prefix": "",
        "level_outputs": {},
    }

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from multiple sources.

        Precedence: Overrides > Environment > File > Default

        Args:
            config_path: Path to configuration file

        Returns:
            Configuration dictionary

        Example:
            config = LoggingConfig.load("templog.yml")
        """
        config = cls.DEFAULT_CONFIG.copy()
        config["level_outputs"] = {}

        # 1. Load from file
        if config_path and Path(config_path).exists():
            file_config = cls._load_from_file(config_path)
            if isinstance(file_config, dict) and file_config.get("logging"):
                config.update(file_config["logging"])

        # 2. Override with environment variables
        config = cls._apply_env_overrides(config)

        # 3. Substitute environment variables in destinations
        config = cls._substitute_destinations(config)

        return config

    @classmethod
    def _load_from_file(cls, config_path: str) -> Optional[Dict[str, Any]]:
        """
        Load configuration from YAML file.

        Returns:
            Configuration dictionary or None if error
        """
        try:
            with open(config_path) as f:
                return yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            sys.stderr.write(FAULT_MAPPING["yaml_file_parse_issue"].format(file_path=config_path, error=e))
            return None

    @classmethod
    def _apply_env_overrides(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides.

        Environment variables:
            TEMPLOG_LOG_LEVEL: Log level (FATAL, ERROR, WARNING, INFO, DEBUG, TRACE)
            TEMPLOG_LOG_FORMAT: Format template
            TEMPLOG_LOG_OUTPUT: Output destination (stderr, stdout, file)
            TEMPLOG_LOG_FILE: Log file path
            TEMPLOG_LOG_PREFIX: Prefix of records
            TEMPLOG_LOG_INDENT_LINES: Indent multi-line messages (true, false, yes, no, 1, 0)
            TEMPLOG_LOG_SHIFT_INDENT: Extra indentation of continuation lines
        """
        env_mappings = {
            "TEMPLOG_LOG_LEVEL": "level",
            "TEMPLOG_LOG_FORMAT": "format",
            "TEMPLOG_LOG_OUTPUT": "output",
            "TEMPLOG_LOG_FILE": "file_path",
            "TEMPLOG_LOG_PREFIX": "prefix",
        }

        for env_var, config_key in env_mappings.items():
            if env_var in os.environ:
                config[config_key] = os.environ[env_var]

        if "TEMPLOG_LOG_INDENT_LINES" in os.environ:
            indent_value = os.environ["TEMPLOG_LOG_INDENT_LINES"].lower()
            config["indent_lines"] = indent_value in ("true", "yes", "1", "on")

        if "TEMPLOG_LOG_SHIFT_INDENT" in os.environ:
            try:
                config["shift_indent"] = int(os.environ["TEMPLOG_LOG_SHIFT_INDENT"])
            except ValueError:
                pass

        return config

    @classmethod
    def _substitute_destinations(cls, config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Substitute environment variables in file destinations.

        Supports ${VAR_NAME} syntax, unknown variables are left as is.
        Templates share this syntax with placeholders and are never substituted.

        Example:
            file_path: /var/log/${ENVIRONMENT}/app.log
            With ENVIRONMENT=production, becomes:
            file_path: /var/log/production/app.log
        """
        if isinstance(config.get("file_path"), str):
            config["file_path"] = cls._substitute_env_vars(config["file_path"])

        level_outputs = config.get("level_outputs")
        if isinstance(level_outputs, dict):
            config["level_outputs"] = {
                name: [cls._substitute_env_vars(d) for d in destinations]
                if isinstance(destinations, list)
                else destinations
                for name, destinations in level_outputs.items()
            }
        return config

    @staticmethod
    def _substitute_env_vars(value: Any) -> Any:
        if not isinstance(value, str):
            return value

        def replace_env(match):
            var_name = match.group(1)
            return os.environ.get(var_name, match.group(0))

        return ENV_VAR_PATTERN.sub(replace_env, value)

    @classmethod
    def validate(cls, config: Dict[str, Any]) -> Tuple[bool, str]:
        """
        Validate configuration.

        Args:
            config: Configuration dictionary

        Returns:
            Tuple of (is_valid, error_message)

        Example:
            is_valid, error = LoggingConfig.validate(config)
            if not is_valid:
                print(f"Invalid configuration: {error}")
        """
        # Validate log level
        level = config.get("level", "INFO")
        if not cls._is_level(level):
            return False, FAULT_MAPPING["invalid_level"].format(level=level, levels=", ".join(level_names()))

        # Validate output
        output = config.get("output", "stderr")
        if output not in VALID_OUTPUTS:
            return False, FAULT_MAPPING["invalid_output"].format(output=output, outputs=", ".join(VALID_OUTPUTS))

        # Validate file output config
        if output == "file" and not config.get("file_path"):
            return False, FAULT_MAPPING["missing_file_path"]

        shift_indent = config.get("shift_indent", 0)
        if isinstance(shift_indent, int) and shift_indent < 0:
            return False, FAULT_MAPPING["negative_shift_indent"].format(value=shift_indent)

        for name in config.get("level_outputs") or {}:
            if not cls._is_level(name):
                return False, FAULT_MAPPING["invalid_level_outputs"].format(
                    level=name, levels=", ".join(level_names())
                )

        return True, ""

    @staticmethod
    def _is_level(name: Any) -> bool:
        try:
            Level.from_name(name)
        except ValueError:
            return False
        return True

    @classmethod
    def to_settings(cls, config: Dict[str, Any]) -> LogSettings:
        """
        Validate configuration and convert it to LogSettings.

        Raises:
            ConfigError: if configuration is invalid or has values of wrong types
        """
        is_valid, error = cls.validate(config)
        if not is_valid:
            raise ConfigError("logging", error)

        known = {key: value for key, value in config.items() if key in cls.DEFAULT_CONFIG}
        try:
            return from_dict(LogSettings, known)
        except (SerdeError, BeartypeCallHintViolation, TypeError, ValueError) as e:
            raise ConfigError("logging", str(e)) from e

    @classmethod
    def build_logger(cls, config_path: Optional[str] = None, **overrides) -> Log:
        """
        Build a Log based on configuration.

        Args:
            config_path: Path to configuration file
            **overrides: Configuration overrides (e.g., level="DEBUG"), None values are ignored

        Example:
            log = LoggingConfig.build_logger(
                config_path="templog.yml",
                level="DEBUG",
                prefix="worker"
            )
        """
        config = cls.load(config_path)
        config.update({key: value for key, value in overrides.items() if value is not None})
        settings = cls.to_settings(config)

        sinks: Dict[str, Any] = {}
        if settings.output == "file":
            default_sink = cls._destination(settings.file_path, sinks)
        else:
            default_sink = cls._destination(settings.output, sinks)

        output = Output(default_sink)
        for name, destinations in settings.level_outputs.items():
            output.set_level_writer_condition(
                Level.from_name(name), *[cls._destination(destination, sinks) for destination in destinations]
            )

        log = Log(level=Level.from_name(settings.level), format=Format(settings.format), output=output)
        log.set_prefix(settings.prefix)
        log.set_indent_lines(settings.indent_lines)
        log.set_shift_indent(settings.shift_indent)
        return log

    @staticmethod
    def _destination(destination: str, sinks: Dict[str, Any]) -> Any:
        """Stream or file sink for a destination, one FileSink per path"""
        if destination == "stdout":
            return sys.stdout
        if destination == "stderr":
            return sys.stderr
        if destination not in sinks:
            sinks[destination] = FileSink(destination)
        return sinks[destination]
