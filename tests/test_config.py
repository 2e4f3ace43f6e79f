"""
Unit tests for config.py

Tests configuration loading functionality including:
- Environment variable loading
- File configuration
- Variable substitution
- Validation
- Building loggers
"""

import io
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from templog.config import LoggingConfig, LogSettings
from templog.constants import DEFAULT_FORMATTING
from templog.exceptions import ConfigError
from templog.level import Level
from templog.output.file_sink import FileSink


class TestLoggingConfig(unittest.TestCase):
    """Test LoggingConfig class"""

    def setUp(self):
        """Set up test fixtures"""
        self.original_env = os.environ.copy()
        for name in list(os.environ):
            if name.startswith("TEMPLOG_"):
                del os.environ[name]
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        """Restore environment"""
        os.environ.clear()
        os.environ.update(self.original_env)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def write_config(self, content: str) -> str:
        config_file = Path(self.temp_dir) / "templog.yml"
        config_file.write_text(content)
        return str(config_file)

    def test_default_config(self):
        """Test default configuration values"""
        config = LoggingConfig.load()

        self.assertEqual(config["level"], "INFO")
        self.assertEqual(config["format"], DEFAULT_FORMATTING)
        self.assertEqual(config["output"], "stderr")
        self.assertIsNone(config["file_path"])
        self.assertFalse(config["indent_lines"])
        self.assertEqual(config["shift_indent"], 0)
        self.assertEqual(config["prefix"], "")
        self.assertEqual(config["level_outputs"], {})

    def test_env_var_overrides(self):
        """Test environment variable overrides"""
        os.environ["TEMPLOG_LOG_LEVEL"] = "DEBUG"
        os.environ["TEMPLOG_LOG_FORMAT"] = "[${level}] %s"
        os.environ["TEMPLOG_LOG_OUTPUT"] = "stdout"
        os.environ["TEMPLOG_LOG_FILE"] = "/tmp/test.log"
        os.environ["TEMPLOG_LOG_PREFIX"] = "api"

        config = LoggingConfig.load()

        self.assertEqual(config["level"], "DEBUG")
        self.assertEqual(config["format"], "[${level}] %s")
        self.assertEqual(config["output"], "stdout")
        self.assertEqual(config["file_path"], "/tmp/test.log")
        self.assertEqual(config["prefix"], "api")

    def test_env_var_indentation_overrides(self):
        os.environ["TEMPLOG_LOG_INDENT_LINES"] = "yes"
        os.environ["TEMPLOG_LOG_SHIFT_INDENT"] = "4"

        config = LoggingConfig.load()

        self.assertTrue(config["indent_lines"])
        self.assertEqual(config["shift_indent"], 4)

    def test_env_var_invalid_shift_indent_is_ignored(self):
        os.environ["TEMPLOG_LOG_SHIFT_INDENT"] = "four"

        config = LoggingConfig.load()

        self.assertEqual(config["shift_indent"], 0)

    def test_env_var_substitution(self):
        """Test environment variable substitution in destinations"""
        os.environ["ENVIRONMENT"] = "production"
        os.environ["TEMPLOG_LOG_FILE"] = "/var/log/${ENVIRONMENT}/app.log"

        config = LoggingConfig.load()

        self.assertEqual(config["file_path"], "/var/log/production/app.log")

    def test_env_var_substitution_missing_var(self):
        """Test that missing env vars are left unchanged"""
        os.environ["TEMPLOG_LOG_FILE"] = "/var/log/${MISSING_VAR}/app.log"

        config = LoggingConfig.load()

        self.assertEqual(config["file_path"], "/var/log/${MISSING_VAR}/app.log")

    def test_format_is_not_substituted(self):
        """Templates share ${} syntax with environment variables"""
        os.environ["level"] = "oops"
        os.environ["TEMPLOG_LOG_FORMAT"] = "${level} %s"

        config = LoggingConfig.load()

        self.assertEqual(config["format"], "${level} %s")

    def test_yaml_config_file(self):
        """Test loading from YAML config file"""
        os.environ["APP_ENV"] = "staging"
        config_path = self.write_config(
            """
logging:
  level: DEBUG
  format: '${level:[%s]\\::left} %s'
  output: file
  file_path: /tmp/templog_test.log
  indent_lines: true
  shift_indent: 2
  prefix: worker
  level_outputs:
    ERROR: [stderr, "/var/log/${APP_ENV}/errors.log"]
"""
        )

        config = LoggingConfig.load(config_path)

        self.assertEqual(config["level"], "DEBUG")
        self.assertEqual(config["format"], "${level:[%s]\\::left} %s")
        self.assertEqual(config["output"], "file")
        self.assertEqual(config["file_path"], "/tmp/templog_test.log")
        self.assertTrue(config["indent_lines"])
        self.assertEqual(config["shift_indent"], 2)
        self.assertEqual(config["prefix"], "worker")
        self.assertEqual(config["level_outputs"], {"ERROR": ["stderr", "/var/log/staging/errors.log"]})

    def test_env_overrides_file(self):
        """Test precedence: Environment > File"""
        os.environ["TEMPLOG_LOG_LEVEL"] = "ERROR"
        config_path = self.write_config("logging:\n  level: DEBUG\n  prefix: file\n")

        config = LoggingConfig.load(config_path)

        self.assertEqual(config["level"], "ERROR")
        self.assertEqual(config["prefix"], "file")

    def test_missing_config_file(self):
        config = LoggingConfig.load(str(Path(self.temp_dir) / "missing.yml"))
        self.assertEqual(config["level"], "INFO")

    def test_config_file_without_logging_section(self):
        config_path = self.write_config("other:\n  key: value\nlogging:\n")

        config = LoggingConfig.load(config_path)

        self.assertEqual(config, LoggingConfig.load())

    def test_invalid_yaml_file(self):
        """Test that invalid file is reported and defaults are used"""
        config_path = self.write_config("logging: [unclosed\n")

        with mock.patch("sys.stderr", new_callable=io.StringIO) as stderr:
            config = LoggingConfig.load(config_path)

        self.assertEqual(config["level"], "INFO")
        self.assertIn(f"Error loading config file {config_path}", stderr.getvalue())

    def test_validate_valid_config(self):
        is_valid, error = LoggingConfig.validate({"level": "warn", "output": "stdout"})

        self.assertTrue(is_valid)
        self.assertEqual(error, "")

    def test_validate_invalid_level(self):
        is_valid, error = LoggingConfig.validate({"level": "CRITICAL"})

        self.assertFalse(is_valid)
        self.assertIn("Invalid log level 'CRITICAL'", error)

    def test_validate_invalid_output(self):
        is_valid, error = LoggingConfig.validate({"output": "syslog"})

        self.assertFalse(is_valid)
        self.assertIn("Invalid output 'syslog'", error)

    def test_validate_file_output_without_path(self):
        is_valid, error = LoggingConfig.validate({"output": "file"})

        self.assertFalse(is_valid)
        self.assertEqual(error, "file_path required when output is 'file'")

    def test_validate_negative_shift_indent(self):
        is_valid, error = LoggingConfig.validate({"shift_indent": -2})

        self.assertFalse(is_valid)
        self.assertIn("shift_indent", error)

    def test_validate_invalid_level_outputs(self):
        is_valid, error = LoggingConfig.validate({"level_outputs": {"NOTICE": ["stderr"]}})

        self.assertFalse(is_valid)
        self.assertIn("NOTICE", error)

    def test_to_settings(self):
        settings = LoggingConfig.to_settings({**LoggingConfig.load(), "level": "debug", "prefix": "db"})

        self.assertIsInstance(settings, LogSettings)
        self.assertEqual(settings.level, "debug")
        self.assertEqual(settings.prefix, "db")
        self.assertEqual(settings.format, DEFAULT_FORMATTING)

    def test_to_settings_invalid_config(self):
        with self.assertRaises(ConfigError) as context:
            LoggingConfig.to_settings({"level": "LOUD"})

        self.assertEqual(context.exception.field_name, "logging")
        self.assertIn("Invalid log level 'LOUD'", str(context.exception))

    def test_to_settings_wrong_type(self):
        with self.assertRaises(ConfigError):
            LoggingConfig.to_settings({"shift_indent": [1, 2]})


class TestBuildLogger(unittest.TestCase):
    """Test LoggingConfig.build_logger"""

    def setUp(self):
        self.original_env = os.environ.copy()
        for name in list(os.environ):
            if name.startswith("TEMPLOG_"):
                del os.environ[name]
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        os.environ.clear()
        os.environ.update(self.original_env)
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_defaults(self):
        log = LoggingConfig.build_logger()

        self.assertEqual(log.get_level(), Level.INFO)
        self.assertEqual(log.get_format().raw_format, DEFAULT_FORMATTING)
        self.assertEqual(log.get_output().get_level_writers(Level.INFO), [sys.stderr])

    def test_overrides(self):
        log = LoggingConfig.build_logger(level="TRACE", prefix="api", output="stdout", format=None)

        self.assertEqual(log.get_level(), Level.TRACE)
        self.assertEqual(log.get_prefix(), "api")
        self.assertEqual(log.get_format().raw_format, DEFAULT_FORMATTING)
        self.assertEqual(log.get_output().get_level_writers(Level.DEBUG), [sys.stdout])

    def test_file_output(self):
        log_path = Path(self.temp_dir) / "logs" / "app.log"

        log = LoggingConfig.build_logger(format="${prefix}%s", prefix="db", output="file", file_path=str(log_path))
        log.info("line one\nline two")

        self.assertEqual(log_path.read_text(), "db line one\nline two\n")

    def test_indentation(self):
        log_path = Path(self.temp_dir) / "app.log"

        log = LoggingConfig.build_logger(
            format="[${level}] %s", output="file", file_path=str(log_path), indent_lines=True, shift_indent=1
        )
        log.info("a\nb")

        self.assertEqual(log_path.read_text(), "[INFO] a\n        b\n")

    def test_level_outputs(self):
        errors_path = Path(self.temp_dir) / "errors.log"
        config_path = Path(self.temp_dir) / "templog.yml"
        config_path.write_text(
            f"""
logging:
  format: "%s"
  level_outputs:
    ERROR: [{errors_path}]
    FATAL: [stderr, {errors_path}]
"""
        )

        log = LoggingConfig.build_logger(str(config_path))

        error_writers = log.get_output().get_level_writers(Level.ERROR)
        fatal_writers = log.get_output().get_level_writers(Level.FATAL)
        self.assertIsInstance(error_writers[0], FileSink)
        self.assertIs(fatal_writers[1], error_writers[0])
        self.assertEqual(fatal_writers[0], sys.stderr)
        self.assertEqual(log.get_output().get_level_writers(Level.INFO), [sys.stderr])

        log.error("disk is full")
        self.assertEqual(errors_path.read_text(), "disk is full\n")

    def test_invalid_configuration(self):
        with self.assertRaises(ConfigError):
            LoggingConfig.build_logger(output="file")
