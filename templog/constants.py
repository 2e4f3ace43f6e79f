import templog

# Template used by every Log that was not given a format explicitly.
# `%s` marks the place of the message, `${prefix}` the place of the logger prefix.
DEFAULT_FORMATTING = r"${time} ${level:[%s]\::right:true} ${prefix}%s"

MESSAGE_MARKER = "%s"
PREFIX_TOKEN = "${prefix}"

PLACEHOLDER_TIME_DEFAULT_LAYOUT = "%Y-%m-%d %H:%M:%S"
PLACEHOLDER_UNKNOWN_VALUE = "??"

# Column width of the `level` placeholder for full and short level names.
LEVEL_COLUMN_WIDTH = 7
LEVEL_COLUMN_WIDTH_SHORT = 5

FATAL_EXIT_STATUS = 1

FAULT_MAPPING = dict(
    write_failed="failed to write to log: {error!r}\n",
    bad_format_string="failed to format log record {format!r} with {values!r}: {error}\n",
    yaml_file_parse_issue="Error loading config file {file_path}: {error}\n",
    invalid_level="Invalid log level '{level}'. Must be one of: {levels}",
    invalid_output="Invalid output '{output}'. Must be one of: {outputs}",
    missing_file_path="file_path required when output is 'file'",
    invalid_level_outputs="Invalid level in level_outputs '{level}'. Must be one of: {levels}",
    negative_shift_indent="shift_indent must be zero or a positive number, got {value}",
)

TOOL_VERSION = f"""templog v{templog.__version__}
Template-driven leveled logging"""
TOOL_USAGE = f"""Supported and loaded modules:
    - render: Render a format template for a given level
    - emit: Write one log record using configuration and options
    - levels: List known log levels"""

MISSING_COMMAND_SLOGAN = """Usage: templog [OPTIONS] COMMAND [ARGS]...\nTry 'templog --help' for help.
\nError: Missing command."""
