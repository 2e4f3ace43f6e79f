import sys

import click

from templog.cli import CONTEXT_SETTINGS, LEVEL, Environment, pass_environment
from templog.config import LoggingConfig
from templog.exceptions import ConfigError
from templog.level import Level


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("-c", "--config", type=click.Path(), metavar="", help="Path to YAML file with `logging` section.")
@click.option("-l", "--level", type=LEVEL, default="INFO", show_default=True, metavar="", help="Level of the record.")
@click.option("-t", "--threshold", type=LEVEL, metavar="", help="Level of the logger, overrides configuration.")
@click.option("-f", "--format", "template", metavar="", help="Format template, overrides configuration.")
@click.option("-p", "--prefix", metavar="", help="Prefix of the record.")
@click.option(
    "-o", "--output", type=click.Choice(["stderr", "stdout", "file"]), metavar="", help="Output destination."
)
@click.option("--file", "file_path", type=click.Path(), metavar="", help="Log file path for file output.")
@click.option("--indent-lines", is_flag=True, help="Indent continuation lines under the first one.")
@click.option("--shift-indent", type=click.IntRange(min=0), metavar="", help="Extra indentation of continuation lines.")
@click.argument("message", nargs=-1, required=True)
@pass_environment
def cli(
    environment: Environment,
    config: str,
    level: Level,
    threshold: Level,
    template: str,
    prefix: str,
    output: str,
    file_path: str,
    indent_lines: bool,
    shift_indent: int,
    message: tuple,
):
    """Write one log record using configuration and options"""
    environment.cmd = "emit"
    try:
        log = LoggingConfig.build_logger(
            config,
            level=threshold.to_string() if threshold is not None else None,
            format=template,
            prefix=prefix,
            output=output,
            file_path=file_path,
            indent_lines=True if indent_lines else None,
            shift_indent=shift_indent,
        )
    except ConfigError as e:
        environment.elog(str(e))
        sys.exit(1)

    environment.vlog(f"Emitting {level} record with logger level {log.get_level()}")
    getattr(log, level.to_string().lower())(" ".join(message))
