import click

from templog.cli import CONTEXT_SETTINGS, Environment, pass_environment
from templog.constants import LEVEL_COLUMN_WIDTH
from templog.level import Level


@click.command(context_settings=CONTEXT_SETTINGS)
@pass_environment
def cli(environment: Environment):
    """List known log levels"""
    environment.cmd = "levels"
    for level in Level:
        environment.log(f"{level.value} {level.to_string():<{LEVEL_COLUMN_WIDTH}} {level.to_string_short()}")
