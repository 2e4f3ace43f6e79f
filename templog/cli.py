import sys
from pathlib import Path

import click

from templog.constants import MISSING_COMMAND_SLOGAN, TOOL_USAGE, TOOL_VERSION
from templog.level import Level, level_names

CONTEXT_SETTINGS = dict(auto_envvar_prefix="TEMPLOG")

templog_folder = Path(__file__).parent
cmd_folder = templog_folder / "commands/"


class Environment:
    def __init__(self):
        self.verbose = None
        self.silent = None
        self.cmd = None

    def log(self, msg: str, new_line=True, *args):
        """Logs a message to stdout only if silent mode is disabled."""
        if not self.silent:
            if args:
                msg %= args
            click.echo(msg, file=sys.stdout, nl=new_line)

    def vlog(self, msg: str, *args):
        """Logs a message to stdout only if the verbose option is enabled."""
        if self.verbose:
            self.log(msg, True, *args)

    @staticmethod
    def elog(msg: str, new_line=True, *args):
        """Logs a message to stderr."""
        if args:
            msg %= args
        click.echo(msg, file=sys.stderr, nl=new_line)


pass_environment = click.make_pass_decorator(Environment, ensure=True)


class LevelType(click.ParamType):
    """Level given by full or short name, case-insensitive"""

    name = "level"

    def convert(self, value, param, ctx):
        if isinstance(value, Level):
            return value
        try:
            return Level.from_name(value)
        except ValueError:
            self.fail(f"{value!r} is not one of: {', '.join(level_names())}", param, ctx)


LEVEL = LevelType()


class TemplogCLI(click.Group):
    def __init__(self, *args, **kwargs):
        # Use invoke_without_command=True to be able to print
        # short tool description when starting without parameters
        click.Group.__init__(self, invoke_without_command=True, *args, **kwargs)

    def list_commands(self, context: click.Context):
        commands = []
        for filename in cmd_folder.iterdir():
            if filename.name.endswith(".py") and filename.name.startswith("cmd_"):
                commands.append(filename.name[4:-3])
        commands.sort()
        return commands

    def get_command(self, context: click.Context, name: str):
        try:
            mod = __import__(f"templog.commands.cmd_{name}", None, None, ["cli"])
        except ImportError:
            return None
        return mod.cli


@click.command(cls=TemplogCLI, context_settings=CONTEXT_SETTINGS)
@click.pass_context
@pass_environment
@click.option("-v", "--verbose", is_flag=True, help="Output details of the performed actions.")
@click.option(
    "-s",
    "--silent",
    flag_value=True,
    is_flag=True,
    help="Silence stdout",
    default=False,
)
def cli(environment: Environment, context: click.Context, verbose: bool, silent: bool):
    """Template-driven leveled logging"""
    if not context.invoked_subcommand and not (verbose or silent):
        click.echo(TOOL_VERSION)
        click.echo(TOOL_USAGE)
        sys.exit(0)

    # This check is due to usage of invoke_without_command=True in TemplogCLI class.
    if not context.invoked_subcommand:
        click.echo(MISSING_COMMAND_SLOGAN)
        sys.exit(2)

    environment.verbose = verbose
    environment.silent = silent
