import click

from templog.cli import CONTEXT_SETTINGS, LEVEL, Environment, pass_environment
from templog.constants import DEFAULT_FORMATTING
from templog.format.format import Format
from templog.level import Level


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "-f",
    "--format",
    "template",
    default=DEFAULT_FORMATTING,
    show_default=True,
    metavar="",
    help="Format template to render.",
)
@click.option("-l", "--level", type=LEVEL, default="INFO", show_default=True, metavar="", help="Level of the record.")
@click.option("-p", "--prefix", default="", metavar="", help="Prefix put in place of ${prefix}.")
@pass_environment
def cli(environment: Environment, template: str, level: Level, prefix: str):
    """Render a format template for a given level"""
    environment.cmd = "render"
    format = Format(template)
    rendered = format.render(level, prefix)
    environment.vlog(f"Compiled {len(format.replacements)} placeholder(s) of {template!r}")
    environment.log(rendered)
