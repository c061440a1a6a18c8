"""covwire CLI."""

import click

from covwire.cli.detect import detect_command
from covwire.cli.submit import submit_command
from covwire.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="covwire")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """covwire - upload coverage reports to a coverage aggregation service."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(level="DEBUG" if verbose else "INFO")


cli.add_command(detect_command, name="detect")
cli.add_command(submit_command, name="submit")


if __name__ == "__main__":
    cli()
