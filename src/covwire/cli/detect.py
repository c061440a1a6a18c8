"""covwire detect command."""

import json

import click

from covwire.ci.environment import service_from_environment, service_from_named_ci
from covwire.ci.service import parse_ci_name


@click.command()
@click.option("--ci", "ci_name", default=None, help="Read variables for this CI service literal")
def detect_command(ci_name: str | None) -> None:
    """Print the CI service covwire would attribute a report to."""
    if ci_name:
        service = service_from_named_ci(parse_ci_name(ci_name))
    else:
        service = service_from_environment()
    click.echo(json.dumps({"service": service.to_dict() if service else None}, indent=2))
