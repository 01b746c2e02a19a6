"""CestPlane CLI - cest command."""

from pathlib import Path

import click

from cestplane.cli.coverage import coverage_command
from cestplane.cli.discover import discover_command
from cestplane.cli.run import run_command
from cestplane.cli.watch import watch_command
from cestplane.core.logging import configure_logging


@click.group()
@click.version_option(version="0.1.0", prog_name="cest")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--workspace",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Workspace root (default: current directory)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, workspace: Path) -> None:
    """CestPlane - Codeception test explorer."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["workspace"] = workspace.resolve()
    configure_logging(level="DEBUG" if verbose else "WARNING")


cli.add_command(discover_command, name="discover")
cli.add_command(run_command, name="run")
cli.add_command(coverage_command, name="coverage")
cli.add_command(watch_command, name="watch")


if __name__ == "__main__":
    cli()
