"""cest coverage command - summarize a Clover coverage report."""

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from cestplane.cli.utils import open_store
from cestplane.core.errors import CoverageError
from cestplane.core.paths import relative_to_workspace, substitute_workspace
from cestplane.testing.coverage.mapper import CoverageMapper


@click.command()
@click.option(
    "--report",
    type=click.Path(path_type=Path),
    default=None,
    help="Clover XML file (default: runner.coverage.xml_file_path setting)",
)
@click.pass_context
def coverage_command(ctx: click.Context, report: Path | None) -> None:
    """Show per-file line coverage from a Clover report."""
    store = open_store(ctx.obj["workspace"])
    root = store.workspace_root
    if report is None:
        report = Path(substitute_workspace(store.config.runner.coverage.xml_file_path, root))
    if not report.is_absolute():
        report = root / report

    mapper = CoverageMapper(root)
    try:
        coverage_map = mapper.load_coverage(report, store.config.runner.path_mapping)
    except CoverageError as e:
        raise click.ClickException(e.message) from e

    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("File")
    table.add_column("Lines", justify="right")
    table.add_column("Cover", justify="right")
    for path in sorted(coverage_map):
        file_coverage = coverage_map[path]
        table.add_row(
            relative_to_workspace(path, root),
            f"{file_coverage.lines_hit}/{file_coverage.lines_found}",
            f"{file_coverage.percentage}%",
        )

    summary = mapper.summary()
    console = Console()
    console.print(table)
    console.print(
        f"\n[bold]Total:[/bold] {summary.lines_hit}/{summary.lines_found} lines "
        f"in {summary.files} file(s), {summary.percentage}%"
    )
