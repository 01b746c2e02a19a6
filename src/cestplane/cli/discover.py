"""cest discover command - list discovered tests."""

import json

import click
from rich.console import Console

from cestplane.cli.utils import build_tree, node_to_dict, open_store
from cestplane.testing.controller import TestController


@click.command()
@click.option(
    "--view",
    type=click.Choice(["suites", "directories"]),
    default=None,
    help="Grouping to show (default: runner.view_mode setting)",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def discover_command(ctx: click.Context, view: str | None, as_json: bool) -> None:
    """Discover test classes and print them grouped by suite or directory."""
    store = open_store(ctx.obj["workspace"])
    controller = TestController(store)
    controller.discover()
    nodes = controller.grouping.render(view)  # type: ignore[arg-type]

    if as_json:
        click.echo(json.dumps([node_to_dict(n) for n in nodes], indent=2))
        return

    console = Console()
    if not nodes:
        console.print("[yellow]No tests found[/yellow]")
        return
    mode = view or store.config.runner.view_mode
    console.print(build_tree(f"[bold]{store.workspace_root}[/bold] ({mode})", nodes))
    console.print(f"\n{len(controller.registry)} test class(es)")
