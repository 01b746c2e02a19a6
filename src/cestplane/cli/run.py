"""cest run command - execute tests and report outcomes."""

import asyncio

import click
from rich.console import Console
from rich.table import Table

from cestplane.cli.utils import STATE_STYLES, open_store, resolve_target
from cestplane.testing.controller import TestController
from cestplane.testing.models import NodeId, TestState
from cestplane.testing.run import TestRun
from cestplane.testing.runner import RunRequest


def _results_table(run: TestRun) -> Table:
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("State")
    table.add_column("Test")
    table.add_column("Message", overflow="fold")
    for node_id, state in run.states.items():
        table.add_row(
            f"[{STATE_STYLES[state]}]{state.value}[/]",
            str(node_id),
            run.messages.get(node_id, run.descriptions.get(node_id, "")),
        )
    return table


async def _run(
    controller: TestController,
    include: list[NodeId] | None,
    exclude: list[NodeId],
    *,
    debug: bool,
    coverage: bool,
) -> TestRun:
    return await controller.runner.run(
        RunRequest.of(include, exclude),
        debug=debug,
        coverage=coverage,
    )


@click.command()
@click.argument("targets", nargs=-1)
@click.option("--exclude", "excludes", multiple=True, help="Target to skip (repeatable)")
@click.option("--debug", is_flag=True, help="Run with the debug command and session")
@click.option("--coverage", is_flag=True, help="Collect and load coverage after each target")
@click.option("--output", "show_output", is_flag=True, help="Print captured runner output")
@click.pass_context
def run_command(
    ctx: click.Context,
    targets: tuple[str, ...],
    excludes: tuple[str, ...],
    debug: bool,
    coverage: bool,
    show_output: bool,
) -> None:
    """Run tests.

    TARGETS are Class or Class:method (short or fully qualified class
    name). With no targets every discovered class runs.
    """
    store = open_store(ctx.obj["workspace"])
    controller = TestController(store)
    controller.discover()

    include = [resolve_target(controller.registry, t) for t in targets] or None
    exclude = [resolve_target(controller.registry, t) for t in excludes]

    try:
        run = asyncio.run(_run(controller, include, exclude, debug=debug, coverage=coverage))
    except KeyboardInterrupt:
        click.echo("\nStopped")
        raise SystemExit(130) from None

    console = Console()
    if show_output or ctx.obj["verbose"]:
        for line in run.output:
            console.print(line.text, markup=False, highlight=False)
        console.print()
    console.print(_results_table(run))

    counts = run.counts()
    console.print(
        f"\n[green]{counts[TestState.PASSED]} passed[/green], "
        f"[red]{counts[TestState.FAILED]} failed[/red], "
        f"[yellow]{counts[TestState.SKIPPED]} skipped[/yellow], "
        f"[magenta]{counts[TestState.ERRORED]} errored[/magenta]"
    )
    if run.has_failures:
        raise SystemExit(1)
