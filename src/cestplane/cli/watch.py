"""cest watch command - keep discovery current while files change."""

import asyncio

import click
from rich.console import Console

from cestplane.cli.utils import build_tree, open_store
from cestplane.config.store import ConfigStore
from cestplane.testing.controller import TestController
from cestplane.watch.watcher import FileWatcher


async def watch_workspace(store: ConfigStore, console: Console) -> None:
    controller = TestController(store)
    watcher = FileWatcher(store.workspace_root, controller.channel)
    await controller.start()
    await watcher.start()
    console.print(build_tree(f"[bold]{store.workspace_root}[/bold]", controller.tree))
    console.print(f"Watching {store.workspace_root} (Ctrl+C to stop)", style="dim")

    seen = controller.discovery_count
    try:
        while True:
            await asyncio.sleep(store.config.discovery.debounce_sec)
            if controller.discovery_count != seen:
                seen = controller.discovery_count
                console.print(build_tree(f"[bold]{store.workspace_root}[/bold]", controller.tree))
    finally:
        await watcher.stop()
        await controller.stop()


@click.command()
@click.pass_context
def watch_command(ctx: click.Context) -> None:
    """Rediscover tests whenever test or config files change."""
    store = open_store(ctx.obj["workspace"])
    console = Console(stderr=True)
    try:
        asyncio.run(watch_workspace(store, console))
    except KeyboardInterrupt:
        click.echo("\nStopped")
