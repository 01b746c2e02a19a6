"""CLI utilities."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click
from rich.tree import Tree

from cestplane.config.store import ConfigStore
from cestplane.core.errors import ConfigError
from cestplane.testing.models import NodeId, TestState, TreeNode
from cestplane.testing.registry import TestRegistry
from cestplane.testing.run import TestRun

STATE_STYLES = {
    TestState.QUEUED: "dim",
    TestState.STARTED: "cyan",
    TestState.PASSED: "green",
    TestState.FAILED: "red",
    TestState.SKIPPED: "yellow",
    TestState.ERRORED: "magenta",
}


def open_store(workspace: Path) -> ConfigStore:
    """Load settings for a workspace, turning config errors into CLI errors."""
    try:
        return ConfigStore(workspace)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e


def resolve_target(registry: TestRegistry, target: str) -> NodeId:
    """Parse ``Class`` or ``Class:method`` into a node id.

    The class may be given by its short name when that is unambiguous.

    Raises:
        click.BadParameter: If the class or method is unknown or ambiguous.
    """
    class_part, _, method = target.partition(":")
    test_class = registry.get_class(class_part)
    if test_class is None:
        matches = [c for c in registry.all_classes() if c.name == class_part]
        if not matches:
            raise click.BadParameter(f"Unknown test class: {class_part}")
        if len(matches) > 1:
            names = ", ".join(sorted(c.full_name for c in matches))
            raise click.BadParameter(f"Ambiguous test class {class_part}: {names}")
        test_class = matches[0]

    if not method:
        return NodeId.for_class(test_class.full_name)
    if test_class.method(method) is None:
        raise click.BadParameter(f"Unknown test method: {test_class.full_name}:{method}")
    return NodeId.for_method(test_class.full_name, method)


def build_tree(label: str, nodes: list[TreeNode], run: TestRun | None = None) -> Tree:
    """Render view nodes as a rich Tree, with run states when given."""
    tree = Tree(label)

    def add(parent: Tree, node: TreeNode) -> None:
        text = node.label
        if node.tags:
            text += f" [dim]({', '.join(sorted(node.tags))})[/dim]"
        if run is not None:
            state = run.states.get(node.node_id)
            if state is not None:
                text = f"[{STATE_STYLES[state]}]{state.value:>7}[/] {text}"
            description = run.descriptions.get(node.node_id)
            if description:
                text += f" [blue]{description}[/blue]"
        branch = parent.add(text)
        for child in node.children:
            add(branch, child)

    for node in nodes:
        add(tree, node)
    return tree


def node_to_dict(node: TreeNode) -> dict[str, Any]:
    return {
        "id": str(node.node_id),
        "kind": node.node_id.kind.value,
        "label": node.label,
        "path": str(node.path) if node.path is not None else None,
        "range": list(node.range) if node.range is not None else None,
        "tags": sorted(node.tags),
        "children": [node_to_dict(child) for child in node.children],
    }
