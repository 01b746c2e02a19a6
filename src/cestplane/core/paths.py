"""Workspace path helpers: placeholder substitution, relative paths, globbing."""

from __future__ import annotations

import fnmatch
import os
import re
from pathlib import Path

WORKSPACE_PLACEHOLDER = "${workspaceFolder}"

# Never traversed during test and config discovery.
EXCLUDED_DIRS: frozenset[str] = frozenset(
    (
        "vendor",
        "node_modules",
        ".git",
        ".svn",
        ".hg",
        ".idea",
        ".cestplane",
    )
)

_BRACE_RE = re.compile(r"\{([^{}]*)\}")


def substitute_workspace(text: str, workspace_root: Path) -> str:
    """Replace every ``${workspaceFolder}`` in text with the absolute root."""
    return text.replace(WORKSPACE_PLACEHOLDER, str(workspace_root))


def relative_to_workspace(path: Path | str, workspace_root: Path) -> str:
    """Posix path relative to the workspace, or the absolute path if outside it."""
    p = Path(path)
    if not p.is_absolute():
        return p.as_posix()
    try:
        return p.relative_to(workspace_root).as_posix()
    except ValueError:
        return p.as_posix()


def normalize_rel_path(path: str) -> str:
    """Forward slashes, no leading ``./``."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives, e.g. ``*{Cest,Test}.php``."""
    match = _BRACE_RE.search(pattern)
    if match is None:
        return [pattern]
    head, tail = pattern[: match.start()], pattern[match.end() :]
    expanded: list[str] = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def matches_glob(rel_path: str, pattern: str) -> bool:
    """Check if a posix relative path matches a glob pattern, with ** support."""
    for candidate in expand_braces(pattern):
        if fnmatch.fnmatchcase(rel_path, candidate):
            return True
        # ** may also match zero directories
        if candidate.startswith("**/") and fnmatch.fnmatchcase(rel_path, candidate[3:]):
            return True
        if "/**/" in candidate and fnmatch.fnmatchcase(
            rel_path, candidate.replace("/**/", "/")
        ):
            return True
    return False


def find_files(
    root: Path,
    pattern: str,
    *,
    excluded_dirs: frozenset[str] = EXCLUDED_DIRS,
) -> list[Path]:
    """Walk root and return files whose root-relative path matches pattern.

    Excluded directories are pruned, never descended into. Result is sorted.
    """
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded_dirs)
        current = Path(dirpath)
        for name in filenames:
            full = current / name
            rel = full.relative_to(root).as_posix()
            if matches_glob(rel, pattern):
                found.append(full)
    return sorted(found)
