"""Resolved settings holder with explicit reload and change listeners."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import structlog

from cestplane.config.loader import load_config
from cestplane.config.models import CestPlaneConfig

logger = structlog.get_logger()

ConfigListener = Callable[[CestPlaneConfig, frozenset[str]], None]


def _flatten(data: dict[str, Any], prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict) and value:
            flat.update(_flatten(value, f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def diff_keys(old: CestPlaneConfig, new: CestPlaneConfig) -> frozenset[str]:
    """Dotted keys (e.g. ``runner.view_mode``) whose values differ."""
    before = _flatten(old.model_dump())
    after = _flatten(new.model_dump())
    return frozenset(k for k in before.keys() | after.keys() if before.get(k) != after.get(k))


class ConfigStore:
    """Single source of truth for settings, passed to every component that reads them.

    Components call ``store.config`` at the point of use rather than caching
    values, so a ``reload()`` takes effect on the next read.
    """

    def __init__(
        self,
        workspace_root: Path,
        config: CestPlaneConfig | None = None,
        **overrides: Any,
    ) -> None:
        self._workspace_root = workspace_root.resolve()
        self._overrides = overrides
        self._config = config if config is not None else load_config(workspace_root, **overrides)
        self._listeners: list[ConfigListener] = []

    @property
    def workspace_root(self) -> Path:
        return self._workspace_root

    @property
    def config(self) -> CestPlaneConfig:
        return self._config

    def get(self) -> CestPlaneConfig:
        return self._config

    def subscribe(self, listener: ConfigListener) -> Callable[[], None]:
        """Register a listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, config: CestPlaneConfig) -> frozenset[str]:
        """Swap in a new config and notify listeners of the changed keys."""
        changed = diff_keys(self._config, config)
        self._config = config
        if not changed:
            return changed
        logger.info("config_changed", keys=sorted(changed))
        for listener in list(self._listeners):
            listener(config, changed)
        return changed

    def reload(self) -> frozenset[str]:
        """Re-read all configuration sources.

        Raises:
            ConfigError: If the new configuration cannot be loaded. The
                previous configuration stays active.
        """
        return self.replace(load_config(self._workspace_root, **self._overrides))
