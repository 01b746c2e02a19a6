"""Locate, parse, cache and merge Codeception configuration documents."""

from __future__ import annotations

from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from cestplane.codecept.models import (
    DEFAULT_TEST_PATH,
    PRIMARY_CONFIG_NAMES,
    ConfigDocument,
    ResolvedConfig,
    is_primary_config,
    merge_documents,
)
from cestplane.config.store import ConfigStore
from cestplane.core.errors import ConfigError
from cestplane.core.paths import find_files, matches_glob, relative_to_workspace
from cestplane.watch.channel import FileChange

logger = structlog.get_logger()


def _config_sort_key(path: Path) -> tuple[int, str, str]:
    return (0 if is_primary_config(path.name) else 1, path.name, str(path))


def parse_config_file(path: Path) -> ConfigDocument:
    """Read and validate one YAML document.

    Raises:
        ConfigError: If the file is unreadable, not YAML, or not a mapping.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return ConfigDocument()
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    try:
        return ConfigDocument.model_validate(data)
    except ValidationError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e


class ConfigResolver:
    """Answers "which Codeception config applies here" for a workspace.

    Documents are memoized per absolute path. Failed parses are logged and
    not cached, so a fixed file is picked up on the next lookup.
    """

    def __init__(self, store: ConfigStore) -> None:
        self._store = store
        self._cache: dict[Path, ConfigDocument] = {}

    @property
    def workspace_root(self) -> Path:
        return self._store.workspace_root

    @property
    def cached_paths(self) -> frozenset[Path]:
        return frozenset(self._cache)

    def find_config_files(self) -> list[Path]:
        """All config files under the workspace, primary first, then by base name."""
        pattern = self._store.config.runner.pattern.config_file
        return sorted(find_files(self.workspace_root, pattern), key=_config_sort_key)

    def get_document(self, path: Path) -> ConfigDocument | None:
        key = path.resolve()
        cached = self._cache.get(key)
        if cached is not None:
            return cached
        try:
            document = parse_config_file(key)
        except ConfigError as e:
            logger.warning("config_parse_failed", path=str(key), error=e.message)
            return None
        self._cache[key] = document
        return document

    def find_nearest_config(self, file_path: Path) -> ResolvedConfig | None:
        """Config file applying to file_path, or None.

        With ``use_nearest_config_file`` the search walks upward from the
        file's directory and stops at the workspace root. Otherwise only the
        root is checked.
        """
        root = self.workspace_root.resolve()
        try:
            if self._store.config.runner.use_nearest_config_file:
                config_path = self._find_up(file_path.resolve().parent, root)
            else:
                config_path = self._find_in(root)
        except OSError as e:
            logger.warning("config_lookup_failed", path=str(file_path), error=str(e))
            return None

        if config_path is None:
            return None
        document = self.get_document(config_path)
        if document is None:
            return None
        return ResolvedConfig(document=document, path=config_path)

    @staticmethod
    def _find_in(directory: Path) -> Path | None:
        for name in PRIMARY_CONFIG_NAMES:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        return None

    def _find_up(self, start: Path, root: Path) -> Path | None:
        directory = start
        while True:
            found = self._find_in(directory)
            if found is not None:
                return found
            if directory == root or directory.parent == directory:
                return None
            directory = directory.parent

    def all_documents(self) -> list[ResolvedConfig]:
        """Every parseable document in merge order."""
        resolved: list[ResolvedConfig] = []
        for path in self.find_config_files():
            document = self.get_document(path)
            if document is not None:
                resolved.append(ResolvedConfig(document=document, path=path))
        return resolved

    def get_test_paths(self) -> set[str]:
        """Declared test roots plus every suite root, or ``{"tests"}``."""
        paths: set[str] = set()
        for resolved in self.all_documents():
            document = resolved.document
            if document.test_path:
                paths.add(document.test_path)
            for suite in document.suites.values():
                if suite.path:
                    paths.add(suite.path)
        return paths or {DEFAULT_TEST_PATH}

    def get_merged_config(self) -> ConfigDocument | None:
        merged = merge_documents(r.document for r in self.all_documents())
        if merged is None or merged.is_empty():
            return None
        return merged

    def invalidate(self, path: Path | None = None) -> None:
        """Evict one cached document, or the whole cache when path is None."""
        if path is None:
            self._cache.clear()
            logger.debug("config_cache_cleared")
            return
        if self._cache.pop(path.resolve(), None) is not None:
            logger.debug("config_cache_evicted", path=str(path))

    def is_config_file(self, path: Path) -> bool:
        pattern = self._store.config.runner.pattern.config_file
        return matches_glob(relative_to_workspace(path, self.workspace_root), pattern)

    def handle_change(self, change: FileChange) -> bool:
        """Evict the changed document. Returns True if the path was a config file."""
        if not self.is_config_file(change.path):
            return False
        self.invalidate(change.path)
        return True
