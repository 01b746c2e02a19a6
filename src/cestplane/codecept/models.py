"""Codeception configuration document models and multi-document merge."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

PRIMARY_CONFIG_NAMES: tuple[str, ...] = ("codeception.yml", "codeception.yaml")
DEFAULT_TEST_PATH = "tests"


class _Section(BaseModel):
    # Codeception documents carry many keys we never read; keep them.
    model_config = ConfigDict(extra="allow")


class PathsSection(_Section):
    tests: str | None = None
    output: str | None = None
    data: str | None = None
    support: str | None = None


class CoverageReportSection(_Section):
    html: str | None = None
    xml: str | None = None
    php: str | None = None
    text: str | None = None


class CoverageSection(_Section):
    enabled: bool | None = None
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    show_uncovered: bool | None = None
    show_only_summary: bool | None = None
    remote: bool | None = None
    report: CoverageReportSection | None = None


class SettingsSection(_Section):
    coverage: CoverageSection | None = None


class SuiteConfig(_Section):
    """One entry of the ``suites`` map."""

    path: str | None = None
    class_name: str | None = None


class ConfigDocument(_Section):
    """Parsed codeception*.yml file."""

    paths: PathsSection | None = None
    settings: SettingsSection | None = None
    suites: dict[str, SuiteConfig] = Field(default_factory=dict)

    @field_validator("suites", mode="before")
    @classmethod
    def _null_suites(cls, v: Any) -> Any:
        # "suites:" with no body, or "unit:" with no body
        if v is None:
            return {}
        if isinstance(v, dict):
            return {name: suite if suite is not None else {} for name, suite in v.items()}
        return v

    @property
    def test_path(self) -> str | None:
        return self.paths.tests if self.paths else None

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_unset=True, exclude_defaults=True)


@dataclass(frozen=True)
class ResolvedConfig:
    """A config document together with the file it was read from."""

    document: ConfigDocument
    path: Path


def is_primary_config(name: str) -> bool:
    return name in PRIMARY_CONFIG_NAMES


def _merged_dict(base: Any, override: dict[str, Any]) -> dict[str, Any]:
    return {**(base if isinstance(base, dict) else {}), **override}


def merge_into(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    """Fold one raw document into target, in place.

    Scalars override. ``paths``, ``suites`` and ``settings`` merge key by
    key, ``settings.coverage`` likewise, ``settings.coverage.report`` one
    level deeper.
    """
    for key, value in source.items():
        if key in ("paths", "suites") and isinstance(value, dict):
            target[key] = _merged_dict(target.get(key), value)
        elif key == "settings" and isinstance(value, dict):
            previous = target.get("settings") if isinstance(target.get("settings"), dict) else {}
            settings = _merged_dict(previous, value)
            coverage = value.get("coverage")
            if isinstance(coverage, dict):
                previous_cov = previous.get("coverage") if isinstance(previous.get("coverage"), dict) else {}
                merged_cov = _merged_dict(previous_cov, coverage)
                report = coverage.get("report")
                if isinstance(report, dict):
                    merged_cov["report"] = _merged_dict(previous_cov.get("report"), report)
                settings["coverage"] = merged_cov
            target["settings"] = settings
        else:
            target[key] = value
    return target


def merge_documents(documents: Iterable[ConfigDocument]) -> ConfigDocument | None:
    """Merge documents in the given order, later ones winning.

    Returns None when there is nothing to merge.
    """
    merged: dict[str, Any] = {}
    for document in documents:
        merge_into(merged, document.model_dump(exclude_unset=True))
    if not merged:
        return None
    return ConfigDocument.model_validate(merged)
