"""Clover coverage loading and path remapping."""

from cestplane.testing.coverage.clover import parse_clover, read_clover
from cestplane.testing.coverage.mapper import CoverageMapper
from cestplane.testing.coverage.models import (
    CoverageSummary,
    FileCoverage,
    LineHit,
    ReportedFile,
)

__all__ = [
    "CoverageMapper",
    "CoverageSummary",
    "FileCoverage",
    "LineHit",
    "ReportedFile",
    "parse_clover",
    "read_clover",
]
