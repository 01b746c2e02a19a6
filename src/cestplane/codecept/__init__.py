"""Codeception configuration documents."""

from cestplane.codecept.models import (
    ConfigDocument,
    ResolvedConfig,
    SuiteConfig,
    merge_documents,
)
from cestplane.codecept.resolver import ConfigResolver

__all__ = [
    "ConfigDocument",
    "ConfigResolver",
    "ResolvedConfig",
    "SuiteConfig",
    "merge_documents",
]
