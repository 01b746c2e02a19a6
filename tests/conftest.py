"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import os
import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local cestplane package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of cestplane modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("cestplane"):
        del sys.modules[module_name]


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user-level settings and CESTPLANE__ env vars out of every test."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(
        "cestplane.config.loader.GLOBAL_CONFIG_PATH",
        home / ".config" / "cestplane" / "config.yaml",
    )
    for key in list(os.environ):
        if key.startswith("CESTPLANE__"):
            monkeypatch.delenv(key)
