"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of covwire modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("covwire"):
        del sys.modules[module_name]


@pytest.fixture
def make_env() -> Callable[..., Callable[[str], str | None]]:
    """Build a synthetic environment lookup from keyword variables."""

    def _make(**variables: str) -> Callable[[str], str | None]:
        return variables.get

    return _make
