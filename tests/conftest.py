"""
Pytest configuration and shared fixtures for dynamerkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from the process-wide default configuration
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

# Get the project root (parent of tests/)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Add both project root and tests root to sys.path
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from dynamerkle.config.runtime import set_default_config  # noqa: E402
from dynamerkle.merkle import build_tree  # noqa: E402


_ENV_VARS = (
    "DYNAMERKLE_HASH_ALGORITHM",
    "DYNAMERKLE_MAX_PROOF_STEPS",
    "DYNAMERKLE_LOG_LEVEL",
    "DYNAMERKLE_LOG_FILE",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Clear DYNAMERKLE_* env vars and the cached default config around each test."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def abc_tree():
    """Tree over a, b, c (odd leaf count, c is self-paired)."""
    return build_tree([b"a", b"b", b"c"])


@pytest.fixture
def elements_file(tmp_path):
    """File with the elements a, b, c one per line."""
    path = tmp_path / "elements.txt"
    path.write_text("a\nb\nc\n")
    return path
