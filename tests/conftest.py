"""
Pytest configuration and shared fixtures for whitelist Merkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
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

# =============================================================================
# Import fixtures using importlib (more robust for pytest loading)
# =============================================================================

import importlib

_common = importlib.import_module("fixtures.common")

REFERENCE_ENTRIES = _common.REFERENCE_ENTRIES
EXTENDED_ENTRIES = _common.EXTENDED_ENTRIES
make_leaves = _common.make_leaves
make_reference_leaves = _common.make_reference_leaves
write_whitelist_file = _common.write_whitelist_file


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def reference_entries():
    """Provide the three reference whitelist entries."""
    return [list(entry) for entry in REFERENCE_ENTRIES]


@pytest.fixture
def reference_leaves():
    """Provide keccak256 packed leaves for the reference entries."""
    return make_reference_leaves()


@pytest.fixture
def whitelist_file(tmp_path):
    """Provide a JSON whitelist file with the reference entries."""
    return write_whitelist_file(tmp_path)


@pytest.fixture(autouse=True)
def clean_whitelist_env(monkeypatch):
    """Keep WHITELIST_* settings from the outer environment out of tests."""
    for name in (
        "WHITELIST_HASH_FUNCTION",
        "WHITELIST_CODEC",
        "WHITELIST_SORT_LEAVES",
        "WHITELIST_LOG_LEVEL",
        "WHITELIST_LOG_FILE",
        "WHITELIST_OUTPUT_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)

    from core.config.runtime import set_default_config
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
