"""
Pytest configuration and shared fixtures for distributor tests.

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

ALICE = _common.ALICE
BOB = _common.BOB
make_address = _common.make_address
make_entries = _common.make_entries
write_allocation = _common.write_allocation


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def two_entries():
    """The [(A, 1), (B, 1)] distribution."""
    return [(ALICE, 1), (BOB, 1)]


@pytest.fixture
def entries():
    """Five distinct entries with distinct amounts (odd count exercises padding)."""
    return make_entries(5)


@pytest.fixture
def allocation_file(tmp_path, entries):
    """JSON allocation file holding the ``entries`` fixture."""
    return write_allocation(tmp_path / "allocation.json", entries)


@pytest.fixture(autouse=True)
def _isolate_runtime_config(monkeypatch):
    """Keep tests independent of the developer's distributor config and env."""
    from core.config.runtime import set_default_config

    for name in (
        "DISTRIBUTOR_ALLOCATION_PATH",
        "DISTRIBUTOR_MERKLE_ROOT",
        "DISTRIBUTOR_TOKEN",
        "DISTRIBUTOR_ROLLBACK_ON_TRANSFER_FAILURE",
        "DISTRIBUTOR_LOG_LEVEL",
        "DISTRIBUTOR_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
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
