"""
Pytest configuration and shared fixtures for ethdigest tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used digest fixtures via pytest's autodiscovery
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from ethdigest import Digest  # noqa: E402
from fixtures import EE_HEX, HELLO_ETHEREUM  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def ee_hex() -> str:
    """Canonical text of the all-0xee digest."""
    return EE_HEX


@pytest.fixture
def ee_digest() -> Digest:
    """Digest with every byte set to 0xee."""
    return Digest(b"\xee" * 32)


@pytest.fixture
def counting_digest() -> Digest:
    """Digest of bytes 0x00..0x1f."""
    return Digest(bytes(range(32)))


@pytest.fixture
def hello_digest() -> Digest:
    """Keccak-256 of "Hello Ethereum!"."""
    return Digest.parse(HELLO_ETHEREUM)


@pytest.fixture
def isolated_env(tmp_path, monkeypatch):
    """Run with a clean working directory, home and ETHDIGEST_* environment."""
    import os

    for name in list(os.environ):
        if name.startswith("ETHDIGEST_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    return tmp_path
