"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
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

from fixtures import CountingStrategy  # noqa: E402
from hashtree.crypto.hashing import HashAlgorithm, HashlibStrategy  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def sha256_strategy():
    return HashlibStrategy(HashAlgorithm.SHA256)


@pytest.fixture
def md5_strategy():
    return HashlibStrategy(HashAlgorithm.MD5)


@pytest.fixture
def counting_strategy():
    return CountingStrategy()


@pytest.fixture
def odd_block_data():
    """3000 bytes of 0x2a: three 1000-byte blocks."""
    return bytes([42]) * 3000


@pytest.fixture
def clean_env(monkeypatch):
    """Remove HASHTREE_* variables so config tests see defaults."""
    for var in ("HASHTREE_BLOCK_SIZE", "HASHTREE_ALGORITHM", "HASHTREE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch
