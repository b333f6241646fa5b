"""
Pytest configuration and shared fixtures for chainkit tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Resets the process-wide default config between tests
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

import importlib

_common = importlib.import_module("fixtures.common")

SAMPLE_WORDS = _common.SAMPLE_WORDS
make_tree = _common.make_tree
make_chain = _common.make_chain

from chainkit.config.runtime import set_default_config


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def reset_default_config(monkeypatch):
    """Isolate tests from CHAINKIT_* variables and the cached default config."""
    for name in ("CHAINKIT_LOG_LEVEL", "CHAINKIT_LOG_FILE", "CHAINKIT_GENESIS_MARKER", "CHAINKIT_DEBUG"):
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def sample_words():
    """The five-word sample with an odd leaf count."""
    return list(SAMPLE_WORDS)


@pytest.fixture
def sample_tree():
    """A MerkleTree over the five sample words."""
    return make_tree()


@pytest.fixture
def five_block_chain():
    """A five-block chain with dict payloads."""
    return make_chain(5)
