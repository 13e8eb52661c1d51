"""Pytest configuration and fixtures.

Provides environment isolation, config cache resets, and logging setup. All
fixtures here are autouse unless noted.
"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass, field
import logging
import os
from typing import Any

import pytest

from okerr.config import reset_config

# =============================================================================
# Test Doubles
# =============================================================================


@dataclass
class SpyFn:
    """Callable double that records every argument it receives.

    Use to check that a combinator never invokes a function on the branch it
    skips.
    """

    returns: Callable[[Any], Any] = lambda x: x
    calls: list[Any] = field(default_factory=list)

    def __call__(self, arg: Any) -> Any:
        self.calls.append(arg)
        return self.returns(arg)

    @property
    def called(self) -> bool:
        return bool(self.calls)


@pytest.fixture
def spy() -> SpyFn:
    """Return a fresh identity SpyFn (not autouse)."""
    return SpyFn()


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================


@pytest.fixture(autouse=True)
def block_dotenv(request, monkeypatch):
    """Prevent python-dotenv from loading project .env files during tests.

    Opt-out: @pytest.mark.allow_dotenv
    """
    if request.node.get_closest_marker("allow_dotenv"):
        return
    with suppress(Exception):
        monkeypatch.setattr(
            "okerr.config.load_dotenv", lambda *_args, **_kwargs: False
        )


@pytest.fixture(autouse=True)
def isolate_okerr_env(request, monkeypatch):
    """Clear OKERR_* env vars and the cached default config for each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if not request.node.get_closest_marker("allow_env_pollution"):
        for key in list(os.environ.keys()):
            if key.startswith("OKERR_"):
                monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def okerr_debug_logging():
    """Let caplog see okerr's DEBUG traces."""
    logging.getLogger("okerr").setLevel(logging.DEBUG)
