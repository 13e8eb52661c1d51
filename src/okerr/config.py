"""Configuration: frozen Config with a context-scoped active instance."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
import os
from typing import Any

from dotenv import load_dotenv

from okerr.errors import ConfigurationError

# Environment toggles; a flag is on only when its value is exactly "1".
_ENV_FLAGS: dict[str, str] = {
    "strict_rehydrate": "OKERR_STRICT_REHYDRATE",
    "capture_base_exceptions": "OKERR_CAPTURE_BASE_EXCEPTIONS",
}


@dataclass(frozen=True)
class Config:
    """Immutable settings for the adapter and the wire codec.

    Example:
        with use_config(strict_rehydrate=True):
            rehydrate({"ok": True})  # raises RehydrationError
    """

    #: Reject records that lack their payload field or carry the opposite one.
    strict_rehydrate: bool = False
    #: Let result() capture BaseException (KeyboardInterrupt, SystemExit).
    #: asyncio.CancelledError always propagates.
    capture_base_exceptions: bool = False

    def __post_init__(self) -> None:
        """Validate field types early for clear errors."""
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, bool):
                raise ConfigurationError(
                    f"{f.name} must be a bool, got {type(value).__name__}",
                    hint=f"Pass {f.name}=True or {f.name}=False",
                )

    @classmethod
    def from_env(cls) -> Config:
        """Build a Config from ``OKERR_*`` variables, loading ``.env`` first."""
        load_dotenv()
        values = {
            name: os.getenv(env_var) == "1" for name, env_var in _ENV_FLAGS.items()
        }
        return cls(**values)


_default_config: Config | None = None
_config_var: ContextVar[Config | None] = ContextVar("okerr_config", default=None)


def current_config() -> Config:
    """Return the config in effect for the current context."""
    global _default_config
    scoped = _config_var.get()
    if scoped is not None:
        return scoped
    if _default_config is None:
        _default_config = Config.from_env()
    return _default_config


def resolve_config(config: Config | None) -> Config:
    """Return *config* when given, else the active one."""
    return config if config is not None else current_config()


@contextmanager
def use_config(config: Config | None = None, **overrides: Any) -> Iterator[Config]:
    """Scope a config (and/or field overrides) to the enclosed block."""
    base = config if config is not None else current_config()
    try:
        scoped = replace(base, **overrides) if overrides else base
    except TypeError as e:
        raise ConfigurationError(
            str(e), hint=f"Known fields: {', '.join(_ENV_FLAGS)}"
        ) from e
    token = _config_var.set(scoped)
    try:
        yield scoped
    finally:
        _config_var.reset(token)


def reset_config() -> None:
    """Forget the cached env-derived default so the next read re-loads it."""
    global _default_config
    _default_config = None
