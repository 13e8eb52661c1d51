"""Exception hierarchy for okerr.

These are usage errors: a caller asked the algebra for something it cannot
do. Failures of the wrapped work never surface here; they travel as values.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable


class OkerrError(Exception):
    """Base exception for all okerr usage errors."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint

    def __str__(self) -> str:
        """Return the message, followed by the hint when one is set."""
        msg = super().__str__()
        return f"{msg}. {self.hint}" if self.hint else msg


class ConfigurationError(OkerrError, ValueError):
    """A config value failed validation."""


class UnmatchedCaseError(OkerrError, LookupError):
    """No arm in a cases map handled the discriminant.

    Raised instead of falling through silently. Add the missing arm, or pass
    an explicit ``_`` default arm.
    """

    def __init__(self, discriminant: Any, cases: Iterable[Any]) -> None:
        self.discriminant = discriminant
        self.cases = tuple(cases)
        available = ", ".join(repr(c) for c in self.cases) or "none"
        super().__init__(
            f"No case for {discriminant!r} (available: {available})",
            hint="Add an arm for it or a '_' default arm",
        )


class UnwrapError(OkerrError):
    """unwrap() hit a Failure whose error is not an exception.

    Python can only raise exceptions, so a non-exception error value rides
    along as ``error``, the identical object stored in the Failure.
    """

    def __init__(self, error: Any) -> None:
        self.error = error
        super().__init__(f"Called unwrap on a Failure: {error!r}")


class NotAFailureError(OkerrError, TypeError):
    """annotate() was called on a Success."""


class UnsupportedOperandError(OkerrError, TypeError):
    """result() got something that is not a record, awaitable or callable."""


class RehydrationError(OkerrError, ValueError):
    """A plain record could not be rebuilt into a Result."""
