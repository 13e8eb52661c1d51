"""Free-function forms of the Result operations.

Each function takes the Result first and forwards to the variant's method, so
the logic lives in one place. Plain records (``{"ok": ..., ...}``) are
rehydrated first, which lets the pure-function style work over bare data.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
import itertools
from typing import Any

from okerr.errors import NotAFailureError
from okerr.matching import match_discriminant, merge_cases
from okerr.payload import ErrorPayload, is_payload
from okerr.serde import rehydrate
from okerr.variants import Failure, Result, is_result

__all__ = [
    "annotate",
    "collect_values",
    "flat_map",
    "map",
    "map_err",
    "match",
    "or_else",
    "unwrap",
    "unwrap_or_else",
    "values",
]

ResultLike = Result[Any, Any] | Mapping[str, Any]


def _live(result: ResultLike) -> Result[Any, Any]:
    return result if is_result(result) else rehydrate(result)  # type: ignore[return-value]


def map(result: ResultLike, fn: Callable[[Any], Any]) -> Result[Any, Any]:  # noqa: A001
    """Success -> Success(fn(value)); a Failure passes through untouched."""
    return _live(result).map(fn)


def map_err(result: ResultLike, fn: Callable[[Any], Any]) -> Result[Any, Any]:
    """Failure -> Failure(fn(error)); a Success passes through untouched."""
    return _live(result).map_err(fn)


def flat_map(
    result: ResultLike, fn: Callable[[Any], Result[Any, Any]]
) -> Result[Any, Any]:
    """Success -> fn(value); a Failure short-circuits."""
    return _live(result).flat_map(fn)


def unwrap(result: ResultLike) -> Any:
    """Return the value, or raise the stored error (see ``Failure.unwrap``)."""
    return _live(result).unwrap()


def or_else(result: ResultLike, fallback: Any) -> Any:
    """Return the value, or *fallback* on failure.

    Eager: *fallback* is computed before the call. Use ``unwrap_or_else`` to
    compute it only on failure.
    """
    return _live(result).or_(fallback)


def unwrap_or_else(result: ResultLike, fn: Callable[[Any], Any]) -> Any:
    """Return the value, or ``fn(error)`` computed only on failure."""
    return _live(result).unwrap_or_else(fn)


def values(result: ResultLike) -> Iterator[Any]:
    """Iterate the zero-or-one successful values of *result*."""
    return iter(_live(result))


def collect_values(results: Iterable[ResultLike]) -> Iterator[Any]:
    """Yield the value of every Success in *results*, skipping failures."""
    return itertools.chain.from_iterable(values(r) for r in results)


def annotate(
    result: ResultLike,
    type_: str,
    payload: Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> Failure[ErrorPayload]:
    """Wrap a Failure's error as the cause of a new typed error.

    Raises:
        NotAFailureError: if *result* is a Success.
    """
    live = _live(result)
    if not isinstance(live, Failure):
        raise NotAFailureError(
            "annotate() needs a Failure",
            hint="Check result.ok before adding error context",
        )
    return live.annotate(type_, payload, **fields)


def match(
    subject: Any,
    cases: Mapping[Any, Callable[..., Any]] | None = None,
    /,
    **arms: Callable[..., Any],
) -> Any:
    """Dispatch on a Result, or on an error discriminant.

    With a Result (or Result record) the ``ok`` arm gets the value and the
    ``err`` arm gets the error. With anything else the arm keyed by the
    discriminant runs; see ``okerr.matching.match_discriminant``.

    Example:
        match(res, ok=lambda v: v * 2, err=lambda e: 0)
        match(res.error, {"Timeout": lambda e: e.ms, "NotFound": lambda e: 0})

    Raises:
        UnmatchedCaseError: when no arm handles the subject.
    """
    merged = merge_cases(cases, arms)
    if is_result(subject) or (
        isinstance(subject, Mapping) and "ok" in subject and not is_payload(subject)
    ):
        return _live(subject).match(merged)
    return match_discriminant(subject, merged)
