"""Arm selection and discriminant dispatch.

Two dispatch levels exist. The outer one asks "did it fail?" and lives on the
variants (``Success.match`` / ``Failure.match``). The inner one asks "which
failure?" and is ``match_discriminant`` here: it looks up the arm keyed by an
error's ``type`` (or by a bare discriminant) in a cases map.

A miss is an ``UnmatchedCaseError``, never a silent default. Callers opt into
a fallback by supplying the ``_`` arm.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any

from okerr.errors import UnmatchedCaseError
from okerr.payload import TYPE_KEY, is_payload

__all__ = ["DEFAULT_ARM", "match_discriminant", "merge_cases", "select_arm"]

DEFAULT_ARM = "_"


def merge_cases(
    cases: Mapping[Any, Callable[..., Any]] | None,
    arms: Mapping[str, Callable[..., Any]],
) -> dict[Any, Callable[..., Any]]:
    """Combine a positional cases map with keyword arms (keywords win)."""
    merged: dict[Any, Callable[..., Any]] = dict(cases or {})
    merged.update(arms)
    return merged


def select_arm(cases: Mapping[Any, Callable[..., Any]], key: Any) -> Callable[..., Any]:
    """Return the arm for *key*, falling back to ``_`` only when supplied."""
    if key in cases:
        return cases[key]
    if isinstance(key, Enum) and key.value in cases:
        return cases[key.value]
    if DEFAULT_ARM in cases:
        return cases[DEFAULT_ARM]
    raise UnmatchedCaseError(key, cases.keys())


def match_discriminant(subject: Any, cases: Mapping[Any, Callable[..., Any]]) -> Any:
    """Dispatch on an error's discriminant.

    A payload (mapping with a string ``type``) selects by its ``type`` and the
    arm receives the whole payload, so sibling fields stay reachable. A bare
    discriminant selects by itself and the arm is called with no arguments.
    """
    if is_payload(subject):
        return select_arm(cases, subject[TYPE_KEY])(subject)
    return select_arm(cases, subject)()
