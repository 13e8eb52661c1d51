"""Error annotation: layering context onto a failure as it crosses a boundary.

Each step wraps the prior error as ``cause`` of a new payload, so chains are
finite and acyclic by construction.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from okerr.errors import NotAFailureError
from okerr.payload import CAUSE_KEY, ErrorPayload

if TYPE_CHECKING:
    from okerr.variants import Result

__all__ = ["annotate_error", "cause"]


def annotate_error(
    prior: Any,
    type_: str,
    payload: Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> ErrorPayload:
    """Build ``{type, **payload, **fields, cause: prior}``.

    The explicit *type_* and *prior* win over same-named keys in the context.
    """
    context = {**(payload or {}), **fields}
    context[CAUSE_KEY] = prior
    return ErrorPayload(type_, **context)


def cause(result: Result[Any, Any]) -> dict[str, Any]:
    """Return ``{"cause": result.error}`` for splicing into a new error.

    ``err("B", cause(base))`` builds the same chain as ``base.annotate("B")``.
    """
    if result.ok:
        raise NotAFailureError(
            "cause() needs a Failure", hint="Only failures carry an error to wrap"
        )
    return {CAUSE_KEY: result.error}
