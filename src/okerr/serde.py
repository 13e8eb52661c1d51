"""Wire shape: plain records, JSON text, and rehydration.

A Result travels as ``{"ok": true, "value": V}`` or ``{"ok": false,
"error": E}``. Rehydration rebuilds a live Result from that record and restores
what plain serialization strips: error mappings carrying a non-empty string
``type`` and only string keys become ``ErrorPayload`` again (recursively
through ``cause``), so they can be raised and read by attribute.
"""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, ValidationError
from pydantic_core import from_json, to_json

from okerr.config import Config, resolve_config
from okerr.errors import RehydrationError
from okerr.payload import CAUSE_KEY, TYPE_KEY, ErrorPayload, is_restorable
from okerr.variants import Failure, Result, Success, is_result

__all__ = ["ResultRecord", "dumps", "loads", "rehydrate", "to_record"]

logger = logging.getLogger(__name__)


class ResultRecord(BaseModel):
    """Validated view of a plain Result record."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    ok: StrictBool
    value: Any = None
    error: Any = None


def to_record(result: Result[Any, Any]) -> dict[str, Any]:
    """Return the plain two-field record for *result*."""
    return result.to_record()


def _exception_fallback(value: Any) -> Any:
    """JSON form for values pydantic cannot serialize on its own."""
    if isinstance(value, ErrorPayload):
        return value.to_dict()
    if isinstance(value, BaseException):
        out: dict[str, Any] = {
            TYPE_KEY: type(value).__name__,
            "message": str(value),
        }
        if value.__cause__ is not None:
            out[CAUSE_KEY] = _exception_fallback(value.__cause__)
        return out
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(result: Result[Any, Any], *, indent: int | None = None) -> str:
    """Serialize *result* to JSON text.

    Error payloads keep their cause chain. Other exceptions become
    ``{"type": <class name>, "message": str(exc)}``.
    """
    return to_json(
        result.to_record(), indent=indent, fallback=_exception_fallback
    ).decode()


def loads(text: str | bytes, *, config: Config | None = None) -> Result[Any, Any]:
    """Parse JSON text and rehydrate it into a live Result."""
    try:
        raw = from_json(text)
    except ValueError as e:
        raise RehydrationError(
            f"Invalid JSON: {e}", hint="Pass text produced by okerr.dumps()"
        ) from e
    return rehydrate(raw, config=config)


def _restore_error(error: Any) -> Any:
    if isinstance(error, ErrorPayload) or not is_restorable(error):
        return error
    return ErrorPayload.from_mapping(error)


def rehydrate(
    record: Mapping[str, Any] | Result[Any, Any], *, config: Config | None = None
) -> Result[Any, Any]:
    """Rebuild a live Result from a plain record.

    Live Results pass through unchanged. In strict mode the record must carry
    exactly the field its ``ok`` flag calls for.

    Raises:
        RehydrationError: if the record fails validation.
    """
    if is_result(record):
        return record  # type: ignore[return-value]
    if not isinstance(record, Mapping):
        raise RehydrationError(
            f"Expected a mapping, got {type(record).__name__}",
            hint='Pass {"ok": true, "value": ...} or {"ok": false, "error": ...}',
        )

    cfg = resolve_config(config)
    try:
        parsed = ResultRecord.model_validate(dict(record))
    except ValidationError as e:
        raise RehydrationError(
            f"Not a Result record: {e.errors()[0]['msg']}",
            hint="The 'ok' field must be a bool",
        ) from e

    wanted, other = ("value", "error") if parsed.ok else ("error", "value")
    if cfg.strict_rehydrate:
        if wanted not in record:
            raise RehydrationError(f"Record with ok={parsed.ok} lacks {wanted!r}")
        if other in record:
            raise RehydrationError(
                f"Record with ok={parsed.ok} also carries {other!r}",
                hint="A Result holds a value or an error, never both",
            )

    logger.debug("Rehydrating %s record", "success" if parsed.ok else "failure")
    if parsed.ok:
        return Success(parsed.value)
    return Failure(_restore_error(parsed.error))
