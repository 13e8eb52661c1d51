"""Typed error payloads and their cause chains.

An ``ErrorPayload`` is the conventional shape for modeled failures: a
read-only mapping with a string ``type`` discriminant, free-form context
fields, and an optional ``cause`` holding the error it wraps. It is also an
exception, so ``unwrap()`` can raise the stored payload itself.

Example:
    ```python
    io = ErrorPayload("IO", errno="ENOENT")
    cfg = ErrorPayload("ConfigFileMissing", path="/etc/app.json", cause=io)
    assert cfg.cause.errno == "ENOENT"
    assert [e["type"] for e in cause_chain(cfg)] == ["ConfigFileMissing", "IO"]
    ```
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

__all__ = ["ErrorPayload", "cause_chain", "is_payload", "is_restorable", "root_cause"]

TYPE_KEY = "type"
CAUSE_KEY = "cause"

_MISSING: Any = object()


class ErrorPayload(Exception, Mapping[str, Any]):
    """A discriminated, optionally chained, error value.

    Fields read as attributes (``e.path``) unless the name is already taken by
    the mapping or exception API (``keys``, ``values``, ``items``, ``get``,
    ``args``, ``to_dict``, ...). Item access (``e["values"]``) always reaches
    the field.
    """

    def __init__(self, type_: str, /, **fields: Any) -> None:
        if not isinstance(type_, str) or not type_:
            raise TypeError(f"error type must be a non-empty str, got {type_!r}")
        super().__init__(type_)
        fields.pop(TYPE_KEY, None)
        data: dict[str, Any] = {TYPE_KEY: type_}
        cause = fields.pop(CAUSE_KEY, _MISSING)
        data.update(fields)
        if cause is not _MISSING:
            data[CAUSE_KEY] = cause
            if isinstance(cause, BaseException):
                self.__cause__ = cause
        self._data = data

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ErrorPayload:
        """Rebuild a payload (and any payload-shaped causes) from a mapping."""
        if isinstance(data, ErrorPayload):
            return data
        fields = {k: v for k, v in data.items() if k != TYPE_KEY}
        cause = fields.get(CAUSE_KEY)
        if is_restorable(cause):
            fields[CAUSE_KEY] = cls.from_mapping(cause)
        return cls(data[TYPE_KEY], **fields)

    @property
    def type(self) -> str:
        """The discriminant."""
        return self._data[TYPE_KEY]

    @property
    def cause(self) -> Any:
        """The wrapped prior error, or None at the end of a chain."""
        return self._data.get(CAUSE_KEY)

    def to_dict(self) -> dict[str, Any]:
        """Return a plain dict copy, converting payload causes recursively."""
        out = dict(self._data)
        if isinstance(out.get(CAUSE_KEY), ErrorPayload):
            out[CAUSE_KEY] = out[CAUSE_KEY].to_dict()
        return out

    # Mapping protocol

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails; private names never map to
        # fields (and _data may not exist yet while unpickling).
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._data[name]
        except KeyError:
            raise AttributeError(
                f"{type(self).__name__} {self.type!r} has no field {name!r}"
            ) from None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return dict(self._data) == dict(other.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._data!r})"

    def __str__(self) -> str:
        """Render the chain, most specific first: ``B(extra=1) <- A(id=2)``."""
        parts = []
        for link in cause_chain(self):
            if isinstance(link, Mapping) and isinstance(link.get(TYPE_KEY), str):
                ctx = ", ".join(
                    f"{k}={v!r}"
                    for k, v in link.items()
                    if k not in (TYPE_KEY, CAUSE_KEY)
                )
                parts.append(f"{link[TYPE_KEY]}({ctx})")
            else:
                parts.append(repr(link))
        return " <- ".join(parts)


def is_payload(value: Any) -> bool:
    """Return True for a mapping carrying a string ``type`` discriminant."""
    return isinstance(value, Mapping) and isinstance(value.get(TYPE_KEY), str)


def is_restorable(value: Any) -> bool:
    """Return True when *value* can be rebuilt into an ErrorPayload.

    That needs a non-empty string ``type`` and only string keys; other
    mappings stay as they are.
    """
    return (
        is_payload(value)
        and bool(value[TYPE_KEY])
        and all(isinstance(k, str) for k in value)
    )


def cause_chain(error: Any) -> Iterator[Any]:
    """Yield *error*, then each successive ``cause`` until none is left."""
    current = error
    while current is not None:
        yield current
        current = current.get(CAUSE_KEY) if isinstance(current, Mapping) else None


def root_cause(error: Any) -> Any:
    """Return the least specific error at the end of the chain."""
    last = error
    for link in cause_chain(error):
        last = link
    return last
