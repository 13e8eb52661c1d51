"""Success and Failure: the two shapes of a Result.

Both are frozen, slotted dataclasses, so they compare structurally and can be
turned into plain records (``to_record()``) and rebuilt later. Each variant
carries its own branch of every combinator; the free functions in
``okerr.combinators`` forward here.

Example:
    ```python
    def greet(user_id: int) -> Result[str, ErrorPayload]:
        if user_id < 0:
            return err("InvalidId", id=user_id)
        return ok(f"Hi user {user_id}!")

    greet(-1).map(str.upper).or_("Hi stranger!")  # "Hi stranger!"

    match greet(7):
        case Success(text):
            print(text)
        case Failure(error):
            print(error.type)
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
import dataclasses
import typing
from typing import Any, ClassVar, Literal, NoReturn

from okerr.annotation import annotate_error
from okerr.errors import UnwrapError
from okerr.matching import merge_cases, select_arm
from okerr.payload import ErrorPayload

__all__ = ["Failure", "Result", "Success", "err", "fail", "is_result", "ok"]

TValue = typing.TypeVar("TValue")
TError = typing.TypeVar("TError")


@dataclasses.dataclass(frozen=True, slots=True)
class Success[V]:
    """A successful outcome carrying ``value``."""

    value: V
    ok: ClassVar[Literal[True]] = True

    def map[U](self, fn: Callable[[V], U]) -> Success[U]:
        """Transform the value, staying in the Result context."""
        return Success(fn(self.value))

    def map_err(self, fn: Callable[[Any], Any]) -> Success[V]:  # noqa: ARG002
        return self

    def flat_map[U, F](
        self, fn: Callable[[V], Success[U] | Failure[F]]
    ) -> Success[U] | Failure[F]:
        """Chain a fallible step; its Result is returned as is."""
        return fn(self.value)

    def unwrap(self) -> V:
        return self.value

    def or_(self, fallback: Any) -> V:  # noqa: ARG002
        return self.value

    def unwrap_or_else(self, fn: Callable[[Any], Any]) -> V:  # noqa: ARG002
        return self.value

    def match[R](
        self,
        cases: Mapping[str, Callable[..., R]] | None = None,
        /,
        **arms: Callable[..., R],
    ) -> R:
        """Call the ``ok`` arm with the value."""
        return select_arm(merge_cases(cases, arms), "ok")(self.value)

    def to_record(self) -> dict[str, Any]:
        return {"ok": True, "value": self.value}

    def __iter__(self) -> Iterator[V]:
        yield self.value


@dataclasses.dataclass(frozen=True, slots=True)
class Failure[E]:
    """A failed outcome carrying ``error``."""

    error: E
    ok: ClassVar[Literal[False]] = False

    def map(self, fn: Callable[[Any], Any]) -> Failure[E]:  # noqa: ARG002
        return self

    def map_err[F](self, fn: Callable[[E], F]) -> Failure[F]:
        """Transform the error, e.g. to enrich or adapt it."""
        return Failure(fn(self.error))

    def flat_map(self, fn: Callable[[Any], Any]) -> Failure[E]:  # noqa: ARG002
        return self

    def unwrap(self) -> NoReturn:
        """Raise the stored error itself.

        Raises:
            E: when the error is an exception (every ErrorPayload is one).
            UnwrapError: otherwise, with the stored object as ``error``.
        """
        if isinstance(self.error, BaseException):
            raise self.error
        raise UnwrapError(self.error)

    def or_[T](self, fallback: T) -> T:
        """Return the fallback; it is evaluated eagerly by the caller."""
        return fallback

    def unwrap_or_else[T](self, fn: Callable[[E], T]) -> T:
        """Compute a fallback from the error, only on failure."""
        return fn(self.error)

    def annotate(
        self,
        type_: str,
        payload: Mapping[str, Any] | None = None,
        /,
        **fields: Any,
    ) -> Failure[ErrorPayload]:
        """Wrap this error as the ``cause`` of a new, more specific one.

        Example:
            io = err("IO", errno="ENOENT")
            io.annotate("ConfigFileMissing", path="/etc/app.json")
        """
        return Failure(annotate_error(self.error, type_, payload, **fields))

    def match[R](
        self,
        cases: Mapping[str, Callable[..., R]] | None = None,
        /,
        **arms: Callable[..., R],
    ) -> R:
        """Call the ``err`` arm with the error."""
        return select_arm(merge_cases(cases, arms), "err")(self.error)

    def to_record(self) -> dict[str, Any]:
        return {"ok": False, "error": self.error}

    def __iter__(self) -> Iterator[NoReturn]:
        return iter(())


Result = Success[TValue] | Failure[TError]


def is_result(value: Any) -> bool:
    """Return True for a live Success or Failure."""
    return isinstance(value, Success | Failure)


# --- Constructors ---


def ok[V](value: V = None) -> Success[V]:  # type: ignore[assignment]
    """Construct a Success; ``ok()`` carries ``None``."""
    return Success(value)


def err(
    type_: str,
    payload: Mapping[str, Any] | None = None,
    /,
    **fields: Any,
) -> Failure[ErrorPayload]:
    """Construct a typed Failure with a discriminant and optional context.

    Example:
        timeout = err("Timeout", ms=2000)
        not_found = err("NotFound", {"id": 123})
    """
    return Failure(ErrorPayload(type_, **{**(payload or {}), **fields}))


def fail[E](error: E) -> Failure[E]:
    """Wrap any error value verbatim, without a discriminant."""
    return Failure(error)
