"""Universal adapter: turn foreign outcomes into Results.

``result()`` accepts exactly three operand shapes, classified once, in this
order:

1. a Result-shaped record (live, or a plain mapping with ``ok``): rehydrated;
2. an awaitable: wrapped in a ``Pending`` handle the caller must await;
3. a zero-argument callable: invoked now, its return or exception captured.

A live Result is itself a record and is never mistaken for something to call.

Example:
    ```python
    parsed = result(lambda: json.loads(text))
    if not parsed.ok:
        log.warning("bad payload: %s", parsed.error)

    response = await result(client.get(url))
    live = result(json.loads(serialized))
    ```
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator, Mapping
import enum
import functools
import inspect
import logging
from typing import Any, overload

from okerr.config import Config, resolve_config
from okerr.errors import UnsupportedOperandError
from okerr.serde import rehydrate
from okerr.variants import Failure, Result, Success, is_result

__all__ = [
    "OperandKind",
    "Pending",
    "capture",
    "capture_async",
    "classify",
    "from_awaitable",
    "from_callable",
    "result",
]

logger = logging.getLogger(__name__)


class OperandKind(enum.Enum):
    """The operand shapes ``result()`` understands."""

    RECORD = "record"
    AWAITABLE = "awaitable"
    CALLABLE = "callable"


def classify(work: Any) -> OperandKind:
    """Return the operand kind of *work*.

    Raises:
        UnsupportedOperandError: for anything that is none of the three.
    """
    if is_result(work) or (isinstance(work, Mapping) and "ok" in work):
        return OperandKind.RECORD
    if inspect.isawaitable(work):
        return OperandKind.AWAITABLE
    if callable(work):
        return OperandKind.CALLABLE
    raise UnsupportedOperandError(
        f"Cannot make a Result from {type(work).__name__}",
        hint="Pass a zero-argument callable, an awaitable, or a Result record",
    )


def _capturable(config: Config) -> type[BaseException]:
    return BaseException if config.capture_base_exceptions else Exception


def from_callable[T](
    work: Callable[[], T], *, config: Config | None = None
) -> Result[T, Any]:
    """Call *work* now; its return becomes Success, its exception Failure."""
    catch = _capturable(resolve_config(config))
    try:
        value = work()
    except asyncio.CancelledError:
        raise
    except catch as e:
        logger.debug("Captured %s from %r", type(e).__name__, work)
        return Failure(e)
    return Success(value)


class Pending[T]:
    """Awaitable handle that settles exactly once into a Result.

    Nothing runs until the handle is awaited. Awaiting again (or from several
    tasks) yields the same Result. Cancelling one awaiter does not cancel the
    shared work. No timeout or retry is added; an awaitable that never settles
    leaves the handle pending.
    """

    __slots__ = ("_awaitable", "_catch", "_outcome", "_task")

    def __init__(self, awaitable: Awaitable[T], *, config: Config | None = None):
        self._awaitable = awaitable
        self._catch = _capturable(resolve_config(config))
        self._outcome: Result[T, Any] | None = None
        self._task: asyncio.Future[T] | None = None

    @property
    def done(self) -> bool:
        """True once the handle has settled."""
        return self._outcome is not None

    def __await__(self) -> Generator[Any, None, Result[T, Any]]:
        return self._settle().__await__()

    async def _settle(self) -> Result[T, Any]:
        if self._outcome is not None:
            return self._outcome
        if self._task is None:
            self._task = asyncio.ensure_future(self._awaitable)
        try:
            value = await asyncio.shield(self._task)
        except asyncio.CancelledError:
            raise
        except self._catch as e:
            logger.debug("Captured %s from awaitable", type(e).__name__)
            outcome: Result[T, Any] = Failure(e)
        else:
            outcome = Success(value)
        if self._outcome is None:
            self._outcome = outcome
        return self._outcome

    def __repr__(self) -> str:
        state = repr(self._outcome) if self._outcome is not None else "pending"
        return f"Pending({state})"


def from_awaitable[T](
    work: Awaitable[T], *, config: Config | None = None
) -> Pending[T]:
    """Wrap *work* in a Pending handle; fulfillment is Success, rejection Failure."""
    return Pending(work, config=config)


@overload
def result[V, E](
    work: Success[V] | Failure[E], *, config: Config | None = None
) -> Result[V, E]: ...
@overload
def result(
    work: Mapping[str, Any], *, config: Config | None = None
) -> Result[Any, Any]: ...
@overload
def result[T](work: Awaitable[T], *, config: Config | None = None) -> Pending[T]: ...
@overload
def result[T](
    work: Callable[[], T], *, config: Config | None = None
) -> Result[T, Any]: ...
def result(work: Any, *, config: Config | None = None) -> Any:
    """Normalize a record, awaitable or callable into a Result.

    Raises:
        UnsupportedOperandError: if *work* is none of the accepted shapes.
        RehydrationError: if a record fails validation.
    """
    kind = classify(work)
    logger.debug("result() operand classified as %s", kind.value)
    if kind is OperandKind.RECORD:
        return rehydrate(work, config=config)
    if kind is OperandKind.AWAITABLE:
        return from_awaitable(work, config=config)
    return from_callable(work, config=config)


# --- Decorators ---


def capture[**P, T](fn: Callable[P, T]) -> Callable[P, Result[T, Any]]:
    """Wrap *fn* so each call returns a Result instead of raising.

    Example:
        @capture
        def parse(text: str) -> dict:
            return json.loads(text)

        parse("{")  # Failure(JSONDecodeError(...))
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, Any]:
        return from_callable(functools.partial(fn, *args, **kwargs))

    return wrapper


def capture_async[**P, T](
    fn: Callable[P, Awaitable[T]],
) -> Callable[P, Awaitable[Result[T, Any]]]:
    """Async counterpart of ``capture`` for coroutine functions."""

    @functools.wraps(fn)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Result[T, Any]:
        return await from_awaitable(fn(*args, **kwargs))

    return wrapper
