"""Free-function combinators over live Results and plain records."""

from __future__ import annotations

import pytest

import okerr
from okerr import (
    ErrorPayload,
    NotAFailureError,
    collect_values,
    err,
    fail,
    flat_map,
    map_err,
    ok,
    or_else,
    unwrap,
    unwrap_or_else,
    values,
)

pytestmark = pytest.mark.unit


def double(n: int) -> int:
    return n * 2


def test_map_and_map_err() -> None:
    a = okerr.map(ok(2), double)
    b = okerr.map(err("E"), double)
    c = map_err(err("E", {"id": 1}), lambda e: {**e, "tag": "X"})

    assert a == ok(4)
    assert b.ok is False and b.error.type == "E"
    assert c.error["tag"] == "X"


def test_flat_map_sequences_fallible_steps() -> None:
    def div(a: float, b: float):
        return err("Div0") if b == 0 else ok(a / b)

    assert flat_map(ok(10), lambda n: div(n, 5)).ok is True
    assert flat_map(ok(10), lambda n: div(n, 0)).ok is False


def test_flat_map_never_calls_fn_on_failure(spy) -> None:
    res = fail("bad")
    assert flat_map(res, spy) is res
    assert not spy.called


def test_unwrap_and_or_else() -> None:
    assert unwrap(ok(42)) == 42
    assert or_else(ok(42), 7) == 42
    assert or_else(err("E"), 7) == 7
    assert unwrap_or_else(err("E", n=3), lambda e: e.n) == 3


def test_or_else_takes_a_value_while_unwrap_or_else_defers(spy) -> None:
    assert or_else(err("E"), spy) is spy
    assert unwrap_or_else(ok(1), spy) == 1
    assert spy.called is False


def test_unwrap_failure_raises_exactly_the_error() -> None:
    boom = ValueError("boom")
    with pytest.raises(ValueError) as exc:
        unwrap(fail(boom))
    assert exc.value is boom


def test_free_functions_accept_plain_records() -> None:
    """The function style works over bare two-field records."""
    assert okerr.map({"ok": True, "value": 2}, double) == ok(4)
    assert or_else({"ok": False, "error": "E"}, "fb") == "fb"
    with pytest.raises(ErrorPayload):
        unwrap({"ok": False, "error": {"type": "Gone"}})


def test_values_and_collect_values() -> None:
    results = [ok(1), err("E"), ok(2), fail("x"), {"ok": True, "value": 3}]

    assert list(values(ok(3))) == [3]
    assert list(values(err("E"))) == []
    assert list(collect_values(results)) == [1, 2, 3]


def test_annotate_free_function_rejects_success() -> None:
    with pytest.raises(NotAFailureError):
        okerr.annotate(ok(1), "Context")


def test_annotate_free_function_wraps_record_error() -> None:
    res = okerr.annotate({"ok": False, "error": {"type": "A"}}, "B", step=2)
    assert res.error == {"type": "B", "step": 2, "cause": {"type": "A"}}


def test_failure_passes_untouched_through_a_pipeline_to_its_fallback(spy) -> None:
    """An invalid id skips every step and lands on the literal fallback."""

    def greet(user_id: int):
        if user_id < 0:
            return err("InvalidId", id=user_id)
        return ok(f"user {user_id}")

    def lookup(name: str):
        spy(name)
        return ok(f"Hi {name}!")

    res = greet(-1).map(str.upper).flat_map(lookup)

    assert res.error == {"type": "InvalidId", "id": -1}
    assert res.or_("Hi stranger!") == "Hi stranger!"
    assert not spy.called
    assert greet(5).map(str.upper).flat_map(lookup).or_("Hi stranger!") == (
        "Hi USER 5!"
    )
