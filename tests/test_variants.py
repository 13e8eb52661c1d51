from __future__ import annotations

import dataclasses

import pytest

from okerr import ErrorPayload, Failure, Success, UnwrapError, err, fail, is_result, ok

pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("res", "expected"),
    [(ok(1), True), (err("X"), False), (fail(ValueError("x")), False)],
)
def test_ok_flag_matches_variant(res, expected: bool) -> None:
    assert res.ok is expected


def test_ok_without_value_carries_none() -> None:
    res = ok()
    assert res.ok is True
    assert res.value is None


def test_variants_carry_only_their_own_field() -> None:
    """A Success has no error and a Failure has no value."""
    assert not hasattr(ok(5), "error")
    assert not hasattr(err("E"), "value")


def test_err_builds_typed_payload_from_mapping_and_fields() -> None:
    res = err("Timeout", {"ms": 500}, host="db")

    assert isinstance(res.error, ErrorPayload)
    assert res.error == {"type": "Timeout", "ms": 500, "host": "db"}
    assert res.error.ms == 500


def test_fail_wraps_error_verbatim() -> None:
    boom = RuntimeError("boom")
    assert fail(boom).error is boom
    assert fail("plain").error == "plain"


def test_variants_are_immutable() -> None:
    with pytest.raises(dataclasses.FrozenInstanceError):
        ok(1).value = 2  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        fail("e").error = "other"  # type: ignore[misc]


def test_structural_equality() -> None:
    assert ok(1) == Success(1)
    assert err("A", id=2) == Failure({"type": "A", "id": 2})
    assert ok(None) != fail(None)


def test_structural_pattern_matching() -> None:
    def describe(res) -> str:
        match res:
            case Success(value):
                return f"value {value}"
            case Failure(error):
                return f"error {error.type}"
        return "unreachable"

    assert describe(ok(3)) == "value 3"
    assert describe(err("Timeout")) == "error Timeout"


def test_is_result_only_accepts_live_variants() -> None:
    assert is_result(ok(1))
    assert is_result(fail("x"))
    assert not is_result({"ok": True, "value": 1})


def test_to_record_returns_plain_two_field_dict() -> None:
    assert ok(42).to_record() == {"ok": True, "value": 42}
    assert err("E").to_record() == {"ok": False, "error": {"type": "E"}}


class TestMethods:
    def test_map_transforms_success(self) -> None:
        assert ok(2).map(lambda n: n * 2) == ok(4)

    def test_map_on_failure_returns_same_instance(self, spy) -> None:
        res = err("E")
        assert res.map(spy) is res
        assert not spy.called

    def test_map_err_transforms_failure(self) -> None:
        res = err("E", id=1).map_err(lambda e: {**e, "tag": "X"})
        assert res.error == {"type": "E", "id": 1, "tag": "X"}

    def test_map_err_on_success_returns_same_instance(self, spy) -> None:
        res = ok(1)
        assert res.map_err(spy) is res
        assert not spy.called

    def test_flat_map_returns_inner_result(self) -> None:
        def div(a: float, b: float):
            return err("Div0") if b == 0 else ok(a / b)

        assert ok(10).flat_map(lambda n: div(n, 5)) == ok(2.0)
        assert ok(10).flat_map(lambda n: div(n, 0)).ok is False

    def test_flat_map_short_circuits_failure(self, spy) -> None:
        res = err("E")
        assert res.flat_map(spy) is res
        assert not spy.called

    def test_unwrap_success(self) -> None:
        assert ok(42).unwrap() == 42

    def test_unwrap_raises_the_stored_payload_itself(self) -> None:
        res = err("NotFound", id=7)
        with pytest.raises(ErrorPayload) as exc:
            res.unwrap()
        assert exc.value is res.error

    def test_unwrap_raises_captured_exception_itself(self) -> None:
        boom = KeyError("k")
        with pytest.raises(KeyError) as exc:
            fail(boom).unwrap()
        assert exc.value is boom

    def test_unwrap_non_exception_error_rides_in_unwrap_error(self) -> None:
        stored = ["not", "an", "exception"]
        with pytest.raises(UnwrapError) as exc:
            fail(stored).unwrap()
        assert exc.value.error is stored

    def test_or_returns_value_or_fallback(self) -> None:
        assert ok(42).or_(7) == 42
        assert err("E").or_("fallback") == "fallback"

    def test_unwrap_or_else_is_lazy(self, spy) -> None:
        assert ok(1).unwrap_or_else(spy) == 1
        assert not spy.called
        res = err("E")
        assert res.unwrap_or_else(lambda e: e.type) == "E"

    def test_iteration_yields_zero_or_one_value(self) -> None:
        assert list(ok(3)) == [3]
        assert list(err("E")) == []
        assert [*ok("a"), *err("b"), *ok("c")] == ["a", "c"]
