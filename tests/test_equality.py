import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
MODULE_ROOT = PROJECT_ROOT / "odre" / "src"
if str(MODULE_ROOT) not in sys.path:
    sys.path.insert(0, str(MODULE_ROOT))

from odre import (  # type: ignore  # noqa: E402
    DispatchConfig,
    Dispatcher,
    Instance,
    Selector,
    define_type,
    record,
    register_instance_handler,
)


def _same_fields(this, other):
    return isinstance(other, Instance) and dict(this) == dict(other)


MONEY = define_type("Money", {Selector.EQUALS: _same_fields})
COUPON = define_type("Coupon", {Selector.EQUALS: _same_fields})
NEVER = define_type(
    "Never",
    {
        Selector.EQUALS: lambda this, other: False,
        Selector.STRICT_EQUALS: lambda this, other: False,
    },
)
PLAIN = define_type("Plain", {})


@pytest.fixture
def dispatcher():
    return Dispatcher(DispatchConfig(trace_spans=False, record_metrics=False))


@pytest.mark.parametrize(
    "value",
    [MONEY.new(amount=1), NEVER.new(), PLAIN.new(), record(), {"k": 1}],
)
def test_identity_is_always_equal(dispatcher, value):
    assert dispatcher.strict_equals(value, value) is True
    assert dispatcher.equals(value, value) is True
    assert dispatcher.dispatch_binary("!==", value, value) is False


def test_strict_equals_handler_runs_for_distinct_values(dispatcher):
    assert dispatcher.strict_equals(NEVER.new(), NEVER.new()) is False


def test_equals_only_derives_strict_equals_with_nominal_check(dispatcher):
    a = MONEY.new(amount=5)
    same = MONEY.new(amount=5)
    other_amount = MONEY.new(amount=6)
    lookalike = COUPON.new(amount=5)

    assert dispatcher.equals(a, lookalike) is True
    assert dispatcher.strict_equals(a, same) is True
    assert dispatcher.strict_equals(a, other_amount) is False
    assert dispatcher.strict_equals(a, lookalike) is False
    assert dispatcher.strict_equals(a, 5) is False


def test_derived_strict_equals_skips_equals_for_incompatible_rhs(dispatcher):
    calls = []

    def _tracking(this, other):
        calls.append(other)
        return True

    tracked = define_type("Tracked", {Selector.EQUALS: _tracking})
    assert dispatcher.strict_equals(tracked.new(), MONEY.new()) is False
    assert calls == []
    assert dispatcher.strict_equals(tracked.new(), tracked.new()) is True
    assert len(calls) == 1


def test_untagged_lhs_accepts_any_non_primitive_rhs(dispatcher):
    loose = record(amount=5)
    register_instance_handler(loose, Selector.EQUALS, _same_fields)

    assert dispatcher.strict_equals(loose, MONEY.new(amount=5)) is True
    assert dispatcher.strict_equals(loose, record(amount=5)) is True
    assert dispatcher.strict_equals(loose, record(amount=7)) is False
    assert dispatcher.strict_equals(loose, 5) is False


def test_no_handler_means_not_equal(dispatcher):
    assert dispatcher.equals(PLAIN.new(), PLAIN.new()) is False
    assert dispatcher.strict_equals(PLAIN.new(), PLAIN.new()) is False
    assert dispatcher.equals({"a": 1}, {"a": 1}) is False


def test_primitive_lhs_never_consults_rhs_handler(dispatcher):
    assert dispatcher.equals(5, MONEY.new(amount=5)) is False


def test_instance_equals_overrides_type(dispatcher):
    a = MONEY.new(amount=1)
    register_instance_handler(a, Selector.EQUALS, lambda this, other: True)
    assert dispatcher.equals(a, MONEY.new(amount=2)) is True
    assert dispatcher.strict_equals(a, MONEY.new(amount=2)) is True
    assert dispatcher.strict_equals(a, COUPON.new(amount=2)) is False


@pytest.mark.parametrize(
    "lhs, rhs, loose, strict",
    [
        (1, 1, True, True),
        (1, 1.0, True, True),
        (1, "1", False, False),
        ("a", "a", True, True),
        (None, None, True, True),
        (float("nan"), float("nan"), False, False),
    ],
)
def test_primitive_equality(dispatcher, lhs, rhs, loose, strict):
    assert dispatcher.equals(lhs, rhs) is loose
    assert dispatcher.strict_equals(lhs, rhs) is strict


CONFIGURATIONS = [
    (MONEY.new(amount=1), MONEY.new(amount=1)),
    (MONEY.new(amount=1), MONEY.new(amount=2)),
    (MONEY.new(amount=1), COUPON.new(amount=1)),
    (NEVER.new(), NEVER.new()),
    (PLAIN.new(), PLAIN.new()),
    (record(), {}),
    (3, 3),
    (3, "3"),
    (3, MONEY.new(amount=3)),
]


@pytest.mark.parametrize("lhs, rhs", CONFIGURATIONS)
def test_negation_symmetry(dispatcher, lhs, rhs):
    assert dispatcher.dispatch_binary("!=", lhs, rhs) == (not dispatcher.dispatch_binary("==", lhs, rhs))
    assert dispatcher.dispatch_binary("!==", lhs, rhs) == (not dispatcher.dispatch_binary("===", lhs, rhs))
