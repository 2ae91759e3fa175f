import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parents[1]
MODULE_ROOT = PROJECT_ROOT / "odre" / "src"
if str(MODULE_ROOT) not in sys.path:
    sys.path.insert(0, str(MODULE_ROOT))

import odre  # type: ignore  # noqa: E402
from odre.operators import BINARY_OPERATORS, UNARY_OPERATORS, binary_operator, unary_operator  # noqa: E402
from odre.errors import UnknownOperator  # noqa: E402
from odre.policies import POLICY_TABLE, DefaultPolicy  # noqa: E402
from odre.selectors import (  # noqa: E402
    SELECTOR_CATEGORY,
    OperatorCategory,
    Selector,
    lookup_selector,
    selectors_in,
)


def test_selector_set_is_closed_and_categorised():
    assert set(SELECTOR_CATEGORY) == set(Selector)
    assert len({selector.value for selector in Selector}) == len(Selector)


def test_every_category_owns_one_policy():
    assert set(POLICY_TABLE) == set(OperatorCategory)
    for category in OperatorCategory:
        assert selectors_in(category)


def test_selectors_importable_by_identifier():
    from odre import strictEquals, unsignedRightShift  # type: ignore

    assert strictEquals is Selector.STRICT_EQUALS
    assert unsignedRightShift is Selector.UNSIGNED_RIGHT_SHIFT
    assert odre.add is Selector.ADD
    with pytest.raises(AttributeError):
        odre.concatenate  # noqa: B018


def test_lookup_selector_accepts_both_spellings():
    assert lookup_selector("greaterThanEqual") is Selector.GREATER_THAN_EQUAL
    assert lookup_selector("GREATER_THAN_EQUAL") is Selector.GREATER_THAN_EQUAL
    with pytest.raises(KeyError):
        lookup_selector("spaceship")


def test_negated_equality_literals_share_selectors():
    assert binary_operator("!=").selector is Selector.EQUALS
    assert binary_operator("!=").negated
    assert binary_operator("!==").selector is Selector.STRICT_EQUALS
    assert not binary_operator("===").negated


def test_minus_is_both_binary_and_unary():
    assert binary_operator("-").selector is Selector.SUBTRACT
    assert unary_operator("-").selector is Selector.UNARY_NEGATE
    assert unary_operator("++").is_mutating
    assert not unary_operator("~").is_mutating


def test_unknown_literal_raises_engine_error():
    with pytest.raises(UnknownOperator, match="Unknown binary operator '<=>'"):
        binary_operator("<=>")
    with pytest.raises(UnknownOperator):
        unary_operator("!")


def test_every_selector_reachable_from_a_literal():
    reachable = {spec.selector for spec in BINARY_OPERATORS.values()}
    reachable |= {spec.selector for spec in UNARY_OPERATORS.values()}
    assert reachable == set(Selector)


def test_primitive_lhs_policies():
    assert POLICY_TABLE[OperatorCategory.ARITHMETIC_BINARY].primitive_lhs is DefaultPolicy.RETURN_NAN
    assert POLICY_TABLE[OperatorCategory.SHIFT].primitive_lhs is DefaultPolicy.RETURN_NAN
    assert POLICY_TABLE[OperatorCategory.RELATIONAL].primitive_lhs is DefaultPolicy.THROW
    assert POLICY_TABLE[OperatorCategory.EQUALITY].default is DefaultPolicy.FALSE_BY_IDENTITY
