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
    Position,
    Selector,
    define_type,
    register_instance_handler,
)

AXES = ("x", "y", "z")


def _step(delta):
    def _handler(this):
        for axis in AXES:
            this[axis] += delta

    return _handler


VECTOR = define_type(
    "Vector3",
    {Selector.UNARY_ADD: _step(1), Selector.UNARY_SUBTRACT: _step(-1)},
)


@pytest.fixture
def dispatcher():
    return Dispatcher(DispatchConfig(trace_spans=False, record_metrics=False))


@pytest.fixture
def origin():
    return VECTOR.new(x=0, y=0, z=0)


def test_postfix_yields_pre_mutation_snapshot(dispatcher, origin):
    result = dispatcher.dispatch_unary("++", Position.POSTFIX, origin)

    assert dict(result) == {"x": 0, "y": 0, "z": 0}
    assert dict(origin) == {"x": 1, "y": 1, "z": 1}
    assert result is not origin
    assert result.read_only


def test_prefix_yields_mutated_value(dispatcher, origin):
    result = dispatcher.dispatch_unary("++", Position.PREFIX, origin)

    assert result is origin
    assert dict(result) == {"x": 1, "y": 1, "z": 1}


def test_apply_before_and_after_entry_points(dispatcher, origin):
    before = dispatcher.apply_after("--", origin)
    after = dispatcher.apply_before("--", origin)

    assert dict(before) == {"x": 0, "y": 0, "z": 0}
    assert dict(after) == {"x": -2, "y": -2, "z": -2}


def test_snapshot_keeps_type_for_further_dispatch(dispatcher, origin):
    snapshot = dispatcher.apply_after("++", origin)
    assert snapshot.type_definition is VECTOR
    # Handlers on a read-only snapshot fail inside the handler itself.
    with pytest.raises(TypeError, match="read-only"):
        dispatcher.apply_before("++", snapshot)


def test_instance_override_used_for_increment(dispatcher, origin):
    register_instance_handler(origin, Selector.UNARY_ADD, _step(10))
    dispatcher.apply_before("++", origin)
    assert dict(origin) == {"x": 10, "y": 10, "z": 10}


@pytest.mark.parametrize(
    "literal, position, expected",
    [
        ("++", Position.PREFIX, 6),
        ("++", Position.POSTFIX, 5),
        ("--", Position.PREFIX, 4),
        ("--", "postfix", 5),
    ],
)
def test_primitive_increment_is_computed_not_mutated(dispatcher, literal, position, expected):
    assert dispatcher.dispatch_unary(literal, position, 5) == expected


def _step_path(this):
    for index, _ in enumerate(this["coords"]):
        this["coords"][index] += 1
    this["anchor"]["x"] += 1


PATH = define_type("Path", {Selector.UNARY_ADD: _step_path})


def test_postfix_snapshot_does_not_share_nested_state(dispatcher):
    anchor = VECTOR.new(x=0, y=0, z=0)
    path = PATH.new(coords=[0, 0, 0], anchor=anchor)

    snapshot = dispatcher.dispatch_unary("++", Position.POSTFIX, path)

    assert snapshot["coords"] == [0, 0, 0]
    assert path["coords"] == [1, 1, 1]
    assert snapshot["anchor"]["x"] == 0
    assert anchor["x"] == 1
    assert snapshot["anchor"] is not anchor
    assert snapshot.type_definition is PATH
    assert snapshot["anchor"].type_definition is VECTOR
