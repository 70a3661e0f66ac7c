"""Tests for TreeBuilder."""

import pytest

from jsobjects import (
    BuilderContractError,
    BuildState,
    JSArray,
    JSDictionary,
    JSInteger,
    JSNull,
    JSReal,
    TreeBuilder,
    continue_on_error,
    from_python,
)


def _build_sample(builder):
    builder.enter_object(None)
    builder.on_string("name", "alpha")
    builder.on_integer("port", 8080)
    builder.enter_array("tags")
    builder.on_string(None, "a")
    builder.on_real(None, 1.5)
    builder.on_boolean(None, False)
    builder.on_null(None)
    builder.enter_object(None)
    builder.on_integer("deep", 1)
    builder.leave()
    builder.leave()
    builder.leave()


# ---------------------------------------------------------------------------
# Happy path
# ---------------------------------------------------------------------------

def test_builds_tree():
    builder = TreeBuilder()
    _build_sample(builder)
    root = builder.finish()
    assert root == from_python({
        "name": "alpha",
        "port": 8080,
        "tags": ["a", 1.5, False, None, {"deep": 1}],
    })

def test_state_transitions():
    builder = TreeBuilder()
    assert builder.state is BuildState.IDLE
    builder.enter_object()
    assert builder.state is BuildState.BUILDING
    assert builder.depth == 1
    builder.enter_array("xs")
    assert builder.depth == 2
    builder.leave()
    builder.leave()
    assert builder.state is BuildState.DONE
    assert builder.depth == 0

def test_root_is_available_while_building():
    builder = TreeBuilder()
    builder.enter_object()
    builder.on_integer("a", 1)
    assert isinstance(builder.root, JSDictionary)
    assert builder.root.get("a") == JSInteger(1)

def test_keys_ignored_inside_arrays():
    builder = TreeBuilder()
    builder.enter_object()
    builder.enter_array("xs")
    builder.on_integer("ignored", 1)
    builder.leave()
    builder.leave()
    xs = builder.finish().get("xs")
    assert isinstance(xs, JSArray)
    assert xs.get(0) == JSInteger(1)

def test_duplicate_keys_last_write_wins():
    builder = TreeBuilder()
    builder.enter_object()
    builder.on_integer("a", 1)
    builder.on_integer("b", 2)
    builder.on_integer("a", 3)
    builder.leave()
    root = builder.finish()
    assert list(root) == ["a", "b"]
    assert root.get("a") == JSInteger(3)

def test_finish_before_anything_is_none():
    assert TreeBuilder().finish() is None


# ---------------------------------------------------------------------------
# Error policy
# ---------------------------------------------------------------------------

def test_default_policy_aborts():
    builder = TreeBuilder()
    builder.enter_object()
    builder.enter_array("xs")
    builder.on_integer(None, 1)
    assert builder.error(3, 7, "boom") is False
    assert builder.state is BuildState.ABORTED
    assert builder.root is None
    assert builder.depth == 0
    assert builder.finish() is None

def test_events_after_abort_are_ignored():
    builder = TreeBuilder()
    builder.enter_object()
    builder.error(1, 1, "boom")
    builder.on_integer("a", 1)
    builder.enter_object("b")
    builder.enter_array("c")
    builder.leave()
    builder.leave()
    assert builder.finish() is None
    assert builder.error(2, 2, "again") is False

def test_predicate_receives_position():
    seen = []

    def record(line, column, message):
        seen.append((line, column, message))
        return True

    builder = TreeBuilder(record)
    builder.enter_object()
    assert builder.error(4, 2, "odd token") is True
    assert seen == [(4, 2, "odd token")]
    assert builder.state is BuildState.BUILDING

def test_continue_then_finish_returns_partial_tree():
    builder = TreeBuilder(continue_on_error)
    builder.enter_object()
    builder.on_integer("a", 1)
    builder.enter_array("xs")
    builder.on_null(None)
    builder.error(1, 20, "unexpected end")
    root = builder.finish()
    assert root.get("a") == JSInteger(1)
    assert root.get("xs") == JSArray([JSNull()])
    assert builder.state is BuildState.DONE

def test_predicate_can_stop_later():
    answers = iter([True, False])
    builder = TreeBuilder(lambda line, column, message: next(answers))
    builder.enter_object()
    assert builder.error(1, 1, "first") is True
    builder.on_real("r", 2.5)
    assert builder.root.get("r") == JSReal(2.5)
    assert builder.error(2, 1, "second") is False
    assert builder.finish() is None


# ---------------------------------------------------------------------------
# Contract violations
# ---------------------------------------------------------------------------

def test_scalar_at_root_is_contract_violation():
    with pytest.raises(BuilderContractError):
        TreeBuilder().on_integer(None, 1)

def test_array_at_root_is_contract_violation():
    with pytest.raises(BuilderContractError):
        TreeBuilder().enter_array(None)

def test_missing_key_in_object_is_contract_violation():
    builder = TreeBuilder()
    builder.enter_object()
    with pytest.raises(BuilderContractError):
        builder.on_string(None, "orphan")

def test_leave_without_open_container():
    with pytest.raises(BuilderContractError):
        TreeBuilder().leave()

def test_event_after_done():
    builder = TreeBuilder()
    builder.enter_object()
    builder.leave()
    with pytest.raises(BuilderContractError):
        builder.on_integer("a", 1)
    with pytest.raises(BuilderContractError):
        builder.enter_object(None)
