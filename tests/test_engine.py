from __future__ import annotations

from typing import Any, List, Tuple

import pytest

from numeric_engine.engine import (
    EDIT_REJECTED,
    VALUE_CHANGE,
    VALUE_COMMIT,
    EditResult,
    EngineBus,
    EnginePhase,
    NumericEngine,
)
from numeric_engine.events import Delete, ExternalSet, Insert, Paste, Step
from numeric_engine.formatting import StepDirection
from numeric_engine.grammar import ClampPolicy, GrammarConfig, GrammarConfigError


def make_engine(initial: Any = "", **overrides) -> NumericEngine:
    return NumericEngine(GrammarConfig(**overrides), initial)


def record(engine: NumericEngine, *events: str) -> List[Tuple[str, EditResult]]:
    seen: List[Tuple[str, EditResult]] = []
    for name in events:
        engine.subscribe(name, lambda payload, name=name: seen.append((name, payload)))
    return seen


def type_text(engine: NumericEngine, text: str) -> EditResult:
    result = None
    for ch in text:
        result = engine.apply(Insert(engine.current_caret(), ch), engine.current_caret())
    assert result is not None
    return result


def test_strict_policy_rejects_out_of_range_edit() -> None:
    engine = make_engine("1", min=0, max=10, clamp_policy=ClampPolicy.STRICT)
    seen = record(engine, EDIT_REJECTED, VALUE_CHANGE)

    result = engine.apply(Insert(1, "2"), 1)

    assert result.formatted == "1"
    assert result.changed is False
    assert result.rejected is True
    assert result.caret == 1
    assert [name for name, _ in seen] == [EDIT_REJECTED]


def test_on_commit_policy_clamps_at_commit() -> None:
    engine = make_engine(min=0, max=10)

    typed = engine.apply(Paste("99"), 0)
    assert typed.formatted == "99"

    committed = engine.commit()
    assert committed.formatted == "10"
    assert committed.numeric == 10
    assert committed.source == "commit"


def test_fixed_scale_pads_on_commit_only() -> None:
    engine = make_engine(decimal_scale=2, fixed_decimal_scale=True)

    assert type_text(engine, "1.5").formatted == "1.5"
    assert engine.commit().formatted == "1.50"


def test_leading_zeros_collapse_while_typing() -> None:
    engine = make_engine()

    result = type_text(engine, "007")

    assert result.formatted == "7"
    assert result.caret == 1


def test_minus_key_toggles_sign() -> None:
    engine = make_engine("5")

    negative = engine.apply(Insert(1, "-"), 1)
    assert (negative.formatted, negative.caret) == ("-5", 2)

    positive = engine.apply(Insert(2, "-"), 2)
    assert (positive.formatted, positive.caret) == ("5", 1)


def test_set_value_is_idempotent() -> None:
    engine = make_engine("5")
    seen = record(engine, VALUE_CHANGE)

    result = engine.set_value("5")

    assert result.changed is False
    assert seen == []


def test_set_value_clamps_like_commit() -> None:
    engine = make_engine("5", min=0, max=10)
    seen = record(engine, VALUE_CHANGE)

    result = engine.apply(ExternalSet(50), engine.current_caret())

    assert result.formatted == "10"
    assert result.caret == 2
    assert [name for name, _ in seen] == [VALUE_CHANGE]


def test_set_value_accepts_empty() -> None:
    engine = make_engine("5")

    assert engine.set_value(None).formatted == ""
    assert engine.current_numeric() is None
    with pytest.raises(TypeError):
        engine.set_value(True)


def test_initial_value_is_settled() -> None:
    strict = make_engine("99", max=10, clamp_policy=ClampPolicy.STRICT)
    loose = make_engine("99", max=10, clamp_policy=ClampPolicy.NONE)

    assert strict.current_formatted() == "10"
    assert loose.current_formatted() == "99"
    assert loose.current_caret() == 2


def test_commit_always_notifies() -> None:
    engine = make_engine("3")
    seen = record(engine, VALUE_COMMIT)

    engine.commit()
    engine.commit()

    assert len(seen) == 2
    assert all(payload.changed is False for _, payload in seen)


def test_step_stops_at_max() -> None:
    engine = make_engine("9", max=10)

    up = engine.apply(Step(StepDirection.UP), 1)
    assert up.formatted == "10"
    assert up.hide_caret is True
    assert up.caret == 2

    again = engine.apply(Step(StepDirection.UP), 2)
    assert again.formatted == "10"
    assert again.changed is False


def test_step_on_empty_value_is_a_no_op() -> None:
    engine = make_engine(min=5, max=10, clamp_policy=ClampPolicy.STRICT)
    seen = record(engine, VALUE_CHANGE)

    result = engine.apply(Step(StepDirection.UP), 0)

    assert result.formatted == ""
    assert result.numeric is None
    assert result.changed is False
    assert seen == []


def test_strict_steps_stay_inside_bounds() -> None:
    engine = make_engine("5", min=5, max=10, clamp_policy=ClampPolicy.STRICT)

    down = engine.apply(Step(StepDirection.DOWN), 1)
    assert down.formatted == "5"
    assert down.changed is False

    for _ in range(10):
        result = engine.apply(Step(StepDirection.UP), engine.current_caret())
        assert result.numeric is not None
        assert 5 <= result.numeric <= 10
    assert engine.current_formatted() == "10"


def test_step_keeps_fixed_decimal_padding() -> None:
    engine = make_engine("1.5", decimal_scale=2, fixed_decimal_scale=True)
    assert engine.current_formatted() == "1.50"

    result = engine.apply(Step(StepDirection.UP), 4)

    assert result.formatted == "2.50"
    assert result.caret == 4


def test_step_size_finer_than_scale_is_rejected() -> None:
    with pytest.raises(GrammarConfigError) as excinfo:
        NumericEngine(GrammarConfig(decimal_scale=0), "1", step_size=0.5)

    assert excinfo.value.field == "step_size"
    engine = NumericEngine(GrammarConfig(decimal_scale=1), "1", step_size=0.5)
    assert engine.apply(Step(StepDirection.UP), 1).formatted == "1.5"


def test_bound_finer_than_scale_is_rejected() -> None:
    with pytest.raises(GrammarConfigError) as excinfo:
        make_engine(min=0.5, decimal_scale=0)

    assert excinfo.value.field == "min"


def test_reconfigure_checks_scale() -> None:
    engine = NumericEngine(GrammarConfig(), "1", step_size=0.25)

    with pytest.raises(GrammarConfigError):
        engine.reconfigure(GrammarConfig(decimal_scale=1))
    assert engine.current_formatted() == "1"


def test_backspace_across_grouping() -> None:
    engine = make_engine("1234", thousands_separator=",")
    assert engine.current_formatted() == "1,234"

    result = engine.apply(Delete(5, 5), 5)

    assert result.formatted == "123"
    assert result.caret == 3
    assert result.raw == "123"


def test_reconfigure_rederives_display() -> None:
    engine = make_engine("1234.5")

    result = engine.reconfigure(GrammarConfig(thousands_separator=",", decimal_scale=0))

    assert result.formatted == "1,234"
    assert engine.current_numeric() == 1234


def test_alternate_decimal_key_is_normalized() -> None:
    engine = make_engine("1", decimal_separator=",", allowed_decimal_separators=(".",))

    result = engine.apply(Insert(1, "."), 1)

    assert result.formatted == "1,"
    assert result.caret == 2


def test_raw_and_numeric_use_dot_decimal() -> None:
    engine = make_engine("1234,5", decimal_separator=",", thousands_separator=".")

    assert engine.current_formatted() == "1.234,5"
    assert engine.current_raw() == "1234.5"
    assert engine.current_numeric() == 1234.5
    values = engine.set_value("1234,5").values
    assert values.formatted_value == "1.234,5"
    assert values.float_value == 1234.5


def test_emit_on_construct() -> None:
    bus = EngineBus()
    seen: List[Any] = []
    bus.subscribe(VALUE_CHANGE, seen.append)

    NumericEngine(GrammarConfig(), "42", bus=bus, emit_on_construct=True)

    assert len(seen) == 1
    assert seen[0].formatted == "42"


def test_unknown_event_raises() -> None:
    engine = make_engine()

    with pytest.raises(TypeError):
        engine.apply(object(), 0)  # type: ignore[arg-type]


def test_unknown_bus_event_raises() -> None:
    with pytest.raises(KeyError):
        EngineBus().subscribe("value.unknown", lambda payload: None)


def test_phase_returns_to_idle() -> None:
    engine = make_engine()
    phases: List[EnginePhase] = []
    engine.subscribe(VALUE_CHANGE, lambda payload: phases.append(engine.phase))

    engine.apply(Insert(0, "1"), 0)

    assert engine.phase is EnginePhase.IDLE
    assert phases == [EnginePhase.IDLE]


def test_commit_clamp_keeps_leading_zero_padding() -> None:
    engine = make_engine(allow_leading_zeros=True, max=10)

    assert engine.apply(Paste("0099"), 0).formatted == "0099"
    assert engine.commit().formatted == "0010"


def test_invalid_step_size() -> None:
    with pytest.raises(ValueError):
        NumericEngine(GrammarConfig(), step_size=0)
