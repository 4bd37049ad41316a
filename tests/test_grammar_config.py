from __future__ import annotations

import pytest

from numeric_engine.grammar import ClampPolicy, GrammarConfig, GrammarConfigError


def test_separators_must_differ() -> None:
    with pytest.raises(GrammarConfigError) as excinfo:
        GrammarConfig(decimal_separator=",", thousands_separator=",")

    assert excinfo.value.field == "thousands_separator"
    assert isinstance(excinfo.value, ValueError)


def test_fixed_decimal_scale_requires_scale() -> None:
    with pytest.raises(GrammarConfigError):
        GrammarConfig(fixed_decimal_scale=True)


def test_min_cannot_exceed_max() -> None:
    with pytest.raises(GrammarConfigError):
        GrammarConfig(min=10, max=1)


def test_negative_scale_rejected() -> None:
    with pytest.raises(GrammarConfigError):
        GrammarConfig(decimal_scale=-1)


@pytest.mark.parametrize("prefix", ["1", "-", "."])
def test_prefix_cannot_hold_grammar_characters(prefix: str) -> None:
    with pytest.raises(GrammarConfigError):
        GrammarConfig(prefix=prefix)


def test_multi_character_separator_rejected() -> None:
    with pytest.raises(GrammarConfigError):
        GrammarConfig(decimal_separator="..")


@pytest.mark.parametrize(
    ("kwargs", "expected"),
    [
        ({}, True),
        ({"min": 0}, False),
        ({"min": -5}, True),
        ({"min": -10, "max": -1}, True),
        ({"max": 5}, True),
        ({"min": 0, "allow_negative": True}, True),
    ],
)
def test_allow_negative_inferred_from_bounds(kwargs: dict, expected: bool) -> None:
    assert GrammarConfig(**kwargs).allow_negative is expected


def test_thousands_separator_true_means_comma() -> None:
    assert GrammarConfig(thousands_separator=True).thousands_separator == ","
    assert GrammarConfig(thousands_separator=False).thousands_separator is None


def test_allow_decimal_false_pins_scale_to_zero() -> None:
    config = GrammarConfig(allow_decimal=False, decimal_scale=3)

    assert config.decimal_scale == 0


def test_bounds_are_floats() -> None:
    config = GrammarConfig(min=1, max=3)

    assert isinstance(config.min, float)
    assert config.is_out_of_range(4)
    assert not config.is_out_of_range(None)


def test_clamp_policy_parse_aliases() -> None:
    assert ClampPolicy.parse("blur") is ClampPolicy.ON_COMMIT
    assert ClampPolicy.parse("onCommit") is ClampPolicy.ON_COMMIT
    assert ClampPolicy.parse("STRICT") is ClampPolicy.STRICT
    assert GrammarConfig(clamp_policy="none").clamp_policy is ClampPolicy.NONE

    with pytest.raises(GrammarConfigError):
        ClampPolicy.parse("sometimes")


def test_allowed_decimal_separators_cannot_shadow_grouping() -> None:
    with pytest.raises(GrammarConfigError):
        GrammarConfig(
            decimal_separator=",",
            thousands_separator=".",
            allowed_decimal_separators=(".",),
        )
