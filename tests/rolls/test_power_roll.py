"""
Tests for building power rolls: option defaults, clamping of edges and banes,
and the edge/bane modifier added to the formula.
"""

import pytest

from drawsteel.core.constants import PowerRollType
from drawsteel.core.error_handling import ConfigurationError, FormulaError
from drawsteel.dice.terms import NumericTerm, OperatorTerm
from drawsteel.rolls.power import PowerRoll, PowerRollResult


def test_default_options():
    roll = PowerRoll()
    assert roll.formula == "2d10"
    assert roll.options.type == PowerRollType.TEST
    assert roll.options.edges == 0
    assert roll.options.banes == 0
    assert roll.options.critical_threshold == 19
    assert roll.options.applied_modifier is False
    assert roll.valid_power_roll
    assert not roll.evaluated


def test_none_options_take_defaults():
    roll = PowerRoll(options={"type": None, "edges": None, "banes": None})
    assert roll.options.type == PowerRollType.TEST
    assert roll.net_boon == 0


@pytest.mark.parametrize("edges", range(6))
@pytest.mark.parametrize("banes", range(6))
def test_edges_and_banes_are_clamped(edges, banes):
    roll = PowerRoll(options={"edges": edges, "banes": banes})
    assert roll.options.edges == min(edges, 2)
    assert roll.options.banes == min(banes, 2)
    assert -2 <= roll.net_boon <= 2


def test_negative_counts_clamp_to_zero():
    roll = PowerRoll(options={"edges": -3, "banes": -1})
    assert roll.options.edges == 0
    assert roll.options.banes == 0


def test_counts_from_a_form_are_coerced():
    roll = PowerRoll(options={"edges": "1", "banes": "0"})
    assert roll.options.edges == 1
    assert roll.net_boon == 1


@pytest.mark.parametrize(
    "edges, banes, formula",
    [
        (1, 0, "2d10 + 2[Edge]"),
        (0, 1, "2d10 - 2[Bane]"),
        (2, 1, "2d10 + 2[Edge]"),
        (1, 2, "2d10 - 2[Bane]"),
    ],
)
def test_single_net_boon_adds_modifier(edges, banes, formula):
    roll = PowerRoll(options={"edges": edges, "banes": banes})
    assert len(roll.terms) == 3
    assert isinstance(roll.terms[1], OperatorTerm)
    assert isinstance(roll.terms[2], NumericTerm)
    assert roll.terms[2].number == 2
    assert roll.formula == formula
    assert roll.options.applied_modifier is True


@pytest.mark.parametrize("edges, banes", [(0, 0), (2, 0), (0, 2), (1, 1), (2, 2), (5, 0)])
def test_no_modifier_otherwise(edges, banes):
    roll = PowerRoll(options={"edges": edges, "banes": banes})
    assert len(roll.terms) == 1
    assert roll.formula == "2d10"
    assert roll.options.applied_modifier is False


def test_modifier_follows_existing_terms():
    roll = PowerRoll("2d10 + @might", {"might": 3}, {"edges": 1})
    assert roll.formula == "2d10 + 3 + 2[Edge]"
    assert len(roll.terms) == 5


def test_applied_modifier_is_not_added_twice():
    roll = PowerRoll("2d10 + 2[Edge]", options={"edges": 1, "applied_modifier": True})
    assert roll.formula == "2d10 + 2[Edge]"
    assert len(roll.terms) == 3


@pytest.mark.parametrize("roll_type", ["ability", "resistance", "test"])
def test_valid_types(roll_type):
    roll = PowerRoll(options={"type": roll_type})
    assert roll.options.type.value == roll_type


def test_type_accepts_enum_members():
    roll = PowerRoll(options={"type": PowerRollType.ABILITY})
    assert roll.options.type == PowerRollType.ABILITY


@pytest.mark.parametrize("roll_type", ["save", "Ability", "", 3])
def test_invalid_type_is_rejected(roll_type):
    with pytest.raises(ConfigurationError, match="type"):
        PowerRoll(options={"type": roll_type})


def test_invalid_counts_are_rejected():
    with pytest.raises(ConfigurationError):
        PowerRoll(options={"edges": "many"})
    with pytest.raises(ConfigurationError):
        PowerRoll(options={"banes": 1.5})


def test_configuration_error_is_a_value_error():
    with pytest.raises(ValueError):
        PowerRoll(options={"type": "save"})


def test_extra_options_are_kept():
    roll = PowerRoll(options={"flavor": "Might Test", "actor": "Korva"})
    assert roll.flavor == "Might Test"
    assert roll.options.model_extra == {"actor": "Korva"}


def test_create_returns_the_roll():
    result = PowerRoll.create(options={"type": "ability", "edges": 1})
    assert isinstance(result, PowerRollResult)
    assert result.success
    assert result.errors == []
    assert result.roll.formula == "2d10 + 2[Edge]"


def test_create_reports_errors():
    result = PowerRoll.create(options={"type": "save"})
    assert not result.success
    assert result.roll is None
    assert "type" in result.errors[0]


def test_create_reports_formula_errors():
    result = PowerRoll.create("2d10 * 2")
    assert not result.success
    assert result.errors


def test_unsupported_formula_raises():
    with pytest.raises(FormulaError):
        PowerRoll("2d10 +")


def test_net_boon_is_known_before_evaluation():
    roll = PowerRoll(options={"edges": 2, "banes": 1})
    assert roll.net_boon == 1
    assert roll.product is None
    assert roll.tier is None
    assert roll.tier_name is None
