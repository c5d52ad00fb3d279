"""
Tests for the dice formula parser.
"""

import pytest

from drawsteel.core.error_handling import FormulaError
from drawsteel.dice.parser import formula_from_terms, parse_formula, substitute_data
from drawsteel.dice.terms import DieTerm, NumericTerm, OperatorTerm


def test_parse_base_power_roll():
    terms = parse_formula("2d10")
    assert len(terms) == 1
    assert isinstance(terms[0], DieTerm)
    assert terms[0].number == 2
    assert terms[0].faces == 10
    assert not terms[0].evaluated


def test_parse_die_without_count_rolls_one_die():
    (term,) = parse_formula("d20")
    assert term.number == 1
    assert term.faces == 20


def test_parse_trailing_modifier():
    terms = parse_formula("2d10+3")
    assert [type(term) for term in terms] == [DieTerm, OperatorTerm, NumericTerm]
    assert terms[1].operator == "+"
    assert terms[2].number == 3
    assert formula_from_terms(terms) == "2d10 + 3"


def test_parse_flavor_annotations():
    terms = parse_formula("2d10[Might] - 2[Bane]")
    assert terms[0].flavor == "Might"
    assert terms[2].flavor == "Bane"
    assert formula_from_terms(terms) == "2d10[Might] - 2[Bane]"


def test_parse_substitutes_roll_data():
    data = {"characteristics": {"might": 2}}
    terms = parse_formula("2d10 + @characteristics.might", data)
    assert formula_from_terms(terms) == "2d10 + 2"


def test_missing_roll_data_becomes_zero():
    assert substitute_data("2d10 + @missing.value", {}) == "2d10 + 0"


def test_negative_roll_data_folds_operators():
    terms = parse_formula("2d10 + @reason", {"reason": -1})
    assert formula_from_terms(terms) == "2d10 - 1"


def test_consecutive_minus_signs_cancel():
    terms = parse_formula("2d10 - -1")
    assert formula_from_terms(terms) == "2d10 + 1"


def test_decimal_literal():
    terms = parse_formula("2d10 + 1.5")
    assert terms[2].number == 1.5


@pytest.mark.parametrize(
    "formula",
    ["", "   ", "2d10 * 2", "(2d10)", "2d10 +", "2d10 3", "2d10 kh1", "2d10 +[Edge] 2"],
)
def test_unsupported_formulas_are_rejected(formula):
    with pytest.raises(FormulaError):
        parse_formula(formula)


@pytest.mark.parametrize("formula", ["0d10", "101d6", "2d0", "1d1001"])
def test_dice_limits(formula):
    with pytest.raises(FormulaError):
        parse_formula(formula)
