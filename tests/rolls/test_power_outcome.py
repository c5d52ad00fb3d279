"""
Tests for reading an evaluated power roll: tiers, natural 20s and criticals.
"""

import pytest

from drawsteel.core.constants import ResultTier


@pytest.mark.parametrize(
    "dice, edges, banes, product",
    [
        ([5, 6], 0, 0, 1),
        ([6, 6], 0, 0, 2),
        ([8, 8], 0, 0, 2),
        ([8, 9], 0, 0, 3),
        ([10, 10], 0, 0, 3),
        # a single edge or bane moves the total
        ([5, 5], 1, 0, 2),
        ([4, 5], 1, 0, 1),
        ([8, 9], 0, 1, 2),
        ([9, 10], 0, 1, 3),
        # a double edge or bane moves the tier
        ([6, 6], 2, 0, 3),
        ([1, 1], 2, 0, 2),
        ([10, 10], 2, 0, 3),
        ([8, 9], 0, 2, 2),
        ([6, 6], 0, 2, 1),
        ([1, 1], 0, 2, 1),
    ],
)
def test_product(rolled, dice, edges, banes, product):
    roll = rolled(dice, edges=edges, banes=banes)
    assert roll.product == product
    assert roll.tier == ResultTier.from_index(product)
    assert roll.tier_name == f"tier{product}"


def test_tier_thresholds(rolled):
    assert rolled([5, 6]).total == 11
    assert rolled([5, 6]).tier == ResultTier.TIER1
    assert rolled([6, 6]).tier == ResultTier.TIER2
    assert rolled([8, 8]).tier == ResultTier.TIER2
    assert rolled([8, 9]).tier == ResultTier.TIER3


@pytest.mark.parametrize("edges, banes", [(0, 0), (1, 0), (2, 0), (0, 1), (0, 2)])
def test_product_never_drops_as_total_rises(rolled, edges, banes):
    products = [
        rolled([low, high], edges=edges, banes=banes).product
        for low, high in [(1, 1), (1, 5), (5, 5), (5, 6), (6, 6), (6, 9), (8, 9), (9, 10), (10, 10)]
    ]
    assert products == sorted(products)
    assert all(1 <= product <= 3 for product in products)


def test_product_with_flat_modifiers(rolled):
    roll = rolled([5, 5], formula="2d10 + 2")
    assert roll.total == 12
    assert roll.product == 2


def test_unevaluated_roll_has_no_outcome():
    from drawsteel.rolls.power import PowerRoll

    roll = PowerRoll(options={"type": "ability"})
    assert roll.product is None
    assert roll.nat20 is None
    assert roll.critical is None
    assert roll.natural_result is None


def test_natural_20(rolled):
    assert rolled([10, 10]).nat20 is True
    assert rolled([9, 10]).nat20 is False


def test_natural_20_ignores_modifiers(rolled):
    roll = rolled([9, 10], edges=1)
    assert roll.total == 21
    assert roll.natural_result == 19
    assert roll.nat20 is False


@pytest.mark.parametrize("formula", ["1d20", "3d10", "2d6 + 14"])
def test_natural_20_needs_a_power_roll(rolled, formula):
    dice = {"1d20": [20], "3d10": [10, 10, 10], "2d6 + 14": [6, 6]}[formula]
    roll = rolled(dice, formula=formula)
    assert not roll.valid_power_roll
    assert roll.nat20 is None


@pytest.mark.parametrize(
    "dice, critical",
    [([9, 10], True), ([10, 10], True), ([9, 9], False), ([1, 1], False)],
)
def test_ability_critical(rolled, dice, critical):
    assert rolled(dice, type="ability").critical is critical


@pytest.mark.parametrize("roll_type", ["test", "resistance"])
def test_critical_only_for_abilities(rolled, roll_type):
    roll = rolled([10, 10], type=roll_type)
    assert roll.critical is None
    assert roll.nat20 is True


def test_critical_uses_the_natural_result(rolled):
    roll = rolled([9, 9], type="ability", edges=1)
    assert roll.total == 20
    assert roll.critical is False


def test_custom_critical_threshold(rolled):
    assert rolled([8, 9], type="ability", critical_threshold=17).critical is True
    assert rolled([8, 8], type="ability", critical_threshold=17).critical is False
