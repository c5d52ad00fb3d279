"""
Dice evaluator for the Draw Steel rules engine.

Parses dice formulas into roll terms, evaluates them (digitally or with
results entered by the user) and keeps the evaluated state.
"""

from .fulfillment import DiceResolver, default_resolver
from .parser import formula_from_terms, parse_formula, substitute_data
from .roll import Roll
from .terms import (
    DieTerm,
    NumericTerm,
    OperatorTerm,
    RollTerm,
    terms_from_data,
    terms_to_data,
)

__all__ = [
    "DiceResolver",
    "default_resolver",
    "formula_from_terms",
    "parse_formula",
    "substitute_data",
    "Roll",
    "DieTerm",
    "NumericTerm",
    "OperatorTerm",
    "RollTerm",
    "terms_from_data",
    "terms_to_data",
]
