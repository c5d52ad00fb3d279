"""
Dice formula parser.

Turns a formula string into a sequence of roll terms. The supported grammar
is the one power rolls use: dice groups (`2d10`), numeric literals, `+` and
`-` operators, optional `[flavor]` annotations on dice and numbers, and
`@path` references resolved against the roll data before parsing.
"""

import re
from collections.abc import Mapping
from typing import Any

from catchery import log_warning

from drawsteel.core.error_handling import FormulaError

from .terms import DieTerm, NumericTerm, OperatorTerm, RollTerm

DATA_PATTERN = re.compile(r"@([a-zA-Z_][\w.]*)")

TERM_PATTERN = re.compile(
    r"\s*(?:"
    r"(?P<die>(?P<number>\d*)[dD](?P<faces>\d+))"
    r"|(?P<numeric>\d+(?:\.\d+)?)"
    r"|(?P<operator>[+-])"
    r")(?:\[(?P<flavor>[^\]]*)\])?\s*"
)


# ---- Data Substitution ----
def resolve_path(data: Mapping[str, Any], path: str) -> Any:
    """
    Looks up a dotted path (e.g. `characteristics.might`) in nested mappings.

    Args:
        data (Mapping[str, Any]): The roll data.
        path (str): The dotted path.

    Returns:
        Any: The value found, or None if any segment is missing.

    """
    value: Any = data
    for segment in path.split("."):
        if not isinstance(value, Mapping) or segment not in value:
            return None
        value = value[segment]
    return value


def substitute_data(formula: str, data: Mapping[str, Any] | None = None) -> str:
    """
    Replaces the `@path` references of a formula with values from the data.

    Missing references are replaced by 0 and reported as a warning.

    Args:
        formula (str): The formula to substitute.
        data (Mapping[str, Any] | None): The roll data.

    Returns:
        str: The formula with every reference replaced.

    """
    data = data or {}

    def replace(match: re.Match[str]) -> str:
        value = resolve_path(data, match.group(1))
        if value is None or isinstance(value, Mapping):
            log_warning(
                f"The attribute '{match.group(1)}' is not present in the roll data, using 0",
                {"formula": formula, "reference": match.group(0)},
            )
            return "0"
        return str(value)

    return DATA_PATTERN.sub(replace, formula)


# ---- Parsing ----
def tokenize(formula: str) -> list[RollTerm]:
    """
    Splits an already substituted formula into raw terms.

    Raises:
        FormulaError: If the formula contains unsupported syntax.

    """
    terms: list[RollTerm] = []
    position = 0
    while position < len(formula):
        match = TERM_PATTERN.match(formula, position)
        if not match or match.end() == position:
            raise FormulaError(
                f"Unsupported syntax in formula '{formula}' at '{formula[position:]}'"
            )
        flavor = match.group("flavor") or None
        if match.group("die"):
            count = match.group("number")
            try:
                terms.append(
                    DieTerm(
                        number=int(count) if count else 1,
                        faces=int(match.group("faces")),
                        flavor=flavor,
                    )
                )
            except ValueError as e:
                raise FormulaError(f"Invalid dice in formula '{formula}': {e}") from e
        elif match.group("numeric"):
            text = match.group("numeric")
            number = float(text) if "." in text else int(text)
            terms.append(NumericTerm(number=number, flavor=flavor))
        else:
            if flavor:
                raise FormulaError(f"Operators cannot carry flavor text: '{formula}'")
            terms.append(OperatorTerm(operator=match.group("operator")))
        position = match.end()
    return terms


def simplify_operators(terms: list[RollTerm], formula: str) -> list[RollTerm]:
    """
    Folds runs of operators into one and checks that operators and operands
    alternate.

    Raises:
        FormulaError: If two operands are adjacent or the formula ends with
        an operator.

    """
    simplified: list[RollTerm] = []
    for term in terms:
        previous = simplified[-1] if simplified else None
        if isinstance(term, OperatorTerm):
            if isinstance(previous, OperatorTerm):
                negative = (previous.operator == "-") != (term.operator == "-")
                simplified[-1] = OperatorTerm(operator="-" if negative else "+")
                continue
        elif previous is not None and not isinstance(previous, OperatorTerm):
            raise FormulaError(f"Missing operator between terms in formula '{formula}'")
        simplified.append(term)
    if not simplified or isinstance(simplified[-1], OperatorTerm):
        raise FormulaError(f"Incomplete formula '{formula}'")
    return simplified


def parse_formula(formula: str, data: Mapping[str, Any] | None = None) -> list[RollTerm]:
    """
    Parses a formula into its roll terms.

    Args:
        formula (str):
            The formula, e.g. "2d10 + @characteristics.might".
        data (Mapping[str, Any] | None):
            The roll data used to resolve `@path` references.

    Returns:
        list[RollTerm]:
            The ordered term sequence.

    Raises:
        FormulaError: If the formula is empty or uses unsupported syntax.

    """
    if not formula or not formula.strip():
        raise FormulaError("Invalid dice formula: empty")
    substituted = substitute_data(formula.strip(), data)
    return simplify_operators(tokenize(substituted), formula)


def formula_from_terms(terms: list[RollTerm]) -> str:
    """Rebuilds the formula string of a term sequence."""
    return " ".join(term.formula for term in terms)
