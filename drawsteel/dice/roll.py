"""
The dice evaluator.

A `Roll` parses a formula into terms, evaluates them once, and keeps the
evaluated state so the total and the individual dice can be inspected (or
serialized) afterwards without re-rolling.
"""

from typing import Any, Optional

from drawsteel.core.constants import DEFAULT_FORMULA
from drawsteel.core.logging import get_logger

from .fulfillment import DiceResolver, default_resolver
from .parser import formula_from_terms, parse_formula
from .terms import DieTerm, OperatorTerm, RollTerm, terms_from_data, terms_to_data

logger = get_logger(__name__)


class Roll:
    """A dice formula and, once evaluated, its result."""

    def __init__(
        self,
        formula: str = DEFAULT_FORMULA,
        data: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Parse the formula into terms.

        Args:
            formula (str):
                The dice formula.
            data (dict[str, Any] | None):
                Values for the `@path` references of the formula.
            options (dict[str, Any] | None):
                Arbitrary options carried along with the roll (e.g. flavor).

        Raises:
            FormulaError: If the formula cannot be parsed.

        """
        self.data: dict[str, Any] = dict(data or {})
        self.options: dict[str, Any] = dict(options or {})
        self.terms: list[RollTerm] = parse_formula(formula, self.data)
        self._formula = formula_from_terms(self.terms)
        self._total: int | float | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._formula!r}, total={self._total})"

    @property
    def formula(self) -> str:
        return self._formula

    @property
    def evaluated(self) -> bool:
        return self._total is not None

    @property
    def total(self) -> int | float | None:
        """The evaluated total, or None before evaluation."""
        return self._total

    @property
    def dice(self) -> list[DieTerm]:
        """The die terms of the formula, in order."""
        return [term for term in self.terms if isinstance(term, DieTerm)]

    def reset_formula(self) -> str:
        """Rebuilds the formula string after the terms have been changed."""
        self._formula = formula_from_terms(self.terms)
        return self._formula

    def evaluate(
        self,
        allow_interactive: bool = True,
        resolver: Optional[DiceResolver] = None,
    ) -> "Roll":
        """
        Evaluates every term and computes the total.

        Evaluating an already evaluated roll does nothing.

        Args:
            allow_interactive (bool):
                Whether the user may be asked for physical dice results.
            resolver (DiceResolver | None):
                Overrides the configured dice fulfillment.

        Returns:
            Roll: The roll itself.

        """
        if self.evaluated:
            return self
        if not allow_interactive:
            resolver = None
        elif resolver is None:
            resolver = default_resolver()
        for term in self.terms:
            term.evaluate(resolver)
        self._total = self._compute_total()
        logger.debug(f"Evaluated {self._formula} = {self._total}")
        return self

    def _compute_total(self) -> int | float:
        total: int | float = 0
        negative = False
        for term in self.terms:
            if isinstance(term, OperatorTerm):
                negative = term.operator == "-"
                continue
            value = term.total or 0
            total += -value if negative else value
            negative = False
        return total

    def get_tooltip(self) -> str:
        """Describes the individual dice results of an evaluated roll."""
        lines = []
        for term in self.dice:
            if not term.evaluated:
                continue
            results = ", ".join(str(result) for result in term.results)
            line = f"{term.expression}: {results} = {term.total}"
            if term.flavor:
                line += f" ({term.flavor})"
            lines.append(line)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Serializes the roll, including its evaluated state."""
        return {
            "formula": self._formula,
            "terms": terms_to_data(self.terms),
            "total": self._total,
            "evaluated": self.evaluated,
        }

    def restore(self, data: dict[str, Any]) -> None:
        """Reinstates the terms and total of a serialized, evaluated roll."""
        self.terms = terms_from_data(data["terms"])
        self._total = data.get("total")
        self.reset_formula()
