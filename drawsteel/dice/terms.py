"""
Roll terms for the dice evaluator.

A roll formula is an ordered sequence of terms: dice groups, operators and
numeric literals. Terms are pydantic models discriminated by `term_type`, so
an evaluated roll can be serialized and restored without re-rolling.
"""

import random
from typing import TYPE_CHECKING, Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter

from drawsteel.core.error_handling import FormulaError

if TYPE_CHECKING:
    from .fulfillment import DiceResolver

# Reasonable limits for a single dice group.
MAX_DICE = 100
MAX_FACES = 1000


class RollTerm(BaseModel):
    """Base class for the atomic pieces of a dice formula."""

    flavor: str | None = Field(
        default=None,
        description="Optional display annotation, written as [flavor].",
    )

    @property
    def expression(self) -> str:
        """The term without its flavor annotation."""
        raise NotImplementedError("Subclasses must implement expression.")

    @property
    def formula(self) -> str:
        """The term as it appears in a formula string."""
        if self.flavor:
            return f"{self.expression}[{self.flavor}]"
        return self.expression

    @property
    def evaluated(self) -> bool:
        return True

    @property
    def total(self) -> int | float | None:
        return None

    def evaluate(self, resolver: Optional["DiceResolver"] = None) -> None:
        """Resolves the term to concrete numbers. Most terms already are."""


class DieTerm(RollTerm):
    """A group of identical dice, such as 2d10."""

    term_type: Literal["DieTerm"] = "DieTerm"
    number: int = Field(
        1,
        description="How many dice are rolled.",
    )
    faces: int = Field(
        description="How many faces each die has.",
    )
    results: list[int] = Field(
        default_factory=list,
        description="The face rolled by each die, once evaluated.",
    )

    def model_post_init(self, _: Any) -> None:
        """Validates fields after model initialization."""
        if not 1 <= self.number <= MAX_DICE:
            raise ValueError(f"Number of dice must be between 1 and {MAX_DICE}, got {self.number}")
        if not 1 <= self.faces <= MAX_FACES:
            raise ValueError(f"Number of faces must be between 1 and {MAX_FACES}, got {self.faces}")
        if self.results:
            self._check_results(self.results)

    @property
    def expression(self) -> str:
        return f"{self.number}d{self.faces}"

    @property
    def evaluated(self) -> bool:
        return len(self.results) == self.number

    @property
    def total(self) -> int | None:
        if not self.evaluated:
            return None
        return sum(self.results)

    def roll(self) -> int:
        """Rolls a single die of this term."""
        return random.randint(1, self.faces)

    def evaluate(self, resolver: Optional["DiceResolver"] = None) -> None:
        """
        Rolls every die of the term, unless already evaluated.

        Args:
            resolver (DiceResolver | None):
                Supplies results entered by the user. When it returns None the
                dice are rolled digitally.

        Raises:
            FormulaError: If the resolver supplies impossible results.

        """
        if self.evaluated:
            return
        results = resolver.resolve(self) if resolver else None
        if results is None:
            results = [self.roll() for _ in range(self.number)]
        try:
            self._check_results(results)
        except ValueError as e:
            raise FormulaError(str(e)) from e
        self.results = list(results)

    def _check_results(self, results: list[int]) -> None:
        if len(results) != self.number:
            raise ValueError(
                f"{self.expression} needs {self.number} results, got {len(results)}"
            )
        for result in results:
            if not 1 <= result <= self.faces:
                raise ValueError(f"Result {result} is not a face of a d{self.faces}")


class OperatorTerm(RollTerm):
    """An arithmetic operator joining two terms."""

    term_type: Literal["OperatorTerm"] = "OperatorTerm"
    operator: Literal["+", "-"] = Field(
        description="The arithmetic operator.",
    )

    @property
    def expression(self) -> str:
        return self.operator

    @property
    def formula(self) -> str:
        return self.operator


class NumericTerm(RollTerm):
    """A literal number."""

    term_type: Literal["NumericTerm"] = "NumericTerm"
    number: int | float = Field(
        description="The literal value.",
    )

    @property
    def expression(self) -> str:
        return str(self.number)

    @property
    def total(self) -> int | float:
        return self.number


AnyRollTerm = Annotated[
    Union[DieTerm, OperatorTerm, NumericTerm],
    Field(discriminator="term_type"),
]

TERMS_ADAPTER: TypeAdapter[list[AnyRollTerm]] = TypeAdapter(list[AnyRollTerm])


def terms_to_data(terms: list[RollTerm]) -> list[dict[str, Any]]:
    """Serializes a term sequence."""
    return TERMS_ADAPTER.dump_python(terms, mode="json")


def terms_from_data(data: list[dict[str, Any]]) -> list[RollTerm]:
    """Restores a term sequence serialized with terms_to_data."""
    return list(TERMS_ADAPTER.validate_python(data))
