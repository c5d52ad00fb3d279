"""
Power rolls.

The power roll is the ruleset's primary check: 2d10 plus modifiers, read as
one of three tiers. Edges and banes cancel each other out; a single net
edge (or bane) adds (or subtracts) 2 to the total, while a double edge (or
bane) leaves the total alone and moves the result one tier up (or down).
"""

from types import MappingProxyType
from typing import Any, ClassVar, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from drawsteel.chat.messages import CHAT_LOG, ChatLog, ChatMessage
from drawsteel.chat.templates import POWER_ROLL_TEMPLATE
from drawsteel.core.constants import (
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_FORMULA,
    EDGE_BANE_MODIFIER,
    MAX_BANE,
    MAX_EDGE,
    MODIFIER_LABELS,
    PowerRollType,
    ResultTier,
)
from drawsteel.core.error_handling import (
    ConfigurationError,
    FormulaError,
    require_choice,
)
from drawsteel.core.i18n import localize
from drawsteel.core.logging import get_logger
from drawsteel.core.utils import clamp, sign
from drawsteel.core.validation import validate_power_roll_options
from drawsteel.dice.fulfillment import DiceResolver
from drawsteel.dice.terms import DieTerm, NumericTerm, OperatorTerm, RollTerm

from .base import DSRoll, RollContext, render_roll
from .registry import register_roll_class

logger = get_logger(__name__)


class RollConfiguration(BaseModel):
    """The options of a power roll, normalized at construction time."""

    model_config = ConfigDict(extra="allow")

    type: PowerRollType = Field(
        PowerRollType.TEST,
        description="The kind of power roll.",
    )
    edges: int = Field(
        0,
        description="Number of edges, clamped to [0, MAX_EDGE].",
    )
    banes: int = Field(
        0,
        description="Number of banes, clamped to [0, MAX_BANE].",
    )
    critical_threshold: int = Field(
        DEFAULT_CRITICAL_THRESHOLD,
        description="Natural result at or above which an ability roll is a critical.",
    )
    applied_modifier: bool = Field(
        False,
        description="Whether the edge/bane modifier terms were already added.",
    )
    flavor: str | None = Field(
        None,
        description="Flavor text shown with the roll.",
    )
    skill: str | None = Field(
        None,
        description="Identifier of the skill applied to a test.",
    )

    def model_post_init(self, _: Any) -> None:
        """Clamps edges and banes after model initialization."""
        self.edges = clamp(self.edges, 0, MAX_EDGE)
        self.banes = clamp(self.banes, 0, MAX_BANE)


class TierContext(BaseModel):
    label: str
    css_class: str = Field(serialization_alias="class")


class ModifierContext(BaseModel):
    number: int
    mod: str


class PowerRollContext(RollContext):
    """Display context of a power roll."""

    tier: TierContext | None = Field(
        None,
        description="The tier label and style token, None before evaluation.",
    )
    modifier: ModifierContext = Field(
        description="Net number of edges or banes and their label.",
    )
    critical: str = Field(
        "",
        description="'critical' when the roll is a critical or a natural 20.",
    )


class PowerRollResult(BaseModel):
    """Outcome of a fallible power roll construction."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool
    roll: Any = Field(
        None,
        description="The constructed PowerRoll, when successful.",
    )
    errors: list[str] = Field(default_factory=list)


@register_roll_class
class PowerRoll:
    """A power roll: a 2d10 roll with edges, banes, tiers and criticals."""

    CHAT_TEMPLATE: ClassVar[str] = POWER_ROLL_TEMPLATE

    DEFAULT_OPTIONS: ClassVar[MappingProxyType] = MappingProxyType({
        "type": PowerRollType.TEST.value,
        "critical_threshold": DEFAULT_CRITICAL_THRESHOLD,
        "banes": 0,
        "edges": 0,
    })

    MAX_EDGE: ClassVar[int] = MAX_EDGE
    MAX_BANE: ClassVar[int] = MAX_BANE

    VALID_TYPES: ClassVar[tuple[str, ...]] = tuple(PowerRollType.values())
    TIER_NAMES: ClassVar[tuple[str, ...]] = tuple(tier.value for tier in ResultTier)

    def __init__(
        self,
        formula: str = DEFAULT_FORMULA,
        data: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> None:
        """
        Builds a power roll, adding the edge or bane modifier when the net
        boon is exactly one.

        Args:
            formula (str):
                The dice formula. Defaults to "2d10".
            data (dict[str, Any] | None):
                Values for the `@path` references of the formula.
            options (dict[str, Any] | None):
                Roll options (type, edges, banes, critical_threshold, flavor,
                ...). Missing or None options take the class defaults.

        Raises:
            ConfigurationError: If the options are invalid.
            FormulaError: If the formula cannot be parsed.

        """
        supplied = {key: value for key, value in (options or {}).items() if value is not None}
        merged = {**self.DEFAULT_OPTIONS, **supplied}
        merged["type"] = require_choice(merged["type"], self.VALID_TYPES, "type")

        validation = validate_power_roll_options(merged)
        if not validation.is_valid:
            raise ConfigurationError("; ".join(validation.errors))
        try:
            self.options = RollConfiguration(**merged)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid power roll options: {e}") from e

        self.base = DSRoll(formula, data, {"flavor": self.options.flavor})

        if not self.options.applied_modifier and abs(self.net_boon) == 1:
            self._apply_modifier()

    def __repr__(self) -> str:
        return (
            f"PowerRoll({self.formula!r}, type={self.options.type.value}, "
            f"net_boon={self.net_boon}, total={self.total})"
        )

    def _apply_modifier(self) -> None:
        """Appends the +2 (edge) or -2 (bane) terms to the formula."""
        positive = self.net_boon > 0
        operation = OperatorTerm(operator="+" if positive else "-")
        number = NumericTerm(
            number=EDGE_BANE_MODIFIER,
            flavor=localize(MODIFIER_LABELS[1 if positive else -1]),
        )
        self.base.terms.extend([operation, number])
        self.base.reset_formula()
        self.options.applied_modifier = True
        logger.debug(f"Applied {'edge' if positive else 'bane'} modifier: {self.formula}")

    @classmethod
    def create(
        cls,
        formula: str = DEFAULT_FORMULA,
        data: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> PowerRollResult:
        """
        Builds a power roll without raising.

        Returns:
            PowerRollResult: Either the roll, or the configuration errors.

        """
        try:
            return PowerRollResult(success=True, roll=cls(formula, data, options))
        except (ConfigurationError, FormulaError) as e:
            return PowerRollResult(success=False, errors=[str(e)])

    @classmethod
    def prompt(cls, **kwargs: Any) -> Any:
        """Configures a power roll through the roll dialog. See `prompt_power_roll`."""
        from .prompt import prompt_power_roll

        return prompt_power_roll(cls, **kwargs)

    # ---- Evaluator state ----

    @property
    def terms(self) -> list[RollTerm]:
        return self.base.terms

    @property
    def dice(self) -> list[DieTerm]:
        return self.base.dice

    @property
    def formula(self) -> str:
        return self.base.formula

    @property
    def flavor(self) -> str | None:
        return self.options.flavor

    @property
    def total(self) -> int | float | None:
        return self.base.total

    @property
    def evaluated(self) -> bool:
        return self.base.evaluated

    def evaluate(
        self,
        allow_interactive: bool = True,
        resolver: Optional[DiceResolver] = None,
    ) -> "PowerRoll":
        """Evaluates the roll once; later calls keep the first result."""
        self.base.evaluate(allow_interactive=allow_interactive, resolver=resolver)
        return self

    def get_tooltip(self) -> str:
        return self.base.get_tooltip()

    # ---- Outcome ----

    @property
    def valid_power_roll(self) -> bool:
        """Whether the roll starts with the 2d10 base of a power roll."""
        first_term = self.terms[0] if self.terms else None
        return (
            isinstance(first_term, DieTerm)
            and first_term.faces == 10
            and first_term.number == 2
        )

    @property
    def net_boon(self) -> int:
        """Edges minus banes, an integer from -2 to 2."""
        return self.options.edges - self.options.banes

    @property
    def product(self) -> int | None:
        """
        The tier of the roll as a number.

        Returns:
            int | None: 1, 2 or 3, or None if the roll is not yet evaluated.

        """
        if self.total is None:
            return None
        tier = sum(1 for result_tier in ResultTier if self.total >= result_tier.threshold)
        # A double edge or bane shifts the tier instead of the total.
        adjustment = self.net_boon - sign(self.net_boon)
        return clamp(tier + adjustment, 1, 3)

    @property
    def tier(self) -> ResultTier | None:
        product = self.product
        return None if product is None else ResultTier.from_index(product)

    @property
    def tier_name(self) -> str | None:
        """The tier as "tier1", "tier2" or "tier3", or None before evaluation."""
        tier = self.tier
        return None if tier is None else tier.value

    @property
    def natural_result(self) -> int | None:
        """The total of the first dice group, or None if there is none yet."""
        if not self.dice:
            return None
        return self.dice[0].total

    @property
    def nat20(self) -> bool | None:
        """
        Whether the natural result was a 20.

        Returns:
            bool | None: None if not yet evaluated or not a 2d10 power roll.

        """
        if not self.evaluated or not self.valid_power_roll:
            return None
        return self.natural_result >= 20

    @property
    def critical(self) -> bool | None:
        """
        Whether an ability roll was a critical.

        Returns:
            bool | None: None if not an ability roll or not yet evaluated,
            otherwise whether the natural result reached the threshold.

        """
        if self.options.type != PowerRollType.ABILITY:
            return None
        if not self.evaluated or self.natural_result is None:
            return None
        return self.natural_result >= self.options.critical_threshold

    # ---- Display ----

    def prepare_context(
        self,
        flavor: Optional[str] = None,
        is_private: bool = False,
    ) -> PowerRollContext:
        """Extends the generic roll context with tier, modifier and critical."""
        context = self.base.prepare_context(
            flavor=flavor if flavor is not None else self.flavor,
            is_private=is_private,
        )

        tier = self.tier
        tier_context = None
        if tier is not None:
            tier_context = TierContext(label=localize(tier.label), css_class=tier.value)

        return PowerRollContext(
            **context.model_dump(),
            tier=tier_context,
            modifier=ModifierContext(
                number=abs(self.net_boon),
                mod=localize(MODIFIER_LABELS[self.net_boon]),
            ),
            critical="critical" if (self.critical or self.nat20) else "",
        )

    def render(
        self,
        flavor: Optional[str] = None,
        template: Optional[str] = None,
        is_private: bool = False,
        colour: bool = True,
    ) -> str:
        return render_roll(self, flavor, template, is_private, colour)

    def to_message(
        self,
        chat: Optional[ChatLog] = None,
        flavor: Optional[str] = None,
        is_private: bool = False,
    ) -> ChatMessage:
        """Evaluates the roll if needed and posts it to the chat log."""
        return (chat or CHAT_LOG).post(self, flavor=flavor, is_private=is_private)

    # ---- Serialization ----

    def to_dict(self) -> dict[str, Any]:
        return {
            "class": type(self).__name__,
            "options": self.options.model_dump(mode="json"),
            **self.base.roll.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PowerRoll":
        """
        Rebuilds a serialized power roll. The stored options carry
        `applied_modifier`, so the modifier terms already present in the
        formula are never added a second time.
        """
        roll = cls(data["formula"], options=data.get("options"))
        if data.get("evaluated"):
            roll.base.roll.restore(data)
        return roll
