"""
Constants and enumerations for the Draw Steel rules engine.

Defines the power roll types, the result tiers with their thresholds, the
evaluation modes of the roll prompt, and the limits applied to edges and
banes.
"""

from enum import Enum

# Base formula of every power roll.
DEFAULT_FORMULA = "2d10"

# Maximum number of edges.
MAX_EDGE = 2

# Maximum number of banes.
MAX_BANE = 2

# Natural result at or above which an ability roll is a critical.
DEFAULT_CRITICAL_THRESHOLD = 19

# Flat bonus (or penalty) applied to the total by a single net edge (or bane).
EDGE_BANE_MODIFIER = 2


class NiceEnum(Enum):
    """An enumeration that provides a nicer string representation."""

    def __str__(self) -> str:
        return self.name

    @property
    def display_name(self) -> str:
        return self.name.lower().capitalize()


class PowerRollType(NiceEnum):
    """Defines the kind of power roll being made."""

    ABILITY = "ability"
    RESISTANCE = "resistance"
    TEST = "test"

    @property
    def label(self) -> str:
        """Returns the i18n key of the type label."""
        return {
            PowerRollType.ABILITY: "DRAW_STEEL.Roll.Power.Types.Ability",
            PowerRollType.RESISTANCE: "DRAW_STEEL.Roll.Power.Types.Resistance",
            PowerRollType.TEST: "DRAW_STEEL.Roll.Power.Types.Test",
        }[self]

    @property
    def emoji(self) -> str:
        """Returns the emoji associated with this roll type."""
        return {
            PowerRollType.ABILITY: "⚡",
            PowerRollType.RESISTANCE: "✊",
            PowerRollType.TEST: "🎲",
        }.get(self, "❔")

    @property
    def color(self) -> str:
        """Returns the color string associated with this roll type."""
        return {
            PowerRollType.ABILITY: "bold yellow",
            PowerRollType.RESISTANCE: "bold magenta",
            PowerRollType.TEST: "bold cyan",
        }.get(self, "dim white")

    @property
    def colored_name(self) -> str:
        return self.colorize(self.display_name)

    def colorize(self, message: str) -> str:
        """Applies roll type color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    @classmethod
    def values(cls) -> list[str]:
        """Returns the raw values accepted as roll types."""
        return [member.value for member in cls]


class ResultTier(NiceEnum):
    """Defines the three outcome bands of a power roll."""

    TIER1 = "tier1"
    TIER2 = "tier2"
    TIER3 = "tier3"

    @property
    def index(self) -> int:
        """Returns the numeric tier, from 1 to 3."""
        return {
            ResultTier.TIER1: 1,
            ResultTier.TIER2: 2,
            ResultTier.TIER3: 3,
        }[self]

    @property
    def threshold(self) -> float:
        """Returns the minimum total needed to reach this tier."""
        return {
            ResultTier.TIER1: float("-inf"),
            ResultTier.TIER2: 12,
            ResultTier.TIER3: 17,
        }[self]

    @property
    def label(self) -> str:
        """Returns the i18n key of the tier label."""
        return {
            ResultTier.TIER1: "DRAW_STEEL.Roll.Power.Tiers.One",
            ResultTier.TIER2: "DRAW_STEEL.Roll.Power.Tiers.Two",
            ResultTier.TIER3: "DRAW_STEEL.Roll.Power.Tiers.Three",
        }[self]

    @property
    def color(self) -> str:
        """Returns the color string associated with this tier."""
        return {
            ResultTier.TIER1: "bold red",
            ResultTier.TIER2: "bold yellow",
            ResultTier.TIER3: "bold green",
        }.get(self, "dim white")

    def colorize(self, message: str) -> str:
        """Applies tier color formatting to a message."""
        return f"[{self.color}]{message}[/]"

    @classmethod
    def from_index(cls, index: int) -> "ResultTier":
        """Returns the tier with the given numeric index."""
        for tier in cls:
            if tier.index == index:
                return tier
        raise ValueError(f"Invalid tier index: {index}")


class EvaluationMode(NiceEnum):
    """Defines how the roll prompt returns the roll it builds."""

    NONE = "none"
    EVALUATE = "evaluate"
    MESSAGE = "message"

    @classmethod
    def values(cls) -> list[str]:
        """Returns the raw values accepted as evaluation modes."""
        return [member.value for member in cls]


class DiceFulfillment(NiceEnum):
    """Defines how dice results are produced during evaluation."""

    DIGITAL = "digital"
    MANUAL = "manual"


# i18n keys of the modifier labels, by net boon.
MODIFIER_LABELS: dict[int, str] = {
    -2: "DRAW_STEEL.Roll.Power.Modifier.Banes",
    -1: "DRAW_STEEL.Roll.Power.Modifier.Bane",
    0: "",
    1: "DRAW_STEEL.Roll.Power.Modifier.Edge",
    2: "DRAW_STEEL.Roll.Power.Modifier.Edges",
}

PROMPT_TITLE = "DRAW_STEEL.Roll.Power.Prompt.Title"
