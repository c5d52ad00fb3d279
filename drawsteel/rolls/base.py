"""
Generic roll wrapper.

Adds a uniform "prepare for display" contract on top of the dice evaluator,
without any knowledge of ruleset semantics. Ruleset rolls compose a `DSRoll`
and extend its display context rather than subclassing it.
"""

from typing import Any, ClassVar, Optional, Protocol

from pydantic import BaseModel, Field

from drawsteel.chat.messages import CHAT_LOG, ChatLog, ChatMessage
from drawsteel.chat.templates import ROLL_TEMPLATE, render_template
from drawsteel.core.constants import DEFAULT_FORMULA
from drawsteel.core.content import ContentRepository
from drawsteel.dice.fulfillment import DiceResolver
from drawsteel.dice.roll import Roll
from drawsteel.dice.terms import DieTerm, RollTerm

from .registry import register_roll_class


class RollContext(BaseModel):
    """Display context of a roll, handed to the chat templates."""

    formula: str = Field(
        description="The roll formula, or '???' for private rolls.",
    )
    flavor: str | None = Field(
        None,
        description="Flavor text, always None for private rolls.",
    )
    user: str = Field(
        description="Identifier of the user who made the roll.",
    )
    tooltip: str = Field(
        "",
        description="Individual dice results, empty for private rolls.",
    )
    total: int | float | str | None = Field(
        None,
        description="The total rounded to 2 decimals, or '?' for private rolls.",
    )


class ChatRoll(Protocol):
    """Capability shared by every roll that can be shown in chat."""

    CHAT_TEMPLATE: ClassVar[str]

    @property
    def evaluated(self) -> bool: ...

    def evaluate(self, allow_interactive: bool = True, resolver: Optional[DiceResolver] = None) -> Any: ...

    def prepare_context(self, flavor: Optional[str] = None, is_private: bool = False) -> RollContext: ...


def render_roll(
    roll: ChatRoll,
    flavor: Optional[str] = None,
    template: Optional[str] = None,
    is_private: bool = False,
    colour: bool = True,
) -> str:
    """
    Renders a roll with its chat template, evaluating it first if needed.

    Private rolls are evaluated without asking the user for dice results.

    Args:
        roll (ChatRoll):
            The roll to render.
        flavor (str | None):
            Flavor text overriding the roll's own.
        template (str | None):
            Template identifier, defaults to the roll's CHAT_TEMPLATE.
        is_private (bool):
            Hide the formula, flavor, dice and total.
        colour (bool):
            Keep ANSI colour codes in the output.

    Returns:
        str:
            The rendered roll.

    """
    if not roll.evaluated:
        roll.evaluate(allow_interactive=not is_private)
    context = roll.prepare_context(flavor=flavor, is_private=is_private)
    return render_template(
        template or roll.CHAT_TEMPLATE,
        context.model_dump(by_alias=True),
        colour=colour,
    )


@register_roll_class
class DSRoll:
    """A roll of the Draw Steel system, renderable to chat."""

    CHAT_TEMPLATE: ClassVar[str] = ROLL_TEMPLATE

    def __init__(
        self,
        formula: str = DEFAULT_FORMULA,
        data: Optional[dict[str, Any]] = None,
        options: Optional[dict[str, Any]] = None,
    ) -> None:
        self.roll = Roll(formula, data, options)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.formula!r}, total={self.total})"

    # ---- Evaluator state ----

    @property
    def options(self) -> dict[str, Any]:
        return self.roll.options

    @property
    def flavor(self) -> str | None:
        return self.roll.options.get("flavor")

    @property
    def terms(self) -> list[RollTerm]:
        return self.roll.terms

    @property
    def dice(self) -> list[DieTerm]:
        return self.roll.dice

    @property
    def formula(self) -> str:
        return self.roll.formula

    @property
    def total(self) -> int | float | None:
        return self.roll.total

    @property
    def evaluated(self) -> bool:
        return self.roll.evaluated

    def reset_formula(self) -> str:
        return self.roll.reset_formula()

    def evaluate(
        self,
        allow_interactive: bool = True,
        resolver: Optional[DiceResolver] = None,
    ) -> "DSRoll":
        self.roll.evaluate(allow_interactive=allow_interactive, resolver=resolver)
        return self

    def get_tooltip(self) -> str:
        return self.roll.get_tooltip()

    # ---- Display ----

    def prepare_context(
        self,
        flavor: Optional[str] = None,
        is_private: bool = False,
    ) -> RollContext:
        """
        Builds the display context of the roll.

        Args:
            flavor (str | None): Flavor text to include.
            is_private (bool): Is the roll displayed privately?

        Returns:
            RollContext: The context to hand to a chat template.

        """
        total = self.total
        if is_private:
            total = "?"
        elif total is not None:
            total = round(total, 2)
        return RollContext(
            formula="???" if is_private else self.formula,
            flavor=None if is_private else (flavor if flavor is not None else self.flavor),
            user=ContentRepository().settings.user_id,
            tooltip="" if is_private else self.get_tooltip(),
            total=total,
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
            "options": dict(self.options),
            **self.roll.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DSRoll":
        roll = cls(data["formula"], options=data.get("options"))
        if data.get("evaluated"):
            roll.roll.restore(data)
        return roll
