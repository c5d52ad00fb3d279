"""
Dice fulfillment: how die terms obtain their results.

Dice are rolled digitally unless the client is configured for manual
fulfillment, in which case the user is asked to type the results of their
physical dice.
"""

from typing import TYPE_CHECKING, Optional, Protocol

from drawsteel.core.constants import DiceFulfillment
from drawsteel.core.content import ContentRepository

if TYPE_CHECKING:
    from .terms import DieTerm


class DiceResolver(Protocol):
    """Supplies the results of a die term during evaluation."""

    def resolve(self, term: "DieTerm") -> Optional[list[int]]:
        """Return one result per die, or None to let the dice roll digitally."""
        ...


def default_resolver() -> Optional[DiceResolver]:
    """Returns the resolver matching the configured dice fulfillment."""
    settings = ContentRepository().settings
    if settings.dice_fulfillment == DiceFulfillment.MANUAL:
        from drawsteel.ui.dice_input import PromptToolkitDiceResolver

        return PromptToolkitDiceResolver()
    return None
