"""
Rolls of the Draw Steel system.

`DSRoll` is the generic, chat-renderable roll; `PowerRoll` adds edges,
banes, tiers and criticals on top of it.
"""

from .base import ChatRoll, DSRoll, RollContext, render_roll
from .power import (
    PowerRoll,
    PowerRollContext,
    PowerRollResult,
    RollConfiguration,
)
from .prompt import RollDialog, RollPromptContext, prompt_power_roll
from .registry import (
    ROLL_CLASSES,
    get_roll_class,
    register_roll_class,
    roll_from_dict,
)

__all__ = [
    "ChatRoll",
    "DSRoll",
    "RollContext",
    "render_roll",
    "PowerRoll",
    "PowerRollContext",
    "PowerRollResult",
    "RollConfiguration",
    "RollDialog",
    "RollPromptContext",
    "prompt_power_roll",
    "ROLL_CLASSES",
    "get_roll_class",
    "register_roll_class",
    "roll_from_dict",
]
