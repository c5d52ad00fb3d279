"""
User interface module for the rules engine.

Provides the terminal implementations of the interactive capabilities: the
roll configuration dialog and manual dice input.
"""

from .dice_input import PromptToolkitDiceResolver
from .roll_dialog import PromptToolkitRollDialog

__all__ = [
    "PromptToolkitDiceResolver",
    "PromptToolkitRollDialog",
]
