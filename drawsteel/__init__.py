"""
Draw Steel rules engine.

Power rolls for the Draw Steel tactical role-playing game: a 2d10 roll with
edges and banes, read as one of three tiers, with critical and natural 20
detection, chat rendering and an interactive configuration prompt.
"""

from .rolls import DSRoll, PowerRoll, roll_from_dict

__version__ = "0.1.0"

__all__ = [
    "DSRoll",
    "PowerRoll",
    "roll_from_dict",
]
