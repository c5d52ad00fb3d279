"""
Registry of roll classes.

Roll classes register under their class name so serialized rolls (for
example the ones attached to chat messages) can be rebuilt as the right
class.
"""

from typing import Any, TypeVar

from drawsteel.core.error_handling import UnresolvedReferenceError

ROLL_CLASSES: dict[str, type] = {}

RollClass = TypeVar("RollClass", bound=type)


def register_roll_class(cls: RollClass) -> RollClass:
    """Registers a roll class under its name. Usable as a class decorator."""
    ROLL_CLASSES[cls.__name__] = cls
    return cls


def get_roll_class(name: str) -> type:
    """
    Returns the roll class registered under the given name.

    Raises:
        UnresolvedReferenceError: If no class has that name.

    """
    try:
        return ROLL_CLASSES[name]
    except KeyError:
        raise UnresolvedReferenceError(f"No roll class registered as '{name}'") from None


def roll_from_dict(data: dict[str, Any]) -> Any:
    """Rebuilds a roll serialized with its `to_dict` method."""
    return get_roll_class(data.get("class", "")).from_dict(data)
