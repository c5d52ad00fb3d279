"""
Utilities module for the rules engine.

Provides common helpers: console printing with rich formatting, the
singleton metaclass, and the small numeric helpers used by the roll
engine.
"""

from __future__ import annotations

import io
from typing import Any, Generic

from rich.console import Console
from rich.rule import Rule
from typing_extensions import TypeVar

# Initialize the rich console.
_console = Console(markup=True, width=120, force_jupyter=False)


def cprint(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output.

    Args:
        *args: Arguments to pass to the console print function.
        **kwargs: Keyword arguments to pass to the console print function.

    """
    _console.print(*args, **kwargs)


def crule(*args: Any, **kwargs: Any) -> None:
    """
    Custom print function to handle colored output with a rule.

    Args:
        *args: Arguments to pass to the Rule constructor.
        **kwargs: Keyword arguments to pass to the Rule constructor.

    """
    _console.print(Rule(*args, **kwargs))


def ccapture(content: Any, colour: bool = True) -> str:
    """
    Captures console output as a string.

    Args:
        content (Any): The content to capture.
        colour (bool): Keep ANSI escape sequences. Defaults to True.

    Returns:
        str: The captured output as a string.

    """
    if not colour:
        tmp = Console(record=True, color_system=None, width=120, file=io.StringIO())
        tmp.print(content, markup=True, end="")
        return tmp.export_text()
    with _console.capture() as capture:
        _console.print(content, markup=True, end="")
    return capture.get()


# ---- Singleton Metaclass ----


_T = TypeVar("_T")


class Singleton(type, Generic[_T]):
    """Metaclass that returns the same instance every time."""

    _instances: dict[Singleton[_T], _T] = {}

    def __call__(cls, *args: Any, **kwargs: Any) -> _T:
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        elif args or kwargs:
            # Re-run the initializer so callers can point it at new data.
            cls._instances[cls].__init__(*args, **kwargs)
        return cls._instances[cls]


# ---- Numeric helpers ----
def clamp(value: int, minimum: int, maximum: int) -> int:
    """
    Restricts a value to the inclusive range [minimum, maximum].

    Args:
        value (int): The value to clamp.
        minimum (int): The lower bound.
        maximum (int): The upper bound.

    Returns:
        int: The clamped value.

    """
    return max(minimum, min(value, maximum))


def sign(value: int) -> int:
    """Returns -1, 0 or 1 according to the sign of the value."""
    return (value > 0) - (value < 0)
