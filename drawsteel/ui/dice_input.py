"""
Manual dice fulfillment from the terminal.
"""

import re
from typing import Optional

from prompt_toolkit import PromptSession

from drawsteel.core.i18n import format_text
from drawsteel.core.utils import cprint
from drawsteel.dice.terms import DieTerm

_SEPARATORS = re.compile(r"[,\s]+")


class PromptToolkitDiceResolver:
    """Asks the user for the results of their physical dice."""

    def __init__(self, session: Optional[PromptSession] = None) -> None:
        self._session = session

    @property
    def session(self) -> PromptSession:
        if self._session is None:
            self._session = PromptSession()
        return self._session

    def resolve(self, term: DieTerm) -> Optional[list[int]]:
        """
        Reads one result per die of the term.

        Returns:
            list[int] | None: The entered results, or None (blank answer,
            Ctrl-C or Ctrl-D) to roll the dice digitally.

        """
        message = format_text(
            "DRAW_STEEL.Roll.Dice.Manual",
            number=term.number,
            formula=term.expression,
        ) + " > "
        while True:
            try:
                answer = self.session.prompt(message).strip()
            except (KeyboardInterrupt, EOFError):
                return None
            if not answer:
                return None
            parts = [part for part in _SEPARATORS.split(answer) if part]
            if (
                len(parts) == term.number
                and all(part.isdigit() for part in parts)
                and all(1 <= int(part) <= term.faces for part in parts)
            ):
                return [int(part) for part in parts]
            cprint(
                f"[red]Enter {term.number} number(s) between 1 and {term.faces}.[/]"
            )
