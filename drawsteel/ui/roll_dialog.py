"""
Terminal roll dialog.

Shows the roll configuration as a rich table and asks for the number of
edges and banes (and a skill, when skills are offered) with prompt_toolkit.
"""

from typing import Any, Optional

from prompt_toolkit import ANSI, PromptSession
from prompt_toolkit.completion import WordCompleter

from drawsteel.chat.templates import PROMPT_TEMPLATE, render_template
from drawsteel.core.i18n import localize
from drawsteel.rolls.prompt import RollPromptContext


class PromptToolkitRollDialog:
    """
    - Shows a Rich table of the modifier choices and skills.
    - Offers autocomplete on every field.
    - Ctrl-C or Ctrl-D dismisses the dialog.
    """

    def __init__(self, session: Optional[PromptSession] = None) -> None:
        self._session = session

    @property
    def session(self) -> PromptSession:
        # Created lazily so building a dialog never needs a terminal.
        if self._session is None:
            self._session = PromptSession(erase_when_done=True)
        return self._session

    def prompt(self, context: RollPromptContext) -> Optional[dict[str, Any]]:
        """Return the chosen edges, banes and skill, or None if dismissed."""
        header = "\n" + render_template(PROMPT_TEMPLATE, context.model_dump()) + "\n"
        choices = list(context.mod_choices)
        try:
            form: dict[str, Any] = {
                "edges": self._ask_count(
                    header + localize("DRAW_STEEL.Roll.Power.Prompt.Edges") + " > ",
                    choices,
                    context.edges,
                ),
                "banes": self._ask_count(
                    localize("DRAW_STEEL.Roll.Power.Prompt.Banes") + " > ",
                    choices,
                    context.banes,
                ),
            }
            if context.skills:
                form["skill"] = self._ask_skill(
                    localize("DRAW_STEEL.Roll.Power.Prompt.Skill") + " > ",
                    context.skills,
                )
        except (KeyboardInterrupt, EOFError):
            return None
        return form

    def _ask_count(self, message: str, choices: list[int], default: int) -> int:
        completer = WordCompleter([str(choice) for choice in choices])
        while True:
            answer = self.session.prompt(
                ANSI(message),
                completer=completer,
                default=str(default),
            ).strip()
            if not answer:
                return default
            if answer.isdigit() and int(answer) in choices:
                return int(answer)

    def _ask_skill(self, message: str, skills: dict[str, str]) -> Optional[str]:
        completer = WordCompleter(list(skills.values()), ignore_case=True)
        by_label = {label.lower(): skill for skill, label in skills.items()}
        while True:
            answer = self.session.prompt(
                ANSI(message),
                completer=completer,
                complete_while_typing=True,
            ).strip()
            # Blank means no skill.
            if not answer:
                return None
            if answer in skills:
                return answer
            if answer.lower() in by_label:
                return by_label[answer.lower()]
