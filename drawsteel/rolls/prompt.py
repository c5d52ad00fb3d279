"""
Interactive power roll configuration.

The prompt shows the roll dialog, turns the confirmed form into power roll
options, and returns the roll unevaluated, evaluated, or posted to chat.
Dismissing the dialog ends the workflow without building a roll.
"""

from typing import Any, Optional, Protocol

from pydantic import BaseModel, Field

from drawsteel.chat.messages import ChatLog
from drawsteel.core.constants import (
    DEFAULT_FORMULA,
    MAX_BANE,
    MAX_EDGE,
    PROMPT_TITLE,
    EvaluationMode,
    PowerRollType,
)
from drawsteel.core.content import ContentRepository
from drawsteel.core.error_handling import (
    ConfigurationError,
    UnresolvedReferenceError,
    log_warning,
)
from drawsteel.core.i18n import format_text, localize
from drawsteel.core.logging import get_logger
from drawsteel.core.validation import validate_prompt_options

logger = get_logger(__name__)


class RollPromptContext(BaseModel):
    """Everything the roll dialog needs to present its form."""

    title: str = Field(
        description="The localized dialog title.",
    )
    mod_choices: dict[int, int] = Field(
        default_factory=lambda: {number: number for number in range(max(MAX_EDGE, MAX_BANE) + 1)},
        description="The selectable numbers of edges and banes.",
    )
    edges: int = Field(
        0,
        description="Edges preselected in the form.",
    )
    banes: int = Field(
        0,
        description="Banes preselected in the form.",
    )
    skills: dict[str, str] | None = Field(
        None,
        description="Selectable skills, by identifier, when any were offered.",
    )


class RollDialog(Protocol):
    """An interactive form configuring a power roll."""

    def prompt(self, context: RollPromptContext) -> Optional[dict[str, Any]]:
        """Return the confirmed field values, or None if the form was dismissed."""
        ...


def resolve_skill_choices(skills: list[str]) -> dict[str, str]:
    """
    Maps skill identifiers to their labels, dropping unknown skills.

    Args:
        skills (list[str]): The skill identifiers to offer.

    Returns:
        dict[str, str]: The known skills, by identifier.

    """
    repository = ContentRepository()
    choices: dict[str, str] = {}
    for skill in skills:
        entry = repository.get_skill(skill)
        if entry is None:
            log_warning(
                f"Could not find skill {skill}",
                {"skill": skill},
                UnresolvedReferenceError(skill),
            )
            continue
        choices[skill] = entry.label
    return choices


def prompt_power_roll(
    roll_class: type,
    roll_type: Any = PowerRollType.TEST.value,
    evaluation: Any = EvaluationMode.MESSAGE.value,
    formula: Optional[str] = None,
    data: Optional[dict[str, Any]] = None,
    skills: Optional[list[str]] = None,
    edges: Optional[int] = None,
    banes: Optional[int] = None,
    flavor: Optional[str] = None,
    dialog: Optional[RollDialog] = None,
    chat: Optional[ChatLog] = None,
) -> Any:
    """
    Prompts the user with the roll configuration dialog.

    Args:
        roll_class (type):
            The power roll class to build.
        roll_type (str | PowerRollType):
            "ability", "resistance" or "test". Defaults to "test".
        evaluation (str | EvaluationMode):
            "none", "evaluate" or "message". Defaults to "message".
        formula (str | None):
            The roll formula. Defaults to "2d10".
        data (dict[str, Any] | None):
            Roll data used by the formula.
        skills (list[str] | None):
            Skills that might be chosen.
        edges (int | None):
            Base edges for the roll.
        banes (int | None):
            Base banes for the roll.
        flavor (str | None):
            Flavor text, defaults to the localized type label.
        dialog (RollDialog | None):
            The form to show, defaults to the terminal dialog.
        chat (ChatLog | None):
            Where "message" evaluation posts the roll.

    Returns:
        The unevaluated roll ("none"), the evaluated roll ("evaluate"), the
        posted chat message ("message"), or None if the dialog was dismissed.

    Raises:
        ConfigurationError: If the type or evaluation mode is invalid.

    """
    if isinstance(roll_type, PowerRollType):
        roll_type = roll_type.value
    if isinstance(evaluation, EvaluationMode):
        evaluation = evaluation.value
    validation = validate_prompt_options({"type": roll_type, "evaluation": evaluation})
    if not validation.is_valid:
        raise ConfigurationError(
            "The `type` parameter must be 'ability', 'resistance', or 'test' and the "
            "`evaluation` parameter must be 'none', 'evaluate', or 'message': "
            + "; ".join(validation.errors)
        )

    type_label = localize(PowerRollType(roll_type).label)
    flavor = flavor if flavor is not None else type_label

    context = RollPromptContext(
        title=format_text(PROMPT_TITLE, typeLabel=type_label),
        edges=edges or 0,
        banes=banes or 0,
        skills=resolve_skill_choices(skills) if skills is not None else None,
    )

    if dialog is None:
        from drawsteel.ui.roll_dialog import PromptToolkitRollDialog

        dialog = PromptToolkitRollDialog()

    form = dialog.prompt(context)
    if form is None:
        logger.info(f"{type_label} prompt dismissed, no roll made")
        return None

    roll = roll_class(
        formula or DEFAULT_FORMULA,
        data,
        {"type": roll_type, "flavor": flavor, **form},
    )

    mode = EvaluationMode(evaluation)
    if mode == EvaluationMode.NONE:
        return roll
    if mode == EvaluationMode.EVALUATE:
        return roll.evaluate()
    return roll.to_message(chat=chat)
