"""
Template rendering for rolls and roll dialogs.

Templates are registered by identifier and turn a display-context mapping
into a rich renderable, which is then captured as text.
"""

from collections.abc import Callable
from typing import Any

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from drawsteel.core.constants import ResultTier
from drawsteel.core.error_handling import TemplateNotFoundError
from drawsteel.core.i18n import localize
from drawsteel.core.utils import ccapture

ROLL_TEMPLATE = "rolls/roll"
POWER_ROLL_TEMPLATE = "rolls/power"
PROMPT_TEMPLATE = "rolls/prompt"

TemplateFunc = Callable[[dict[str, Any]], RenderableType]

TEMPLATES: dict[str, TemplateFunc] = {}


def register_template(template_id: str) -> Callable[[TemplateFunc], TemplateFunc]:
    """Registers a template function under the given identifier."""

    def decorator(func: TemplateFunc) -> TemplateFunc:
        TEMPLATES[template_id] = func
        return func

    return decorator


def render_template(template_id: str, context: dict[str, Any], colour: bool = True) -> str:
    """
    Renders a display context with the given template.

    Args:
        template_id (str):
            The identifier of a registered template.
        context (dict[str, Any]):
            The display context.
        colour (bool):
            Keep ANSI colour codes in the output. Defaults to True.

    Returns:
        str:
            The rendered text.

    Raises:
        TemplateNotFoundError: If no template has that identifier.

    """
    template = TEMPLATES.get(template_id)
    if template is None:
        raise TemplateNotFoundError(template_id)
    return ccapture(template(context), colour=colour)


def _roll_body(context: dict[str, Any]) -> list[RenderableType]:
    body: list[RenderableType] = [Text(str(context.get("formula", "")), style="italic")]
    if context.get("tooltip"):
        body.append(Text(context["tooltip"], style="dim"))
    return body


@register_template(ROLL_TEMPLATE)
def roll_template(context: dict[str, Any]) -> RenderableType:
    """Generic roll card: formula, dice and total."""
    body = _roll_body(context)
    body.append(Text(f"= {context.get('total', '')}", style="bold"))
    return Panel(
        Group(*body),
        title=context.get("flavor") or None,
        subtitle=context.get("user") or None,
        expand=False,
    )


@register_template(POWER_ROLL_TEMPLATE)
def power_roll_template(context: dict[str, Any]) -> RenderableType:
    """Power roll card: the generic card plus tier, modifier and critical."""
    body = _roll_body(context)

    modifier = context.get("modifier") or {}
    total_line = Text(f"= {context.get('total', '')}", style="bold")
    if modifier.get("number"):
        total_line.append(f"  ({modifier['number']} {modifier.get('mod', '')})", style="dim")
    body.append(total_line)

    tier = context.get("tier")
    if tier:
        style = ResultTier(tier["class"]).color
        body.append(Text(tier["label"], style=style))

    border = "white"
    if context.get("critical"):
        body.append(Text(localize("DRAW_STEEL.Roll.Power.Critical"), style="bold red"))
        border = "red"

    return Panel(
        Group(*body),
        title=context.get("flavor") or None,
        subtitle=context.get("user") or None,
        border_style=border,
        expand=False,
    )


@register_template(PROMPT_TEMPLATE)
def prompt_template(context: dict[str, Any]) -> RenderableType:
    """Roll dialog body: the modifier choices and the selectable skills."""
    table = Table(title=context.get("title"), show_header=True, header_style="bold")
    table.add_column("Field", style="bold cyan")
    table.add_column("Choices")
    table.add_column("Current", justify="right")

    choices = ", ".join(str(choice) for choice in context.get("mod_choices", {}))
    table.add_row(
        localize("DRAW_STEEL.Roll.Power.Prompt.Edges"),
        choices,
        str(context.get("edges", 0)),
    )
    table.add_row(
        localize("DRAW_STEEL.Roll.Power.Prompt.Banes"),
        choices,
        str(context.get("banes", 0)),
    )
    skills = context.get("skills")
    if skills:
        table.add_row(
            localize("DRAW_STEEL.Roll.Power.Prompt.Skill"),
            ", ".join(skills.values()),
            localize("DRAW_STEEL.Roll.Power.Prompt.NoSkill"),
        )
    return table
