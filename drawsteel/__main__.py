"""
Command-line entry point for the Draw Steel rules engine.

Examples:
    python -m drawsteel roll --type ability --edges 1
    python -m drawsteel -vv roll --banes 1
    python -m drawsteel roll "2d10 + @might" --data might=2 --message
    python -m drawsteel prompt --type test --skill alchemy --skill climb
"""

import argparse
import logging
import sys
from typing import Any, Optional

from rich.markup import escape
from rich.text import Text

from drawsteel.chat.messages import ChatLog, ChatMessage
from drawsteel.core.constants import DEFAULT_FORMULA, EvaluationMode, PowerRollType
from drawsteel.core.content import ContentRepository
from drawsteel.core.error_handling import ConfigurationError, FormulaError
from drawsteel.core.logging import setup_logging
from drawsteel.core.utils import cprint, crule
from drawsteel.rolls.power import PowerRoll


def parse_data(pairs: list[str]) -> dict[str, Any]:
    """
    Turns `key=value` pairs into roll data. Dotted keys build nested
    mappings and integer values are converted.
    """
    data: dict[str, Any] = {}
    for pair in pairs:
        key, separator, value = pair.partition("=")
        if not separator or not key:
            raise ConfigurationError(f"Roll data must be given as key=value, got '{pair}'")
        target = data
        *parents, leaf = key.split(".")
        for parent in parents:
            target = target.setdefault(parent, {})
        target[leaf] = int(value) if value.lstrip("-").isdigit() else value
    return data


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="drawsteel",
        description="Make Draw Steel power rolls from the terminal.",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=None,
        help="Show dice (-v) and formula (-vv), overriding the settings",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_common(sub: argparse.ArgumentParser) -> None:
        sub.add_argument("formula", nargs="?", default=DEFAULT_FORMULA, help="Roll formula")
        sub.add_argument("--type", default=PowerRollType.TEST.value, help="ability, resistance or test")
        sub.add_argument("--edges", type=int, default=None, help="Number of edges")
        sub.add_argument("--banes", type=int, default=None, help="Number of banes")
        sub.add_argument("--flavor", default=None, help="Flavor text")
        sub.add_argument(
            "--data",
            action="append",
            default=[],
            metavar="KEY=VALUE",
            help="Roll data referenced as @KEY in the formula",
        )

    roll = subparsers.add_parser("roll", help="Make a power roll")
    add_common(roll)
    roll.add_argument("--critical-threshold", type=int, default=None)
    roll.add_argument("--private", action="store_true", help="Hide the roll details")
    roll.add_argument("--message", action="store_true", help="Post the roll to chat")

    prompt = subparsers.add_parser("prompt", help="Configure a power roll interactively")
    add_common(prompt)
    prompt.add_argument(
        "--evaluation",
        default=EvaluationMode.MESSAGE.value,
        help="none, evaluate or message",
    )
    prompt.add_argument("--skill", action="append", dest="skills", default=None)

    return parser


def show_outcome(roll: PowerRoll, verbose_level: int = 0) -> None:
    tier = roll.tier
    if tier is None:
        cprint(f"[dim]{escape(roll.formula)} (not evaluated)[/]")
        return
    crule(tier.colorize(tier.display_name), style="dim")
    if verbose_level >= 2:
        cprint(f"[italic]{escape(roll.formula)}[/]")
    if verbose_level >= 1:
        cprint(f"[dim]{escape(roll.get_tooltip())}[/]")
    cprint(
        f"{roll.options.type.emoji} {roll.options.type.colored_name}: "
        f"total [bold]{roll.total}[/], natural {roll.natural_result}, "
        f"net boon {roll.net_boon:+d}"
    )
    if roll.critical or roll.nat20:
        cprint("[bold red]Critical![/]")


def run_roll(args: argparse.Namespace, chat: ChatLog) -> None:
    roll = PowerRoll(
        args.formula,
        parse_data(args.data),
        {
            "type": args.type,
            "edges": args.edges,
            "banes": args.banes,
            "critical_threshold": args.critical_threshold,
            "flavor": args.flavor,
        },
    )
    if args.message:
        chat.post(roll, is_private=args.private)
    else:
        cprint(Text.from_ansi(roll.render(is_private=args.private)))
    if not args.private:
        show_outcome(roll, args.verbose)


def run_prompt(args: argparse.Namespace, chat: ChatLog) -> None:
    result = PowerRoll.prompt(
        roll_type=args.type,
        evaluation=args.evaluation,
        formula=args.formula,
        data=parse_data(args.data),
        skills=args.skills,
        edges=args.edges,
        banes=args.banes,
        flavor=args.flavor,
        chat=chat,
    )
    if result is None:
        cprint("[dim]Roll cancelled.[/]")
    elif isinstance(result, ChatMessage):
        show_outcome(PowerRoll.from_dict(result.rolls[0]), args.verbose)
    else:
        show_outcome(result, args.verbose)


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.debug else logging.WARNING)
    if args.verbose is None:
        args.verbose = ContentRepository().settings.verbose_level
    chat = ChatLog(echo=True)
    try:
        if args.command == "roll":
            run_roll(args, chat)
        else:
            run_prompt(args, chat)
    except (ConfigurationError, FormulaError) as e:
        cprint(f"[bold red]Error:[/] {e}")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
