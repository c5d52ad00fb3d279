"""
Tests for the terminal roll dialog and manual dice input, driven by a
scripted session instead of a real terminal.
"""

import pytest

from drawsteel.dice.roll import Roll
from drawsteel.dice.terms import DieTerm
from drawsteel.rolls.prompt import RollPromptContext
from drawsteel.ui.dice_input import PromptToolkitDiceResolver
from drawsteel.ui.roll_dialog import PromptToolkitRollDialog


@pytest.fixture
def context():
    return RollPromptContext(title="Test Configuration", edges=1)


@pytest.fixture
def skill_context():
    return RollPromptContext(
        title="Test Configuration",
        skills={"alchemy": "Alchemy", "handleAnimals": "Handle Animals"},
    )


@pytest.fixture
def d10s():
    return DieTerm(number=2, faces=10)


def test_dialog_reads_edges_and_banes(fake_session, context):
    dialog = PromptToolkitRollDialog(session=fake_session("2", "1"))
    assert dialog.prompt(context) == {"edges": 2, "banes": 1}


def test_blank_answers_keep_preselection(fake_session, context):
    dialog = PromptToolkitRollDialog(session=fake_session("", ""))
    assert dialog.prompt(context) == {"edges": 1, "banes": 0}


def test_invalid_counts_are_asked_again(fake_session, context):
    session = fake_session("5", "lots", "2", "0")
    dialog = PromptToolkitRollDialog(session=session)
    assert dialog.prompt(context) == {"edges": 2, "banes": 0}
    assert len(session.messages) == 4


def test_dialog_shows_the_form(fake_session, context):
    session = fake_session("", "")
    PromptToolkitRollDialog(session=session).prompt(context)
    assert "Test Configuration" in session.messages[0].value


@pytest.mark.parametrize(
    "answer, skill",
    [("Alchemy", "alchemy"), ("handle animals", "handleAnimals"), ("alchemy", "alchemy"), ("", None)],
)
def test_dialog_reads_skill(fake_session, skill_context, answer, skill):
    dialog = PromptToolkitRollDialog(session=fake_session("0", "0", answer))
    assert dialog.prompt(skill_context) == {"edges": 0, "banes": 0, "skill": skill}


def test_unknown_skill_is_asked_again(fake_session, skill_context):
    dialog = PromptToolkitRollDialog(session=fake_session("0", "0", "Flirt", "Alchemy"))
    assert dialog.prompt(skill_context)["skill"] == "alchemy"


@pytest.mark.parametrize("interrupt", [KeyboardInterrupt(), EOFError()])
def test_dismissing_the_dialog(fake_session, context, interrupt):
    assert PromptToolkitRollDialog(session=fake_session(interrupt)).prompt(context) is None
    assert PromptToolkitRollDialog(session=fake_session("1", interrupt)).prompt(context) is None


@pytest.mark.parametrize("answer", ["4 9", "4,9", " 4, 9 "])
def test_dice_input(fake_session, d10s, answer):
    resolver = PromptToolkitDiceResolver(session=fake_session(answer))
    assert resolver.resolve(d10s) == [4, 9]


def test_dice_input_asks_again(fake_session, d10s, mocker):
    cprint = mocker.patch("drawsteel.ui.dice_input.cprint")
    session = fake_session("11 1", "3", "3 3")
    assert PromptToolkitDiceResolver(session=session).resolve(d10s) == [3, 3]
    assert cprint.call_count == 2


@pytest.mark.parametrize("answer", ["", KeyboardInterrupt(), EOFError()])
def test_dice_input_falls_back_to_digital(fake_session, d10s, answer):
    assert PromptToolkitDiceResolver(session=fake_session(answer)).resolve(d10s) is None


def test_manual_roll(fake_session):
    resolver = PromptToolkitDiceResolver(session=fake_session("7 8"))
    roll = Roll("2d10 + 1").evaluate(resolver=resolver)
    assert roll.total == 16
