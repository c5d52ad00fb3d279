"""
Tests for the chat log and the roll templates.
"""

import pytest

from drawsteel.chat.messages import CHAT_LOG
from drawsteel.chat.templates import PROMPT_TEMPLATE, TEMPLATES, render_template
from drawsteel.core.error_handling import TemplateNotFoundError
from drawsteel.rolls.base import DSRoll
from drawsteel.rolls.power import PowerRoll
from drawsteel.rolls.prompt import RollPromptContext


def test_post_evaluates_the_roll(chat, mocker):
    mocker.patch("drawsteel.dice.terms.random.randint", return_value=6)
    roll = PowerRoll(options={"flavor": "Might Test"})
    message = roll.to_message(chat=chat)

    assert roll.evaluated
    assert chat.messages == [message]
    assert message.user == "gamemaster"
    assert message.flavor == "Might Test"
    assert not message.is_private
    assert "= 12" in message.content
    assert "Tier 2" in message.content
    assert "\x1b[" not in message.content


def test_flavor_argument_overrides_roll_flavor(chat, rolled):
    message = rolled([3, 3], flavor="Might Test").to_message(chat=chat, flavor="Shove")
    assert message.flavor == "Shove"


def test_private_message_hides_details(chat, rolled):
    message = rolled([3, 4], flavor="Secret").to_message(chat=chat, is_private=True)
    assert message.is_private
    assert message.flavor is None
    assert "???" in message.content
    assert "= 7" not in message.content


def test_messages_have_unique_ids(chat):
    first = DSRoll("1d4").to_message(chat=chat)
    second = DSRoll("1d4").to_message(chat=chat)
    assert first.id != second.id
    assert chat.last is second


def test_clear(chat):
    DSRoll("1d4").to_message(chat=chat)
    chat.clear()
    assert chat.messages == []
    assert chat.last is None


def test_default_chat_log(rolled):
    CHAT_LOG.clear()
    message = rolled([5, 5]).to_message()
    assert CHAT_LOG.last is message
    CHAT_LOG.clear()


def test_echo_prints_the_message(rolled, mocker):
    from drawsteel.chat.messages import ChatLog

    cprint = mocker.patch("drawsteel.chat.messages.cprint")
    ChatLog(echo=True).post(rolled([5, 5]))
    cprint.assert_called_once()


def test_registered_templates():
    assert {"rolls/roll", "rolls/power", "rolls/prompt"} <= set(TEMPLATES)


def test_unknown_template():
    with pytest.raises(TemplateNotFoundError):
        render_template("rolls/unknown", {})


def test_prompt_template():
    context = RollPromptContext(
        title="Test Configuration",
        edges=1,
        skills={"alchemy": "Alchemy", "climb": "Climb"},
    )
    text = render_template(PROMPT_TEMPLATE, context.model_dump(), colour=False)
    assert "Test Configuration" in text
    assert "Edges" in text
    assert "Banes" in text
    assert "Alchemy, Climb" in text


def test_prompt_template_without_skills():
    context = RollPromptContext(title="Test Configuration")
    text = render_template(PROMPT_TEMPLATE, context.model_dump(), colour=False)
    assert "Skill" not in text
