"""
Shared fixtures for the rules engine tests.
"""

import pytest

from drawsteel.chat.messages import ChatLog
from drawsteel.core.content import DEFAULT_DATA_DIR, ContentRepository
from drawsteel.core.error_handling import ERROR_HANDLER
from drawsteel.rolls.power import PowerRoll


class ScriptedResolver:
    """Dice resolver returning pre-set results, one list per die term."""

    def __init__(self, *results):
        self.results = [list(result) for result in results]
        self.calls = 0

    def resolve(self, term):
        self.calls += 1
        return self.results.pop(0) if self.results else None


class FakeDialog:
    """Roll dialog returning a fixed form (or None, as if dismissed)."""

    def __init__(self, form=None):
        self.form = form
        self.contexts = []

    def prompt(self, context):
        self.contexts.append(context)
        return None if self.form is None else dict(self.form)


class FakeSession:
    """Stands in for a prompt_toolkit session, answering from a script."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.messages = []

    def prompt(self, message, **kwargs):
        self.messages.append(message)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        return answer


@pytest.fixture(autouse=True)
def content():
    """Points the content repository at the packaged data for every test."""
    repository = ContentRepository(DEFAULT_DATA_DIR)
    ERROR_HANDLER.clear()
    yield repository
    ContentRepository(DEFAULT_DATA_DIR)


@pytest.fixture
def scripted():
    return ScriptedResolver


@pytest.fixture
def fake_dialog():
    return FakeDialog


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def chat():
    return ChatLog()


@pytest.fixture
def rolled():
    """Builds a power roll and evaluates it with the given 2d10 results."""

    def make(dice, formula="2d10", **options):
        roll = PowerRoll(formula, options=options)
        return roll.evaluate(resolver=ScriptedResolver(dice))

    return make
