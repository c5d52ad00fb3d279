"""
Chat messages.

Rolls are shared by posting them to a chat log: the roll is evaluated if
needed, rendered with its chat template, and stored together with its
serialized data.
"""

from datetime import datetime
from typing import Any, Optional, Protocol
from uuid import uuid4

from pydantic import BaseModel, Field
from rich.text import Text

from drawsteel.core.content import ContentRepository
from drawsteel.core.logging import get_logger
from drawsteel.core.utils import cprint

logger = get_logger(__name__)


class PostableRoll(Protocol):
    """What the chat log needs from a roll."""

    @property
    def flavor(self) -> Optional[str]: ...

    def render(
        self,
        flavor: Optional[str] = None,
        template: Optional[str] = None,
        is_private: bool = False,
        colour: bool = True,
    ) -> str: ...

    def to_dict(self) -> dict[str, Any]: ...


class ChatMessage(BaseModel):
    """A message posted to the chat log."""

    id: str = Field(
        default_factory=lambda: uuid4().hex,
        description="Unique identifier of the message.",
    )
    user: str = Field(
        description="Identifier of the user who posted the message.",
    )
    flavor: str | None = Field(
        None,
        description="Flavor text shown above the content.",
    )
    content: str = Field(
        description="The rendered content.",
    )
    rolls: list[dict[str, Any]] = Field(
        default_factory=list,
        description="Serialized rolls attached to the message.",
    )
    is_private: bool = Field(
        False,
        description="Whether the rolls are hidden from other users.",
    )
    timestamp: datetime = Field(
        default_factory=datetime.now,
        description="When the message was posted.",
    )


class ChatLog:
    """An in-memory chat log."""

    def __init__(self, echo: bool = False) -> None:
        """
        Args:
            echo (bool): Print every posted message to the console.
        """
        self.echo = echo
        self.messages: list[ChatMessage] = []

    def post(
        self,
        roll: PostableRoll,
        flavor: Optional[str] = None,
        is_private: bool = False,
    ) -> ChatMessage:
        """
        Posts a roll to the chat log.

        Args:
            roll (PostableRoll):
                The roll to post. It is evaluated first if needed.
            flavor (str | None):
                Flavor text overriding the roll's own.
            is_private (bool):
                Hide the roll details.

        Returns:
            ChatMessage:
                The posted message.

        """
        content = roll.render(flavor=flavor, is_private=is_private, colour=False)
        message = ChatMessage(
            user=ContentRepository().settings.user_id,
            flavor=None if is_private else (flavor or roll.flavor),
            content=content,
            rolls=[roll.to_dict()],
            is_private=is_private,
        )
        self.messages.append(message)
        logger.debug(f"Posted chat message {message.id}")
        if self.echo:
            cprint(Text(content))
        return message

    @property
    def last(self) -> ChatMessage | None:
        return self.messages[-1] if self.messages else None

    def clear(self) -> None:
        self.messages.clear()


# Chat log used when no other is given.
CHAT_LOG = ChatLog()
