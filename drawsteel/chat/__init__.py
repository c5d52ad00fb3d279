"""
Chat rendering and messaging for rolls.
"""

from .messages import CHAT_LOG, ChatLog, ChatMessage
from .templates import (
    POWER_ROLL_TEMPLATE,
    PROMPT_TEMPLATE,
    ROLL_TEMPLATE,
    register_template,
    render_template,
)

__all__ = [
    "CHAT_LOG",
    "ChatLog",
    "ChatMessage",
    "POWER_ROLL_TEMPLATE",
    "PROMPT_TEMPLATE",
    "ROLL_TEMPLATE",
    "register_template",
    "render_template",
]
