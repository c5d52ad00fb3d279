"""
Localization helpers.

The engine only ever supplies i18n keys; these functions resolve them
against the translation table of the content repository.
"""

import re
from typing import Any

from .content import ContentRepository

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


def localize(key: str) -> str:
    """
    Resolves an i18n key to its display text.

    Args:
        key (str): The i18n key.

    Returns:
        str: The translated text, the key itself when no translation
        exists, or an empty string for an empty key.

    """
    if not key:
        return ""
    text = ContentRepository().get_translation(key)
    return key if text is None else text


def format_text(key: str, **data: Any) -> str:
    """
    Resolves an i18n key and fills its `{name}` placeholders.

    Unknown placeholders are left untouched.
    """
    text = localize(key)
    return _PLACEHOLDER.sub(
        lambda match: str(data.get(match.group(1), match.group(0))),
        text,
    )
