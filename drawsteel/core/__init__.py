"""
Core system module for the Draw Steel rules engine.

This module contains the fundamental components the roll engine is built
on: constants and enumerations, logging, error handling, validation, and the
content repository with its settings, skills and translations.
"""

from .constants import (
    DEFAULT_CRITICAL_THRESHOLD,
    DEFAULT_FORMULA,
    EDGE_BANE_MODIFIER,
    MAX_BANE,
    MAX_EDGE,
    MODIFIER_LABELS,
    DiceFulfillment,
    EvaluationMode,
    PowerRollType,
    ResultTier,
)
from .content import (
    ContentRepository,
    SkillEntry,
    SystemSettings,
)
from .error_handling import (
    ERROR_HANDLER,
    ConfigurationError,
    DrawSteelError,
    ErrorSeverity,
    FormulaError,
    TemplateNotFoundError,
    UnresolvedReferenceError,
)
from .i18n import (
    format_text,
    localize,
)
from .logging import (
    get_logger,
    setup_logging,
)
from .utils import (
    Singleton,
    ccapture,
    clamp,
    cprint,
    crule,
    sign,
)

__all__ = [
    # Import from constants.py
    "DEFAULT_CRITICAL_THRESHOLD",
    "DEFAULT_FORMULA",
    "EDGE_BANE_MODIFIER",
    "MAX_BANE",
    "MAX_EDGE",
    "MODIFIER_LABELS",
    "DiceFulfillment",
    "EvaluationMode",
    "PowerRollType",
    "ResultTier",
    # Import from content.py
    "ContentRepository",
    "SkillEntry",
    "SystemSettings",
    # Import from error_handling.py
    "ERROR_HANDLER",
    "ConfigurationError",
    "DrawSteelError",
    "ErrorSeverity",
    "FormulaError",
    "TemplateNotFoundError",
    "UnresolvedReferenceError",
    # Import from i18n.py
    "format_text",
    "localize",
    # Import from logging.py
    "get_logger",
    "setup_logging",
    # Import from utils.py
    "Singleton",
    "ccapture",
    "clamp",
    "cprint",
    "crule",
    "sign",
]
