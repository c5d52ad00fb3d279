"""
Centralized error handling and logging system.

Defines the exception hierarchy of the rules engine and an error handler
that records non-fatal problems (such as unresolved skill references) and
logs them according to their severity.
"""

import logging
import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional


class DrawSteelError(Exception):
    """Base class for every error raised by the rules engine."""


class ConfigurationError(DrawSteelError, ValueError):
    """Raised when a roll or the roll prompt is given an invalid configuration."""


class UnresolvedReferenceError(DrawSteelError, LookupError):
    """A referenced entry (e.g. a skill) has no match in the content registry."""


class FormulaError(DrawSteelError, ValueError):
    """Raised when a dice formula cannot be parsed or evaluated."""


class TemplateNotFoundError(DrawSteelError, KeyError):
    """Raised when rendering with a template identifier nobody registered."""


class ErrorSeverity(Enum):
    """Enumeration of error severity levels."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


@dataclass
class ErrorRecord:
    """Represents a handled error with severity, context, and optional exception."""

    message: str
    severity: ErrorSeverity
    context: dict[str, Any]
    exception: Optional[Exception] = None


class ErrorHandler:
    """Centralized error handling for the rules engine."""

    def __init__(self) -> None:
        self.logger = logging.getLogger("drawsteel.errors")
        self.error_history: list[ErrorRecord] = []

    def handle(
        self,
        message: str,
        severity: ErrorSeverity,
        context: Optional[dict[str, Any]] = None,
        exception: Optional[Exception] = None,
    ) -> None:
        """Handle an error based on its severity."""
        error = ErrorRecord(
            message=message,
            severity=severity,
            context=context or {},
            exception=exception,
        )
        self.error_history.append(error)

        # Prefix context keys to avoid conflicts with logging system reserved keys
        safe_context = {f"ctx_{key}": value for key, value in error.context.items()}

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(f"CRITICAL: {error.message}", extra=safe_context)
            if error.exception:
                self.logger.critical(
                    "".join(traceback.format_exception(error.exception))
                )
        elif error.severity == ErrorSeverity.HIGH:
            self.logger.error(f"ERROR: {error.message}", extra=safe_context)
        elif error.severity == ErrorSeverity.MEDIUM:
            self.logger.warning(f"WARNING: {error.message}", extra=safe_context)
        else:
            self.logger.info(f"INFO: {error.message}", extra=safe_context)

    def errors_of_type(self, exception_type: type) -> list[ErrorRecord]:
        """Returns the recorded errors carrying an exception of the given type."""
        return [
            error
            for error in self.error_history
            if isinstance(error.exception, exception_type)
        ]

    def clear(self) -> None:
        """Forget every recorded error."""
        self.error_history.clear()


# Global error handler instance
ERROR_HANDLER = ErrorHandler()


def log_info(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log an info-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.LOW, context, exception)


def log_warning(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log a warning-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.MEDIUM, context, exception)


def log_error(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log an error-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.HIGH, context, exception)


def log_critical(
    message: str,
    context: Optional[dict[str, Any]] = None,
    exception: Optional[Exception] = None,
) -> None:
    """Log a critical-level message."""
    ERROR_HANDLER.handle(message, ErrorSeverity.CRITICAL, context, exception)


# ==============================================================================
# VALIDATION HELPERS
# ==============================================================================


def require_choice(
    value: Any,
    choices: Iterable[str],
    param_name: str,
    context: Optional[dict[str, Any]] = None,
) -> str:
    """
    Validates that a value is one of the allowed choices.

    Enum members are accepted and reduced to their value.

    Args:
        value: The value to validate
        choices: The allowed raw values
        param_name: Human-readable parameter name for error messages
        context: Additional context for logging

    Returns:
        str: The validated raw value

    Raises:
        ConfigurationError: If validation fails

    """
    if isinstance(value, Enum):
        value = value.value
    allowed = list(choices)
    if value not in allowed:
        quoted = ", ".join(f"'{choice}'" for choice in allowed)
        log_error(
            f"{param_name} must be one of {quoted}, got: {value!r}",
            {
                **(context or {}),
                "param_name": param_name,
                "value": value,
            },
        )
        raise ConfigurationError(f"The `{param_name}` parameter must be one of {quoted}")
    return value
