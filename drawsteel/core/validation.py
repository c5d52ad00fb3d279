"""
Input validation system for roll options and prompt inputs.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Type, Union

from .constants import EvaluationMode, PowerRollType


class ValidationResult:
    def __init__(self, is_valid: bool = True, errors: Optional[List[str]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str):
        self.is_valid = False
        self.errors.append(error)

    def merge(self, other: "ValidationResult"):
        if not other.is_valid:
            self.is_valid = False
            self.errors.extend(other.errors)


@dataclass
class FieldValidator:
    """Defines validation rules for a field."""

    required: bool = False
    field_type: Optional[Union[Type, tuple]] = None
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None
    allowed_values: Optional[List[Any]] = None


class DataValidator:
    """Validates data structures against defined schemas."""

    def __init__(self, schema: Dict[str, FieldValidator]):
        self.schema = schema

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """Validate data against the schema."""
        result = ValidationResult()

        for field_name, validator in self.schema.items():
            if validator.required and field_name not in data:
                result.add_error(f"Required field '{field_name}' is missing")
                continue

            if field_name not in data:
                continue

            field_value = data[field_name]
            field_result = self._validate_field(field_name, field_value, validator)
            result.merge(field_result)

        return result

    def _validate_field(
        self, field_name: str, value: Any, validator: FieldValidator
    ) -> ValidationResult:
        """Validate a single field."""
        result = ValidationResult()

        if isinstance(value, Enum):
            value = value.value

        if validator.field_type and not isinstance(value, validator.field_type):
            result.add_error(f"Field '{field_name}' has an invalid type")
            return result

        # Booleans are ints, but never valid counts.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            if validator.min_value is not None and value < validator.min_value:
                result.add_error(f"Field '{field_name}' must be >= {validator.min_value}")
            if validator.max_value is not None and value > validator.max_value:
                result.add_error(f"Field '{field_name}' must be <= {validator.max_value}")

        if validator.allowed_values and value not in validator.allowed_values:
            result.add_error(
                f"Field '{field_name}' must be one of: {validator.allowed_values}"
            )

        return result


# Edges and banes may arrive as strings from the roll dialog and are clamped
# later, so only their type is checked here.
POWER_ROLL_SCHEMA = DataValidator({
    "type": FieldValidator(required=True, allowed_values=PowerRollType.values()),
    "edges": FieldValidator(field_type=(int, str)),
    "banes": FieldValidator(field_type=(int, str)),
    "critical_threshold": FieldValidator(field_type=(int, str)),
})

PROMPT_SCHEMA = DataValidator({
    "type": FieldValidator(required=True, allowed_values=PowerRollType.values()),
    "evaluation": FieldValidator(required=True, allowed_values=EvaluationMode.values()),
})


def validate_power_roll_options(data: Dict[str, Any]) -> ValidationResult:
    """Validate the merged options of a power roll."""
    return POWER_ROLL_SCHEMA.validate(data)


def validate_prompt_options(data: Dict[str, Any]) -> ValidationResult:
    """Validate the type and evaluation mode handed to the roll prompt."""
    return PROMPT_SCHEMA.validate(data)
