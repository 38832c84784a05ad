"""
CustomValidator - validates using a custom Python function.
"""

from typing import Any

from .base_validator import BaseValidator, ValidationError


class CustomValidator(BaseValidator):
    """
    Validates using a custom validation function.

    Parameters:
    - validator_func: A callable that takes (value, record) and returns None on success
                      or raises ValueError on failure
    - error_message: Optional custom error message prefix

    The validator function signature should be:
        def my_validator(value: Any, record: dict[str, Any]) -> None:
            if not valid:
                raise ValueError("Validation failed")
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, kind="text"):
        super().__init__(field_name, parameters, kind)

        self.validator_func = self.parameters.get("validator_func")
        if not self.validator_func:
            raise ValueError("CustomValidator requires 'validator_func' parameter")

        if not callable(self.validator_func):
            raise ValueError("validator_func must be callable")

        self.error_message = self.parameters.get("error_message")

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        try:
            self.validator_func(value, record)
        except (ValueError, TypeError) as e:
            message = f"{self.error_message}: {e}" if self.error_message else str(e)
            raise ValidationError(
                rule_name="custom",
                field_name=self.field_name,
                message=self.message or message,
            ) from e

    @property
    def rule_type(self) -> str:
        return "custom"
