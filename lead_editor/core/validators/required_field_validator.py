"""
RequiredFieldValidator - ensures a field has a value after normalization.
"""

from typing import Any

from lead_editor.core.normalizer import is_blank

from .base_validator import BaseValidator

REQUIRED_MESSAGE = "この項目は必須です。"


class RequiredFieldValidator(BaseValidator):
    """
    Validates that a required field is present and not blank.

    Fails if:
    - Field value is None or an empty string
    - Field value is whitespace only (unless allow_blank_text is set)
    - A numeric or date field holds a value that does not parse
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, kind="text"):
        super().__init__(field_name, parameters, kind)
        self.allow_blank_text = self.parameters.get("allow_blank_text", False)

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        if is_blank(value, self.kind):
            raise self.fail(REQUIRED_MESSAGE)

        if not self.allow_blank_text and isinstance(value, str) and value.strip() == "":
            raise self.fail(REQUIRED_MESSAGE)

    @property
    def rule_type(self) -> str:
        return "required_field"
