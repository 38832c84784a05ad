"""
RequiredWhenValidator - a field becomes required when another field takes given values.
"""

from typing import Any

from lead_editor.core.normalizer import is_blank, normalize

from .base_validator import BaseValidator


class RequiredWhenValidator(BaseValidator):
    """
    Validates that a field is filled when a controlling field matches.

    Parameters:
    - field: Name of the controlling field ("status")
    - values: Controlling values that make this field required (["A", "B"])

    Example: a room's lead_room_type_id is required once its status is A-E
    or クローズ.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, kind="text"):
        super().__init__(field_name, parameters, kind)

        self.when_field = self.parameters.get("field")
        if not self.when_field:
            raise ValueError("RequiredWhenValidator requires 'field' parameter")

        values = self.parameters.get("values")
        if not values:
            raise ValueError("RequiredWhenValidator requires 'values' parameter")
        self.when_values = {str(v) for v in values}

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        controlling = normalize(record.get(self.when_field))
        if controlling not in self.when_values:
            return

        if is_blank(value, self.kind):
            raise self.fail(f"{self.when_field}が{controlling}の場合、この項目は必須です。")

    @property
    def rule_type(self) -> str:
        return "required_when"
