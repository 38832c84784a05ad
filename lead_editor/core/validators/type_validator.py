"""
TypeValidator - rejects non-empty numeric and date input that does not parse.

The normalizer turns unparseable input into None, which would silently clear
the field on save. This rule surfaces the typo to the editor instead.
"""

from typing import Any

from lead_editor.core.models import FieldKind
from lead_editor.core.normalizer import normalize, unbox

from .base_validator import BaseValidator

DEFAULT_MESSAGES = {
    FieldKind.NUMERIC: "数値を入力してください。",
    FieldKind.DATE: "正しい日付形式で入力してください。",
}


class TypeValidator(BaseValidator):
    """
    Validates that a non-empty value parses as the field's kind.

    Parameters:
    - expected_kind: Optional kind overriding the schema's ("numeric", "date", ...)

    Text and select fields always pass.
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, kind="text"):
        super().__init__(field_name, parameters, kind)

        expected_kind = self.parameters.get("expected_kind")
        if expected_kind:
            self.kind = FieldKind.parse(expected_kind)

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        raw = unbox(value)

        # Skip validation for blanks (handled by required_field validator)
        if raw is None or (isinstance(raw, str) and raw.strip() == ""):
            return

        if self.kind not in DEFAULT_MESSAGES:
            return

        if normalize(raw, self.kind) is None:
            raise self.fail(DEFAULT_MESSAGES[self.kind])

    @property
    def rule_type(self) -> str:
        return "type_check"
