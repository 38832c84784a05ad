"""
ValidationRule model representing a configurable constraint applied to edited records.
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class ValidationRule(BaseModel):
    """
    A configurable constraint checked before a change set is submitted.

    Attributes:
        rule_name: Human-readable name ("room_number_required")
        rule_type: "required_field", "type_check", "characters", "required_when", "custom"
        field_name: Which field this rule applies to
        parameters: Rule-specific params (e.g., {"field": "status", "values": ["A"]})
        enabled: Whether rule is active
        severity: "error" (blocks submission) or "warning" (reported only)
        message: Message shown to the editor when the rule fails
    """

    rule_name: str = Field(..., min_length=1)
    rule_type: Literal["required_field", "type_check", "characters", "required_when", "custom"]
    field_name: str
    parameters: dict[str, Any] = Field(default_factory=dict)
    enabled: bool = True
    severity: Literal["error", "warning"] = "error"
    message: str | None = None

    class Config:
        json_schema_extra = {
            "example": {
                "rule_name": "room_number_required",
                "rule_type": "required_field",
                "field_name": "room_number",
                "parameters": {},
                "enabled": True,
                "severity": "error",
                "message": "この項目は必須です。",
            }
        }
