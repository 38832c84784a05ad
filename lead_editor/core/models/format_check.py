"""
FormatCheckResult model: whether a room's stored name matches its derivation.
"""

from typing import Literal

from pydantic import BaseModel, model_validator


class FormatCheckResult(BaseModel):
    """
    Outcome of checking a room name against "<property name> <room number>".

    Attributes:
        is_correct: True only when the name matches the derivation
        reason: "missing", "incorrect" or "correct"
        expected_name: Derived name, set when the name is incorrect
    """

    is_correct: bool
    reason: Literal["missing", "incorrect", "correct"]
    expected_name: str | None = None

    @model_validator(mode="after")
    def check_consistency(self) -> "FormatCheckResult":
        if self.is_correct != (self.reason == "correct"):
            raise ValueError("is_correct must be True exactly when reason is 'correct'")
        if self.reason == "incorrect" and not self.expected_name:
            raise ValueError("expected_name is required when reason is 'incorrect'")
        return self

    class Config:
        frozen = True
        json_schema_extra = {
            "example": {
                "is_correct": False,
                "reason": "incorrect",
                "expected_name": "Tower X 101",
            }
        }
