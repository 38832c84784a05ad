"""
ValidationResult model representing the outcome of validating an edited record (ephemeral).
"""

from pydantic import BaseModel, Field, field_validator


class ValidationResult(BaseModel):
    """
    Outcome of the Validating step of an edit session.

    Attributes:
        record_id: Which record was validated
        passed: Overall validation status
        errors: Field name to message for blocking failures
        warnings: Field name to message for non-blocking findings
        failed_rules: Names of the rules that failed with severity "error"
    """

    record_id: str
    passed: bool
    errors: dict[str, str] = Field(default_factory=dict)
    warnings: dict[str, str] = Field(default_factory=dict)
    failed_rules: list[str] = Field(default_factory=list)

    @field_validator("errors")
    @classmethod
    def check_passed_consistency(cls, v, info):
        """Validate that passed=True implies errors is empty."""
        if info.data.get("passed") and len(v) > 0:
            raise ValueError("passed=True but errors is not empty")
        return v
