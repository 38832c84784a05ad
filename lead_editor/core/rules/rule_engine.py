"""
Rule engine for orchestrating validation rules on edited records.

The rule engine builds validators from rule configurations, applies them
to a record, and produces a field-to-message result for the editor.
"""

from typing import Any

from pydantic import ValidationError as PydanticValidationError

from lead_editor.core.models import EntitySchema, ValidationResult, ValidationRule
from lead_editor.core.validators import (
    BaseValidator,
    CharacterValidator,
    CustomValidator,
    RequiredFieldValidator,
    RequiredWhenValidator,
    TypeValidator,
    ValidationError,
)
from lead_editor.observability import metrics
from lead_editor.observability.logger import get_logger

logger = get_logger(__name__)


class RuleEngine:
    """
    Orchestrates validation rules on edited records.

    Rules are applied in order; the first failing rule of a field decides the
    message shown for it. Failures with severity "error" fail the record,
    "warning" failures are only reported.
    """

    VALIDATOR_REGISTRY = {
        "required_field": RequiredFieldValidator,
        "type_check": TypeValidator,
        "characters": CharacterValidator,
        "required_when": RequiredWhenValidator,
        "custom": CustomValidator,
    }

    def __init__(
        self,
        rules: list[dict[str, Any] | ValidationRule],
        schema: EntitySchema | None = None,
    ):
        """
        Initialize the rule engine with validation rules.

        Args:
            rules: Rule configurations (dicts or ValidationRule), each containing:
                   - rule_name: str
                   - rule_type: str (required_field, type_check, characters, required_when, custom)
                   - field_name: str
                   - parameters: dict[str, Any] (optional)
                   - severity: str (error or warning)
                   - enabled: bool (default True)
                   - message: str (optional)
            schema: Entity schema supplying field kinds to the validators
        """
        self.schema = schema
        self.rules = [self._coerce_rule(rule) for rule in rules]
        self.validators: list[tuple[ValidationRule, BaseValidator]] = []
        self._build_validators()

    @staticmethod
    def _coerce_rule(rule: dict[str, Any] | ValidationRule) -> ValidationRule:
        if isinstance(rule, ValidationRule):
            return rule
        try:
            return ValidationRule(**rule)
        except PydanticValidationError as e:
            raise ValueError(f"Invalid rule configuration {rule.get('rule_name')!r}: {e}") from e

    def _build_validators(self) -> None:
        """Build validator instances from rule configurations."""
        for rule in self.rules:
            if not rule.enabled:
                continue

            validator_class = self.VALIDATOR_REGISTRY.get(rule.rule_type)
            if not validator_class:
                raise ValueError(f"Unknown rule type: {rule.rule_type}")

            kind = self.schema.kind_of(rule.field_name) if self.schema else "text"
            parameters = dict(rule.parameters)
            if rule.message:
                parameters["message"] = rule.message

            try:
                validator = validator_class(rule.field_name, parameters, kind)
            except ValueError as e:
                raise ValueError(f"Failed to create validator for rule '{rule.rule_name}': {e}") from e
            self.validators.append((rule, validator))

    @property
    def entity_type(self) -> str:
        return self.schema.entity_type if self.schema else "unknown"

    def validate(self, record: dict[str, Any], record_id: str | None = None) -> ValidationResult:
        """
        Validate an edited record against all rules.

        Args:
            record: The edited record
            record_id: Identity used in the result (defaults to record["id"])

        Returns:
            ValidationResult with a message per failing field
        """
        errors: dict[str, str] = {}
        warnings: dict[str, str] = {}
        failed_rules: list[str] = []

        for rule, validator in self.validators:
            field_name = validator.field_name
            if field_name in errors:
                continue

            try:
                validator.validate(record.get(field_name), record)
            except ValidationError as e:
                metrics.record_validation_failure(self.entity_type, rule.rule_type, field_name)
                if rule.severity == "error":
                    errors[field_name] = e.message
                    failed_rules.append(rule.rule_name)
                else:
                    warnings.setdefault(field_name, e.message)

        passed = len(errors) == 0
        resolved_id = str(record_id if record_id is not None else record.get("id", ""))

        if not passed:
            logger.info(
                "Validation failed",
                extra={
                    "entity_type": self.entity_type,
                    "record_id": resolved_id,
                    "failed_fields": sorted(errors),
                }
            )

        return ValidationResult(
            record_id=resolved_id,
            passed=passed,
            errors=errors,
            warnings=warnings,
            failed_rules=failed_rules,
        )

    def get_rule_summary(self) -> dict[str, Any]:
        """
        Get summary of loaded rules.

        Returns:
            Dictionary with rule counts and types
        """
        return {
            "total_rules": len(self.validators),
            "rules_by_type": self._count_by(lambda rule, validator: validator.rule_type),
            "rules_by_severity": self._count_by(lambda rule, validator: rule.severity),
        }

    def _count_by(self, key) -> dict[str, int]:
        counts: dict[str, int] = {}
        for rule, validator in self.validators:
            k = key(rule, validator)
            counts[k] = counts.get(k, 0) + 1
        return counts
