"""
Rule configuration management.

Loads validation rules from YAML configuration files and provides a
builder for rules assembled in code.
"""

from pathlib import Path
from typing import Any

import yaml

RULE_TYPES = ("required_field", "type_check", "characters", "required_when", "custom")


class RuleConfigLoader:
    """
    Loads validation rules from YAML configuration files.

    Expected YAML format (one section per entity type):
    ```yaml
    rules:
      room:
        room_number:
          - type: required_field
          - type: characters
        lead_room_type_id:
          - type: required_when
            params:
              field: status
              values: [A, B, C, D, E, クローズ]
      room_type:
        rent:
          - type: type_check
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_all(self) -> dict[str, list[dict[str, Any]]]:
        """
        Load rules for every entity type in the file.

        Returns:
            Entity type to list of rule dictionaries suitable for RuleEngine

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        with open(self.config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not config or "rules" not in config:
            raise ValueError("Configuration file must contain 'rules' section")

        return {
            entity_type: self._parse_entity(entity_type, field_rules or {})
            for entity_type, field_rules in config["rules"].items()
        }

    def load_rules(self, entity_type: str) -> list[dict[str, Any]]:
        """Load the rules of one entity type (empty when the file has no section for it)."""
        return self.load_all().get(entity_type, [])

    def _parse_entity(self, entity_type: str, field_rules: dict[str, Any]) -> list[dict[str, Any]]:
        if not isinstance(field_rules, dict):
            raise ValueError(f"Rules for entity '{entity_type}' must be a mapping of fields")

        rules = []
        for field_name, field_rule_list in field_rules.items():
            if not isinstance(field_rule_list, list):
                raise ValueError(f"Rules for field '{field_name}' must be a list")

            for idx, rule_def in enumerate(field_rule_list):
                rules.append(self._parse_rule(field_name, rule_def, idx))
        return rules

    def _parse_rule(self, field_name: str, rule_def: dict[str, Any], idx: int) -> dict[str, Any]:
        """
        Parse a single rule definition.

        Args:
            field_name: The field this rule applies to
            rule_def: The rule definition from YAML
            idx: Index of this rule for the field (for naming)

        Returns:
            Parsed rule dictionary

        Raises:
            ValueError: If rule definition is invalid
        """
        if "type" not in rule_def:
            raise ValueError(f"Rule for field '{field_name}' is missing 'type'")

        rule_type = rule_def["type"]
        if rule_type == "custom":
            raise ValueError(f"Custom rules for '{field_name}' can only be added in code")
        if rule_type not in RULE_TYPES:
            raise ValueError(f"Unknown rule type '{rule_type}' for field '{field_name}'")

        rule_name = rule_def.get("name", f"{field_name}_{rule_type}_{idx}")
        parameters = rule_def.get("params", rule_def.get("parameters", {}))

        severity = rule_def.get("severity", "error")
        if severity not in ("error", "warning"):
            raise ValueError(f"Invalid severity '{severity}' for rule '{rule_name}'. Must be 'error' or 'warning'")

        return {
            "rule_name": rule_name,
            "rule_type": rule_type,
            "field_name": field_name,
            "parameters": parameters,
            "severity": severity,
            "enabled": rule_def.get("enabled", True),
            "message": rule_def.get("message"),
        }


class RuleConfigBuilder:
    """
    Programmatically build rule configurations (for tests or rules that need code).
    """

    def __init__(self):
        self.rules: list[dict[str, Any]] = []

    def _add(
        self,
        rule_type: str,
        field_name: str,
        parameters: dict[str, Any] | None = None,
        severity: str = "error",
        message: str | None = None,
    ) -> "RuleConfigBuilder":
        self.rules.append({
            "rule_name": f"{field_name}_{rule_type}",
            "rule_type": rule_type,
            "field_name": field_name,
            "parameters": parameters or {},
            "severity": severity,
            "enabled": True,
            "message": message,
        })
        return self

    def add_required_field(self, field_name: str, message: str | None = None) -> "RuleConfigBuilder":
        """Add a required field rule."""
        return self._add("required_field", field_name, message=message)

    def add_type_check(self, field_name: str, expected_kind: str | None = None) -> "RuleConfigBuilder":
        """Add a parse check for a numeric or date field."""
        params = {"expected_kind": expected_kind} if expected_kind else {}
        return self._add("type_check", field_name, params)

    def add_characters(self, field_name: str, severity: str = "error") -> "RuleConfigBuilder":
        """Add an allowed-characters rule."""
        return self._add("characters", field_name, severity=severity)

    def add_required_when(self, field_name: str, when_field: str, values: list[str]) -> "RuleConfigBuilder":
        """Add a rule making `field_name` required when `when_field` is one of `values`."""
        return self._add("required_when", field_name, {"field": when_field, "values": list(values)})

    def add_custom(self, field_name: str, func, error_message: str | None = None) -> "RuleConfigBuilder":
        """Add a rule backed by a callable taking (value, record)."""
        params = {"validator_func": func}
        if error_message:
            params["error_message"] = error_message
        return self._add("custom", field_name, params)

    def build(self) -> list[dict[str, Any]]:
        """Build and return the rule configuration."""
        return self.rules
