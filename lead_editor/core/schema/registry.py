"""
Schema registry for entity field tables.

Serves the built-in schemas and lets a YAML file override or extend them.

Expected YAML format:
```yaml
schemas:
  room:
    - name: room_number
      kind: text
      required: true
    - name: key_handover_scheduled_date
      kind: DATE
```
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from lead_editor.core.models import ENTITY_TYPES, EntitySchema, FieldDescriptor
from lead_editor.errors import SchemaError
from lead_editor.observability.logger import get_logger

from .defaults import DEFAULT_SCHEMAS

logger = get_logger(__name__)


def _build_schema(entity_type: str, field_defs: list[dict[str, Any]]) -> EntitySchema:
    if entity_type not in ENTITY_TYPES:
        raise SchemaError(f"Unknown entity type '{entity_type}'")
    if not isinstance(field_defs, list):
        raise SchemaError(f"Fields for '{entity_type}' must be a list")
    try:
        return EntitySchema(
            entity_type=entity_type,
            fields=[FieldDescriptor(**field_def) for field_def in field_defs],
        )
    except (ValidationError, TypeError) as e:
        raise SchemaError(f"Invalid schema for '{entity_type}': {e}") from e


def load_schemas_from_yaml(path: str | Path) -> dict[str, EntitySchema]:
    """
    Load entity schemas from a YAML file.

    Args:
        path: Path to the YAML file

    Returns:
        Entity type to schema, for the entities the file declares

    Raises:
        FileNotFoundError: If the file does not exist
        SchemaError: If the file is malformed
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if not config or "schemas" not in config:
        raise SchemaError("Schema file must contain a 'schemas' section")

    return {
        entity_type: _build_schema(entity_type, field_defs)
        for entity_type, field_defs in config["schemas"].items()
    }


class SchemaRegistry:
    """
    Lookup of EntitySchema by entity type.

    Starts from the built-in tables; `overrides` (or a YAML file) replace
    whole entity schemas.
    """

    def __init__(self, overrides: dict[str, EntitySchema] | None = None):
        self._schemas: dict[str, EntitySchema] = {
            entity_type: _build_schema(entity_type, field_defs)
            for entity_type, field_defs in DEFAULT_SCHEMAS.items()
        }
        if overrides:
            self._schemas.update(overrides)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "SchemaRegistry":
        overrides = load_schemas_from_yaml(path)
        logger.info(
            f"Loaded {len(overrides)} schema override(s) from {path}",
            extra={"entity_types": sorted(overrides)}
        )
        return cls(overrides)

    def get(self, entity_type: str) -> EntitySchema:
        """
        Schema for an entity type.

        Raises:
            SchemaError: If the entity type is unknown
        """
        try:
            return self._schemas[entity_type]
        except KeyError:
            raise SchemaError(f"Unknown entity type '{entity_type}'") from None

    def entity_types(self) -> list[str]:
        return list(self._schemas)
