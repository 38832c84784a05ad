"""
Entity schemas: built-in field tables and YAML loading.
"""

from .registry import SchemaRegistry, load_schemas_from_yaml

__all__ = ["SchemaRegistry", "load_schemas_from_yaml"]
