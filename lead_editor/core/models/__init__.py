"""
Core data models for lead-editor.

All models use Pydantic for runtime validation and type safety.
"""

from .change_log import ChangeLogEntry
from .entity_schema import ENTITY_TYPES, EntitySchema
from .field_descriptor import FieldDescriptor, FieldKind
from .format_check import FormatCheckResult
from .submit_result import SubmitFailure, SubmitNoOp, SubmitResult, SubmitSuccess
from .validation_result import ValidationResult
from .validation_rule import ValidationRule

__all__ = [
    "ENTITY_TYPES",
    "FieldKind",
    "FieldDescriptor",
    "EntitySchema",
    "FormatCheckResult",
    "SubmitResult",
    "SubmitSuccess",
    "SubmitNoOp",
    "SubmitFailure",
    "ChangeLogEntry",
    "ValidationResult",
    "ValidationRule",
]
