"""
Utility functions for lead-editor.
"""

from .validation import (
    InputValidationError,
    sanitize_sql_identifier,
    validate_actor,
    validate_limit,
    validate_record_id,
)

__all__ = [
    "InputValidationError",
    "sanitize_sql_identifier",
    "validate_actor",
    "validate_limit",
    "validate_record_id",
]
