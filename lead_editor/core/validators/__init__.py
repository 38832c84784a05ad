"""
Validation rule implementations.

Provides validators for required fields, parse checks on numeric and date
fields, allowed characters, conditionally required fields and custom logic.
"""

from .base_validator import BaseValidator, ValidationError
from .character_validator import CharacterValidator
from .conditional_validator import RequiredWhenValidator
from .custom_validator import CustomValidator
from .required_field_validator import RequiredFieldValidator
from .type_validator import TypeValidator

__all__ = [
    "BaseValidator",
    "ValidationError",
    "RequiredFieldValidator",
    "TypeValidator",
    "CharacterValidator",
    "RequiredWhenValidator",
    "CustomValidator",
]
