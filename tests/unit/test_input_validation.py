"""
Unit tests for the store input validation utilities.
"""

import pytest

from lead_editor.utils.validation import (
    InputValidationError,
    sanitize_sql_identifier,
    validate_actor,
    validate_limit,
    validate_record_id,
)

pytestmark = pytest.mark.unit


class TestValidationUtilities:
    """Test the input validation utilities."""

    def test_validate_record_id_valid(self):
        """Test valid record IDs."""
        assert validate_record_id("R001") == "R001"
        assert validate_record_id("room_type-12") == "room_type-12"
        assert validate_record_id("P.2025.001") == "P.2025.001"
        assert validate_record_id("  R001  ") == "R001"
        assert validate_record_id(42) == "42"

    def test_validate_record_id_invalid(self):
        """Test invalid record IDs."""
        with pytest.raises(InputValidationError, match="must be a non-empty string"):
            validate_record_id("")

        with pytest.raises(InputValidationError, match="cannot be empty"):
            validate_record_id("   ")

        with pytest.raises(InputValidationError, match="invalid characters"):
            validate_record_id("R 001")

        with pytest.raises(InputValidationError, match="invalid characters"):
            validate_record_id("R1'; DROP TABLE lead_room--")

        with pytest.raises(InputValidationError):
            validate_record_id(True)

        with pytest.raises(InputValidationError, match="maximum length"):
            validate_record_id("R" * 256)

    def test_input_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            validate_record_id(None)

    def test_validate_actor(self):
        """Test actor validation."""
        assert validate_actor(" editor@example.com ") == "editor@example.com"

        with pytest.raises(InputValidationError, match="non-empty"):
            validate_actor("  ")

        with pytest.raises(InputValidationError, match="maximum length"):
            validate_actor("a" * 321)

    def test_validate_limit(self):
        """Test limit validation."""
        assert validate_limit(1) == 1
        assert validate_limit(1000) == 1000

        with pytest.raises(InputValidationError, match="must be a positive integer"):
            validate_limit(0)

        with pytest.raises(InputValidationError, match="exceeds maximum"):
            validate_limit(1001)

        with pytest.raises(InputValidationError, match="must be an integer"):
            validate_limit("10")

    def test_sanitize_sql_identifier_valid(self):
        """Test valid SQL identifiers."""
        assert sanitize_sql_identifier("room_number") == "room_number"
        assert sanitize_sql_identifier("possible_key_handover_scheduled_date_1") == \
            "possible_key_handover_scheduled_date_1"
        assert sanitize_sql_identifier("_private") == "_private"

    def test_sanitize_sql_identifier_invalid(self):
        """Test invalid SQL identifiers."""
        with pytest.raises(InputValidationError, match="invalid characters"):
            sanitize_sql_identifier("name; DROP TABLE lead_room;")

        with pytest.raises(InputValidationError, match="invalid characters"):
            sanitize_sql_identifier("1st_column")

        with pytest.raises(InputValidationError, match="reserved SQL keyword"):
            sanitize_sql_identifier("user")

        with pytest.raises(InputValidationError, match="maximum length"):
            sanitize_sql_identifier("a" * 64)
