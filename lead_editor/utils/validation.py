"""
Input validation utilities for store access.

Checks record ids, actor identities, query limits and dynamic SQL
identifiers before they reach a store.
"""

import re


class InputValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_record_id(record_id: str | int, field_name: str = "record_id") -> str:
    """
    Validate a record ID.

    Record IDs must be non-empty and contain only alphanumeric characters,
    hyphens, underscores and dots. Integer ids are accepted and converted.

    Args:
        record_id: The record ID to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated record ID (stripped of whitespace)

    Raises:
        InputValidationError: If validation fails

    Examples:
        >>> validate_record_id("R001")
        'R001'
        >>> validate_record_id(42)
        '42'
        >>> validate_record_id("invalid id!")  # doctest: +SKIP
        InputValidationError: record_id contains invalid characters
    """
    if isinstance(record_id, int) and not isinstance(record_id, bool):
        record_id = str(record_id)

    if not record_id or not isinstance(record_id, str):
        raise InputValidationError(f"{field_name} must be a non-empty string")

    record_id = record_id.strip()

    if not record_id:
        raise InputValidationError(f"{field_name} cannot be empty or whitespace-only")

    if not re.match(r'^[a-zA-Z0-9_\-\.]+$', record_id):
        raise InputValidationError(
            f"{field_name} contains invalid characters. "
            "Only alphanumeric, hyphens, underscores, and dots are allowed."
        )

    if len(record_id) > 255:
        raise InputValidationError(f"{field_name} exceeds maximum length of 255 characters")

    return record_id


def validate_actor(actor: str, field_name: str = "actor") -> str:
    """
    Validate the identity recorded as the author of a change (usually an email).

    Raises:
        InputValidationError: If the actor is empty or too long
    """
    if not actor or not isinstance(actor, str) or not actor.strip():
        raise InputValidationError(f"{field_name} must be a non-empty string")

    actor = actor.strip()
    if len(actor) > 320:
        raise InputValidationError(f"{field_name} exceeds maximum length of 320 characters")

    return actor


def validate_limit(limit: int, field_name: str = "limit", max_limit: int = 1000) -> int:
    """
    Validate a limit parameter for queries.

    Args:
        limit: The limit value to validate
        field_name: Name of the field (for error messages)
        max_limit: Maximum allowed limit value

    Returns:
        The validated limit value

    Raises:
        InputValidationError: If validation fails

    Examples:
        >>> validate_limit(100)
        100
        >>> validate_limit(0)  # doctest: +SKIP
        InputValidationError: limit must be a positive integer
    """
    if not isinstance(limit, int) or isinstance(limit, bool):
        raise InputValidationError(f"{field_name} must be an integer, got {type(limit).__name__}")

    if limit <= 0:
        raise InputValidationError(f"{field_name} must be a positive integer, got {limit}")

    if limit > max_limit:
        raise InputValidationError(f"{field_name} exceeds maximum of {max_limit}")

    return limit


def sanitize_sql_identifier(identifier: str, field_name: str = "identifier") -> str:
    """
    Sanitize an SQL identifier (table name, column name, etc.).

    Column names of a change set end up in UPDATE statements, so only safe
    identifiers are let through.

    Args:
        identifier: The identifier to sanitize
        field_name: Name of the field (for error messages)

    Returns:
        The validated identifier

    Raises:
        InputValidationError: If validation fails

    Examples:
        >>> sanitize_sql_identifier("room_number")
        'room_number'
        >>> sanitize_sql_identifier("name; DROP TABLE lead_room;")  # doctest: +SKIP
        InputValidationError: identifier contains invalid characters
    """
    if not identifier or not isinstance(identifier, str):
        raise InputValidationError(f"{field_name} must be a non-empty string")

    identifier = identifier.strip()

    if not re.match(r'^[a-zA-Z_][a-zA-Z0-9_]*$', identifier):
        raise InputValidationError(
            f"{field_name} contains invalid characters. "
            "SQL identifiers must start with a letter or underscore and contain only "
            "alphanumeric characters and underscores."
        )

    if len(identifier) > 63:  # PostgreSQL limit
        raise InputValidationError(f"{field_name} exceeds PostgreSQL maximum length of 63 characters")

    reserved_keywords = {
        "select", "insert", "update", "delete", "drop", "create", "alter",
        "table", "database", "index", "view", "user", "grant", "revoke"
    }
    if identifier.lower() in reserved_keywords:
        raise InputValidationError(
            f"{field_name} '{identifier}' is a reserved SQL keyword. "
            "Please use a different name."
        )

    return identifier
