"""
Value normalization for change detection.

Raw field values arrive in several shapes: strings typed into a form,
numbers from JSON, boxed scalars such as {"value": "2025-04-01"} for the
warehouse's DATE/TIMESTAMP columns, empty strings and None. `normalize`
maps each of them to one canonical comparable form per field kind so that
re-saving unchanged data never produces a diff.

Parse failures are not errors by default: "abc" in a numeric field and a
cleared field both normalize to None. `strict=True` raises
NormalizationError for the former instead.
"""

import math
import re
from collections.abc import Mapping
from datetime import date
from decimal import Decimal
from typing import Any

from lead_editor.core.models import FieldKind
from lead_editor.errors import NormalizationError

NormalizedValue = str | float | None

DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

_PRIMITIVES = (str, int, float, bool, Decimal)


def unbox(value: Any) -> Any:
    """
    Return the inner scalar of a boxed value, or the value itself.

    A boxed value is a mapping with a "value" key (JSON form) or an object
    exposing a `value` attribute (client library form).
    """
    if isinstance(value, Mapping):
        return value["value"] if "value" in value else value
    if value is not None and not isinstance(value, _PRIMITIVES) and hasattr(value, "value"):
        return value.value
    return value


def _to_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    elif isinstance(value, str):
        text = value.replace(",", "").strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _to_date_string(value: Any) -> str | None:
    if not isinstance(value, str) or not DATE_PATTERN.match(value):
        return None
    try:
        date.fromisoformat(value)
    except ValueError:
        return None
    return value


def normalize(value: Any, kind: FieldKind | str = FieldKind.TEXT, *, strict: bool = False) -> NormalizedValue:
    """
    Convert a raw field value into its canonical comparable form.

    Args:
        value: Raw value (None, primitive or boxed scalar)
        kind: Declared field kind
        strict: Raise instead of returning None when a non-empty numeric
                or date value cannot be parsed

    Returns:
        None for absent values, float for numeric fields, the YYYY-MM-DD
        string for date fields, str for text and select fields

    Raises:
        NormalizationError: Only when strict=True and parsing fails
    """
    kind = FieldKind.parse(kind)
    value = unbox(value)

    if value is None or value == "":
        return None

    if kind is FieldKind.NUMERIC:
        result = _to_float(value)
    elif kind is FieldKind.DATE:
        result = _to_date_string(value)
    else:
        return str(value)

    if result is None and strict and not (isinstance(value, str) and not value.strip()):
        raise NormalizationError(kind.value, value)
    return result


def is_blank(value: Any, kind: FieldKind | str = FieldKind.TEXT) -> bool:
    """True when the value normalizes to None for its kind."""
    return normalize(value, kind) is None
