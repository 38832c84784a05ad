"""
CharacterValidator - restricts free-text fields to the characters names may use.
"""

import re
from typing import Any

from lead_editor.core.normalizer import unbox

from .base_validator import BaseValidator

INVALID_CHARACTERS_MESSAGE = "使用できない文字が含まれています。"

# Hiragana, katakana (full and half width), kanji, ASCII alphanumerics,
# whitespace and - _ / ( ) ・ ， ． . ー ,
ALLOWED_CHARACTERS = (
    "\u3040-\u309f"  # hiragana
    "\u30a0-\u30ff"  # katakana, including ・ and ー
    "\u31f0-\u31ff"
    "\uff66-\uff9f"  # half-width katakana
    "\u3400-\u4dbf"
    "\u4e00-\u9fff"  # kanji
    "\uf900-\ufaff"
    "\u3005"  # 々
    "0-9a-zA-Z"
    r"\s\-_/()"
    "\uff0c\uff0e.,"  # ， ． . ,
)

DISALLOWED_PATTERN = re.compile(f"[^{ALLOWED_CHARACTERS}]")


def find_invalid_characters(value: str) -> list[str]:
    """Distinct characters of `value` outside the allowed set, in order of appearance."""
    seen: list[str] = []
    for char in DISALLOWED_PATTERN.findall(value):
        if char not in seen:
            seen.append(char)
    return seen


class CharacterValidator(BaseValidator):
    """
    Validates that a text value only contains allowed characters.

    Parameters:
    - extra: Additional characters to allow for this field
    """

    def __init__(self, field_name: str, parameters: dict[str, Any] | None = None, kind="text"):
        super().__init__(field_name, parameters, kind)
        extra = self.parameters.get("extra", "")
        self.pattern = (
            re.compile(f"[^{ALLOWED_CHARACTERS}{re.escape(extra)}]") if extra else DISALLOWED_PATTERN
        )

    def validate(self, value: Any, record: dict[str, Any]) -> None:
        value = unbox(value)
        # Empty and non-string values are accepted
        if not value or not isinstance(value, str):
            return

        if self.pattern.search(value):
            raise self.fail(INVALID_CHARACTERS_MESSAGE)

    @property
    def rule_type(self) -> str:
        return "characters"
