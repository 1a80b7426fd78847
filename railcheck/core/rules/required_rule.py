"""
Presence rules: RequiredRule and its mirror image, RequiredEmptyRule.
"""

from typing import Any

from railcheck.core.models import ValidationError

from .base_rule import BaseRule, Row
from .coercion import is_empty


class RequiredRule(BaseRule):
    """
    Validates that a column is filled in.

    Fails if the value is missing, None, or an empty string.
    """

    def __init__(self, rule_name: str, column_name: str):
        super().__init__(rule_name, column_name)

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        if is_empty(value):
            return self._error(row_index, "value must not be empty")
        return None

    @property
    def rule_type(self) -> str:
        return "required"


class RequiredEmptyRule(BaseRule):
    """
    Validates that a column is left blank.

    Used for columns that do not apply to a table variant (e.g. the frog
    middle point in the horizontal table).
    """

    def __init__(self, rule_name: str, column_name: str):
        super().__init__(rule_name, column_name)

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        if not is_empty(value):
            return self._error(row_index, f"value must be empty, actual: {value}")
        return None

    @property
    def rule_type(self) -> str:
        return "required_empty"
