"""
TypeRule - validates the runtime kind of a value after string-to-number coercion.
"""

import math
from typing import Any

from railcheck.core.models import ValidationError

from .base_rule import BaseRule, Row
from .coercion import is_number, to_number, type_name


class TypeRule(BaseRule):
    """
    Validates that a column holds a value of the expected kind.

    Numeric strings are converted to numbers before the check, so "6.5"
    satisfies "number" but not "string". Unlike the numeric rules, a missing
    value is a violation here.

    Supported types: number, string, boolean, object
    """

    SUPPORTED_TYPES = ("number", "string", "boolean", "object")

    def __init__(self, rule_name: str, column_name: str, expected_type: str):
        super().__init__(rule_name, column_name)

        if expected_type not in self.SUPPORTED_TYPES:
            raise ValueError(f"Unsupported type: {expected_type}")

        self.expected_type = expected_type

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        if isinstance(value, str):
            number = to_number(value)
            if is_number(number):
                value = number

        if value is None:
            return self._error(
                row_index,
                f"empty value in {self.column_name} is not of type {self.expected_type}",
            )

        actual_type = type_name(value)
        if actual_type == "number" and math.isnan(value):
            return self._error(row_index, "value must be a valid number, actual: NaN")

        if actual_type != self.expected_type:
            return self._error(
                row_index,
                f"value must be of type {self.expected_type}, actual: {actual_type}",
            )

        return None

    @property
    def rule_type(self) -> str:
        return "type"
