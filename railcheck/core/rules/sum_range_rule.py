"""
SumRangeRule - row rule bounding the sum of two columns.
"""

from typing import Any

from railcheck.core.models import ValidationError

from .base_rule import BaseRule, Row
from .coercion import format_number, is_empty, is_number, to_number


class SumRangeRule(BaseRule):
    """
    Validates that `row[column_a] + row[column_b]` lies within [min_value, max_value].

    Registered as a row rule. The check only applies once both columns are
    filled in; errors name both columns.
    """

    def __init__(
        self,
        rule_name: str,
        column_a: str,
        column_b: str,
        min_value: float,
        max_value: float,
    ):
        super().__init__(rule_name)

        if min_value > max_value:
            raise ValueError(f"SumRangeRule '{rule_name}': min {min_value} is greater than max {max_value}")

        self.column_a = column_a
        self.column_b = column_b
        self.min_value = min_value
        self.max_value = max_value

    @property
    def column_names(self) -> tuple[str, str]:
        return (self.column_a, self.column_b)

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        raw_a = row.get(self.column_a)
        raw_b = row.get(self.column_b)

        if is_empty(raw_a) or is_empty(raw_b):
            return None

        number_a = to_number(raw_a)
        number_b = to_number(raw_b)

        if not (is_number(number_a) and is_number(number_b)):
            return self._error(
                row_index,
                f"both values must be numbers, actual: {raw_a} and {raw_b}",
                self.column_names,
            )

        total = number_a + number_b
        if total < self.min_value or total > self.max_value:
            return self._error(
                row_index,
                f"sum of both values must be between {format_number(self.min_value)} and "
                f"{format_number(self.max_value)}, actual: {format_number(total)}",
                self.column_names,
            )

        return None

    @property
    def rule_type(self) -> str:
        return "sum_range"
