"""
RangeRule - validates numeric values are within an inclusive range.
"""

from typing import Any

from railcheck.core.models import ValidationError

from .base_rule import NumericRule
from .coercion import format_number


class RangeRule(NumericRule):
    """
    Validates that a numeric column lies within [min_value, max_value].

    Empty values pass; pair with a RequiredRule when emptiness is a violation.
    """

    def __init__(self, rule_name: str, column_name: str, min_value: float, max_value: float):
        super().__init__(rule_name, column_name)

        if min_value > max_value:
            raise ValueError(f"RangeRule '{rule_name}': min {min_value} is greater than max {max_value}")

        self.min_value = min_value
        self.max_value = max_value

    def check(self, number: float, raw: Any, row_index: int) -> ValidationError | None:
        if number < self.min_value or number > self.max_value:
            return self._error(
                row_index,
                f"value must be between {format_number(self.min_value)} and "
                f"{format_number(self.max_value)}, actual: {raw}",
            )
        return None

    @property
    def rule_type(self) -> str:
        return "range"
