"""
Single-threshold comparison rules.

ComparisonRule takes the operator as a parameter; the LessThan/GreaterThan
family fixes it. NotEqualRule compares raw values without coercion.
"""

import operator
from typing import Any

from railcheck.core.models import ValidationError

from .base_rule import BaseRule, NumericRule, Row
from .coercion import format_number


class ComparisonRule(NumericRule):
    """
    Validates that `value <operator> threshold` holds.

    Supported operators: <, >, <=, >=, !=, ==
    """

    OPERATORS = {
        "<": (operator.lt, "value must be less than"),
        ">": (operator.gt, "value must be greater than"),
        "<=": (operator.le, "value must be less than or equal to"),
        ">=": (operator.ge, "value must be greater than or equal to"),
        "!=": (operator.ne, "value must not equal"),
        "==": (operator.eq, "value must equal"),
    }

    def __init__(self, rule_name: str, column_name: str, op: str, threshold: float):
        super().__init__(rule_name, column_name)

        if op not in self.OPERATORS:
            raise ValueError(f"Unsupported comparison operator: {op}")

        self.operator = op
        self.threshold = threshold

    def check(self, number: float, raw: Any, row_index: int) -> ValidationError | None:
        compare, phrase = self.OPERATORS[self.operator]
        if not compare(number, self.threshold):
            return self._error(row_index, f"{phrase} {format_number(self.threshold)}, actual: {raw}")
        return None

    @property
    def rule_type(self) -> str:
        return "comparison"


class LessThanRule(ComparisonRule):
    """Fails when the value is >= max_value."""

    def __init__(self, rule_name: str, column_name: str, max_value: float):
        super().__init__(rule_name, column_name, "<", max_value)

    @property
    def max_value(self) -> float:
        return self.threshold

    @property
    def rule_type(self) -> str:
        return "less_than"


class LessThanOrEqualRule(ComparisonRule):
    """Fails when the value is > max_value."""

    def __init__(self, rule_name: str, column_name: str, max_value: float):
        super().__init__(rule_name, column_name, "<=", max_value)

    @property
    def max_value(self) -> float:
        return self.threshold

    @property
    def rule_type(self) -> str:
        return "less_than_or_equal"


class GreaterThanRule(ComparisonRule):
    """Fails when the value is <= min_value."""

    def __init__(self, rule_name: str, column_name: str, min_value: float):
        super().__init__(rule_name, column_name, ">", min_value)

    @property
    def min_value(self) -> float:
        return self.threshold

    @property
    def rule_type(self) -> str:
        return "greater_than"


class GreaterThanOrEqualRule(ComparisonRule):
    """Fails when the value is < min_value."""

    def __init__(self, rule_name: str, column_name: str, min_value: float):
        super().__init__(rule_name, column_name, ">=", min_value)

    @property
    def min_value(self) -> float:
        return self.threshold

    @property
    def rule_type(self) -> str:
        return "greater_than_or_equal"


def strictly_equal(left: Any, right: Any) -> bool:
    """Equality without coercion: "1" never equals 1, True never equals 1."""
    left_numeric = isinstance(left, int | float) and not isinstance(left, bool)
    right_numeric = isinstance(right, int | float) and not isinstance(right, bool)
    if left_numeric and right_numeric:
        return left == right
    return type(left) is type(right) and left == right


class NotEqualRule(BaseRule):
    """
    Fails when the raw value strictly equals a forbidden value.

    No numeric coercion is applied, so the string "0" does not match 0.
    """

    def __init__(self, rule_name: str, column_name: str, forbidden_value: Any):
        super().__init__(rule_name, column_name)
        self.forbidden_value = forbidden_value

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        if strictly_equal(value, self.forbidden_value):
            return self._error(row_index, f"value must not equal {self.forbidden_value}")
        return None

    @property
    def rule_type(self) -> str:
        return "not_equal"
