"""
TriangleDepressionRule - row rule detecting twist between co-located measuring points.

Within one group of measuring points (e.g. the front, middle and rear of the
lead curve) no two readings may differ by more than a fixed tolerance.
"""

from itertools import combinations
from typing import Any

from railcheck.core.models import ValidationError

from .base_rule import BaseRule, Row
from .coercion import format_number, is_empty, is_number, to_number

TRIANGLE_DEPRESSION_THRESHOLD = 9


class TriangleDepressionRule(BaseRule):
    """
    Reports the worst pair of readings whose absolute difference exceeds the tolerance.

    Empty columns are skipped (never treated as zero). With fewer than two
    readings there is nothing to compare. Only one error is produced per row:
    the pair with the largest difference, the first such pair in column order
    on ties.
    """

    def __init__(
        self,
        rule_name: str,
        column_names: list[str],
        threshold: float = TRIANGLE_DEPRESSION_THRESHOLD,
    ):
        super().__init__(rule_name)

        if len(column_names) < 2:
            raise ValueError(f"TriangleDepressionRule '{rule_name}' needs at least two columns")

        self.column_names = list(column_names)
        self.threshold = threshold

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        readings: list[tuple[str, float]] = []

        for column in self.column_names:
            raw = row.get(column)
            if is_empty(raw):
                continue

            number = to_number(raw)
            if not is_number(number):
                return self._error(row_index, f"value must be a number, actual: {raw}", [column])

            readings.append((column, number))

        if len(readings) < 2:
            return None

        worst: tuple[str, str, float] | None = None
        for (column_a, value_a), (column_b, value_b) in combinations(readings, 2):
            diff = abs(value_a - value_b)
            if diff > self.threshold and (worst is None or diff > worst[2]):
                worst = (column_a, column_b, diff)

        if worst is None:
            return None

        column_a, column_b, diff = worst
        return self._error(
            row_index,
            f"triangle depression anomaly: {column_a}-{column_b} = "
            f"{format_number(diff)} > {format_number(self.threshold)}",
            [column_a, column_b],
        )

    @property
    def rule_type(self) -> str:
        return "triangle_depression"
