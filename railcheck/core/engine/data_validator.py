"""
DataValidator: applies column and row rules to tabular data and aggregates
the resulting errors.

A validator is built for one logical table, populated once with rules, and
then used for any number of validate_all() calls. It keeps the errors of the
most recent run for get_error_statistics(); callers sharing one instance
across threads should build one validator per validation pass instead.
"""

import logging
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Any

from railcheck.core.models import ErrorStatistics, ValidationError, ValidationOutcome
from railcheck.core.rules import BaseRule
from railcheck.observability.metrics import (
    record_validation_run,
    track_duration,
    validation_duration_seconds,
)

logger = logging.getLogger(__name__)


class DataValidator:
    """
    Holds column-scoped and row-scoped rules and runs them over rows.

    Column rules see the value of their column; row rules are invoked with
    value=None and read what they need from the row. Within a row, column
    errors come first (columns and rules in registration order), then row
    errors (in registration order). No rule short-circuits another.
    """

    def __init__(self, name: str = "default"):
        """
        Initialize an empty validator.

        Args:
            name: Label used in logs and metrics (usually the table name)
        """
        self.name = name
        self._column_rules: dict[str, list[BaseRule]] = {}
        self._row_rules: list[BaseRule] = []
        self._errors: list[ValidationError] = []

    @property
    def column_rules(self) -> Mapping[str, list[BaseRule]]:
        return MappingProxyType(self._column_rules)

    @property
    def row_rules(self) -> tuple[BaseRule, ...]:
        return tuple(self._row_rules)

    @property
    def errors(self) -> tuple[ValidationError, ...]:
        """Errors of the most recent validate_all() call."""
        return tuple(self._errors)

    @property
    def rule_count(self) -> int:
        return sum(len(rules) for rules in self._column_rules.values()) + len(self._row_rules)

    def add_column_rule(self, column_name: str, rule: BaseRule) -> None:
        """Append a rule to the ordered rule list of a column."""
        self._column_rules.setdefault(column_name, []).append(rule)

    def add_row_rule(self, rule: BaseRule) -> None:
        """Append a rule applied to each row as a whole."""
        self._row_rules.append(rule)

    def validate_row(self, row: Mapping[str, Any], row_index: int) -> list[ValidationError]:
        """
        Validate a single row against all registered rules.

        Args:
            row: Mapping from column name to value
            row_index: Zero-based index reported in errors

        Returns:
            Column errors followed by row errors
        """
        row_errors: list[ValidationError] = []

        for column_name, rules in self._column_rules.items():
            value = row.get(column_name)
            for rule in rules:
                error = rule.validate(value, row, row_index)
                if error is not None:
                    row_errors.append(error)

        for rule in self._row_rules:
            error = rule.validate(None, row, row_index)
            if error is not None:
                row_errors.append(error)

        return row_errors

    def validate_all(self, rows: Sequence[Mapping[str, Any]]) -> list[ValidationError]:
        """
        Validate every row in order and keep the errors for statistics.

        The previous snapshot is cleared first, so a rule that raises leaves
        no stale errors behind.

        Args:
            rows: Rows to validate; row indexes follow their position

        Returns:
            All errors, ordered by row index
        """
        self._errors = []
        errors: list[ValidationError] = []

        with track_duration(validation_duration_seconds, validator=self.name):
            for row_index, row in enumerate(rows):
                errors.extend(self.validate_row(row, row_index))

        self._errors = errors
        record_validation_run(self.name, len(rows), (e.rule_name for e in errors))

        logger.debug(
            "Validated rows",
            extra={"validator": self.name, "rows": len(rows), "errors": len(errors)},
        )

        return list(errors)

    def get_error_statistics(self) -> ErrorStatistics:
        """
        Aggregate the errors of the most recent validate_all() call.

        Returns:
            Errors grouped by column, by rule/column binding and by row
        """
        return ErrorStatistics.from_errors(self._errors)

    def run(self, rows: Sequence[Mapping[str, Any]]) -> ValidationOutcome:
        """
        Validate rows and aggregate in one call.

        Returns:
            ValidationOutcome with the errors and their statistics
        """
        errors = self.validate_all(rows)
        return ValidationOutcome(errors=errors, statistics=ErrorStatistics.from_errors(errors))

    def __repr__(self) -> str:
        return f"DataValidator(name={self.name}, rules={self.rule_count})"
