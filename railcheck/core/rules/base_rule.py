"""
Base rule interface for all validation rules.

All rules must inherit from BaseRule and implement validate() and rule_type.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from railcheck.core.models import ValidationError

from .coercion import is_empty, is_number, to_number

Row = Mapping[str, Any]


class BaseRule(ABC):
    """
    Abstract base class for all rules.

    A rule never raises for a value that violates its constraint; it returns
    a ValidationError instead, so that violations can be collected and
    aggregated. Exceptions escaping validate() are programming errors.
    """

    def __init__(self, rule_name: str, column_name: str | None = None):
        """
        Initialize rule.

        Args:
            rule_name: Unique name within a validator, used as aggregation key
            column_name: Column the rule is bound to (None for pure row rules)
        """
        if not rule_name:
            raise ValueError("rule_name must not be empty")

        self.rule_name = rule_name
        self.column_name = column_name

    @abstractmethod
    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        """
        Check a value against this rule.

        Args:
            value: The column value (None when invoked as a row rule)
            row: The entire row, for rules reading other columns
            row_index: Zero-based index of the row

        Returns:
            A ValidationError describing the violation, or None
        """
        pass

    @property
    @abstractmethod
    def rule_type(self) -> str:
        """Return the rule type identifier."""
        pass

    def _error(
        self,
        row_index: int,
        message: str,
        column_names: Sequence[str] | None = None,
    ) -> ValidationError:
        return ValidationError(
            column_names=tuple(column_names or (self.column_name,)),
            row_index=row_index,
            rule_name=self.rule_name,
            message=message,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.rule_name}, column={self.column_name})"


class NumericRule(BaseRule):
    """
    Shared flow of the single-column numeric rules.

    Empty values are not applicable and pass; values that do not coerce to a
    number produce a "must be a number" error; everything else is handed to
    check() as a float.
    """

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        if is_empty(value):
            return None

        number = to_number(value)
        if not is_number(number):
            return self._error(row_index, f"value must be a number, actual: {value}")

        return self.check(number, value, row_index)

    @abstractmethod
    def check(self, number: float, raw: Any, row_index: int) -> ValidationError | None:
        """Compare an already-coerced value against the rule's bound(s)."""
        pass
