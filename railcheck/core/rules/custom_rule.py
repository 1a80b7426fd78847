"""
CustomRule - validates using a caller-supplied predicate.
"""

from collections.abc import Callable
from typing import Any

from railcheck.core.models import ValidationError

from .base_rule import BaseRule, Row

Predicate = Callable[[Any, Row, int], ValidationError | None]


class CustomRule(BaseRule):
    """
    Delegates validation to a predicate.

    The predicate has the same signature as validate():

        def my_check(value, row, row_index) -> ValidationError | None

    and builds its own ValidationError, so it may choose the rule name and
    columns reported. Exceptions raised by the predicate are not caught.
    """

    def __init__(self, rule_name: str, column_name: str, predicate: Predicate):
        super().__init__(rule_name, column_name)

        if not callable(predicate):
            raise ValueError("CustomRule predicate must be callable")

        self.predicate = predicate

    def validate(self, value: Any, row: Row, row_index: int) -> ValidationError | None:
        return self.predicate(value, row, row_index)

    @property
    def rule_type(self) -> str:
        return "custom"
