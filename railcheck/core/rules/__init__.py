"""
Rule catalog.

Provides column rules (range, comparisons, presence, type, custom) and row
rules (two-column sum range, triangle depression).
"""

from typing import Any

from .base_rule import BaseRule, NumericRule, Row
from .coercion import format_number, is_empty, to_number, type_name
from .comparison_rule import (
    ComparisonRule,
    GreaterThanOrEqualRule,
    GreaterThanRule,
    LessThanOrEqualRule,
    LessThanRule,
    NotEqualRule,
)
from .custom_rule import CustomRule
from .range_rule import RangeRule
from .required_rule import RequiredEmptyRule, RequiredRule
from .sum_range_rule import SumRangeRule
from .triangle_depression_rule import TRIANGLE_DEPRESSION_THRESHOLD, TriangleDepressionRule
from .type_rule import TypeRule

RULE_REGISTRY: dict[str, type[BaseRule]] = {
    "range": RangeRule,
    "comparison": ComparisonRule,
    "less_than": LessThanRule,
    "less_than_or_equal": LessThanOrEqualRule,
    "greater_than": GreaterThanRule,
    "greater_than_or_equal": GreaterThanOrEqualRule,
    "not_equal": NotEqualRule,
    "required": RequiredRule,
    "required_empty": RequiredEmptyRule,
    "custom": CustomRule,
    "type": TypeRule,
    "sum_range": SumRangeRule,
    "triangle_depression": TriangleDepressionRule,
}


def build_rule(rule_type: str, rule_name: str, **params: Any) -> BaseRule:
    """
    Instantiate a rule from its type identifier.

    Args:
        rule_type: Key of RULE_REGISTRY ("range", "triangle_depression", ...)
        rule_name: Name of the new rule
        **params: Constructor arguments of the rule class

    Raises:
        ValueError: If the rule type is unknown or the parameters are invalid
    """
    rule_class = RULE_REGISTRY.get(rule_type)
    if not rule_class:
        raise ValueError(f"Unknown rule type: {rule_type}")

    try:
        return rule_class(rule_name, **params)
    except TypeError as e:
        raise ValueError(f"Failed to create rule '{rule_name}': {e}") from e


__all__ = [
    "BaseRule",
    "NumericRule",
    "Row",
    "RangeRule",
    "ComparisonRule",
    "LessThanRule",
    "LessThanOrEqualRule",
    "GreaterThanRule",
    "GreaterThanOrEqualRule",
    "NotEqualRule",
    "RequiredRule",
    "RequiredEmptyRule",
    "CustomRule",
    "TypeRule",
    "SumRangeRule",
    "TriangleDepressionRule",
    "TRIANGLE_DEPRESSION_THRESHOLD",
    "RULE_REGISTRY",
    "build_rule",
    "to_number",
    "is_empty",
    "format_number",
    "type_name",
]
