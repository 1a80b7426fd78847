"""
Error annotations for report formatters.

Condenses a validator's errors into the per-column facts an export needs:
which columns to highlight, which of them are blocking ("fatal"), which
column pairs form a triangle depression, and the messages to print.
"""

from collections.abc import Iterable

from pydantic import BaseModel, Field

from railcheck.core.models import ValidationError

FATAL_SUFFIX = "_fatal"
TRIANGLE_RULE_MARKERS = ("triangle_depression", "triangledepression")
TRIANGLE_MESSAGE_MARKER = "triangle depression"


def is_fatal_rule_name(rule_name: str) -> bool:
    """A rule name ending in "_fatal" (any case) marks a blocking violation."""
    return rule_name.lower().endswith(FATAL_SUFFIX)


def is_triangle_error(error: ValidationError) -> bool:
    rule_name = error.rule_name.lower()
    return any(marker in rule_name for marker in TRIANGLE_RULE_MARKERS) or (
        TRIANGLE_MESSAGE_MARKER in error.message.lower()
    )


class ErrorAnnotations(BaseModel):
    """
    Attributes:
        error_columns: Every column named by an error, in first-seen order
        fatal_columns: Columns named by a fatal error
        triangle_pairs: Column pairs reported by triangle depression checks
        error_reasons: Non-fatal messages per column, de-duplicated
        fatal_reasons: Fatal messages per column, de-duplicated
    """

    error_columns: list[str] = Field(default_factory=list)
    fatal_columns: list[str] = Field(default_factory=list)
    triangle_pairs: list[tuple[str, str]] = Field(default_factory=list)
    error_reasons: dict[str, list[str]] = Field(default_factory=dict)
    fatal_reasons: dict[str, list[str]] = Field(default_factory=dict)


def collect_error_info(errors: Iterable[ValidationError]) -> ErrorAnnotations:
    """
    Build report annotations from validation errors.

    Args:
        errors: Errors of one table, as returned by DataValidator.validate_all()

    Returns:
        ErrorAnnotations
    """
    annotations = ErrorAnnotations()

    for error in errors:
        fatal = is_fatal_rule_name(error.rule_name)
        reasons = annotations.fatal_reasons if fatal else annotations.error_reasons

        for column in error.column_names:
            if column not in annotations.error_columns:
                annotations.error_columns.append(column)
            if fatal and column not in annotations.fatal_columns:
                annotations.fatal_columns.append(column)

            column_reasons = reasons.setdefault(column, [])
            if error.message and error.message not in column_reasons:
                column_reasons.append(error.message)

        if is_triangle_error(error) and len(error.column_names) >= 2:
            annotations.triangle_pairs.append((error.column_names[0], error.column_names[1]))

    return annotations
