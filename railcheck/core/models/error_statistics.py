"""
Aggregated error statistics produced by the DataValidator (ephemeral).
"""

from pydantic import BaseModel, Field

from .validation_error import ValidationError


class ErrorBucket(BaseModel):
    """Errors sharing one grouping key, with their count."""

    count: int = 0
    errors: list[ValidationError] = Field(default_factory=list)

    def add(self, error: ValidationError) -> None:
        self.count += 1
        self.errors.append(error)


class ErrorStatistics(BaseModel):
    """
    Distribution of the errors from one validation run.

    Attributes:
        by_column: Keyed by column name; an error naming two columns counts for both
        by_rule: Keyed by "<rule_name>_<column names joined by '_'>"
        by_row: Keyed by the row index as a string
        total: Number of errors in the run
    """

    by_column: dict[str, ErrorBucket] = Field(default_factory=dict)
    by_rule: dict[str, ErrorBucket] = Field(default_factory=dict)
    by_row: dict[str, ErrorBucket] = Field(default_factory=dict)
    total: int = 0

    @classmethod
    def from_errors(cls, errors: list[ValidationError]) -> "ErrorStatistics":
        stats = cls(total=len(errors))

        for error in errors:
            for column_name in error.column_names:
                stats.by_column.setdefault(column_name, ErrorBucket()).add(error)

            rule_key = f"{error.rule_name}_{'_'.join(error.column_names)}"
            stats.by_rule.setdefault(rule_key, ErrorBucket()).add(error)

            stats.by_row.setdefault(str(error.row_index), ErrorBucket()).add(error)

        return stats


class ValidationOutcome(BaseModel):
    """Errors of a validation run together with their statistics."""

    errors: list[ValidationError] = Field(default_factory=list)
    statistics: ErrorStatistics = Field(default_factory=ErrorStatistics)

    @property
    def passed(self) -> bool:
        return not self.errors
