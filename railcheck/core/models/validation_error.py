"""
ValidationError model representing a single rule violation found in a row.

Unlike an exception, a ValidationError is a plain result value: rules return
it, the DataValidator collects it, and export collaborators read it.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


class ValidationError(BaseModel):
    """
    Immutable record of one rule violation.

    Attributes:
        column_names: Column(s) implicated, two for pairwise row rules
        row_index: Zero-based index of the offending row
        rule_name: Name of the rule that fired, preserved verbatim
                   (a "_fatal" suffix is meaningful to report formatters)
        message: Human-readable description embedding actual values and thresholds
        timestamp: Creation time, informational only (ignored by equality)
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "column_names": ["LeadCurveFrontCol", "LeadCurveRearCol"],
                "row_index": 0,
                "rule_name": "Group2TriangleDepression",
                "message": "triangle depression anomaly: LeadCurveFrontCol-LeadCurveRearCol = 12 > 9",
            }
        },
    )

    column_names: tuple[str, ...] = Field(..., min_length=1)
    row_index: int = Field(..., ge=0)
    rule_name: str = Field(..., min_length=1)
    message: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def _identity(self) -> tuple:
        return (self.column_names, self.row_index, self.rule_name, self.message)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __str__(self) -> str:
        return f"[row {self.row_index + 1}] {' & '.join(self.column_names)}: {self.message}"
