"""
Core data models for the switch-geometry validation core.

All models use Pydantic for runtime validation and type safety.
"""

from .column import Column
from .error_statistics import ErrorBucket, ErrorStatistics, ValidationOutcome
from .reference_data import (
    FixedValue,
    ReductionModeValues,
    ReferenceDataConfig,
    ReferenceDataSet,
    TrackType,
    TrackTypeVariant,
)
from .validation_error import ValidationError

__all__ = [
    "Column",
    "ValidationError",
    "ErrorBucket",
    "ErrorStatistics",
    "ValidationOutcome",
    "FixedValue",
    "TrackType",
    "ReductionModeValues",
    "TrackTypeVariant",
    "ReferenceDataSet",
    "ReferenceDataConfig",
]
