"""
Reference dataset models: fixed per-column values that measured deviations
are added to (e.g. the nominal gauge at each measuring point).
"""

from typing import Literal

from pydantic import BaseModel, Field

FixedValue = float | str
TrackType = Literal["straight", "curved"]


class ReductionModeValues(BaseModel):
    """Reference values specific to one switch-rail reduction mode."""

    columns: dict[str, FixedValue] = Field(default_factory=dict)


class TrackTypeVariant(BaseModel):
    """Reference values for one track type, optionally split by reduction mode."""

    columns: dict[str, FixedValue] = Field(default_factory=dict)
    switch_rail_reduction_types: dict[str, ReductionModeValues] = Field(default_factory=dict)


class ReferenceDataSet(BaseModel):
    """
    One named set of reference values.

    Attributes:
        id: Dataset identifier, matched against a row's "datasetId"
        name: Human-readable name
        is_default: Whether the entry UI preselects this dataset
        description: Optional free text
        columns: Dataset-wide fallback values
        track_types: Values for straight and curved track
        switch_rail_reduction_types: Values per reduction mode, any track type
    """

    id: str = Field(..., min_length=1)
    name: str
    is_default: bool = False
    description: str | None = None
    columns: dict[str, FixedValue] = Field(default_factory=dict)
    track_types: dict[TrackType, TrackTypeVariant] = Field(default_factory=dict)
    switch_rail_reduction_types: dict[str, ReductionModeValues] = Field(default_factory=dict)


class ReferenceDataConfig(BaseModel):
    """Top-level document of a reference data file."""

    version: int = 1
    datasets: list[ReferenceDataSet] = Field(default_factory=list)
