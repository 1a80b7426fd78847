"""
Column metadata per table and track type.
"""

from .column_types import (
    GUARD_RAIL_FLANGE_GROOVE,
    HORIZONTAL,
    OFFSET,
    RAIL_GAUGE,
    SWITCH_RAIL_REDUCTION,
    TABLE_KINDS,
    TableKind,
    get_all_column_names,
    get_column_names_by_track_type,
    get_columns,
    is_curved,
)

__all__ = [
    "TableKind",
    "RAIL_GAUGE",
    "HORIZONTAL",
    "OFFSET",
    "SWITCH_RAIL_REDUCTION",
    "GUARD_RAIL_FLANGE_GROOVE",
    "TABLE_KINDS",
    "get_columns",
    "get_column_names_by_track_type",
    "get_all_column_names",
    "is_curved",
]
