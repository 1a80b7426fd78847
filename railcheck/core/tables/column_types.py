"""
Static column metadata for every logical table and track type.

Visibility differs between track types: curved track has no switch-area
readings in front of the switch heel, and the horizontal table never uses
the frog middle point or the check-interval/guard-distance columns.
"""

from typing import Literal

from railcheck.core.models import Column, TrackType

TableKind = Literal[
    "rail_gauge",
    "horizontal",
    "offset",
    "switch_rail_reduction",
    "guard_rail_flange_groove",
]

RAIL_GAUGE: TableKind = "rail_gauge"
HORIZONTAL: TableKind = "horizontal"
OFFSET: TableKind = "offset"
SWITCH_RAIL_REDUCTION: TableKind = "switch_rail_reduction"
GUARD_RAIL_FLANGE_GROOVE: TableKind = "guard_rail_flange_groove"

TABLE_KINDS: tuple[TableKind, ...] = (
    RAIL_GAUGE,
    HORIZONTAL,
    OFFSET,
    SWITCH_RAIL_REDUCTION,
    GUARD_RAIL_FLANGE_GROOVE,
)

CURVED_MARKER_COLUMNS = ("FirstFootCurvedBackCol", "SecondFootCurvedBackCol")


def _columns(*specs: tuple[str, str, bool]) -> tuple[Column, ...]:
    return tuple(Column(name=name, label=label, hidden=hidden) for name, label, hidden in specs)


STRAIGHT_GAUGE_COLUMNS = _columns(
    ("ExtraCol1", "First foot before switch", False),
    ("ExtraCol2", "Second foot before switch", False),
    ("SlopeEndCol", "Run-off slope end", False),
    ("SwitchTipCol", "Switch tip", False),
    ("SwitchMiddleCol", "Switch middle", False),
    ("SwitchHeelCol", "Switch heel", False),
    ("LeadCurveFrontCol", "Lead curve front", False),
    ("LeadCurveMiddleCol", "Lead curve middle", False),
    ("LeadCurveRearCol", "Lead curve rear", False),
    ("FrogFrontCol", "Frog front", False),
    ("FrogMiddleCol", "Frog middle", False),
    ("FrogRearCol", "Frog rear", False),
    ("CheckIntervalCol", "Check interval", False),
    ("GuardDistanceCol", "Guard distance", False),
    ("FirstFootStraightBackCol", "First foot behind (straight)", False),
    ("SecondFootStraightBackCol", "Second foot behind (straight)", False),
)

STRAIGHT_HORIZONTAL_COLUMNS = _columns(
    ("ExtraCol1", "First foot before switch", False),
    ("ExtraCol2", "Second foot before switch", False),
    ("SlopeEndCol", "Run-off slope end", False),
    ("SwitchTipCol", "Switch tip", False),
    ("SwitchMiddleCol", "Switch middle", True),
    ("SwitchHeelCol", "Switch heel", False),
    ("LeadCurveFrontCol", "Lead curve front", False),
    ("LeadCurveMiddleCol", "Lead curve middle", False),
    ("LeadCurveRearCol", "Lead curve rear", False),
    ("FrogFrontCol", "Frog front", False),
    ("FrogMiddleCol", "Frog middle", True),
    ("FrogRearCol", "Frog rear", False),
    ("CheckIntervalCol", "Check interval", True),
    ("GuardDistanceCol", "Guard distance", True),
    ("FirstFootStraightBackCol", "First foot behind (straight)", False),
    ("SecondFootStraightBackCol", "Second foot behind (straight)", False),
)

CURVED_GAUGE_COLUMNS = _columns(
    ("ExtraCol1", "Extra column 1", True),
    ("ExtraCol2", "Extra column 2", True),
    ("SlopeEndCol", "Run-off slope end", True),
    ("SwitchTipCol", "Switch tip", True),
    ("SwitchMiddleCol", "Switch middle", True),
    ("SwitchHeelCol", "Switch heel", False),
    ("LeadCurveFrontCol", "Lead curve front", False),
    ("LeadCurveMiddleCol", "Lead curve middle", False),
    ("LeadCurveRearCol", "Lead curve rear", False),
    ("FrogFrontCol", "Frog front", False),
    ("FrogMiddleCol", "Frog middle", False),
    ("FrogRearCol", "Frog rear", False),
    ("CheckIntervalCol", "Check interval", False),
    ("GuardDistanceCol", "Guard distance", False),
    ("FirstFootCurvedBackCol", "First foot behind (curved)", False),
    ("SecondFootCurvedBackCol", "Second foot behind (curved)", False),
)

CURVED_HORIZONTAL_COLUMNS = _columns(
    ("ExtraCol1", "Extra column 1", True),
    ("ExtraCol2", "Extra column 2", True),
    ("SlopeEndCol", "Run-off slope end", True),
    ("SwitchTipCol", "Switch tip", True),
    ("SwitchMiddleCol", "Switch middle", True),
    ("SwitchHeelCol", "Switch heel", False),
    ("LeadCurveFrontCol", "Lead curve front", False),
    ("LeadCurveMiddleCol", "Lead curve middle", False),
    ("LeadCurveRearCol", "Lead curve rear", False),
    ("FrogFrontCol", "Frog front", False),
    ("FrogMiddleCol", "Frog middle", True),
    ("FrogRearCol", "Frog rear", False),
    ("CheckIntervalCol", "Check interval", True),
    ("GuardDistanceCol", "Guard distance", True),
    ("FirstFootCurvedBackCol", "First foot behind (curved)", False),
    ("SecondFootCurvedBackCol", "Second foot behind (curved)", False),
)

OFFSET_COLUMNS = _columns(*((f"offsetColumn{i}", f"Offset {i}", False) for i in range(1, 10)))


def _reduction_columns(prefix: str) -> tuple[Column, ...]:
    return _columns(
        *((f"reducedValueOfSwitchRail{i}", f"{prefix} switch rail reduction {i}", False) for i in range(1, 6)),
        ("spacingBetweentracks&GuardRails1", f"{prefix} guard rail spacing 1", False),
        ("spacingBetweentracks&GuardRails2", f"{prefix} guard rail spacing 2", False),
        ("spacingBetweentracks&WingrRails", f"{prefix} wing rail spacing", False),
    )


def _flange_groove_columns(prefix: str) -> tuple[Column, ...]:
    return _columns(
        *((f"guardRailFlangeGroove{i}", f"{prefix} guard rail flange groove {i}", False) for i in range(1, 6)),
        ("guardrailWear", "Guard rail wear", False),
        ("wingRailVerticalGrinding", "Wing rail vertical wear", False),
        ("verticalGrindingOfHeartRail", "Point rail vertical wear", False),
    )


STRAIGHT_REDUCTION_COLUMNS = _reduction_columns("Straight")
CURVED_REDUCTION_COLUMNS = _reduction_columns("Curved")
STRAIGHT_FLANGE_GROOVE_COLUMNS = _flange_groove_columns("Straight")
CURVED_FLANGE_GROOVE_COLUMNS = _flange_groove_columns("Curved")

COLUMN_TABLES: dict[tuple[TableKind, TrackType], tuple[Column, ...]] = {
    (RAIL_GAUGE, "straight"): STRAIGHT_GAUGE_COLUMNS,
    (RAIL_GAUGE, "curved"): CURVED_GAUGE_COLUMNS,
    (HORIZONTAL, "straight"): STRAIGHT_HORIZONTAL_COLUMNS,
    (HORIZONTAL, "curved"): CURVED_HORIZONTAL_COLUMNS,
    (OFFSET, "straight"): OFFSET_COLUMNS,
    (OFFSET, "curved"): OFFSET_COLUMNS,
    (SWITCH_RAIL_REDUCTION, "straight"): STRAIGHT_REDUCTION_COLUMNS,
    (SWITCH_RAIL_REDUCTION, "curved"): CURVED_REDUCTION_COLUMNS,
    (GUARD_RAIL_FLANGE_GROOVE, "straight"): STRAIGHT_FLANGE_GROOVE_COLUMNS,
    (GUARD_RAIL_FLANGE_GROOVE, "curved"): CURVED_FLANGE_GROOVE_COLUMNS,
}


def get_columns(table: TableKind, track_type: TrackType, include_hidden: bool = True) -> list[Column]:
    """
    Column metadata of a table variant.

    Args:
        table: Logical table
        track_type: "straight" or "curved"
        include_hidden: When False, hidden columns are filtered out

    Raises:
        ValueError: If the table/track type combination is unknown
    """
    try:
        columns = COLUMN_TABLES[(table, track_type)]
    except KeyError:
        raise ValueError(f"Unknown table variant: {table}/{track_type}") from None

    return [c for c in columns if include_hidden or not c.hidden]


def get_column_names_by_track_type(track_type: TrackType) -> list[str]:
    """Names of all visible columns of one track type, across tables, without duplicates."""
    names: dict[str, None] = {}
    for table in TABLE_KINDS:
        for column in get_columns(table, track_type, include_hidden=False):
            names.setdefault(column.name)
    return list(names)


def get_all_column_names() -> list[str]:
    """Names of all visible columns of both track types, without duplicates."""
    names = dict.fromkeys(get_column_names_by_track_type("straight"))
    names.update(dict.fromkeys(get_column_names_by_track_type("curved")))
    return list(names)


def is_curved(columns: list[Column]) -> bool:
    """Infer the track type from a table's columns: curved tables carry curved back columns."""
    return any(c.name in CURVED_MARKER_COLUMNS for c in columns)
