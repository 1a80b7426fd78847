"""
Rule configuration per logical table.

Binds the generic rule catalog to the switch-geometry tables: which columns
get which bounds, which columns must stay empty, and which groups of
measuring points are checked for triangle depression. Tolerances live in
the tables below; the rule classes know nothing about them.
"""

import logging
import math
from collections.abc import Callable, Sequence
from typing import Any

from railcheck.core.models import Column, TrackType, ValidationError
from railcheck.core.rules import (
    BaseRule,
    CustomRule,
    GreaterThanOrEqualRule,
    GreaterThanRule,
    LessThanOrEqualRule,
    RangeRule,
    RequiredEmptyRule,
    TriangleDepressionRule,
    TypeRule,
    build_rule,
    format_number,
    is_empty,
    to_number,
)
from railcheck.core.tables import (
    GUARD_RAIL_FLANGE_GROOVE,
    HORIZONTAL,
    OFFSET,
    RAIL_GAUGE,
    SWITCH_RAIL_REDUCTION,
    TableKind,
    is_curved,
)
from railcheck.observability.metrics import increment_counter, rules_configured_total

from .data_validator import DataValidator
from .reference_data import ReferenceData

logger = logging.getLogger(__name__)

DEFAULT_DATASET_ID = "default"
DATASET_ID_KEY = "datasetId"
GAUGE_REFERENCE_LIMIT = 1456

# {column, min, max} bounds of the range-checked columns per table.
RAIL_RANGE_RULES = [
    {"column": column, "min": -3, "max": 6}
    for column in (
        "SlopeEndCol",
        "SwitchTipCol",
        "SwitchMiddleCol",
        "SwitchHeelCol",
        "LeadCurveFrontCol",
        "LeadCurveMiddleCol",
        "LeadCurveRearCol",
        "FrogFrontCol",
        "FrogMiddleCol",
        "FrogRearCol",
        "FirstFootStraightBackCol",
        "SecondFootStraightBackCol",
    )
]

# Gauge columns whose reading plus the dataset reference must stay below 1456.
RAIL_REFERENCE_COLUMNS = [
    "ExtraCol1",
    "ExtraCol2",
    "SlopeEndCol",
    "SwitchTipCol",
    "SwitchMiddleCol",
    "SwitchHeelCol",
    "LeadCurveFrontCol",
    "LeadCurveMiddleCol",
    "LeadCurveRearCol",
    "FrogFrontCol",
    "FrogMiddleCol",
    "FrogRearCol",
    "CheckIntervalCol",
    "GuardDistanceCol",
    "FirstFootStraightBackCol",
    "SecondFootStraightBackCol",
]

HORIZONTAL_RANGE_RULES = [
    {"column": column, "min": -9, "max": 9}
    for column in (
        "ExtraCol1",
        "ExtraCol2",
        "SlopeEndCol",
        "SwitchTipCol",
        "SwitchMiddleCol",
        "SwitchHeelCol",
        "LeadCurveFrontCol",
        "LeadCurveMiddleCol",
        "LeadCurveRearCol",
        "FrogFrontCol",
        "FrogRearCol",
        "FirstFootStraightBackCol",
        "SecondFootStraightBackCol",
    )
]

HORIZONTAL_REQUIRED_EMPTY_COLUMNS = ["FrogMiddleCol", "CheckIntervalCol", "GuardDistanceCol"]

# Lead-curve cross level on curved track must stay above -3 (blocking).
CURVED_LEAD_CURVE_MIN = -3
CURVED_LEAD_CURVE_COLUMNS = ["LeadCurveFrontCol", "LeadCurveMiddleCol", "LeadCurveRearCol"]

TRIANGLE_DEPRESSION_GROUPS = {
    "Group1TriangleDepression": [
        "ExtraCol1",
        "ExtraCol2",
        "SlopeEndCol",
        "SwitchTipCol",
        "SwitchMiddleCol",
        "SwitchHeelCol",
    ],
    "Group2TriangleDepression": ["LeadCurveFrontCol", "LeadCurveMiddleCol", "LeadCurveRearCol"],
    "Group3TriangleDepression": ["FrogFrontCol", "FrogMiddleCol", "FrogRearCol"],
}

CHECK_INTERVAL_MIN = 91
GUARD_DISTANCE_MAX = 48

OFFSET_RANGE_RULES = [{"column": f"offsetColumn{i}", "min": -4, "max": 4} for i in range(1, 10)]

SWITCH_RAIL_REDUCTION_MIN_RULES = [{"column": f"reducedValueOfSwitchRail{i}", "min": 0} for i in range(1, 4)]
SWITCH_RAIL_REDUCTION_MAX_RULES = [
    {"column": "spacingBetweentracks&GuardRails1", "max": 0},
    {"column": "spacingBetweentracks&GuardRails2", "max": 0},
    {"column": "spacingBetweentracks&WingrRails", "max": 0},
]

GUARD_RAIL_FLANGE_GROOVE_MIN_RULES = [
    {"column": "guardRailFlangeGroove1", "min": 80},
    {"column": "guardRailFlangeGroove2", "min": 65},
    {"column": "guardRailFlangeGroove3", "min": 45},
]


def _is_configurable(column_name: str, columns: Sequence[Column]) -> bool:
    column = next((c for c in columns if c.name == column_name), None)
    return column is not None and not column.hidden


class RuleConfigurator:
    """
    Populates a DataValidator with the rules of one logical table.

    Table-driven range/threshold rules are only registered for columns that
    are present and visible in the supplied metadata; this is how track-type
    specific visibility switches validation off for columns that do not apply.
    """

    @staticmethod
    def configure_rail_rules(
        validator: DataValidator,
        columns: Sequence[Column],
        reference_data: ReferenceData | None = None,
    ) -> None:
        """
        Configure the rail-gauge table.

        Args:
            validator: Validator to populate
            columns: Column metadata of the gauge table variant
            reference_data: Optional reference values; when given, each visible
                            column also gets the fatal "reading + reference < 1456" check
        """
        track_type: TrackType = "curved" if is_curved(list(columns)) else "straight"

        _add_range_and_type_rules(validator, columns, RAIL_RANGE_RULES)

        if reference_data is not None:
            for column_name in RAIL_REFERENCE_COLUMNS:
                if not _is_configurable(column_name, columns):
                    continue
                validator.add_column_rule(
                    column_name,
                    CustomRule(
                        f"{column_name}_sum_with_reference_less_than_{GAUGE_REFERENCE_LIMIT}",
                        column_name,
                        _reference_sum_check(column_name, reference_data, track_type),
                    ),
                )

        validator.add_column_rule(
            "CheckIntervalCol",
            GreaterThanOrEqualRule("CheckIntervalCol_comparison", "CheckIntervalCol", CHECK_INTERVAL_MIN),
        )
        validator.add_column_rule(
            "GuardDistanceCol",
            LessThanOrEqualRule("GuardDistanceCol_comparison", "GuardDistanceCol", GUARD_DISTANCE_MAX),
        )

    @staticmethod
    def configure_horizontal_rules(validator: DataValidator, columns: Sequence[Column]) -> None:
        """
        Configure the horizontal (cross level) table.

        Besides the -9..9 bounds, the frog middle point and the check
        interval/guard distance columns must be left empty, curved track
        gets blocking lower bounds on the lead curve, and three groups of
        measuring points are checked for triangle depression.
        """
        _add_range_and_type_rules(validator, columns, HORIZONTAL_RANGE_RULES)

        validator.add_column_rule(
            "CheckIntervalCol",
            GreaterThanOrEqualRule("CheckIntervalCol_great_than", "CheckIntervalCol", CHECK_INTERVAL_MIN),
        )
        validator.add_column_rule(
            "GuardDistanceCol",
            LessThanOrEqualRule("GuardDistanceCol_less_than", "GuardDistanceCol", GUARD_DISTANCE_MAX),
        )

        for column_name in HORIZONTAL_REQUIRED_EMPTY_COLUMNS:
            validator.add_column_rule(
                column_name,
                RequiredEmptyRule(f"{column_name}_required_empty", column_name),
            )

        if is_curved(list(columns)):
            for column_name in CURVED_LEAD_CURVE_COLUMNS:
                validator.add_column_rule(
                    column_name,
                    GreaterThanRule(f"{column_name}_great_than_fatal", column_name, CURVED_LEAD_CURVE_MIN),
                )

        for rule_name, group in TRIANGLE_DEPRESSION_GROUPS.items():
            validator.add_row_rule(TriangleDepressionRule(rule_name, group))

    @staticmethod
    def configure_offset_rules(validator: DataValidator, columns: Sequence[Column]) -> None:
        """Configure the offset table: every visible offset within -4..4 and numeric."""
        _add_range_and_type_rules(validator, columns, OFFSET_RANGE_RULES)

    @staticmethod
    def configure_switch_rail_reduced_rules(validator: DataValidator, columns: Sequence[Column]) -> None:
        """
        Configure the switch-rail reduction table (straight or curved).

        Reductions must not be negative; guard/wing rail spacings must not be positive.
        """
        for rule in SWITCH_RAIL_REDUCTION_MIN_RULES:
            column_name = rule["column"]
            if not _is_configurable(column_name, columns):
                continue
            validator.add_column_rule(
                column_name,
                GreaterThanOrEqualRule(f"{column_name}_range", column_name, rule["min"]),
            )
            validator.add_column_rule(column_name, TypeRule(f"{column_name}_type", column_name, "number"))

        for rule in SWITCH_RAIL_REDUCTION_MAX_RULES:
            column_name = rule["column"]
            if not _is_configurable(column_name, columns):
                continue
            validator.add_column_rule(
                column_name,
                LessThanOrEqualRule(f"{column_name}_range", column_name, rule["max"]),
            )
            validator.add_column_rule(column_name, TypeRule(f"{column_name}_type", column_name, "number"))

    @staticmethod
    def configure_guard_rail_flange_groove_rules(validator: DataValidator, columns: Sequence[Column]) -> None:
        """Configure the guard-rail flange groove table (straight or curved): minimum groove widths."""
        for rule in GUARD_RAIL_FLANGE_GROOVE_MIN_RULES:
            column_name = rule["column"]
            validator.add_column_rule(
                column_name,
                GreaterThanOrEqualRule(f"{column_name}_great_than", column_name, rule["min"]),
            )

    @classmethod
    def configure(
        cls,
        table: TableKind,
        validator: DataValidator,
        columns: Sequence[Column],
        reference_data: ReferenceData | None = None,
    ) -> None:
        """
        Configure a validator for a table kind.

        Raises:
            ValueError: If the table kind is unknown
        """
        configurators: dict[str, Callable[[], None]] = {
            RAIL_GAUGE: lambda: cls.configure_rail_rules(validator, columns, reference_data),
            HORIZONTAL: lambda: cls.configure_horizontal_rules(validator, columns),
            OFFSET: lambda: cls.configure_offset_rules(validator, columns),
            SWITCH_RAIL_REDUCTION: lambda: cls.configure_switch_rail_reduced_rules(validator, columns),
            GUARD_RAIL_FLANGE_GROOVE: lambda: cls.configure_guard_rail_flange_groove_rules(validator, columns),
        }

        configure_table = configurators.get(table)
        if configure_table is None:
            raise ValueError(f"Unknown table: {table}")

        before = validator.rule_count
        configure_table()
        added = validator.rule_count - before

        increment_counter(rules_configured_total, added, table=table)
        logger.debug("Configured table rules", extra={"table": table, "rule_count": added})

    @staticmethod
    def apply_rule_definitions(
        validator: DataValidator,
        rule_definitions: Sequence[dict[str, Any]],
        columns: Sequence[Column],
    ) -> None:
        """
        Register rules loaded by RuleConfigLoader.

        Column rules follow the same visibility filter as the built-in table
        rules; row rules are always registered. Disabled rules are skipped.

        Raises:
            ValueError: If a definition cannot be turned into a rule
        """
        for definition in rule_definitions:
            if not definition.get("enabled", True):
                continue

            column_name = definition.get("column_name")
            parameters = dict(definition.get("parameters") or {})

            if column_name is None:
                validator.add_row_rule(build_rule(definition["rule_type"], definition["rule_name"], **parameters))
                continue

            if not _is_configurable(column_name, columns):
                logger.debug(
                    "Skipping rule for hidden or unknown column",
                    extra={"rule_name": definition["rule_name"], "column": column_name},
                )
                continue

            rule: BaseRule = build_rule(
                definition["rule_type"],
                definition["rule_name"],
                column_name=column_name,
                **parameters,
            )
            validator.add_column_rule(column_name, rule)

    @classmethod
    def build_validator(
        cls,
        table: TableKind,
        columns: Sequence[Column],
        reference_data: ReferenceData | None = None,
        rule_definitions: Sequence[dict[str, Any]] | None = None,
    ) -> DataValidator:
        """
        Build a fresh, fully configured validator for one validation pass.

        Args:
            table: Table kind
            columns: Column metadata of the table variant
            reference_data: Optional reference values (rail gauge only)
            rule_definitions: Optional extra rules from RuleConfigLoader
        """
        validator = DataValidator(name=table)
        cls.configure(table, validator, columns, reference_data)
        if rule_definitions:
            cls.apply_rule_definitions(validator, rule_definitions, columns)
        return validator


def _add_range_and_type_rules(
    validator: DataValidator,
    columns: Sequence[Column],
    range_rules: Sequence[dict[str, Any]],
) -> None:
    for rule in range_rules:
        column_name = rule["column"]
        if not _is_configurable(column_name, columns):
            continue

        validator.add_column_rule(
            column_name,
            RangeRule(f"{column_name}_range", column_name, rule["min"], rule["max"]),
        )
        validator.add_column_rule(column_name, TypeRule(f"{column_name}_type", column_name, "number"))


def _reference_sum_check(
    column_name: str,
    reference_data: ReferenceData,
    track_type: TrackType,
) -> Callable[[Any, Any, int], ValidationError | None]:
    """Predicate for the blocking "reading + reference < 1456" gauge check."""

    def check(value: Any, row: Any, row_index: int) -> ValidationError | None:
        # Empty or non-numeric readings are left to the TypeRule.
        if is_empty(value):
            return None
        reading = to_number(value)
        if math.isnan(reading):
            return None

        dataset_id = (row or {}).get(DATASET_ID_KEY) or DEFAULT_DATASET_ID
        reference_raw = reference_data.get_fixed_value(dataset_id, column_name, track_type=track_type)
        if is_empty(reference_raw):
            return None
        reference = to_number(reference_raw)
        if math.isnan(reference):
            return None

        total = reading + reference
        if total >= GAUGE_REFERENCE_LIMIT:
            return ValidationError(
                column_names=(column_name,),
                row_index=row_index,
                rule_name=f"{column_name}_sum_with_reference_less_than_{GAUGE_REFERENCE_LIMIT}_fatal",
                message=(
                    f"current value ({format_number(reading)}) plus reference value "
                    f"({format_number(reference)}) must be less than {GAUGE_REFERENCE_LIMIT}, "
                    f"actual: {format_number(total)}"
                ),
            )
        return None

    return check
