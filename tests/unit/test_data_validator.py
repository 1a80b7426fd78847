"""
Unit tests for DataValidator.
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from railcheck.core.engine import DataValidator
from railcheck.core.models import ValidationError
from railcheck.core.rules import (
    CustomRule,
    RangeRule,
    RequiredEmptyRule,
    RequiredRule,
    SumRangeRule,
    TriangleDepressionRule,
    TypeRule,
)
from railcheck.observability.metrics import REGISTRY


def _sample(name: str, labels: dict) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


@pytest.fixture
def validator() -> DataValidator:
    """Validator with two columns and one row rule"""
    validator = DataValidator(name="unit")
    validator.add_column_rule("a", RangeRule("a_range", "a", 0, 10))
    validator.add_column_rule("a", TypeRule("a_type", "a", "number"))
    validator.add_column_rule("b", RequiredRule("b_required", "b"))
    validator.add_row_rule(SumRangeRule("a_b_sum", "a", "b", 0, 15))
    return validator


class TestRegistration:
    """Tests for adding rules"""

    def test_empty_validator(self):
        validator = DataValidator()
        assert validator.name == "default"
        assert validator.rule_count == 0
        assert validator.validate_all([{"a": 1}]) == []

    def test_rules_keep_registration_order(self, validator):
        assert list(validator.column_rules) == ["a", "b"]
        assert [r.rule_name for r in validator.column_rules["a"]] == ["a_range", "a_type"]
        assert [r.rule_name for r in validator.row_rules] == ["a_b_sum"]
        assert validator.rule_count == 4

    def test_views_are_read_only(self, validator):
        with pytest.raises(TypeError):
            validator.column_rules["c"] = []

        assert isinstance(validator.row_rules, tuple)

    def test_repr(self, validator):
        assert repr(validator) == "DataValidator(name=unit, rules=4)"


class TestValidateRow:
    """Tests for validate_row()"""

    def test_valid_row(self, validator):
        assert validator.validate_row({"a": "5", "b": 5}, 0) == []

    def test_column_errors_precede_row_errors(self, validator):
        errors = validator.validate_row({"a": 12, "b": 9}, 7)

        assert [e.rule_name for e in errors] == ["a_range", "a_b_sum"]
        assert all(e.row_index == 7 for e in errors)

    def test_no_short_circuit(self, validator):
        errors = validator.validate_row({"a": "abc"}, 0)

        # a_range and a_type both fire on the same value, b_required fires too,
        # the sum rule is skipped because b is absent
        assert [e.rule_name for e in errors] == ["a_range", "a_type", "b_required"]

    def test_missing_column_passed_as_none(self):
        seen = []

        def record(value, row, row_index):
            seen.append(value)
            return None

        validator = DataValidator()
        validator.add_column_rule("missing", CustomRule("probe", "missing", record))
        validator.validate_row({"other": 1}, 0)

        assert seen == [None]

    def test_row_rules_receive_none_value(self):
        seen = []

        def record(value, row, row_index):
            seen.append((value, dict(row)))
            return None

        validator = DataValidator()
        validator.add_row_rule(CustomRule("probe", "a", record))
        validator.validate_row({"a": 3}, 0)

        assert seen == [(None, {"a": 3})]


class TestValidateAll:
    """Tests for validate_all() and run()"""

    def test_errors_ordered_by_row(self, validator):
        rows = [{"a": 11, "b": 1}, {"a": 1, "b": 1}, {"a": 1}]
        errors = validator.validate_all(rows)

        assert [(e.row_index, e.rule_name) for e in errors] == [
            (0, "a_range"),
            (2, "b_required"),
        ]

    def test_errors_kept_for_statistics(self, validator):
        validator.validate_all([{"a": 11, "b": 1}])
        assert len(validator.errors) == 1

        validator.validate_all([{"a": 1, "b": 1}])
        assert validator.errors == ()
        assert validator.get_error_statistics().total == 0

    def test_idempotent(self, validator):
        rows = [{"a": 11, "b": ""}, {"a": "x", "b": 1}]

        first = validator.validate_all(rows)
        second = validator.validate_all(rows)

        assert first == second
        assert len(first) == 5

    @given(
        st.lists(
            st.fixed_dictionaries(
                {},
                optional={
                    "a": st.one_of(st.none(), st.integers(-20, 20), st.sampled_from(["", "x", "5", "12.5"])),
                    "b": st.one_of(st.none(), st.integers(-20, 20), st.just("")),
                },
            ),
            max_size=5,
        )
    )
    def test_property_repeated_runs_agree(self, rows):
        """Property test: two runs over the same rows give equal errors and statistics"""
        validator = DataValidator(name="unit")
        validator.add_column_rule("a", RangeRule("a_range", "a", 0, 10))
        validator.add_column_rule("a", TypeRule("a_type", "a", "number"))
        validator.add_column_rule("b", RequiredRule("b_required", "b"))
        validator.add_row_rule(SumRangeRule("a_b_sum", "a", "b", 0, 15))

        first = validator.validate_all(rows)
        first_stats = validator.get_error_statistics()
        second = validator.validate_all(rows)

        assert first == second
        assert first_stats == validator.get_error_statistics()
        assert [e.row_index for e in first] == sorted(e.row_index for e in first)

    def test_range_and_required_empty_on_empty_value(self):
        validator = DataValidator()
        validator.add_column_rule("c", RangeRule("c_range", "c", -9, 9))
        validator.add_column_rule("c", RequiredEmptyRule("c_required_empty", "c"))

        assert validator.validate_all([{"c": ""}, {}]) == []

    def test_returned_list_is_a_copy(self, validator):
        errors = validator.validate_all([{"a": 11, "b": 1}])
        errors.clear()

        assert len(validator.errors) == 1

    def test_rule_exceptions_propagate(self):
        def broken(value, row, row_index):
            raise KeyError("boom")

        validator = DataValidator()
        validator.add_column_rule("a", CustomRule("broken", "a", broken))

        with pytest.raises(KeyError):
            validator.validate_all([{"a": 1}])

    def test_failed_run_clears_previous_errors(self):
        """Test that a rule raising mid-run leaves no errors from the earlier run"""

        def broken(value, row, row_index):
            if value == "x":
                raise RuntimeError("bug in predicate")
            return None

        validator = DataValidator()
        validator.add_column_rule("a", RangeRule("a_range", "a", 0, 1))
        assert len(validator.validate_all([{"a": 5}])) == 1

        validator.add_column_rule("a", CustomRule("broken", "a", broken))
        with pytest.raises(RuntimeError):
            validator.validate_all([{"a": "x"}])

        assert validator.errors == ()
        assert validator.get_error_statistics().total == 0

    def test_run_returns_outcome(self, validator):
        outcome = validator.run([{"a": 11, "b": 1}, {"a": 1, "b": 1}])

        assert not outcome.passed
        assert outcome.errors == validator.get_error_statistics().by_row["0"].errors
        assert outcome.statistics.total == 1

    def test_run_passed(self, validator):
        assert validator.run([{"a": 1, "b": 1}]).passed


class TestErrorStatistics:
    """Tests for get_error_statistics()"""

    def test_statistics_before_any_run(self, validator):
        stats = validator.get_error_statistics()
        assert stats.total == 0
        assert stats.by_column == {}

    def test_same_rule_name_on_different_columns_kept_apart(self):
        validator = DataValidator()
        validator.add_column_rule("a", RangeRule("range", "a", 0, 1))
        validator.add_column_rule("b", RangeRule("range", "b", 0, 1))

        validator.validate_all([{"a": 5, "b": 5}, {"a": 5, "b": 0}])
        stats = validator.get_error_statistics()

        assert stats.by_rule["range_a"].count == 2
        assert stats.by_rule["range_b"].count == 1
        assert stats.by_column["a"].count == 2
        assert stats.by_row["0"].count == 2
        assert stats.by_row["1"].count == 1
        assert stats.total == 3

    def test_pairwise_error_counts_for_both_columns(self):
        validator = DataValidator()
        validator.add_row_rule(
            TriangleDepressionRule("Group2TriangleDepression", ["front", "middle", "rear"])
        )

        validator.validate_all([{"front": 0, "middle": 3, "rear": 12}])
        stats = validator.get_error_statistics()

        assert stats.total == 1
        assert stats.by_column["front"].count == 1
        assert stats.by_column["rear"].count == 1
        assert "middle" not in stats.by_column
        assert list(stats.by_rule) == ["Group2TriangleDepression_front_rear"]

    def test_by_column_lists_errors(self):
        validator = DataValidator()
        validator.add_column_rule("a", RequiredRule("a_required", "a"))
        validator.add_column_rule("a", TypeRule("a_type", "a", "number"))

        validator.validate_all([{}])
        bucket = validator.get_error_statistics().by_column["a"]

        assert bucket.count == 2
        assert [e.rule_name for e in bucket.errors] == ["a_required", "a_type"]
        assert all(isinstance(e, ValidationError) for e in bucket.errors)


class TestValidatorMetrics:
    """Tests for the metrics recorded by validate_all()"""

    def test_rows_and_errors_counted(self):
        validator = DataValidator(name="metrics_probe")
        validator.add_column_rule("a", RangeRule("a_range", "a", 0, 1))

        rows_before = _sample("railcheck_rows_validated_total", {"validator": "metrics_probe"})
        errors_before = _sample(
            "railcheck_validation_errors_total",
            {"validator": "metrics_probe", "rule_name": "a_range"},
        )
        runs_before = _sample(
            "railcheck_validation_duration_seconds_count", {"validator": "metrics_probe"}
        )

        validator.validate_all([{"a": 5}, {"a": 0}, {"a": 7}])

        assert _sample("railcheck_rows_validated_total", {"validator": "metrics_probe"}) == rows_before + 3
        assert (
            _sample(
                "railcheck_validation_errors_total",
                {"validator": "metrics_probe", "rule_name": "a_range"},
            )
            == errors_before + 2
        )
        assert (
            _sample("railcheck_validation_duration_seconds_count", {"validator": "metrics_probe"})
            == runs_before + 1
        )
