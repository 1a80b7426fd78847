"""
Unit tests for reference data and rule definition files.
"""

import pytest

from railcheck.core.engine import ReferenceDataLoader, RuleConfigLoader, load_reference_data
from railcheck.core.engine.reference_data import REFERENCE_DATA_ENV_VAR
from railcheck.core.tables import get_all_column_names, get_column_names_by_track_type


class TestReferenceDataLoader:
    """Tests for ReferenceDataLoader"""

    def test_load(self, reference_data):
        """Test loading the fixture file"""
        datasets = reference_data.list_datasets()

        assert [d.id for d in datasets] == ["default", "widened"]
        assert datasets[0].is_default is True
        assert reference_data.get_dataset("widened").name == "Widened lead curve"
        assert reference_data.get_dataset("missing") is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ReferenceDataLoader(tmp_path / "absent.yaml")

    def test_missing_datasets_section(self, tmp_path):
        path = tmp_path / "reference.yaml"
        path.write_text("version: 1\n")

        with pytest.raises(ValueError, match="datasets"):
            ReferenceDataLoader(path).load()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "reference.yaml"
        path.write_text("")

        with pytest.raises(ValueError):
            ReferenceDataLoader(path).load()

    def test_malformed_dataset(self, tmp_path):
        """Test that a dataset without an id is reported as ValueError"""
        path = tmp_path / "reference.yaml"
        path.write_text("datasets:\n  - name: No id\n")

        with pytest.raises(ValueError, match="Invalid reference data file"):
            ReferenceDataLoader(path).load()


class TestLoadReferenceData:
    """Tests for load_reference_data()"""

    def test_explicit_path(self, reference_data_path):
        assert load_reference_data(reference_data_path) is not None

    def test_environment_variable(self, reference_data_path, monkeypatch):
        monkeypatch.setenv(REFERENCE_DATA_ENV_VAR, reference_data_path)

        reference_data = load_reference_data()

        assert reference_data is not None
        assert reference_data.get_dataset("default") is not None

    def test_nothing_configured(self, monkeypatch):
        monkeypatch.delenv(REFERENCE_DATA_ENV_VAR, raising=False)
        assert load_reference_data() is None


class TestGetFixedValue:
    """Tests for ReferenceData.get_fixed_value() lookup precedence"""

    def test_dataset_wide_value(self, reference_data):
        assert reference_data.get_fixed_value("default", "SwitchTipCol") == 1435

    def test_track_type_overrides_dataset(self, reference_data):
        assert reference_data.get_fixed_value("default", "LeadCurveMiddleCol", track_type="curved") == 1441
        assert reference_data.get_fixed_value("default", "LeadCurveMiddleCol", track_type="straight") == 1435

    def test_track_type_mode_wins(self, reference_data):
        value = reference_data.get_fixed_value(
            "default", "reducedValueOfSwitchRail1", track_type="curved", mode="sharp"
        )
        assert value == 23

    def test_mode_without_track_type(self, reference_data):
        assert reference_data.get_fixed_value("default", "reducedValueOfSwitchRail1", mode="blunt") == 20
        assert (
            reference_data.get_fixed_value(
                "default", "reducedValueOfSwitchRail2", track_type="curved", mode="blunt"
            )
            == 12
        )

    def test_unknown_mode_falls_back(self, reference_data):
        assert reference_data.get_fixed_value("default", "SwitchTipCol", mode="unknown") == 1435

    def test_unknown_column_or_dataset(self, reference_data):
        assert reference_data.get_fixed_value("default", "NoSuchCol") is None
        assert reference_data.get_fixed_value("missing", "SwitchTipCol") is None

    def test_string_values_kept(self, reference_data):
        assert reference_data.get_fixed_value("widened", "SwitchTipCol") == "1450"


class TestDatasetValidation:
    """Tests for validate_dataset() and validate_variant()"""

    def test_validate_dataset(self, reference_data):
        invalid, missing = reference_data.validate_dataset("widened")

        assert invalid == ["UnknownCol"]
        assert "SwitchTipCol" not in missing
        assert len(missing) == len(get_all_column_names()) - 1

    def test_merges_variants_and_modes(self, reference_data):
        invalid, missing = reference_data.validate_dataset("default")

        assert invalid == []
        for covered in ("SwitchTipCol", "LeadCurveMiddleCol", "reducedValueOfSwitchRail1", "reducedValueOfSwitchRail2"):
            assert covered not in missing

    def test_validate_variant(self, reference_data):
        invalid, missing = reference_data.validate_variant("default", "curved")

        assert invalid == []
        assert "LeadCurveMiddleCol" not in missing
        assert "reducedValueOfSwitchRail1" not in missing
        # dataset-wide values do not count for a variant
        assert "SwitchHeelCol" in missing

    def test_unknown_dataset(self, reference_data):
        invalid, missing = reference_data.validate_variant("missing", "straight")

        assert invalid == []
        assert missing == get_column_names_by_track_type("straight")


class TestRuleConfigLoader:
    """Tests for RuleConfigLoader"""

    def test_load_rules(self, extra_rules_path):
        rules = RuleConfigLoader(extra_rules_path).load_rules()

        assert [r["rule_name"] for r in rules] == [
            "offsetColumn1_not_placeholder",
            "offsetColumn9_required",
            "offset_ends_sum",
        ]
        assert rules[0]["column_name"] == "offsetColumn1"
        assert rules[0]["parameters"] == {"forbidden_value": "-"}
        assert rules[1]["enabled"] is False
        assert rules[2]["column_name"] is None
        assert rules[2]["rule_type"] == "sum_range"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            RuleConfigLoader(tmp_path / "absent.yaml")

    def test_default_rule_name(self, tmp_path):
        path = tmp_path / "rules.yaml"
        path.write_text("rules:\n  SwitchTipCol:\n    - type: required\n")

        rules = RuleConfigLoader(path).load_rules()

        assert rules[0]["rule_name"] == "SwitchTipCol_required_0"
        assert rules[0]["parameters"] == {}
        assert rules[0]["enabled"] is True

    @pytest.mark.parametrize(
        "content, message",
        [
            ("version: 1\n", "must contain"),
            ("rules:\n  A:\n    - name: no_type\n", "missing 'type'"),
            ("rules:\n  A:\n    - type: regex\n", "Unknown rule type"),
            ("rules:\n  A:\n    - type: custom\n", "cannot be defined"),
            ("rules:\n  A:\n    type: required\n", "must be a list"),
            ("row_rules:\n  type: sum_range\n", "must be a list"),
            ("rules:\n  A:\n    - type: required\n      params: [1]\n", "must be a mapping"),
        ],
    )
    def test_invalid_files(self, tmp_path, content, message):
        path = tmp_path / "rules.yaml"
        path.write_text(content)

        with pytest.raises(ValueError, match=message):
            RuleConfigLoader(path).load_rules()
