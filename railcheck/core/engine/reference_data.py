"""
Reference data management.

Loads the fixed reference values (e.g. nominal gauge per measuring point)
from YAML files and resolves them per dataset, track type and switch-rail
reduction mode.
"""

import os
from pathlib import Path

import yaml
from pydantic import ValidationError as SchemaError

from railcheck.core.models import FixedValue, ReferenceDataConfig, ReferenceDataSet, TrackType
from railcheck.core.tables import get_all_column_names, get_column_names_by_track_type

REFERENCE_DATA_ENV_VAR = "RAILCHECK_REFERENCE_DATA"


class ReferenceData:
    """
    Lookup over a parsed reference data document.

    Expected YAML format:
    ```yaml
    version: 1
    datasets:
      - id: default
        name: Standard gauge 1435
        is_default: true
        columns:
          SwitchTipCol: 1435
        track_types:
          curved:
            columns:
              LeadCurveMiddleCol: 1441
            switch_rail_reduction_types:
              sharp:
                columns:
                  reducedValueOfSwitchRail1: 23
        switch_rail_reduction_types:
          blunt:
            columns:
              reducedValueOfSwitchRail1: 20
    ```
    """

    def __init__(self, config: ReferenceDataConfig):
        self.config = config

    def list_datasets(self) -> list[ReferenceDataSet]:
        return list(self.config.datasets)

    def get_dataset(self, dataset_id: str) -> ReferenceDataSet | None:
        return next((d for d in self.config.datasets if d.id == dataset_id), None)

    def get_fixed_value(
        self,
        dataset_id: str,
        column_name: str,
        track_type: TrackType | None = None,
        mode: str | None = None,
    ) -> FixedValue | None:
        """
        Resolve the reference value of a column.

        Lookup order: track type + mode, mode only, track type only, then the
        dataset-wide columns.

        Returns:
            The reference value, or None if the dataset or column is unknown
        """
        dataset = self.get_dataset(dataset_id)
        if dataset is None:
            return None

        variant = dataset.track_types.get(track_type) if track_type else None

        if variant and mode and mode in variant.switch_rail_reduction_types:
            columns = variant.switch_rail_reduction_types[mode].columns
            if column_name in columns:
                return columns[column_name]

        if mode and mode in dataset.switch_rail_reduction_types:
            columns = dataset.switch_rail_reduction_types[mode].columns
            if column_name in columns:
                return columns[column_name]

        if variant and column_name in variant.columns:
            return variant.columns[column_name]

        return dataset.columns.get(column_name)

    def validate_dataset(self, dataset_id: str) -> tuple[list[str], list[str]]:
        """
        Check a dataset's columns against the known column tables.

        All variants and modes are merged before the check.

        Returns:
            (invalid_columns, missing_columns): names the tables do not know,
            and known names the dataset does not cover
        """
        known = get_all_column_names()
        dataset = self.get_dataset(dataset_id)
        if dataset is None:
            return [], known

        covered: dict[str, FixedValue] = dict(dataset.columns)
        for mode in dataset.switch_rail_reduction_types.values():
            covered.update(mode.columns)
        for variant in dataset.track_types.values():
            covered.update(variant.columns)
            for mode in variant.switch_rail_reduction_types.values():
                covered.update(mode.columns)

        return _diff_columns(covered, known)

    def validate_variant(self, dataset_id: str, track_type: TrackType) -> tuple[list[str], list[str]]:
        """Like validate_dataset(), restricted to one track type's own values."""
        known = get_column_names_by_track_type(track_type)
        dataset = self.get_dataset(dataset_id)
        if dataset is None:
            return [], known

        covered: dict[str, FixedValue] = {}
        variant = dataset.track_types.get(track_type)
        if variant:
            covered.update(variant.columns)
            for mode in variant.switch_rail_reduction_types.values():
                covered.update(mode.columns)

        return _diff_columns(covered, known)


def _diff_columns(covered: dict[str, FixedValue], known: list[str]) -> tuple[list[str], list[str]]:
    known_set = set(known)
    invalid = [name for name in covered if name not in known_set]
    missing = [name for name in known if name not in covered]
    return invalid, missing


class ReferenceDataLoader:
    """
    Loads reference data from a YAML file.
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the reference data loader.

        Args:
            config_path: Path to the YAML file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Reference data file not found: {config_path}")

    def load(self) -> ReferenceData:
        """
        Load and parse the reference data file.

        Raises:
            ValueError: If the file is empty, has no 'datasets' section or
                        does not match the expected structure
        """
        with open(self.config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)

        if not raw or "datasets" not in raw:
            raise ValueError("Reference data file must contain 'datasets' section")

        try:
            config = ReferenceDataConfig.model_validate(raw)
        except SchemaError as e:
            raise ValueError(f"Invalid reference data file '{self.config_path}': {e}") from e

        return ReferenceData(config)


def load_reference_data(path: str | Path | None = None) -> ReferenceData | None:
    """
    Load reference data from a path or from $RAILCHECK_REFERENCE_DATA.

    Returns:
        ReferenceData, or None when neither a path nor the variable is set
    """
    path = path or os.getenv(REFERENCE_DATA_ENV_VAR)
    if not path:
        return None
    return ReferenceDataLoader(path).load()
