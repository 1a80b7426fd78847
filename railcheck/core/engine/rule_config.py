"""
Rule definition files.

Loads additional column and row rules from YAML so that site-specific
tolerances can be layered on top of the built-in table rules.
"""

from pathlib import Path
from typing import Any

import yaml

from railcheck.core.rules import RULE_REGISTRY

# Predicates cannot be expressed in a data file.
UNSUPPORTED_FILE_RULE_TYPES = {"custom"}


class RuleConfigLoader:
    """
    Loads rule definitions from YAML configuration files.

    Expected YAML format:
    ```yaml
    rules:
      CheckIntervalCol:
        - type: less_than_or_equal
          name: CheckIntervalCol_less_than_or_equal
          params:
            max_value: 48

    row_rules:
      - type: sum_range
        name: CheckInterval_GuardDistance_sum
        params:
          column_a: CheckIntervalCol
          column_b: GuardDistanceCol
          min_value: 40
          max_value: 60
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the rule config loader.

        Args:
            config_path: Path to the YAML configuration file
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Rule configuration file not found: {config_path}")

    def load_rules(self) -> list[dict[str, Any]]:
        """
        Load and parse rule definitions from the YAML file.

        Returns:
            List of rule dictionaries with rule_name, rule_type, column_name
            (None for row rules), parameters and enabled

        Raises:
            ValueError: If YAML is invalid or missing required fields
        """
        with open(self.config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)

        if not config or ("rules" not in config and "row_rules" not in config):
            raise ValueError("Configuration file must contain 'rules' or 'row_rules' section")

        rules = []

        for column_name, column_rule_list in (config.get("rules") or {}).items():
            if not isinstance(column_rule_list, list):
                raise ValueError(f"Rules for column '{column_name}' must be a list")

            for idx, rule_def in enumerate(column_rule_list):
                rules.append(self._parse_rule(column_name, rule_def, idx))

        row_rule_list = config.get("row_rules") or []
        if not isinstance(row_rule_list, list):
            raise ValueError("'row_rules' must be a list")

        for idx, rule_def in enumerate(row_rule_list):
            rules.append(self._parse_rule(None, rule_def, idx))

        return rules

    def _parse_rule(self, column_name: str | None, rule_def: dict[str, Any], idx: int) -> dict[str, Any]:
        """
        Parse a single rule definition.

        Args:
            column_name: The column this rule applies to (None for row rules)
            rule_def: The rule definition from YAML
            idx: Index of this rule in its list (for naming)

        Raises:
            ValueError: If rule definition is invalid
        """
        owner = f"column '{column_name}'" if column_name else "row rules"

        if not isinstance(rule_def, dict) or "type" not in rule_def:
            raise ValueError(f"Rule for {owner} is missing 'type'")

        rule_type = rule_def["type"]
        if rule_type not in RULE_REGISTRY:
            raise ValueError(f"Unknown rule type '{rule_type}' for {owner}")
        if rule_type in UNSUPPORTED_FILE_RULE_TYPES:
            raise ValueError(f"Rule type '{rule_type}' cannot be defined in a configuration file")

        rule_name = rule_def.get("name", f"{column_name or 'row'}_{rule_type}_{idx}")

        parameters = rule_def.get("params", rule_def.get("parameters")) or {}
        if not isinstance(parameters, dict):
            raise ValueError(f"Parameters of rule '{rule_name}' must be a mapping")

        return {
            "rule_name": rule_name,
            "rule_type": rule_type,
            "column_name": column_name,
            "parameters": parameters,
            "enabled": rule_def.get("enabled", True),
        }
