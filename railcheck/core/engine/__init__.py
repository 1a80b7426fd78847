"""
Validation engine: the data validator, per-table rule configuration and
configuration files (rule definitions, reference data).
"""

from .data_validator import DataValidator
from .reference_data import ReferenceData, ReferenceDataLoader, load_reference_data
from .rule_config import RuleConfigLoader
from .rule_configurator import RuleConfigurator

__all__ = [
    "DataValidator",
    "RuleConfigurator",
    "RuleConfigLoader",
    "ReferenceData",
    "ReferenceDataLoader",
    "load_reference_data",
]
