"""
Report-side helpers consuming validation errors.
"""

from .annotations import ErrorAnnotations, collect_error_info, is_fatal_rule_name

__all__ = [
    "ErrorAnnotations",
    "collect_error_info",
    "is_fatal_rule_name",
]
