"""
Validation Engine Package

Conditional validator and rule set loading.
"""

from .conditional import ConditionalValidator
from .rules import ValidatorRule, RuleSet, build_rule, build_rules, load_rules, default_rules_path

__all__ = [
    "ConditionalValidator",
    "ValidatorRule",
    "RuleSet",
    "build_rule",
    "build_rules",
    "load_rules",
    "default_rules_path",
]
