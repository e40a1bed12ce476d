"""Rule catalogue and the rule engine."""

from .base import RULES, Rule, RuleEngine, create_default_engine, register

__all__ = [
    "RULES",
    "Rule",
    "RuleEngine",
    "create_default_engine",
    "register",
]
