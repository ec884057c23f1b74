"""Habitability rules engine

Public surface: `evaluate_property(input)` and `RULESET_VERSION`.
"""

from app.services.rules.catalog import RULES, RULESET_VERSION, Rule
from app.services.rules.engine import HabitabilityEvaluator, evaluate_property

__all__ = [
    "RULES",
    "RULESET_VERSION",
    "Rule",
    "HabitabilityEvaluator",
    "evaluate_property",
]
