"""Habitability evaluator

Runs the rule catalog against one PropertyInput and folds the outcomes into
an EvaluationResult.

Flow:
  1. every rule in catalog order → RuleResult (+ evidence actually used)
  2. overall status = worst severity (FAIL > RISK > UNKNOWN > PASS)
  3. confidence = mean of rule confidences, rounded half-up, clamped 0~100
  4. missing evidence = absent evidence fields, first-seen order, no duplicates
  5. fix plan = guidance (or message) of FAIL/RISK rules, catalog order

Pure and synchronous. Persistence and rendering are the caller's business.
Exceptions raised by a rule are catalog bugs and propagate.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from datetime import datetime, timezone

from app.models.evaluation import (
    SEVERITY_RANK,
    EvaluationResult,
    RuleResult,
    RuleSeverity,
)
from app.models.property import PropertyInput
from app.services.rules.catalog import RULES, RULESET_VERSION, Rule

logger = logging.getLogger(__name__)

_FIX_PLAN_SEVERITIES = frozenset({RuleSeverity.FAIL, RuleSeverity.RISK})


def aggregate_severity(severities: Sequence[RuleSeverity]) -> RuleSeverity:
    """Worst severity by rank; empty → PASS"""
    return max(severities, key=SEVERITY_RANK.__getitem__, default=RuleSeverity.PASS)


def aggregate_confidence(confidences: Sequence[int]) -> int:
    """Mean rounded half-up and clamped to 0~100; empty → 0"""
    if not confidences:
        return 0
    mean = sum(confidences) / len(confidences)
    return max(0, min(100, math.floor(mean + 0.5)))


class HabitabilityEvaluator:
    """Rule catalog runner"""

    def __init__(
        self,
        rules: Sequence[Rule] = RULES,
        ruleset_version: str = RULESET_VERSION,
    ) -> None:
        self._rules = tuple(rules)
        self._version = ruleset_version

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def ruleset_version(self) -> str:
        return self._version

    def evaluate(self, prop: PropertyInput) -> EvaluationResult:
        """Evaluate one property

        Args:
            prop: property description (already validated by the caller)

        Returns:
            EvaluationResult, a fresh object per call
        """
        results = [self._run_rule(rule, prop) for rule in self._rules]

        overall = aggregate_severity([r.severity for r in results])
        confidence = aggregate_confidence([r.confidence for r in results])

        missing: list[str] = []
        for rule in self._rules:
            for field in rule.evidence_needed:
                if not prop.is_present(field) and field not in missing:
                    missing.append(field)

        fix_plan = [
            r.fix_guidance or r.message
            for r in results
            if r.severity in _FIX_PLAN_SEVERITIES
        ]
        fix_plan = [item for item in fix_plan if item]

        logger.debug(
            "evaluation: status=%s confidence=%d rules=%d missing=%d version=%s",
            overall.value, confidence, len(results), len(missing), self._version,
        )

        return EvaluationResult(
            overall_status=overall,
            confidence=confidence,
            rules=results,
            missing_evidence=missing,
            fix_plan=fix_plan,
            timestamp=datetime.now(timezone.utc),
            ruleset_version=self._version,
        )

    @staticmethod
    def _run_rule(rule: Rule, prop: PropertyInput) -> RuleResult:
        outcome = rule.evaluate(prop)
        return RuleResult(
            rule_id=rule.id,
            rule_name=rule.name,
            severity=outcome.severity,
            message=outcome.message,
            explanation=outcome.explanation,
            fix_guidance=outcome.fix_guidance,
            evidence_used=[f for f in rule.evidence_needed if prop.is_present(f)],
            confidence=outcome.confidence,
        )


_default_evaluator = HabitabilityEvaluator()


def evaluate_property(prop: PropertyInput) -> EvaluationResult:
    """Evaluate with the current catalog (RULESET_VERSION)"""
    return _default_evaluator.evaluate(prop)
