"""Habitability evaluation result models

RuleOutcome: what a single rule returns.
RuleResult: a RuleOutcome joined with rule metadata and used evidence.
EvaluationResult: the aggregated snapshot of one evaluation run.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RuleSeverity(str, Enum):
    """Per-rule / overall verdict"""

    PASS = "pass"
    RISK = "risk"  # soft concern
    FAIL = "fail"  # hard violation
    UNKNOWN = "unknown"  # insufficient evidence to judge


# Aggregation order: worst wins. Adding a level is one line here.
SEVERITY_RANK: dict[RuleSeverity, int] = {
    RuleSeverity.PASS: 0,
    RuleSeverity.UNKNOWN: 1,
    RuleSeverity.RISK: 2,
    RuleSeverity.FAIL: 3,
}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RuleOutcome(BaseModel):
    """Return value of Rule.evaluate (confidence out of range raises)"""

    model_config = ConfigDict(frozen=True)

    severity: RuleSeverity
    message: str
    explanation: str
    fix_guidance: str | None = None
    confidence: int = Field(ge=0, le=100)


class RuleResult(_CamelModel):
    """Result of one rule within an evaluation"""

    rule_id: str
    rule_name: str
    severity: RuleSeverity
    message: str
    explanation: str
    fix_guidance: str | None = None
    evidence_used: list[str] = Field(default_factory=list)
    confidence: int = Field(ge=0, le=100)


class EvaluationResult(_CamelModel):
    """Full output of one evaluation run"""

    overall_status: RuleSeverity
    confidence: int = Field(ge=0, le=100)
    rules: list[RuleResult] = Field(default_factory=list)
    missing_evidence: list[str] = Field(default_factory=list)
    fix_plan: list[str] = Field(default_factory=list)
    timestamp: datetime
    ruleset_version: str

    def to_wire(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def count(self, severity: RuleSeverity) -> int:
        return sum(1 for r in self.rules if r.severity == severity)
