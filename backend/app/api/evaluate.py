"""Stateless evaluation API

Endpoints:
- GET  /api/ruleset   — catalog version + rule metadata
- POST /api/evaluate  — evaluate a property without storing it
"""

import logging

from fastapi import APIRouter, Depends

from app.api.dependencies import get_evaluator, rate_limit
from app.api.schemas import PropertyPayload, RuleInfo, RulesetResponse
from app.models.evaluation import EvaluationResult
from app.services.rules import HabitabilityEvaluator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["evaluation"])


@router.get("/ruleset", response_model=RulesetResponse)
def get_ruleset(evaluator: HabitabilityEvaluator = Depends(get_evaluator)):
    """Rules in evaluation order"""
    return RulesetResponse(
        version=evaluator.ruleset_version,
        rules=[
            RuleInfo(
                id=rule.id,
                name=rule.name,
                description=rule.description,
                evidence_needed=list(rule.evidence_needed),
            )
            for rule in evaluator.rules
        ],
    )


@router.post(
    "/evaluate",
    response_model=EvaluationResult,
    dependencies=[Depends(rate_limit("evaluate"))],
)
def evaluate(
    prop: PropertyPayload,
    evaluator: HabitabilityEvaluator = Depends(get_evaluator),
):
    """Evaluate one property (nothing is persisted)"""
    result = evaluator.evaluate(prop)
    logger.debug("Evaluated %s: %s (%d%%)", prop.municipality, result.overall_status.value, result.confidence)
    return result
