"""FastAPI application entrypoint

Run: uvicorn app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.accounts import router as accounts_router
from app.api.cases import router as cases_router
from app.api.evaluate import router as evaluate_router
from app.api.evidence import router as evidence_router
from app.api.templates import router as templates_router
from app.config import settings
from app.database import init_db
from app.services.rules import RULESET_VERSION

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Ruleset %s loaded", RULESET_VERSION)
    yield


app = FastAPI(
    title="Cèdula d'habitabilitat pre-validation API",
    version="0.2.0",
    description="Pre-validation of Catalan habitability requirements + case tracking",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "PATCH", "DELETE"],
    allow_headers=["*"],
    expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset"],
)

app.include_router(evaluate_router)
app.include_router(cases_router)
app.include_router(templates_router)
app.include_router(evidence_router)
app.include_router(accounts_router)


@app.get("/health")
def health_check():
    """Health check"""
    return {"status": "ok", "rulesetVersion": RULESET_VERSION}
