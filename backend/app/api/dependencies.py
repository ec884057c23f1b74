"""FastAPI dependency injection

Service singletons, DB session, caller identity and rate limiting.
Everything works without a .env file (defaults, tests).
"""

from collections.abc import Callable, Generator
from datetime import datetime, timezone
from functools import lru_cache

from fastapi import Depends, HTTPException, Request, Response
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db as _get_db
from app.models.db.account import UserORM
from app.services.accounts import get_user_by_token
from app.services.evidence import EvidenceStore
from app.services.rate_limit import RateLimiter, client_ip
from app.services.rules import HabitabilityEvaluator

_bearer = HTTPBearer(auto_error=False)


@lru_cache()
def get_evaluator() -> HabitabilityEvaluator:
    """Singleton evaluator on the current catalog"""
    return HabitabilityEvaluator()


@lru_cache()
def get_evidence_store() -> EvidenceStore:
    """Singleton evidence store"""
    return EvidenceStore(settings.EVIDENCE_DIR, settings.EVIDENCE_MAX_BYTES)


@lru_cache()
def get_rate_limiter() -> RateLimiter:
    """Process-wide limiter"""
    return RateLimiter(purge_interval=settings.RATE_LIMIT_PURGE_SECONDS)


def get_db() -> Generator[Session, None, None]:
    """DB session for Depends"""
    yield from _get_db()


# ── Identity ─────────────────────────────────────────────────


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    db: Session = Depends(get_db),
) -> UserORM | None:
    """Caller from `Authorization: Bearer <token>`, or None (anonymous)

    An unknown token is a 401 rather than silently anonymous.
    """
    if credentials is None:
        return None
    user = get_user_by_token(db, credentials.credentials)
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_user(user: UserORM | None = Depends(get_current_user)) -> UserORM:
    if user is None:
        raise HTTPException(
            status_code=401,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


# ── Rate limiting ────────────────────────────────────────────


def _reset_header(reset_at: float) -> str:
    return datetime.fromtimestamp(reset_at, tz=timezone.utc).isoformat()


def rate_limit(group: str, max_requests: int | None = None) -> Callable[..., None]:
    """Dependency factory: fixed-window limit per client IP and route group

    max_requests=None uses RATE_LIMIT_MAX_REQUESTS. Over the limit ⇒ 429.
    """

    def _check(
        request: Request,
        response: Response,
        limiter: RateLimiter = Depends(get_rate_limiter),
    ) -> None:
        limit = max_requests or settings.RATE_LIMIT_MAX_REQUESTS
        peer = request.client.host if request.client else None
        key = f"{group}:{client_ip(request.headers, peer)}"
        result = limiter.check(key, limit, settings.RATE_LIMIT_WINDOW_SECONDS)
        headers = {
            "X-RateLimit-Limit": str(result.limit),
            "X-RateLimit-Remaining": str(result.remaining),
            "X-RateLimit-Reset": _reset_header(result.reset_at),
        }
        if not result.allowed:
            raise HTTPException(
                status_code=429,
                detail="Too many requests. Please try again later.",
                headers=headers,
            )
        response.headers.update(headers)

    return _check
