"""Application settings

Every environment value lives in the .env file at the project root.
Defaults are enough to run locally and in tests (SQLite under data/).
"""

from pathlib import Path

from pydantic_settings import BaseSettings

# Project root: parent of backend/
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_DATA_DIR = _PROJECT_ROOT / "data"


class Settings(BaseSettings):
    """Environment-backed configuration"""

    # DB
    DATABASE_URL: str = f"sqlite:///{_DATA_DIR / 'cedula.db'}"
    DB_ECHO: bool = False           # SQLAlchemy SQL logging
    DB_POOL_SIZE: int = 5           # ignored for SQLite
    DB_MAX_OVERFLOW: int = 10       # ignored for SQLite

    # Logging
    LOG_LEVEL: str = "INFO"

    # CORS (comma separated)
    CORS_ORIGINS: str = "http://localhost:3000"

    # Rate limiting (per client IP, fixed window)
    RATE_LIMIT_MAX_REQUESTS: int = 100
    RATE_LIMIT_WINDOW_SECONDS: int = 900  # 15 min
    RATE_LIMIT_PURGE_SECONDS: int = 300  # sweep of expired windows

    # Evidence uploads
    EVIDENCE_DIR: str = str(_DATA_DIR / "evidence")
    EVIDENCE_MAX_BYTES: int = 10 * 1024 * 1024  # 10 MB

    # Accounts
    PASSWORD_HASH_ITERATIONS: int = 200_000  # PBKDF2-SHA256
    API_TOKEN_BYTES: int = 32

    # Public share links (hex characters)
    SHARE_ID_LENGTH: int = 16

    model_config = {
        "env_file": str(_PROJECT_ROOT / ".env"),
        "env_file_encoding": "utf-8",
    }

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


# Singleton
settings = Settings()
