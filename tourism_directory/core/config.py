from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from the project root so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/tourism_directory"
    sql_echo: bool = False

    # "sql" (Postgres via SQLAlchemy) or "memory" (process-local, for demos and tests)
    store_backend: str = "sql"

    # Tokens are issued by the hosted auth backend; we only verify them
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_audience: str | None = None

    # Rate limiting (per-user when key_func uses user id; multi-instance needs Redis later)
    rate_limit_enabled: bool = True
    search_rate_limit: str = "30/minute"
    suggest_rate_limit: str = "60/minute"

    # Pagination
    default_page_size: int = 12
    max_page_size: int = 100

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    log_level: str = "INFO"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]

    @property
    def async_database_url(self) -> str:
        """database_url rewritten for the asyncpg driver (Render-style postgres:// too)."""
        url = self.database_url
        if url.startswith("postgres://"):
            return url.replace("postgres://", "postgresql+asyncpg://", 1)
        if url.startswith("postgresql://") and "asyncpg" not in url:
            return url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url


@lru_cache
def get_settings() -> Settings:
    return Settings()
