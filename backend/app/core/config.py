import json
import os

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "KupiPodariDai API"
    environment: str = "local"
    port: int = 3000
    docs_url: str = "/api/docs"
    backend_cors_origins_raw: str = ""  # Comma-separated or JSON array

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "allow",
    }

    @property
    def backend_cors_origins(self) -> list[str]:
        """Parse CORS origins from raw string."""
        raw = os.getenv("BACKEND_CORS_ORIGINS", self.backend_cors_origins_raw).strip()
        if not raw:
            return ["*"]
        if raw.startswith("["):
            try:
                parsed = json.loads(raw)
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            except ValueError:
                pass
        return [item.strip() for item in raw.split(",") if item.strip()]

    # Database: sqlite+aiosqlite:///./kupipodaridai.db (dev) | postgresql+asyncpg://... (prod)
    postgres_dsn: str = "sqlite+aiosqlite:///./kupipodaridai.db"
    db_pool_size: int = 5
    db_max_overflow: int = 10
    db_pool_recycle: int = 1800
    db_pool_timeout: int = 30

    access_token_expire_minutes: int = 60 * 24 * 7
    # SECURITY: override via JWT_SECRET_KEY env var; only local env tolerates the default
    jwt_secret_key: str = "CHANGE_ME"
    jwt_algorithm: str = "HS256"

    rate_limit_enabled: bool = True
    rate_limit_requests: int = 10
    rate_limit_window_seconds: int = 60
    rate_limit_signin_requests: int = 5

    log_level: str = "INFO"
    log_file: str = ""


settings = Settings()
