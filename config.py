"""
Настройки приложения из переменных окружения и файла ``.env``.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "Task Manager API"

    # ── Database ─────────────────────────────────────────────────────────
    database_url: str = "sqlite:///./tasks.sqlite"

    # ── Security ─────────────────────────────────────────────────────────
    jwt_secret: str = "change-me-jwt-secret"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = Field(60, ge=1)
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # ── Rate limiting ────────────────────────────────────────────────────
    rate_limit_enabled: bool = True
    rate_limit_max_requests: int = Field(100, ge=1)
    rate_limit_window_seconds: int = Field(15 * 60, ge=1)
    # заголовок доверенного прокси с адресом клиента, например X-Forwarded-For
    trusted_proxy_header: Optional[str] = None

    # ── Server ───────────────────────────────────────────────────────────
    host: str = "0.0.0.0"
    port: int = 3001
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]
    security_headers_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    """Настройки для точки входа процесса; тесты создают свои"""
    return Settings()
