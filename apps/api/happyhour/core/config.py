from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

# Load .env from apps/api so it works regardless of CWD
_env_file = Path(__file__).resolve().parent.parent.parent / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=_env_file, extra="ignore")

    database_url: str = "postgresql://localhost/happyhour"
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days
    mfa_session_expire_minutes: int = 5
    menu_url_expire_minutes: int = 60

    # PDF analysis service (POST {base}/upload); None => analysis disabled
    analysis_api_base_url: str | None = None
    analysis_timeout_seconds: float = 120.0

    # Upload limit for PDF menus
    menu_max_bytes: int = 16 * 1024 * 1024

    # Phone MFA (Twilio Verify)
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_verify_service_sid: str | None = None

    # CORS (comma-separated origins; * allows all)
    cors_origins: str = "*"

    # Public API URL used for signed menu download links. If unset, uses request.base_url.
    api_public_url: str | None = None

    @property
    def cors_origins_list(self) -> list[str]:
        """Parsed CORS origins for middleware."""
        raw = self.cors_origins.strip()
        return ["*"] if not raw else [o.strip() for o in raw.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    return Settings()
