# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group maps to one concern of the
onboarding backend or the wizard's gateway client.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[2]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "kyc-onboarding"
    DEBUG: bool = False
    API_PREFIX: str = Field(
        default="/kyc",
        description="Path prefix every onboarding endpoint is mounted under.",
    )

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:3000"]

    # -- Storage (flat files) --
    UPLOADS_DIR: Path = Field(
        default=Path("uploads"),
        description="Directory uploaded documents and selfies are written to.",
    )
    LOGS_DIR: Path = Field(
        default=Path("logs"),
        description="Directory holding the append-only submission log.",
    )
    AUDIT_LOG_FILENAME: str = "api.log"
    UPLOAD_MAX_SIZE_MB: int = 25

    # -- Simulated verification --
    SIMULATE_LATENCY: bool = Field(
        default=True,
        description="Delay mocked verification responses. Set False for tests.",
    )
    REGISTER_DELAY_MS: int = 700
    SELFIE_DELAY_MS: int = 800
    ADDRESS_DELAY_MS: int = 900

    # -- Gateway client --
    KYC_API_BASE_URL: str | None = Field(
        default=None,
        description="Backend origin for the wizard client. Relative URLs are used when unset.",
    )
    KYC_REQUEST_TIMEOUT_S: float = 30.0

    @property
    def audit_log_path(self) -> Path:
        return self.LOGS_DIR / self.AUDIT_LOG_FILENAME

    @property
    def upload_max_bytes(self) -> int:
        return self.UPLOAD_MAX_SIZE_MB * 1024 * 1024


settings = Settings()
