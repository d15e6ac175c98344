"""Runtime configuration — env-driven, immutable once loaded.

Centralized config using pydantic-settings. Reads from a .env file and
GREENLENS_* environment variables. The estimation service endpoint and
credential are supplied once at process start and never change afterwards.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# The nudge request summarizes at most this many recent entries.
MAX_NUDGE_HISTORY = 5


class GreenLensConfig(BaseSettings):
    """Process-wide configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export GREENLENS_API_KEY=...
        export GREENLENS_MODEL=gemini-2.5-flash
        export GREENLENS_LOG_LEVEL=DEBUG

    Or via .env file::

        GREENLENS_API_KEY=...
        GREENLENS_REQUEST_TIMEOUT_SECONDS=30
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GREENLENS_",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # Estimation service
    api_key: str = ""
    model: str = "gemini-2.5-flash"
    endpoint: str = "https://generativelanguage.googleapis.com/v1beta"
    request_timeout_seconds: float = Field(default=60.0, gt=0)

    # CLI ledger snapshot
    ledger_path: Path = Path(".greenlens/ledger.json")

    nudge_history_limit: int = Field(default=MAX_NUDGE_HISTORY, ge=1, le=MAX_NUDGE_HISTORY)

    @property
    def is_configured(self) -> bool:
        """Whether a credential for the estimation service is present."""
        return bool(self.api_key)


# Module-level singleton; import as `from greenlens.config import config`
config = GreenLensConfig()
