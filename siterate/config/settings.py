"""Engine settings — single file, Pydantic-based.

Values come from SITERATE_* environment variables, optionally via a .env file
in the project root or the current directory.
"""

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from siterate.enums import RoundingMode


def _project_root() -> Path:
    """Project root. settings.py lives at siterate/config/settings.py."""
    return Path(__file__).resolve().parent.parent.parent


def _ensure_env_loaded() -> None:
    """Load .env from the project root (then the working directory). Idempotent."""
    for candidate in (_project_root() / ".env", Path.cwd() / ".env"):
        if candidate.exists():
            load_dotenv(candidate, override=False)


_ensure_env_loaded()


class PricingSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SITERATE_",
        env_file=(str(_project_root() / ".env"), ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False)
    log_level: str = Field(default="WARNING")
    log_json: bool = Field(default=False)
    rounding: RoundingMode = Field(
        default=RoundingMode.HALF_UP,
        description="Rounding for percent and fractional flat deltas.",
    )
    max_stay_nights: int = Field(
        default=365,
        ge=1,
        description="Longest stay quote_stay will price before refusing.",
    )


@lru_cache
def get_settings() -> PricingSettings:
    return PricingSettings()
