# uiquery/utils/config.py
from __future__ import annotations

import functools
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------- Enums ----------

class BrowserType(str, Enum):
    chromium = "chromium"
    firefox = "firefox"
    webkit = "webkit"


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


# ---------- Settings ----------

class Settings(BaseSettings):
    """
    Central configuration for uiquery.

    Values load in this order of precedence:
      1) Explicit overrides passed to `configure(...)`
      2) Environment variables
      3) .env file in project root
      4) Defaults below
    """

    # ---- Navigation ----
    BASE_URL: Optional[str] = Field(default=None, description="Prefix for relative visit() paths")

    # ---- Query polling ----
    DEFAULT_TIMEOUT_MS: int = Field(default=3000, ge=0, description="How long find() keeps re-evaluating")
    POLL_INTERVAL_MS: int = Field(default=100, ge=1)

    # ---- Browser configuration ----
    HEADLESS: bool = Field(default=True, description="Run the browser headless")
    BROWSER_TYPE: BrowserType = Field(default=BrowserType.chromium, description="Playwright browser")
    VIEWPORT_WIDTH: int = Field(default=1366, ge=320, le=7680)
    VIEWPORT_HEIGHT: int = Field(default=768, ge=320, le=4320)
    SLOW_MO: int = Field(default=0, ge=0, description="Slow down browser operations (ms) for debugging")
    PAGE_LOAD_TIMEOUT: int = Field(default=30000, ge=1000)

    # ---- Logging ----
    LOG_LEVEL: LogLevel = Field(default=LogLevel.INFO)
    LOG_TO_FILE: bool = Field(default=False)
    LOG_FILE: Path = Field(default=Path("./uiquery.log"))
    COLORIZED_OUTPUT: bool = Field(default=True)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("BASE_URL", mode="before")
    @classmethod
    def _blank_base_url(cls, v):
        # BASE_URL= in a .env file means "unset"
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("BASE_URL", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, v: Optional[str]):
        return v.rstrip("/") if v else v

    @field_validator("LOG_FILE", mode="after")
    @classmethod
    def _absolutize_log_file(cls, v: Path):
        return v if v.is_absolute() else Path.cwd() / v

    def playwright_launch_kwargs(self) -> dict:
        return {
            "headless": self.HEADLESS,
            "slow_mo": self.SLOW_MO,
        }

    def playwright_context_kwargs(self) -> dict:
        return {"viewport": {"width": self.VIEWPORT_WIDTH, "height": self.VIEWPORT_HEIGHT}}


# --------- Public accessor (memoized) ---------

_overrides: Dict[str, Any] = {}


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Load and cache settings once per process.
    Use `configure(...)` to change them at runtime.
    """
    return Settings(**_overrides)


def configure(**overrides: Any) -> Settings:
    """
    Process-wide override of individual settings, e.g.

        configure(base_url="http://localhost:4001")

    Keys are case-insensitive. Returns the reloaded settings.
    """
    _overrides.update({k.upper(): v for k, v in overrides.items()})
    get_settings.cache_clear()
    return get_settings()


def reset_configuration() -> None:
    """Drop every override made through `configure`."""
    _overrides.clear()
    get_settings.cache_clear()
