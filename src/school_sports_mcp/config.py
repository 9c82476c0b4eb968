"""Environment-driven settings for the school sports MCP server."""

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_SCHOOL_NAME = "Al Munawwara School"


def _flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    gemini_api_key: str = ""
    gemini_model: str = DEFAULT_MODEL
    school_name: str = DEFAULT_SCHOOL_NAME
    strict_store: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from the environment, falling back to defaults."""
        return cls(
            gemini_api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY", ""),
            gemini_model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            school_name=os.getenv("SCHOOL_NAME", DEFAULT_SCHOOL_NAME),
            strict_store=_flag(os.getenv("SCHOOL_SPORTS_STRICT")),
            log_level=os.getenv("SCHOOL_SPORTS_LOG_LEVEL", "WARNING").upper(),
        )
