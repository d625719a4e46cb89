"""
config.py
-----------
Typed configuration loader for environment variables, pathing, and constants.
This centralizes settings so other modules can import a single authoritative source.
"""
from __future__ import annotations
import logging
import os
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    openai_api_key: str = Field(default_factory=lambda: os.getenv("OPENAI_API_KEY", ""))
    # Offline/dev mode: every generation call fails fast so the fallback path is served.
    dev_no_llm: bool = Field(default_factory=lambda: _env_flag("DEV_NO_LLM"))

    campaign_model: str = Field(default_factory=lambda: os.getenv("CAMPAIGN_MODEL", "o4-mini-2025-04-16"))
    campaign_max_tokens: int = Field(default_factory=lambda: int(os.getenv("CAMPAIGN_MAX_TOKENS", "16000")))
    chat_model: str = Field(default_factory=lambda: os.getenv("CHAT_MODEL", "gpt-4o"))
    chat_max_tokens: int = Field(default_factory=lambda: int(os.getenv("CHAT_MAX_TOKENS", "4000")))
    chat_temperature: float = Field(default_factory=lambda: float(os.getenv("CHAT_TEMPERATURE", "0.7")))
    chat_history_window: int = Field(default_factory=lambda: int(os.getenv("CHAT_HISTORY_WINDOW", "10")))

    generation_max_attempts: int = Field(default_factory=lambda: int(os.getenv("GENERATION_MAX_ATTEMPTS", "2")))
    generation_backoff_seconds: float = Field(default_factory=lambda: float(os.getenv("GENERATION_BACKOFF_SECONDS", "2.0")))

    context_retention_seconds: float = Field(default_factory=lambda: float(os.getenv("CONTEXT_RETENTION_SECONDS", "3600")))
    context_sweep_probability: float = Field(default_factory=lambda: float(os.getenv("CONTEXT_SWEEP_PROBABILITY", "0.1")))

    analyses_dir: str = Field(default_factory=lambda: os.getenv("ANALYSES_DIR", "./data/analyses"))
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @property
    def llm_enabled(self) -> bool:
        return bool(self.openai_api_key) and not self.dev_no_llm

    def ensure_dirs(self) -> None:
        Path(self.analyses_dir).mkdir(parents=True, exist_ok=True)


def configure_logging(level: str = "INFO") -> None:
    """Install a root handler once; repeated calls only adjust the level."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger().setLevel(level.upper())


settings = Settings()
settings.ensure_dirs()
