from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Optional


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Runtime settings, read from the environment (load `.env` before constructing).

    Credentials are optional here; the adapter that needs one raises
    `ConfigurationError` when it is used without it.
    """

    newsdata_api_key: Optional[str] = field(default_factory=lambda: os.getenv("NEWSDATA_API_KEY"))
    newsdata_base_url: str = field(default_factory=lambda: os.getenv("NEWSDATA_BASE_URL", "https://newsdata.io/api/1"))

    sentiment_backend: str = field(default_factory=lambda: os.getenv("SENTIMENT_BACKEND", "groq").strip().lower())

    groq_api_key: Optional[str] = field(default_factory=lambda: os.getenv("GROQ_API_KEY"))
    groq_api_url: str = field(
        default_factory=lambda: os.getenv("GROQ_API_URL", "https://api.groq.com/openai/v1/chat/completions")
    )
    groq_model: str = field(default_factory=lambda: os.getenv("GROQ_MODEL", "llama3-8b-8192"))

    gemini_api_key: Optional[str] = field(
        default_factory=lambda: os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
    )
    gemini_model: str = field(default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-1.5-flash"))

    refresh_interval_seconds: float = field(default_factory=lambda: _env_float("REFRESH_INTERVAL_SECONDS", 300.0))
    history_capacity: int = field(default_factory=lambda: _env_int("HISTORY_CAPACITY", 8))

    news_cache_ttl_seconds: float = field(default_factory=lambda: _env_float("NEWS_CACHE_TTL_SECONDS", 300.0))
    news_provider_timeout_seconds: float = field(
        default_factory=lambda: _env_float("NEWS_PROVIDER_TIMEOUT_SECONDS", 10.0)
    )
    news_max_retries: int = field(default_factory=lambda: _env_int("NEWS_MAX_RETRIES", 3))
    sentiment_timeout_seconds: float = field(default_factory=lambda: _env_float("SENTIMENT_TIMEOUT_SECONDS", 30.0))
