"""Adapters for the external text-generation service.

Every client turns a list of articles into the model's raw reply text; the
reply is parsed separately. No retry layer lives here: failures surface
immediately and callers that want resilience wrap `complete` themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence

import requests

from ..errors import (
    ConfigurationError,
    NetworkError,
    NetworkTimeoutError,
    RateLimitError,
    SentimentServiceError,
)
from ..news.types import Article
from .prompts import SYSTEM_PROMPT, build_user_prompt

logger = logging.getLogger(__name__)

GROQ_API_URL = "https://api.groq.com/openai/v1/chat/completions"


class SentimentService(Protocol):

    def complete(self, articles: Sequence[Article]) -> str:
        raise NotImplementedError


@dataclass
class StaticSentimentClient:
    """Returns a canned reply (demos/tests, no network)."""

    reply: str
    prompts: List[str] = field(default_factory=list, init=False)

    def complete(self, articles: Sequence[Article]) -> str:
        self.prompts.append(build_user_prompt(articles))
        return self.reply


@dataclass
class GroqSentimentClient:
    """OpenAI-compatible chat completions (Groq by default)."""

    api_key: Optional[str] = None
    api_url: str = GROQ_API_URL
    model: str = "llama3-8b-8192"
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout_seconds: float = 30.0
    session: Optional[Any] = None

    def __post_init__(self) -> None:
        if self.session is None:
            self.session = requests.Session()

    def complete(self, articles: Sequence[Article]) -> str:
        if not self.api_key:
            raise ConfigurationError("GROQ_API_KEY is not configured")

        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(articles)},
            ],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        logger.info(f"[GroqSentimentClient] Analyzing sentiment for {len(articles)} articles with {self.model}")
        assert self.session is not None
        try:
            resp = self.session.post(self.api_url, json=body, headers=headers, timeout=float(self.timeout_seconds))
        except requests.Timeout as e:
            raise NetworkTimeoutError(f"Sentiment service did not answer within {self.timeout_seconds:g}s") from e
        except requests.RequestException as e:
            raise NetworkError(f"Unable to reach the sentiment service: {type(e).__name__}") from e

        if resp.status_code == 429:
            raise RateLimitError("Sentiment service rate limit reached. Try again in a few minutes.")
        if resp.status_code in (401, 403):
            raise ConfigurationError(f"Sentiment service rejected the API key (HTTP {resp.status_code})")
        if resp.status_code != 200:
            raise SentimentServiceError(f"Sentiment service HTTP {resp.status_code}: {(resp.text or '')[:200]}")

        try:
            payload = resp.json()
            content = payload["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise SentimentServiceError("Unexpected sentiment service response shape") from e

        if not content or not str(content).strip():
            raise SentimentServiceError("No response content from sentiment service")
        return str(content)


@dataclass
class GeminiSentimentClient:
    """Google Gemini backend, same prompt with the persona as system instruction."""

    api_key: Optional[str] = None
    model_name: str = "gemini-1.5-flash"
    temperature: float = 0.7
    max_output_tokens: int = 1000
    timeout_seconds: float = 30.0
    _model: Optional[Any] = field(default=None, init=False, repr=False)

    def _client(self) -> Any:
        if self._model is not None:
            return self._model
        if not self.api_key:
            raise ConfigurationError("GOOGLE_API_KEY / GEMINI_API_KEY is not configured")
        try:
            import google.generativeai as genai
        except ImportError as e:
            raise ConfigurationError("google-generativeai is not installed") from e

        genai.configure(api_key=self.api_key)
        self._model = genai.GenerativeModel(self.model_name, system_instruction=SYSTEM_PROMPT)
        logger.info(f"[GeminiSentimentClient] Initialized with model: {self.model_name}")
        return self._model

    def complete(self, articles: Sequence[Article]) -> str:
        model = self._client()
        from google.api_core import exceptions as gexc

        try:
            response = model.generate_content(
                build_user_prompt(articles),
                generation_config={
                    "temperature": self.temperature,
                    "max_output_tokens": self.max_output_tokens,
                },
                request_options={"timeout": float(self.timeout_seconds)},
            )
        except gexc.ResourceExhausted as e:
            raise RateLimitError("Gemini rate limit reached. Try again in a few minutes.") from e
        except gexc.DeadlineExceeded as e:
            raise NetworkTimeoutError(f"Gemini did not answer within {self.timeout_seconds:g}s") from e
        except gexc.GoogleAPIError as e:
            raise SentimentServiceError(f"Gemini API error: {e}") from e

        try:
            text = response.text
        except ValueError as e:
            # .text raises when the candidate was blocked or empty
            raise SentimentServiceError("Gemini returned no text content") from e
        if not text or not text.strip():
            raise SentimentServiceError("No response content from Gemini")
        return text


def make_sentiment_client(settings: Any) -> SentimentService:
    """Build the client selected by `settings.sentiment_backend`."""
    backend = (settings.sentiment_backend or "groq").lower()
    if backend == "groq":
        return GroqSentimentClient(
            api_key=settings.groq_api_key,
            api_url=settings.groq_api_url,
            model=settings.groq_model,
            timeout_seconds=settings.sentiment_timeout_seconds,
        )
    if backend == "gemini":
        return GeminiSentimentClient(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            timeout_seconds=settings.sentiment_timeout_seconds,
        )
    raise ConfigurationError(f"Unknown SENTIMENT_BACKEND '{backend}' (expected 'groq' or 'gemini')")
