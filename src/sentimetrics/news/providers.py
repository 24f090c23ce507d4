from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Tuple

import requests

from ..errors import (
    ConfigurationError,
    NetworkError,
    NetworkTimeoutError,
    ProviderError,
    RateLimitError,
)
from .types import RawArticle

DEFAULT_BASE_URL = "https://newsdata.io/api/1"
FOREX_QUERY = 'forex OR "foreign exchange" OR currency OR financial markets OR economy OR trading'
PAGE_SIZE = 10

ProviderPage = Tuple[List[RawArticle], Optional[str]]


class NewsProvider(Protocol):

    def latest(self) -> ProviderPage:
        raise NotImplementedError

    def page(self, token: str) -> ProviderPage:
        raise NotImplementedError


@dataclass
class StaticNewsProvider:
    """Deterministic provider for demos/tests (no network, no API keys)."""

    items: List[RawArticle]
    next_page: Optional[str] = None
    calls: int = field(default=0, init=False)

    def latest(self) -> ProviderPage:
        self.calls += 1
        return list(self.items), self.next_page

    def page(self, token: str) -> ProviderPage:
        _ = token
        self.calls += 1
        return list(self.items), None


@dataclass
class NewsDataProvider:
    """newsdata.io `/news` endpoint, business category filtered to forex keywords."""

    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 10.0
    session: Optional[Any] = None

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")
        if self.session is None:
            self.session = requests.Session()

    def latest(self) -> ProviderPage:
        return self._get({
            "language": "en",
            "category": "business",
            "q": FOREX_QUERY,
            "size": PAGE_SIZE,
        })

    def page(self, token: str) -> ProviderPage:
        return self._get({"page": token})

    def _get(self, params: Dict[str, Any]) -> ProviderPage:
        if not self.api_key:
            raise ConfigurationError("NEWSDATA_API_KEY is missing. Use StaticNewsProvider for offline runs.")

        query = {"apikey": self.api_key}
        query.update(params)

        assert self.session is not None
        try:
            resp = self.session.get(f"{self.base_url}/news", params=query, timeout=float(self.timeout_seconds))
        except requests.Timeout as e:
            raise NetworkTimeoutError(f"News provider did not answer within {self.timeout_seconds:g}s") from e
        except requests.ConnectionError as e:
            raise NetworkError("Unable to reach the news service. Check the network connection.") from e
        except requests.RequestException as e:
            raise NetworkError(f"News request failed: {type(e).__name__}") from e

        if resp.status_code == 429:
            raise RateLimitError("News provider rate limit reached (HTTP 429)")
        if not 200 <= resp.status_code < 300:
            # Avoid leaking the api key: never echo the request URL.
            raise ProviderError(f"News API error: HTTP {resp.status_code}", status_code=resp.status_code)

        try:
            payload = resp.json()
        except ValueError as e:
            raise ProviderError("News API returned non-JSON response", status_code=resp.status_code) from e

        if not isinstance(payload, dict):
            raise ProviderError("Invalid response from news API", status_code=resp.status_code)
        if payload.get("status") == "error":
            results = payload.get("results")
            message = results.get("message") if isinstance(results, dict) else None
            raise ProviderError(f"News API error: {message or 'status=error'}", status_code=resp.status_code)

        results = payload.get("results")
        if not isinstance(results, list):
            raise ProviderError("Invalid response format from news API", status_code=resp.status_code)

        items = [RawArticle.from_json(r) for r in results if isinstance(r, dict)]
        next_page = payload.get("nextPage")
        return items, str(next_page) if next_page else None
