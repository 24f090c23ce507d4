from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple, Type

from ..errors import (
    NetworkError,
    NoArticlesError,
    ProviderError,
    RateLimitError,
    RetryExhaustedError,
)
from ..util.jsonlog import log_event
from .cache import NewsCache
from .heuristic import score_article_text
from .providers import NewsProvider
from .types import Article, NewsBatch, RawArticle, parse_pub_date

RETRYABLE_ERRORS: Tuple[Type[BaseException], ...] = (RateLimitError, NetworkError, ProviderError)


def to_article(raw: RawArticle) -> Article:
    return Article(
        title=raw.title,
        description=raw.description,
        content=raw.content,
        source_id=raw.source_id,
        published_at=parse_pub_date(raw.pub_date),
        link=raw.link,
        heuristic_sentiment=score_article_text(raw.title, raw.description),
    )


@dataclass
class NewsFetcher:
    """Fetches forex-related news with an hourly cache and exponential backoff.

    - Fresh cache entries (younger than the cache TTL) are served without a call
    - Provider calls for one hour bucket are serialized; a caller that waited
      on the bucket lock is answered from the cache its predecessor filled
    - On HTTP 429 any entry for the current bucket is served, even a stale one
    - `retry_fetch` retries transient failures, sleeping 1s, 2s, 4s, ...
    """

    provider: NewsProvider
    cache: NewsCache = field(default_factory=NewsCache)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))
    backoff_base_seconds: float = 1.0
    sleep: Callable[[float], None] = time.sleep

    def fetch(self, category: str = "All News") -> NewsBatch:
        """Latest batch for the current hour bucket.

        `category` is accepted for callers that group views by category; the
        provider query itself is fixed (business news, forex keywords).
        """
        key = self.cache.bucket_key()
        entry = self.cache.get_fresh(key)
        if entry is not None:
            log_event(self.logger, "NewsFetcher", "CACHE_HIT", level=logging.DEBUG,
                      bucket=key, category=category, articles=len(entry.data))
            return entry.data

        with self.cache.bucket_lock(key):
            entry = self.cache.get_fresh(key)
            if entry is not None:
                return entry.data

            log_event(self.logger, "NewsFetcher", "PROVIDER_CALL", bucket=key, category=category)
            try:
                raw_items, next_page = self.provider.latest()
            except RateLimitError:
                stale = self.cache.get_any(key)
                if stale is None:
                    raise
                log_event(self.logger, "NewsFetcher", "RATE_LIMITED_SERVED_STALE", level=logging.WARNING,
                          bucket=key, age_seconds=round(stale.age(self.cache.now()), 1))
                return stale.data

            if not raw_items:
                raise NoArticlesError("No news articles available. Please try again later.")

            batch = NewsBatch(articles=tuple(to_article(r) for r in raw_items), next_page=next_page)
            self.cache.put(key, batch)
            log_event(self.logger, "NewsFetcher", "FETCHED", bucket=key, articles=len(batch),
                      has_next_page=batch.next_page is not None)
            return batch

    def retry_fetch(self, category: str = "All News", max_retries: int = 3) -> NewsBatch:
        attempts = max(1, int(max_retries))
        last_error: Optional[BaseException] = None

        for attempt in range(attempts):
            try:
                return self.fetch(category)
            except RETRYABLE_ERRORS as e:
                last_error = e
                self.logger.warning(f"[NewsFetcher] Attempt {attempt + 1}/{attempts} failed: {e}")
                if attempt == attempts - 1:
                    break
                delay = self.backoff_base_seconds * (2 ** attempt)
                log_event(self.logger, "NewsFetcher", "RETRY_BACKOFF", attempt=attempt + 1,
                          delay_seconds=delay, error=type(e).__name__)
                self.sleep(delay)

        raise RetryExhaustedError(attempts, last_error) from last_error

    def fetch_next_page(self, token: str) -> NewsBatch:
        """Follow a `next_page` token. Pages are not cached."""
        raw_items, next_page = self.provider.page(token)
        batch = NewsBatch(articles=tuple(to_article(r) for r in raw_items), next_page=next_page)
        log_event(self.logger, "NewsFetcher", "FETCHED_PAGE", articles=len(batch),
                  has_next_page=batch.next_page is not None)
        return batch
