from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from ..news.types import Article
from ..util.jsonlog import log_event, utc_now
from .clients import SentimentService
from .parser import SentimentResponseParser
from .types import SentimentSnapshot


@dataclass
class SentimentAnalyzer:
    """Sends an article digest to the sentiment service and parses the reply."""

    service: SentimentService
    parser: SentimentResponseParser = field(default_factory=SentimentResponseParser)
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def analyze(self, articles: Sequence[Article], now: Optional[datetime] = None) -> SentimentSnapshot:
        now = now or utc_now()
        raw = self.service.complete(articles)
        snapshot = self.parser.parse(raw, now=now)
        log_event(
            self.logger,
            "SentimentAnalyzer",
            "ANALYZED",
            now=now,
            articles=len(articles),
            overall=round(snapshot.overall_sentiment, 4),
            positive_signals=len(snapshot.positive_signals),
            negative_signals=len(snapshot.negative_signals),
        )
        return snapshot
