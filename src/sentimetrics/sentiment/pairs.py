"""Per currency-pair sentiment breakdown.

Articles are grouped by the pair code they mention and each group is
analyzed on its own. Groups are independent, so they run in a thread pool;
none of them touches the sentiment history.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..news.types import Article
from ..util.jsonlog import log_event, utc_now
from .analyzer import SentimentAnalyzer

CURRENCY_PAIRS: Tuple[str, ...] = ("EUR/USD", "GBP/USD", "USD/JPY", "AUD/USD")


@dataclass(frozen=True)
class PairSentiment:
    currency: str
    positive: int
    negative: int
    neutral: int
    overall: float
    article_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "positive": self.positive,
            "negative": self.negative,
            "neutral": self.neutral,
            "overall": round(self.overall, 4),
            "article_count": self.article_count,
        }


@dataclass(frozen=True)
class SentimentDistribution:
    highly_positive: int
    positive: int
    neutral: int
    negative: int
    highly_negative: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "highly_positive": self.highly_positive,
            "positive": self.positive,
            "neutral": self.neutral,
            "negative": self.negative,
            "highly_negative": self.highly_negative,
        }


def mentions_pair(article: Article, pair: str) -> bool:
    return (
        pair in article.title
        or pair in (article.description or "")
        or pair in (article.content or "")
    )


def group_by_pair(articles: Sequence[Article], pairs: Sequence[str] = CURRENCY_PAIRS) -> Dict[str, List[Article]]:
    return {pair: [a for a in articles if mentions_pair(a, pair)] for pair in pairs}


def signal_shares(positive_count: int, negative_count: int) -> Tuple[int, int, int]:
    """(positive %, negative %, neutral %); no signals at all reads as fully neutral."""
    total = positive_count + negative_count
    if total == 0:
        return 0, 0, 100
    pos = round(positive_count / total * 100)
    neg = round(negative_count / total * 100)
    return pos, neg, 100 - pos - neg


def sentiment_distribution(rows: Sequence[PairSentiment]) -> SentimentDistribution:
    counts = [0, 0, 0, 0, 0]
    for row in rows:
        if row.overall >= 0.8:
            counts[0] += 1
        elif row.overall >= 0.6:
            counts[1] += 1
        elif row.overall >= 0.4:
            counts[2] += 1
        elif row.overall >= 0.2:
            counts[3] += 1
        else:
            counts[4] += 1

    total = sum(counts)
    if total == 0:
        return SentimentDistribution(0, 0, 0, 0, 0)
    pct = [round(c / total * 100) for c in counts]
    return SentimentDistribution(*pct)


@dataclass
class CurrencyPairAnalyzer:
    analyzer: SentimentAnalyzer
    pairs: Tuple[str, ...] = CURRENCY_PAIRS
    max_workers: int = 4
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def _analyze_pair(self, pair: str, articles: List[Article], now: datetime) -> PairSentiment:
        if not articles:
            return PairSentiment(currency=pair, positive=0, negative=0, neutral=100, overall=0.5)

        snapshot = self.analyzer.analyze(articles, now=now)
        pos, neg, neutral = signal_shares(len(snapshot.positive_signals), len(snapshot.negative_signals))
        return PairSentiment(
            currency=pair,
            positive=pos,
            negative=neg,
            neutral=neutral,
            overall=snapshot.overall_sentiment,
            article_count=len(articles),
        )

    def analyze(self, articles: Sequence[Article], now: Optional[datetime] = None) -> List[PairSentiment]:
        now = now or utc_now()
        groups = group_by_pair(articles, self.pairs)

        with ThreadPoolExecutor(max_workers=max(1, self.max_workers)) as pool:
            futures = [pool.submit(self._analyze_pair, pair, groups[pair], now) for pair in self.pairs]
            rows = [f.result() for f in futures]

        log_event(
            self.logger,
            "CurrencyPairAnalyzer",
            "PAIRS_ANALYZED",
            now=now,
            pairs={r.currency: r.article_count for r in rows},
        )
        return rows
