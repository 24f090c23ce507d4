"""Shared fakes: controllable clock, recording sleep, scripted HTTP session."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest

from sentimetrics.news.types import Article, RawArticle
from sentimetrics.sentiment.types import Polarity, SentimentSignal, SentimentSnapshot

T0 = datetime(2024, 5, 2, 9, 0, tzinfo=timezone.utc)

# 2024-05-02 09:00:00 UTC, aligned to an hour bucket
EPOCH_T0 = 1714640400.0


class FakeClock:
    def __init__(self, start: float = EPOCH_T0) -> None:
        self.now = float(start)

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingSleep:
    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        if self._payload is None:
            raise ValueError("no json body")
        return self._payload


class FakeSession:
    """Returns (or raises) scripted outcomes in order; the last one repeats."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.requests: List[Dict[str, Any]] = []

    def _next(self) -> Any:
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def get(self, url: str, params: Optional[Dict[str, Any]] = None, timeout: Optional[float] = None, **kw: Any):
        self.requests.append({"method": "GET", "url": url, "params": params, "timeout": timeout})
        return self._next()

    def post(self, url: str, json: Any = None, headers: Optional[Dict[str, str]] = None,
             timeout: Optional[float] = None, **kw: Any):
        self.requests.append({"method": "POST", "url": url, "json": json, "headers": headers, "timeout": timeout})
        return self._next()


def newsdata_payload(n: int = 3, next_page: Optional[str] = "tok-2") -> Dict[str, Any]:
    results = [
        {
            "title": f"Dollar gains as markets rally {i}",
            "description": "Strong trading session",
            "content": None,
            "source_id": "reuters",
            "pubDate": "2024-05-02 08:00:00",
            "link": f"https://example.com/{i}",
        }
        for i in range(n)
    ]
    return {"status": "success", "totalResults": n, "results": results, "nextPage": next_page}


def raw_article(title: str = "EUR/USD slips", description: Optional[str] = None,
                content: Optional[str] = None) -> RawArticle:
    return RawArticle(
        title=title,
        description=description,
        content=content,
        source_id="demo",
        pub_date="2024-05-02 08:00:00",
        link="https://example.com/x",
    )


def article(title: str = "Headline", description: Optional[str] = None,
            content: Optional[str] = None, score: float = 0.5) -> Article:
    return Article(
        title=title,
        source_id="demo",
        published_at=T0,
        link=None,
        heuristic_sentiment=score,
        description=description,
        content=content,
    )


def signal(confidence: float, polarity: Polarity = Polarity.POSITIVE, title: str = "s") -> SentimentSignal:
    return SentimentSignal(title=title, confidence=confidence, polarity=polarity, extracted_at=T0)


def snapshot(overall: float = 0.5, positive=(), negative=(), observed_at: datetime = T0) -> SentimentSnapshot:
    return SentimentSnapshot(
        overall_sentiment=overall,
        positive_signals=tuple(signal(c, Polarity.POSITIVE) for c in positive),
        negative_signals=tuple(signal(c, Polarity.NEGATIVE) for c in negative),
        analysis_text="",
        observed_at=observed_at,
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()
