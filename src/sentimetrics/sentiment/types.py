from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Tuple

from ..util.jsonlog import utc_iso


class Polarity(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class SentimentSignal:
    title: str
    confidence: float
    polarity: Polarity
    extracted_at: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "confidence": round(self.confidence, 4),
            "polarity": self.polarity.value,
            "extracted_at": utc_iso(self.extracted_at),
        }


@dataclass(frozen=True)
class SentimentSnapshot:
    overall_sentiment: float
    positive_signals: Tuple[SentimentSignal, ...]
    negative_signals: Tuple[SentimentSignal, ...]
    analysis_text: str
    observed_at: datetime

    @property
    def all_signals(self) -> Tuple[SentimentSignal, ...]:
        return self.positive_signals + self.negative_signals

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_sentiment": round(self.overall_sentiment, 4),
            "positive_signals": [s.to_dict() for s in self.positive_signals],
            "negative_signals": [s.to_dict() for s in self.negative_signals],
            "analysis": self.analysis_text,
            "observed_at": utc_iso(self.observed_at),
        }
