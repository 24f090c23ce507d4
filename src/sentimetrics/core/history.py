from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, Iterator, List

from ..sentiment.types import SentimentSnapshot
from ..util.jsonlog import utc_iso

DEFAULT_CAPACITY = 8


@dataclass(frozen=True)
class HistoryPoint:
    observed_at: datetime
    overall_sentiment: float

    def to_dict(self) -> Dict[str, Any]:
        return {"observed_at": utc_iso(self.observed_at), "sentiment": round(self.overall_sentiment, 4)}


class SentimentHistory:
    """Rolling window of overall sentiment, oldest first.

    Append-only; once `capacity` points are held, each append evicts the
    oldest one.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._points: Deque[HistoryPoint] = deque(maxlen=int(capacity))

    @property
    def capacity(self) -> int:
        assert self._points.maxlen is not None
        return self._points.maxlen

    def append(self, snapshot: SentimentSnapshot) -> HistoryPoint:
        point = HistoryPoint(observed_at=snapshot.observed_at, overall_sentiment=snapshot.overall_sentiment)
        self._points.append(point)
        return point

    def recent(self, k: int) -> List[HistoryPoint]:
        if k < 0 or k > len(self._points):
            raise ValueError(f"recent({k}) needs 0 <= k <= {len(self._points)}")
        if k == 0:
            return []
        return list(self._points)[-k:]

    def points(self) -> List[HistoryPoint]:
        return list(self._points)

    def values(self) -> List[float]:
        return [p.overall_sentiment for p in self._points]

    def is_empty(self) -> bool:
        return not self._points

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[HistoryPoint]:
        return iter(list(self._points))
