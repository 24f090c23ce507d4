from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..metrics.types import MarketMetrics
from ..sentiment.types import SentimentSnapshot
from ..util.jsonlog import utc_iso
from .history import HistoryPoint


class CyclePhase(str, Enum):
    IDLE = "IDLE"
    FETCHING = "FETCHING"
    ANALYZING = "ANALYZING"
    UPDATING = "UPDATING"
    FAILED = "FAILED"


@dataclass
class OrchestratorConfig:
    refresh_interval_seconds: float = 300.0
    category: str = "All News"
    max_retries: int = 3
    stop_timeout_seconds: float = 10.0


@dataclass(frozen=True)
class DashboardState:
    """Latest composed result for the presentation layer.

    After a failed cycle `snapshot`/`metrics` still hold the last successful
    values; both are None only when no cycle has succeeded yet.
    """

    phase: CyclePhase = CyclePhase.IDLE
    snapshot: Optional[SentimentSnapshot] = None
    metrics: Optional[MarketMetrics] = None
    history: Tuple[HistoryPoint, ...] = field(default_factory=tuple)
    article_count: int = 0
    error: Optional[str] = None
    last_success_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def has_data(self) -> bool:
        return self.snapshot is not None and self.metrics is not None

    @property
    def can_retry(self) -> bool:
        return self.phase is CyclePhase.FAILED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "snapshot": self.snapshot.to_dict() if self.snapshot else None,
            "metrics": self.metrics.to_dict() if self.metrics else None,
            "history": [p.to_dict() for p in self.history],
            "article_count": self.article_count,
            "error": self.error,
            "last_success_at": utc_iso(self.last_success_at) if self.last_success_at else None,
            "updated_at": utc_iso(self.updated_at) if self.updated_at else None,
        }
