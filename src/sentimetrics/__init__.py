"""sentimetrics: market-sentiment indicators derived from financial news."""

from .config import Settings
from .core import CyclePhase, DashboardState, Orchestrator, OrchestratorConfig, SentimentHistory
from .metrics import MarketMetrics, PivotPoints, compute_market_metrics
from .news import NewsCache, NewsDataProvider, NewsFetcher
from .sentiment import SentimentAnalyzer, SentimentResponseParser, SentimentSnapshot

__all__ = [
    "CyclePhase",
    "DashboardState",
    "MarketMetrics",
    "NewsCache",
    "NewsDataProvider",
    "NewsFetcher",
    "Orchestrator",
    "OrchestratorConfig",
    "PivotPoints",
    "SentimentAnalyzer",
    "SentimentHistory",
    "SentimentResponseParser",
    "SentimentSnapshot",
    "Settings",
    "compute_market_metrics",
]
