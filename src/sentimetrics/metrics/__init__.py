"""Sentiment-derived market metrics (pure functions)."""

from .engine import (
    atr,
    compute_market_metrics,
    ema,
    macd_signal,
    market_momentum,
    market_structure,
    pivot_points,
    rsi,
    support_resistance,
    trading_volume_label,
    trend_strength,
    volatility_index,
)
from .types import DEFAULT_PIVOTS, MarketMetrics, PivotPoints

__all__ = [
    "DEFAULT_PIVOTS",
    "MarketMetrics",
    "PivotPoints",
    "atr",
    "compute_market_metrics",
    "ema",
    "macd_signal",
    "market_momentum",
    "market_structure",
    "pivot_points",
    "rsi",
    "support_resistance",
    "trading_volume_label",
    "trend_strength",
    "volatility_index",
]
