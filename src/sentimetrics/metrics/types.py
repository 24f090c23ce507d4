from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal

VolumeLabel = Literal["High", "Moderate", "Low"]
Momentum = Literal["bullish", "bearish", "neutral"]
MacdSignal = Literal["buy", "sell", "neutral"]
MarketStructure = Literal["uptrend", "downtrend", "ranging"]


@dataclass(frozen=True)
class PivotPoints:
    r3: float
    r2: float
    r1: float
    pivot: float
    s1: float
    s2: float
    s3: float

    def to_dict(self) -> Dict[str, float]:
        return {k: round(v, 4) for k, v in asdict(self).items()}


DEFAULT_PIVOTS = PivotPoints(r3=0.7, r2=0.65, r1=0.6, pivot=0.5, s1=0.4, s2=0.35, s3=0.3)


@dataclass(frozen=True)
class MarketMetrics:
    volatility_index: float
    trend_strength: int
    support_level: float
    resistance_level: float
    trading_volume_label: VolumeLabel
    market_momentum: Momentum
    rsi_value: float
    macd_signal: MacdSignal
    pivot_points: PivotPoints
    atr_value: float
    market_structure: MarketStructure

    def to_dict(self) -> Dict[str, Any]:
        return {
            "volatility_index": round(self.volatility_index, 4),
            "trend_strength": self.trend_strength,
            "support_level": round(self.support_level, 4),
            "resistance_level": round(self.resistance_level, 4),
            "trading_volume": self.trading_volume_label,
            "market_momentum": self.market_momentum,
            "rsi_value": round(self.rsi_value, 4),
            "macd_signal": self.macd_signal,
            "pivot_points": self.pivot_points.to_dict(),
            "atr_value": round(self.atr_value, 4),
            "market_structure": self.market_structure,
        }
