"""Technical-analysis style indicators computed from sentiment, not price.

Every function is pure. Signal-based metrics read confidences in [0, 1];
history-based metrics read overall sentiment values, oldest first.
"""

from __future__ import annotations

import math
from typing import Iterable, List, Sequence, Tuple

from ..news.types import Article
from ..sentiment.types import SentimentSignal, SentimentSnapshot
from .types import (
    DEFAULT_PIVOTS,
    MacdSignal,
    MarketMetrics,
    MarketStructure,
    Momentum,
    PivotPoints,
    VolumeLabel,
)

RSI_MIN_POINTS = 14
MACD_MIN_POINTS = 26
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9

SUPPORT_FLOOR = 0.3
RESISTANCE_FLOOR = 0.7
VOLUME_KEYWORDS: Tuple[str, ...] = ("volume", "trading", "liquidity", "flow")


def _clamp(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def _confidences(signals: Iterable[SentimentSignal]) -> List[float]:
    return [float(s.confidence) for s in signals]


def volatility_index(signals: Sequence[SentimentSignal]) -> float:
    """Population std-dev of confidences x100, capped at 100; 0 without signals."""
    values = _confidences(signals)
    if not values:
        return 0.0
    mean = sum(values) / len(values)
    variance = sum((v - mean) ** 2 for v in values) / len(values)
    return min(math.sqrt(variance) * 100.0, 100.0)


def trend_strength(current_sentiment: float, history: Sequence[float]) -> int:
    if len(history) < 2:
        return 50
    window = list(history)[-3:]
    if current_sentiment >= 0.5:
        monotonic = all(b >= a for a, b in zip(window, window[1:]))
    else:
        monotonic = all(b <= a for a, b in zip(window, window[1:]))
    return 75 if monotonic else 25


def support_resistance(
    positive: Sequence[SentimentSignal],
    negative: Sequence[SentimentSignal],
) -> Tuple[float, float]:
    support = min(_confidences(positive) + [SUPPORT_FLOOR]) * 100.0
    resistance = max(_confidences(negative) + [RESISTANCE_FLOOR]) * 100.0
    return support, resistance


def trading_volume_label(articles: Sequence[Article]) -> VolumeLabel:
    if not articles:
        score = 0.0
    else:
        hits = 0
        for article in articles:
            title = article.title.lower()
            description = (article.description or "").lower()
            if any(k in title or k in description for k in VOLUME_KEYWORDS):
                hits += 1
        score = hits / len(articles) * 100.0

    if score > 66:
        return "High"
    if score > 33:
        return "Moderate"
    return "Low"


def market_momentum(history: Sequence[float]) -> Momentum:
    if len(history) < 3:
        return "neutral"
    avg = sum(list(history)[-3:]) / 3.0
    if avg >= 0.6:
        return "bullish"
    if avg <= 0.4:
        return "bearish"
    return "neutral"


def rsi(history: Sequence[float]) -> float:
    """RSI over the whole history; exactly 50 below `RSI_MIN_POINTS` points."""
    values = list(history)
    if len(values) < RSI_MIN_POINTS:
        return 50.0

    gains: List[float] = []
    losses: List[float] = []
    for prev, cur in zip(values, values[1:]):
        diff = cur - prev
        gains.append(diff if diff >= 0 else 0.0)
        losses.append(-diff if diff < 0 else 0.0)

    avg_gain = sum(gains) / len(gains)
    avg_loss = sum(losses) / len(losses)
    rs = avg_gain / (avg_loss or 1.0)
    return 100.0 - 100.0 / (1.0 + rs)


def ema(values: Sequence[float], period: int) -> float:
    """EMA over the most recent `period` values, seeded with the oldest of them."""
    window = list(values)[-period:]
    if not window:
        return 0.0
    k = 2.0 / (period + 1)
    result = window[0]
    for v in window[1:]:
        result = v * k + result * (1.0 - k)
    return result


def macd_signal(history: Sequence[float]) -> MacdSignal:
    values = list(history)
    if len(values) < MACD_MIN_POINTS:
        return "neutral"

    macd_line = ema(values, MACD_FAST) - ema(values, MACD_SLOW)
    signal_line = ema(values[-MACD_SIGNAL:], MACD_SIGNAL)
    if macd_line > signal_line:
        return "buy"
    if macd_line < signal_line:
        return "sell"
    return "neutral"


def pivot_points(signals: Sequence[SentimentSignal]) -> PivotPoints:
    values = _confidences(signals)
    if not values:
        return DEFAULT_PIVOTS

    high = max(values)
    low = min(values)
    close = values[-1]

    pivot = (high + low + close) / 3.0
    return PivotPoints(
        r3=_clamp(high + 2.0 * (pivot - low)),
        r2=_clamp(pivot + (high - low)),
        r1=_clamp(2.0 * pivot - low),
        pivot=_clamp(pivot),
        s1=_clamp(2.0 * pivot - high),
        s2=_clamp(pivot - (high - low)),
        s3=_clamp(low - 2.0 * (high - pivot)),
    )


def atr(signals: Sequence[SentimentSignal]) -> float:
    values = _confidences(signals)
    if len(values) < 2:
        return 0.0
    ranges = [abs(b - a) for a, b in zip(values, values[1:])]
    return sum(ranges) / len(ranges)


def market_structure(history: Sequence[float]) -> MarketStructure:
    if len(history) < 4:
        return "ranging"
    a, b, c, d = list(history)[-4:]

    higher_highs = b > a and d > c
    higher_lows = c > a
    lower_lows = b < a and d < c
    lower_highs = c < a

    if higher_highs and higher_lows:
        return "uptrend"
    if lower_lows and lower_highs:
        return "downtrend"
    return "ranging"


def compute_market_metrics(
    snapshot: SentimentSnapshot,
    history: Sequence[float],
    articles: Sequence[Article],
) -> MarketMetrics:
    """Full metrics panel for one cycle.

    `history` is expected to already include `snapshot`.
    """
    signals = snapshot.all_signals
    support, resistance = support_resistance(snapshot.positive_signals, snapshot.negative_signals)

    return MarketMetrics(
        volatility_index=volatility_index(signals),
        trend_strength=trend_strength(snapshot.overall_sentiment, history),
        support_level=support,
        resistance_level=resistance,
        trading_volume_label=trading_volume_label(articles),
        market_momentum=market_momentum(history),
        rsi_value=rsi(history),
        macd_signal=macd_signal(history),
        pivot_points=pivot_points(signals),
        atr_value=atr(signals),
        market_structure=market_structure(history),
    )
