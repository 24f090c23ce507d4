import math

import pytest

from conftest import article, signal, snapshot

from sentimetrics.metrics import engine
from sentimetrics.metrics.types import DEFAULT_PIVOTS
from sentimetrics.sentiment.types import Polarity


def _signals(*confidences):
    return [signal(c) for c in confidences]


# ---- volatility --------------------------------------------------------------

def test_volatility_is_population_std_scaled():
    assert engine.volatility_index(_signals(0.2, 0.4, 0.6, 0.8)) == pytest.approx(math.sqrt(0.05) * 100)


def test_volatility_zero_without_signals_and_capped():
    assert engine.volatility_index([]) == 0.0
    assert engine.volatility_index(_signals(0.5, 0.5)) == 0.0
    assert engine.volatility_index(_signals(0.0, 1.0)) <= 100.0


# ---- trend strength ----------------------------------------------------------

def test_trend_strength_needs_two_points():
    assert engine.trend_strength(0.7, []) == 50
    assert engine.trend_strength(0.7, [0.6]) == 50


def test_trend_strength_bullish_checks_non_decreasing():
    assert engine.trend_strength(0.7, [0.1, 0.4, 0.5, 0.5]) == 75
    assert engine.trend_strength(0.7, [0.4, 0.6, 0.5]) == 25


def test_trend_strength_bearish_checks_non_increasing():
    assert engine.trend_strength(0.3, [0.6, 0.5, 0.5]) == 75
    assert engine.trend_strength(0.3, [0.4, 0.5, 0.3]) == 25


# ---- support / resistance ----------------------------------------------------

def test_support_resistance_floors_apply_without_signals():
    assert engine.support_resistance([], []) == pytest.approx((30.0, 70.0))


def test_support_resistance_from_signals():
    pos = _signals(0.8, 0.25)
    neg = [signal(0.9, Polarity.NEGATIVE), signal(0.4, Polarity.NEGATIVE)]
    support, resistance = engine.support_resistance(pos, neg)
    assert support == pytest.approx(25.0)
    assert resistance == pytest.approx(90.0)


# ---- trading volume ----------------------------------------------------------

def test_trading_volume_labels():
    hit = article("Heavy trading in EUR")
    miss = article("Quiet day")
    assert engine.trading_volume_label([]) == "Low"
    assert engine.trading_volume_label([hit, hit, hit]) == "High"
    assert engine.trading_volume_label([hit, miss]) == "Moderate"
    assert engine.trading_volume_label([hit, miss, miss]) == "Moderate"  # 33.3% > 33
    assert engine.trading_volume_label([hit, miss, miss, miss]) == "Low"
    assert engine.trading_volume_label([article("x", description="Capital FLOW into bonds")]) == "High"


# ---- momentum ----------------------------------------------------------------

@pytest.mark.parametrize("history, expected", [
    ([0.9, 0.9], "neutral"),
    ([0.1, 0.7, 0.7, 0.7], "bullish"),
    ([0.3, 0.3, 0.3], "bearish"),
    ([0.5, 0.55, 0.45], "neutral"),
])
def test_market_momentum(history, expected):
    assert engine.market_momentum(history) == expected


# ---- RSI ---------------------------------------------------------------------

def test_rsi_is_50_below_14_points():
    assert engine.rsi([0.1 * i for i in range(8)]) == 50.0
    assert engine.rsi([0.9] * 13) == 50.0


def test_rsi_in_range_for_long_history():
    history = [0.5, 0.6, 0.4, 0.7, 0.65, 0.8, 0.3, 0.35, 0.5, 0.55, 0.6, 0.4, 0.45, 0.7, 0.72]
    value = engine.rsi(history)
    assert 0.0 <= value <= 100.0


def test_rsi_without_losses_uses_unit_denominator():
    history = [i / 100 for i in range(14)]
    # avg gain 0.01, avg loss 0 -> treated as 1
    assert engine.rsi(history) == pytest.approx(100 - 100 / 1.01)


# ---- MACD --------------------------------------------------------------------

def test_macd_neutral_below_26_points():
    assert engine.macd_signal([0.9] * 25) == "neutral"
    assert engine.macd_signal([]) == "neutral"


def test_ema_weights_recent_values():
    assert engine.ema([0.5] * 12, 12) == pytest.approx(0.5)
    assert engine.ema([0.0] * 11 + [1.0], 12) == pytest.approx(2 / 13)


def test_macd_signal_with_long_history():
    rising = [i / 30 for i in range(30)]
    falling = list(reversed(rising))
    # The signal line is an EMA of raw sentiment (~0.5) while the MACD line is a
    # small EMA difference, so any non-negative history reads "sell", even a rising one.
    assert engine.macd_signal(rising) == "sell"
    assert engine.macd_signal([0.0] * 30) == "neutral"
    assert engine.macd_signal(falling) == "sell"


# ---- pivot points ------------------------------------------------------------

def test_pivot_defaults_without_signals():
    p = engine.pivot_points([])
    assert p == DEFAULT_PIVOTS
    assert p.to_dict() == {"r3": 0.7, "r2": 0.65, "r1": 0.6, "pivot": 0.5, "s1": 0.4, "s2": 0.35, "s3": 0.3}


def test_pivot_formula_and_clamp():
    p = engine.pivot_points(_signals(0.8, 0.6, 0.4, 0.7))
    pivot = (0.8 + 0.4 + 0.7) / 3
    assert p.pivot == pytest.approx(pivot)
    assert p.r1 == pytest.approx(2 * pivot - 0.4)
    assert p.s1 == pytest.approx(2 * pivot - 0.8)
    assert p.r2 == pytest.approx(1.0)  # pivot + 0.4 exceeds 1
    assert p.s2 == pytest.approx(pivot - 0.4)
    assert p.r3 == 1.0
    assert p.s3 == pytest.approx(0.4 - 2 * (0.8 - pivot))


@pytest.mark.parametrize("confidences", [(0.8, 0.6, 0.4, 0.7), (0.5, 0.55), (0.1, 0.95, 0.3), (0.0, 1.0)])
def test_pivot_components_clamped_and_ordered(confidences):
    p = engine.pivot_points(_signals(*confidences))
    values = [p.s3, p.s2, p.s1, p.pivot, p.r1, p.r2, p.r3]
    assert all(0.0 <= v <= 1.0 for v in values)
    assert values == sorted(values)


# ---- ATR ---------------------------------------------------------------------

def test_atr():
    assert engine.atr([]) == 0.0
    assert engine.atr(_signals(0.5)) == 0.0
    assert engine.atr(_signals(0.2, 0.6, 0.5)) == pytest.approx((0.4 + 0.1) / 2)


# ---- market structure --------------------------------------------------------

@pytest.mark.parametrize("history, expected", [
    ([0.4, 0.5, 0.45, 0.6], "uptrend"),
    ([0.6, 0.5, 0.55, 0.4], "downtrend"),
    ([0.5, 0.5, 0.5, 0.5], "ranging"),
    ([0.4, 0.5, 0.45], "ranging"),
    ([0.9, 0.4, 0.5, 0.45, 0.6], "uptrend"),
])
def test_market_structure(history, expected):
    assert engine.market_structure(history) == expected


# ---- composition -------------------------------------------------------------

def test_compute_market_metrics_composes_all_indicators():
    snap = snapshot(overall=0.7, positive=(0.8, 0.6), negative=(0.4,))
    history = [0.4, 0.5, 0.45, 0.7]
    m = engine.compute_market_metrics(snap, history, [article("FX trading volume surges")])

    assert m.support_level == pytest.approx(30.0)
    assert m.resistance_level == pytest.approx(70.0)
    assert m.trading_volume_label == "High"
    assert m.market_momentum == "neutral"
    assert m.trend_strength == 25
    assert m.rsi_value == 50.0
    assert m.macd_signal == "neutral"
    assert m.market_structure == "uptrend"
    assert m.atr_value == pytest.approx((0.2 + 0.2) / 2)
    assert m.pivot_points == engine.pivot_points(snap.all_signals)
    assert set(m.to_dict()) >= {"volatility_index", "pivot_points", "market_structure"}
