from datetime import timedelta

import pytest

from conftest import T0, snapshot

from sentimetrics.core.history import SentimentHistory


def test_append_evicts_oldest_beyond_capacity():
    history = SentimentHistory()
    for i in range(10):
        history.append(snapshot(overall=i / 10, observed_at=T0 + timedelta(minutes=5 * i)))

    assert len(history) == 8
    assert history.values() == pytest.approx([0.2, 0.3, 0.4, 0.5, 0.6, 0.7, 0.8, 0.9])
    assert history.points()[0].observed_at == T0 + timedelta(minutes=10)


def test_recent_returns_last_k_in_order():
    history = SentimentHistory(capacity=4)
    for v in (0.1, 0.2, 0.3):
        history.append(snapshot(overall=v))
    assert [p.overall_sentiment for p in history.recent(2)] == [0.2, 0.3]
    assert history.recent(0) == []


@pytest.mark.parametrize("k", [-1, 4])
def test_recent_rejects_out_of_range(k):
    history = SentimentHistory()
    for v in (0.1, 0.2, 0.3):
        history.append(snapshot(overall=v))
    with pytest.raises(ValueError):
        history.recent(k)


def test_is_empty_and_capacity():
    history = SentimentHistory(capacity=3)
    assert history.is_empty()
    history.append(snapshot())
    assert not history.is_empty()
    assert history.capacity == 3


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        SentimentHistory(capacity=0)
