"""Keyword sentiment score attached to each article at fetch time.

Independent of the external model. Matching is plain substring search on the
lowercased text, so "up" also matches "update"; the lexicons are tuned for
headline-length input, not precision.
"""

from __future__ import annotations

from typing import Optional, Tuple

POSITIVE_WORDS: Tuple[str, ...] = (
    "bullish", "surge", "gain", "positive", "up", "rise",
    "growth", "strong", "boost", "rally", "recover",
)
NEGATIVE_WORDS: Tuple[str, ...] = (
    "bearish", "fall", "drop", "negative", "down", "decline",
    "weak", "loss", "crash", "plunge", "risk",
)


def keyword_counts(text: str) -> Tuple[int, int]:
    lowered = text.lower()
    pos = sum(1 for w in POSITIVE_WORDS if w in lowered)
    neg = sum(1 for w in NEGATIVE_WORDS if w in lowered)
    return pos, neg


def heuristic_score(text: str) -> float:
    """Return positive / (positive + negative) hits, or 0.5 when nothing matches."""
    pos, neg = keyword_counts(text)
    if pos == 0 and neg == 0:
        return 0.5
    score = pos / (pos + neg)
    return max(0.0, min(1.0, score))


def score_article_text(title: str, description: Optional[str]) -> float:
    return heuristic_score(f"{title} {description or ''}")
