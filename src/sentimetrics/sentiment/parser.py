"""Line grammar for the sentiment service reply.

The model is prompted with a fixed template (see `prompts.py`) but is free to
add commentary, reorder lines or skip sections. Parsing is two steps:

- `tokenize` classifies every line by its (case-insensitive) label
- `reduce_tokens` folds the tokens into a `SentimentSnapshot`

Only two conditions are errors: no `SENTIMENT:` line at all, and a signal
line whose confidence cannot be read. Everything else falls back to
defaults (0.5 overall, no signals, empty analysis).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, Iterator, List, Optional

from ..errors import MalformedResponseError
from ..util.jsonlog import utc_now
from .types import Polarity, SentimentSignal, SentimentSnapshot

DEFAULT_SENTIMENT = 0.5

_NUMBER = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)")
_CONFIDENCE = re.compile(r"confidence\s*:\s*(.*)", re.IGNORECASE)

_SENTIMENT_LABEL = "sentiment:"
_ANALYSIS_LABEL = "analysis:"
_SIGNAL_LABELS = (
    ("positive signal:", Polarity.POSITIVE),
    ("negative signal:", Polarity.NEGATIVE),
)


class TokenKind(str, Enum):
    SENTIMENT = "SENTIMENT"
    SIGNAL = "SIGNAL"
    ANALYSIS = "ANALYSIS"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    line_no: int
    value: str
    polarity: Optional[Polarity] = None


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


def _first_number(text: str) -> Optional[float]:
    m = _NUMBER.search(text)
    if m is None:
        return None
    try:
        return float(m.group(0))
    except ValueError:
        return None


def classify_line(line: str, line_no: int) -> Token:
    text = line.strip()
    lowered = text.lower()

    if lowered.startswith(_SENTIMENT_LABEL):
        return Token(TokenKind.SENTIMENT, line_no, text[len(_SENTIMENT_LABEL):].strip())
    for label, polarity in _SIGNAL_LABELS:
        if lowered.startswith(label):
            return Token(TokenKind.SIGNAL, line_no, text[len(label):].strip(), polarity)
    if lowered.startswith(_ANALYSIS_LABEL):
        return Token(TokenKind.ANALYSIS, line_no, text[len(_ANALYSIS_LABEL):].strip())
    return Token(TokenKind.OTHER, line_no, text)


def tokenize(raw_text: str) -> Iterator[Token]:
    for idx, line in enumerate(raw_text.splitlines(), start=1):
        yield classify_line(line, idx)


def parse_sentiment_value(value: str) -> Optional[float]:
    """Overall score in [0, 1]; values above 1 are read as percentages."""
    number = _first_number(value)
    if number is None:
        return None
    if number > 1:
        number = number / 100.0
    return clamp01(number)


def parse_signal(token: Token, extracted_at: datetime) -> SentimentSignal:
    label_part, sep, rest = token.value.partition("|")
    if not sep:
        raise MalformedResponseError("Signal line has no '|' confidence field", line_no=token.line_no)

    m = _CONFIDENCE.search(rest)
    confidence_text = m.group(1) if m else rest.partition(":")[2]
    confidence = _first_number(confidence_text)
    if confidence is None:
        raise MalformedResponseError("Signal line is missing its confidence value", line_no=token.line_no)

    assert token.polarity is not None
    return SentimentSignal(
        title=label_part.strip(),
        confidence=clamp01(confidence / 100.0),
        polarity=token.polarity,
        extracted_at=extracted_at,
    )


def reduce_tokens(tokens: Iterable[Token], observed_at: datetime) -> SentimentSnapshot:
    saw_sentiment = False
    overall = DEFAULT_SENTIMENT
    positive: List[SentimentSignal] = []
    negative: List[SentimentSignal] = []
    analysis = ""

    for token in tokens:
        if token.kind is TokenKind.SENTIMENT:
            saw_sentiment = True
            value = parse_sentiment_value(token.value)
            if value is not None:
                overall = value
        elif token.kind is TokenKind.SIGNAL:
            signal = parse_signal(token, observed_at)
            if signal.polarity is Polarity.POSITIVE:
                positive.append(signal)
            else:
                negative.append(signal)
        elif token.kind is TokenKind.ANALYSIS:
            analysis = token.value

    if not saw_sentiment:
        raise MalformedResponseError("Response has no SENTIMENT line")

    return SentimentSnapshot(
        overall_sentiment=overall,
        positive_signals=tuple(positive),
        negative_signals=tuple(negative),
        analysis_text=analysis,
        observed_at=observed_at,
    )


class SentimentResponseParser:

    def parse(self, raw_text: str, now: Optional[datetime] = None) -> SentimentSnapshot:
        return reduce_tokens(tokenize(raw_text or ""), now or utc_now())
