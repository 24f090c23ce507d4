"""Sentiment layer: service clients, reply parser, per-pair breakdown."""

from .analyzer import SentimentAnalyzer
from .clients import (
    GeminiSentimentClient,
    GroqSentimentClient,
    SentimentService,
    StaticSentimentClient,
    make_sentiment_client,
)
from .pairs import (
    CURRENCY_PAIRS,
    CurrencyPairAnalyzer,
    PairSentiment,
    SentimentDistribution,
    sentiment_distribution,
)
from .parser import SentimentResponseParser, Token, TokenKind, tokenize
from .types import Polarity, SentimentSignal, SentimentSnapshot

__all__ = [
    "CURRENCY_PAIRS",
    "CurrencyPairAnalyzer",
    "GeminiSentimentClient",
    "GroqSentimentClient",
    "PairSentiment",
    "Polarity",
    "SentimentAnalyzer",
    "SentimentDistribution",
    "SentimentResponseParser",
    "SentimentService",
    "SentimentSignal",
    "SentimentSnapshot",
    "StaticSentimentClient",
    "Token",
    "TokenKind",
    "make_sentiment_client",
    "sentiment_distribution",
    "tokenize",
]
