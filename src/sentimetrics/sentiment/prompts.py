from __future__ import annotations

from typing import Sequence

from ..news.types import Article
from ..util.jsonlog import utc_iso

SYSTEM_PROMPT = (
    "You are an expert financial analyst specializing in forex markets. "
    "Analyze news articles and provide detailed market sentiment analysis. "
    "Always format your response exactly as specified."
)

OUTPUT_TEMPLATE = """SENTIMENT: [a number between 0 and 1]
POSITIVE SIGNAL: [description] | CONFIDENCE: [number between 1-100]
POSITIVE SIGNAL: [description] | CONFIDENCE: [number between 1-100]
NEGATIVE SIGNAL: [description] | CONFIDENCE: [number between 1-100]
NEGATIVE SIGNAL: [description] | CONFIDENCE: [number between 1-100]
ANALYSIS: [2-3 sentence market analysis]"""


def article_digest(articles: Sequence[Article]) -> str:
    blocks = []
    for idx, article in enumerate(articles, start=1):
        date = utc_iso(article.published_at) if article.published_at else "unknown"
        blocks.append(
            f"[Article {idx}]\n"
            f"Title: {article.title}\n"
            f"Content: {article.body()}\n"
            f"Source: {article.source_id}\n"
            f"Date: {date}\n"
            "---"
        )
    return "\n".join(blocks)


def build_user_prompt(articles: Sequence[Article]) -> str:
    return (
        "Analyze these financial news articles for forex market sentiment:\n\n"
        f"{article_digest(articles)}\n\n"
        "Provide your analysis in exactly this format:\n"
        f"{OUTPUT_TEMPLATE}"
    )
