from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class Article:
    title: str
    source_id: str
    published_at: Optional[datetime]
    link: Optional[str]
    heuristic_sentiment: float
    description: Optional[str] = None
    content: Optional[str] = None

    @property
    def sentiment_label(self) -> str:
        return "Bullish" if self.heuristic_sentiment >= 0.5 else "Bearish"

    def body(self) -> str:
        """Best available text for the article (content, then description)."""
        return self.content or self.description or "No content available"


@dataclass(frozen=True)
class NewsBatch:
    articles: Tuple[Article, ...]
    next_page: Optional[str] = None

    def __len__(self) -> int:
        return len(self.articles)


@dataclass(frozen=True)
class RawArticle:
    """Subset of newsdata.io result fields, before scoring."""

    title: str
    description: Optional[str]
    content: Optional[str]
    source_id: str
    pub_date: Optional[str]
    link: Optional[str]

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "RawArticle":
        return cls(
            title=str(obj.get("title") or ""),
            description=str(obj["description"]) if obj.get("description") else None,
            content=str(obj["content"]) if obj.get("content") else None,
            source_id=str(obj.get("source_id") or "unknown"),
            pub_date=str(obj["pubDate"]) if obj.get("pubDate") else None,
            link=str(obj["link"]) if obj.get("link") else None,
        )


def parse_pub_date(value: Optional[str]) -> Optional[datetime]:
    """newsdata.io sends `YYYY-MM-DD HH:MM:SS` in UTC; accept ISO-8601 too."""
    if not value:
        return None
    text = value.strip()
    try:
        parsed = datetime.strptime(text, "%Y-%m-%d %H:%M:%S")
    except ValueError:
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def filter_articles(articles: Iterable[Article], term: str) -> List[Article]:
    """Case-insensitive search over title and description."""
    needle = term.strip().lower()
    items = list(articles)
    if not needle:
        return items
    return [
        a for a in items
        if needle in a.title.lower() or needle in (a.description or "").lower()
    ]
