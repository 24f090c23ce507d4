"""News acquisition: provider adapters, hourly cache, retrying fetcher."""

from .cache import CacheEntry, NewsCache
from .fetcher import NewsFetcher
from .heuristic import heuristic_score
from .providers import NewsDataProvider, NewsProvider, StaticNewsProvider
from .types import Article, NewsBatch, RawArticle, filter_articles

__all__ = [
    "Article",
    "CacheEntry",
    "NewsBatch",
    "NewsCache",
    "NewsDataProvider",
    "NewsFetcher",
    "NewsProvider",
    "RawArticle",
    "StaticNewsProvider",
    "filter_articles",
    "heuristic_score",
]
