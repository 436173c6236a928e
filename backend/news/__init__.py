"""
Market News
Fetches, validates and aggregates financial news
"""

from .articles import MarketNewsArticle, RawNewsArticle, validate_article, format_article
from .sources import NewsAggregator, NewsFetchError, normalize_symbols

__all__ = [
    'MarketNewsArticle',
    'RawNewsArticle',
    'validate_article',
    'format_article',
    'NewsAggregator',
    'NewsFetchError',
    'normalize_symbols',
]
