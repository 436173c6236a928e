"""
News Sources Aggregator
Builds a small, fair, deduplicated news feed from the market data provider
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple
from datetime import date
import logging

from data_providers.base_provider import BaseMarketDataProvider
from data_providers.finnhub_provider import FinnhubProvider
from .articles import (
    MarketNewsArticle,
    RawNewsArticle,
    format_article,
    get_date_range,
    validate_article,
)

logger = logging.getLogger(__name__)


class NewsFetchError(Exception):
    """Raised when no news could be produced at all"""

    def __init__(self, message: str = "Failed to fetch news"):
        super().__init__(message)


def normalize_symbols(symbols: Optional[Iterable[str]]) -> List[str]:
    """Trim, uppercase and drop blank tickers (order is kept)"""
    if not symbols:
        return []
    cleaned = []
    for symbol in symbols:
        if not isinstance(symbol, str):
            continue
        symbol = symbol.strip().upper()
        if symbol:
            cleaned.append(symbol)
    return cleaned


class NewsAggregator:
    """
    Aggregates market news for a set of symbols

    Symbol mode interleaves company news round-robin so a small feed
    covers every requested ticker; general mode dedups the market feed.
    """

    MAX_ARTICLES = 6
    MAX_ROUNDS = 6
    WINDOW_DAYS = 5

    def __init__(self, provider: Optional[BaseMarketDataProvider] = None):
        """Initialize news aggregator"""
        self.provider = provider or FinnhubProvider()

    async def get_news(
        self,
        symbols: Optional[Iterable[str]] = None,
        today: Optional[date] = None
    ) -> List[MarketNewsArticle]:
        """
        Fetch news for the given symbols, or general market news

        Args:
            symbols: Optional tickers; blank entries are ignored
            today: Window end date (defaults to the current date)

        Returns:
            At most 6 formatted articles, most recent first

        Raises:
            NewsFetchError: if general news cannot be fetched or anything
                unexpected happens
        """
        try:
            window = get_date_range(self.WINDOW_DAYS, today)
            cleaned = normalize_symbols(symbols)

            if cleaned:
                return await self._fetch_symbol_news(cleaned, window["from"], window["to"])

            return await self._fetch_general_news()
        except Exception as e:
            logger.error(f"Error in get_news: {e}")
            raise NewsFetchError() from e

    async def _fetch_symbol_news(
        self,
        symbols: List[str],
        from_date: str,
        to_date: str
    ) -> List[MarketNewsArticle]:
        """Round-robin over symbols, one article per round"""
        collected: List[MarketNewsArticle] = []
        articles_by_symbol: Dict[str, List[RawNewsArticle]] = {}
        offsets: Dict[str, int] = {}

        for round_index in range(self.MAX_ROUNDS):
            symbol = symbols[round_index % len(symbols)]

            if symbol not in articles_by_symbol:
                try:
                    payload = await self.provider.get_company_news(symbol, from_date, to_date)
                except Exception as e:
                    logger.error(f"Error fetching news for symbol {symbol}: {e}")
                    articles_by_symbol[symbol] = []
                    continue

                articles_by_symbol[symbol] = [
                    article
                    for article in (RawNewsArticle.from_payload(item) for item in payload)
                    if validate_article(article)
                ]

            articles = articles_by_symbol[symbol]
            offset = offsets.get(symbol, 0)

            if offset < len(articles):
                collected.append(format_article(articles[offset], True, symbol, round_index))
                offsets[symbol] = offset + 1

            if len(collected) >= self.MAX_ARTICLES:
                break

        # sorted() is stable, equal timestamps keep round order
        return sorted(collected, key=lambda a: a.datetime, reverse=True)

    async def _fetch_general_news(self) -> List[MarketNewsArticle]:
        """First page of general news, deduplicated on (id, url, headline)"""
        payload = await self.provider.get_market_news("general")

        seen: Set[Tuple] = set()
        unique: List[RawNewsArticle] = []

        for item in payload:
            article = RawNewsArticle.from_payload(item)
            if not validate_article(article):
                continue

            key = (article.id, article.url, article.headline)
            if key in seen:
                continue
            seen.add(key)
            unique.append(article)

            if len(unique) >= self.MAX_ARTICLES:
                break

        return [
            format_article(article, False, None, index)
            for index, article in enumerate(unique)
        ]
