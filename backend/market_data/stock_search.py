"""
Stock Search
Symbol search with a popular-stocks fallback for empty queries
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from data_providers.finnhub_provider import FinnhubProvider

logger = logging.getLogger(__name__)

MAX_RESULTS = 15
POPULAR_LIMIT = 10

POPULAR_STOCK_SYMBOLS = [
    # Tech giants
    "AAPL", "MSFT", "GOOGL", "AMZN", "TSLA", "META", "NVDA", "NFLX", "ORCL", "CRM",
    # Growing tech
    "ADBE", "INTC", "AMD", "PYPL", "UBER", "ZOOM", "SPOT", "SQ", "SHOP", "ROKU",
    "SNOW", "PLTR", "COIN", "RBLX", "DDOG", "CRWD", "NET", "OKTA", "TWLO", "ZM",
    # Finance and consumer
    "JPM", "BAC", "V", "MA", "WMT", "KO", "PEP", "DIS", "NKE", "MCD",
]


class StockSearchResult(BaseModel):
    """Search hit returned to callers"""
    symbol: str
    name: str
    exchange: str
    type: str
    is_in_watchlist: bool = False


@dataclass
class StockCandidate:
    """Everything the final projection needs, from either search path"""
    symbol: str
    description: Optional[str] = None
    display_symbol: Optional[str] = None
    type: Optional[str] = None
    exchange: Optional[str] = None

    @classmethod
    def from_search_hit(cls, hit: Dict[str, Any]) -> "StockCandidate":
        return cls(
            symbol=hit.get("symbol") or "",
            description=hit.get("description"),
            display_symbol=hit.get("displaySymbol"),
            type=hit.get("type"),
        )

    @classmethod
    def from_profile(cls, symbol: str, profile: Dict[str, Any]) -> "StockCandidate":
        return cls(
            symbol=symbol,
            description=profile.get("name"),
            type="Common Stock",
            exchange=profile.get("exchange"),
        )

    def to_result(self, watched: Optional[set] = None) -> StockSearchResult:
        symbol = self.symbol.upper()
        return StockSearchResult(
            symbol=symbol,
            name=self.description or symbol,
            exchange=self.display_symbol or self.exchange or "US",
            type=self.type or "Stock",
            is_in_watchlist=bool(watched) and symbol in watched,
        )


class StockSearch:
    """Searches stocks through the market data provider"""

    def __init__(self, provider: Optional[FinnhubProvider] = None):
        self.provider = provider or FinnhubProvider()

    async def search_stocks(
        self,
        query: Optional[str] = None,
        watchlist_symbols: Optional[Iterable[str]] = None
    ) -> List[StockSearchResult]:
        """
        Search stocks by query, or list popular stocks when the query is blank

        Never raises: failures (including a missing API key) give an empty list.
        """
        try:
            if not self.provider.is_available:
                logger.error("Error in stock search: FINNHUB API key is not configured")
                return []

            trimmed = (query or "").strip()

            if trimmed:
                hits = await self.provider.search_symbols(trimmed)
                candidates = [
                    StockCandidate.from_search_hit(hit)
                    for hit in hits
                    if isinstance(hit, dict) and hit.get("symbol")
                ]
            else:
                candidates = await self._popular_candidates()

            watched = {s.strip().upper() for s in (watchlist_symbols or []) if s}
            return [candidate.to_result(watched) for candidate in candidates][:MAX_RESULTS]

        except Exception as e:
            logger.error(f"Error in stock search: {e}")
            return []

    async def _popular_candidates(self) -> List[StockCandidate]:
        symbols = POPULAR_STOCK_SYMBOLS[:POPULAR_LIMIT]
        profiles = await asyncio.gather(*(self._safe_profile(symbol) for symbol in symbols))

        candidates = []
        for symbol, profile in zip(symbols, profiles):
            if not profile or not profile.get("name"):
                continue
            candidates.append(StockCandidate.from_profile(symbol, profile))
        return candidates

    async def _safe_profile(self, symbol: str) -> Optional[Dict[str, Any]]:
        try:
            return await self.provider.get_company_profile(symbol)
        except Exception as e:
            logger.error(f"Error fetching profile for {symbol}: {e}")
            return None
