"""
Watchlist Stock Metrics
Quote, profile and basic financials for the watchlist table
"""

import asyncio
import logging
import math
from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel

from data_providers.finnhub_provider import FinnhubProvider

logger = logging.getLogger(__name__)


class WatchlistStockData(BaseModel):
    """One row of the watchlist table"""
    symbol: str
    company: str
    current_price: Optional[float] = None
    change_percent: Optional[float] = None
    price_formatted: Optional[str] = None
    change_formatted: Optional[str] = None
    market_cap: Optional[str] = None
    pe_ratio: Optional[str] = None
    eps: Optional[float] = None
    beta: Optional[float] = None
    ytd_return: Optional[float] = None
    week_return_52: Optional[float] = None
    revenue_growth: Optional[float] = None
    roe: Optional[float] = None


# parsed field -> Finnhub metric key
METRIC_KEYS = {
    "market_cap": "marketCapitalization",
    "pe": "peTTM",
    "eps": "epsTTM",
    "beta": "beta",
    "ytd_return": "yearToDatePriceReturnDaily",
    "week_return_52": "52WeekPriceReturnDaily",
    "revenue_growth": "revenueGrowthTTMYoy",
    "roe": "roeTTM",
}


def _finite(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def parse_stock_metrics(metric: Optional[Dict[str, Any]]) -> Dict[str, Optional[float]]:
    """Pick the table metrics out of a Finnhub `metric` map"""
    metric = metric or {}
    return {field: _finite(metric.get(key)) for field, key in METRIC_KEYS.items()}


def format_price(price: Optional[float]) -> Optional[str]:
    if price is None:
        return None
    return f"${price:,.2f}"


def format_change_percent(change: Optional[float]) -> Optional[str]:
    if change is None:
        return None
    sign = "+" if change > 0 else ""
    return f"{sign}{change:.2f}%"


def format_market_cap(market_cap_millions: Optional[float]) -> Optional[str]:
    """Finnhub reports market capitalization in millions of USD"""
    if market_cap_millions is None or market_cap_millions <= 0:
        return None
    value = market_cap_millions * 1_000_000
    if value >= 1e12:
        return f"${value / 1e12:.2f}T"
    if value >= 1e9:
        return f"${value / 1e9:.2f}B"
    return f"${value / 1e6:.2f}M"


def format_pe_ratio(pe: Optional[float]) -> Optional[str]:
    if pe is None or pe <= 0:
        return None
    return f"{pe:.1f}"


class StockMetricsService:
    """Builds watchlist table rows from the market data provider"""

    def __init__(self, provider: Optional[FinnhubProvider] = None):
        self.provider = provider or FinnhubProvider()

    async def get_watchlist_table_data(self, symbols: Iterable[str]) -> List[WatchlistStockData]:
        """Rows for each symbol; a symbol whose data cannot be fetched is left out"""
        cleaned = [s.strip().upper() for s in symbols if s and s.strip()]
        if not cleaned:
            return []

        rows = await asyncio.gather(*(self._build_row(symbol) for symbol in cleaned))
        return [row for row in rows if row is not None]

    async def _build_row(self, symbol: str) -> Optional[WatchlistStockData]:
        try:
            quote, profile, financials = await asyncio.gather(
                self.provider.get_quote(symbol),
                self.provider.get_company_profile(symbol),
                self.provider.get_basic_financials(symbol),
            )
        except Exception as e:
            logger.error(f"Error fetching watchlist data for {symbol}: {e}")
            return None

        metrics = parse_stock_metrics(financials.get("metric"))
        price = _finite(quote.get("c"))
        change = _finite(quote.get("dp"))
        market_cap = metrics["market_cap"] or _finite(profile.get("marketCapitalization"))

        return WatchlistStockData(
            symbol=symbol,
            company=profile.get("name") or symbol,
            current_price=price,
            change_percent=change,
            price_formatted=format_price(price),
            change_formatted=format_change_percent(change),
            market_cap=format_market_cap(market_cap),
            pe_ratio=format_pe_ratio(metrics["pe"]),
            eps=metrics["eps"],
            beta=metrics["beta"],
            ytd_return=metrics["ytd_return"],
            week_return_52=metrics["week_return_52"],
            revenue_growth=metrics["revenue_growth"],
            roe=metrics["roe"],
        )
