"""
Finnhub Data Provider
Company news, market news, symbol search and company fundamentals
API Docs: https://finnhub.io/docs/api
"""

from typing import Any, Dict, List, Optional
import aiohttp
from .base_provider import BaseMarketDataProvider
import logging
import os

logger = logging.getLogger(__name__)


class FinnhubAPIError(Exception):
    """Raised when Finnhub answers with a non-2xx status"""

    def __init__(self, status: int, path: str):
        self.status = status
        self.path = path
        super().__init__(f"HTTP error! status: {status} ({path})")


class FinnhubProvider(BaseMarketDataProvider):
    """
    Finnhub data provider
    Pros: 60 calls/min free, US coverage, company news endpoint
    Cons: Requires API key

    Every call is a single GET; there is no retry.
    """

    BASE_URL = "https://finnhub.io/api/v1"

    def __init__(self, api_key: Optional[str] = None, session: Optional[aiohttp.ClientSession] = None):
        # Try to get API key from environment if not provided
        if not api_key:
            api_key = os.getenv("FINNHUB_API_KEY")
        self._session = session
        super().__init__("Finnhub", api_key=api_key)

    def _check_availability(self) -> bool:
        """Check if Finnhub API key is configured"""
        return self.api_key is not None and len(self.api_key) > 0

    async def fetch_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        GET a Finnhub endpoint and decode its JSON body

        Raises:
            FinnhubAPIError: on a non-2xx response
            aiohttp.ClientError: on network failure
        """
        query = dict(params or {})
        query["token"] = self.api_key or ""
        url = f"{self.BASE_URL}{path}"

        if self._session is not None:
            return await self._get(self._session, url, path, query)

        async with aiohttp.ClientSession() as session:
            return await self._get(session, url, path, query)

    async def _get(self, session: aiohttp.ClientSession, url: str, path: str, params: Dict[str, Any]) -> Any:
        async with session.get(url, params=params) as response:
            if response.status < 200 or response.status >= 300:
                raise FinnhubAPIError(response.status, path)
            return await response.json()

    async def get_company_news(self, symbol: str, from_date: str, to_date: str) -> List[Dict[str, Any]]:
        """Get company news for a symbol between two dates (inclusive)"""
        data = await self.fetch_json(
            "/company-news",
            {"symbol": self.normalize_symbol(symbol), "from": from_date, "to": to_date},
        )
        return data if isinstance(data, list) else []

    async def get_market_news(self, category: str = "general") -> List[Dict[str, Any]]:
        """Get one page of market news"""
        data = await self.fetch_json("/news", {"category": category})
        return data if isinstance(data, list) else []

    async def search_symbols(self, query: str) -> List[Dict[str, Any]]:
        """Search symbols; the envelope's `result` array is returned"""
        data = await self.fetch_json("/search", {"q": query})
        if not isinstance(data, dict):
            return []
        return data.get("result") or []

    async def get_company_profile(self, symbol: str) -> Dict[str, Any]:
        """Get company profile (name, exchange, market cap, ...)"""
        data = await self.fetch_json("/stock/profile2", {"symbol": self.normalize_symbol(symbol)})
        return data if isinstance(data, dict) else {}

    async def get_quote(self, symbol: str) -> Dict[str, Any]:
        """Get current quote: c = current price, dp = percent change"""
        data = await self.fetch_json("/quote", {"symbol": self.normalize_symbol(symbol)})
        return data if isinstance(data, dict) else {}

    async def get_basic_financials(self, symbol: str) -> Dict[str, Any]:
        """Get the basic financials `metric` map"""
        data = await self.fetch_json(
            "/stock/metric", {"symbol": self.normalize_symbol(symbol), "metric": "all"}
        )
        return data if isinstance(data, dict) else {}

    def get_rate_limit_info(self) -> dict:
        """Finnhub rate limits"""
        return {
            "provider": self.name,
            "calls_per_minute": 60,
            "calls_per_day": "Unlimited on free tier",
            "requires_api_key": True,
            "cost": "Free tier available",
            "websocket_available": True
        }
