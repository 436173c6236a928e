"""
Base Market Data Provider Interface
Defines the contract that market data providers must implement
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional


class BaseMarketDataProvider(ABC):
    """
    Abstract base class for market data providers
    Each provider must implement these methods
    """

    def __init__(self, name: str, api_key: Optional[str] = None):
        self.name = name
        self.api_key = api_key
        self.is_available = self._check_availability()

    @abstractmethod
    def _check_availability(self) -> bool:
        """
        Check if the provider is available (API key configured, etc.)

        Returns:
            True if provider can be used, False otherwise
        """
        pass

    @abstractmethod
    async def get_company_news(self, symbol: str, from_date: str, to_date: str) -> List[Dict[str, Any]]:
        """
        Get news published about a company within a date window

        Args:
            symbol: Stock symbol
            from_date: Window start (YYYY-MM-DD)
            to_date: Window end, inclusive (YYYY-MM-DD)

        Returns:
            Raw article payloads as returned by the provider
        """
        pass

    @abstractmethod
    async def get_market_news(self, category: str = "general") -> List[Dict[str, Any]]:
        """
        Get one page of market-wide news for a category

        Returns:
            Raw article payloads, most recent first
        """
        pass

    @abstractmethod
    async def search_symbols(self, query: str) -> List[Dict[str, Any]]:
        """
        Search listed securities by name or ticker

        Returns:
            Raw search hits
        """
        pass

    @abstractmethod
    async def get_company_profile(self, symbol: str) -> Dict[str, Any]:
        """Get the company profile for a symbol"""
        pass

    @abstractmethod
    def get_rate_limit_info(self) -> Dict[str, Any]:
        """
        Get information about rate limits for this provider

        Returns:
            Dictionary with rate limit info (calls_per_minute, calls_per_day, etc.)
        """
        pass

    def normalize_symbol(self, symbol: str) -> str:
        """
        Normalize symbol for this provider's API

        Args:
            symbol: Base symbol

        Returns:
            Normalized symbol for this provider
        """
        return symbol.upper().strip()
