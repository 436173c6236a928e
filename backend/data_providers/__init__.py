"""
Data Providers Package
Market data access for news, search and fundamentals
"""

from .base_provider import BaseMarketDataProvider
from .finnhub_provider import FinnhubProvider, FinnhubAPIError

__all__ = [
    'BaseMarketDataProvider',
    'FinnhubProvider',
    'FinnhubAPIError',
]
