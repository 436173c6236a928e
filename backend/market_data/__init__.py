"""
Market Data Module
Provides stock search and watchlist table data
"""

from .stock_search import StockSearch, StockSearchResult, StockCandidate
from .stock_metrics import StockMetricsService, WatchlistStockData, parse_stock_metrics

__all__ = [
    'StockSearch',
    'StockSearchResult',
    'StockCandidate',
    'StockMetricsService',
    'WatchlistStockData',
    'parse_stock_metrics',
]
