"""
Watchlist
"""

from .service import WatchlistService, WatchlistItem

__all__ = ['WatchlistService', 'WatchlistItem']
