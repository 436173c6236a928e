"""
Database utilities for Signalist
"""

from .mongo_client import MongoDatabase, DatabaseNotConnectedError

__all__ = ["MongoDatabase", "DatabaseNotConnectedError"]
