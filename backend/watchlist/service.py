"""
Watchlist Service
Resolves an email to its user and reads/mutates that user's symbols
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError
from pydantic import BaseModel, ConfigDict, Field

from users.models import MutationResult
from users.service import UserService

logger = logging.getLogger(__name__)

WATCHLIST_COLLECTION = "watchlists"


class WatchlistItem(BaseModel):
    user_id: str = Field(alias="userId")
    symbol: str
    company: str
    added_at: datetime = Field(alias="addedAt")

    model_config = ConfigDict(populate_by_name=True)


def normalize_symbol(symbol: Optional[str]) -> str:
    return (symbol or "").strip().upper()


class WatchlistService:
    """Per-user watchlist stored one document per (userId, symbol)"""

    def __init__(self, db: AsyncIOMotorDatabase, users: Optional[UserService] = None):
        self.db = db
        self.users = users or UserService(db)

    @property
    def collection(self):
        return self.db[WATCHLIST_COLLECTION]

    async def ensure_indexes(self):
        await self.collection.create_index(
            [("userId", ASCENDING), ("symbol", ASCENDING)], unique=True
        )

    async def get_watchlist_symbols_by_email(self, email: str) -> List[str]:
        """Symbols for the user with this email; empty on unknown user or error"""
        try:
            user_id = await self.users.get_user_id_by_email(email)
            if not user_id:
                return []

            cursor = self.collection.find({"userId": user_id}, {"symbol": 1, "_id": 0})
            items = await cursor.to_list(length=None)
            return [item["symbol"] for item in items if item.get("symbol")]
        except Exception as e:
            logger.error(f"Error fetching watchlist symbols by email: {e}")
            return []

    async def get_user_watchlist(self, email: str) -> List[WatchlistItem]:
        try:
            user_id = await self.users.get_user_id_by_email(email)
            if not user_id:
                return []

            cursor = self.collection.find({"userId": user_id}, {"_id": 0}).sort("addedAt", DESCENDING)
            items = await cursor.to_list(length=None)
            return [WatchlistItem.model_validate(item) for item in items]
        except Exception as e:
            logger.error(f"Error fetching watchlist: {e}")
            return []

    async def is_stock_in_watchlist(self, email: str, symbol: str) -> bool:
        symbol = normalize_symbol(symbol)
        if not symbol:
            return False
        try:
            user_id = await self.users.get_user_id_by_email(email)
            if not user_id:
                return False
            return await self.collection.find_one({"userId": user_id, "symbol": symbol}) is not None
        except Exception as e:
            logger.error(f"Error checking watchlist status: {e}")
            return False

    async def add_stock_to_watchlist(self, email: str, symbol: str, company: str) -> MutationResult:
        symbol = normalize_symbol(symbol)
        if not symbol:
            return MutationResult(success=False, message="Invalid symbol")

        try:
            user_id = await self.users.get_user_id_by_email(email)
            if not user_id:
                return MutationResult(success=False, message="User not found")

            existing = await self.collection.find_one({"userId": user_id, "symbol": symbol})
            if existing:
                return MutationResult(success=False, message=f"{symbol} is already in your watchlist")

            await self.collection.insert_one({
                "userId": user_id,
                "symbol": symbol,
                "company": (company or "").strip() or symbol,
                "addedAt": datetime.now(timezone.utc),
            })
            return MutationResult(success=True, message=f"{symbol} added to watchlist")

        except DuplicateKeyError:
            return MutationResult(success=False, message=f"{symbol} is already in your watchlist")
        except Exception as e:
            logger.error(f"Error adding stock to watchlist: {e}")
            return MutationResult(success=False, message="Failed to add to watchlist")

    async def remove_stock_from_watchlist(self, email: str, symbol: str) -> MutationResult:
        symbol = normalize_symbol(symbol)
        if not symbol:
            return MutationResult(success=False, message="Invalid symbol")

        try:
            user_id = await self.users.get_user_id_by_email(email)
            if not user_id:
                return MutationResult(success=False, message="User not found")

            result = await self.collection.delete_one({"userId": user_id, "symbol": symbol})
            if result.deleted_count == 0:
                return MutationResult(success=False, message=f"{symbol} is not in your watchlist")
            return MutationResult(success=True, message=f"{symbol} removed from watchlist")

        except Exception as e:
            logger.error(f"Error removing stock from watchlist: {e}")
            return MutationResult(success=False, message="Failed to remove from watchlist")
