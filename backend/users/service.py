"""
User lookups against the auth provider's `user` collection
"""

import logging
from typing import Any, Dict, List, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from .models import MutationResult, NewsletterUser, UserPreferences, resolve_user_id

logger = logging.getLogger(__name__)

USER_COLLECTION = "user"


class UserService:
    """Reads users and stores onboarding preferences"""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db

    @property
    def collection(self):
        return self.db[USER_COLLECTION]

    async def find_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        if not email or not email.strip():
            return None
        return await self.collection.find_one({"email": email.strip()})

    async def get_user_id_by_email(self, email: str) -> Optional[str]:
        user = await self.find_user_by_email(email)
        if not user:
            logger.info(f"No user found with email: {email}")
            return None
        return resolve_user_id(user) or None

    async def get_all_users_for_news_email(self) -> List[NewsletterUser]:
        """
        Users that can receive the newsletter: both email and name present.
        Returns an empty list on database errors.
        """
        try:
            cursor = self.collection.find(
                {"email": {"$exists": True, "$ne": None}},
                {"_id": 1, "id": 1, "email": 1, "name": 1, "country": 1}
            )
            users = await cursor.to_list(length=None)

            return [
                NewsletterUser(id=resolve_user_id(user), email=user["email"], name=user["name"])
                for user in users
                if user.get("email") and user.get("name")
            ]
        except Exception as e:
            logger.error(f"Error fetching users for news email: {e}")
            return []

    async def save_user_preferences(self, email: str, preferences: UserPreferences) -> MutationResult:
        """Persist onboarding answers on the user document"""
        if not email or not email.strip():
            return MutationResult(success=False, error="User not authenticated")

        try:
            result = await self.collection.update_one(
                {"email": email.strip()},
                {"$set": preferences.to_document()}
            )
            if result.matched_count == 0:
                return MutationResult(success=False, error="User not authenticated")
            return MutationResult(success=True)
        except Exception as e:
            logger.error(f"Error saving user preferences: {e}")
            return MutationResult(success=False, error="Failed to save preferences")
