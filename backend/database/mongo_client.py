"""
MongoDB Connection Handle

An explicitly owned Motor client. The FastAPI app opens one on startup and
closes it on shutdown; Celery tasks open their own for the duration of a run.
Services receive the database object through their constructors.
"""

import os
import logging
from typing import Optional
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Load environment variables
load_dotenv()

DEFAULT_DB_NAME = "signalist"


class DatabaseNotConnectedError(RuntimeError):
    """Raised when the handle is used before connect() or after close()"""


class MongoDatabase:
    """Lifecycle: connect() -> ping() -> close()"""

    def __init__(
        self,
        mongo_url: str,
        db_name: str = DEFAULT_DB_NAME,
        server_selection_timeout_ms: int = 5000
    ):
        self.mongo_url = mongo_url
        self.db_name = db_name
        self.server_selection_timeout_ms = server_selection_timeout_ms
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    @classmethod
    def from_env(cls) -> "MongoDatabase":
        """
        Build a handle from MONGO_URL / DB_NAME

        Raises:
            ValueError: if MONGO_URL is not set
        """
        mongo_url = os.getenv("MONGO_URL")
        if not mongo_url:
            raise ValueError("MONGO_URL environment variable not set")
        return cls(mongo_url, os.getenv("DB_NAME", DEFAULT_DB_NAME))

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            raise DatabaseNotConnectedError("MongoDB handle is not connected")
        return self._db

    def connect(self) -> AsyncIOMotorDatabase:
        """Create the client; Motor connects lazily on first operation"""
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.mongo_url,
                serverSelectionTimeoutMS=self.server_selection_timeout_ms
            )
            self._db = self._client[self.db_name]
            logger.info(f"MongoDB client initialized for database '{self.db_name}'")
        return self._db

    async def ping(self) -> bool:
        """Health check; False when the server cannot be reached"""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
            return True
        except Exception as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    def close(self):
        """Close MongoDB client connection"""
        if self._client is not None:
            self._client.close()
            self._client = None
            self._db = None
            logger.info("MongoDB client closed")

    async def __aenter__(self) -> "MongoDatabase":
        self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.close()
