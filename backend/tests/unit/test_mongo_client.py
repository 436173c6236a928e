"""
Unit Tests for the MongoDB Connection Handle
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from database.mongo_client import DatabaseNotConnectedError, MongoDatabase


class TestMongoDatabase:

    def test_db_before_connect_raises(self):
        handle = MongoDatabase("mongodb://localhost:27017")

        assert not handle.is_connected
        with pytest.raises(DatabaseNotConnectedError):
            handle.db

    def test_from_env_requires_url(self):
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ValueError, match="MONGO_URL"):
                MongoDatabase.from_env()

    def test_from_env_reads_db_name(self):
        env = {"MONGO_URL": "mongodb://db:27017", "DB_NAME": "signalist_test"}
        with patch.dict(os.environ, env, clear=True):
            handle = MongoDatabase.from_env()

        assert handle.mongo_url == "mongodb://db:27017"
        assert handle.db_name == "signalist_test"

    def test_from_env_default_db_name(self):
        with patch.dict(os.environ, {"MONGO_URL": "mongodb://db:27017"}, clear=True):
            assert MongoDatabase.from_env().db_name == "signalist"

    @patch("database.mongo_client.AsyncIOMotorClient")
    def test_connect_and_close(self, mock_client_cls):
        client = MagicMock()
        mock_client_cls.return_value = client
        handle = MongoDatabase("mongodb://localhost:27017", "signalist")

        db = handle.connect()

        assert handle.is_connected
        assert db is client["signalist"]
        assert handle.db is db
        # a second connect reuses the client
        handle.connect()
        mock_client_cls.assert_called_once_with("mongodb://localhost:27017", serverSelectionTimeoutMS=5000)

        handle.close()

        client.close.assert_called_once()
        assert not handle.is_connected
        with pytest.raises(DatabaseNotConnectedError):
            handle.db

    @pytest.mark.asyncio
    async def test_ping_when_not_connected(self):
        assert await MongoDatabase("mongodb://localhost:27017").ping() is False

    @pytest.mark.asyncio
    @patch("database.mongo_client.AsyncIOMotorClient")
    async def test_ping(self, mock_client_cls):
        client = MagicMock()
        client.admin.command = AsyncMock(return_value={"ok": 1})
        mock_client_cls.return_value = client
        handle = MongoDatabase("mongodb://localhost:27017")
        handle.connect()

        assert await handle.ping() is True
        client.admin.command.assert_awaited_once_with("ping")

        client.admin.command.side_effect = ConnectionError("unreachable")
        assert await handle.ping() is False

    @pytest.mark.asyncio
    @patch("database.mongo_client.AsyncIOMotorClient")
    async def test_async_context_manager(self, mock_client_cls):
        client = MagicMock()
        mock_client_cls.return_value = client

        async with MongoDatabase("mongodb://localhost:27017") as handle:
            assert handle.is_connected

        assert not handle.is_connected
        client.close.assert_called_once()
