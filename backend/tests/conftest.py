"""
Pytest Configuration and Fixtures
"""

import pytest
import sys
import os
from unittest.mock import MagicMock, AsyncMock

# Add backend to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

BASE_TS = 1_760_000_000


def make_raw_article(article_id, ts=None, **overrides):
    """Provider-shaped article payload"""
    article = {
        "id": article_id,
        "headline": f"Headline {article_id}",
        "summary": f"Summary for article {article_id}",
        "source": "Reuters",
        "url": f"https://example.com/news/{article_id}",
        "datetime": ts if ts is not None else BASE_TS + article_id,
        "category": "company",
        "related": "",
        "image": "",
    }
    article.update(overrides)
    return article


# ============================================================================
# Provider Fixtures
# ============================================================================

@pytest.fixture
def mock_provider():
    """Market data provider with every endpoint mocked"""
    provider = MagicMock()
    provider.is_available = True
    provider.get_company_news = AsyncMock(return_value=[])
    provider.get_market_news = AsyncMock(return_value=[])
    provider.search_symbols = AsyncMock(return_value=[])
    provider.get_company_profile = AsyncMock(return_value={})
    provider.get_quote = AsyncMock(return_value={})
    provider.get_basic_financials = AsyncMock(return_value={})
    return provider


# ============================================================================
# MongoDB Fixtures
# ============================================================================

class FakeCursor:
    """Minimal Motor cursor: sort() and to_list()"""

    def __init__(self, docs):
        self.docs = list(docs)

    def sort(self, key, direction):
        self.docs.sort(key=lambda d: d.get(key), reverse=direction < 0)
        return self

    async def to_list(self, length=None):
        return list(self.docs)


@pytest.fixture
def mock_db():
    """Database object whose collections are MagicMocks with async methods"""
    collections = {}

    def get_collection(name):
        if name not in collections:
            collection = MagicMock()
            collection.find_one = AsyncMock(return_value=None)
            collection.find = MagicMock(return_value=FakeCursor([]))
            collection.insert_one = AsyncMock()
            collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=0))
            collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))
            collection.create_index = AsyncMock()
            collections[name] = collection
        return collections[name]

    db = MagicMock()
    db.__getitem__.side_effect = get_collection
    return db


@pytest.fixture
def sample_user():
    return {"_id": "abc123", "id": "user-1", "email": "jane@example.com", "name": "Jane"}


@pytest.fixture
def raw_article():
    """Factory for provider-shaped article payloads"""
    return make_raw_article


@pytest.fixture
def cursor():
    """Factory for FakeCursor results"""
    return FakeCursor


# ============================================================================
# API Fixtures
# ============================================================================

@pytest.fixture
async def async_client():
    """Create async HTTP client for API testing"""
    from httpx import AsyncClient, ASGITransport
    from server import app

    # ASGITransport skips startup, so no MongoDB connection is attempted
    app.state.mongo = None
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
