"""
Integration Tests for API Endpoints
Routes, dependencies and error mapping with the services mocked out
"""

import pytest
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock, patch
from httpx import AsyncClient

from market_data.stock_metrics import WatchlistStockData
from market_data.stock_search import StockSearchResult
from news.articles import MarketNewsArticle
from news.sources import NewsFetchError
from users.models import MutationResult
from watchlist.service import WatchlistItem


def make_article(article_id, related="AAPL", ordinal=0):
    return MarketNewsArticle(
        id=article_id,
        headline=f"Headline {article_id}",
        summary="Summary",
        source="Reuters",
        url=f"https://example.com/{article_id}",
        datetime=1_760_000_000 + article_id,
        category="company",
        related=related,
        ordinal=ordinal,
    )


@pytest.fixture
def services():
    """Mocked services wired into the app's dependencies"""
    import server

    aggregator = MagicMock()
    aggregator.get_news = AsyncMock(return_value=[])

    watchlist = MagicMock()
    watchlist.get_watchlist_symbols_by_email = AsyncMock(return_value=[])
    watchlist.get_user_watchlist = AsyncMock(return_value=[])
    watchlist.add_stock_to_watchlist = AsyncMock()
    watchlist.remove_stock_from_watchlist = AsyncMock()

    users = MagicMock()
    users.save_user_preferences = AsyncMock(return_value=MutationResult(success=True))

    search = MagicMock()
    search.search_stocks = AsyncMock(return_value=[])

    metrics = MagicMock()
    metrics.get_watchlist_table_data = AsyncMock(return_value=[])

    overrides = server.app.dependency_overrides
    overrides[server.get_aggregator] = lambda: aggregator
    overrides[server.get_watchlist_service] = lambda: watchlist
    overrides[server.get_optional_watchlist_service] = lambda: watchlist
    overrides[server.get_user_service] = lambda: users
    overrides[server.get_stock_search] = lambda: search
    overrides[server.get_stock_metrics] = lambda: metrics

    return {
        "aggregator": aggregator,
        "watchlist": watchlist,
        "users": users,
        "search": search,
        "metrics": metrics,
    }


class TestHealthEndpoints:

    @pytest.mark.asyncio
    async def test_root(self, async_client: AsyncClient):
        response = await async_client.get("/api/")

        assert response.status_code == 200
        assert response.json()["message"] == "Signalist API"

    @pytest.mark.asyncio
    async def test_health_without_database(self, async_client: AsyncClient):
        response = await async_client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {"status": "degraded", "database": False}

    @pytest.mark.asyncio
    async def test_database_routes_unavailable_without_mongo(self, async_client: AsyncClient):
        response = await async_client.get("/api/watchlist", params={"email": "jane@example.com"})

        assert response.status_code == 503


class TestNewsEndpoints:

    @pytest.mark.asyncio
    async def test_symbol_news(self, async_client: AsyncClient, services):
        services["aggregator"].get_news.return_value = [make_article(1), make_article(2, "MSFT", 1)]

        response = await async_client.get("/api/news", params=[("symbols", "aapl"), ("symbols", "msft")])

        assert response.status_code == 200
        data = response.json()
        assert [item["related"] for item in data] == ["AAPL", "MSFT"]
        assert data[1]["ordinal"] == 1
        services["aggregator"].get_news.assert_awaited_once_with(["aapl", "msft"])

    @pytest.mark.asyncio
    async def test_general_news(self, async_client: AsyncClient, services):
        response = await async_client.get("/api/news")

        assert response.status_code == 200
        services["aggregator"].get_news.assert_awaited_once_with(None)

    @pytest.mark.asyncio
    async def test_fetch_failure_is_bad_gateway(self, async_client: AsyncClient, services):
        services["aggregator"].get_news.side_effect = NewsFetchError()

        response = await async_client.get("/api/news")

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to fetch news"

    @pytest.mark.asyncio
    async def test_watchlist_news(self, async_client: AsyncClient, services):
        services["watchlist"].get_watchlist_symbols_by_email.return_value = ["NVDA"]
        services["aggregator"].get_news.return_value = [make_article(5, "NVDA")]

        response = await async_client.get("/api/news/watchlist", params={"email": "jane@example.com"})

        assert response.status_code == 200
        assert response.json()[0]["related"] == "NVDA"
        services["aggregator"].get_news.assert_awaited_once_with(["NVDA"])

    @pytest.mark.asyncio
    async def test_queue_daily_summary(self, async_client: AsyncClient):
        with patch("tasks.news_tasks.send_daily_news_summary.delay") as mock_delay:
            mock_delay.return_value = MagicMock(id="task-123")

            response = await async_client.post("/api/news/summary/send")

        assert response.status_code == 200
        assert response.json() == {"status": "queued", "task_id": "task-123"}


class TestStockEndpoints:

    @pytest.mark.asyncio
    async def test_search(self, async_client: AsyncClient, services):
        services["search"].search_stocks.return_value = [
            StockSearchResult(symbol="AAPL", name="APPLE INC", exchange="AAPL", type="Common Stock")
        ]

        response = await async_client.get("/api/stocks/search", params={"q": "apple"})

        assert response.status_code == 200
        assert response.json()[0]["symbol"] == "AAPL"
        services["search"].search_stocks.assert_awaited_once_with("apple", [])

    @pytest.mark.asyncio
    async def test_search_flags_watchlist_for_email(self, async_client: AsyncClient, services):
        services["watchlist"].get_watchlist_symbols_by_email.return_value = ["AAPL"]

        response = await async_client.get("/api/stocks/search", params={"q": "apple", "email": "jane@example.com"})

        assert response.status_code == 200
        services["watchlist"].get_watchlist_symbols_by_email.assert_awaited_once_with("jane@example.com")
        services["search"].search_stocks.assert_awaited_once_with("apple", ["AAPL"])

    @pytest.mark.asyncio
    async def test_search_without_database(self, async_client: AsyncClient, services):
        import server

        server.app.dependency_overrides[server.get_optional_watchlist_service] = lambda: None

        response = await async_client.get("/api/stocks/search", params={"q": "apple", "email": "jane@example.com"})

        assert response.status_code == 200
        services["search"].search_stocks.assert_awaited_once_with("apple", [])

    def test_search_dependency_without_mongo(self):
        import server

        request = MagicMock()
        request.app.state.mongo = None

        assert server.get_optional_watchlist_service(request) is None

    @pytest.mark.asyncio
    async def test_watchlist_table(self, async_client: AsyncClient, services):
        services["watchlist"].get_watchlist_symbols_by_email.return_value = ["AAPL"]
        services["metrics"].get_watchlist_table_data.return_value = [
            WatchlistStockData(symbol="AAPL", company="Apple Inc", price_formatted="$190.50")
        ]

        response = await async_client.get("/api/watchlist/table", params={"email": "jane@example.com"})

        assert response.status_code == 200
        assert response.json()[0]["price_formatted"] == "$190.50"
        services["metrics"].get_watchlist_table_data.assert_awaited_once_with(["AAPL"])


class TestWatchlistEndpoints:

    @pytest.mark.asyncio
    async def test_get_watchlist(self, async_client: AsyncClient, services):
        services["watchlist"].get_user_watchlist.return_value = [
            WatchlistItem(
                user_id="user-1",
                symbol="AAPL",
                company="Apple Inc",
                added_at=datetime(2026, 10, 18, tzinfo=timezone.utc),
            )
        ]

        response = await async_client.get("/api/watchlist", params={"email": "jane@example.com"})

        assert response.status_code == 200
        item = response.json()[0]
        assert item["userId"] == "user-1"
        assert item["symbol"] == "AAPL"

    @pytest.mark.asyncio
    async def test_symbols(self, async_client: AsyncClient, services):
        services["watchlist"].get_watchlist_symbols_by_email.return_value = ["AAPL", "MSFT"]

        response = await async_client.get("/api/watchlist/symbols", params={"email": "jane@example.com"})

        assert response.json() == ["AAPL", "MSFT"]

    @pytest.mark.asyncio
    async def test_add(self, async_client: AsyncClient, services):
        services["watchlist"].add_stock_to_watchlist.return_value = MutationResult(
            success=True, message="AAPL added to watchlist"
        )

        response = await async_client.post(
            "/api/watchlist", json={"email": "jane@example.com", "symbol": " aapl ", "company": "Apple"}
        )

        assert response.status_code == 200
        assert response.json()["message"] == "AAPL added to watchlist"
        services["watchlist"].add_stock_to_watchlist.assert_awaited_once_with("jane@example.com", "AAPL", "Apple")

    @pytest.mark.asyncio
    async def test_add_blank_symbol_rejected(self, async_client: AsyncClient, services):
        response = await async_client.post("/api/watchlist", json={"email": "jane@example.com", "symbol": "  "})

        assert response.status_code == 422
        services["watchlist"].add_stock_to_watchlist.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_duplicate(self, async_client: AsyncClient, services):
        services["watchlist"].add_stock_to_watchlist.return_value = MutationResult(
            success=False, message="AAPL is already in your watchlist"
        )

        response = await async_client.post("/api/watchlist", json={"email": "jane@example.com", "symbol": "AAPL"})

        assert response.status_code == 400
        assert response.json()["detail"] == "AAPL is already in your watchlist"

    @pytest.mark.asyncio
    async def test_remove(self, async_client: AsyncClient, services):
        services["watchlist"].remove_stock_from_watchlist.return_value = MutationResult(
            success=True, message="AAPL removed from watchlist"
        )

        response = await async_client.delete("/api/watchlist/AAPL", params={"email": "jane@example.com"})

        assert response.status_code == 200
        services["watchlist"].remove_stock_from_watchlist.assert_awaited_once_with("jane@example.com", "AAPL")

    @pytest.mark.asyncio
    async def test_remove_missing(self, async_client: AsyncClient, services):
        services["watchlist"].remove_stock_from_watchlist.return_value = MutationResult(
            success=False, message="AAPL is not in your watchlist"
        )

        response = await async_client.delete("/api/watchlist/AAPL", params={"email": "jane@example.com"})

        assert response.status_code == 404


class TestPreferencesEndpoint:

    @pytest.mark.asyncio
    async def test_saves_and_queues_welcome(self, async_client: AsyncClient, services):
        payload = {
            "email": "jane@example.com",
            "name": "Jane",
            "country": "US",
            "investment_goals": "Growth",
            "risk_tolerance": "Medium",
            "preferred_industry": "Technology",
        }

        with patch("tasks.user_tasks.process_user_preferences.delay") as mock_delay:
            response = await async_client.post("/api/preferences", json=payload)

        assert response.status_code == 200
        assert response.json()["success"] is True
        saved = services["users"].save_user_preferences.await_args.args[1]
        assert saved.risk_tolerance == "Medium"
        queued = mock_delay.call_args.args[0]
        assert queued["email"] == "jane@example.com"
        assert queued["name"] == "Jane"
        assert queued["preferred_industry"] == "Technology"

    @pytest.mark.asyncio
    async def test_unknown_user_not_queued(self, async_client: AsyncClient, services):
        services["users"].save_user_preferences.return_value = MutationResult(
            success=False, error="User not authenticated"
        )

        with patch("tasks.user_tasks.process_user_preferences.delay") as mock_delay:
            response = await async_client.post("/api/preferences", json={"email": "ghost@example.com"})

        assert response.json()["error"] == "User not authenticated"
        mock_delay.assert_not_called()
