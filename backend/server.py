from fastapi import FastAPI, APIRouter, Depends, HTTPException, Query, Request
from dotenv import load_dotenv
from starlette.middleware.cors import CORSMiddleware
import os
import logging
from pathlib import Path
from pydantic import BaseModel, field_validator
from typing import List, Optional

from database.mongo_client import MongoDatabase
from data_providers.finnhub_provider import FinnhubProvider
from news.articles import MarketNewsArticle
from news.sources import NewsAggregator, NewsFetchError
from market_data.stock_search import StockSearch, StockSearchResult
from market_data.stock_metrics import StockMetricsService, WatchlistStockData
from users.models import MutationResult, UserPreferences
from users.service import UserService
from watchlist.service import WatchlistItem, WatchlistService

ROOT_DIR = Path(__file__).parent
load_dotenv(ROOT_DIR / '.env')

# Create the main app without a prefix
app = FastAPI(title="Signalist API")

# Add CORS middleware FIRST - before any routes
app.add_middleware(
    CORSMiddleware,
    allow_credentials=True,
    allow_origins=os.environ.get('CORS_ORIGINS', 'http://localhost:3000').split(','),
    allow_methods=["*"],
    allow_headers=["*"],
)

# Create a router with the /api prefix
api_router = APIRouter(prefix="/api")

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============ MODELS ============

class WatchlistAddRequest(BaseModel):
    email: str
    symbol: str
    company: str = ""

    @field_validator('symbol')
    @classmethod
    def validate_symbol(cls, v):
        """Validate stock symbol format"""
        v = (v or "").strip().upper()
        if not v:
            raise ValueError("Symbol must be a non-empty string")
        return v


class PreferencesRequest(BaseModel):
    email: str
    name: str = ""
    country: Optional[str] = None
    investment_goals: Optional[str] = None
    risk_tolerance: Optional[str] = None
    preferred_industry: Optional[str] = None


# ============ DEPENDENCIES ============

def get_mongo(request: Request) -> MongoDatabase:
    mongo = getattr(request.app.state, "mongo", None)
    if mongo is None:
        raise HTTPException(status_code=503, detail="Database not configured")
    return mongo


def get_user_service(mongo: MongoDatabase = Depends(get_mongo)) -> UserService:
    return UserService(mongo.db)


def get_watchlist_service(users: UserService = Depends(get_user_service)) -> WatchlistService:
    return WatchlistService(users.db, users)


def get_optional_watchlist_service(request: Request) -> Optional[WatchlistService]:
    """Watchlist service, or None when no database is configured"""
    mongo = getattr(request.app.state, "mongo", None)
    if mongo is None:
        return None
    return WatchlistService(mongo.db)


def get_provider(request: Request) -> FinnhubProvider:
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        provider = FinnhubProvider()
        request.app.state.provider = provider
    return provider


def get_aggregator(provider: FinnhubProvider = Depends(get_provider)) -> NewsAggregator:
    return NewsAggregator(provider)


def get_stock_search(provider: FinnhubProvider = Depends(get_provider)) -> StockSearch:
    return StockSearch(provider)


def get_stock_metrics(provider: FinnhubProvider = Depends(get_provider)) -> StockMetricsService:
    return StockMetricsService(provider)


# ============ LIFECYCLE ============

@app.on_event("startup")
async def startup_event():
    app.state.provider = FinnhubProvider()
    if not app.state.provider.is_available:
        logger.warning("FINNHUB_API_KEY not configured; search will return no results")

    try:
        app.state.mongo = MongoDatabase.from_env()
    except ValueError as e:
        logger.warning(f"MongoDB disabled: {e}")
        app.state.mongo = None
        return

    db = app.state.mongo.connect()
    try:
        await WatchlistService(db).ensure_indexes()
        logger.info("MongoDB indexes created successfully")
    except Exception as e:
        logger.warning(f"Failed to create MongoDB indexes: {e}")


@app.on_event("shutdown")
async def shutdown_event():
    mongo = getattr(app.state, "mongo", None)
    if mongo is not None:
        mongo.close()


@api_router.get("/")
async def root():
    return {"message": "Signalist API", "version": "1.0.0"}


@api_router.get("/health")
async def health(request: Request):
    mongo = getattr(request.app.state, "mongo", None)
    database_ok = await mongo.ping() if mongo is not None else False
    return {"status": "ok" if database_ok else "degraded", "database": database_ok}

# ============ NEWS ENDPOINTS ============

@api_router.get("/news", response_model=List[MarketNewsArticle])
async def get_news(
    symbols: Optional[List[str]] = Query(None),
    aggregator: NewsAggregator = Depends(get_aggregator)
):
    """Latest news for the given symbols, or general market news"""
    try:
        return await aggregator.get_news(symbols)
    except NewsFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))


@api_router.get("/news/watchlist", response_model=List[MarketNewsArticle])
async def get_watchlist_news(
    email: str,
    watchlist: WatchlistService = Depends(get_watchlist_service),
    aggregator: NewsAggregator = Depends(get_aggregator)
):
    """News for the user's watchlist (general news when it is empty)"""
    symbols = await watchlist.get_watchlist_symbols_by_email(email)
    try:
        return await aggregator.get_news(symbols)
    except NewsFetchError as e:
        raise HTTPException(status_code=502, detail=str(e))


@api_router.post("/news/summary/send")
async def trigger_daily_news_summary():
    """Queue the daily news summary job now"""
    from tasks.news_tasks import send_daily_news_summary

    try:
        result = send_daily_news_summary.delay()
        return {"status": "queued", "task_id": result.id}
    except Exception as e:
        logger.error(f"Failed to queue daily news summary: {e}")
        raise HTTPException(status_code=500, detail="Failed to queue news summary")

# ============ STOCK ENDPOINTS ============

@api_router.get("/stocks/search", response_model=List[StockSearchResult])
async def search_stocks(
    q: Optional[str] = None,
    email: Optional[str] = None,
    search: StockSearch = Depends(get_stock_search),
    watchlist: Optional[WatchlistService] = Depends(get_optional_watchlist_service)
):
    """Search stocks; popular stocks when q is empty"""
    watched: List[str] = []
    if email and watchlist is not None:
        watched = await watchlist.get_watchlist_symbols_by_email(email)

    return await search.search_stocks(q, watched)

# ============ WATCHLIST ENDPOINTS ============

@api_router.get("/watchlist", response_model=List[WatchlistItem])
async def get_watchlist(email: str, watchlist: WatchlistService = Depends(get_watchlist_service)):
    """Get user's watchlist"""
    return await watchlist.get_user_watchlist(email)


@api_router.get("/watchlist/symbols", response_model=List[str])
async def get_watchlist_symbols(email: str, watchlist: WatchlistService = Depends(get_watchlist_service)):
    return await watchlist.get_watchlist_symbols_by_email(email)


@api_router.get("/watchlist/table", response_model=List[WatchlistStockData])
async def get_watchlist_table(
    email: str,
    watchlist: WatchlistService = Depends(get_watchlist_service),
    metrics: StockMetricsService = Depends(get_stock_metrics)
):
    """Watchlist rows with price, change and fundamentals"""
    symbols = await watchlist.get_watchlist_symbols_by_email(email)
    return await metrics.get_watchlist_table_data(symbols)


@api_router.post("/watchlist", response_model=MutationResult)
async def add_to_watchlist(
    request: WatchlistAddRequest,
    watchlist: WatchlistService = Depends(get_watchlist_service)
):
    """Add stock to watchlist"""
    result = await watchlist.add_stock_to_watchlist(request.email, request.symbol, request.company)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.message)
    return result


@api_router.delete("/watchlist/{symbol}", response_model=MutationResult)
async def remove_from_watchlist(
    symbol: str,
    email: str,
    watchlist: WatchlistService = Depends(get_watchlist_service)
):
    """Remove stock from watchlist"""
    result = await watchlist.remove_stock_from_watchlist(email, symbol)
    if not result.success:
        raise HTTPException(status_code=404, detail=result.message)
    return result

# ============ ONBOARDING ============

@api_router.post("/preferences", response_model=MutationResult)
async def save_preferences(
    request: PreferencesRequest,
    users: UserService = Depends(get_user_service)
):
    """Store onboarding answers and queue the welcome email"""
    preferences = UserPreferences(
        country=request.country,
        investment_goals=request.investment_goals,
        risk_tolerance=request.risk_tolerance,
        preferred_industry=request.preferred_industry,
    )
    result = await users.save_user_preferences(request.email, preferences)
    if not result.success:
        return result

    try:
        from tasks.user_tasks import process_user_preferences
        process_user_preferences.delay({
            "email": request.email,
            "name": request.name,
            **preferences.model_dump(),
        })
    except Exception as e:
        logger.error(f"Error saving user preferences: {e}")
        return MutationResult(success=False, error="Failed to save preferences")

    return result


# Include the router in the main app
app.include_router(api_router)
