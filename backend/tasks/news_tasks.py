"""
News Summary Background Tasks
"""

import asyncio
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from celery_app import celery_app

logger = logging.getLogger(__name__)

MAX_ARTICLES_PER_USER = 6


def format_date_today(today: Optional[date] = None) -> str:
    """e.g. Monday, October 19, 2026"""
    today = today or date.today()
    return f"{today:%A}, {today:%B} {today.day}, {today.year}"


async def _news_for_user(user, watchlist, aggregator) -> Dict[str, Any]:
    symbols = await watchlist.get_watchlist_symbols_by_email(user.email)

    try:
        if symbols:
            news = await aggregator.get_news(symbols)
        else:
            news = await aggregator.get_news()
    except Exception as e:
        logger.error(f"Error fetching news for user {user.email}: {e}")
        news = []

    return {"user": user, "symbols": symbols, "news": news[:MAX_ARTICLES_PER_USER]}


async def run_daily_news_summary(
    users,
    watchlist,
    aggregator,
    llm,
    notifier,
    today: Optional[date] = None
) -> Dict[str, Any]:
    """
    Fetch, summarize and email each newsletter user's news.

    Args:
        users: UserService
        watchlist: WatchlistService
        aggregator: NewsAggregator
        llm: LLMFeatures
        notifier: EmailNotifier
    """
    # Step 1: all users with an email and a name
    recipients = await users.get_all_users_for_news_email()
    if not recipients:
        return {"success": False, "message": "No users found for news delivery"}

    # Step 2: watchlist news, or general news when the watchlist is empty
    news_data = await asyncio.gather(
        *(_news_for_user(user, watchlist, aggregator) for user in recipients)
    )

    # Step 3: one summary per user; a failure only affects that user
    summaries: List[Dict[str, Any]] = []
    for entry in news_data:
        user = entry["user"]
        try:
            content = await llm.summarize_news(entry["news"])
        except Exception as e:
            logger.error(f"Error summarizing news for user {user.email}: {e}")
            content = None
        summaries.append({"user": user, "content": content})

    # Step 4: send
    date_label = format_date_today(today)

    async def send(entry) -> bool:
        user = entry["user"]
        if not entry["content"]:
            logger.info(f"No news content to send for user: {user.email}")
            return False
        return await asyncio.to_thread(
            notifier.send_news_summary_email, user.email, date_label, entry["content"]
        )

    results = await asyncio.gather(*(send(entry) for entry in summaries))
    sent = sum(1 for ok in results if ok)

    logger.info(f"Daily news summary: {sent}/{len(recipients)} emails sent")
    return {
        "success": True,
        "message": "News summary emails sent successfully",
        "sent": sent,
        "users": len(recipients),
    }


async def _run_with_database() -> Dict[str, Any]:
    from database.mongo_client import MongoDatabase
    from users.service import UserService
    from watchlist.service import WatchlistService
    from news.sources import NewsAggregator
    from llm_features import get_llm_features
    from notifications.email_notifier import get_email_notifier

    async with MongoDatabase.from_env() as mongo:
        users = UserService(mongo.db)
        return await run_daily_news_summary(
            users=users,
            watchlist=WatchlistService(mongo.db, users),
            aggregator=NewsAggregator(),
            llm=get_llm_features(),
            notifier=get_email_notifier(),
        )


@celery_app.task(bind=True, max_retries=3)
def send_daily_news_summary(self):
    """
    Email every user an AI summary of their watchlist news.
    Runs every day at 12:00 UTC.
    """
    try:
        logger.info("Sending daily news summary...")
        return asyncio.run(_run_with_database())
    except Exception as e:
        logger.error(f"Daily news summary failed: {e}")
        raise self.retry(exc=e, countdown=60)
