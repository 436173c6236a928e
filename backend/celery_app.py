"""
Celery Application Configuration
Background job processing for Signalist
"""

import logging
import os
from celery import Celery
from celery.schedules import crontab
from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Redis configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

# Create Celery app
celery_app = Celery(
    "signalist",
    broker=REDIS_URL,
    backend=REDIS_URL,
    include=[
        "tasks.news_tasks",
        "tasks.user_tasks",
    ]
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,

    # Task execution settings
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,

    # Result backend settings
    result_expires=3600,  # Results expire after 1 hour

    # Retry settings
    task_default_retry_delay=30,

    # Beat scheduler for periodic tasks
    beat_schedule={
        # Daily news summary email at 12:00 UTC
        "daily-news-summary": {
            "task": "tasks.news_tasks.send_daily_news_summary",
            "schedule": crontab(hour=12, minute=0),
        },
    },
)


if __name__ == "__main__":
    celery_app.start()
