"""
Celery Background Tasks
"""

from .news_tasks import send_daily_news_summary
from .user_tasks import send_sign_up_email, process_user_preferences

__all__ = [
    "send_daily_news_summary",
    "send_sign_up_email",
    "process_user_preferences",
]
