"""
User Lifecycle Background Tasks
"""

import asyncio
import logging
from typing import Any, Dict

from celery_app import celery_app

logger = logging.getLogger(__name__)


async def run_sign_up_email(user_data: Dict[str, Any], llm, notifier) -> Dict[str, Any]:
    """Generate the personalized intro and send the welcome email"""
    intro = await llm.generate_welcome_intro(user_data)

    sent = await asyncio.to_thread(
        notifier.send_welcome_email,
        user_data["email"],
        user_data.get("name") or "",
        intro,
    )
    if not sent:
        return {"success": False, "message": "Welcome email could not be sent"}
    return {"success": True, "message": "Welcome email sent successfully"}


@celery_app.task(bind=True, max_retries=3)
def send_sign_up_email(self, user_data: Dict[str, Any]):
    """
    Welcome a new user with an AI-personalized intro.

    user_data: email, name and the onboarding answers
    (country, investment_goals, risk_tolerance, preferred_industry)
    """
    from llm_features import get_llm_features
    from notifications.email_notifier import get_email_notifier

    if not user_data.get("email"):
        return {"success": False, "message": "Missing email"}

    try:
        return asyncio.run(run_sign_up_email(user_data, get_llm_features(), get_email_notifier()))
    except Exception as e:
        logger.error(f"Sign-up email failed for {user_data.get('email')}: {e}")
        raise self.retry(exc=e, countdown=60)


@celery_app.task(bind=True)
def process_user_preferences(self, user_data: Dict[str, Any]):
    """
    Onboarding finished: preferences are stored, send the welcome email.
    """
    logger.info(f"Preferences updated for {user_data.get('email')}")
    send_sign_up_email.delay(user_data)
    return {"success": True, "email": user_data.get("email")}
