"""
Email Notifications
Welcome and daily news-summary emails over SMTP
"""

import logging
import os
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Dict, Optional

from .templates import NEWS_SUMMARY_EMAIL_TEMPLATE, WELCOME_EMAIL_TEMPLATE

logger = logging.getLogger(__name__)


def smtp_config_from_env() -> Optional[Dict[str, str]]:
    """SMTP settings from the environment, None when SMTP_HOST is unset"""
    host = os.getenv("SMTP_HOST")
    if not host:
        return None
    user = os.getenv("SMTP_USER", "")
    return {
        "smtp_host": host,
        "smtp_port": os.getenv("SMTP_PORT", "587"),
        "smtp_user": user,
        "smtp_password": os.getenv("SMTP_PASSWORD", ""),
        "from_email": os.getenv("EMAIL_FROM") or f"Signalist <{user}>",
    }


class EmailNotifier:
    """Send notifications via Email (requires SMTP configuration)"""

    def __init__(self, smtp_config: Optional[Dict[str, str]] = None):
        self.smtp_config = smtp_config
        self.enabled = bool(smtp_config)

    def send_email(self, to_email: str, subject: str, body: str, text: Optional[str] = None) -> bool:
        """Send an HTML email"""
        if not self.enabled:
            logger.warning("Email notifier not configured")
            return False

        try:
            msg = MIMEMultipart("alternative")
            msg['From'] = self.smtp_config['from_email']
            msg['To'] = to_email
            msg['Subject'] = subject
            if text:
                msg.attach(MIMEText(text, 'plain'))
            msg.attach(MIMEText(body, 'html'))

            with smtplib.SMTP(self.smtp_config['smtp_host'], int(self.smtp_config['smtp_port'])) as server:
                server.starttls()
                if self.smtp_config.get('smtp_user'):
                    server.login(self.smtp_config['smtp_user'], self.smtp_config['smtp_password'])
                server.send_message(msg)

            logger.info(f"Email sent to {to_email}")
            return True
        except Exception as e:
            logger.error(f"Failed to send email to {to_email}: {e}")
            return False

    def send_welcome_email(self, email: str, name: str, intro: str) -> bool:
        html = (
            WELCOME_EMAIL_TEMPLATE
            .replace("{{name}}", name)
            .replace("{{intro}}", intro)
        )
        return self.send_email(
            email,
            "Welcome to Signalist - your stock market toolkit is ready!",
            html,
            text="Thanks for joining Signalist",
        )

    def send_news_summary_email(self, email: str, date: str, news_content: str) -> bool:
        html = (
            NEWS_SUMMARY_EMAIL_TEMPLATE
            .replace("{{date}}", date)
            .replace("{{newsContent}}", news_content)
        )
        return self.send_email(
            email,
            f"📈 Market News Summary Today - {date}",
            html,
            text="Today's market news summary from Signalist",
        )


# Global instance
_email_notifier = None


def get_email_notifier() -> EmailNotifier:
    """Get or create global EmailNotifier configured from the environment"""
    global _email_notifier
    if _email_notifier is None:
        _email_notifier = EmailNotifier(smtp_config_from_env())
    return _email_notifier
