"""
Notifications
"""

from .email_notifier import EmailNotifier, get_email_notifier, smtp_config_from_env

__all__ = ['EmailNotifier', 'get_email_notifier', 'smtp_config_from_env']
