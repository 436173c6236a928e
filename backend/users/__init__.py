"""
Users
"""

from .models import NewsletterUser, UserPreferences, MutationResult
from .service import UserService

__all__ = ['NewsletterUser', 'UserPreferences', 'MutationResult', 'UserService']
