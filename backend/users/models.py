"""
User-facing records
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class NewsletterUser(BaseModel):
    id: str
    email: str
    name: str


class UserPreferences(BaseModel):
    """Onboarding answers; stored camelCase on the user document"""
    model_config = ConfigDict(populate_by_name=True)

    country: Optional[str] = None
    investment_goals: Optional[str] = Field(default=None, alias="investmentGoals")
    risk_tolerance: Optional[str] = Field(default=None, alias="riskTolerance")
    preferred_industry: Optional[str] = Field(default=None, alias="preferredIndustry")

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class MutationResult(BaseModel):
    success: bool
    message: Optional[str] = None
    error: Optional[str] = None


def resolve_user_id(user: Dict[str, Any]) -> str:
    """Auth documents carry `id`, older ones only `_id`"""
    return str(user.get("id") or user.get("_id") or "")
