"""
LLM-Powered Features
AI-written email content:
- Personalized welcome intro for new users
- Daily market news summary
"""

import asyncio
import json
import logging
import os
from typing import Any, Dict, List, Optional, Sequence

from prompts import (
    DEFAULT_WELCOME_INTRO,
    NEWS_SUMMARY_EMAIL_PROMPT,
    NO_NEWS_SUMMARY,
    PERSONALIZED_WELCOME_EMAIL_PROMPT,
)

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "gemini"
DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash-lite",
    "openai": "gpt-4.1-mini",
}


def build_user_profile(user_data: Dict[str, Any]) -> str:
    """Profile block for the welcome prompt; missing answers read N/A"""
    def field(*keys):
        for key in keys:
            if user_data.get(key):
                return user_data[key]
        return "N/A"

    return (
        f"\n- Country: {field('country')}"
        f"\n- Investment Goals: {field('investment_goals', 'investmentGoals')}"
        f"\n- Risk Tolerance: {field('risk_tolerance', 'riskTolerance')}"
        f"\n- Preferred Industry: {field('preferred_industry', 'preferredIndustry')}\n"
    )


class LLMFeatures:
    """LLM-powered email content"""

    def __init__(
        self,
        provider: Optional[str] = None,
        api_key: Optional[str] = None,
        model: Optional[str] = None
    ):
        self.supported_providers = ['openai', 'gemini']
        self.provider = (provider or os.getenv("LLM_PROVIDER") or DEFAULT_PROVIDER).lower()
        self.api_key = api_key or os.getenv(f"{self.provider.upper()}_API_KEY")
        self.model = model or os.getenv("LLM_MODEL") or DEFAULT_MODELS.get(self.provider, "")

    async def generate_welcome_intro(self, user_data: Dict[str, Any]) -> str:
        """
        Personalized intro paragraph for the welcome email.
        Falls back to a fixed sentence on empty responses or errors.
        """
        prompt = PERSONALIZED_WELCOME_EMAIL_PROMPT.replace(
            "{{userProfile}}", build_user_profile(user_data)
        )
        try:
            response = await self._call_llm(prompt, self.api_key, self.provider, self.model)
        except Exception as e:
            logger.error(f"Welcome intro generation failed: {e}")
            return DEFAULT_WELCOME_INTRO

        return (response or "").strip() or DEFAULT_WELCOME_INTRO

    async def summarize_news(self, news: Sequence[Any]) -> str:
        """
        HTML summary of a user's news for the daily email.

        Raises whatever the provider raises; the caller decides what a
        failed summary means.
        """
        items: List[Dict[str, Any]] = [
            item.model_dump() if hasattr(item, "model_dump") else dict(item)
            for item in news
        ]
        prompt = NEWS_SUMMARY_EMAIL_PROMPT.replace("{{newsItems}}", json.dumps(items, indent=2))

        response = await self._call_llm(prompt, self.api_key, self.provider, self.model)
        return (response or "").strip() or NO_NEWS_SUMMARY

    async def _call_llm(self, prompt: str, api_key: str, provider: str, model: str) -> str:
        """Call LLM API"""
        if provider == "openai":
            import openai
            client = openai.AsyncOpenAI(api_key=api_key)

            completion = await client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
                temperature=0.7
            )
            return completion.choices[0].message.content

        elif provider == "gemini":
            from google import genai
            from google.genai import types

            client = genai.Client(api_key=api_key)

            completion = await asyncio.to_thread(
                client.models.generate_content,
                model=model,
                contents=types.Content(role="user", parts=[types.Part(text=prompt)]),
                config=types.GenerateContentConfig(temperature=0.7)
            )

            return completion.text

        else:
            raise ValueError(f"Unsupported provider: {provider}")


# Global instance
_llm_features_instance = None


def get_llm_features() -> LLMFeatures:
    """Get or create global LLM features instance"""
    global _llm_features_instance
    if _llm_features_instance is None:
        _llm_features_instance = LLMFeatures()
    return _llm_features_instance
