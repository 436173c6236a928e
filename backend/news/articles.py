"""
News Article Models
Raw provider articles, the validated/formatted form, and helpers
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

COMPANY_SUMMARY_LIMIT = 200
GENERAL_SUMMARY_LIMIT = 150


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


@dataclass
class RawNewsArticle:
    """Article as returned by the provider; any field may be missing"""
    id: Optional[int] = None
    headline: Optional[str] = None
    summary: Optional[str] = None
    source: Optional[str] = None
    url: Optional[str] = None
    datetime: Optional[int] = None
    category: Optional[str] = None
    related: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["RawNewsArticle"]:
        """Build from a provider JSON object, None if it is not an object"""
        if not isinstance(payload, dict):
            return None
        return cls(
            id=payload.get("id"),
            headline=payload.get("headline"),
            summary=payload.get("summary"),
            source=payload.get("source"),
            url=payload.get("url"),
            datetime=payload.get("datetime"),
            category=_optional_str(payload.get("category")),
            related=_optional_str(payload.get("related")),
            image=_optional_str(payload.get("image")),
        )


class MarketNewsArticle(BaseModel):
    """Validated, normalized article returned to callers"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    headline: str
    summary: str
    source: str
    url: str
    datetime: int
    category: str
    related: str
    image: Optional[str] = None
    ordinal: int = 0


def _non_empty(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def validate_article(article: Optional[RawNewsArticle]) -> bool:
    """
    An article is usable only with a headline, summary, source, url
    and a positive timestamp; an id, when present, must be an integer
    """
    if article is None:
        return False
    if article.id is not None and (isinstance(article.id, bool) or not isinstance(article.id, int)):
        return False
    timestamp = article.datetime
    if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp <= 0:
        return False
    return all(
        _non_empty(value)
        for value in (article.headline, article.summary, article.source, article.url)
    )


def _truncate(text: str, limit: int) -> str:
    text = text.strip()
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def format_article(
    article: RawNewsArticle,
    is_company_news: bool,
    symbol: Optional[str] = None,
    ordinal: int = 0,
) -> MarketNewsArticle:
    """
    Format a validated raw article

    Args:
        article: Raw article that passed validate_article
        is_company_news: True for symbol-scoped news
        symbol: Symbol the article was fetched for (company news only)
        ordinal: Round index for company news, output index for general news
    """
    limit = COMPANY_SUMMARY_LIMIT if is_company_news else GENERAL_SUMMARY_LIMIT

    if is_company_news:
        source = article.source or "Company News"
        category = "company"
        related = symbol or ""
    else:
        source = article.source or "Market News"
        category = article.category or "general"
        related = article.related or ""

    return MarketNewsArticle(
        id=article.id,
        headline=article.headline.strip(),
        summary=_truncate(article.summary, limit),
        source=source.strip(),
        url=article.url.strip(),
        datetime=article.datetime,
        category=category,
        related=related,
        image=article.image or None,
        ordinal=ordinal,
    )


def get_date_range(days: int, today: Optional[date] = None) -> Dict[str, str]:
    """Inclusive window ending today, as YYYY-MM-DD strings"""
    end = today or date.today()
    start = end - timedelta(days=days)
    return {"from": start.isoformat(), "to": end.isoformat()}
