"""Wire representations shared across resources.

Response models ignore unknown fields so new API attributes never break
decoding; only the fields listed here are required or typed.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

__all__ = ["SearchResult", "User", "search_items"]

D = TypeVar("D")


class User(BaseModel):
    """Account summary embedded in issues, repositories, and comments."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    login: str
    id: int
    url: str
    html_url: str
    avatar_url: str | None = None
    gravatar_id: str | None = None
    type: str | None = None
    site_admin: bool = False


class SearchResult(BaseModel, Generic[D]):
    """One decoded page of a search endpoint.

    total_count and incomplete_results describe the whole query as reported
    on this page; they are not accumulated across pages.
    """

    model_config = ConfigDict(extra="ignore")

    total_count: int
    incomplete_results: bool
    items: list[D]


def search_items(result: SearchResult[D]) -> list[D]:
    """Extraction function for search pages."""
    return result.items
