"""Repository search.

https://docs.github.com/en/rest/search/search#search-repositories
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from ..models import SearchResult, User
from ..options import (
    QueryOptions,
    QueryOptionsBuilder,
    SortDirection,
    build_search_uri,
)
from ..pagination import ItemStream

if TYPE_CHECKING:
    from .search import Search

__all__ = [
    "RepoItem",
    "ReposSort",
    "SearchRepos",
    "SearchReposOptions",
    "SearchReposOptionsBuilder",
]

SEARCH_REPOS_PATH = "/search/repositories"


class ReposSort(str, Enum):
    """Sort keys for repository search."""

    STARS = "stars"
    FORKS = "forks"
    UPDATED = "updated"

    def __str__(self) -> str:
        return self.value


class SearchReposOptions(QueryOptions):
    @classmethod
    def builder(cls) -> "SearchReposOptionsBuilder":
        return SearchReposOptionsBuilder()


class SearchReposOptionsBuilder(QueryOptionsBuilder):
    options_class = SearchReposOptions

    def sort(self, sort: ReposSort | str) -> "SearchReposOptionsBuilder":
        return self._set("sort", ReposSort(sort).value)

    def order(self, direction: SortDirection | str) -> "SearchReposOptionsBuilder":
        return self._set("order", SortDirection(direction).value)


class RepoItem(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: int
    name: str
    full_name: str
    owner: User
    private: bool = False
    html_url: str
    description: str | None = None
    fork: bool = False
    url: str
    created_at: str
    updated_at: str
    pushed_at: str | None = None
    homepage: str | None = None
    size: int = 0
    stargazers_count: int = 0
    watchers_count: int = 0
    language: str | None = None
    forks_count: int = 0
    open_issues_count: int = 0
    default_branch: str | None = None
    score: float | None = None


@dataclass(frozen=True)
class SearchRepos:
    """Repository search operations."""

    search: "Search"
    path: str = field(default=SEARCH_REPOS_PATH)

    def search_uri(self, q: str, options: QueryOptions | None = None) -> str:
        return build_search_uri(self.path, q, options)

    def iter(self, q: str, options: QueryOptions | None = None) -> ItemStream[RepoItem]:
        """Return a lazy stream over every repository matching q."""
        return self.search.iter(self.search_uri(q, options), RepoItem)

    async def list(self, q: str, options: QueryOptions | None = None) -> SearchResult[RepoItem]:
        """Return a single page of search results."""
        return await self.search.search(self.search_uri(q, options), RepoItem)
