"""Issue search.

https://docs.github.com/en/rest/search/search#search-issues-and-pull-requests
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict

from ..labels import Label
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
    "IssuesItem",
    "IssuesSort",
    "PullRequestInfo",
    "SearchIssues",
    "SearchIssuesOptions",
    "SearchIssuesOptionsBuilder",
]

SEARCH_ISSUES_PATH = "/search/issues"


class IssuesSort(str, Enum):
    """Sort keys for issue search."""

    CREATED = "created"
    UPDATED = "updated"
    COMMENTS = "comments"

    def __str__(self) -> str:
        return self.value


class SearchIssuesOptions(QueryOptions):
    """Query options for issue search: per_page, page, sort, order."""

    @classmethod
    def builder(cls) -> "SearchIssuesOptionsBuilder":
        return SearchIssuesOptionsBuilder()


class SearchIssuesOptionsBuilder(QueryOptionsBuilder):
    options_class = SearchIssuesOptions

    def sort(self, sort: IssuesSort | str) -> "SearchIssuesOptionsBuilder":
        return self._set("sort", IssuesSort(sort).value)

    def order(self, direction: SortDirection | str) -> "SearchIssuesOptionsBuilder":
        return self._set("order", SortDirection(direction).value)


class PullRequestInfo(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str
    html_url: str
    diff_url: str
    patch_url: str


class IssuesItem(BaseModel):
    """One issue (or pull request) from a search page."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    url: str
    repository_url: str
    labels_url: str
    comments_url: str
    events_url: str
    html_url: str
    id: int
    number: int
    title: str
    user: User
    labels: list[Label] = []
    state: str
    locked: bool = False
    assignee: User | None = None
    assignees: list[User] = []
    comments: int = 0
    created_at: str
    updated_at: str
    closed_at: str | None = None
    pull_request: PullRequestInfo | None = None
    body: str | None = None

    def repo_tuple(self) -> tuple[str, str]:
        """Return (owner, repo) of the repository this issue belongs to.

        Parsed from repository_url, e.g.
        https://api.github.com/repos/octocat/hello-world -> ("octocat", "hello-world").
        """
        segments = [s for s in urlsplit(self.repository_url).path.split("/") if s]
        if len(segments) < 2:
            raise ValueError(f"Unexpected repository_url: {self.repository_url!r}")
        return segments[-2], segments[-1]

    @property
    def is_pull_request(self) -> bool:
        return self.pull_request is not None


@dataclass(frozen=True)
class SearchIssues:
    """Issue search operations.

    list() returns a single page; iter() streams every item across pages.
    """

    search: "Search"
    path: str = field(default=SEARCH_ISSUES_PATH)

    def search_uri(self, q: str, options: QueryOptions | None = None) -> str:
        return build_search_uri(self.path, q, options)

    def iter(self, q: str, options: QueryOptions | None = None) -> ItemStream[IssuesItem]:
        """Return a lazy stream over every issue matching q.

        Use this interface to iterate over all items in a result set.
        """
        return self.search.iter(self.search_uri(q, options), IssuesItem)

    async def list(self, q: str, options: QueryOptions | None = None) -> SearchResult[IssuesItem]:
        """Return a single page of search results."""
        return await self.search.search(self.search_uri(q, options), IssuesItem)
