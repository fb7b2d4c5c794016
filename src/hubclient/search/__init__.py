"""GitHub search: issues and repositories."""

from ..models import SearchResult
from .issues import (
    IssuesItem,
    IssuesSort,
    PullRequestInfo,
    SearchIssues,
    SearchIssuesOptions,
    SearchIssuesOptionsBuilder,
)
from .repos import (
    RepoItem,
    ReposSort,
    SearchRepos,
    SearchReposOptions,
    SearchReposOptionsBuilder,
)
from .search import Search

__all__ = [
    "IssuesItem",
    "IssuesSort",
    "PullRequestInfo",
    "RepoItem",
    "ReposSort",
    "Search",
    "SearchIssues",
    "SearchIssuesOptions",
    "SearchIssuesOptionsBuilder",
    "SearchRepos",
    "SearchReposOptions",
    "SearchReposOptionsBuilder",
    "SearchResult",
]
