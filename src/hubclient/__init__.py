"""hubclient - typed async client for the GitHub REST API.

Provides:
- GitHubClient: httpx-based request executor and page source
- Resource accessors: Labels, Repository, Search (issues, repositories)
- Query option builders with deterministic serialization
- ItemStream: lazy, ordered, cancellable streams over paginated results

Python Version: 3.10+ required
"""

from .__version__ import __version__
from .client import GitHubClient
from .config import ClientConfig, get_config, reset_config
from .errors import DecodeError, GitHubClientError, ResponseError, TransportError
from .labels import Label, LabelOptions, Labels
from .logging_config import StructuredFormatter, configure_logging
from .models import SearchResult, User, search_items
from .options import QueryOptions, QueryOptionsBuilder, SortDirection
from .pagination import ItemStream, Page, StreamState, unfold
from .repository import Repository
from .search import (
    IssuesItem,
    IssuesSort,
    PullRequestInfo,
    RepoItem,
    ReposSort,
    Search,
    SearchIssues,
    SearchIssuesOptions,
    SearchRepos,
    SearchReposOptions,
)

__all__ = [
    "ClientConfig",
    "DecodeError",
    "GitHubClient",
    "GitHubClientError",
    "IssuesItem",
    "IssuesSort",
    "ItemStream",
    "Label",
    "LabelOptions",
    "Labels",
    "Page",
    "PullRequestInfo",
    "QueryOptions",
    "QueryOptionsBuilder",
    "RepoItem",
    "ReposSort",
    "Repository",
    "ResponseError",
    "Search",
    "SearchIssues",
    "SearchIssuesOptions",
    "SearchRepos",
    "SearchReposOptions",
    "SearchResult",
    "SortDirection",
    "StreamState",
    "StructuredFormatter",
    "TransportError",
    "User",
    "__version__",
    "configure_logging",
    "get_config",
    "reset_config",
    "search_items",
    "unfold",
]
