"""Search interface.

https://docs.github.com/en/rest/search/search
"""

from dataclasses import dataclass
from typing import Any

from ..executor import RequestExecutor
from ..models import SearchResult, search_items
from ..pagination import ItemStream, unfold
from .issues import SearchIssues
from .repos import SearchRepos

__all__ = ["Search"]


@dataclass(frozen=True)
class Search:
    """Provides access to search operations.

    Holds no state beyond the executor handle, so copies are cheap and
    concurrent use from several tasks is safe.
    """

    github: RequestExecutor

    def issues(self) -> SearchIssues:
        """Return an interface for issue search."""
        return SearchIssues(self)

    def repos(self) -> SearchRepos:
        """Return an interface for repository search."""
        return SearchRepos(self)

    def iter(self, url: str, item_type: Any) -> ItemStream[Any]:
        return unfold(self.github, url, SearchResult[item_type], search_items)

    async def search(self, url: str, item_type: Any) -> SearchResult[Any]:
        return await self.github.get(url, SearchResult[item_type])
