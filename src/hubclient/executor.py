"""Request executor contract consumed by resource accessors.

Accessors depend only on this protocol, never on a concrete transport.
GitHubClient is the httpx implementation; tests substitute fakes.
"""

from collections.abc import AsyncIterator
from typing import Any, Protocol, TypeVar

from .pagination import Page, PageSource

__all__ = ["RequestExecutor"]

T = TypeVar("T")


class RequestExecutor(PageSource, Protocol):
    """One-round-trip verbs plus the page source used for streaming.

    All paths are resource-root-relative, e.g. /repos/{owner}/{repo}/labels.
    """

    async def get(self, path: str, model: type[T] | Any) -> T: ...

    async def post(self, path: str, body: Any, model: type[T] | Any) -> T: ...

    async def patch(self, path: str, body: Any, model: type[T] | Any) -> T: ...

    async def delete(self, path: str) -> None: ...

    def get_pages(self, url: str, model: Any) -> AsyncIterator[Page[Any]]: ...
