"""Lazy item streams over paginated API responses.

unfold() turns a page source (anything that yields decoded pages one fetch
at a time, such as GitHubClient.get_pages) plus an extraction function into
an ItemStream: a single-pass async iterator of items that hides page
boundaries from the caller.

    >>> stream = unfold(github, "/search/issues?q=is%3Aopen", SearchResult[IssuesItem], search_items)
    >>> async with stream:
    ...     async for issue in stream:
    ...         print(issue.title)

Guarantees:
- Items come out in page order, then within-page order. Nothing is
  reordered or deduplicated.
- At most one page fetch is in flight per stream, and the next page is only
  requested after every item of the current page has been pulled.
- A failed fetch is raised exactly once; afterwards the stream is exhausted.
  Items already pulled stay valid.
- Breaking out of the loop (or calling aclose()) stops all further fetches.
"""

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator, Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, Protocol, TypeVar

logger = logging.getLogger("hubclient.pagination")

__all__ = ["ItemStream", "Page", "PageSource", "StreamState", "unfold"]

R = TypeVar("R")
T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[R]):
    """One fetched page: the decoded body plus the URL of the next page.

    Attributes:
        data: Decoded response body
        next_url: Continuation for the following page, None when exhausted
        url: URL this page was fetched from
    """

    data: R
    next_url: str | None = None
    url: str | None = None


class PageSource(Protocol):
    """Capability that produces a lazy sequence of pages starting at a URL."""

    def get_pages(self, url: str, model: Any) -> AsyncIterator[Page[Any]]: ...


class StreamState(str, Enum):
    """States of an ItemStream."""

    NEEDS_FETCH = "needs_fetch"
    HAS_BUFFERED = "has_buffered"
    DONE = "done"
    FAILED = "failed"


class ItemStream(Generic[T]):
    """Single-pass async iterator of items assembled from pages.

    Each pull performs one state transition:
    - HAS_BUFFERED: hand out the next buffered item, no I/O
    - NEEDS_FETCH: pull one page from the source and buffer its items
    - DONE / FAILED: end of stream

    Attributes:
        state: Current StreamState
        pages_fetched: Number of pages pulled from the source so far
        items_yielded: Number of items handed to the caller so far
    """

    def __init__(
        self,
        pages: AsyncIterator[Page[Any]],
        extract: Callable[[Any], Iterable[T]],
    ) -> None:
        self._pages = pages
        self._extract = extract
        self._buffer: deque[T] = deque()
        self._continuation: str | None = None
        self._fetching = False
        self._released = False
        self._closed = False
        self.state = StreamState.NEEDS_FETCH
        self.pages_fetched = 0
        self.items_yielded = 0

    def __aiter__(self) -> "ItemStream[T]":
        return self

    async def __anext__(self) -> T:
        if self._fetching:
            raise RuntimeError("ItemStream is already awaiting a page")

        while True:
            if self.state is StreamState.HAS_BUFFERED:
                item = self._buffer.popleft()
                if not self._buffer:
                    self.state = (
                        StreamState.NEEDS_FETCH
                        if self._continuation is not None
                        else StreamState.DONE
                    )
                self.items_yielded += 1
                return item

            if self.state is StreamState.NEEDS_FETCH:
                await self._fetch()
                continue

            await self._release()
            raise StopAsyncIteration

    async def _fetch(self) -> None:
        """Pull exactly one page from the source and buffer its items."""
        self._fetching = True
        try:
            page = await self._pages.__anext__()
        except StopAsyncIteration:
            self.state = StreamState.DONE
            return
        except asyncio.CancelledError:
            self.state = StreamState.DONE
            raise
        except Exception as e:
            self.state = StreamState.DONE if self._closed else StreamState.FAILED
            logger.warning(
                "item_stream_page_failed",
                extra={
                    "pages_fetched": self.pages_fetched,
                    "items_yielded": self.items_yielded,
                    "error": str(e),
                },
            )
            raise
        finally:
            self._fetching = False

        if self._closed:
            # Closed while this page was in flight: drop it
            self.state = StreamState.DONE
            await self._release()
            return

        self.pages_fetched += 1
        try:
            items = list(self._extract(page.data))
        except Exception:
            self.state = StreamState.FAILED
            raise

        self._buffer.extend(items)
        self._continuation = page.next_url
        logger.debug(
            "Fetched page %d (%d items, more=%s)",
            self.pages_fetched,
            len(items),
            page.next_url is not None,
        )

        if self._buffer:
            self.state = StreamState.HAS_BUFFERED
        elif self._continuation is None:
            self.state = StreamState.DONE
        # Empty page with a continuation: stay in NEEDS_FETCH

    async def _release(self) -> None:
        if self._released:
            return
        self._released = True
        aclose = getattr(self._pages, "aclose", None)
        if aclose is not None:
            await aclose()

    async def aclose(self) -> None:
        """Stop the stream. No further pages are fetched after this returns.

        A page already in flight is discarded when it arrives, and the page
        source is closed by the pull that was waiting on it.
        """
        self._closed = True
        self._buffer.clear()
        if self.state is not StreamState.FAILED:
            self.state = StreamState.DONE
        if self._fetching:
            return
        await self._release()

    async def __aenter__(self) -> "ItemStream[T]":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def collect(self) -> list[T]:
        """Drain the remaining items into a list.

        Raises:
            GitHubClientError: If a page fetch fails before the end
        """
        return [item async for item in self]


def unfold(
    source: PageSource,
    url: str,
    model: Any,
    extract: Callable[[Any], Iterable[T]],
) -> ItemStream[T]:
    """Build an ItemStream over every page reachable from url.

    Nothing is fetched until the first item is pulled.

    Args:
        source: Page source bound to a client, e.g. a GitHubClient
        url: Resource-root-relative URL of the first page
        model: Type each page body is decoded into
        extract: Pulls the ordered items out of one decoded page

    Returns:
        Lazy ItemStream of extracted items
    """
    return ItemStream(source.get_pages(url, model), extract)
