"""GitHub REST API client.

Provides the async httpx-based request executor every accessor runs on:
one-round-trip verbs (get/post/patch/delete) that decode JSON bodies into
pydantic models, and a Link-header page source for streaming pagination.

The client performs no retries, rate-limit pacing, or caching. Failures are
raised as GitHubClientError subclasses at the point they occur.

Reference: https://docs.github.com/en/rest
"""

import logging
import re
from collections.abc import AsyncIterator
from functools import lru_cache
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from .config import ClientConfig, get_config
from .errors import DecodeError, ResponseError, TransportError
from .labels import Labels
from .pagination import Page
from .repository import Repository
from .search import Search

logger = logging.getLogger("hubclient.client")

__all__ = ["GitHubClient"]

T = TypeVar("T")

_NEXT_LINK_RE = re.compile(r'\s*<([^>]+)>;\s*rel="next"')


@lru_cache(maxsize=256)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


def _encode_body(body: Any) -> Any:
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", exclude_none=True)
    return body


class GitHubClient:
    """GitHub REST API client using httpx.

    Uses a long-lived httpx.AsyncClient. Accessors are created from the client
    and share it; they hold no mutable state of their own.

    Attributes:
        base_url: API root (default: https://api.github.com)

    Example:
        >>> async with GitHubClient() as github:
        ...     labels = await github.labels("octocat", "hello-world").list()
        ...     async for issue in github.search().issues().iter("is:open label:bug"):
        ...         print(issue.number, issue.title)
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        headers: dict[str, str] | None = None,
        config: ClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API root, overrides config.base_url
            headers: Extra default headers sent with every request
            config: Settings to use instead of the global get_config()
            transport: Custom httpx transport (e.g. httpx.MockTransport)
        """
        self.config = config or get_config()
        self.base_url = (base_url or self.config.base_url).rstrip("/")

        default_headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": self.config.api_version,
            "User-Agent": self.config.user_agent,
        }
        if self.config.token is not None:
            default_headers["Authorization"] = (
                f"Bearer {self.config.token.get_secret_value()}"
            )
        if headers:
            default_headers.update(headers)

        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers=default_headers,
            timeout=httpx.Timeout(
                connect=self.config.connect_timeout,
                read=self.config.read_timeout,
                write=self.config.write_timeout,
                pool=self.config.pool_timeout,
            ),
            transport=transport,
        )

    async def __aenter__(self) -> "GitHubClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the httpx client and release connections."""
        await self._client.aclose()

    # --- Accessors ---

    def repo(self, owner: str, repo: str) -> Repository:
        return Repository(self, owner, repo)

    def labels(self, owner: str, repo: str) -> Labels:
        return Labels(self, owner, repo)

    def search(self) -> Search:
        return Search(self)

    # --- Request executor ---

    async def get(self, path: str, model: type[T] | Any) -> T:
        response = await self._send("GET", path)
        return self._decode(response, model)

    async def post(self, path: str, body: Any, model: type[T] | Any) -> T:
        response = await self._send("POST", path, json=_encode_body(body))
        return self._decode(response, model)

    async def patch(self, path: str, body: Any, model: type[T] | Any) -> T:
        response = await self._send("PATCH", path, json=_encode_body(body))
        return self._decode(response, model)

    async def delete(self, path: str) -> None:
        await self._send("DELETE", path)

    async def get_page(self, url: str, model: Any) -> Page[Any]:
        """Fetch and decode one page, reading the continuation from Link."""
        response = await self._send("GET", url)
        data = self._decode(response, model)
        next_url = self._parse_next_link(response.headers.get("Link", ""))
        return Page(data=data, next_url=next_url, url=url)

    async def get_pages(self, url: str, model: Any) -> AsyncIterator[Page[Any]]:
        """Yield pages starting at url, one fetch per iteration.

        The next page is requested only when the consumer asks for it.
        """
        next_url: str | None = url
        while next_url is not None:
            page = await self.get_page(next_url, model)
            yield page
            next_url = page.next_url

    # --- Core HTTP ---

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Perform one HTTP exchange and map failures onto the error taxonomy.

        Raises:
            TransportError: Network failure or timeout
            ResponseError: Non-2xx status
        """
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(
                "github_request_failed",
                extra={"method": method, "url": url, "error": str(e)},
            )
            raise TransportError(method, url, str(e) or type(e).__name__) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)

        if not response.is_success:
            try:
                error_body = response.json() if response.content else {}
            except ValueError:
                error_body = {}
            if not isinstance(error_body, dict):
                error_body = {}
            logger.warning(
                "github_response_error",
                extra={"method": method, "url": url, "status_code": response.status_code},
            )
            raise ResponseError(
                response.status_code,
                error_body.get("message") or response.text or response.reason_phrase,
                errors=error_body.get("errors"),
                documentation_url=error_body.get("documentation_url"),
            )

        return response

    def _decode(self, response: httpx.Response, model: Any) -> Any:
        url = str(response.request.url)
        try:
            payload = response.json()
        except ValueError as e:
            raise DecodeError(url, f"invalid JSON: {e}") from e
        try:
            return _adapter(model).validate_python(payload)
        except ValidationError as e:
            raise DecodeError(url, str(e)) from e

    def _parse_next_link(self, link_header: str) -> str | None:
        """Parse GitHub Link header to extract the 'next' URL.

        Format: <https://api.github.com/...?page=2>; rel="next", <...>; rel="last"

        Args:
            link_header: Raw Link header value

        Returns:
            Next page URL, or None if there is no next page or it points
            outside base_url
        """
        if not link_header:
            return None

        for part in link_header.split(","):
            match = _NEXT_LINK_RE.match(part.strip())
            if match:
                url = match.group(1)
                if not url.startswith(self.base_url + "/"):
                    logger.warning(
                        "Rejecting Link header URL not matching base_url: %.100s",
                        url,
                    )
                    return None
                return url
        return None
