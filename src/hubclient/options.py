"""Query option builders shared by paginated and filterable endpoints.

Each endpoint gets a builder with one chained setter per recognized query
parameter. Setters validate and normalize their argument, and build()
snapshots the accumulated parameters into an immutable QueryOptions value:

    >>> options = (
    ...     SearchIssuesOptions.builder()
    ...     .sort(IssuesSort.COMMENTS)
    ...     .order(SortDirection.DESC)
    ...     .per_page(50)
    ...     .build()
    ... )
    >>> options.serialize()
    'sort=comments&order=desc&per_page=50'

Parameters serialize in insertion order. Setting a key twice keeps its
original position and the last value.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Iterable, TypeVar
from urllib.parse import quote, urlencode

__all__ = [
    "MAX_PER_PAGE",
    "QueryOptions",
    "QueryOptionsBuilder",
    "SortDirection",
    "build_search_uri",
    "encode_pairs",
]

# GitHub caps page size at 100 for every list and search endpoint
MAX_PER_PAGE = 100

_B = TypeVar("_B", bound="QueryOptionsBuilder")


class SortDirection(str, Enum):
    """Sort direction for sortable endpoints."""

    ASC = "asc"
    DESC = "desc"

    def __str__(self) -> str:
        return self.value


def encode_pairs(pairs: Iterable[tuple[str, str]]) -> str:
    """Percent-encode key/value pairs as key=value&key=value.

    Uses RFC 3986 quoting with no safe characters, so spaces become %20 and
    reserved characters such as '&', '=', '/' and ':' are escaped.
    """
    return urlencode(list(pairs), quote_via=quote, safe="")


def build_search_uri(path: str, q: str, options: "QueryOptions | None" = None) -> str:
    """Join a search path, serialized options, and the free-text query.

    The query goes under the reserved key q and is always appended last:

        >>> build_search_uri("/search/issues", "is:open", None)
        '/search/issues?q=is%3Aopen'
    """
    q_pair = encode_pairs([("q", q)])
    query = options.serialize() if options is not None else None
    if query:
        return f"{path}?{query}&{q_pair}"
    return f"{path}?{q_pair}"


@dataclass(frozen=True)
class QueryOptions:
    """Immutable, ordered set of query parameters for one endpoint call."""

    params: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        # Collapse duplicate keys: first position, last value
        merged = dict(self.params)
        if len(merged) != len(self.params):
            object.__setattr__(self, "params", tuple(merged.items()))

    def __len__(self) -> int:
        return len(self.params)

    def get(self, key: str, default: str | None = None) -> str | None:
        for name, value in self.params:
            if name == key:
                return value
        return default

    def as_dict(self) -> dict[str, str]:
        return dict(self.params)

    def serialize(self) -> str | None:
        """Serialize options as a query string.

        Returns:
            None when no options are set, otherwise the percent-encoded
            key=value pairs joined with '&' (no leading '?').
        """
        if not self.params:
            return None
        return encode_pairs(self.params)


class QueryOptionsBuilder:
    """Mutable accumulator for QueryOptions.

    Subclasses add endpoint-specific setters and point options_class at the
    immutable value type build() should produce.
    """

    options_class: ClassVar[type[QueryOptions]] = QueryOptions

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def _set(self: _B, key: str, value: str) -> _B:
        self._params[key] = value
        return self

    def per_page(self: _B, n: int) -> _B:
        """Number of results per page (1-100)."""
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"per_page must be an int, got {type(n).__name__}")
        if not 1 <= n <= MAX_PER_PAGE:
            raise ValueError(f"per_page must be between 1 and {MAX_PER_PAGE}, got {n}")
        return self._set("per_page", str(n))

    def page(self: _B, n: int) -> _B:
        """1-based page number to start from."""
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"page must be an int, got {type(n).__name__}")
        if n < 1:
            raise ValueError(f"page must be >= 1, got {n}")
        return self._set("page", str(n))

    def build(self) -> QueryOptions:
        return self.options_class(tuple(self._params.items()))
