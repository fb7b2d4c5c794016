"""Unit tests for GitHub API client.

Tests GitHubClient with:
- Default headers and configuration
- Single-request verbs and typed decoding
- Error taxonomy (transport, non-success response, decode)
- Link header parsing and page source behavior
- Context manager support
"""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from helpers import BASE_URL, RecordingHandler, label_json, link_next

from hubclient.client import GitHubClient
from hubclient.config import ClientConfig
from hubclient.errors import DecodeError, GitHubClientError, ResponseError, TransportError
from hubclient.labels import Label, LabelOptions


# =============================================================================
# Configuration Tests
# =============================================================================


class TestClientConfiguration:
    """Test client initialization and configuration."""

    def test_default_headers(self, make_github):
        github = make_github(RecordingHandler())
        headers = github._client.headers
        assert headers["Accept"] == "application/vnd.github+json"
        assert headers["X-GitHub-Api-Version"] == "2022-11-28"
        assert headers["User-Agent"].startswith("hubclient/")
        assert "Authorization" not in headers

    def test_token_sets_bearer_header(self):
        config = ClientConfig(_env_file=None, token="ghp_test_token_123")
        github = GitHubClient(config=config)
        assert github._client.headers["Authorization"] == "Bearer ghp_test_token_123"

    def test_extra_headers_override_defaults(self, make_github):
        github = make_github(RecordingHandler(), headers={"User-Agent": "custom/1.0"})
        assert github._client.headers["User-Agent"] == "custom/1.0"

    def test_base_url_default(self, make_github):
        assert make_github(RecordingHandler()).base_url == "https://api.github.com"

    def test_base_url_custom(self, make_github):
        github = make_github(RecordingHandler(), base_url="https://github.example.com/api/v3/")
        assert github.base_url == "https://github.example.com/api/v3"

    def test_timeout_configuration(self, make_github):
        timeout = make_github(RecordingHandler())._client.timeout
        assert timeout.connect == 5.0
        assert timeout.read == 30.0
        assert timeout.write == 5.0
        assert timeout.pool == 5.0

    @pytest.mark.asyncio
    async def test_enterprise_base_url_path_joined(self, make_github):
        handler = RecordingHandler(httpx.Response(200, json=[]))
        github = make_github(handler, base_url="https://github.example.com/api/v3")
        await github.get("/repos/o/r/labels", list[Label])
        assert str(handler.requests[0].url) == "https://github.example.com/api/v3/repos/o/r/labels"


class TestContextManager:
    """Test async context manager support."""

    @pytest.mark.asyncio
    async def test_close_called_on_exit(self, make_github):
        github = make_github(RecordingHandler())
        with patch.object(github, "close", new=AsyncMock()) as mock_close:
            async with github:
                pass
        mock_close.assert_called_once()

    @pytest.mark.asyncio
    async def test_manual_close(self, make_github):
        github = make_github(RecordingHandler())
        with patch.object(github._client, "aclose", new=AsyncMock()) as mock_aclose:
            await github.close()
        mock_aclose.assert_called_once()


# =============================================================================
# Request Executor Tests
# =============================================================================


class TestVerbs:
    """Test get/post/patch/delete."""

    @pytest.mark.asyncio
    async def test_get_decodes_into_model(self, make_github):
        handler = RecordingHandler(httpx.Response(200, json=[label_json("bug"), label_json("docs")]))
        github = make_github(handler)

        labels = await github.get("/repos/foo/bar/labels", list[Label])

        assert [label.name for label in labels] == ["bug", "docs"]
        assert isinstance(labels[0], Label)
        assert handler.requests[0].method == "GET"

    @pytest.mark.asyncio
    async def test_post_serializes_model_body(self, make_github):
        handler = RecordingHandler(httpx.Response(201, json=label_json("new", "00ff00")))
        github = make_github(handler)

        label = await github.post("/repos/foo/bar/labels", LabelOptions.new("new", "00ff00"), Label)

        assert label.color == "00ff00"
        assert handler.requests[0].method == "POST"
        assert handler.bodies[0] == {"name": "new", "color": "00ff00"}

    @pytest.mark.asyncio
    async def test_patch_passes_dict_body_through(self, make_github):
        handler = RecordingHandler(httpx.Response(200, json=label_json("x")))
        github = make_github(handler)

        await github.patch("/repos/foo/bar/labels/x", {"name": "x", "color": "ffffff"}, Label)

        assert handler.requests[0].method == "PATCH"
        assert handler.bodies[0] == {"name": "x", "color": "ffffff"}

    @pytest.mark.asyncio
    async def test_delete_returns_none(self, make_github):
        handler = RecordingHandler(httpx.Response(204))
        github = make_github(handler)

        assert await github.delete("/repos/foo/bar/labels/x") is None
        assert handler.requests[0].method == "DELETE"

    @pytest.mark.asyncio
    async def test_one_round_trip_only(self, make_github):
        handler = RecordingHandler(httpx.Response(500, json={"message": "oops"}))
        github = make_github(handler)

        with pytest.raises(ResponseError):
            await github.get("/user", dict)
        assert len(handler.requests) == 1


class TestErrorHandling:
    """Test mapping of failures onto the error taxonomy."""

    @pytest.mark.asyncio
    async def test_non_success_raises_response_error(self, make_github):
        body = {
            "message": "Validation Failed",
            "errors": [{"resource": "Label", "code": "already_exists", "field": "name"}],
            "documentation_url": "https://docs.github.com/rest/issues/labels#create-a-label",
        }
        github = make_github(RecordingHandler(httpx.Response(422, json=body)))

        with pytest.raises(ResponseError) as exc_info:
            await github.post("/repos/foo/bar/labels", LabelOptions.new("bug", "ff0000"), Label)

        err = exc_info.value
        assert err.status_code == 422
        assert err.message == "Validation Failed"
        assert err.errors[0]["code"] == "already_exists"
        assert err.documentation_url.endswith("#create-a-label")
        assert isinstance(err, GitHubClientError)

    @pytest.mark.asyncio
    async def test_non_json_error_body_uses_text(self, make_github):
        github = make_github(RecordingHandler(httpx.Response(502, text="Bad gateway")))
        with pytest.raises(ResponseError) as exc_info:
            await github.get("/user", dict)
        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad gateway"

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self, make_github):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        github = make_github(handler)
        with pytest.raises(TransportError) as exc_info:
            await github.get("/user", dict)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.method == "GET"

    @pytest.mark.asyncio
    async def test_timeout_wrapped(self, make_github):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        github = make_github(handler)
        with pytest.raises(TransportError):
            await github.get("/user", dict)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_decode_error(self, make_github):
        github = make_github(RecordingHandler(httpx.Response(200, text="<html>")))
        with pytest.raises(DecodeError):
            await github.get("/repos/foo/bar/labels", list[Label])

    @pytest.mark.asyncio
    async def test_schema_mismatch_raises_decode_error(self, make_github):
        github = make_github(RecordingHandler(httpx.Response(200, json=[{"name": "bug"}])))
        with pytest.raises(DecodeError) as exc_info:
            await github.get("/repos/foo/bar/labels", list[Label])
        assert "labels" in exc_info.value.url


# =============================================================================
# Pagination Tests
# =============================================================================


class TestParseLinkHeader:
    """Test Link header parsing."""

    def test_parse_next_link_present(self, make_github):
        github = make_github(RecordingHandler())
        header = (
            '<https://api.github.com/search/issues?q=x&page=2>; rel="next", '
            '<https://api.github.com/search/issues?q=x&page=5>; rel="last"'
        )
        assert github._parse_next_link(header) == "https://api.github.com/search/issues?q=x&page=2"

    def test_parse_next_link_not_first(self, make_github):
        github = make_github(RecordingHandler())
        header = (
            '<https://api.github.com/x?page=1>; rel="prev", '
            '<https://api.github.com/x?page=3>; rel="next"'
        )
        assert github._parse_next_link(header) == "https://api.github.com/x?page=3"

    def test_parse_next_link_absent(self, make_github):
        github = make_github(RecordingHandler())
        header = '<https://api.github.com/x?page=5>; rel="last"'
        assert github._parse_next_link(header) is None

    def test_parse_next_link_empty(self, make_github):
        assert make_github(RecordingHandler())._parse_next_link("") is None

    def test_rejects_foreign_host(self, make_github):
        github = make_github(RecordingHandler())
        header = '<https://evil.example.com/x?page=2>; rel="next"'
        assert github._parse_next_link(header) is None


class TestGetPages:
    """Test the Link-header page source."""

    @pytest.mark.asyncio
    async def test_follows_next_links_lazily(self, make_github):
        page2 = f"{BASE_URL}/repos/foo/bar/labels?page=2"
        handler = RecordingHandler(
            httpx.Response(200, json=[label_json("a")], headers=link_next(page2)),
            httpx.Response(200, json=[label_json("b")]),
        )
        github = make_github(handler)

        pages = github.get_pages("/repos/foo/bar/labels", list[Label])
        first = await pages.__anext__()
        assert len(handler.requests) == 1
        assert first.next_url == page2
        assert first.data[0].name == "a"

        second = await pages.__anext__()
        assert second.next_url is None
        assert str(handler.requests[1].url) == page2

        with pytest.raises(StopAsyncIteration):
            await pages.__anext__()
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_get_page_records_url(self, make_github):
        handler = RecordingHandler(httpx.Response(200, json=[]))
        github = make_github(handler)
        page = await github.get_page("/repos/foo/bar/labels", list[Label])
        assert page.url == "/repos/foo/bar/labels"
        assert page.data == []
