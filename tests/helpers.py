"""Test helpers: MockTransport request recorder and GitHub-shaped payloads."""

import json

import httpx

BASE_URL = "https://api.github.com"


class RecordingHandler:
    """MockTransport handler that replays queued responses and records requests."""

    def __init__(self, *responses: httpx.Response):
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        return self.responses.pop(0)

    @property
    def bodies(self) -> list:
        return [json.loads(r.content) if r.content else None for r in self.requests]


def link_next(url: str) -> dict[str, str]:
    """Link header pointing at the next page."""
    return {"Link": f'<{url}>; rel="next", <{BASE_URL}/last>; rel="last"'}


# =============================================================================
# Sample Data Fixtures
# =============================================================================


def user_json(login: str = "octocat", user_id: int = 1) -> dict:
    return {
        "login": login,
        "id": user_id,
        "url": f"{BASE_URL}/users/{login}",
        "html_url": f"https://github.com/{login}",
        "avatar_url": f"https://avatars.githubusercontent.com/u/{user_id}",
        "type": "User",
        "site_admin": False,
    }


def label_json(name: str = "bug", color: str = "d73a4a") -> dict:
    return {
        "id": 208045946,
        "url": f"{BASE_URL}/repos/foo/bar/labels/{name}",
        "name": name,
        "color": color,
        "description": None,
        "default": False,
    }


def issue_json(number: int, owner: str = "foo", repo: str = "bar", **overrides) -> dict:
    repo_url = f"{BASE_URL}/repos/{owner}/{repo}"
    data = {
        "url": f"{repo_url}/issues/{number}",
        "repository_url": repo_url,
        "labels_url": f"{repo_url}/issues/{number}/labels{{/name}}",
        "comments_url": f"{repo_url}/issues/{number}/comments",
        "events_url": f"{repo_url}/issues/{number}/events",
        "html_url": f"https://github.com/{owner}/{repo}/issues/{number}",
        "id": 1000 + number,
        "number": number,
        "title": f"Issue {number}",
        "user": user_json(),
        "labels": [label_json()],
        "state": "open",
        "locked": False,
        "assignee": None,
        "assignees": [],
        "comments": number,
        "created_at": "2026-01-01T00:00:00Z",
        "updated_at": "2026-01-02T00:00:00Z",
        "closed_at": None,
        "body": "Steps to reproduce...",
        "score": 1.0,
    }
    data.update(overrides)
    return data


def repo_json(name: str, stars: int = 0) -> dict:
    return {
        "id": abs(hash(name)) % 10_000_000,
        "name": name,
        "full_name": f"octocat/{name}",
        "owner": user_json(),
        "private": False,
        "html_url": f"https://github.com/octocat/{name}",
        "description": None,
        "fork": False,
        "url": f"{BASE_URL}/repos/octocat/{name}",
        "created_at": "2020-01-01T00:00:00Z",
        "updated_at": "2026-01-01T00:00:00Z",
        "stargazers_count": stars,
        "language": "Python",
        "score": 1.0,
    }


def search_page(items: list, total_count: int | None = None, incomplete: bool = False) -> dict:
    return {
        "total_count": len(items) if total_count is None else total_count,
        "incomplete_results": incomplete,
        "items": items,
    }
