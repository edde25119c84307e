"""Pytest configuration and shared fixtures."""

import json

import httpx
import pytest

from wordpress_rest_mcp.auth import AuthenticationManager
from wordpress_rest_mcp.client import WordPressClient
from wordpress_rest_mcp.http_client import WordPressHttpClient
from wordpress_rest_mcp.models import WordPressConfig

SITE_URL = "https://example.com"
USERNAME = "admin"
APP_PASSWORD = "abcd efgh ijkl mnop qrst uvwx"
API_BASE = f"{SITE_URL}/wp-json/wp/v2"


class Recorder:
    """httpx.MockTransport handler that records requests and replays responses.

    ``responses`` maps "METHOD /path" to a response, a list of responses
    (consumed in order) or a callable taking the request.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/wp-json/wp/v2") or "/"
        key = f"{request.method} {path}"
        entry = self.responses.get(key)
        if entry is None:
            return httpx.Response(404, json={"code": "rest_no_route", "message": "No route"})
        if isinstance(entry, list):
            entry = entry.pop(0) if len(entry) > 1 else entry[0]
        if callable(entry):
            return entry(request)
        # Fresh copy so one canned response can be served repeatedly
        return httpx.Response(entry.status_code, headers=entry.headers, content=entry.content)

    @property
    def paths(self) -> list[str]:
        return [f"{r.method} {r.url.path.removeprefix('/wp-json/wp/v2') or '/'}" for r in self.requests]

    def body(self, index: int = -1):
        return json.loads(self.requests[index].content)


def make_post(post_id=1, title="Hello World", status="publish", post_type="post", **extra):
    post = {
        "id": post_id,
        "date": "2024-01-15T10:30:00",
        "modified": "2024-01-16T08:00:00",
        "slug": "hello-world",
        "status": status,
        "type": post_type,
        "link": f"{SITE_URL}/?p={post_id}",
        "title": {"rendered": title},
        "content": {"rendered": "<p>Welcome to <strong>WordPress</strong>.</p>"},
        "excerpt": {"rendered": ""},
        "author": 1,
        "categories": [1],
        "tags": [],
        "meta": [],
    }
    post.update(extra)
    return post


def make_user(capabilities=None):
    return {
        "id": 1,
        "username": USERNAME,
        "name": "Site Admin",
        "slug": "admin",
        "roles": ["administrator"],
        "capabilities": {"edit_posts": True, "upload_files": True}
        if capabilities is None
        else capabilities,
    }


@pytest.fixture
def config():
    """A valid site configuration."""
    return WordPressConfig(site_url=SITE_URL, username=USERNAME, app_password=APP_PASSWORD)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def auth_manager(config):
    return AuthenticationManager(config)


@pytest.fixture
def http_client(auth_manager, recorder):
    return WordPressHttpClient(auth_manager, transport=httpx.MockTransport(recorder))


@pytest.fixture
def wp_client(http_client):
    return WordPressClient(http_client)
