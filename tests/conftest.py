"""
Shared fixtures: an in-memory GitHub served through httpx.MockTransport.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

import httpx
import pytest

from gistaviewer.network.client import Credentials, GitHubGistClient

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


def gist_payload(gist_id: str = 'abc123', **overrides: Any) -> dict[str, Any]:
    """A GET /gists/{id} body trimmed to the fields the client reads (plus one it ignores)."""
    payload: dict[str, Any] = {
        'id': gist_id,
        'description': 'Hello gist',
        'public': True,
        'html_url': f'https://gist.github.com/octocat/{gist_id}',
        'comments': 2,
        'created_at': '2024-01-02T03:04:05Z',
        'updated_at': '2024-01-03T03:04:05Z',
        'owner': {'login': 'octocat', 'id': 1, 'avatar_url': 'https://avatars.example/1'},
        'files': {
            'hello.py': {
                'filename': 'hello.py',
                'type': 'application/x-python',
                'language': 'Python',
                'raw_url': 'https://gist.githubusercontent.com/raw/hello.py',
                'size': 21,
                'content': 'print("hello world")\n',
            }
        },
        'node_id': 'G_kwDOA',  # Not modeled
    }
    payload.update(overrides)
    return payload


def comment_payload(comment_id: int, body: str, login: str = 'octocat') -> dict[str, Any]:
    return {
        'id': comment_id,
        'body': body,
        'user': {'login': login, 'id': comment_id + 100},
        'created_at': f'2024-02-{comment_id:02d}T12:00:00Z',
        'author_association': 'NONE',  # Not modeled
    }


def link_header(gist_id: str, next_page: int | None, last_page: int) -> str:
    base = f'https://api.github.com/gists/{gist_id}/comments'
    links = []
    if next_page is not None:
        links.append(f'<{base}?page={next_page}>; rel="next"')
    links.append(f'<{base}?page={last_page}>; rel="last"')
    return ', '.join(links)


class FakeGitHub:
    """Routes requests by method and path to canned responses and records every request."""

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Handler] = {}
        self.requests: list[httpx.Request] = []

    def add(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        *,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        """Serve a fresh response with this status, body, and headers on every matching request."""
        self.routes[(method, path)] = lambda request: httpx.Response(status_code, json=json, headers=headers)

    def add_handler(self, method: str, path: str, handler: Handler) -> None:
        self.routes[(method, path)] = handler

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={'message': 'Not Found'})
        response = route(request)
        if not isinstance(response, httpx.Response):
            response = await response
        return response

    def calls(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def client_factory(self, credentials: Credentials | None) -> GitHubGistClient:
        return GitHubGistClient(credentials, transport=httpx.MockTransport(self.handle))


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()
