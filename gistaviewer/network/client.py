"""
GitHub Gist REST client.

Thin async wrapper around the Gists endpoints. Each call opens a short-lived
httpx.AsyncClient, so a client instance is only a bundle of settings and
credentials: replacing it never disturbs requests already in flight.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Generic, TypeVar

import attrs
import httpx
import pydantic

from gistaviewer.config.base import BaseGistaSettings
from gistaviewer.exceptions import TransportFailure
from gistaviewer.schemas.gists import Gist, GistComment, GitHubUser, NewGistComment

T = TypeVar('T')

DEFAULT_API_URL = 'https://api.github.com'
DEFAULT_API_VERSION = '2022-11-28'
DEFAULT_USER_AGENT = 'gistaviewer/0.1.0'
DEFAULT_TIMEOUT = 10.0

_GIST = pydantic.TypeAdapter(Gist)
_GISTS = pydantic.TypeAdapter(list[Gist])
_COMMENT = pydantic.TypeAdapter(GistComment)
_COMMENTS = pydantic.TypeAdapter(list[GistComment])
_USER = pydantic.TypeAdapter(GitHubUser)


@attrs.frozen
class Credentials:
    """GitHub username and personal access token used for Basic auth."""

    username: str
    token: str = attrs.field(repr=False)

    @classmethod
    def from_pair(cls, username: str | None, token: str | None) -> Credentials | None:
        """Build credentials, or None unless both parts are non-empty."""
        if not username or not token:
            return None
        return cls(username=username, token=token)


@attrs.frozen
class ApiResponse(Generic[T]):
    """Status, headers, and decoded body of a completed request."""

    status_code: int
    reason: str
    headers: httpx.Headers
    body: T | None = None

    @property
    def is_successful(self) -> bool:
        return 200 <= self.status_code < 300


class GitHubGistClient:
    """
    Client for the GitHub Gists API.

    Requests are anonymous unless credentials are supplied, in which case
    every request carries HTTP Basic authorization.
    """

    def __init__(
        self,
        credentials: Credentials | None = None,
        *,
        base_url: str = DEFAULT_API_URL,
        api_version: str = DEFAULT_API_VERSION,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            credentials: Optional username/token; None for anonymous access
            base_url: API root (no trailing slash)
            api_version: Value for the X-GitHub-Api-Version header
            user_agent: Value for the User-Agent header (GitHub requires one)
            timeout: Per-request timeout in seconds
            transport: Optional httpx transport (tests pass httpx.MockTransport)
        """
        self.credentials = credentials
        self.base_url = base_url.rstrip('/')
        self.api_version = api_version
        self.user_agent = user_agent
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        credentials: Credentials | None,
        settings: BaseGistaSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> GitHubGistClient:
        """Build a client from application settings."""
        return cls(
            credentials,
            base_url=settings.GITHUB_API_URL,
            api_version=settings.GITHUB_API_VERSION,
            user_agent=settings.USER_AGENT,
            timeout=settings.REQUEST_TIMEOUT,
            transport=transport,
        )

    @property
    def is_authenticated(self) -> bool:
        return self.credentials is not None

    # ==========================================================================
    # Gists
    # ==========================================================================

    async def get_gist(self, gist_id: str) -> ApiResponse[Gist]:
        """GET /gists/{id}"""
        response = await self._request('GET', f'/gists/{gist_id}')
        return self._wrap(response, _GIST)

    async def list_public_gists(self, page: int) -> ApiResponse[list[Gist]]:
        """GET /gists/public?page=N"""
        response = await self._request('GET', '/gists/public', params={'page': page})
        return self._wrap(response, _GISTS)

    async def list_my_gists(self, page: int) -> ApiResponse[list[Gist]]:
        """GET /gists?page=N (the authenticated user's gists)"""
        response = await self._request('GET', '/gists', params={'page': page})
        return self._wrap(response, _GISTS)

    async def list_starred_gists(self, page: int) -> ApiResponse[list[Gist]]:
        """GET /gists/starred?page=N"""
        response = await self._request('GET', '/gists/starred', params={'page': page})
        return self._wrap(response, _GISTS)

    # ==========================================================================
    # Comments
    # ==========================================================================

    async def get_comments(self, gist_id: str, page: int) -> ApiResponse[list[GistComment]]:
        """GET /gists/{id}/comments?page=N (oldest first within the page)"""
        response = await self._request('GET', f'/gists/{gist_id}/comments', params={'page': page})
        return self._wrap(response, _COMMENTS)

    async def head_comments(self, gist_id: str) -> ApiResponse[None]:
        """HEAD /gists/{id}/comments, used only for its Link header."""
        response = await self._request('HEAD', f'/gists/{gist_id}/comments')
        return self._wrap(response)

    async def create_comment(self, gist_id: str, body: str) -> ApiResponse[GistComment]:
        """POST /gists/{id}/comments"""
        payload = NewGistComment(body=body).model_dump()
        response = await self._request('POST', f'/gists/{gist_id}/comments', json=payload)
        return self._wrap(response, _COMMENT)

    # ==========================================================================
    # Stars
    # ==========================================================================

    async def get_star(self, gist_id: str) -> ApiResponse[None]:
        """GET /gists/{id}/star: 204 if starred, 404 if not."""
        return self._wrap(await self._request('GET', f'/gists/{gist_id}/star'))

    async def star(self, gist_id: str) -> ApiResponse[None]:
        """PUT /gists/{id}/star: 204 on success."""
        return self._wrap(await self._request('PUT', f'/gists/{gist_id}/star'))

    async def unstar(self, gist_id: str) -> ApiResponse[None]:
        """DELETE /gists/{id}/star: 204 on success."""
        return self._wrap(await self._request('DELETE', f'/gists/{gist_id}/star'))

    # ==========================================================================
    # Users
    # ==========================================================================

    async def get_authenticated_user(self) -> ApiResponse[GitHubUser]:
        """GET /user (requires credentials)"""
        response = await self._request('GET', '/user')
        return self._wrap(response, _USER)

    # ==========================================================================
    # Plumbing
    # ==========================================================================

    def _headers(self) -> dict[str, str]:
        return {
            'Accept': 'application/vnd.github.v3+json',
            'X-GitHub-Api-Version': self.api_version,
            'User-Agent': self.user_agent,
        }

    def _auth(self) -> httpx.BasicAuth | None:
        if self.credentials is None:
            return None
        return httpx.BasicAuth(self.credentials.username, self.credentials.token)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """
        Send one request on a fresh AsyncClient.

        Raises:
            TransportFailure: If no HTTP response was received
        """
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers(),
                auth=self._auth(),
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                return await client.request(method, path, params=params, json=json)
        except httpx.HTTPError as e:
            raise TransportFailure(str(e) or type(e).__name__, cause=e) from e

    @staticmethod
    def _wrap(response: httpx.Response, adapter: pydantic.TypeAdapter[T] | None = None) -> ApiResponse[T]:
        """
        Decode a response body into an ApiResponse.

        Bodies are only decoded for 2xx responses; error bodies are ignored.

        Raises:
            TransportFailure: If a successful response body doesn't match the model
        """
        body = None
        if adapter is not None and response.is_success:
            try:
                body = adapter.validate_json(response.content)
            except pydantic.ValidationError as e:
                raise TransportFailure(f'Unexpected response from {response.request.url}: {e}', cause=e) from e
        return ApiResponse(
            status_code=response.status_code,
            reason=response.reason_phrase,
            headers=response.headers,
            body=body,
        )


ClientFactory = Callable[[Credentials | None], GitHubGistClient]
