"""
Gist list coordinator.

Pages forward through one of the gist feeds (public, starred, or the
user's own) and publishes the accumulated list.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import StrEnum

from gistaviewer.exceptions import TransportFailure
from gistaviewer.network.client import ApiResponse, ClientFactory, GitHubGistClient
from gistaviewer.network.errors import describe_http_failure
from gistaviewer.network.pagination import has_next_page
from gistaviewer.observable import Observable
from gistaviewer.protocols import LoggerProtocol
from gistaviewer.schemas.gists import Gist
from gistaviewer.viewmodels.base import Coordinator

LOGIN_REQUIRED_ERROR = 'You must be logged in to view these Gists'


class GistFeed(StrEnum):
    """The gist lists a user can browse."""

    DISCOVER = 'discover'
    STARRED = 'starred'
    YOURS = 'yours'

    @property
    def requires_login(self) -> bool:
        return self is not GistFeed.DISCOVER

    def fetcher(self, client: GitHubGistClient) -> Callable[[int], Awaitable[ApiResponse[list[Gist]]]]:
        if self is GistFeed.STARRED:
            return client.list_starred_gists
        if self is GistFeed.YOURS:
            return client.list_my_gists
        return client.list_public_gists


class GistListCoordinator(Coordinator):
    """View-model for a forward-paged gist feed."""

    def __init__(
        self,
        feed: GistFeed,
        client_factory: ClientFactory | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        super().__init__(client_factory, logger)
        self.feed = feed
        self._next_page = 1  # 0 = exhausted

        self.gists: Observable[list[Gist]] = self._observable([])
        self.loading_visible: Observable[bool] = self._observable(False)

    def is_more_available(self) -> bool:
        return self._next_page != 0

    def load_more(self) -> asyncio.Task[None]:
        """Load the next page of the feed. Does nothing once the feed is exhausted."""
        return self._spawn(self._load_more(), name=f'{self.feed}-page-{self._next_page}')

    def refresh(self) -> asyncio.Task[None]:
        """Drop everything loaded so far and load the first page again."""
        self._next_page = 1
        self.gists.post_value([])
        return self.load_more()

    async def _load_more(self) -> None:
        if self._next_page == 0:
            return

        client = self._client
        if self.feed.requires_login and not client.is_authenticated:
            self._show_error(LOGIN_REQUIRED_ERROR)
            return

        self.loading_visible.post_value(True)
        page = self._next_page

        try:
            response = await self.feed.fetcher(client)(page)
        except TransportFailure as e:
            self._show_error(str(e))
            return

        if not response.is_successful:
            self._show_error(describe_http_failure(response))
            return

        fetched = response.body or []
        more = bool(fetched) and has_next_page(response.headers.get('Link'))
        self._next_page = page + 1 if more else 0
        await self._logger.info(f'Loaded {len(fetched)} {self.feed} gists from page {page}')

        self.gists.post_value([*self.gists.value, *fetched])
        self.loading_visible.post_value(False)

    def _show_error(self, message: str) -> None:
        self.loading_visible.post_value(False)
        super()._show_error(message)
