"""
Gist detail coordinator.

Loads one gist, its star state, and its comments, and publishes everything a
detail screen needs through observables.

Comments are paged backward: a HEAD probe on the comments endpoint yields the
last page number from the Link header, then pages are fetched last to first.
GitHub returns each page oldest-first, so reversing every page before
appending gives a newest-first list overall.
"""

from __future__ import annotations

import asyncio

from gistaviewer.exceptions import TransportFailure
from gistaviewer.network.client import ClientFactory
from gistaviewer.network.errors import describe_http_failure
from gistaviewer.network.pagination import parse_last_page
from gistaviewer.observable import Observable
from gistaviewer.protocols import LoggerProtocol
from gistaviewer.schemas.gists import Gist, GistComment, StarState
from gistaviewer.viewmodels.base import Coordinator

INVALID_GIST_ID_ERROR = 'Invalid Gist ID'
BLANK_COMMENT_ERROR = 'You cannot create a blank comment'


class GistDetailCoordinator(Coordinator):
    """
    View-model for a single gist.

    Bind it to a gist with set_gist_id() before first use. Observables:

    - gist: created by get_gist(); None until loaded
    - comments: accumulated comments, newest first
    - star_state: None until probed, then a StarState
    - gist_loading_visible / comments_loading_visible: spinner flags
    - error_message: last user-facing error
    """

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        super().__init__(client_factory, logger)
        self._gist_id = ''
        self._gist: Observable[Gist | None] | None = None
        # Next comment page to fetch, counting down from the last page. 0 = exhausted.
        self._prev_page = 0

        self.comments: Observable[list[GistComment]] = self._observable([])
        self.star_state: Observable[StarState | None] = self._observable(None)
        self.gist_loading_visible: Observable[bool] = self._observable(False)
        self.comments_loading_visible: Observable[bool] = self._observable(False)

    @property
    def gist_id(self) -> str:
        return self._gist_id

    def set_gist_id(self, gist_id: str) -> None:
        """Bind this coordinator to a gist. No network effect."""
        self._gist_id = gist_id

    # ==========================================================================
    # Gist
    # ==========================================================================

    def get_gist(self) -> Observable[Gist | None]:
        """
        Get the observable gist, starting the download on first call.

        Later calls return the same observable without another request.
        """
        if self._gist is None:
            self._gist = self._observable(None)
            self._spawn(self._load_gist(self._gist), name=f'load-gist-{self._gist_id}')
        return self._gist

    async def _load_gist(self, target: Observable[Gist | None]) -> None:
        if not self._gist_id:
            self._show_error(INVALID_GIST_ID_ERROR)
            return

        self.gist_loading_visible.post_value(True)
        await self._logger.info(f'Loading gist {self._gist_id}')

        try:
            response = await self._client.get_gist(self._gist_id)
        except TransportFailure as e:
            self._show_error(str(e))
            return

        self.gist_loading_visible.post_value(False)
        if not response.is_successful:
            self._show_error(describe_http_failure(response))
            return

        target.post_value(response.body)
        self.load_comment_page_count()
        self.load_star_state()

    # ==========================================================================
    # Star
    # ==========================================================================

    def load_star_state(self) -> asyncio.Task[None]:
        """Probe whether the current user has starred the gist."""
        return self._spawn(self._load_star_state(), name=f'star-state-{self._gist_id}')

    async def _load_star_state(self) -> None:
        if not self._gist_id:
            return

        try:
            response = await self._client.get_star(self._gist_id)
        except TransportFailure as e:
            self._show_error(str(e))
            return

        state = StarState.from_status(response.status_code)
        if state is StarState.UNKNOWN:
            self._show_error(describe_http_failure(response))
            return
        self.star_state.post_value(state)

    def toggle_star(self) -> asyncio.Task[None]:
        """Star the gist, or unstar it if it is currently starred."""
        return self._spawn(self._toggle_star(), name=f'toggle-star-{self._gist_id}')

    async def _toggle_star(self) -> None:
        if not self._gist_id:
            return

        # Unset or unknown counts as not starred
        starred = self.star_state.value is StarState.PRESENT
        request = self._client.unstar if starred else self._client.star

        try:
            response = await request(self._gist_id)
        except TransportFailure as e:
            self._show_error(str(e))
            return

        if response.status_code != 204:
            self._show_error(describe_http_failure(response))
            return
        self.star_state.post_value(StarState.ABSENT if starred else StarState.PRESENT)

    # ==========================================================================
    # Comments
    # ==========================================================================

    def is_more_available(self) -> bool:
        """Whether older comment pages remain to be loaded."""
        return self._prev_page != 0

    def load_comment_page_count(self) -> asyncio.Task[None]:
        """
        Read the comment page count from a HEAD probe, then load the newest page.

        Failure here is not reported to the user: the comments section just
        stays empty. It is logged as a warning.
        """
        return self._spawn(self._load_comment_page_count(), name=f'comment-pages-{self._gist_id}')

    async def _load_comment_page_count(self) -> None:
        if not self._gist_id:
            return

        self.comments_loading_visible.post_value(True)
        try:
            response = await self._client.head_comments(self._gist_id)
        except TransportFailure as e:
            self.comments_loading_visible.post_value(False)
            await self._logger.warning(f'Comment page probe failed for {self._gist_id}: {e}')
            return

        if not response.is_successful:
            self.comments_loading_visible.post_value(False)
            await self._logger.warning(
                f'Comment page probe failed for {self._gist_id}: {response.status_code} {response.reason}'
            )
            return

        link_header = response.headers.get('Link')
        self._prev_page = parse_last_page(link_header, on_error=self._show_error) if link_header else 0
        await self._logger.info(f'Gist {self._gist_id} has {self._prev_page} comment page(s) to load')

        self.comments_loading_visible.post_value(False)
        self.load_more_comments()

    def load_more_comments(self) -> asyncio.Task[None]:
        """
        Load the next older page of comments.

        Does nothing once every page has been loaded. Callers must wait for
        the returned task before asking for another page.
        """
        return self._spawn(self._load_more_comments(), name=f'comments-{self._gist_id}-{self._prev_page}')

    async def _load_more_comments(self) -> None:
        if not self._gist_id or self._prev_page == 0:
            return

        self.comments_loading_visible.post_value(True)
        page = self._prev_page

        try:
            response = await self._client.get_comments(self._gist_id, page)
        except TransportFailure as e:
            self._show_error(str(e))
            return

        if not response.is_successful:
            self._show_error(describe_http_failure(response))
            return

        self._prev_page = page - 1
        fetched = list(reversed(response.body or []))
        self.comments.post_value([*self.comments.value, *fetched])
        self.comments_loading_visible.post_value(False)

    def create_comment(self, body: str) -> asyncio.Task[None]:
        """Post a comment as the authenticated user."""
        return self._spawn(self._create_comment(body), name=f'create-comment-{self._gist_id}')

    async def _create_comment(self, body: str) -> None:
        if not self._gist_id:
            return

        if not body.strip():
            self._show_error(BLANK_COMMENT_ERROR)
            return

        try:
            response = await self._client.create_comment(self._gist_id, body)
        except TransportFailure as e:
            self._show_error(str(e))
            return

        if not response.is_successful or response.body is None:
            self._show_error(describe_http_failure(response))
            return

        # Replaces the accumulated list with just the new comment; older pages
        # are dropped until the screen reloads.
        self.comments.post_value([response.body])

    # ==========================================================================
    # Errors
    # ==========================================================================

    def _show_error(self, message: str) -> None:
        self.gist_loading_visible.post_value(False)
        self.comments_loading_visible.post_value(False)
        super()._show_error(message)
