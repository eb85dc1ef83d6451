"""
Account session: logging in, logging out, and remembering credentials.

Other coordinators follow the published credentials, e.g.::

    account.credentials.subscribe(detail.initialize)
"""

from __future__ import annotations

from gistaviewer.exceptions import CredentialStoreError, TransportFailure
from gistaviewer.network.client import ClientFactory, Credentials
from gistaviewer.network.errors import describe_http_failure
from gistaviewer.observable import Observable
from gistaviewer.protocols import LoggerProtocol
from gistaviewer.schemas.gists import GitHubUser
from gistaviewer.storage.protocol import CredentialStore
from gistaviewer.viewmodels.base import Coordinator

BLANK_LOGIN_ERROR = 'Enter both a username and a token'


class AccountSession(Coordinator):
    """
    Owns the user's credentials for the lifetime of the process.

    Observables:
    - credentials: the active Credentials, or None when anonymous
    - user: the verified GitHub account, or None
    - error_message: last user-facing error
    """

    def __init__(
        self,
        store: CredentialStore,
        client_factory: ClientFactory | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        super().__init__(client_factory, logger)
        self.store = store
        self.credentials: Observable[Credentials | None] = self._observable(None)
        self.user: Observable[GitHubUser | None] = self._observable(None)

    async def restore(self) -> Credentials | None:
        """
        Load saved credentials at startup and make them active.

        The saved token is not re-verified; a revoked token shows up as a
        401 on the first authenticated request.
        """
        credentials = await self.store.load()
        if credentials is None:
            return None

        await self._logger.info(f'Restored credentials for {credentials.username}')
        self.initialize(credentials)
        self.credentials.post_value(credentials)
        return credentials

    async def log_in(self, username: str, token: str) -> bool:
        """
        Verify credentials against GET /user and remember them.

        Returns:
            True if the credentials were accepted and saved
        """
        credentials = Credentials.from_pair(username.strip(), token.strip())
        if credentials is None:
            self._show_error(BLANK_LOGIN_ERROR)
            return False

        client = self._client_factory(credentials)
        try:
            response = await client.get_authenticated_user()
        except TransportFailure as e:
            self._show_error(str(e))
            return False

        if not response.is_successful or response.body is None:
            self._show_error(describe_http_failure(response))
            return False

        try:
            await self.store.save(credentials)
        except CredentialStoreError as e:
            self._show_error(str(e))
            return False

        await self._logger.info(f'Logged in as {response.body.login}')
        self.initialize(credentials)
        self.user.post_value(response.body)
        self.credentials.post_value(credentials)
        return True

    async def log_out(self) -> None:
        """Forget the saved credentials and fall back to anonymous access."""
        await self.store.clear()
        self.initialize(None)
        self.user.post_value(None)
        self.credentials.post_value(None)
