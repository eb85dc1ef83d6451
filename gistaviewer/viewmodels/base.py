"""
Shared plumbing for view-model coordinators.

A coordinator owns a swappable API client handle, a set of observables, and
the asyncio tasks it has started. Operations schedule work on the running
loop and return the task, so callers never block on the network.
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

from gistaviewer.network.client import ClientFactory, Credentials, GitHubGistClient
from gistaviewer.observable import Observable
from gistaviewer.protocols import LoggerProtocol, NullLogger

T = TypeVar('T')


class Coordinator:
    """Base class for coordinators: client handle, observables, background tasks."""

    def __init__(
        self,
        client_factory: ClientFactory | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """
        Initialize the coordinator with an anonymous client.

        Args:
            client_factory: Builds a client from optional credentials
                (defaults to GitHubGistClient against api.github.com)
            logger: Optional logger instance
        """
        self._client_factory: ClientFactory = client_factory or GitHubGistClient
        self._logger: LoggerProtocol = logger or NullLogger()
        self._client = self._client_factory(None)
        self._observables: list[Observable[Any]] = []
        self._tasks: set[asyncio.Task[Any]] = set()

        self.error_message: Observable[str | None] = self._observable(None)

    @property
    def client(self) -> GitHubGistClient:
        """The current API client handle."""
        return self._client

    def initialize(self, credentials: Credentials | None = None) -> None:
        """
        Rebuild the API client, authenticated when credentials are usable.

        The previous client is dropped, not closed: requests it already
        started run to completion and still publish their results.
        """
        if credentials is not None and not (credentials.username and credentials.token):
            credentials = None
        self._client = self._client_factory(credentials)

    async def wait_idle(self) -> None:
        """Wait until every task started by this coordinator (including chained ones) has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    def _observable(self, initial: T) -> Observable[T]:
        observable: Observable[T] = Observable(initial)
        self._observables.append(observable)
        return observable

    def _spawn(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task[None]:
        """
        Schedule a coroutine on the running loop and keep a reference to it.

        Raises:
            RuntimeError: If called outside a running event loop
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise
        for observable in self._observables:
            observable.attach(loop)
        task = loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def _show_error(self, message: str) -> None:
        """Publish an error message. Subclasses clear their loading flags first."""
        self.error_message.post_value(message)
