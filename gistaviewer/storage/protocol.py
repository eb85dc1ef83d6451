"""
Credential store protocol.

Defines the interface the account session uses to remember credentials
between runs.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gistaviewer.network.client import Credentials


@runtime_checkable
class CredentialStore(Protocol):
    """Protocol for credential storage backends."""

    async def load(self) -> Credentials | None:
        """
        Load saved credentials.

        Returns:
            Saved credentials, or None if nothing usable is stored
        """
        ...

    async def save(self, credentials: Credentials) -> None:
        """
        Persist credentials, replacing any saved ones.

        Raises:
            CredentialStoreError: If the credentials cannot be written
        """
        ...

    async def clear(self) -> None:
        """
        Remove saved credentials. Safe to call when nothing is stored.

        Raises:
            CredentialStoreError: If the stored credentials cannot be removed
        """
        ...
