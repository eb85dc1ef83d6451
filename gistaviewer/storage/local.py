"""
Local filesystem credential store.

Implements CredentialStore as a small JSON file:

    {"username": "octocat", "token": "ghp_..."}
"""

from __future__ import annotations

import json
import os
import pathlib

from gistaviewer.exceptions import CredentialStoreError
from gistaviewer.network.client import Credentials


class LocalCredentialStore:
    """Credential store backed by a JSON file readable only by the owner."""

    def __init__(self, path: pathlib.Path) -> None:
        """
        Initialize local credential store.

        Args:
            path: JSON file holding the credentials (created on first save)
        """
        self.path = path

    async def load(self) -> Credentials | None:
        """
        Load credentials from disk.

        Returns:
            Credentials, or None if the file is missing, unreadable,
            malformed, or has an empty username or token
        """
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError):
            return None

        if not isinstance(data, dict):
            return None

        username = data.get('username')
        token = data.get('token')
        if not isinstance(username, str) or not isinstance(token, str):
            return None
        return Credentials.from_pair(username, token)

    async def save(self, credentials: Credentials) -> None:
        """Write credentials, creating parent directories as needed."""
        payload = json.dumps({'username': credentials.username, 'token': credentials.token})
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            # Private before the token is written; O_CREAT only applies the mode to new files
            fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                os.chmod(self.path, 0o600)
                f.write(payload)
        except OSError as e:
            raise CredentialStoreError(str(self.path), e.strerror or str(e)) from e

    async def clear(self) -> None:
        """Delete the credentials file if it exists."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise CredentialStoreError(str(self.path), e.strerror or str(e)) from e
