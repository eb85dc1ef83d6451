"""Credential storage backends."""

from gistaviewer.storage.local import LocalCredentialStore
from gistaviewer.storage.protocol import CredentialStore

__all__ = ['CredentialStore', 'LocalCredentialStore']
