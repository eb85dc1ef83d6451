"""
Gist API models.

Models for the subset of the GitHub Gists REST API this client consumes.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

import pydantic

from gistaviewer.base_model import ApiModel, StrictModel


class GitHubUser(ApiModel):
    """A GitHub account as embedded in gists and comments (and returned by GET /user)."""

    login: str
    id: int
    avatar_url: str | None = None
    html_url: str | None = None
    name: str | None = None  # Only present on GET /user


class GistFile(ApiModel):
    """Metadata (and possibly content) for one file in a gist."""

    filename: str
    type: str | None = None
    language: str | None = None
    raw_url: str | None = None
    size: int = 0
    content: str | None = None  # Only on GET /gists/{id}
    truncated: bool = False


class Gist(ApiModel):
    """A gist snapshot. Replaced wholesale on reload."""

    id: str
    description: str | None = None
    owner: GitHubUser | None = None  # None for anonymous gists
    files: dict[str, GistFile] = pydantic.Field(default_factory=dict)
    public: bool = True
    created_at: datetime
    updated_at: datetime
    html_url: str | None = None
    comments: int = 0  # Comment count

    @property
    def title(self) -> str:
        """Description if set, otherwise the first filename."""
        if self.description:
            return self.description
        return next(iter(self.files), self.id)


class GistComment(ApiModel):
    """A comment on a gist."""

    id: int
    user: GitHubUser | None = None
    body: str
    created_at: datetime


class NewGistComment(StrictModel):
    """Request body for POST /gists/{id}/comments."""

    body: str


class StarState(StrEnum):
    """Whether the authenticated user has starred a gist."""

    ABSENT = 'absent'
    PRESENT = 'present'
    UNKNOWN = 'unknown'

    @classmethod
    def from_status(cls, status_code: int) -> StarState:
        """
        Map a GET /gists/{id}/star status to a star state.

        404 means not starred, 204 means starred, anything else is unknown.
        """
        if status_code == 404:
            return cls.ABSENT
        if status_code == 204:
            return cls.PRESENT
        return cls.UNKNOWN
