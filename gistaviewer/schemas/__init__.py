"""GitHub Gist API schemas."""

from gistaviewer.schemas.gists import (
    Gist,
    GistComment,
    GistFile,
    GitHubUser,
    NewGistComment,
    StarState,
)

__all__ = ['Gist', 'GistComment', 'GistFile', 'GitHubUser', 'NewGistComment', 'StarState']
