"""GitHub Gist REST API access."""

from gistaviewer.network.client import ApiResponse, Credentials, GitHubGistClient
from gistaviewer.network.errors import describe_http_failure, describe_response_error
from gistaviewer.network.pagination import COMMENTS_LOAD_ERROR, has_next_page, parse_last_page

__all__ = [
    'COMMENTS_LOAD_ERROR',
    'ApiResponse',
    'Credentials',
    'GitHubGistClient',
    'describe_http_failure',
    'describe_response_error',
    'has_next_page',
    'parse_last_page',
]
