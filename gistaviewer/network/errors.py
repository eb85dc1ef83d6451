"""
Turn failed GitHub responses into messages fit for the user.

GitHub answers 403 when the rate limit is exhausted and reports when the
window resets in X-RateLimit-Reset (Unix seconds).
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from gistaviewer.network.client import ApiResponse

RATE_LIMIT_RESET_HEADER = 'X-RateLimit-Reset'


def describe_response_error(status_code: int, headers: Mapping[str, str], default_message: str) -> str:
    """
    Build a display string for a failed response.

    Args:
        status_code: HTTP status of the failed response
        headers: Response headers (any mapping; names are matched case-insensitively)
        default_message: The response's own status message

    Returns:
        A rate-limit message with the local reset time for 403 responses that
        carry a positive reset timestamp, otherwise default_message unchanged.
    """
    if status_code == 403:
        reset_at = _rate_limit_reset(headers)
        if reset_at > 0:
            try:
                reset_time = datetime.fromtimestamp(reset_at).strftime('%X')
            except (OverflowError, OSError, ValueError):
                return default_message
            return f'Rate limit exceeded. Try again after {reset_time}'
    return default_message


def describe_http_failure(response: ApiResponse[Any]) -> str:
    """Classify a completed API response (see describe_response_error)."""
    return describe_response_error(response.status_code, response.headers, response.reason)


def _rate_limit_reset(headers: Mapping[str, str]) -> int:
    for name, value in headers.items():
        if name.lower() != RATE_LIMIT_RESET_HEADER.lower():
            continue
        try:
            return int(value.strip())
        except ValueError:
            return 0
    return 0
