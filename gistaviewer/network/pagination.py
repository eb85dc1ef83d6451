"""
RFC 5988 Link header helpers.

GitHub paginates list endpoints and advertises neighbouring pages like:

    <https://api.github.com/gists/x/comments?page=2>; rel="next",
    <https://api.github.com/gists/x/comments?page=5>; rel="last"
"""

from __future__ import annotations

import re
from collections.abc import Callable

COMMENTS_LOAD_ERROR = "Couldn't load comments.  Please try again."

_LAST_REL = 'rel="last"'
_NEXT_REL = 'rel="next"'
# The page query parameter, not per_page
_PAGE_PARAM = re.compile(r'[?&]page=')
_PAGE_NUMBER = re.compile(r'[0-9]+')


def parse_last_page(link_header: str, on_error: Callable[[str], None] | None = None) -> int:
    """
    Find the last page number advertised by a Link header.

    Args:
        link_header: Raw Link header value
        on_error: Called with a user-facing message when the last link's page
            number cannot be parsed

    Returns:
        The last page number, or 0 when there is no rel="last" link or its
        page number is malformed. 0 means "stop paginating".
    """
    marker = link_header.find(_LAST_REL)
    if marker < 0:
        return 0

    params = list(_PAGE_PARAM.finditer(link_header, 0, marker))
    if params:
        start = params[-1].end()
        end = _delimiter(link_header, start)
        # ASCII digits only; int() also accepts -1, 5_0 and surrounding spaces
        if _PAGE_NUMBER.fullmatch(link_header, start, end):
            return int(link_header[start:end])

    if on_error is not None:
        on_error(COMMENTS_LOAD_ERROR)
    return 0


def has_next_page(link_header: str | None) -> bool:
    """Whether a Link header advertises a rel="next" page."""
    return bool(link_header) and _NEXT_REL in link_header


def _delimiter(link_header: str, start: int) -> int:
    ends = [i for i in (link_header.find('>', start), link_header.find('&', start)) if i >= 0]
    return min(ends) if ends else len(link_header)
