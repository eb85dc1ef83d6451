"""Tests for Link header parsing."""

from __future__ import annotations

import pytest

from gistaviewer.network.pagination import COMMENTS_LOAD_ERROR, has_next_page, parse_last_page

BASE = 'https://api.example.com/gists/x/comments'


class ErrorSink:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(message)


def test_last_page_is_read_from_rel_last() -> None:
    header = f'<{BASE}?page=2>; rel="next", <{BASE}?page=5>; rel="last"'

    assert parse_last_page(header) == 5


def test_missing_rel_last_means_no_pages() -> None:
    errors = ErrorSink()
    header = f'<{BASE}?page=1>; rel="prev", <{BASE}?page=1>; rel="first"'

    assert parse_last_page(header, on_error=errors) == 0
    assert errors.messages == []


def test_malformed_page_number_reports_and_stops() -> None:
    errors = ErrorSink()
    header = f'<{BASE}?page=2>; rel="next", <{BASE}?page=abc>; rel="last"'

    assert parse_last_page(header, on_error=errors) == 0
    assert errors.messages == [COMMENTS_LOAD_ERROR]


@pytest.mark.parametrize('page', ['-1', '+3', '5_0', ' 4', '٣'])
def test_page_number_must_be_plain_digits(page: str) -> None:
    errors = ErrorSink()
    header = f'<{BASE}?page={page}>; rel="last"'

    assert parse_last_page(header, on_error=errors) == 0
    assert errors.messages == [COMMENTS_LOAD_ERROR]


def test_malformed_page_number_without_callback_still_returns_zero() -> None:
    assert parse_last_page(f'<{BASE}?page=>; rel="last"') == 0


def test_rel_last_without_page_parameter_is_malformed() -> None:
    errors = ErrorSink()

    assert parse_last_page(f'<{BASE}>; rel="last"', on_error=errors) == 0
    assert errors.messages == [COMMENTS_LOAD_ERROR]


def test_per_page_parameter_is_not_mistaken_for_page() -> None:
    header = f'<{BASE}?page=2&per_page=30>; rel="next", <{BASE}?page=7&per_page=30>; rel="last"'

    assert parse_last_page(header) == 7


def test_links_after_rel_last_are_ignored() -> None:
    header = f'<{BASE}?page=4>; rel="last", <{BASE}?page=1>; rel="first"'

    assert parse_last_page(header) == 4


def test_has_next_page() -> None:
    assert has_next_page(f'<{BASE}?page=2>; rel="next", <{BASE}?page=5>; rel="last"')
    assert not has_next_page(f'<{BASE}?page=4>; rel="prev", <{BASE}?page=1>; rel="first"')
    assert not has_next_page(None)
    assert not has_next_page('')
