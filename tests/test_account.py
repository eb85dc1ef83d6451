"""Tests for logging in, logging out, and restoring credentials."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeGitHub

from gistaviewer.network.client import Credentials
from gistaviewer.storage.local import LocalCredentialStore
from gistaviewer.viewmodels.account import BLANK_LOGIN_ERROR, AccountSession
from gistaviewer.viewmodels.gist_detail import GistDetailCoordinator

USER = {'login': 'octocat', 'id': 1, 'name': 'The Octocat', 'plan': {'name': 'free'}}


def make_session(github: FakeGitHub, tmp_path: Path) -> tuple[AccountSession, LocalCredentialStore]:
    store = LocalCredentialStore(tmp_path / 'credentials.json')
    return AccountSession(store, client_factory=github.client_factory), store


@pytest.mark.asyncio
async def test_log_in_verifies_saves_and_publishes(github: FakeGitHub, tmp_path: Path) -> None:
    github.add('GET', '/user', json=USER)
    session, store = make_session(github, tmp_path)

    assert await session.log_in(' octocat ', 'tok')

    assert 'Authorization' in github.requests[0].headers
    assert await store.load() == Credentials('octocat', 'tok')
    assert session.credentials.value == Credentials('octocat', 'tok')
    assert session.user.value is not None
    assert session.user.value.name == 'The Octocat'
    assert session.client.is_authenticated


@pytest.mark.asyncio
async def test_rejected_token_is_not_saved(github: FakeGitHub, tmp_path: Path) -> None:
    github.add('GET', '/user', 401, json={'message': 'Bad credentials'})
    session, store = make_session(github, tmp_path)

    assert not await session.log_in('octocat', 'wrong')

    assert session.error_message.value == 'Unauthorized'
    assert await store.load() is None
    assert session.credentials.value is None


@pytest.mark.asyncio
async def test_blank_login_is_rejected_without_network(github: FakeGitHub, tmp_path: Path) -> None:
    session, _ = make_session(github, tmp_path)

    assert not await session.log_in('octocat', '   ')

    assert session.error_message.value == BLANK_LOGIN_ERROR
    assert github.requests == []


@pytest.mark.asyncio
async def test_restore_activates_saved_credentials(github: FakeGitHub, tmp_path: Path) -> None:
    session, store = make_session(github, tmp_path)
    await store.save(Credentials('octocat', 'tok'))

    restored = await session.restore()

    assert restored == Credentials('octocat', 'tok')
    assert session.credentials.value == restored
    assert session.client.is_authenticated


@pytest.mark.asyncio
async def test_restore_without_saved_credentials_stays_anonymous(github: FakeGitHub, tmp_path: Path) -> None:
    session, _ = make_session(github, tmp_path)

    assert await session.restore() is None
    assert not session.client.is_authenticated


@pytest.mark.asyncio
async def test_log_out_forgets_everything(github: FakeGitHub, tmp_path: Path) -> None:
    github.add('GET', '/user', json=USER)
    session, store = make_session(github, tmp_path)
    await session.log_in('octocat', 'tok')

    await session.log_out()

    assert not (tmp_path / 'credentials.json').exists()
    assert session.credentials.value is None
    assert session.user.value is None
    assert not session.client.is_authenticated


@pytest.mark.asyncio
async def test_detail_coordinator_follows_credential_changes(github: FakeGitHub, tmp_path: Path) -> None:
    github.add('GET', '/user', json=USER)
    session, _ = make_session(github, tmp_path)
    detail = GistDetailCoordinator(client_factory=github.client_factory)
    session.credentials.subscribe(detail.initialize)

    await session.log_in('octocat', 'tok')
    assert detail.client.is_authenticated

    await session.log_out()
    assert not detail.client.is_authenticated
