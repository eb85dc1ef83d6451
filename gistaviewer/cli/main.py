#!/usr/bin/env python3
"""
Command-line interface for gistaviewer.

The CLI stands in for the UI: it drives the coordinators, subscribes to their
observables, and prints what a screen would show.
"""

from __future__ import annotations

import asyncio
import functools
import traceback

import typer

from gistaviewer.cli.logger import CLILogger
from gistaviewer.config.cli import settings
from gistaviewer.network.client import ClientFactory, GitHubGistClient
from gistaviewer.schemas.gists import Gist, GistComment, StarState
from gistaviewer.storage.local import LocalCredentialStore
from gistaviewer.viewmodels.account import AccountSession
from gistaviewer.viewmodels.base import Coordinator
from gistaviewer.viewmodels.gist_detail import GistDetailCoordinator
from gistaviewer.viewmodels.gist_list import GistFeed, GistListCoordinator

app = typer.Typer(
    name='gistaviewer',
    help='Browse, star, and comment on GitHub Gists',
    add_completion=False,
)


@app.command()
def show(
    gist_id: str = typer.Argument(..., help='Gist ID'),
    all_comments: bool = typer.Option(
        False, '--all-comments', '-a', help='Load every comment page, not just the newest'
    ),
    toggle_star: bool = typer.Option(False, '--toggle-star', help='Star the gist, or unstar it if already starred'),
    comment: str | None = typer.Option(None, '--comment', '-c', help='Post a comment on the gist'),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Show a gist with its star state and comments."""
    asyncio.run(_show_async(gist_id, all_comments, toggle_star, comment, verbose))


@app.command('list')
def list_gists(
    feed: GistFeed = typer.Argument(GistFeed.DISCOVER, help='Which gists to list'),
    pages: int = typer.Option(1, '--pages', '-n', min=1, help='Number of pages to load'),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """List public, starred, or your own gists."""
    asyncio.run(_list_async(feed, pages, verbose))


@app.command()
def login(
    username: str = typer.Argument(..., help='GitHub username'),
    token: str = typer.Argument(..., help="Personal access token with 'gist' scope"),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Verify and remember GitHub credentials."""
    asyncio.run(_login_async(username, token, verbose))


@app.command()
def logout(
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
) -> None:
    """Forget saved GitHub credentials."""
    asyncio.run(_logout_async(verbose))


# ==============================================================================
# Command bodies
# ==============================================================================


async def _show_async(
    gist_id: str,
    all_comments: bool,
    toggle_star: bool,
    comment: str | None,
    verbose: bool,
) -> None:
    """Async implementation of show command."""
    logger = CLILogger(verbose=verbose)

    try:
        account = await _restore_account(logger)
        detail = GistDetailCoordinator(_client_factory(), logger)
        detail.initialize(account.credentials.value)
        account.credentials.subscribe(detail.initialize)
        errors = _collect_errors(detail)

        detail.set_gist_id(gist_id)
        gist = detail.get_gist()
        await detail.wait_idle()

        if gist.value is None:
            _print_errors(errors)
            raise typer.Exit(1)

        # A failed page keeps its cursor, so retrying it would never end
        while all_comments and detail.is_more_available() and not errors:
            await detail.load_more_comments()

        if toggle_star:
            await detail.toggle_star()

        if comment is not None:
            await detail.create_comment(comment)

        _print_gist(gist.value, detail.star_state.value)
        _print_comments(detail.comments.value, more=detail.is_more_available())

        if errors:
            _print_errors(errors)
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        await logger.error(f'Failed to show gist: {e}')
        if verbose:
            traceback.print_exc()
        raise typer.Exit(1)


async def _list_async(feed: GistFeed, pages: int, verbose: bool) -> None:
    """Async implementation of list command."""
    logger = CLILogger(verbose=verbose)

    try:
        account = await _restore_account(logger)
        gist_list = GistListCoordinator(feed, _client_factory(), logger)
        gist_list.initialize(account.credentials.value)
        errors = _collect_errors(gist_list)

        for _ in range(pages):
            if not gist_list.is_more_available() or errors:
                break
            await gist_list.load_more()

        for item in gist_list.gists.value:
            owner = item.owner.login if item.owner else 'anonymous'
            visibility = '' if item.public else ' (secret)'
            typer.secho(f'{item.id}', fg=typer.colors.CYAN, nl=False)
            typer.echo(f'  {owner}/{item.title}{visibility}  [{len(item.files)} file(s), {item.comments} comment(s)]')

        if not gist_list.gists.value and not errors:
            typer.echo('No gists found.')

        if errors:
            _print_errors(errors)
            raise typer.Exit(1)

    except typer.Exit:
        raise
    except Exception as e:
        await logger.error(f'Failed to list gists: {e}')
        if verbose:
            traceback.print_exc()
        raise typer.Exit(1)


async def _login_async(username: str, token: str, verbose: bool) -> None:
    """Async implementation of login command."""
    logger = CLILogger(verbose=verbose)
    account = AccountSession(LocalCredentialStore(settings.CREDENTIALS_FILE), _client_factory(), logger)
    errors = _collect_errors(account)

    if not await account.log_in(username, token):
        _print_errors(errors)
        raise typer.Exit(1)

    user = account.user.value
    typer.secho(f'✓ Logged in as {user.login if user else username}', fg=typer.colors.GREEN)
    typer.echo(f'  Credentials saved to: {settings.CREDENTIALS_FILE}')


async def _logout_async(verbose: bool) -> None:
    """Async implementation of logout command."""
    logger = CLILogger(verbose=verbose)
    account = AccountSession(LocalCredentialStore(settings.CREDENTIALS_FILE), _client_factory(), logger)

    try:
        await account.log_out()
    except Exception as e:
        await logger.error(f'Failed to log out: {e}')
        raise typer.Exit(1)

    typer.secho('✓ Logged out', fg=typer.colors.GREEN)


# ==============================================================================
# Helpers
# ==============================================================================


def _client_factory() -> ClientFactory:
    return functools.partial(GitHubGistClient.from_settings, settings=settings)


async def _restore_account(logger: CLILogger) -> AccountSession:
    account = AccountSession(LocalCredentialStore(settings.CREDENTIALS_FILE), _client_factory(), logger)
    await account.restore()
    return account


def _collect_errors(coordinator: Coordinator) -> list[str]:
    errors: list[str] = []

    def on_error(message: str | None) -> None:
        if message:
            errors.append(message)

    coordinator.error_message.subscribe(on_error)
    return errors


def _print_errors(errors: list[str]) -> None:
    for message in errors:
        typer.secho(f'Error: {message}', fg=typer.colors.RED, err=True)


def _print_gist(gist: Gist, star_state: StarState | None) -> None:
    owner = gist.owner.login if gist.owner else 'anonymous'
    star = '★' if star_state is StarState.PRESENT else '☆'

    typer.secho(f'{star} {gist.title}', bold=True)
    typer.echo(f'  Owner: {owner}')
    typer.echo(f'  Visibility: {"public" if gist.public else "secret"}')
    typer.echo(f'  Created: {gist.created_at:%Y-%m-%d %H:%M}')
    typer.echo(f'  Updated: {gist.updated_at:%Y-%m-%d %H:%M}')
    if gist.html_url:
        typer.echo(f'  URL: {gist.html_url}')

    typer.echo()
    typer.echo('Files:')
    for name, file in gist.files.items():
        language = f' ({file.language})' if file.language else ''
        typer.echo(f'  - {name}{language}, {file.size:,} bytes')


def _print_comments(comments: list[GistComment], more: bool) -> None:
    typer.echo()
    typer.echo(f'Comments ({len(comments)} loaded):')
    for item in comments:
        author = item.user.login if item.user else 'ghost'
        typer.secho(f'  {author} at {item.created_at:%Y-%m-%d %H:%M}:', fg=typer.colors.CYAN)
        for line in item.body.splitlines() or ['']:
            typer.echo(f'    {line}')
    if more:
        typer.echo('  ... older comments available (use --all-comments)')


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == '__main__':
    main()
