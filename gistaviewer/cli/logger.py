"""
Terminal logger for the gistaviewer commands.
"""

from __future__ import annotations

import typer


class CLILogger:
    """
    LoggerProtocol for the terminal.

    Progress lines are printed only with --verbose. Warnings (yellow) and
    errors (red) always go to stderr so they never mix with gist output.
    """

    def __init__(self, verbose: bool = False) -> None:
        self.verbose = verbose

    async def info(self, message: str) -> None:
        if self.verbose:
            typer.secho(f'[INFO] {message}', dim=True)

    async def warning(self, message: str) -> None:
        typer.secho(f'[WARNING] {message}', fg=typer.colors.YELLOW, err=True)

    async def error(self, message: str) -> None:
        typer.secho(f'[ERROR] {message}', fg=typer.colors.RED, err=True)
