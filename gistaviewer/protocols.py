"""
Logging seam for coordinators.

Coordinators never print or touch the logging module directly; they report
progress through an async logger handed in by whoever hosts them.
"""

from __future__ import annotations

from typing import Literal, Protocol

Level = Literal['info', 'warning', 'error']


class LoggerProtocol(Protocol):
    """Async logger accepted by every coordinator (see CLILogger for the terminal one)."""

    async def info(self, message: str) -> None: ...
    async def warning(self, message: str) -> None: ...
    async def error(self, message: str) -> None: ...


class NullLogger:
    """Discards everything. The default when a coordinator is built without a logger."""

    async def info(self, message: str) -> None:
        pass

    async def warning(self, message: str) -> None:
        pass

    async def error(self, message: str) -> None:
        pass


class CapturingLogger:
    """Keeps (level, message) pairs in memory, for hosts that show a log panel and for tests."""

    def __init__(self) -> None:
        self.records: list[tuple[Level, str]] = []

    def messages(self, level: Level) -> list[str]:
        return [message for record_level, message in self.records if record_level == level]

    async def info(self, message: str) -> None:
        self.records.append(('info', message))

    async def warning(self, message: str) -> None:
        self.records.append(('warning', message))

    async def error(self, message: str) -> None:
        self.records.append(('error', message))
