"""Common type definitions for the application.

This module provides shared type aliases and small value types used across
multiple modules to avoid duplication and ensure consistency.
"""

from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncSession

# Type alias for async session factory functions
# Used by services that need to create database sessions
SessionFactory = Callable[[], AsyncSession]


@dataclass(frozen=True)
class BestEffortResult:
    """Outcome of an external call whose failure must not abort the caller.

    Attributes:
        ok: Whether the call succeeded
        error: Error message when it did not
    """

    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> "BestEffortResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: BaseException | str) -> "BestEffortResult":
        return cls(ok=False, error=str(error))


@dataclass(frozen=True)
class LocalFile:
    """Uploaded file staged on local disk, waiting to be forwarded.

    Attributes:
        path: Temp file location
        filename: Client-supplied file name
        content_type: Declared MIME type
        size: Size in bytes
    """

    path: Path
    filename: str
    content_type: str
    size: int = 0

    @property
    def is_audio(self) -> bool:
        return self.content_type.startswith("audio/")


__all__ = [
    "BestEffortResult",
    "LocalFile",
    "SessionFactory",
]
