"""Exception hierarchy for the session layer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class SessionError(RuntimeError):
    """Base error that carries the cookie file involved, when there is one."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class CookieFileError(SessionError):
    """Raised when a cookie file exists but does not hold a valid cookie jar."""


class ClientConfigError(SessionError):
    """Raised when the underlying HTTP client cannot be configured."""
