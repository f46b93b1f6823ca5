"""Requests session with cookies persisted to a JSON file."""
from .services import (
    ClientConfigError,
    CookieFileError,
    DEFAULT_USER_AGENT,
    PersistentCookieJar,
    Session,
    SessionBuilder,
    SessionConfig,
    SessionError,
    SessionState,
)

__all__ = [
    "ClientConfigError",
    "CookieFileError",
    "DEFAULT_USER_AGENT",
    "PersistentCookieJar",
    "Session",
    "SessionBuilder",
    "SessionConfig",
    "SessionError",
    "SessionState",
]
