"""Service-layer exports."""
from .config import SessionConfig
from .constants import DEFAULT_USER_AGENT
from .cookie_store import PersistentCookieJar
from .errors import ClientConfigError, CookieFileError, SessionError
from .session import Session, SessionBuilder
from .state import SessionState

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
