"""``requests`` wrapper whose cookies survive across process runs."""
from __future__ import annotations

import logging
import weakref
from pathlib import Path
from typing import Any, MutableMapping, Optional

import requests

from . import constants
from .config import SessionConfig
from .cookie_store import PersistentCookieJar
from .errors import ClientConfigError, SessionError
from .state import PathLike, SessionState

logger = logging.getLogger(__name__)


def _release_handle(state: SessionState, client: requests.Session) -> None:
    if state.release():
        client.close()


def _build_client(cookie_store: PersistentCookieJar, verify: bool | str) -> requests.Session:
    if isinstance(verify, str) and not Path(verify).exists():
        raise ClientConfigError(f"CA bundle {verify} does not exist", path=Path(verify))

    client = requests.Session()
    client.headers["User-Agent"] = constants.DEFAULT_USER_AGENT
    client.verify = verify
    client.cookies = cookie_store
    return client


class Session:
    """A ``requests.Session`` stand-in that loads and stores its cookies on disk.

    Each handle owns one reference to the shared state. ``clone`` hands out
    another handle; the cookie file is written once, when the last handle is
    closed (or garbage-collected).
    """

    def __init__(self, state: SessionState, client: requests.Session) -> None:
        state.acquire()
        self._state = state
        self._client = client
        self._finalizer = weakref.finalize(self, _release_handle, state, client)

    @classmethod
    def try_new(cls, cookie_store_path: Optional[PathLike] = None, *, verify: bool | str = True) -> "Session":
        state = SessionState.initialize(cookie_store_path)
        client = _build_client(state.cookie_store, verify)
        return cls(state, client)

    def get_cookie_store(self) -> PersistentCookieJar:
        return self._state.cookie_store

    @property
    def cookie_store_path(self) -> Optional[Path]:
        return self._state.cookie_store_path

    @property
    def client(self) -> requests.Session:
        return self._client

    @property
    def headers(self) -> MutableMapping[str, str]:
        return self._client.headers

    @property
    def closed(self) -> bool:
        return not self._finalizer.alive

    def clone(self) -> "Session":
        if self.closed:
            raise SessionError("cannot clone a closed session", path=self.cookie_store_path)
        return Session(self._state, self._client)

    def save(self) -> Path:
        return self._state.save()

    def close(self) -> None:
        self._finalizer()

    def __enter__(self) -> "Session":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<Session cookie_store_path={self.cookie_store_path!s} closed={self.closed}>"

    # ------------------------------------------------------------------
    # requests.Session forwarding
    # ------------------------------------------------------------------

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        return self._client.request(method, url, **kwargs)

    def get(self, url: str, **kwargs: Any) -> requests.Response:
        return self._client.get(url, **kwargs)

    def options(self, url: str, **kwargs: Any) -> requests.Response:
        return self._client.options(url, **kwargs)

    def head(self, url: str, **kwargs: Any) -> requests.Response:
        return self._client.head(url, **kwargs)

    def post(self, url: str, data: Any = None, json: Any = None, **kwargs: Any) -> requests.Response:
        return self._client.post(url, data=data, json=json, **kwargs)

    def put(self, url: str, data: Any = None, **kwargs: Any) -> requests.Response:
        return self._client.put(url, data=data, **kwargs)

    def patch(self, url: str, data: Any = None, **kwargs: Any) -> requests.Response:
        return self._client.patch(url, data=data, **kwargs)

    def delete(self, url: str, **kwargs: Any) -> requests.Response:
        return self._client.delete(url, **kwargs)

    def prepare_request(self, request: requests.Request) -> requests.PreparedRequest:
        return self._client.prepare_request(request)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        return self._client.send(request, **kwargs)


class SessionBuilder:
    """Collects session options; ``build`` produces the ``Session``."""

    def __init__(self) -> None:
        self._cookie_store_path: Optional[Path] = None
        self._verify: bool | str = True

    @classmethod
    def from_config(cls, config: SessionConfig) -> "SessionBuilder":
        builder = cls().verify(config.verify)
        if config.cookie_store_path is not None:
            builder.cookies_store_into(config.cookie_store_path)
        return builder

    def cookies_store_into(self, cookie_store_path: PathLike) -> "SessionBuilder":
        self._cookie_store_path = Path(cookie_store_path)
        return self

    def verify(self, verify: bool | str) -> "SessionBuilder":
        self._verify = verify
        return self

    def build(self) -> Session:
        logger.debug("building session backed by %s", self._cookie_store_path or "memory only")
        return Session.try_new(self._cookie_store_path, verify=self._verify)
