"""Shared session state: the cookie jar and the file it is persisted to."""
from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional, Union

from .cookie_store import PersistentCookieJar
from .errors import CookieFileError, SessionError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SessionState:
    """Owns the cookie jar and writes it back when its last owner releases it."""

    def __init__(self, cookie_store_path: Optional[Path], cookie_store: PersistentCookieJar) -> None:
        self.cookie_store_path = cookie_store_path
        self.cookie_store = cookie_store
        self._lock = threading.Lock()
        self._owners = 0
        self._released = False

    @classmethod
    def initialize(cls, cookie_store_path: Optional[PathLike] = None) -> "SessionState":
        if cookie_store_path is None:
            return cls(None, PersistentCookieJar())

        path = Path(cookie_store_path)
        try:
            fp = path.open("r", encoding="utf-8")
        except FileNotFoundError as exc:
            logger.warning("open %s failed. error: %s, use default empty cookie store", path, str(exc))
            return cls(path, PersistentCookieJar())
        except OSError as exc:
            logger.error("open %s failed. error: %s, use default empty cookie store", path, str(exc))
            return cls(path, PersistentCookieJar())

        with fp:
            try:
                jar = PersistentCookieJar.load_json(fp)
            except ValueError as exc:
                raise CookieFileError(f"error when read cookies from {path}: {exc}", path=path) from exc

        logger.debug("loaded %d cookies from %s", len(jar), path)
        return cls(path, jar)

    @property
    def owners(self) -> int:
        return self._owners

    @property
    def released(self) -> bool:
        return self._released

    def acquire(self) -> None:
        with self._lock:
            if self._released:
                raise SessionError("session state has already been released", path=self.cookie_store_path)
            self._owners += 1

    def release(self) -> bool:
        """Drop one owner. Returns True for the call that released the last one."""
        with self._lock:
            if self._released or self._owners == 0:
                return False
            self._owners -= 1
            if self._owners:
                return False
            self._released = True
            self._teardown()
        return True

    def save(self) -> Path:
        """Write the jar to its file now, raising ``SessionError`` on failure."""
        path = self.cookie_store_path
        if path is None:
            raise SessionError("session has no cookie file configured")
        try:
            self._write(path)
        except (OSError, TypeError, ValueError) as exc:
            raise SessionError(f"save cookies to path {path} failed. error: {exc}", path=path) from exc
        return path

    def _write(self, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fp:
            count = self.cookie_store.save_json(fp)
        logger.debug("saved %d cookies to %s", count, path)

    def _teardown(self) -> None:
        path = self.cookie_store_path
        if path is None:
            return

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fp = path.open("w", encoding="utf-8")
        except OSError as exc:
            logger.error("open %s for write failed. error: %s", path, str(exc))
            return

        try:
            with fp:
                count = self.cookie_store.save_json(fp)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("save cookies to path %s failed. error: %s", path, str(exc))
            return
        logger.debug("saved %d cookies to %s", count, path)
