"""Lock-guarded cookie jar with JSON persistence, usable by ``requests`` sessions."""
from __future__ import annotations

import json
import logging
import math
import time
from contextlib import contextmanager
from http.cookiejar import Cookie
from typing import Any, Dict, IO, Iterator, List, Mapping

from requests.cookies import RequestsCookieJar, create_cookie

logger = logging.getLogger(__name__)

_RECORD_FIELDS = (
    "name",
    "value",
    "domain",
    "path",
    "secure",
    "expires",
    "port",
    "discard",
    "comment",
    "comment_url",
    "rest",
    "rfc2109",
    "version",
)

_FIELD_TYPES = (
    ("domain", str, "a string"),
    ("path", str, "a string"),
    ("port", str, "a string"),
    ("comment", str, "a string"),
    ("comment_url", str, "a string"),
    ("secure", bool, "a boolean"),
    ("discard", bool, "a boolean"),
    ("rfc2109", bool, "a boolean"),
    ("version", int, "an integer"),
    ("expires", (int, float), "a number"),
    ("rest", Mapping, "an object"),
)


def _matches(value: Any, expected: Any) -> bool:
    # bool subclasses int; accept it only where a boolean is expected
    if isinstance(value, bool):
        return expected is bool
    return isinstance(value, expected)


def cookie_to_record(cookie: Cookie) -> Dict[str, Any]:
    return {
        "name": cookie.name,
        "value": cookie.value,
        "domain": cookie.domain,
        "path": cookie.path,
        "secure": cookie.secure,
        "expires": cookie.expires,
        "port": cookie.port,
        "discard": cookie.discard,
        "comment": cookie.comment,
        "comment_url": cookie.comment_url,
        "rest": dict(cookie._rest),
        "rfc2109": cookie.rfc2109,
        "version": cookie.version,
    }


def record_to_cookie(record: Any) -> Cookie:
    """Build a cookie from one persisted record, raising ``ValueError`` if it is malformed."""
    if not isinstance(record, Mapping):
        raise ValueError(f"cookie record must be an object, got {type(record).__name__}")
    missing = [key for key in ("name", "value") if key not in record]
    if missing:
        raise ValueError(f"cookie record is missing {', '.join(missing)}")
    unknown = sorted(set(record) - set(_RECORD_FIELDS))
    if unknown:
        raise ValueError(f"cookie record has unknown fields: {', '.join(unknown)}")

    if not isinstance(record["name"], str):
        raise ValueError("cookie record field 'name' must be a string")
    if record["value"] is not None and not isinstance(record["value"], str):
        raise ValueError("cookie record field 'value' must be a string or null")
    for key, expected, label in _FIELD_TYPES:
        value = record.get(key)
        if value is not None and not _matches(value, expected):
            raise ValueError(f"cookie record field {key!r} must be {label} or null")

    fields = {key: value for key, value in record.items() if value is not None or key == "value"}
    expires = fields.get("expires")
    if expires is not None:
        if not math.isfinite(expires):
            raise ValueError(f"invalid expires value {expires!r}")
        fields["expires"] = int(expires)
    rest = fields.get("rest")
    if rest is not None and not all(isinstance(key, str) for key in rest):
        raise ValueError("cookie record field 'rest' must have string keys")
    return create_cookie(**fields)


class PersistentCookieJar(RequestsCookieJar):
    """RequestsCookieJar that round-trips through a JSON array of cookie records.

    Every access, from ``requests`` after a response or from application code,
    goes through the jar's single ``RLock``. Iteration copies the cookies under
    the lock, so ``get``, ``len``, ``keys`` and ``update`` (which ``requests``
    calls when merging cookies into each request) read a consistent snapshot.
    ``locked()`` exposes the lock for callers that need several operations to
    be observed together.
    """

    def __iter__(self) -> Iterator[Cookie]:
        with self._cookies_lock:
            cookies = list(super().__iter__())
        return iter(cookies)

    @contextmanager
    def locked(self) -> Iterator["PersistentCookieJar"]:
        with self._cookies_lock:
            yield self

    @classmethod
    def load_json(cls, fp: IO[str]) -> "PersistentCookieJar":
        jar = cls()
        raw = fp.read()
        if not raw.strip():
            return jar

        payload = json.loads(raw)
        if not isinstance(payload, list):
            raise ValueError(f"cookie file must hold a JSON array, got {type(payload).__name__}")

        now = time.time()
        dropped = 0
        for record in payload:
            cookie = record_to_cookie(record)
            if cookie.is_expired(now):
                dropped += 1
                continue
            jar.set_cookie(cookie)
        logger.debug("loaded %d cookies, dropped %d expired", len(payload) - dropped, dropped)
        return jar

    def save_json(self, fp: IO[str]) -> int:
        with self.locked():
            records = self.to_records()
            json.dump(records, fp, indent=2)
            fp.flush()
        return len(records)

    def to_records(self) -> List[Dict[str, Any]]:
        """Snapshot every unexpired cookie, session cookies included."""
        now = time.time()
        with self.locked():
            cookies = list(self)
        return [cookie_to_record(cookie) for cookie in cookies if not cookie.is_expired(now)]

    def add_record(self, record: Mapping[str, Any]) -> Cookie:
        cookie = record_to_cookie(record)
        self.set_cookie(cookie)
        return cookie
