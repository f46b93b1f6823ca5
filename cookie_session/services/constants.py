"""Static values shared across the session layer."""
from __future__ import annotations

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/115.0.0.0 Safari/537.36 Edg/115.0.0.0"
)

CONFIG_DIR_NAME = ".cookie_session"
COOKIE_FILE_NAME = "cookies.json"
CA_BUNDLE_FILE_NAME = "ca-bundle.pem"

ENV_HOME = "COOKIE_SESSION_HOME"
ENV_COOKIE_FILE = "COOKIE_SESSION_COOKIE_FILE"
ENV_EPHEMERAL = "COOKIE_SESSION_EPHEMERAL"
ENV_SSL_NO_VERIFY = "COOKIE_SESSION_SSL_NO_VERIFY"
ENV_CA_BUNDLE = "COOKIE_SESSION_CA_BUNDLE"
