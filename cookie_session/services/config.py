"""Environment-driven session configuration."""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from . import constants


def config_home(environ: Optional[Mapping[str, str]] = None) -> Path:
    env = os.environ if environ is None else environ
    home = env.get(constants.ENV_HOME)
    if home:
        return Path(home).expanduser()
    return Path.home() / constants.CONFIG_DIR_NAME


@dataclass(slots=True)
class SessionConfig:
    cookie_store_path: Optional[Path] = None
    verify: bool | str = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "SessionConfig":
        env = os.environ if environ is None else environ
        home = config_home(env)

        cookie_store_path: Optional[Path]
        if env.get(constants.ENV_EPHEMERAL) == "1":
            cookie_store_path = None
        elif env.get(constants.ENV_COOKIE_FILE):
            cookie_store_path = Path(env[constants.ENV_COOKIE_FILE]).expanduser()
        else:
            cookie_store_path = home / constants.COOKIE_FILE_NAME

        verify: bool | str = True
        if env.get(constants.ENV_SSL_NO_VERIFY) == "1":
            verify = False
        else:
            ca_bundle_env = env.get(constants.ENV_CA_BUNDLE)
            if ca_bundle_env:
                verify = ca_bundle_env
            else:
                default_bundle = home / constants.CA_BUNDLE_FILE_NAME
                if default_bundle.exists():
                    verify = str(default_bundle)

        return cls(cookie_store_path=cookie_store_path, verify=verify)
