"""
Runtime settings — where adb lives, how much output to accept, where to
serve, and where to fetch profiles from.

Settings come from (lowest to highest precedence) the defaults below, an
optional YAML file, the PORT environment variable, and CLI flags applied by
the caller.
"""

import os
from dataclasses import dataclass, fields
from typing import Optional

import yaml

from adb_markers.core.utils import warn

DEFAULT_CONFIG_FILE = "adb_markers.yaml"


@dataclass
class Settings:
    adb_path: str = "adb"
    max_output_bytes: int = 50 * 1024 * 1024
    host: str = "0.0.0.0"
    port: int = 2222
    profile_url: str = "http://localhost:2121/profile"
    profile_timeout_sec: float = 30.0


def load_settings(config_path: Optional[str] = None, environ=None) -> Settings:
    """
    Load settings from YAML.

    A missing default file yields the built-in defaults; an explicitly
    requested file that does not exist raises FileNotFoundError. Unknown
    keys are ignored with a warning.
    """
    environ = os.environ if environ is None else environ
    explicit = config_path is not None
    if config_path is None:
        config_path = os.path.join(os.getcwd(), DEFAULT_CONFIG_FILE)

    values = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{config_path}: expected a mapping at top level")
        known = {f.name for f in fields(Settings)}
        for key, value in data.items():
            if key in known:
                values[key] = value
            else:
                warn(f"{config_path}: ignoring unknown setting {key!r}")
    elif explicit:
        raise FileNotFoundError(config_path)

    settings = Settings(**values)

    if environ.get("PORT"):
        settings.port = int(environ["PORT"])

    return settings
