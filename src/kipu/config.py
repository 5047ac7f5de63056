"""Configuration for the Kipu gateway.

Reads from config/kipu.ini if present, environment variables override.
The uid key and API key are secrets: never checked into version control
and never part of the config's repr.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass, field
from pathlib import Path

_CONFIG_FILE = Path(__file__).resolve().parent.parent.parent / "config" / "kipu.ini"


@dataclass(frozen=True)
class KipuConfig:
    """Gateway configuration. Immutable once loaded."""

    uid_key: str = field(default="", repr=False)
    api_key: str = field(default="", repr=False)
    host: str = "127.0.0.1"
    port: int = 8000


def load_config(config_path: Path | None = None) -> KipuConfig:
    """Load config from INI file, then override with environment variables."""
    path = config_path or _CONFIG_FILE
    kwargs: dict = {}

    if path.exists():
        parser = configparser.ConfigParser(interpolation=None)
        parser.read(path)
        if parser.has_section("uid"):
            val = parser.get("uid", "key", fallback=None)
            if val is not None:
                kwargs["uid_key"] = val
        if parser.has_section("gateway"):
            for ini_key, config_key in [
                ("api_key", "api_key"),
                ("host", "host"),
            ]:
                val = parser.get("gateway", ini_key, fallback=None)
                if val is not None:
                    kwargs[config_key] = val
            port_str = parser.get("gateway", "port", fallback=None)
            if port_str is not None:
                kwargs["port"] = int(port_str)

    env_map = {
        "KIPU_UID_KEY": "uid_key",
        "KIPU_API_KEY": "api_key",
        "KIPU_HOST": "host",
        "KIPU_PORT": "port",
    }
    for env_key, config_key in env_map.items():
        val = os.getenv(env_key)
        if val is not None:
            if config_key == "port":
                kwargs[config_key] = int(val)
            else:
                kwargs[config_key] = val

    return KipuConfig(**kwargs)
