# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Application configuration.

Only the upstream proxy settings used to build outbound HTTP clients live
here. Values come from an optional JSON file, then environment variables
(a ``.env`` file is honoured via python-dotenv).
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union

from dotenv import load_dotenv

lib_logger = logging.getLogger("schema_cleaner")

CONFIG_PATH_ENV = "SCHEMA_CLEANER_CONFIG"
PROXY_URL_ENV = "UPSTREAM_PROXY_URL"
PROXY_ENABLED_ENV = "UPSTREAM_PROXY_ENABLED"


class ConfigError(RuntimeError):
    pass


def parse_bool_env(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class UpstreamProxyConfig:
    enabled: bool = False
    url: str = ""

    @property
    def is_active(self) -> bool:
        return self.enabled and bool(self.url.strip())


@dataclass(frozen=True)
class ProxyConfig:
    upstream_proxy: UpstreamProxyConfig = field(default_factory=UpstreamProxyConfig)


@dataclass(frozen=True)
class AppConfig:
    proxy: ProxyConfig = field(default_factory=ProxyConfig)


def _read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def _upstream_section(data: Dict[str, Any]) -> Dict[str, Any]:
    proxy = data.get("proxy") or {}
    if not isinstance(proxy, dict):
        raise ConfigError("'proxy' must be an object")
    upstream = proxy.get("upstream_proxy") or {}
    if not isinstance(upstream, dict):
        raise ConfigError("'proxy.upstream_proxy' must be an object")
    return upstream


def load_app_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """
    Load the application configuration.

    Args:
        path: JSON config file; defaults to ``$SCHEMA_CLEANER_CONFIG`` if set

    Returns:
        Loaded configuration, environment overrides applied

    Raises:
        ConfigError: If the config file is missing, unreadable or malformed
    """
    load_dotenv()

    if path is None:
        path = os.getenv(CONFIG_PATH_ENV) or None

    upstream: Dict[str, Any] = {}
    if path is not None:
        upstream = _upstream_section(_read_config_file(Path(path)))
        lib_logger.debug(f"Loaded configuration from {path}")

    enabled = upstream.get("enabled", False)
    url = upstream.get("url", "")
    if not isinstance(enabled, bool):
        raise ConfigError("'proxy.upstream_proxy.enabled' must be a boolean")
    if not isinstance(url, str):
        raise ConfigError("'proxy.upstream_proxy.url' must be a string")

    env_url = os.getenv(PROXY_URL_ENV)
    if env_url is not None:
        url = env_url.strip()
    enabled = parse_bool_env(PROXY_ENABLED_ENV, enabled)

    return AppConfig(
        proxy=ProxyConfig(upstream_proxy=UpstreamProxyConfig(enabled=enabled, url=url))
    )
