# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Outbound HTTP clients.

Clients honour the configured upstream proxy. Two shared clients (15s and
60s timeouts) are kept so callers reuse one connection pool.
"""

import logging
from typing import Dict, Optional

import httpx

from .config import ConfigError, UpstreamProxyConfig, load_app_config

lib_logger = logging.getLogger("schema_cleaner")

DEFAULT_TIMEOUT_SECS = 15
LONG_TIMEOUT_SECS = 60

_shared_clients: Dict[int, httpx.AsyncClient] = {}


def create_client_with_proxy(
    timeout_secs: float,
    proxy_config: Optional[UpstreamProxyConfig] = None,
) -> httpx.AsyncClient:
    """
    Build a client with the given timeout and optional upstream proxy.

    An invalid proxy URL is logged and the client is built without a proxy.
    """
    proxy: Optional[httpx.Proxy] = None
    if proxy_config is not None and proxy_config.is_active:
        try:
            proxy = httpx.Proxy(proxy_config.url.strip())
        except (ValueError, httpx.InvalidURL) as exc:
            lib_logger.error(f"Invalid upstream proxy URL {proxy_config.url!r}: {exc}")

    if proxy is None:
        return httpx.AsyncClient(timeout=timeout_secs)
    return httpx.AsyncClient(timeout=timeout_secs, proxy=proxy)


def create_base_client(timeout_secs: float) -> httpx.AsyncClient:
    """Build a client using the upstream proxy from the application config."""
    proxy_config: Optional[UpstreamProxyConfig] = None
    try:
        proxy_config = load_app_config().proxy.upstream_proxy
    except ConfigError as exc:
        lib_logger.warning(f"Ignoring application config for HTTP client: {exc}")

    if proxy_config is not None and proxy_config.is_active:
        lib_logger.info(f"Upstream proxy enabled for HTTP client: {proxy_config.url}")
    return create_client_with_proxy(timeout_secs, proxy_config)


def _shared_client(timeout_secs: int) -> httpx.AsyncClient:
    client = _shared_clients.get(timeout_secs)
    if client is None or client.is_closed:
        client = create_base_client(timeout_secs)
        _shared_clients[timeout_secs] = client
    return client


def get_client() -> httpx.AsyncClient:
    """Shared client with the default 15s timeout."""
    return _shared_client(DEFAULT_TIMEOUT_SECS)


def get_long_client() -> httpx.AsyncClient:
    """Shared client with the long 60s timeout (warmups and similar)."""
    return _shared_client(LONG_TIMEOUT_SECS)


def create_client(timeout_secs: float) -> httpx.AsyncClient:
    """
    Return a client for the timeout.

    15 and 60 seconds map to the shared clients; any other timeout gets a
    new client that the caller owns and must close.
    """
    if timeout_secs == DEFAULT_TIMEOUT_SECS:
        return get_client()
    if timeout_secs == LONG_TIMEOUT_SECS:
        return get_long_client()
    return create_base_client(timeout_secs)


async def aclose_shared_clients() -> None:
    """Close and forget the shared clients."""
    clients = list(_shared_clients.values())
    _shared_clients.clear()
    for client in clients:
        if client.is_closed:
            continue
        try:
            await client.aclose()
        except Exception as exc:
            lib_logger.warning(f"Error closing HTTP client: {exc}")
