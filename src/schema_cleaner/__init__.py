from typing import TYPE_CHECKING

from .normalizer import clean_json_schema
from .tools import build_function_declarations, clean_tool_schemas
from .config import AppConfig, ConfigError, UpstreamProxyConfig, load_app_config

# For type checkers, import the HTTP helpers statically
# At runtime, they're lazy-loaded via __getattr__ so httpx is only imported on use
if TYPE_CHECKING:
    from .http_client import (
        aclose_shared_clients,
        create_client,
        create_client_with_proxy,
        get_client,
        get_long_client,
    )

__all__ = [
    "clean_json_schema",
    "clean_tool_schemas",
    "build_function_declarations",
    "AppConfig",
    "ConfigError",
    "UpstreamProxyConfig",
    "load_app_config",
    # HTTP clients
    "create_client",
    "create_client_with_proxy",
    "get_client",
    "get_long_client",
    "aclose_shared_clients",
]

_HTTP_CLIENT_EXPORTS = {
    "create_client",
    "create_client_with_proxy",
    "get_client",
    "get_long_client",
    "aclose_shared_clients",
}


def __getattr__(name):
    """Lazy-load the HTTP client helpers to keep module import cheap."""
    if name in _HTTP_CLIENT_EXPORTS:
        from . import http_client

        return getattr(http_client, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
