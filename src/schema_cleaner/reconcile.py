# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Type, nullability and required/properties reconciliation.

Gemini wants ``type`` as a single lowercase string, refuses object schemas
without properties and rejects ``required`` entries that name undeclared
properties.
"""

import copy
import logging
from typing import AbstractSet, Any, Dict

from .constants import (
    DEFAULT_SELECTED_TYPE,
    NULLABLE_MARKER,
    PLACEHOLDER_PROPERTY_NAME,
    PLACEHOLDER_PROPERTY_SCHEMA,
)

lib_logger = logging.getLogger("schema_cleaner")


def normalize_type_field(node: Dict[str, Any]) -> bool:
    """
    Collapse ``type`` to a single lowercase string.

    A type array keeps its last non-null entry (``"string"`` when there is
    none). Any other ``type`` value is not a usable type name and is removed.

    Args:
        node: Schema object to rewrite in place

    Returns:
        True if the node was nullable: ``type`` was ``"null"`` or an array
        containing ``"null"``

    Example:
        >>> node = {"type": ["Integer", "null"]}
        >>> normalize_type_field(node)
        True
        >>> node
        {'type': 'integer'}
    """
    type_val = node.get("type")

    if isinstance(type_val, str):
        lowered = type_val.lower()
        node["type"] = lowered
        return lowered == "null"

    if isinstance(type_val, list):
        nullable = False
        selected = DEFAULT_SELECTED_TYPE
        for item in type_val:
            if not isinstance(item, str):
                continue
            if item.lower() == "null":
                nullable = True
            else:
                selected = item.lower()
        node["type"] = selected
        return nullable

    if "type" in node:
        lib_logger.debug(f"Dropping non-string type {type_val!r}")
        del node["type"]
    return False


def append_nullable_marker(node: Dict[str, Any]) -> None:
    """Note nullability in the description unless it already mentions it."""
    description = node.setdefault("description", "")
    if not isinstance(description, str) or "nullable" in description:
        return
    if description:
        description += " "
    node["description"] = description + NULLABLE_MARKER


def ensure_object_placeholder(node: Dict[str, Any]) -> bool:
    """
    Give an object schema without properties a synthetic ``reason`` property.

    Returns:
        True if the placeholder was injected
    """
    if node.get("type") != "object":
        return False

    props = node.get("properties")
    if isinstance(props, dict) and props:
        return False

    node["properties"] = {
        PLACEHOLDER_PROPERTY_NAME: copy.deepcopy(PLACEHOLDER_PROPERTY_SCHEMA)
    }
    node["required"] = [PLACEHOLDER_PROPERTY_NAME]
    lib_logger.debug("Injected placeholder property into empty object schema")
    return True


def drop_nullable_required(node: Dict[str, Any], nullable_keys: AbstractSet[str]) -> None:
    """Remove nullable properties from ``required``; drop it if that empties it."""
    if not nullable_keys:
        return
    required = node.get("required")
    if not isinstance(required, list):
        return

    required[:] = [
        req for req in required
        if not (isinstance(req, str) and req in nullable_keys)
    ]
    if not required:
        del node["required"]


def filter_required_to_properties(node: Dict[str, Any]) -> None:
    """
    Keep only ``required`` entries that name a declared property.

    Without a properties object the list is emptied.
    """
    required = node.get("required")
    if not isinstance(required, list):
        return

    props = node.get("properties")
    if not isinstance(props, dict):
        required.clear()
        return

    required[:] = [req for req in required if isinstance(req, str) and req in props]
