# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Schema normalization for Gemini function calling.

Rewrites arbitrary JSON Schema (as found in third-party tool definitions)
into the restricted dialect accepted by Gemini's function-calling API.
"""

import logging
from typing import Any, Dict, Set

from .composition import merge_all_of, resolve_union_type
from .constraints import (
    coerce_enum_values,
    migrate_constraints,
    strip_unsupported_fields,
)
from .reconcile import (
    append_nullable_marker,
    drop_nullable_required,
    ensure_object_placeholder,
    filter_required_to_properties,
    normalize_type_field,
)
from .refs import collect_definitions, flatten_refs
from .schema_types import JsonValue

lib_logger = logging.getLogger("schema_cleaner")
lib_logger.propagate = False

if not lib_logger.handlers:
    lib_logger.addHandler(logging.NullHandler())


def clean_json_schema(schema: JsonValue) -> JsonValue:
    """
    Recursively clean a JSON Schema in place for Gemini's API.

    - Expands ``$ref`` against the root ``$defs``/``definitions``
    - Merges ``allOf`` into the node
    - Collapses ``anyOf``/``oneOf`` to the type of the best branch
    - Moves validation keywords (pattern, minLength, format, ...) into the
      description as ``[Constraint: ...]`` hints
    - Removes unsupported keywords ($schema, additionalProperties, default, ...)
    - Collapses type arrays and lowercases type names; ``["string", "null"]``
      becomes ``"string"`` and is marked ``(nullable)``
    - Keeps ``required`` consistent with ``properties``
    - Gives property-less objects a ``reason`` placeholder property
    - Converts enum members to strings

    Never raises: values that are not schemas pass through unchanged.

    Args:
        schema: JSON value to clean (dict, list, or primitive)

    Returns:
        The same object, rewritten

    Example:
        >>> schema = {
        ...     "type": "object",
        ...     "properties": {"unit": {"type": ["string", "null"], "default": "c"}},
        ...     "required": ["unit"],
        ... }
        >>> clean_json_schema(schema)
        {'type': 'object', 'properties': {'unit': {'type': 'string', 'description': '(nullable)'}}}
    """
    if isinstance(schema, dict):
        defs = collect_definitions(schema)
        flatten_refs(schema, defs)

    _clean_node(schema)
    return schema


def _clean_node(value: Any) -> bool:
    """Clean one node; returns True if it turned out to be nullable."""
    if isinstance(value, dict):
        return _clean_object(value)
    if isinstance(value, list):
        for item in value:
            _clean_node(item)
    return False


def _clean_object(node: Dict[str, Any]) -> bool:
    merge_all_of(node)

    # Children first. Property values are cleaned as schemas; without a
    # properties object every value is visited instead.
    props = node.get("properties")
    if isinstance(props, dict):
        nullable_keys: Set[str] = set()
        for key, child in props.items():
            if _clean_node(child):
                nullable_keys.add(key)
        drop_nullable_required(node, nullable_keys)
    else:
        for child in node.values():
            _clean_node(child)

    migrate_constraints(node)
    resolve_union_type(node)
    strip_unsupported_fields(node)

    nullable = normalize_type_field(node)
    ensure_object_placeholder(node)
    filter_required_to_properties(node)

    if nullable:
        append_nullable_marker(node)

    coerce_enum_values(node)
    return nullable
