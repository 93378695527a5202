# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Field-level rewrites: constraint migration, unsupported keyword removal and
enum coercion.
"""

import json
import logging
from typing import Any, Dict, List

from .constants import (
    CONSTRAINT_PREFIX,
    CONSTRAINT_SUFFIX,
    HARD_REMOVE_FIELDS,
    VALIDATION_FIELDS,
)

lib_logger = logging.getLogger("schema_cleaner")


def _to_json_text(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _is_scalar(value: Any) -> bool:
    # bool is an int subclass; null is deliberately not a scalar here
    return isinstance(value, (str, int, float))


def _stringify_scalar(value: Any) -> str:
    if isinstance(value, str):
        return value
    return _to_json_text(value)


def migrate_constraints(node: Dict[str, Any]) -> List[str]:
    """
    Move scalar validation keywords into the node's description.

    Each scalar keyword is removed and recorded as ``"label: value"``. The
    hints are appended as ``" [Constraint: a, b]"``, creating an empty
    description first if needed. Non-scalar values are left where they are.

    Args:
        node: Schema object to rewrite in place

    Returns:
        The hints that were appended (empty when nothing moved)

    Example:
        >>> node = {"type": "string", "minLength": 1, "format": "email"}
        >>> migrate_constraints(node)
        ['minLen: 1', 'format: email']
        >>> node
        {'type': 'string', 'description': ' [Constraint: minLen: 1, format: email]'}
    """
    hints: List[str] = []
    for field, label in VALIDATION_FIELDS:
        if field not in node or not _is_scalar(node[field]):
            continue
        value = node.pop(field)
        hints.append(f"{label}: {_stringify_scalar(value)}")

    if hints:
        suffix = f"{CONSTRAINT_PREFIX}{', '.join(hints)}{CONSTRAINT_SUFFIX}"
        description = node.setdefault("description", "")
        if isinstance(description, str):
            node["description"] = description + suffix
        lib_logger.debug(f"Migrated {len(hints)} constraint(s) into description")

    return hints


def strip_unsupported_fields(node: Dict[str, Any]) -> None:
    """Remove every keyword the Gemini dialect rejects outright."""
    for field in HARD_REMOVE_FIELDS:
        node.pop(field, None)


def coerce_enum_values(node: Dict[str, Any]) -> None:
    """
    Convert every ``enum`` member to a string.

    Numbers and booleans use their JSON spelling, ``None`` becomes
    ``"null"`` and objects/arrays become compact JSON text.
    """
    values = node.get("enum")
    if not isinstance(values, list):
        return
    for index, item in enumerate(values):
        if not isinstance(item, str):
            values[index] = _to_json_text(item)
