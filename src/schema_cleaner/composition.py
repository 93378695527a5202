# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Composition keyword handling: ``allOf`` merging and ``anyOf``/``oneOf``
collapsing.

Neither construct exists in the Gemini dialect. ``allOf`` branches are
folded into the node itself; unions are reduced to the single type of the
most structured branch.
"""

import logging
from typing import Any, Dict, List, Optional

from .constants import (
    ALL_OF_STRUCTURAL_KEYS,
    SCORE_ARRAY,
    SCORE_NONE,
    SCORE_OBJECT,
    SCORE_SCALAR,
)

lib_logger = logging.getLogger("schema_cleaner")


def merge_all_of(node: Dict[str, Any]) -> None:
    """
    Fold the branches of ``allOf`` into the node and remove the keyword.

    Merge rules:
    - properties: later branches overwrite earlier ones, then the node's own
      properties win over the merged set
    - required: union of all branches, appended after the node's own entries
    - every other field: the first branch to define it wins, then the node's
      own value wins over the merged one

    Args:
        node: Schema object to rewrite in place
    """
    all_of = node.pop("allOf", None)
    if not isinstance(all_of, list):
        return

    merged_properties: Dict[str, Any] = {}
    merged_required: Dict[str, None] = {}  # ordered set
    other_fields: Dict[str, Any] = {}

    for branch in all_of:
        if not isinstance(branch, dict):
            continue

        props = branch.get("properties")
        if isinstance(props, dict):
            merged_properties.update(props)

        reqs = branch.get("required")
        if isinstance(reqs, list):
            for req in reqs:
                if isinstance(req, str):
                    merged_required[req] = None

        for key, value in branch.items():
            if key not in ALL_OF_STRUCTURAL_KEYS and key not in other_fields:
                other_fields[key] = value

    for key, value in other_fields.items():
        node.setdefault(key, value)

    if merged_properties:
        existing_props = node.setdefault("properties", {})
        if isinstance(existing_props, dict):
            for key, value in merged_properties.items():
                existing_props.setdefault(key, value)

    if merged_required:
        existing_reqs = node.setdefault("required", [])
        if isinstance(existing_reqs, list):
            current = {req for req in existing_reqs if isinstance(req, str)}
            for req in merged_required:
                if req not in current:
                    current.add(req)
                    existing_reqs.append(req)


def _type_string(option: Dict[str, Any]) -> Optional[str]:
    value = option.get("type")
    return value if isinstance(value, str) else None


def score_schema_option(option: Any) -> int:
    """
    Score a union branch by how much structure it carries.

    Object (3) > array (2) > other non-null type (1) > null or untyped (0).
    """
    if not isinstance(option, dict):
        return SCORE_NONE

    type_str = _type_string(option)
    if "properties" in option or type_str == "object":
        return SCORE_OBJECT
    if "items" in option or type_str == "array":
        return SCORE_ARRAY
    if type_str is not None and type_str.lower() != "null":
        return SCORE_SCALAR
    return SCORE_NONE


def extract_best_type_from_union(options: List[Any]) -> Optional[Any]:
    """Return the highest scoring branch; ties keep the first one seen."""
    best_option = None
    best_score = -1
    for option in options:
        score = score_schema_option(option)
        if score > best_score:
            best_score = score
            best_option = option
    return best_option


def extract_type_from_union(options: List[Any]) -> Optional[str]:
    """
    Pick a single lowercase type name for a union.

    Args:
        options: Branches of ``anyOf`` or ``oneOf``

    Returns:
        The best branch's non-null type, ``"object"`` when that branch only
        declares properties, or None when no usable type exists

    Example:
        >>> extract_type_from_union([{"type": "string"}, {"type": "null"}])
        'string'
    """
    best = extract_best_type_from_union(options)
    if not isinstance(best, dict):
        return None

    type_str = _type_string(best)
    if type_str is not None and type_str.lower() != "null":
        return type_str.lower()
    if "properties" in best:
        return "object"
    return None


def resolve_union_type(node: Dict[str, Any]) -> None:
    """
    Give an untyped node the type of its ``anyOf`` (or else ``oneOf``) union.

    Nodes that already declare ``type`` are left alone. The union keywords
    themselves are not removed here.
    """
    if "type" in node:
        return

    for keyword in ("anyOf", "oneOf"):
        options = node.get(keyword)
        if not isinstance(options, list):
            continue
        extracted = extract_type_from_union(options)
        if extracted is not None:
            lib_logger.debug(f"Collapsed {keyword} union to type '{extracted}'")
            node["type"] = extracted
            return
