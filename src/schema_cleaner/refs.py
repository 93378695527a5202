# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Reference flattening for JSON schemas.

Gemini rejects ``$ref``, so every reference is expanded in place against
the definitions harvested from the schema root before any other rewrite.
"""

import copy
import logging
from typing import AbstractSet, Any, Dict

from .constants import DEFINITION_KEYS
from .schema_types import Definitions

lib_logger = logging.getLogger("schema_cleaner")


def collect_definitions(root: Dict[str, Any]) -> Definitions:
    """
    Remove ``$defs`` and ``definitions`` from the root and merge them.

    ``definitions`` is merged after ``$defs``, so it wins when both tables
    declare the same name. Non-object tables are discarded.

    Args:
        root: Top-level schema object (mutated in place)

    Returns:
        Name -> definition mapping
    """
    defs: Definitions = {}
    for key in DEFINITION_KEYS:
        table = root.pop(key, None)
        if isinstance(table, dict):
            defs.update(table)
    return defs


def _ref_name(ref_path: str) -> str:
    # "#/$defs/Address" -> "Address"
    return ref_path.rsplit("/", 1)[-1]


def flatten_refs(
    node: Dict[str, Any],
    defs: Definitions,
    _expanding: AbstractSet[str] = frozenset(),
) -> None:
    """
    Recursively expand ``$ref`` keys against a definitions table.

    The referencing node keeps its own keys; the definition only fills in
    keys the node does not already have. Content copied from a definition
    may itself carry ``$ref`` and is expanded again before descending into
    children. A reference to an unknown name is dropped.

    References back to a definition that is still being expanded higher up
    the tree are dropped as well, so recursive definitions terminate.

    Args:
        node: Schema object to rewrite in place
        defs: Definitions table from :func:`collect_definitions`

    Example:
        >>> node = {"$ref": "#/$defs/Name", "description": "Who"}
        >>> flatten_refs(node, {"Name": {"type": "string", "description": "x"}})
        >>> node
        {'description': 'Who', 'type': 'string'}
    """
    expanded = set()
    inherited = set()
    while "$ref" in node:
        ref_path = node.pop("$ref")
        if not isinstance(ref_path, str):
            continue

        name = _ref_name(ref_path)
        definition = defs.get(name)
        if not isinstance(definition, dict):
            lib_logger.debug(f"Dropping unresolved $ref '{ref_path}'")
            continue
        if name in _expanding or name in expanded:
            lib_logger.warning(f"Dropping cyclic $ref '{ref_path}'")
            continue

        expanded.add(name)
        for key, value in definition.items():
            if key not in node:
                node[key] = copy.deepcopy(value)
                inherited.add(key)

    # Only content copied from a definition is inside that definition's expansion.
    active = _expanding | expanded
    for key, value in node.items():
        scope = active if key in inherited else _expanding
        if isinstance(value, dict):
            flatten_refs(value, defs, scope)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, dict):
                    flatten_refs(item, defs, scope)
