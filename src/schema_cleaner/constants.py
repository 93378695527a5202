# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Keyword tables used by the schema normalizer.

The Gemini function-calling dialect only understands a small subset of
JSON Schema. Everything listed here is either migrated into the
description text or removed outright.
"""

from typing import Dict, FrozenSet, Tuple

# =============================================================================
# VALIDATION KEYWORDS (migrated into description hints)
# =============================================================================

# (keyword, hint label) pairs, in the order hints are emitted
VALIDATION_FIELDS: Tuple[Tuple[str, str], ...] = (
    ("pattern", "pattern"),
    ("minLength", "minLen"),
    ("maxLength", "maxLen"),
    ("minimum", "min"),
    ("maximum", "max"),
    ("minItems", "minItems"),
    ("maxItems", "maxItems"),
    ("exclusiveMinimum", "exclMin"),
    ("exclusiveMaximum", "exclMax"),
    ("multipleOf", "multipleOf"),
    ("format", "format"),
)

CONSTRAINT_PREFIX = " [Constraint: "
CONSTRAINT_SUFFIX = "]"

# =============================================================================
# HARD-REMOVED KEYWORDS
# =============================================================================

HARD_REMOVE_FIELDS: FrozenSet[str] = frozenset(
    {
        "$schema",
        "$id",
        "additionalProperties",
        "enumCaseInsensitive",
        "enumNormalizeWhitespace",
        "uniqueItems",
        "default",
        "const",
        "examples",
        "propertyNames",
        "anyOf",
        "oneOf",
        "allOf",
        "not",
        "if",
        "then",
        "else",
        "dependencies",
        "dependentSchemas",
        "dependentRequired",
        "cache_control",
        "contentEncoding",
        "contentMediaType",
        "deprecated",
        "readOnly",
        "writeOnly",
        # Consumed by the flatten pre-pass; leftovers are never valid output
        "$ref",
        "$defs",
        "definitions",
    }
)

# Keys that allOf merging never copies from a branch as a plain field
ALL_OF_STRUCTURAL_KEYS: FrozenSet[str] = frozenset({"properties", "required", "allOf"})

# Definition tables harvested from the root, in insertion order (later wins)
DEFINITION_KEYS: Tuple[str, ...] = ("$defs", "definitions")

# =============================================================================
# EMPTY OBJECT PLACEHOLDER
# =============================================================================

PLACEHOLDER_PROPERTY_NAME = "reason"
PLACEHOLDER_PROPERTY_SCHEMA: Dict[str, str] = {
    "type": "string",
    "description": "Reason for calling this tool",
}

NULLABLE_MARKER = "(nullable)"
DEFAULT_SELECTED_TYPE = "string"

# =============================================================================
# UNION SCORING
# =============================================================================

SCORE_OBJECT = 3
SCORE_ARRAY = 2
SCORE_SCALAR = 1
SCORE_NONE = 0
