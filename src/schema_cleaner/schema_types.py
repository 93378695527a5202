# src/schema_cleaner/schema_types.py
"""
Type definitions for schema normalization.

Provides aliases for the JSON tree being rewritten and TypedDict
definitions for the Gemini tool declarations built from it.
"""

from typing import Any, Dict, List, TypedDict, Union

# A schema node is any JSON value; object nodes are plain dicts
JsonValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]
SchemaNode = Dict[str, Any]
Definitions = Dict[str, Any]


# =============================================================================
# GEMINI TOOL TYPES
# =============================================================================

class FunctionDeclaration(TypedDict):
    """Function declaration accepted by Gemini function calling."""
    name: str
    description: str
    parameters: SchemaNode


class Tool(TypedDict):
    """Tool container for Gemini API."""
    functionDeclarations: List[FunctionDeclaration]
