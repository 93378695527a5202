# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Tool definition adapters.

Third-party tool definitions arrive in OpenAI, Anthropic or bare shapes.
These helpers normalize their parameter schemas and build Gemini
``functionDeclarations`` from them without touching the caller's objects.
"""

import copy
import logging
from typing import Any, Dict, List, Optional, Tuple

from .normalizer import clean_json_schema
from .schema_types import FunctionDeclaration, SchemaNode, Tool

lib_logger = logging.getLogger("schema_cleaner")

# Keys that may hold the parameter schema, in lookup order
SCHEMA_KEYS = ("parameters", "input_schema")


def _function_body(tool: Dict[str, Any]) -> Dict[str, Any]:
    """Return the dict holding name/description/schema for any tool shape."""
    func = tool.get("function")
    if isinstance(func, dict):
        return func
    return tool


def _schema_key(body: Dict[str, Any]) -> Optional[str]:
    for key in SCHEMA_KEYS:
        if isinstance(body.get(key), dict):
            return key
    return None


def clean_tool_schemas(tools: List[Any]) -> List[Any]:
    """
    Normalize the parameter schema of every tool definition.

    Works on deep copies, so the input list is never modified. The OpenAI
    ``strict`` flag is dropped since strict mode is not supported.

    Args:
        tools: Tool definitions (OpenAI, Anthropic or bare shape)

    Returns:
        New list with cleaned tool definitions
    """
    cleaned_tools = []

    for tool in tools:
        cleaned_tool = copy.deepcopy(tool)

        if isinstance(cleaned_tool, dict):
            body = _function_body(cleaned_tool)
            body.pop("strict", None)

            key = _schema_key(body)
            if key is not None:
                clean_json_schema(body[key])

        cleaned_tools.append(cleaned_tool)

    return cleaned_tools


def _declaration_parts(tool: Dict[str, Any]) -> Tuple[Optional[str], str, SchemaNode]:
    body = _function_body(tool)
    name = body.get("name")
    description = body.get("description")
    key = _schema_key(body)
    parameters = copy.deepcopy(body[key]) if key is not None else {"type": "object"}
    return (
        name if isinstance(name, str) and name else None,
        description if isinstance(description, str) else "",
        parameters,
    )


def build_function_declarations(tools: List[Any]) -> List[Tool]:
    """
    Convert tool definitions into Gemini ``functionDeclarations``.

    A tool without a parameter schema is declared with an empty object,
    which normalization turns into the ``reason`` placeholder. Tools
    without a name are skipped.

    Args:
        tools: Tool definitions (OpenAI, Anthropic or bare shape)

    Returns:
        ``[{"functionDeclarations": [...]}]``, or ``[]`` if nothing is declared

    Example:
        >>> build_function_declarations([{"name": "ping", "input_schema": {"type": "object"}}])
        [{'functionDeclarations': [{'name': 'ping', 'description': '', 'parameters': {'type': 'object', 'properties': {'reason': {'type': 'string', 'description': 'Reason for calling this tool'}}, 'required': ['reason']}}]}]
    """
    declarations: List[FunctionDeclaration] = []

    for tool in tools:
        if not isinstance(tool, dict):
            lib_logger.warning(f"Skipping tool definition of type {type(tool).__name__}")
            continue

        name, description, parameters = _declaration_parts(tool)
        if name is None:
            lib_logger.warning("Skipping tool definition without a name")
            continue

        clean_json_schema(parameters)
        declarations.append(
            {"name": name, "description": description, "parameters": parameters}
        )

    if not declarations:
        return []
    return [{"functionDeclarations": declarations}]
