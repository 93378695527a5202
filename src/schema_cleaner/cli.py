# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Command line entry point.

Reads a JSON Schema (or a list of tool definitions with ``--tools``) from a
file or stdin and writes the Gemini-compatible result.
"""

import argparse
import json
import sys
from typing import Any, List, Optional

from rich.console import Console
from rich.markup import escape as rich_escape

from .logging_setup import configure_logging
from .normalizer import clean_json_schema
from .tools import build_function_declarations

console = Console(stderr=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="schema-cleaner",
        description="Normalize JSON Schema for Gemini function calling",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Input JSON file (reads stdin if omitted)",
    )
    parser.add_argument("-o", "--output", help="Output file (default is stdout)")
    parser.add_argument(
        "--tools",
        action="store_true",
        help="Treat input as a list of tool definitions and emit functionDeclarations",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="Indentation of the output JSON (default: 2)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write JSON-lines logs to this file")
    return parser.parse_args(argv)


def _read_input(path: Optional[str]) -> Any:
    if path:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    return json.load(sys.stdin)


def _write_output(result: Any, path: Optional[str], indent: int) -> None:
    text = json.dumps(result, indent=indent, ensure_ascii=False)
    if path:
        with open(path, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    else:
        sys.stdout.write(text + "\n")


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    source = args.input or "stdin"
    try:
        document = _read_input(args.input)
    except json.JSONDecodeError as exc:
        console.print(f"[bold red]Error:[/bold red] invalid JSON in {rich_escape(source)}: {rich_escape(str(exc))}")
        return 1
    except UnicodeDecodeError as exc:
        console.print(f"[bold red]Error:[/bold red] {rich_escape(source)} is not valid UTF-8: {rich_escape(str(exc))}")
        return 1
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] cannot read {rich_escape(source)}: {rich_escape(str(exc))}")
        return 1

    if args.tools:
        if not isinstance(document, list):
            console.print("[bold red]Error:[/bold red] --tools expects a JSON array of tool definitions")
            return 1
        result = build_function_declarations(document)
    else:
        result = clean_json_schema(document)

    try:
        _write_output(result, args.output, args.indent)
    except OSError as exc:
        console.print(f"[bold red]Error:[/bold red] cannot write output: {rich_escape(str(exc))}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
