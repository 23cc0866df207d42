"""Structured error handling for agent-friendly output."""

from __future__ import annotations

import json
import sys

from rich.console import Console
from rich.markup import escape

console = Console(stderr=True)

# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("not found", "Check the file path; relative paths resolve from the current directory"),
    ("unsupported file type", "Export the report as .csv or .xlsx"),
    ("search query", "Not an SQP report; download it from Brand Analytics > Search Query Performance"),
    ("search terms", "Not an organic rank export; the first column must be 'Search Terms'"),
    ("acos threshold", "Use --acos-threshold at or above --acos-target, or fix config/settings.yaml"),
    ("could not read excel", "Re-download the report; the file is damaged or not a real .xlsx workbook"),
    ("negative", "Thresholds must be zero or positive"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def _get_code(error: Exception) -> str:
    message = str(error).lower()
    if isinstance(error, FileNotFoundError):
        return "FILE_NOT_FOUND"
    if "invalid settings" in message:
        return "INVALID_SETTINGS"
    if isinstance(error, ValueError):
        return "PARSE_ERROR"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout for agent consumption:
    {"error": true, "code": "PARSE_ERROR", "message": "...", "hint": "..."}

    Also prints a human-readable error to stderr.
    """
    message = str(error)
    hint = _get_hint(message)

    error_obj: dict[str, object] = {
        "error": True,
        "code": _get_code(error),
        "message": message,
    }
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    console.print(f"[red]Error:[/red] {escape(message)}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
