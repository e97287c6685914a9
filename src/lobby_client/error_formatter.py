# Area: Shared
"""Error formatting for structured client error logs."""

from __future__ import annotations
import json
from typing import Any, Dict, List, Optional


def format_error_block(
    error_type: str,
    command: Optional[str],
    details: Dict[str, Any],
    payload: Any = None,
    notes: Optional[List[str]] = None,
) -> str:
    """Format a structured error block for terminal and file logs."""
    from datetime import datetime, timezone

    timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

    lines = [
        "",
        "=" * 64,
        " LOBBY CLIENT ERROR",
        "=" * 64,
        f" Timestamp:    {timestamp}",
        f" Error Type:   {error_type}",
    ]

    if command is not None:
        lines.append(f" Command:      {command}")

    lines.append("")
    lines.append(" ── DETAILS " + "─" * 52)
    lines.append(indent_json(details))

    if payload is not None:
        lines.append("")
        lines.append(" ── SERVER PAYLOAD " + "─" * 45)
        lines.append(indent_json(payload))

    if notes:
        lines.append("")
        lines.append(" ── NOTES " + "─" * 54)
        for note in notes:
            lines.append(f" • {note}")

    lines.append("")
    lines.append("=" * 64)
    lines.append("")

    return "\n".join(lines)


def indent_json(data: Any, indent: int = 2) -> str:
    """Format JSON with indentation for error logs."""
    try:
        formatted = json.dumps(data, indent=indent, default=str)
        return "\n".join(" " + line for line in formatted.split("\n"))
    except (TypeError, ValueError):
        return f" {repr(data)}"
