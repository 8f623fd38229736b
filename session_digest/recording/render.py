"""Plain-text and JSON rendering of summary nodes."""

import json
from typing import Any

from .models import SummaryNode


def format_timestamp(milliseconds: int) -> str:
    """Format milliseconds as MM:SS (minutes are not capped at 60)."""
    total_seconds = int(milliseconds) // 1000
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


def render_text(nodes: list[SummaryNode], indent: str = "    ") -> str:
    """Render a summary as a reviewable text listing.

    Group nodes show their event count and list their children indented
    beneath them.
    """
    blocks = ["\n".join(_render_node(node, "", indent)) for node in nodes]
    return "\n\n".join(blocks) + ("\n" if blocks else "")


def render_json(nodes: list[SummaryNode], indent: int | None = 2) -> str:
    return json.dumps([node.to_dict() for node in nodes], indent=indent, ensure_ascii=False)


def _render_node(node: SummaryNode, prefix: str, indent: str) -> list[str]:
    timestamp = format_timestamp(node.timestamp_start)
    if node.timestamp_end is not None:
        timestamp = f"{timestamp} - {format_timestamp(node.timestamp_end)}"

    lines = [f"{prefix}Timestamp: {timestamp}"]

    if node.is_group:
        lines.append(f"{prefix}{node.label}: {len(node.children)} events")
        for child in node.children:
            lines.append("")
            lines.extend(_render_node(child, prefix + indent, indent))
        return lines

    lines.append(f"{prefix}{node.label}")
    if isinstance(node.details, dict):
        for key, value in node.details.items():
            lines.append(f"{prefix}{_capitalize(key)}: {_format_value(value)}")
    elif node.details is not None:
        lines.append(f"{prefix}Details: {_format_value(node.details)}")
    if node.truncated:
        lines.append(f"{prefix}(truncated)")
    return lines


def _capitalize(key: Any) -> str:
    key = str(key)
    return key[:1].upper() + key[1:]


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    if value is None:
        return "null"
    return str(value)
