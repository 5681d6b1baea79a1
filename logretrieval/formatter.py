"""Format query results as text or JSON."""

import json

from logretrieval.models import LogEntry, entry_to_dict


def format_text(entries: list[LogEntry]) -> str:
    lines = []
    for e in entries:
        parts = [f"[{e.timestamp}]", f"{e.level:7s}"]
        if e.method:
            parts.append(f"{e.method} {e.path}")
        if e.status:
            parts.append(f"-> {e.status}")
        parts.append(e.message)
        lines.append(" ".join(parts).rstrip())
    return "\n".join(lines)


def format_json(entries: list[LogEntry]) -> str:
    return json.dumps([entry_to_dict(e) for e in entries], indent=2)


def get_formatter(fmt: str):
    if fmt == "json":
        return format_json
    return format_text
