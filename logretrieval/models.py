"""Log entry dataclasses: the shape every parsed line maps to."""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Mapping, NamedTuple

# Always serialized, even when empty
_REQUIRED_FIELDS = ("timestamp", "level", "message")


@dataclass(frozen=True)
class LogEntry:
    timestamp: str = ""
    level: str = ""
    message: str = ""
    log_id: str = ""

    # source location
    file: str = ""
    line: int = 0
    function: str = ""

    # HTTP request metadata
    method: str = ""
    path: str = ""
    status: int = 0
    duration: str = ""
    ip: str = ""
    user_agent: str = ""

    extra: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        # read-only copy, so the caller's dict cannot change the entry either
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True)
class HttpMetadata:
    """HTTP request fields recovered from a free-text message."""

    method: str | None = None
    path: str | None = None
    status: int | None = None
    duration: str | None = None
    ip: str | None = None
    user_agent: str | None = None


class DateQueryResult(NamedTuple):
    entries: list[LogEntry]
    total: int


def entry_to_dict(entry: LogEntry) -> dict[str, Any]:
    """Convert a LogEntry to a dict, dropping empty optional fields for cleaner JSON."""
    result = {}
    for f in fields(entry):
        value = getattr(entry, f.name)
        if f.name not in _REQUIRED_FIELDS and not value:
            continue
        result[f.name] = dict(value) if f.name == "extra" else value
    return result
