"""Log line parser: JSON decode, then HTTP metadata recovery from the message.

Parsing order:
  1. Decode the line as a JSON object. Bad JSON, a non-object, or a known
     key with the wrong type drops the whole line.
  2. Fill method/path/status/duration/ip/user_agent from the message when
     the producer did not write them as explicit keys.

Message convention (request-logging middleware output):

    [Started|Completed] METHOD /path | Status: 200 | Duration: 45ms | IP: 10.0.0.1 | User-Agent: curl/8.0
"""

import json
from types import MappingProxyType

from logretrieval.models import HttpMetadata, LogEntry

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"})

# Verbs the request middleware puts in front of the method
_REQUEST_VERBS = frozenset({"Started", "Completed"})

_STRING_FIELDS = (
    "timestamp", "level", "message", "log_id", "file", "function",
    "method", "path", "duration", "ip", "user_agent",
)
_INT_FIELDS = ("line", "status")

# " | Key: value" segment name → HttpMetadata attribute
_SEGMENT_KEYS = {
    "Status": "status",
    "Duration": "duration",
    "IP": "ip",
    "User-Agent": "user_agent",
}

_HTTP_FIELDS = ("method", "path", "status", "duration", "ip", "user_agent")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _safe_int(value: str) -> int | None:
    """Convert an ASCII digit string to int, returning None for anything else."""
    # int() alone also takes "+200", "2_00" and non-ASCII digits
    if not (value.isascii() and value.isdigit()):
        return None
    return int(value)


def _decode_fields(data: dict) -> dict | None:
    """Type-check the known keys of a decoded object.

    Returns LogEntry keyword arguments, or None if any known key has the
    wrong type. JSON null is treated as an absent key; unknown keys are
    ignored.
    """
    fields = {}

    for key in _STRING_FIELDS:
        value = data.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            return None
        fields[key] = value

    for key in _INT_FIELDS:
        value = data.get(key)
        if value is None:
            continue
        # bool is an int subclass; "line": true is not a line number
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        fields[key] = value

    extra = data.get("extra")
    if extra is not None:
        if not isinstance(extra, dict):
            return None
        if not all(isinstance(v, str) for v in extra.values()):
            return None
        fields["extra"] = MappingProxyType(dict(extra))

    return fields


# ---------------------------------------------------------------------------
# Metadata recovery
# ---------------------------------------------------------------------------


def extract_http_metadata(message: str) -> HttpMetadata:
    """Recover HTTP request fields from a free-text message.

    Only the parts actually present are set; everything else stays None.
    A request line is recognised only as a method token followed by a path
    starting with '/'. A non-numeric Status is treated as absent.
    """
    if not message:
        return HttpMetadata()

    head, *segments = message.split("|")
    found = {}

    tokens = head.split()
    if tokens and tokens[0] in _REQUEST_VERBS:
        tokens = tokens[1:]
    if len(tokens) >= 2 and tokens[0] in HTTP_METHODS and tokens[1].startswith("/"):
        found["method"] = tokens[0]
        found["path"] = tokens[1]

    for segment in segments:
        key, sep, value = segment.partition(":")
        attr = _SEGMENT_KEYS.get(key.strip())
        value = value.strip()
        if not sep or attr is None or not value:
            continue
        if attr == "status":
            status = _safe_int(value)
            if status is None:
                continue
            found[attr] = status
        else:
            found[attr] = value

    return HttpMetadata(**found)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def parse_line(line: str) -> LogEntry | None:
    """Parse a single log line into a LogEntry. Returns None for unparseable lines."""
    stripped = line.strip()
    if not stripped:
        return None

    try:
        data = json.loads(stripped)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, dict):
        return None

    fields = _decode_fields(data)
    if fields is None:
        return None

    metadata = extract_http_metadata(fields.get("message", ""))
    for name in _HTTP_FIELDS:
        recovered = getattr(metadata, name)
        if recovered is not None and not fields.get(name):
            fields[name] = recovered

    return LogEntry(**fields)
