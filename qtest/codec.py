"""
JSON helpers shared by the API modules.

Request bodies are built from ordered key/value items; response bodies are
decoded into the typed records in :mod:`qtest.models`.
"""

import json
import re
from dataclasses import fields
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, List, NamedTuple, Optional, Type, TypeVar

from .exceptions import DecodeError
from .models import Record

SENDING_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S.000Z"

NULL_SENTINEL = "null"

R = TypeVar("R", bound=Record)

_SCOPE_SEPARATOR = re.compile(r"\s+")


class Item(NamedTuple):
    """One key/value pair of a JSON request body."""
    
    key: str
    value: Any


def json_of(*items: Item) -> str:
    """Serialize items into a JSON object, keeping their order."""
    return json.dumps({item.key: item.value for item in items})


def format_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now) in UTC as ``yyyy-MM-ddTHH:mm:ss.000Z``."""
    if moment is None:
        moment = datetime.now(timezone.utc)
    elif moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(SENDING_DATE_FORMAT)


def as_nullable(value: Any) -> Optional[str]:
    """
    Coerce the literal string ``"null"`` to ``None``.
    
    The token endpoint writes absent values as the string "null" rather than
    JSON null.
    """
    if value is None or value == NULL_SENTINEL:
        return None
    return str(value)


def parse_scope(value: Optional[str]) -> FrozenSet[str]:
    """Split a space-delimited scope string; empty input gives an empty set."""
    if not value:
        return frozenset()
    return frozenset(part for part in _SCOPE_SEPARATOR.split(value) if part)


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by the service."""
    if value is None or isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        raise DecodeError(f"Expected a timestamp string, got {type(value).__name__}")
    
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError as e:
        raise DecodeError(f"Invalid timestamp: {value!r}", details=str(e))


def load_json(text: str) -> Any:
    """Parse a response body, raising DecodeError on malformed JSON."""
    try:
        return json.loads(text)
    except ValueError as e:
        raise DecodeError("Response body is not valid JSON", details=str(e))


def decode_record(data: Any, record_type: Type[R]) -> R:
    """Build a record from a decoded JSON object, ignoring unknown keys."""
    if not isinstance(data, dict):
        raise DecodeError(
            f"Expected a JSON object for {record_type.__name__}, "
            f"got {type(data).__name__}"
        )
    
    values: Dict[str, Any] = {}
    for f in fields(record_type):
        if f.name == "raw" or f.name not in data:
            continue
        value = data[f.name]
        if f.name in record_type.DATE_FIELDS:
            value = parse_datetime(value)
        values[f.name] = value
    
    return record_type(raw=data, **values)


def decode_records(data: Any, record_type: Type[R]) -> List[R]:
    """Build a list of records from a decoded JSON array, keeping order."""
    if not isinstance(data, list):
        raise DecodeError(
            f"Expected a JSON array of {record_type.__name__}, "
            f"got {type(data).__name__}"
        )
    return [decode_record(item, record_type) for item in data]
