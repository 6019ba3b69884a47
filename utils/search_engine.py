"""
Filter/search over in-memory collections.

Pure functions: nothing is cached and inputs are never mutated. A record
passes when the free-text query matches at least one searchable field
(case-insensitive substring) AND every categorical filter equals the
record's field. The value "all" means no constraint.
"""
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

ALL = "all"

SEARCH_FIELDS = {
    "guest": ("first_name", "last_name", "email", "phone", "nationality"),
    "booking": ("guest.first_name", "guest.last_name", "guest.email", "room.room_number"),
    "room": ("room_number", "room_type", "description"),
    "staff": ("first_name", "last_name", "phone"),
    "task": ("task_type", "description", "room.room_number"),
}

# filter key -> record field
FILTER_FIELDS = {
    "guest": {},
    "booking": {"status": "status"},
    "room": {"status": "status", "room_type": "room_type"},
    "staff": {"role": "role", "status": "is_active"},
    "task": {"status": "status", "priority": "priority"},
}

_STAFF_STATUS = {"active": True, "inactive": False}


def resolve_field(record: Any, path: str) -> Any:
    """Follow a dotted path through mappings and attribute objects; None when any hop is missing."""
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    # str-based enums compare by value
    return str(getattr(value, "value", value))


def matches_query(record: Any, query: Optional[str], search_fields: Sequence[str]) -> bool:
    needle = (query or "").strip().lower()
    if not needle:
        return True
    for path in search_fields:
        text = _as_text(resolve_field(record, path))
        if text is not None and needle in text.lower():
            return True
    return False


def _field_equals(actual: Any, expected: Any) -> bool:
    if isinstance(expected, bool) or isinstance(actual, bool):
        return actual == expected
    return _as_text(actual) == _as_text(expected)


def matches_filters(record: Any, filters: Optional[Mapping[str, Any]]) -> bool:
    for path, expected in (filters or {}).items():
        if expected is None or expected == ALL:
            continue
        if not _field_equals(resolve_field(record, path), expected):
            return False
    return True


def filter_collection(
    collection: Iterable[Any],
    query: Optional[str] = None,
    filters: Optional[Mapping[str, Any]] = None,
    search_fields: Sequence[str] = (),
) -> List[Any]:
    """Ordered sub-sequence of collection that satisfies the query and every filter."""
    return [
        record for record in collection
        if matches_query(record, query, search_fields) and matches_filters(record, filters)
    ]


def _translate_filters(kind: str, filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    allowed = FILTER_FIELDS[kind]
    translated = {}
    for key, value in (filters or {}).items():
        if key not in allowed:
            raise ValueError(f"Unknown {kind} filter: {key}")
        if value is None or value == ALL:
            continue
        if kind == "staff" and key == "status":
            if value not in _STAFF_STATUS:
                raise ValueError(f"Unknown staff status: {value}")
            value = _STAFF_STATUS[value]
        translated[allowed[key]] = value
    return translated


def filter_kind(kind: str, collection: Iterable[Any], query: Optional[str] = None, **filters) -> List[Any]:
    if kind not in SEARCH_FIELDS:
        raise ValueError(f"Unknown collection kind: {kind}")
    return filter_collection(collection, query, _translate_filters(kind, filters), SEARCH_FIELDS[kind])


def filter_guests(guests, query=None):
    return filter_kind("guest", guests, query)


def filter_bookings(bookings, query=None, status=ALL):
    return filter_kind("booking", bookings, query, status=status)


def filter_rooms(rooms, query=None, status=ALL, room_type=ALL):
    return filter_kind("room", rooms, query, status=status, room_type=room_type)


def filter_staff(staff, query=None, role=ALL, status=ALL):
    return filter_kind("staff", staff, query, role=role, status=status)


def filter_tasks(tasks, query=None, status=ALL, priority=ALL):
    return filter_kind("task", tasks, query, status=status, priority=priority)
