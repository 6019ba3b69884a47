"""
State owned by a single view (one page load or one mutation request).

Holds the view's collections, its search/filter state and the loading
marker of each in-flight action. Nothing here is shared between views.
"""
from typing import Any, Dict, Iterable, List, Optional, Set


class ViewState:
    def __init__(self, collections: Optional[Dict[str, Iterable[Any]]] = None,
                 filters: Optional[Dict[str, Any]] = None):
        self.collections: Dict[str, List[Any]] = {
            name: list(records) for name, records in (collections or {}).items()
        }
        self.filters: Dict[str, Any] = dict(filters or {})
        self.loading: Set[str] = set()
        self.closed = False

    def collection(self, name: str) -> List[Any]:
        return self.collections.setdefault(name, [])

    def close(self) -> None:
        """The view went away; late responses must not touch it anymore."""
        self.closed = True

    # ========== LOADING MARKERS ==========

    def start(self, action: str) -> None:
        self.loading.add(action)

    def finish(self, action: str) -> None:
        self.loading.discard(action)

    def is_loading(self, action: str) -> bool:
        return action in self.loading

    # ========== RECONCILIATION ==========

    def _index_of(self, name: str, record_id: Any) -> Optional[int]:
        for index, existing in enumerate(self.collection(name)):
            if _record_id(existing) == record_id:
                return index
        return None

    def upsert(self, name: str, record: Any, at_head: bool = True) -> bool:
        """Replace the entry with the same id, or insert the record. Returns False when the view is closed."""
        if self.closed:
            return False
        records = self.collection(name)
        index = self._index_of(name, _record_id(record))
        if index is not None:
            records[index] = record
        elif at_head:
            records.insert(0, record)
        else:
            records.append(record)
        return True

    def replace(self, name: str, record: Any) -> bool:
        """Replace an existing entry only; records the view never loaded are ignored."""
        if self.closed:
            return False
        index = self._index_of(name, _record_id(record))
        if index is None:
            return False
        self.collection(name)[index] = record
        return True


def _record_id(record: Any) -> Any:
    if isinstance(record, dict):
        return record.get("id")
    return getattr(record, "id", None)
