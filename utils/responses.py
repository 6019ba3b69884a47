"""
Turning coordinator results and page state into HTTP responses
"""
from typing import Any, Dict, List

from fastapi import HTTPException

from database.store import StoreError
from services.mutation_coordinator import MutationResult
from services.view_state import ViewState
from utils.access_policy import capabilities
from utils.logging_utils import log_error


def mutation_response(result: MutationResult) -> Dict[str, Any]:
    """Canonical record plus the notification; a failed mutation becomes an HTTPException with its generic message."""
    if not result.ok:
        raise HTTPException(status_code=result.status_code, detail=result.notification.message)
    return {"record": result.record, "notification": result.notification}


def page_context(user, view: ViewState) -> Dict[str, Any]:
    """Parts every page view model shares."""
    return {
        "user": {
            "id": user.id,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "role": user.role,
        },
        "capabilities": capabilities(user.role, user.is_active),
        "filters": view.filters,
    }


def load_collection(store, kind: str, user_label: str, **query) -> List[Any]:
    """
    Page loaders render with an empty collection when a read fails;
    the cause only goes to the log.
    """
    try:
        return store.select(kind, **query)
    except StoreError as e:
        log_error(kind, user_label, "Load failed", e.message)
        return []
