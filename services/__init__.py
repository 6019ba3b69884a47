"""
Application services: per-view state and the mutation coordinator
"""

from .view_state import ViewState
from .mutation_coordinator import (
    MutationCoordinator,
    MutationResult,
    Notification,
)

__all__ = [
    "ViewState",
    "MutationCoordinator",
    "MutationResult",
    "Notification",
]
