"""
Core functionality for Budget Allocator MCP.
"""

from budget_allocator_mcp.core.engine import MutationResult, apply
from budget_allocator_mcp.core.exceptions import (
    BudgetError,
    InvariantViolation,
    NotFoundError,
    StateDecodeError,
    StorageError,
    ValidationError,
    ViolationReason,
)
from budget_allocator_mcp.core.notifications import (
    NotificationEngine,
    NotificationFeed,
    evaluate_alerts,
)
from budget_allocator_mcp.core.session import BudgetSession
from budget_allocator_mcp.core.storage import JsonFileStorage, StateStorage

__all__ = [
    "apply",
    "BudgetError",
    "BudgetSession",
    "evaluate_alerts",
    "InvariantViolation",
    "JsonFileStorage",
    "MutationResult",
    "NotFoundError",
    "NotificationEngine",
    "NotificationFeed",
    "StateDecodeError",
    "StateStorage",
    "StorageError",
    "ValidationError",
    "ViolationReason",
]
