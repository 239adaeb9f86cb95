"""
Custom exceptions for Budget Allocator MCP.
"""

from enum import Enum
from typing import Optional


class BudgetError(Exception):
    """Base exception for budget engine errors."""
    pass


class ViolationReason(str, Enum):
    """Which allocation bound a rejected amount violated."""

    EXCEEDS_AVAILABLE = "exceeds_available"
    BELOW_SUBCATEGORY_TOTAL = "below_subcategory_total"
    NEGATIVE_AMOUNT = "negative_amount"


class ValidationError(BudgetError):
    """
    Raised when a proposed allocation is outside its legal bound.

    Recoverable: the caller keeps its prior state and re-prompts.
    """

    def __init__(
        self,
        reason: ViolationReason,
        message: str,
        bound: Optional[float] = None,
    ):
        super().__init__(message)
        self.reason = reason
        self.message = message
        self.bound = bound


class NotFoundError(BudgetError):
    """Raised when a referenced category, subcategory or budget does not exist."""

    def __init__(self, entity: str, entity_id: str):
        super().__init__(f"{entity} not found: {entity_id}")
        self.entity = entity
        self.entity_id = entity_id


class InvariantViolation(BudgetError):
    """Raised when a committed state breaks a hierarchy invariant (a bug)."""
    pass


class StorageError(BudgetError):
    """Raised when the storage collaborator cannot load or save state."""
    pass


class StateDecodeError(StorageError):
    """Raised when stored state cannot be decoded."""
    pass
