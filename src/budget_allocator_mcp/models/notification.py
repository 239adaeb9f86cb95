"""
Alert models produced by the notification engine.
"""

from typing import Literal, Optional, Tuple

from pydantic import BaseModel, Field

from budget_allocator_mcp.utils.date_utils import utc_now_iso

Severity = Literal["info", "warning", "success", "error"]

AlertRule = Literal[
    "budget_exceeded",
    "budget_warning",
    "low_balance",
    "goal_achieved",
]


class AlertCandidate(BaseModel):
    """
    An alert derived from the current state, not yet published.

    Global rules (income over-allocation, savings goal) have no category key.
    """

    model_config = {"strict": True, "frozen": True}

    rule: AlertRule
    severity: Severity
    message: str
    category_key: Optional[str] = None
    category_name: Optional[str] = None
    amount: Optional[float] = None

    @property
    def dedup_key(self) -> Tuple[str, Optional[str]]:
        return self.rule, self.category_key


class Notification(BaseModel):
    """A published alert as shown in the notification feed."""

    model_config = {"strict": True, "populate_by_name": True}

    id: int
    rule: AlertRule
    severity: Severity
    message: str
    category_key: Optional[str] = None
    category_name: Optional[str] = None
    amount: Optional[float] = None
    created_at: str = Field(default_factory=utc_now_iso)
    read: bool = False

    @property
    def dedup_key(self) -> Tuple[str, Optional[str]]:
        return self.rule, self.category_key
