"""
Category and subcategory models for the allocation hierarchy.
"""

from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, computed_field

from budget_allocator_mcp.models.money import Amount, to_cents


def new_id() -> str:
    """Generate a fresh identifier for hierarchy nodes and transactions."""
    return uuid4().hex


class Subcategory(BaseModel):
    """
    A slice of a category's allocation.

    Completion marks the planned spend as consumed; the money only leaves
    the plan when the subcategory is deleted.
    """

    model_config = {"strict": True, "populate_by_name": True}

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    allocated_amount: Amount = 0.0
    spent_amount: Amount = 0.0
    is_complete: bool = False


class Category(BaseModel):
    """
    A top-level spending category funded out of total income.
    """

    model_config = {"strict": True, "populate_by_name": True}

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    allocated_amount: Amount = 0.0
    spent_amount: Amount = 0.0
    subcategories: List[Subcategory] = Field(default_factory=list)

    # Display only
    is_amount_hidden: bool = False

    @computed_field  # type: ignore[prop-decorator]
    @property
    def remaining_amount(self) -> float:
        """Allocation left after recorded spending (negative when overspent)."""
        return round(self.allocated_amount - self.spent_amount, 2)

    @property
    def subcategory_total(self) -> float:
        """Sum of allocations committed to subcategories."""
        return to_cents(sum(sub.allocated_amount for sub in self.subcategories))

    @property
    def completed_total(self) -> float:
        """Sum of allocations of completed subcategories."""
        return to_cents(
            sum(sub.allocated_amount for sub in self.subcategories if sub.is_complete)
        )

    def find_subcategory(self, subcategory_id: str) -> Optional[Subcategory]:
        return next(
            (sub for sub in self.subcategories if sub.id == subcategory_id), None
        )
