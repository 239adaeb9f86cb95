"""
Monthly budget snapshots and reusable budget templates.
"""

import time
from typing import List
from uuid import uuid4

from pydantic import BaseModel, Field

from budget_allocator_mcp.models.category import Category, new_id
from budget_allocator_mcp.models.money import Amount, to_cents
from budget_allocator_mcp.models.transaction import Transaction
from budget_allocator_mcp.utils.date_utils import utc_now_iso


def generate_budget_id() -> str:
    return f"budget_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


def generate_template_id() -> str:
    return f"template_{int(time.time() * 1000)}_{uuid4().hex[:9]}"


class MonthlyBudget(BaseModel):
    """
    A detached copy of the category hierarchy planned for one month.

    At most one budget exists per month key; saving a new one for the same
    month replaces the old one.
    """

    model_config = {"strict": True, "populate_by_name": True}

    id: str = Field(default_factory=generate_budget_id)
    month: str = Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")
    year: int
    month_name: str
    total_income: Amount = 0.0
    categories: List[Category] = Field(default_factory=list)
    transactions: List[Transaction] = Field(default_factory=list)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)

    @property
    def total_allocated(self) -> float:
        return to_cents(sum(cat.allocated_amount for cat in self.categories))


class TemplateSubcategory(BaseModel):
    """Subcategory shape stored in templates: no spend, no completion."""

    model_config = {"strict": True, "populate_by_name": True}

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    allocated_amount: Amount = 0.0


class TemplateCategory(BaseModel):
    """Category shape stored in templates: no spend history."""

    model_config = {"strict": True, "populate_by_name": True}

    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1)
    allocated_amount: Amount = 0.0
    subcategories: List[TemplateSubcategory] = Field(default_factory=list)
    is_amount_hidden: bool = False


class BudgetTemplate(BaseModel):
    """
    A reusable allocation plan, independent of any month.

    Templates are only ever used as a source for new monthly budgets.
    """

    model_config = {"strict": True, "populate_by_name": True}

    id: str = Field(default_factory=generate_template_id)
    name: str = Field(min_length=1)
    description: str = ""
    total_income: Amount = 0.0
    categories: List[TemplateCategory] = Field(default_factory=list)
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
