"""
Full budget state for one user.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from budget_allocator_mcp.models.budget import BudgetTemplate, MonthlyBudget
from budget_allocator_mcp.models.category import Category, Subcategory
from budget_allocator_mcp.models.money import (
    DEFAULT_CURRENCY,
    Amount,
    CurrencyCode,
    to_cents,
)
from budget_allocator_mcp.models.transaction import Transaction


class BudgetState(BaseModel):
    """
    Everything the engine knows about one user's budget.

    This is the unit handed to and returned from every mutation and the
    unit the storage collaborator loads and saves.
    """

    model_config = {"strict": True, "populate_by_name": True}

    total_income: Amount = 0.0
    categories: List[Category] = Field(default_factory=list)
    transactions: List[Transaction] = Field(default_factory=list)
    selected_currency: CurrencyCode = DEFAULT_CURRENCY
    monthly_budgets: List[MonthlyBudget] = Field(default_factory=list)
    templates: List[BudgetTemplate] = Field(default_factory=list)

    # Display flags, passed through untouched
    are_global_amounts_hidden: bool = False
    is_income_hidden: bool = True

    @property
    def total_allocated(self) -> float:
        return to_cents(sum(cat.allocated_amount for cat in self.categories))

    @property
    def unallocated_amount(self) -> float:
        """Income not yet allocated. Negative after income shrinks below allocations."""
        return to_cents(self.total_income - self.total_allocated)

    @property
    def total_expenses(self) -> float:
        return to_cents(sum(txn.amount for txn in self.transactions if txn.is_expense))

    def find_category(self, category_id: str) -> Optional[Category]:
        return next((cat for cat in self.categories if cat.id == category_id), None)

    def find_subcategory(
        self, category_id: str, subcategory_id: str
    ) -> Optional[Subcategory]:
        category = self.find_category(category_id)
        if category is None:
            return None
        return category.find_subcategory(subcategory_id)

    def find_monthly_budget(self, month: str) -> Optional[MonthlyBudget]:
        return next((b for b in self.monthly_budgets if b.month == month), None)
