"""
Report models derived from budget state.
"""

from typing import List, Optional

from pydantic import BaseModel


class CategorySpending(BaseModel):
    """Spending against one category's allocation within a date range."""

    category_id: str
    category_name: str
    allocated: float
    spent: float
    remaining: float
    percentage: float
    transaction_count: int


class SpendingReport(BaseModel):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    total_allocated: float
    total_spent: float
    total_remaining: float
    savings_rate: float
    transaction_count: int
    categories: List[CategorySpending]


class BudgetStatistics(BaseModel):
    """Usage statistics across the whole state."""

    total_budgets_created: int
    total_templates: int
    total_transactions: int
    total_categories: int
    categories_with_subcategories: int
    total_income: float
    total_expenses: float
    savings_rate: float
    average_monthly_spending: float
    most_used_category: Optional[str] = None
    most_used_category_count: int = 0
    biggest_expense_amount: Optional[float] = None
    biggest_expense_description: Optional[str] = None
    biggest_expense_date: Optional[str] = None
    most_active_month: Optional[str] = None
