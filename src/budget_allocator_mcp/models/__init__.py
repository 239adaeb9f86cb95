"""
Pydantic models for the budget allocation hierarchy.
"""

from budget_allocator_mcp.models.budget import (
    BudgetTemplate,
    MonthlyBudget,
    TemplateCategory,
    TemplateSubcategory,
)
from budget_allocator_mcp.models.category import Category, Subcategory
from budget_allocator_mcp.models.notification import AlertCandidate, Notification
from budget_allocator_mcp.models.state import BudgetState
from budget_allocator_mcp.models.transaction import Transaction

__all__ = [
    "AlertCandidate",
    "BudgetState",
    "BudgetTemplate",
    "Category",
    "MonthlyBudget",
    "Notification",
    "Subcategory",
    "TemplateCategory",
    "TemplateSubcategory",
    "Transaction",
]
