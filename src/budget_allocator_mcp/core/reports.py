"""
Read-only reports over budget state.
"""

from collections import Counter, defaultdict
from typing import Dict, Optional

from budget_allocator_mcp.core.notifications import spent_percentage
from budget_allocator_mcp.models.report import (
    BudgetStatistics,
    CategorySpending,
    SpendingReport,
)
from budget_allocator_mcp.models.state import BudgetState


def spending_by_category(
    state: BudgetState,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> SpendingReport:
    """
    Compare each category's allocation with expenses in a date range.

    Spending is recomputed from the transaction log so the report can be
    restricted to a period; ``spent_amount`` on categories is lifetime.

    Args:
        state: Budget state
        start_date: Include transactions on or after this date (YYYY-MM-DD)
        end_date: Include transactions on or before this date (YYYY-MM-DD)

    Returns:
        SpendingReport with categories sorted by spending, descending
    """
    transactions = [
        txn
        for txn in state.transactions
        if (start_date is None or txn.date >= start_date)
        and (end_date is None or txn.date <= end_date)
    ]

    spent: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)
    for txn in transactions:
        if txn.is_expense:
            spent[txn.category_id] += txn.amount
            counts[txn.category_id] += 1

    categories = [
        CategorySpending(
            category_id=cat.id,
            category_name=cat.name,
            allocated=cat.allocated_amount,
            spent=round(spent[cat.id], 2),
            remaining=round(cat.allocated_amount - spent[cat.id], 2),
            percentage=round(spent_percentage(spent[cat.id], cat.allocated_amount), 1),
            transaction_count=counts[cat.id],
        )
        for cat in state.categories
    ]
    categories.sort(key=lambda c: c.spent, reverse=True)

    total_spent = round(sum(c.spent for c in categories), 2)
    total_allocated = round(sum(c.allocated for c in categories), 2)
    income = state.total_income
    savings_rate = (income - total_spent) / income * 100 if income > 0 else 0.0

    return SpendingReport(
        start_date=start_date,
        end_date=end_date,
        total_allocated=total_allocated,
        total_spent=total_spent,
        total_remaining=round(total_allocated - total_spent, 2),
        savings_rate=round(savings_rate, 1),
        transaction_count=len(transactions),
        categories=categories,
    )


def compute_statistics(state: BudgetState) -> BudgetStatistics:
    """Summarize usage: counts, totals, savings rate and notable items."""
    expenses = [txn for txn in state.transactions if txn.is_expense]
    income_from_transactions = sum(
        txn.amount for txn in state.transactions if not txn.is_expense
    )
    total_expenses = round(sum(txn.amount for txn in expenses), 2)

    # Configured income wins; logged income is the fallback
    total_income = state.total_income or income_from_transactions
    savings_rate = (
        (total_income - total_expenses) / total_income * 100 if total_income > 0 else 0.0
    )

    months = Counter(txn.month_key for txn in state.transactions)
    average_monthly = total_expenses / len(months) if months else 0.0

    names = {cat.id: cat.name for cat in state.categories}
    usage = Counter(
        txn.category_id for txn in state.transactions if txn.category_id in names
    )
    most_used = usage.most_common(1)
    biggest = max(expenses, key=lambda txn: txn.amount, default=None)
    most_active = months.most_common(1)

    return BudgetStatistics(
        total_budgets_created=len(state.monthly_budgets),
        total_templates=len(state.templates),
        total_transactions=len(state.transactions),
        total_categories=len(state.categories),
        categories_with_subcategories=sum(1 for cat in state.categories if cat.subcategories),
        total_income=round(total_income, 2),
        total_expenses=total_expenses,
        savings_rate=round(savings_rate, 1),
        average_monthly_spending=round(average_monthly, 2),
        most_used_category=names[most_used[0][0]] if most_used else None,
        most_used_category_count=most_used[0][1] if most_used else 0,
        biggest_expense_amount=biggest.amount if biggest else None,
        biggest_expense_description=biggest.description if biggest else None,
        biggest_expense_date=biggest.date if biggest else None,
        most_active_month=most_active[0][0] if most_active else None,
    )
