"""
Structural checks run after every committed mutation.

``sum(categories) <= total_income`` is not checked here. The validator
enforces it when money is allocated; income may later shrink below it.
"""

import logging
from typing import List, Sequence

from budget_allocator_mcp.core.exceptions import InvariantViolation
from budget_allocator_mcp.models.category import Category
from budget_allocator_mcp.models.money import to_cents
from budget_allocator_mcp.models.state import BudgetState

logger = logging.getLogger(__name__)


def _category_violations(categories: Sequence[Category], scope: str) -> List[str]:
    problems: List[str] = []
    seen_ids = set()

    for category in categories:
        if category.id in seen_ids:
            problems.append(f"{scope}: duplicate category id {category.id}")
        seen_ids.add(category.id)

        if category.allocated_amount < 0:
            problems.append(f"{scope}: category {category.name!r} has a negative allocation")
        if category.spent_amount < 0:
            problems.append(f"{scope}: category {category.name!r} has a negative spent amount")

        committed = to_cents(category.subcategory_total)
        if committed > to_cents(category.allocated_amount):
            problems.append(
                f"{scope}: subcategories of {category.name!r} hold {committed:.2f}, "
                f"more than its allocation of {category.allocated_amount:.2f}"
            )

        for sub in category.subcategories:
            if sub.allocated_amount < 0:
                problems.append(
                    f"{scope}: subcategory {sub.name!r} of {category.name!r} "
                    f"has a negative allocation"
                )

    return problems


def find_violations(state: BudgetState) -> List[str]:
    """
    Describe every invariant the state breaks.

    Returns:
        Human-readable problems, empty when the state is consistent
    """
    problems: List[str] = []

    if state.total_income < 0:
        problems.append(f"total income is negative ({state.total_income})")

    problems.extend(_category_violations(state.categories, "working budget"))

    for txn in state.transactions:
        if txn.amount <= 0:
            problems.append(f"transaction {txn.id} has a non-positive amount")

    months = set()
    for budget in state.monthly_budgets:
        if budget.month in months:
            problems.append(f"more than one monthly budget for {budget.month}")
        months.add(budget.month)
        problems.extend(_category_violations(budget.categories, f"budget {budget.month}"))

    return problems


def assert_invariants(state: BudgetState) -> None:
    """
    Raises:
        InvariantViolation: If the state breaks any hierarchy invariant
    """
    problems = find_violations(state)
    if problems:
        logger.error("Invariant violation: %s", "; ".join(problems))
        raise InvariantViolation("; ".join(problems))
