"""
Mutation engine for the allocation hierarchy.

``apply`` is the single entry point: it takes a state and a command and
returns a ``MutationResult``. The input state is never modified; accepted
commands produce a new state, rejected ones hand back the original.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from budget_allocator_mcp.core.exceptions import (
    BudgetError,
    NotFoundError,
    ValidationError,
    ViolationReason,
)
from budget_allocator_mcp.core.invariants import assert_invariants
from budget_allocator_mcp.core.snapshots import save_monthly_budget
from budget_allocator_mcp.core.validator import (
    check_edit_category,
    check_new_category,
    check_subcategory,
)
from budget_allocator_mcp.models.category import Category, Subcategory
from budget_allocator_mcp.models.commands import (
    AddCategory,
    AddSubcategory,
    ApplyTransaction,
    Command,
    DeleteCategory,
    DeleteMonthlyBudget,
    DeleteSubcategory,
    DeleteTemplate,
    EditCategory,
    EditSubcategory,
    RestoreMonthlyBudget,
    SaveMonthlyBudget,
    SaveTemplate,
    SetDisplayPreferences,
    SetTotalIncome,
    ToggleCategoryAmountHidden,
    ToggleSubcategoryComplete,
)
from budget_allocator_mcp.models.state import BudgetState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MutationResult:
    """Outcome of applying one command."""

    state: BudgetState
    accepted: bool
    error: Optional[BudgetError] = None

    @property
    def reason(self) -> Optional[ViolationReason]:
        """Violated bound when the command was rejected by the validator."""
        if isinstance(self.error, ValidationError):
            return self.error.reason
        return None

    @property
    def message(self) -> Optional[str]:
        return str(self.error) if self.error is not None else None


def _require_category(state: BudgetState, category_id: str) -> Category:
    category = state.find_category(category_id)
    if category is None:
        raise NotFoundError("Category", category_id)
    return category


def _require_subcategory(
    state: BudgetState, category_id: str, subcategory_id: str
) -> Tuple[Category, Subcategory]:
    category = _require_category(state, category_id)
    subcategory = category.find_subcategory(subcategory_id)
    if subcategory is None:
        raise NotFoundError("Subcategory", subcategory_id)
    return category, subcategory


def _add_category(state: BudgetState, command: AddCategory) -> None:
    check_new_category(
        command.amount, state.categories, state.total_income, state.selected_currency
    )
    state.categories.append(
        Category(name=command.name, allocated_amount=command.amount)
    )


def _edit_category(state: BudgetState, command: EditCategory) -> None:
    category = _require_category(state, command.category_id)
    check_edit_category(
        command.amount,
        state.categories,
        category,
        state.total_income,
        state.selected_currency,
    )
    category.name = command.name
    category.allocated_amount = command.amount


def _delete_category(state: BudgetState, command: DeleteCategory) -> None:
    category = _require_category(state, command.category_id)

    # Completed subcategories count as spent money: it leaves the income pool
    consumed = category.completed_total
    if consumed:
        state.total_income = max(0.0, round(state.total_income - consumed, 2))
        logger.info(
            "Settled %.2f of completed allocations from category %r",
            consumed,
            category.name,
        )

    state.categories = [cat for cat in state.categories if cat.id != category.id]


def _add_subcategory(state: BudgetState, command: AddSubcategory) -> None:
    parent = _require_category(state, command.category_id)
    check_subcategory(
        command.amount, parent, parent.subcategories, state.selected_currency
    )
    parent.subcategories.append(
        Subcategory(name=command.name, allocated_amount=command.amount)
    )


def _edit_subcategory(state: BudgetState, command: EditSubcategory) -> None:
    parent, subcategory = _require_subcategory(
        state, command.category_id, command.subcategory_id
    )
    siblings = [sub for sub in parent.subcategories if sub.id != subcategory.id]
    check_subcategory(command.amount, parent, siblings, state.selected_currency)
    subcategory.name = command.name
    subcategory.allocated_amount = command.amount


def _delete_subcategory(state: BudgetState, command: DeleteSubcategory) -> None:
    parent, subcategory = _require_subcategory(
        state, command.category_id, command.subcategory_id
    )

    if subcategory.is_complete:
        parent.allocated_amount = max(
            0.0, round(parent.allocated_amount - subcategory.allocated_amount, 2)
        )
        logger.info(
            "Settled %.2f of completed subcategory %r from %r",
            subcategory.allocated_amount,
            subcategory.name,
            parent.name,
        )

    parent.subcategories = [
        sub for sub in parent.subcategories if sub.id != subcategory.id
    ]


def _toggle_subcategory_complete(
    state: BudgetState, command: ToggleSubcategoryComplete
) -> None:
    # Settlement happens on delete, not here
    _, subcategory = _require_subcategory(
        state, command.category_id, command.subcategory_id
    )
    subcategory.is_complete = not subcategory.is_complete


def _apply_transaction(state: BudgetState, command: ApplyTransaction) -> None:
    txn = command.transaction
    category = _require_category(state, txn.category_id)
    subcategory = None
    if txn.subcategory_id:
        _, subcategory = _require_subcategory(state, txn.category_id, txn.subcategory_id)

    state.transactions.append(txn.model_copy(deep=True))

    # Overspending is allowed; notifications surface it
    if txn.is_expense:
        category.spent_amount = round(category.spent_amount + txn.amount, 2)
        if subcategory is not None:
            subcategory.spent_amount = round(subcategory.spent_amount + txn.amount, 2)


def _set_total_income(state: BudgetState, command: SetTotalIncome) -> None:
    state.total_income = command.amount
    if state.total_allocated > command.amount:
        logger.info(
            "Income %.2f is now below allocations of %.2f",
            command.amount,
            state.total_allocated,
        )


def _toggle_category_amount_hidden(
    state: BudgetState, command: ToggleCategoryAmountHidden
) -> None:
    category = _require_category(state, command.category_id)
    category.is_amount_hidden = not category.is_amount_hidden


def _set_display_preferences(
    state: BudgetState, command: SetDisplayPreferences
) -> None:
    if command.currency is not None:
        state.selected_currency = command.currency
    if command.global_amounts_hidden is not None:
        state.are_global_amounts_hidden = command.global_amounts_hidden
    if command.income_hidden is not None:
        state.is_income_hidden = command.income_hidden


def _save_monthly_budget(state: BudgetState, command: SaveMonthlyBudget) -> None:
    state.monthly_budgets = save_monthly_budget(
        state.monthly_budgets, command.budget.model_copy(deep=True)
    )


def _delete_monthly_budget(state: BudgetState, command: DeleteMonthlyBudget) -> None:
    if not any(b.id == command.budget_id for b in state.monthly_budgets):
        raise NotFoundError("Monthly budget", command.budget_id)
    state.monthly_budgets = [
        b for b in state.monthly_budgets if b.id != command.budget_id
    ]


def _restore_monthly_budget(
    state: BudgetState, command: RestoreMonthlyBudget
) -> None:
    budget = next(
        (b for b in state.monthly_budgets if b.id == command.budget_id), None
    )
    if budget is None:
        raise NotFoundError("Monthly budget", command.budget_id)
    state.categories = [cat.model_copy(deep=True) for cat in budget.categories]
    state.total_income = budget.total_income


def _save_template(state: BudgetState, command: SaveTemplate) -> None:
    template = command.template.model_copy(deep=True)
    for index, existing in enumerate(state.templates):
        if existing.id == template.id:
            state.templates[index] = template
            return
    state.templates.append(template)


def _delete_template(state: BudgetState, command: DeleteTemplate) -> None:
    if not any(t.id == command.template_id for t in state.templates):
        raise NotFoundError("Template", command.template_id)
    state.templates = [t for t in state.templates if t.id != command.template_id]


_HANDLERS: Dict[type, Callable[[BudgetState, Command], None]] = {
    AddCategory: _add_category,
    EditCategory: _edit_category,
    DeleteCategory: _delete_category,
    AddSubcategory: _add_subcategory,
    EditSubcategory: _edit_subcategory,
    DeleteSubcategory: _delete_subcategory,
    ToggleSubcategoryComplete: _toggle_subcategory_complete,
    ApplyTransaction: _apply_transaction,
    SetTotalIncome: _set_total_income,
    ToggleCategoryAmountHidden: _toggle_category_amount_hidden,
    SetDisplayPreferences: _set_display_preferences,
    SaveMonthlyBudget: _save_monthly_budget,
    DeleteMonthlyBudget: _delete_monthly_budget,
    RestoreMonthlyBudget: _restore_monthly_budget,
    SaveTemplate: _save_template,
    DeleteTemplate: _delete_template,
}


def apply(state: BudgetState, command: Command) -> MutationResult:
    """
    Apply a command to a state.

    Args:
        state: Current consistent state (left untouched)
        command: Command to apply

    Returns:
        MutationResult. Out-of-bound amounts are rejected with a
        ValidationError; unknown ids are ignored with a NotFoundError.
        Either way the original state is returned.

    Raises:
        InvariantViolation: If the resulting state is inconsistent
        TypeError: If the command type is not recognized
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown command: {type(command).__name__}")

    working = state.model_copy(deep=True)
    try:
        handler(working, command)
    except ValidationError as e:
        logger.info("Rejected %s (%s): %s", command.kind, e.reason.value, e.message)
        return MutationResult(state=state, accepted=False, error=e)
    except NotFoundError as e:
        logger.warning("Ignoring %s: %s", command.kind, e)
        return MutationResult(state=state, accepted=False, error=e)

    assert_invariants(working)
    logger.debug("Applied %s", command.kind)
    return MutationResult(state=working, accepted=True)
