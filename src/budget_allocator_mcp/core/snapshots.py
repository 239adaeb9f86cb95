"""
Detached copies of the category hierarchy for monthly budgets and templates.

Every function returns new objects that share nothing with their inputs, so
later edits on either side are never observable on the other.
"""

from typing import List, Optional, Sequence, Union

from budget_allocator_mcp.models.budget import (
    BudgetTemplate,
    MonthlyBudget,
    TemplateCategory,
    TemplateSubcategory,
    generate_template_id,
)
from budget_allocator_mcp.models.category import Category, Subcategory
from budget_allocator_mcp.utils.date_utils import (
    get_month_name,
    parse_month_key,
    utc_now_iso,
)

SnapshotSource = Union[Sequence[Category], BudgetTemplate, MonthlyBudget, None]


def reset_categories(categories: Sequence[Category]) -> List[Category]:
    """Deep copy categories with spend zeroed and completion cleared."""
    copies = []
    for category in categories:
        copy = category.model_copy(deep=True)
        copy.spent_amount = 0.0
        for sub in copy.subcategories:
            sub.spent_amount = 0.0
            sub.is_complete = False
        copies.append(copy)
    return copies


def categories_from_template(template: BudgetTemplate) -> List[Category]:
    """Expand template categories into working categories with zero spend."""
    return [
        Category(
            id=tcat.id,
            name=tcat.name,
            allocated_amount=tcat.allocated_amount,
            is_amount_hidden=tcat.is_amount_hidden,
            subcategories=[
                Subcategory(
                    id=tsub.id,
                    name=tsub.name,
                    allocated_amount=tsub.allocated_amount,
                )
                for tsub in tcat.subcategories
            ],
        )
        for tcat in template.categories
    ]


def create_monthly_budget(
    month: str,
    total_income: Optional[float] = None,
    source: SnapshotSource = None,
    month_name: Optional[str] = None,
) -> MonthlyBudget:
    """
    Create a monthly budget snapshot.

    Args:
        month: Month key (YYYY-MM)
        total_income: Income for the month. Defaults to the template's or
            source budget's income, else 0.
        source: Categories to copy, a template, an existing monthly budget,
            or None for a blank budget
        month_name: Display name; derived from the month key when omitted

    Returns:
        A new MonthlyBudget with a fresh id, zero spend and nothing complete

    Raises:
        ValueError: If the month key is invalid
    """
    year, month_number = parse_month_key(month)

    if source is None:
        categories: List[Category] = []
    elif isinstance(source, BudgetTemplate):
        categories = categories_from_template(source)
        if total_income is None:
            total_income = source.total_income
    elif isinstance(source, MonthlyBudget):
        categories = reset_categories(source.categories)
        if total_income is None:
            total_income = source.total_income
    else:
        categories = reset_categories(source)

    return MonthlyBudget(
        month=month,
        year=year,
        month_name=month_name or get_month_name(year, month_number),
        total_income=float(total_income or 0.0),
        categories=categories,
    )


def save_monthly_budget(
    budgets: Sequence[MonthlyBudget], budget: MonthlyBudget
) -> List[MonthlyBudget]:
    """
    Insert a budget, replacing any existing budget for the same month.

    Returns:
        New list with the saved budget first
    """
    return [budget] + [b for b in budgets if b.month != budget.month]


def create_template_from_categories(
    name: str,
    categories: Sequence[Category],
    total_income: float = 0.0,
    description: str = "",
) -> BudgetTemplate:
    """
    Create a reusable template from categories, dropping spend and completion.
    """
    return BudgetTemplate(
        name=name.strip(),
        description=description.strip(),
        total_income=float(total_income),
        categories=[
            TemplateCategory(
                id=cat.id,
                name=cat.name,
                allocated_amount=cat.allocated_amount,
                is_amount_hidden=cat.is_amount_hidden,
                subcategories=[
                    TemplateSubcategory(
                        id=sub.id,
                        name=sub.name,
                        allocated_amount=sub.allocated_amount,
                    )
                    for sub in cat.subcategories
                ],
            )
            for cat in categories
        ],
    )


def duplicate_template(template: BudgetTemplate) -> BudgetTemplate:
    """Copy a template under a fresh id and a "(Copy)" name."""
    now = utc_now_iso()
    return template.model_copy(
        deep=True,
        update={
            "id": generate_template_id(),
            "name": f"{template.name} (Copy)",
            "created_at": now,
            "updated_at": now,
        },
    )


def update_template(template: BudgetTemplate, **changes) -> BudgetTemplate:
    """
    Return a copy of the template with fields changed and a new updated_at.

    Raises:
        ValueError: If a change targets an unknown or immutable field
    """
    for field in changes:
        if field not in BudgetTemplate.model_fields or field in ("id", "created_at"):
            raise ValueError(f"Cannot update template field: {field}")
    updated = template.model_copy(
        deep=True, update={**changes, "updated_at": utc_now_iso()}
    )
    # model_copy skips validation; round-trip through JSON to re-check fields
    return BudgetTemplate.model_validate_json(updated.model_dump_json())
