"""
Allocation bounds for categories and subcategories.

Bound functions are pure and never mutate their inputs. The ``check_*``
helpers compare a proposed amount against the bounds and raise
``ValidationError`` naming the bound that was violated, so callers can show
an actionable message.
"""

from typing import Iterable, Sequence, Tuple, Union

from budget_allocator_mcp.core.exceptions import ValidationError, ViolationReason
from budget_allocator_mcp.models.category import Category, Subcategory
from budget_allocator_mcp.models.money import DEFAULT_CURRENCY, to_cents
from budget_allocator_mcp.utils.formatting import format_amount


def _allocated_sum(items: Iterable[Union[Category, Subcategory]]) -> float:
    return sum(item.allocated_amount for item in items)


def max_for_new_category(categories: Sequence[Category], total_income: float) -> float:
    """
    Largest allocation a new category may receive.

    Args:
        categories: Existing categories
        total_income: Income to allocate from

    Returns:
        Income minus everything already allocated, floored at 0
    """
    return max(0.0, to_cents(total_income - _allocated_sum(categories)))


def range_for_edit_category(
    categories: Sequence[Category], target: Category, total_income: float
) -> Tuple[float, float]:
    """
    Legal allocation range when editing an existing category.

    The minimum is what the category has already committed to its
    subcategories; the maximum is income not allocated to other categories.

    Returns:
        Tuple of (min, max)
    """
    minimum = to_cents(target.subcategory_total)
    others = _allocated_sum(cat for cat in categories if cat.id != target.id)
    maximum = max(0.0, to_cents(total_income - others))
    return minimum, maximum


def max_for_subcategory(
    parent: Category, siblings_excluding_self: Sequence[Subcategory]
) -> float:
    """
    Largest allocation a subcategory may hold inside its parent.

    Args:
        parent: Owning category
        siblings_excluding_self: The other subcategories of the parent

    Returns:
        Parent allocation minus sibling allocations, floored at 0
    """
    return max(0.0, to_cents(parent.allocated_amount - _allocated_sum(siblings_excluding_self)))


def _check_non_negative(amount: float) -> None:
    if amount < 0:
        raise ValidationError(
            ViolationReason.NEGATIVE_AMOUNT,
            f"Allocation must not be negative, got {amount}.",
            bound=0.0,
        )


def check_new_category(
    amount: float,
    categories: Sequence[Category],
    total_income: float,
    currency: str = DEFAULT_CURRENCY,
) -> None:
    """
    Raises:
        ValidationError: If amount is negative or exceeds available income
    """
    _check_non_negative(amount)
    maximum = max_for_new_category(categories, total_income)
    if to_cents(amount) > maximum:
        raise ValidationError(
            ViolationReason.EXCEEDS_AVAILABLE,
            f"The allocation of {format_amount(amount, currency)} exceeds the "
            f"available funds. The maximum you can allocate for a new category "
            f"is {format_amount(maximum, currency)}.",
            bound=maximum,
        )


def check_edit_category(
    amount: float,
    categories: Sequence[Category],
    target: Category,
    total_income: float,
    currency: str = DEFAULT_CURRENCY,
) -> None:
    """
    Raises:
        ValidationError: If amount is negative, below the subcategory total,
            or above what income and the other categories leave available
    """
    _check_non_negative(amount)
    minimum, maximum = range_for_edit_category(categories, target, total_income)
    if to_cents(amount) < minimum:
        raise ValidationError(
            ViolationReason.BELOW_SUBCATEGORY_TOTAL,
            f"The new allocation of {format_amount(amount, currency)} is less than "
            f"the total already allocated to its subcategories "
            f"({format_amount(minimum, currency)}). Reduce the subcategories first.",
            bound=minimum,
        )
    if to_cents(amount) > maximum:
        raise ValidationError(
            ViolationReason.EXCEEDS_AVAILABLE,
            f"The allocation of {format_amount(amount, currency)} exceeds the "
            f"available funds. The maximum you can allocate to this category "
            f"is {format_amount(maximum, currency)}.",
            bound=maximum,
        )


def check_subcategory(
    amount: float,
    parent: Category,
    siblings_excluding_self: Sequence[Subcategory],
    currency: str = DEFAULT_CURRENCY,
) -> None:
    """
    Raises:
        ValidationError: If amount is negative or exceeds what is left
            inside the parent category
    """
    _check_non_negative(amount)
    maximum = max_for_subcategory(parent, siblings_excluding_self)
    if to_cents(amount) > maximum:
        raise ValidationError(
            ViolationReason.EXCEEDS_AVAILABLE,
            f"The maximum you can allocate within \"{parent.name}\" is "
            f"{format_amount(maximum, currency)}. Enter a smaller amount or "
            f"adjust the parent category's allocation.",
            bound=maximum,
        )
