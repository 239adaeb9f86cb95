"""
Unit tests for allocation bounds.
"""

import pytest

from budget_allocator_mcp.core.exceptions import ValidationError, ViolationReason
from budget_allocator_mcp.core.validator import (
    check_edit_category,
    check_new_category,
    check_subcategory,
    max_for_new_category,
    max_for_subcategory,
    range_for_edit_category,
)
from budget_allocator_mcp.models.category import Category, Subcategory
from budget_allocator_mcp.models.state import BudgetState


@pytest.mark.unit
def test_max_for_new_category(household_state: BudgetState):
    """Test that the new-category bound is income minus allocations."""
    assert max_for_new_category(household_state.categories, 1000.0) == 300.0


@pytest.mark.unit
def test_max_for_new_category_floors_at_zero(household_state: BudgetState):
    """Test that an over-allocated budget leaves nothing for new categories."""
    assert max_for_new_category(household_state.categories, 500.0) == 0.0


@pytest.mark.unit
def test_max_for_new_category_with_zero_income():
    """Test that zero income allows only zero allocations."""
    assert max_for_new_category([], 0.0) == 0.0
    check_new_category(0.0, [], 0.0)
    with pytest.raises(ValidationError):
        check_new_category(0.01, [], 0.0)


@pytest.mark.unit
def test_range_for_edit_category(household_state: BudgetState):
    """Test that editing is bounded by subcategories below and other categories above."""
    food = household_state.find_category("food")
    minimum, maximum = range_for_edit_category(household_state.categories, food, 1000.0)
    assert minimum == 250.0
    assert maximum == 700.0


@pytest.mark.unit
def test_range_for_edit_category_without_subcategories(household_state: BudgetState):
    rent = household_state.find_category("rent")
    assert range_for_edit_category(household_state.categories, rent, 1000.0) == (0.0, 600.0)


@pytest.mark.unit
def test_max_for_subcategory(household_state: BudgetState):
    """Test the subcategory bound for new and edited subcategories."""
    food = household_state.find_category("food")
    assert max_for_subcategory(food, food.subcategories) == 150.0

    siblings = [sub for sub in food.subcategories if sub.id != "groceries"]
    assert max_for_subcategory(food, siblings) == 300.0


@pytest.mark.unit
def test_max_for_subcategory_floors_at_zero():
    parent = Category(name="Tight", allocated_amount=10.0)
    siblings = [Subcategory(name="Big", allocated_amount=20.0)]
    assert max_for_subcategory(parent, siblings) == 0.0


@pytest.mark.unit
def test_bounds_do_not_mutate_inputs(household_state: BudgetState):
    before = household_state.model_dump()
    food = household_state.find_category("food")
    max_for_new_category(household_state.categories, 1000.0)
    range_for_edit_category(household_state.categories, food, 1000.0)
    max_for_subcategory(food, food.subcategories)
    assert household_state.model_dump() == before


@pytest.mark.unit
def test_check_new_category_boundary(household_state: BudgetState):
    """Test that the exact maximum passes and one cent more fails."""
    check_new_category(300.0, household_state.categories, 1000.0)

    with pytest.raises(ValidationError) as exc_info:
        check_new_category(300.01, household_state.categories, 1000.0)

    assert exc_info.value.reason is ViolationReason.EXCEEDS_AVAILABLE
    assert exc_info.value.bound == 300.0
    assert "$300.00" in exc_info.value.message


@pytest.mark.unit
def test_check_edit_category_below_subcategory_total(household_state: BudgetState):
    """Test that shrinking below committed subcategories names that bound."""
    food = household_state.find_category("food")

    with pytest.raises(ValidationError) as exc_info:
        check_edit_category(249.99, household_state.categories, food, 1000.0)

    assert exc_info.value.reason is ViolationReason.BELOW_SUBCATEGORY_TOTAL
    assert exc_info.value.bound == 250.0


@pytest.mark.unit
def test_check_edit_category_exceeds_available(household_state: BudgetState):
    food = household_state.find_category("food")
    check_edit_category(700.0, household_state.categories, food, 1000.0)

    with pytest.raises(ValidationError) as exc_info:
        check_edit_category(700.01, household_state.categories, food, 1000.0)

    assert exc_info.value.reason is ViolationReason.EXCEEDS_AVAILABLE


@pytest.mark.unit
def test_check_subcategory(household_state: BudgetState):
    food = household_state.find_category("food")
    check_subcategory(150.0, food, food.subcategories)

    with pytest.raises(ValidationError) as exc_info:
        check_subcategory(150.5, food, food.subcategories, currency="EUR")

    assert exc_info.value.reason is ViolationReason.EXCEEDS_AVAILABLE
    assert "€150.00" in exc_info.value.message
    assert '"Food"' in exc_info.value.message


@pytest.mark.unit
def test_negative_amounts_rejected(household_state: BudgetState):
    food = household_state.find_category("food")
    for check in (
        lambda: check_new_category(-1.0, household_state.categories, 1000.0),
        lambda: check_edit_category(-1.0, household_state.categories, food, 1000.0),
        lambda: check_subcategory(-1.0, food, []),
    ):
        with pytest.raises(ValidationError) as exc_info:
            check()
        assert exc_info.value.reason is ViolationReason.NEGATIVE_AMOUNT


@pytest.mark.unit
def test_cent_rounding_tolerates_float_noise():
    """Test that sums like 0.1 + 0.2 do not shave a cent off the bound."""
    categories = [
        Category(name="A", allocated_amount=0.1),
        Category(name="B", allocated_amount=0.2),
    ]
    assert max_for_new_category(categories, 1.0) == 0.7
    check_new_category(0.7, categories, 1.0)
