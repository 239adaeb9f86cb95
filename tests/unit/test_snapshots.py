"""
Unit tests for monthly budget and template snapshots.
"""

import pytest
from freezegun import freeze_time

from budget_allocator_mcp.core.snapshots import (
    create_monthly_budget,
    create_template_from_categories,
    duplicate_template,
    reset_categories,
    save_monthly_budget,
    update_template,
)
from budget_allocator_mcp.models.category import Category, Subcategory


@pytest.fixture
def spent_categories(household_state):
    household_state.categories[1].spent_amount = 210.0
    household_state.categories[1].subcategories[0].spent_amount = 120.0
    return household_state.categories


class TestResetCategories:
    """Tests for reset_categories."""

    def test_zeroes_spend_and_completion(self, spent_categories):
        copies = reset_categories(spent_categories)

        food = copies[1]
        assert food.spent_amount == 0.0
        assert all(sub.spent_amount == 0.0 for sub in food.subcategories)
        assert all(not sub.is_complete for sub in food.subcategories)
        assert food.allocated_amount == 400.0
        assert [sub.allocated_amount for sub in food.subcategories] == [150.0, 100.0]

    def test_copies_are_independent(self, spent_categories):
        copies = reset_categories(spent_categories)
        copies[1].subcategories[0].allocated_amount = 1.0

        assert spent_categories[1].subcategories[0].allocated_amount == 150.0
        assert spent_categories[1].spent_amount == 210.0
        assert spent_categories[1].subcategories[1].is_complete is True


class TestCreateMonthlyBudget:
    """Tests for create_monthly_budget."""

    @freeze_time("2026-03-15 12:00:00")
    def test_from_categories(self, spent_categories):
        budget = create_monthly_budget("2026-04", 1000.0, spent_categories)

        assert budget.id.startswith("budget_")
        assert budget.month == "2026-04"
        assert budget.year == 2026
        assert budget.month_name == "April 2026"
        assert budget.total_income == 1000.0
        assert budget.created_at.startswith("2026-03-15T12:00:00")
        assert [cat.id for cat in budget.categories] == ["rent", "food"]
        assert budget.categories[1].spent_amount == 0.0
        assert budget.transactions == []

    def test_blank(self):
        budget = create_monthly_budget("2026-12", None)
        assert budget.categories == []
        assert budget.total_income == 0.0
        assert budget.month_name == "December 2026"

    def test_custom_month_name(self):
        budget = create_monthly_budget("2026-01", 10.0, month_name="New Year")
        assert budget.month_name == "New Year"

    def test_from_template_uses_template_income(self, household_state):
        template = create_template_from_categories("Base", household_state.categories, 1000.0)

        budget = create_monthly_budget("2026-05", source=template)

        assert budget.total_income == 1000.0
        assert [cat.name for cat in budget.categories] == ["Rent", "Food"]
        assert [sub.name for sub in budget.categories[1].subcategories] == ["Groceries", "Dining"]
        assert all(not sub.is_complete for sub in budget.categories[1].subcategories)

    def test_explicit_income_overrides_template(self, household_state):
        template = create_template_from_categories("Base", household_state.categories, 1000.0)
        budget = create_monthly_budget("2026-05", 1500.0, template)
        assert budget.total_income == 1500.0

    def test_copy_existing_budget(self, spent_categories):
        original = create_monthly_budget("2026-04", 1000.0, spent_categories)
        original.categories[0].spent_amount = 99.0

        copy = create_monthly_budget("2026-05", source=original)

        assert copy.id != original.id
        assert copy.total_income == 1000.0
        assert copy.categories[0].spent_amount == 0.0
        copy.categories[0].allocated_amount = 1.0
        assert original.categories[0].allocated_amount == 300.0

    @pytest.mark.parametrize("month", ["2026-13", "2026-00", "26-01", "2019-05", "nope"])
    def test_invalid_month(self, month):
        with pytest.raises(ValueError):
            create_monthly_budget(month, 0.0)


class TestSaveMonthlyBudget:
    """Tests for save_monthly_budget."""

    def test_replaces_same_month(self):
        april = create_monthly_budget("2026-04", 100.0)
        may = create_monthly_budget("2026-05", 100.0)
        april_again = create_monthly_budget("2026-04", 200.0)

        budgets = save_monthly_budget(save_monthly_budget([], april), may)
        budgets = save_monthly_budget(budgets, april_again)

        assert [b.id for b in budgets] == [april_again.id, may.id]
        assert len({b.month for b in budgets}) == len(budgets)

    def test_does_not_modify_input(self):
        existing = [create_monthly_budget("2026-04", 100.0)]
        save_monthly_budget(existing, create_monthly_budget("2026-04", 5.0))
        assert len(existing) == 1
        assert existing[0].total_income == 100.0


class TestTemplates:
    """Tests for template creation, duplication and update."""

    def test_template_strips_spend_and_completion(self, spent_categories):
        template = create_template_from_categories(
            "  Household  ", spent_categories, 1000.0, description=" Default "
        )

        assert template.id.startswith("template_")
        assert template.name == "Household"
        assert template.description == "Default"
        food = template.categories[1]
        assert food.allocated_amount == 400.0
        assert not hasattr(food, "spent_amount")
        assert not hasattr(food.subcategories[1], "is_complete")

    def test_duplicate(self, household_state):
        template = create_template_from_categories("Base", household_state.categories)

        copy = duplicate_template(template)

        assert copy.id != template.id
        assert copy.name == "Base (Copy)"
        assert copy.categories == template.categories
        copy.categories[0].allocated_amount = 1.0
        assert template.categories[0].allocated_amount == 300.0

    def test_update(self, household_state):
        with freeze_time("2026-01-01"):
            template = create_template_from_categories("Base", household_state.categories)
        with freeze_time("2026-02-01"):
            updated = update_template(template, name="Lean", total_income=800.0)

        assert updated.id == template.id
        assert updated.name == "Lean"
        assert updated.total_income == 800.0
        assert updated.created_at == template.created_at
        assert updated.updated_at.startswith("2026-02-01")
        assert template.name == "Base"

    @pytest.mark.parametrize("field", ["id", "created_at", "colour"])
    def test_update_rejects_protected_or_unknown_fields(self, household_state, field):
        template = create_template_from_categories("Base", household_state.categories)
        with pytest.raises(ValueError, match="Cannot update template field"):
            update_template(template, **{field: "x"})

    def test_update_revalidates(self):
        template = create_template_from_categories(
            "Base", [Category(name="A", subcategories=[Subcategory(name="B")])]
        )
        with pytest.raises(ValueError):
            update_template(template, total_income=-5.0)
