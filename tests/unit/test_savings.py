"""
Unit tests for the savings planner.
"""

import pytest

from budget_allocator_mcp.core.savings import manual_plan, recommended_plan, timeline_plan
from budget_allocator_mcp.core.settings import BudgetSettings


class TestInputValidation:
    """Tests shared by every plan."""

    @pytest.mark.parametrize(
        "income,goal,message",
        [
            (0.0, 1000.0, "Monthly income must be a positive number"),
            (-10.0, 1000.0, "Monthly income must be a positive number"),
            (5000.0, 0.0, "Savings goal must be a positive number"),
            (5000.0, 200.0, "Savings goal seems too low"),
        ],
    )
    def test_invalid_inputs(self, settings, income, goal, message):
        with pytest.raises(ValueError, match=message):
            recommended_plan(income, goal, settings)
        with pytest.raises(ValueError, match=message):
            manual_plan(income, goal, 100.0)
        with pytest.raises(ValueError, match=message):
            timeline_plan(income, goal, 12, settings)

    def test_goal_at_minimum_share_is_accepted(self, settings):
        assert recommended_plan(5000.0, 250.0, settings).months_to_goal == 1


class TestRecommendedPlan:
    """Tests for recommended_plan."""

    def test_saves_configured_share(self, settings):
        plan = recommended_plan(5000.0, 3000.0, settings)

        assert plan.recommended_monthly_saving == 1000.0
        assert plan.months_to_goal == 3
        assert plan.savings_percentage_of_income == 20.0
        assert plan.advice.startswith("We recommend saving 20% of your income.")
        assert "great track" in plan.advice

    def test_distant_goal(self, settings):
        plan = recommended_plan(1000.0, 20000.0, settings)

        assert plan.months_to_goal == 100
        assert "seems far away" in plan.advice

    def test_share_follows_settings(self):
        plan = recommended_plan(1000.0, 1000.0, BudgetSettings(savings_goal_pct=25.0))

        assert plan.recommended_monthly_saving == 250.0
        assert plan.months_to_goal == 4

    def test_zero_share_is_refused(self):
        with pytest.raises(ValueError, match="share is 0%"):
            recommended_plan(1000.0, 1000.0, BudgetSettings(savings_goal_pct=0.0))


class TestManualPlan:
    """Tests for manual_plan."""

    def test_solid_plan(self):
        plan = manual_plan(5000.0, 12000.0, 1000.0)

        assert plan.months_to_goal == 12
        assert plan.savings_percentage_of_income == 20.0
        assert plan.is_feasible is True
        assert plan.advice.startswith("This is a solid plan")

    def test_saving_whole_income_is_not_feasible(self):
        plan = manual_plan(5000.0, 12000.0, 5000.0, "EUR")

        assert plan.is_feasible is False
        assert plan.months_to_goal == 3
        assert "€5,000.00" in plan.advice
        assert "not feasible" in plan.advice

    def test_aggressive_share(self):
        plan = manual_plan(5000.0, 12000.0, 4000.0)

        assert plan.savings_percentage_of_income == 80.0
        assert plan.advice.startswith("An aggressive goal!")

    def test_over_ten_years(self):
        plan = manual_plan(5000.0, 200000.0, 1000.0)

        assert plan.months_to_goal == 200
        assert "over 10 years" in plan.advice

    def test_partial_month_rounds_up(self):
        assert manual_plan(5000.0, 1000.0, 300.0).months_to_goal == 4

    def test_non_positive_saving(self):
        with pytest.raises(ValueError, match="monthly saving amount must be a positive number"):
            manual_plan(5000.0, 1000.0, 0.0)


class TestTimelinePlan:
    """Tests for timeline_plan."""

    def test_within_guidelines(self, settings):
        plan = timeline_plan(5000.0, 6000.0, 12, settings)

        assert plan.required_monthly_saving == 500.0
        assert plan.savings_percentage_of_income == 10.0
        assert plan.is_feasible is True
        assert "well within" in plan.advice
        assert plan.alternative_suggestion is None

    def test_exactly_recommended_share_is_within_guidelines(self, settings):
        plan = timeline_plan(5000.0, 12000.0, 12, settings)

        assert plan.savings_percentage_of_income == 20.0
        assert "well within" in plan.advice

    def test_above_recommended_share(self, settings):
        plan = timeline_plan(5000.0, 6000.0, 4, settings)

        assert plan.savings_percentage_of_income == 30.0
        assert "aggressive but achievable" in plan.advice
        assert "recommended 20%" in plan.advice

    def test_over_half_of_income(self, settings):
        plan = timeline_plan(5000.0, 6000.0, 2, settings)

        assert plan.required_monthly_saving == 3000.0
        assert "very ambitious" in plan.advice

    def test_not_feasible_suggests_longer_timeframe(self, settings):
        plan = timeline_plan(5000.0, 6000.0, 1, settings)

        assert plan.is_feasible is False
        assert "not feasible" in plan.advice
        assert "extending your timeframe" in plan.alternative_suggestion

    def test_required_saving_rounds_up(self, settings):
        assert timeline_plan(5000.0, 1000.0, 3, settings).required_monthly_saving == 334.0

    @pytest.mark.parametrize("months", [0, -2])
    def test_non_positive_timeframe(self, settings, months):
        with pytest.raises(ValueError, match="Timeframe must be a positive number of months"):
            timeline_plan(5000.0, 6000.0, months, settings)
