"""
Savings goal planning derived from monthly income.

Three ways to plan towards a goal: save the recommended share of income,
save a chosen amount, or finish within a number of months. The
recommended share is the savings goal percentage from settings (20% by
default, the savings part of the 50/30/20 rule).
"""

import math
from typing import Optional

from budget_allocator_mcp.core.settings import BudgetSettings, get_settings
from budget_allocator_mcp.models.money import DEFAULT_CURRENCY, to_cents
from budget_allocator_mcp.models.savings import (
    ManualSavingsPlan,
    RecommendedSavingsPlan,
    TimelineSavingsPlan,
)
from budget_allocator_mcp.utils.formatting import format_amount

# Goals below this share of one month's income are too small to plan for
MIN_REALISTIC_SAVINGS_SHARE = 0.05

LONG_RECOMMENDED_PLAN_MONTHS = 60
LONG_MANUAL_PLAN_MONTHS = 120
AGGRESSIVE_MANUAL_PCT = 75.0
AMBITIOUS_TIMELINE_PCT = 50.0


def _validate_inputs(monthly_income: float, savings_goal: float) -> None:
    """
    Raises:
        ValueError: If income or goal is not positive, or the goal is tiny
    """
    if monthly_income <= 0:
        raise ValueError("Monthly income must be a positive number.")
    if savings_goal <= 0:
        raise ValueError("Savings goal must be a positive number.")
    if savings_goal < to_cents(monthly_income * MIN_REALISTIC_SAVINGS_SHARE):
        raise ValueError("Savings goal seems too low to plan for. Try setting a higher goal.")


def recommended_plan(
    monthly_income: float,
    savings_goal: float,
    settings: Optional[BudgetSettings] = None,
) -> RecommendedSavingsPlan:
    """
    Plan that saves the recommended share of income.

    Raises:
        ValueError: If the inputs cannot be planned for
    """
    _validate_inputs(monthly_income, savings_goal)
    if settings is None:
        settings = get_settings()

    share_pct = settings.savings_goal_pct
    monthly_saving = to_cents(monthly_income * share_pct / 100)
    if monthly_saving <= 0:
        raise ValueError("The recommended savings share is 0%; set a monthly saving instead.")
    months = math.ceil(savings_goal / monthly_saving)

    advice = f"We recommend saving {share_pct:.0f}% of your income."
    if months > LONG_RECOMMENDED_PLAN_MONTHS:
        advice += (
            " At this rate, your goal seems far away. Consider increasing your "
            "savings contribution if possible."
        )
    else:
        advice += " You're on a great track to reach your goal in a reasonable time!"

    return RecommendedSavingsPlan(
        monthly_income=monthly_income,
        savings_goal=savings_goal,
        recommended_monthly_saving=monthly_saving,
        months_to_goal=months,
        savings_percentage_of_income=share_pct,
        advice=advice,
    )


def manual_plan(
    monthly_income: float,
    savings_goal: float,
    monthly_saving: float,
    currency: str = DEFAULT_CURRENCY,
) -> ManualSavingsPlan:
    """
    Plan for a chosen monthly saving.

    Saving the whole income or more is reported as not feasible rather
    than refused.

    Raises:
        ValueError: If the inputs cannot be planned for
    """
    _validate_inputs(monthly_income, savings_goal)
    if monthly_saving <= 0:
        raise ValueError("Your monthly saving amount must be a positive number.")

    is_feasible = monthly_saving < monthly_income
    months = math.ceil(savings_goal / monthly_saving)
    pct = round(monthly_saving / monthly_income * 100, 1)

    if not is_feasible:
        advice = (
            f"Saving {format_amount(monthly_saving, currency)} per month is not "
            f"feasible with your current income of {format_amount(monthly_income, currency)}."
        )
    elif pct > AGGRESSIVE_MANUAL_PCT:
        advice = (
            f"An aggressive goal! Saving {pct:.1f}% of your income is impressive, "
            f"but ensure you're not stretching yourself too thin."
        )
    elif months > LONG_MANUAL_PLAN_MONTHS:
        advice = (
            "You're on the right track, but at this rate your goal will take over "
            "10 years to reach. Consider increasing your monthly contribution if possible."
        )
    else:
        advice = (
            f"This is a solid plan. At a saving rate of {pct:.1f}%, you're making "
            f"steady progress toward your goal!"
        )

    return ManualSavingsPlan(
        monthly_income=monthly_income,
        savings_goal=savings_goal,
        monthly_saving=monthly_saving,
        months_to_goal=months,
        savings_percentage_of_income=pct,
        is_feasible=is_feasible,
        advice=advice,
    )


def timeline_plan(
    monthly_income: float,
    savings_goal: float,
    months: int,
    settings: Optional[BudgetSettings] = None,
) -> TimelineSavingsPlan:
    """
    Monthly saving required to reach the goal in a number of months.

    The required saving is rounded up to a whole currency unit.

    Raises:
        ValueError: If the inputs cannot be planned for
    """
    _validate_inputs(monthly_income, savings_goal)
    if months <= 0:
        raise ValueError("Timeframe must be a positive number of months.")
    if settings is None:
        settings = get_settings()

    required = float(math.ceil(savings_goal / months))
    pct = round(required / monthly_income * 100, 1)
    is_feasible = required < monthly_income

    alternative = None
    if not is_feasible:
        advice = "This savings goal is not feasible with your current income and timeframe."
        alternative = (
            "To make this work, you'd need to save more than your monthly income. "
            "Try extending your timeframe."
        )
    elif pct > AMBITIOUS_TIMELINE_PCT:
        advice = (
            "Saving over 50% of your income is very ambitious! While possible, "
            "ensure you can cover your essential needs."
        )
    elif pct > settings.savings_goal_pct:
        advice = (
            f"This is an aggressive but achievable goal. You'll be saving more than "
            f"the recommended {settings.savings_goal_pct:.0f}%. Keep it up!"
        )
    else:
        advice = "This goal is well within the recommended savings guidelines. You're on the right track!"

    return TimelineSavingsPlan(
        monthly_income=monthly_income,
        savings_goal=savings_goal,
        months=months,
        required_monthly_saving=required,
        savings_percentage_of_income=pct,
        is_feasible=is_feasible,
        advice=advice,
        alternative_suggestion=alternative,
    )
