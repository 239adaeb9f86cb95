"""
Savings plan models returned by the savings planner.
"""

from typing import Optional

from pydantic import BaseModel


class RecommendedSavingsPlan(BaseModel):
    """Plan that saves the recommended share of income each month."""

    monthly_income: float
    savings_goal: float
    recommended_monthly_saving: float
    months_to_goal: int
    savings_percentage_of_income: float
    advice: str


class ManualSavingsPlan(BaseModel):
    """Plan for a monthly saving chosen by the user."""

    monthly_income: float
    savings_goal: float
    monthly_saving: float
    months_to_goal: int
    savings_percentage_of_income: float
    is_feasible: bool
    advice: str


class TimelineSavingsPlan(BaseModel):
    """Monthly saving needed to reach a goal within a number of months."""

    monthly_income: float
    savings_goal: float
    months: int
    required_monthly_saving: float
    savings_percentage_of_income: float
    is_feasible: bool
    advice: str
    alternative_suggestion: Optional[str] = None
