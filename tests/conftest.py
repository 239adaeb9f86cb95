"""
Pytest configuration and fixtures for budget-allocator-mcp tests.
"""

from pathlib import Path

import pytest

from budget_allocator_mcp.core.session import BudgetSession
from budget_allocator_mcp.core.settings import BudgetSettings
from budget_allocator_mcp.core.storage import JsonFileStorage
from budget_allocator_mcp.models.category import Category, Subcategory
from budget_allocator_mcp.models.state import BudgetState


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """Empty directory for state files."""
    return tmp_path / "data"


@pytest.fixture
def settings(data_dir: Path) -> BudgetSettings:
    """Settings with default thresholds pointing at a temporary data dir."""
    return BudgetSettings(
        data_dir=data_dir,
        user_id="tester",
        default_currency="USD",
        warning_threshold_pct=80.0,
        savings_goal_pct=20.0,
    )


@pytest.fixture
def storage(data_dir: Path) -> JsonFileStorage:
    return JsonFileStorage(data_dir)


@pytest.fixture
def household_state() -> BudgetState:
    """
    Income 1000 with two categories:

    - Rent (300), no subcategories
    - Food (400): Groceries 150 (open), Dining 100 (complete)
    """
    return BudgetState(
        total_income=1000.0,
        categories=[
            Category(id="rent", name="Rent", allocated_amount=300.0),
            Category(
                id="food",
                name="Food",
                allocated_amount=400.0,
                subcategories=[
                    Subcategory(id="groceries", name="Groceries", allocated_amount=150.0),
                    Subcategory(
                        id="dining",
                        name="Dining",
                        allocated_amount=100.0,
                        is_complete=True,
                    ),
                ],
            ),
        ],
    )


@pytest.fixture
def session(storage: JsonFileStorage, settings: BudgetSettings) -> BudgetSession:
    """Session for a user with no saved state."""
    return BudgetSession(storage, "tester", settings=settings)


@pytest.fixture
def household_session(
    storage: JsonFileStorage, settings: BudgetSettings, household_state: BudgetState
) -> BudgetSession:
    return BudgetSession(storage, "tester", state=household_state, settings=settings)
