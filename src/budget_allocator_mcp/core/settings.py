"""
Configuration for Budget Allocator MCP.

Values come from ``BUDGET_``-prefixed environment variables or a ``.env``
file; CLI flags override them.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class BudgetSettings(BaseSettings):
    """Engine thresholds and storage location."""

    model_config = SettingsConfigDict(
        env_prefix="BUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_dir: Path = Field(
        default=Path.home() / ".budget-allocator",
        description="Directory holding one JSON state file per user",
    )
    user_id: str = Field(
        default="default",
        description="User whose state the server loads",
    )
    default_currency: str = Field(
        default="USD",
        pattern=r"^[A-Z]{3}$",
        description="Currency for users without saved state",
    )

    # Alert thresholds, in percent
    warning_threshold_pct: float = Field(
        default=80.0,
        gt=0.0,
        le=100.0,
        description="Spent share of an allocation above which a warning is raised",
    )
    savings_goal_pct: float = Field(
        default=20.0,
        ge=0.0,
        lt=100.0,
        description="Savings rate above which a goal-achieved alert is raised",
    )

    @field_validator("data_dir")
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        return v.expanduser()


@lru_cache()
def get_settings() -> BudgetSettings:
    """
    Get settings (cached).

    Call get_settings.cache_clear() to reload.
    """
    return BudgetSettings()
