"""
Mutation commands accepted by the engine.

Each command is a tagged model; ``Command`` is the discriminated union that
``budget_allocator_mcp.core.engine.apply`` dispatches on.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from budget_allocator_mcp.models.budget import BudgetTemplate, MonthlyBudget
from budget_allocator_mcp.models.money import Amount, CurrencyCode
from budget_allocator_mcp.models.transaction import Transaction

_CONFIG = {"strict": True, "frozen": True, "str_strip_whitespace": True}


class AddCategory(BaseModel):
    model_config = _CONFIG

    kind: Literal["add_category"] = "add_category"
    name: str = Field(min_length=1)
    amount: Amount = 0.0


class EditCategory(BaseModel):
    model_config = _CONFIG

    kind: Literal["edit_category"] = "edit_category"
    category_id: str
    name: str = Field(min_length=1)
    amount: Amount


class DeleteCategory(BaseModel):
    model_config = _CONFIG

    kind: Literal["delete_category"] = "delete_category"
    category_id: str


class AddSubcategory(BaseModel):
    model_config = _CONFIG

    kind: Literal["add_subcategory"] = "add_subcategory"
    category_id: str
    name: str = Field(min_length=1)
    amount: Amount = 0.0


class EditSubcategory(BaseModel):
    model_config = _CONFIG

    kind: Literal["edit_subcategory"] = "edit_subcategory"
    category_id: str
    subcategory_id: str
    name: str = Field(min_length=1)
    amount: Amount


class DeleteSubcategory(BaseModel):
    model_config = _CONFIG

    kind: Literal["delete_subcategory"] = "delete_subcategory"
    category_id: str
    subcategory_id: str


class ToggleSubcategoryComplete(BaseModel):
    model_config = _CONFIG

    kind: Literal["toggle_subcategory_complete"] = "toggle_subcategory_complete"
    category_id: str
    subcategory_id: str


class ApplyTransaction(BaseModel):
    model_config = _CONFIG

    kind: Literal["apply_transaction"] = "apply_transaction"
    transaction: Transaction


class SetTotalIncome(BaseModel):
    model_config = _CONFIG

    kind: Literal["set_total_income"] = "set_total_income"
    amount: Amount


class ToggleCategoryAmountHidden(BaseModel):
    model_config = _CONFIG

    kind: Literal["toggle_category_amount_hidden"] = "toggle_category_amount_hidden"
    category_id: str


class SetDisplayPreferences(BaseModel):
    """Update display pass-through settings. ``None`` leaves a setting as is."""

    model_config = _CONFIG

    kind: Literal["set_display_preferences"] = "set_display_preferences"
    currency: Optional[CurrencyCode] = None
    global_amounts_hidden: Optional[bool] = None
    income_hidden: Optional[bool] = None


class SaveMonthlyBudget(BaseModel):
    model_config = _CONFIG

    kind: Literal["save_monthly_budget"] = "save_monthly_budget"
    budget: MonthlyBudget


class DeleteMonthlyBudget(BaseModel):
    model_config = _CONFIG

    kind: Literal["delete_monthly_budget"] = "delete_monthly_budget"
    budget_id: str


class RestoreMonthlyBudget(BaseModel):
    model_config = _CONFIG

    kind: Literal["restore_monthly_budget"] = "restore_monthly_budget"
    budget_id: str


class SaveTemplate(BaseModel):
    model_config = _CONFIG

    kind: Literal["save_template"] = "save_template"
    template: BudgetTemplate


class DeleteTemplate(BaseModel):
    model_config = _CONFIG

    kind: Literal["delete_template"] = "delete_template"
    template_id: str


Command = Annotated[
    Union[
        AddCategory,
        EditCategory,
        DeleteCategory,
        AddSubcategory,
        EditSubcategory,
        DeleteSubcategory,
        ToggleSubcategoryComplete,
        ApplyTransaction,
        SetTotalIncome,
        ToggleCategoryAmountHidden,
        SetDisplayPreferences,
        SaveMonthlyBudget,
        DeleteMonthlyBudget,
        RestoreMonthlyBudget,
        SaveTemplate,
        DeleteTemplate,
    ],
    Field(discriminator="kind"),
]
