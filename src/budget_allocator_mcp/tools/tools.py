"""
MCP tool definitions for the budget allocator.

Exposes the session's operations, bound queries, notifications, snapshots
and reports through the Model Context Protocol.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from budget_allocator_mcp.core.engine import MutationResult
from budget_allocator_mcp.core.reports import compute_statistics, spending_by_category
from budget_allocator_mcp.core.savings import manual_plan, recommended_plan, timeline_plan
from budget_allocator_mcp.core.session import BudgetSession
from budget_allocator_mcp.core.validator import (
    max_for_new_category,
    max_for_subcategory,
    range_for_edit_category,
)
from budget_allocator_mcp.core.exceptions import NotFoundError
from budget_allocator_mcp.models.commands import (
    AddCategory,
    AddSubcategory,
    ApplyTransaction,
    DeleteCategory,
    DeleteMonthlyBudget,
    DeleteSubcategory,
    DeleteTemplate,
    EditCategory,
    EditSubcategory,
    RestoreMonthlyBudget,
    SetDisplayPreferences,
    SetTotalIncome,
    ToggleCategoryAmountHidden,
    ToggleSubcategoryComplete,
)
from budget_allocator_mcp.models.transaction import Transaction
from budget_allocator_mcp.utils.date_utils import (
    current_month_key,
    month_difference,
    parse_period,
)
from budget_allocator_mcp.utils.formatting import format_amount


class BudgetTools:
    """Collection of MCP tools operating on one budget session."""

    def __init__(self, session: BudgetSession):
        """
        Initialize tools with a session.

        Args:
            session: BudgetSession instance
        """
        self.session = session

    def _mutation_response(self, result: MutationResult) -> Dict[str, Any]:
        response: Dict[str, Any] = {"accepted": result.accepted}
        if not result.accepted:
            response["reason"] = result.reason.value if result.reason else "not_found"
            response["message"] = result.message
        response["total_income"] = self.session.state.total_income
        response["unallocated_amount"] = self.session.state.unallocated_amount
        response["unread_notifications"] = self.session.feed.unread_count
        return response

    def get_budget_overview(self) -> Dict[str, Any]:
        """
        Get income, allocation totals and the category hierarchy.

        Returns:
            Dict with totals, display strings and categories
        """
        state = self.session.state
        currency = state.selected_currency
        hidden = state.are_global_amounts_hidden

        return {
            "currency": currency,
            "total_income": state.total_income,
            "total_allocated": state.total_allocated,
            "unallocated_amount": state.unallocated_amount,
            "total_income_display": format_amount(
                state.total_income, currency, hidden or state.is_income_hidden
            ),
            "unallocated_display": format_amount(state.unallocated_amount, currency, hidden),
            "category_count": len(state.categories),
            "transaction_count": len(state.transactions),
            "categories": [cat.model_dump(mode="json") for cat in state.categories],
        }

    def get_allocation_bounds(
        self,
        category_id: Optional[str] = None,
        subcategory_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Get the legal allocation range for a form.

        Args:
            category_id: Category being edited, or parent of a subcategory.
                        If None, returns the bound for a new category.
            subcategory_id: Subcategory being edited. If None with a
                        category_id, also returns the bound for a new subcategory.

        Returns:
            Dict with min/max bounds

        Raises:
            NotFoundError: If the category or subcategory does not exist
        """
        state = self.session.state

        if category_id is None:
            return {
                "scope": "new_category",
                "min": 0.0,
                "max": max_for_new_category(state.categories, state.total_income),
            }

        category = state.find_category(category_id)
        if category is None:
            raise NotFoundError("Category", category_id)

        if subcategory_id is None:
            minimum, maximum = range_for_edit_category(
                state.categories, category, state.total_income
            )
            return {
                "scope": "edit_category",
                "min": minimum,
                "max": maximum,
                "new_subcategory_max": max_for_subcategory(category, category.subcategories),
            }

        subcategory = category.find_subcategory(subcategory_id)
        if subcategory is None:
            raise NotFoundError("Subcategory", subcategory_id)
        siblings = [sub for sub in category.subcategories if sub.id != subcategory_id]
        return {
            "scope": "edit_subcategory",
            "min": 0.0,
            "max": max_for_subcategory(category, siblings),
        }

    def add_category(self, name: str, amount: float = 0.0) -> Dict[str, Any]:
        result = self.session.execute(AddCategory(name=name, amount=float(amount)))
        response = self._mutation_response(result)
        if result.accepted:
            response["category"] = self.session.state.categories[-1].model_dump(mode="json")
        return response

    def edit_category(self, category_id: str, name: str, amount: float) -> Dict[str, Any]:
        return self._mutation_response(
            self.session.execute(
                EditCategory(category_id=category_id, name=name, amount=float(amount))
            )
        )

    def delete_category(self, category_id: str) -> Dict[str, Any]:
        return self._mutation_response(
            self.session.execute(DeleteCategory(category_id=category_id))
        )

    def add_subcategory(
        self, category_id: str, name: str, amount: float = 0.0
    ) -> Dict[str, Any]:
        result = self.session.execute(
            AddSubcategory(category_id=category_id, name=name, amount=float(amount))
        )
        response = self._mutation_response(result)
        if result.accepted:
            parent = self.session.state.find_category(category_id)
            response["subcategory"] = parent.subcategories[-1].model_dump(mode="json")
        return response

    def edit_subcategory(
        self, category_id: str, subcategory_id: str, name: str, amount: float
    ) -> Dict[str, Any]:
        return self._mutation_response(
            self.session.execute(
                EditSubcategory(
                    category_id=category_id,
                    subcategory_id=subcategory_id,
                    name=name,
                    amount=float(amount),
                )
            )
        )

    def delete_subcategory(self, category_id: str, subcategory_id: str) -> Dict[str, Any]:
        return self._mutation_response(
            self.session.execute(
                DeleteSubcategory(category_id=category_id, subcategory_id=subcategory_id)
            )
        )

    def toggle_subcategory_complete(
        self, category_id: str, subcategory_id: str
    ) -> Dict[str, Any]:
        result = self.session.execute(
            ToggleSubcategoryComplete(category_id=category_id, subcategory_id=subcategory_id)
        )
        response = self._mutation_response(result)
        if result.accepted:
            sub = self.session.state.find_subcategory(category_id, subcategory_id)
            response["is_complete"] = sub.is_complete
        return response

    def set_total_income(self, amount: float) -> Dict[str, Any]:
        return self._mutation_response(
            self.session.execute(SetTotalIncome(amount=float(amount)))
        )

    def set_display_preferences(
        self,
        currency: Optional[str] = None,
        global_amounts_hidden: Optional[bool] = None,
        income_hidden: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """
        Update display settings. Omitted settings are left unchanged.

        Args:
            currency: Three-letter currency code (e.g. "EUR")
            global_amounts_hidden: Mask every amount
            income_hidden: Mask total income

        Returns:
            Dict with mutation outcome and the resulting preferences
        """
        result = self.session.execute(
            SetDisplayPreferences(
                currency=currency,
                global_amounts_hidden=global_amounts_hidden,
                income_hidden=income_hidden,
            )
        )
        response = self._mutation_response(result)
        state = self.session.state
        response["currency"] = state.selected_currency
        response["global_amounts_hidden"] = state.are_global_amounts_hidden
        response["income_hidden"] = state.is_income_hidden
        return response

    def toggle_category_amount_hidden(self, category_id: str) -> Dict[str, Any]:
        result = self.session.execute(ToggleCategoryAmountHidden(category_id=category_id))
        response = self._mutation_response(result)
        if result.accepted:
            category = self.session.state.find_category(category_id)
            response["is_amount_hidden"] = category.is_amount_hidden
        return response

    def add_transaction(
        self,
        amount: float,
        category_id: str,
        date: Optional[str] = None,
        description: str = "",
        subcategory_id: Optional[str] = None,
        type: str = "expense",
        tags: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        """
        Record a transaction. Expenses count against the category (and
        subcategory) spend; overspending is allowed.

        Args:
            amount: Positive amount
            category_id: Category the transaction belongs to
            date: Transaction date (YYYY-MM-DD), defaults to today
            description: Free text
            subcategory_id: Optional subcategory
            type: "expense" or "income"
            tags: Optional tags

        Returns:
            Dict with mutation outcome and the recorded transaction
        """
        txn = Transaction(
            amount=float(amount),
            category_id=category_id,
            date=date or datetime.now().strftime("%Y-%m-%d"),
            description=description,
            subcategory_id=subcategory_id,
            type=type,
            tags=list(tags or []),
        )
        result = self.session.execute(ApplyTransaction(transaction=txn))
        response = self._mutation_response(result)
        if result.accepted:
            response["transaction"] = txn.model_dump(mode="json")
        return response

    def get_notifications(self, unread_only: bool = False) -> Dict[str, Any]:
        feed = self.session.feed
        notifications = feed.unread() if unread_only else feed.notifications
        return {
            "count": len(notifications),
            "unread_count": feed.unread_count,
            "notifications": [n.model_dump(mode="json") for n in notifications],
        }

    def mark_notifications_read(
        self, notification_id: Optional[int] = None
    ) -> Dict[str, Any]:
        """
        Mark one notification (or all, when no id is given) as read.

        Raises:
            ValueError: If notification_id is not found
        """
        feed = self.session.feed
        if notification_id is None:
            feed.mark_all_as_read()
        elif not feed.mark_as_read(int(notification_id)):
            raise ValueError(f"Notification not found: {notification_id}")
        return {"unread_count": feed.unread_count}

    def create_monthly_budget(
        self,
        month: Optional[str] = None,
        source: str = "current",
        source_id: Optional[str] = None,
        total_income: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Create (or replace) the budget for a month.

        Args:
            month: Month key (YYYY-MM), defaults to the current month
            source: "current" (working categories), "template", "budget"
                   (copy another monthly budget) or "blank"
            source_id: Template or budget id for those sources
            total_income: Income for the month; defaults to the source's

        Returns:
            Dict with the created budget

        Raises:
            ValueError: If the source is unknown or the month is invalid
        """
        if month is None:
            month = current_month_key()
        state = self.session.state
        if source == "current":
            snapshot_source = state.categories
            if total_income is None:
                total_income = state.total_income
        elif source == "template":
            if not source_id:
                raise ValueError("source_id is required for a template source")
            snapshot_source = self.session.find_template(source_id)
        elif source == "budget":
            if not source_id:
                raise ValueError("source_id is required for a budget source")
            snapshot_source = self.session.find_monthly_budget(source_id)
        elif source == "blank":
            snapshot_source = None
        else:
            raise ValueError(f"Unknown source: {source}")

        budget = self.session.create_monthly_budget(
            month,
            snapshot_source,
            None if total_income is None else float(total_income),
        )
        return {"budget": budget.model_dump(mode="json")}

    def list_monthly_budgets(self) -> Dict[str, Any]:
        budgets = sorted(
            self.session.state.monthly_budgets, key=lambda b: b.month, reverse=True
        )
        return {
            "count": len(budgets),
            "budgets": [
                {
                    "id": b.id,
                    "month": b.month,
                    "month_name": b.month_name,
                    "total_income": b.total_income,
                    "total_allocated": b.total_allocated,
                    "category_count": len(b.categories),
                    "updated_at": b.updated_at,
                }
                for b in budgets
            ],
        }

    def delete_monthly_budget(self, budget_id: str) -> Dict[str, Any]:
        return self._mutation_response(
            self.session.execute(DeleteMonthlyBudget(budget_id=budget_id))
        )

    def restore_monthly_budget(self, budget_id: str) -> Dict[str, Any]:
        """
        Replace the working categories and income with a saved monthly budget.

        Returns:
            Dict with mutation outcome
        """
        return self._mutation_response(
            self.session.execute(RestoreMonthlyBudget(budget_id=budget_id))
        )

    def create_template(
        self,
        name: str,
        description: str = "",
        total_income: Optional[float] = None,
    ) -> Dict[str, Any]:
        template = self.session.create_template(
            name, description, None if total_income is None else float(total_income)
        )
        return {"template": template.model_dump(mode="json")}

    def list_templates(self) -> Dict[str, Any]:
        templates = self.session.state.templates
        return {
            "count": len(templates),
            "templates": [t.model_dump(mode="json") for t in templates],
        }

    def duplicate_template(self, template_id: str) -> Dict[str, Any]:
        template = self.session.duplicate_template(template_id)
        return {"template": template.model_dump(mode="json")}

    def update_template(
        self,
        template_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        total_income: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Rename, redescribe or change the income of a template.

        Raises:
            NotFoundError: If the template does not exist
            ValueError: If nothing is given to change or a value is invalid
        """
        changes: Dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if description is not None:
            changes["description"] = description
        if total_income is not None:
            changes["total_income"] = float(total_income)
        if not changes:
            raise ValueError("Nothing to update: give name, description or total_income")
        template = self.session.update_template(template_id, **changes)
        return {"template": template.model_dump(mode="json")}

    def delete_template(self, template_id: str) -> Dict[str, Any]:
        return self._mutation_response(
            self.session.execute(DeleteTemplate(template_id=template_id))
        )

    def get_spending_by_category(
        self,
        period: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Get spending against allocation per category.

        Args:
            period: Period shorthand (week, month, quarter, year, this_month, ...)
            start_date: Filter by date >= this (YYYY-MM-DD)
            end_date: Filter by date <= this (YYYY-MM-DD)

        Returns:
            Dict with totals and per-category breakdown
        """
        if period:
            start_date, end_date = parse_period(period)
        report = spending_by_category(self.session.state, start_date, end_date)
        return report.model_dump(mode="json")

    def get_statistics(self) -> Dict[str, Any]:
        return compute_statistics(self.session.state).model_dump(mode="json")

    def get_savings_plan(
        self,
        savings_goal: float,
        monthly_saving: Optional[float] = None,
        months: Optional[int] = None,
        target_month: Optional[str] = None,
        monthly_income: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Plan how to reach a savings goal from monthly income.

        With monthly_saving, plans that contribution. With months or
        target_month (YYYY-MM), finds the saving needed to finish in time.
        Otherwise plans the recommended share of income.

        Args:
            savings_goal: Amount to save
            monthly_saving: Chosen monthly contribution
            months: Months to reach the goal
            target_month: Month to reach the goal by, counted from this month
            monthly_income: Income to plan from; defaults to total income

        Returns:
            Dict with the plan, advice and display strings

        Raises:
            ValueError: If the inputs cannot be planned for
        """
        state = self.session.state
        currency = state.selected_currency
        income = state.total_income if monthly_income is None else float(monthly_income)
        goal = float(savings_goal)

        if monthly_saving is not None:
            plan = manual_plan(income, goal, float(monthly_saving), currency)
            monthly = plan.monthly_saving
            mode = "manual"
        elif months is not None or target_month is not None:
            if months is None:
                months = month_difference(current_month_key(), target_month)
            plan = timeline_plan(income, goal, int(months), self.session.settings)
            monthly = plan.required_monthly_saving
            mode = "timeline"
        else:
            plan = recommended_plan(income, goal, self.session.settings)
            monthly = plan.recommended_monthly_saving
            mode = "recommended"

        response = {"mode": mode, **plan.model_dump(mode="json")}
        response["monthly_saving_display"] = format_amount(monthly, currency)
        response["savings_goal_display"] = format_amount(goal, currency)
        return response


def _string(description: str, **extra: Any) -> Dict[str, Any]:
    return {"type": "string", "description": description, **extra}


def _number(description: str, **extra: Any) -> Dict[str, Any]:
    return {"type": "number", "description": description, **extra}


_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
_PERIOD_HELP = (
    "Period shorthand: week, month, quarter, year, this_month, last_month, "
    "this_year, last_year, ytd"
)


def create_tool_schemas() -> List[Dict[str, Any]]:
    """
    Create MCP tool schemas for all tools.

    Returns:
        List of tool schema definitions
    """
    return [
        {
            "name": "get_budget_overview",
            "description": "Get total income, allocations, unallocated funds and all categories.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_allocation_bounds",
            "description": (
                "Get the legal allocation range. No arguments: bound for a new "
                "category. category_id: edit range for that category. "
                "category_id + subcategory_id: bound for editing that subcategory."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": _string("Category ID"),
                    "subcategory_id": _string("Subcategory ID"),
                },
            },
        },
        {
            "name": "add_category",
            "description": "Add a category funded from unallocated income.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": _string("Category name"),
                    "amount": _number("Allocated amount", minimum=0, default=0),
                },
                "required": ["name"],
            },
        },
        {
            "name": "edit_category",
            "description": (
                "Rename or reallocate a category. The amount may not drop below "
                "its subcategory total or exceed the income left by other categories."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": _string("Category ID"),
                    "name": _string("New name"),
                    "amount": _number("New allocated amount", minimum=0),
                },
                "required": ["category_id", "name", "amount"],
            },
        },
        {
            "name": "delete_category",
            "description": (
                "Delete a category and its subcategories. Completed subcategory "
                "amounts are removed from total income."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {"category_id": _string("Category ID")},
                "required": ["category_id"],
            },
        },
        {
            "name": "add_subcategory",
            "description": "Add a subcategory funded from its parent's allocation.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": _string("Parent category ID"),
                    "name": _string("Subcategory name"),
                    "amount": _number("Allocated amount", minimum=0, default=0),
                },
                "required": ["category_id", "name"],
            },
        },
        {
            "name": "edit_subcategory",
            "description": "Rename or reallocate a subcategory within its parent's allocation.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": _string("Parent category ID"),
                    "subcategory_id": _string("Subcategory ID"),
                    "name": _string("New name"),
                    "amount": _number("New allocated amount", minimum=0),
                },
                "required": ["category_id", "subcategory_id", "name", "amount"],
            },
        },
        {
            "name": "delete_subcategory",
            "description": (
                "Delete a subcategory. If it was completed, its amount is also "
                "removed from the parent's allocation."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": _string("Parent category ID"),
                    "subcategory_id": _string("Subcategory ID"),
                },
                "required": ["category_id", "subcategory_id"],
            },
        },
        {
            "name": "toggle_subcategory_complete",
            "description": "Mark a subcategory complete or not complete.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "category_id": _string("Parent category ID"),
                    "subcategory_id": _string("Subcategory ID"),
                },
                "required": ["category_id", "subcategory_id"],
            },
        },
        {
            "name": "set_total_income",
            "description": (
                "Set total income. Lowering it below current allocations is "
                "allowed and raises an alert."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {"amount": _number("Total income", minimum=0)},
                "required": ["amount"],
            },
        },
        {
            "name": "set_display_preferences",
            "description": "Change the display currency or hide amounts. Omitted settings are unchanged.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "currency": _string("Three-letter currency code", pattern=r"^[A-Z]{3}$"),
                    "global_amounts_hidden": {"type": "boolean", "description": "Mask every amount"},
                    "income_hidden": {"type": "boolean", "description": "Mask total income"},
                },
            },
        },
        {
            "name": "toggle_category_amount_hidden",
            "description": "Show or hide one category's amount in displays.",
            "inputSchema": {
                "type": "object",
                "properties": {"category_id": _string("Category ID")},
                "required": ["category_id"],
            },
        },
        {
            "name": "add_transaction",
            "description": "Record an expense or income transaction against a category.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "amount": _number("Positive amount", exclusiveMinimum=0),
                    "category_id": _string("Category ID"),
                    "subcategory_id": _string("Optional subcategory ID"),
                    "date": _string("Date (YYYY-MM-DD), default today", pattern=_DATE_PATTERN),
                    "description": _string("Description"),
                    "type": _string("Transaction type", enum=["expense", "income"], default="expense"),
                    "tags": {"type": "array", "items": {"type": "string"}, "description": "Tags"},
                },
                "required": ["amount", "category_id"],
            },
        },
        {
            "name": "get_notifications",
            "description": "Get budget alerts, newest first.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "unread_only": {"type": "boolean", "description": "Only unread alerts", "default": False},
                },
            },
        },
        {
            "name": "mark_notifications_read",
            "description": "Mark one alert as read, or all alerts when no id is given.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "notification_id": {"type": "integer", "description": "Notification ID"},
                },
            },
        },
        {
            "name": "create_monthly_budget",
            "description": (
                "Create the budget for a month from the current categories, a "
                "template, another month's budget, or blank. Replaces any budget "
                "already saved for that month. Spending and completion are reset."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "month": _string("Month (YYYY-MM), default this month", pattern=r"^\d{4}-\d{2}$"),
                    "source": _string(
                        "Source of categories",
                        enum=["current", "template", "budget", "blank"],
                        default="current",
                    ),
                    "source_id": _string("Template or budget ID when source needs one"),
                    "total_income": _number("Income for the month", minimum=0),
                },
            },
        },
        {
            "name": "list_monthly_budgets",
            "description": "List saved monthly budgets, newest month first.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "delete_monthly_budget",
            "description": "Delete a saved monthly budget.",
            "inputSchema": {
                "type": "object",
                "properties": {"budget_id": _string("Monthly budget ID")},
                "required": ["budget_id"],
            },
        },
        {
            "name": "restore_monthly_budget",
            "description": (
                "Replace the working categories and total income with a saved "
                "monthly budget."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {"budget_id": _string("Monthly budget ID")},
                "required": ["budget_id"],
            },
        },
        {
            "name": "create_template",
            "description": "Save the current categories as a reusable template (no spending history).",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": _string("Template name"),
                    "description": _string("Template description"),
                    "total_income": _number("Income for the template", minimum=0),
                },
                "required": ["name"],
            },
        },
        {
            "name": "list_templates",
            "description": "List budget templates.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "duplicate_template",
            "description": "Copy a template under a new id with \"(Copy)\" appended to its name.",
            "inputSchema": {
                "type": "object",
                "properties": {"template_id": _string("Template ID")},
                "required": ["template_id"],
            },
        },
        {
            "name": "update_template",
            "description": "Rename a template or change its description or income.",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "template_id": _string("Template ID"),
                    "name": _string("New name"),
                    "description": _string("New description"),
                    "total_income": _number("New income", minimum=0),
                },
                "required": ["template_id"],
            },
        },
        {
            "name": "delete_template",
            "description": "Delete a budget template.",
            "inputSchema": {
                "type": "object",
                "properties": {"template_id": _string("Template ID")},
                "required": ["template_id"],
            },
        },
        {
            "name": "get_spending_by_category",
            "description": (
                "Compare spending with allocation per category for a date range. "
                "Use 'period' for common ranges."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "period": _string(_PERIOD_HELP),
                    "start_date": _string("Start date (YYYY-MM-DD)", pattern=_DATE_PATTERN),
                    "end_date": _string("End date (YYYY-MM-DD)", pattern=_DATE_PATTERN),
                },
            },
        },
        {
            "name": "get_statistics",
            "description": "Get usage statistics: totals, savings rate, most used category, biggest expense.",
            "inputSchema": {"type": "object", "properties": {}},
        },
        {
            "name": "get_savings_plan",
            "description": (
                "Plan towards a savings goal. Give monthly_saving to plan a chosen "
                "contribution, months or target_month to find the saving needed by "
                "then, or neither for the recommended share of income."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "savings_goal": _number("Amount to save", exclusiveMinimum=0),
                    "monthly_saving": _number("Chosen monthly contribution", exclusiveMinimum=0),
                    "months": {"type": "integer", "description": "Months to reach the goal", "minimum": 1},
                    "target_month": _string("Month to reach the goal by (YYYY-MM)", pattern=r"^\d{4}-\d{2}$"),
                    "monthly_income": _number("Income to plan from, default total income", exclusiveMinimum=0),
                },
                "required": ["savings_goal"],
            },
        },
    ]


TOOL_NAMES = frozenset(schema["name"] for schema in create_tool_schemas())
