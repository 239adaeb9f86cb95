"""
Threshold notifications derived from the budget state.

``evaluate_alerts`` is a pure function of the state. ``NotificationFeed``
holds what has been published and suppresses a (rule, category) pair while
an unread notification for it exists.
"""

import logging
from typing import List, Optional

from budget_allocator_mcp.core.settings import BudgetSettings, get_settings
from budget_allocator_mcp.models.money import to_cents
from budget_allocator_mcp.models.notification import AlertCandidate, Notification
from budget_allocator_mcp.models.state import BudgetState
from budget_allocator_mcp.utils.formatting import format_amount

logger = logging.getLogger(__name__)


def spent_percentage(spent: float, allocated: float) -> float:
    """Share of an allocation that has been spent, 0 when nothing is allocated."""
    if allocated <= 0:
        return 0.0
    return spent / allocated * 100


def evaluate_alerts(
    state: BudgetState, settings: Optional[BudgetSettings] = None
) -> List[AlertCandidate]:
    """
    Derive every alert the state currently warrants.

    Args:
        state: State to inspect (never modified)
        settings: Thresholds; defaults to the cached application settings

    Returns:
        Alert candidates, per-category rules first in category order
    """
    if settings is None:
        settings = get_settings()

    currency = state.selected_currency
    alerts: List[AlertCandidate] = []

    for category in state.categories:
        spent = category.spent_amount
        allocated = category.allocated_amount
        pct = spent_percentage(spent, allocated)

        if pct > 100:
            overage = round(spent - allocated, 2)
            alerts.append(
                AlertCandidate(
                    rule="budget_exceeded",
                    severity="error",
                    message=(
                        f'Budget exceeded for "{category.name}". You\'ve spent '
                        f"{format_amount(spent, currency)} of your "
                        f"{format_amount(allocated, currency)} budget "
                        f"({format_amount(overage, currency)} over)."
                    ),
                    category_key=category.id,
                    category_name=category.name,
                    amount=overage,
                )
            )
        elif pct > settings.warning_threshold_pct:
            alerts.append(
                AlertCandidate(
                    rule="budget_warning",
                    severity="warning",
                    message=(
                        f'You\'re approaching your budget limit for "{category.name}". '
                        f"{pct:.0f}% used."
                    ),
                    category_key=category.id,
                    category_name=category.name,
                    amount=round(allocated - spent, 2),
                )
            )

    income = to_cents(state.total_income)
    total_allocated = to_cents(state.total_allocated)
    if income > 0 and total_allocated > income:
        overage = to_cents(total_allocated - income)
        alerts.append(
            AlertCandidate(
                rule="low_balance",
                severity="warning",
                message=(
                    f"Your total budget allocations exceed your income by "
                    f"{format_amount(overage, currency)}. Consider adjusting your budget."
                ),
                amount=overage,
            )
        )

    total_expense = state.total_expenses
    if income > 0 and total_expense > 0:
        savings_rate = (income - total_expense) / income * 100
        if savings_rate > settings.savings_goal_pct:
            alerts.append(
                AlertCandidate(
                    rule="goal_achieved",
                    severity="success",
                    message=(
                        f"Great job! You're saving {savings_rate:.0f}% of your "
                        f"income this month."
                    ),
                    amount=round(income - total_expense, 2),
                )
            )

    return alerts


class NotificationFeed:
    """
    Published notifications, newest first.

    A candidate is only published when no unread notification with the same
    (rule, category) pair exists; reading or removing it lifts the suppression.
    """

    def __init__(self, notifications: Optional[List[Notification]] = None):
        self._notifications: List[Notification] = list(notifications or [])
        self._next_id = max((n.id for n in self._notifications), default=0) + 1

    @property
    def notifications(self) -> List[Notification]:
        return list(self._notifications)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._notifications if not n.read)

    def unread(self) -> List[Notification]:
        return [n for n in self._notifications if not n.read]

    def publish(self, candidates: List[AlertCandidate]) -> List[Notification]:
        """
        Publish candidates that are not already pending.

        Returns:
            The notifications actually added
        """
        pending = {n.dedup_key for n in self._notifications if not n.read}
        added: List[Notification] = []

        for candidate in candidates:
            if candidate.dedup_key in pending:
                continue
            notification = Notification(
                id=self._next_id,
                rule=candidate.rule,
                severity=candidate.severity,
                message=candidate.message,
                category_key=candidate.category_key,
                category_name=candidate.category_name,
                amount=candidate.amount,
            )
            self._next_id += 1
            pending.add(notification.dedup_key)
            added.append(notification)
            logger.debug("Published %s notification: %s", notification.rule, notification.message)

        self._notifications = list(reversed(added)) + self._notifications
        return added

    def mark_as_read(self, notification_id: int) -> bool:
        """Returns False when no notification has that id."""
        for notification in self._notifications:
            if notification.id == notification_id:
                notification.read = True
                return True
        logger.warning("Notification not found: %s", notification_id)
        return False

    def mark_all_as_read(self) -> None:
        for notification in self._notifications:
            notification.read = True

    def remove(self, notification_id: int) -> bool:
        before = len(self._notifications)
        self._notifications = [n for n in self._notifications if n.id != notification_id]
        return len(self._notifications) < before

    def clear(self) -> None:
        self._notifications = []


class NotificationEngine:
    """Runs alert evaluation against a state and publishes into a feed."""

    def __init__(
        self,
        feed: Optional[NotificationFeed] = None,
        settings: Optional[BudgetSettings] = None,
    ):
        self.feed = feed if feed is not None else NotificationFeed()
        self.settings = settings if settings is not None else get_settings()

    def run(self, state: BudgetState) -> List[Notification]:
        """
        Evaluate the state and publish new alerts.

        Returns:
            Notifications added by this run
        """
        return self.feed.publish(evaluate_alerts(state, self.settings))
