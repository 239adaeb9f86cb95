"""
A user's working session: authoritative in-memory state plus its collaborators.

Commands run synchronously through the engine; accepted ones re-run the
notification engine and hand the new state to storage. When an event loop
is running the save happens on a worker thread and the command does not
wait for it; saves still complete in command order.
"""

import asyncio
import logging
from typing import Optional, Set

from budget_allocator_mcp.core.engine import MutationResult, apply
from budget_allocator_mcp.core.exceptions import NotFoundError, StorageError
from budget_allocator_mcp.core.invariants import assert_invariants
from budget_allocator_mcp.core.notifications import NotificationEngine, NotificationFeed
from budget_allocator_mcp.core.settings import BudgetSettings, get_settings
from budget_allocator_mcp.core.snapshots import (
    SnapshotSource,
    create_monthly_budget,
    create_template_from_categories,
    duplicate_template,
    update_template,
)
from budget_allocator_mcp.core.storage import StateStorage
from budget_allocator_mcp.models.budget import BudgetTemplate, MonthlyBudget
from budget_allocator_mcp.models.commands import Command, SaveMonthlyBudget, SaveTemplate
from budget_allocator_mcp.models.state import BudgetState

logger = logging.getLogger(__name__)


class BudgetSession:
    """Single-writer session over one user's budget."""

    def __init__(
        self,
        storage: StateStorage,
        user_id: str,
        state: Optional[BudgetState] = None,
        settings: Optional[BudgetSettings] = None,
        feed: Optional[NotificationFeed] = None,
    ):
        """
        Initialize a session.

        Args:
            storage: Storage collaborator used for the initial load and saves
            user_id: Key for storage
            state: Initial state. If None, it is loaded from storage.
            settings: Alert thresholds; defaults to application settings
            feed: Notification feed to publish into
        """
        self.storage = storage
        self.user_id = user_id
        self.settings = settings if settings is not None else get_settings()
        self.notifications = NotificationEngine(feed, self.settings)
        self._pending_saves: Set[asyncio.Task] = set()
        self._last_save: Optional[asyncio.Task] = None

        if state is None:
            state = storage.load(user_id)
        assert_invariants(state)
        self._state = state

    @property
    def state(self) -> BudgetState:
        return self._state

    @property
    def feed(self) -> NotificationFeed:
        return self.notifications.feed

    def execute(self, command: Command) -> MutationResult:
        """
        Apply a command and, if accepted, notify and persist.

        Returns:
            The engine's MutationResult
        """
        result = apply(self._state, command)
        if result.accepted:
            self._commit(result.state)
        return result

    def create_monthly_budget(
        self,
        month: str,
        source: SnapshotSource = None,
        total_income: Optional[float] = None,
    ) -> MonthlyBudget:
        """
        Snapshot a source into a monthly budget and save it, replacing any
        budget for the same month.

        Raises:
            ValueError: If the month key is invalid
        """
        budget = create_monthly_budget(month, total_income, source)
        self.execute(SaveMonthlyBudget(budget=budget))
        logger.info("Saved monthly budget for %s", month)
        return budget

    def create_template(
        self, name: str, description: str = "", total_income: Optional[float] = None
    ) -> BudgetTemplate:
        """Save the working categories as a reusable template."""
        template = create_template_from_categories(
            name,
            self._state.categories,
            self._state.total_income if total_income is None else total_income,
            description,
        )
        self.execute(SaveTemplate(template=template))
        return template

    def duplicate_template(self, template_id: str) -> BudgetTemplate:
        """
        Save a copy of a template under a new id.

        Raises:
            NotFoundError: If no template has that id
        """
        copy = duplicate_template(self.find_template(template_id))
        self.execute(SaveTemplate(template=copy))
        return copy

    def update_template(self, template_id: str, **changes) -> BudgetTemplate:
        """
        Change fields of a saved template.

        Raises:
            NotFoundError: If no template has that id
            ValueError: If a change is invalid
        """
        updated = update_template(self.find_template(template_id), **changes)
        self.execute(SaveTemplate(template=updated))
        return updated

    def find_template(self, template_id: str) -> BudgetTemplate:
        """
        Raises:
            NotFoundError: If no template has that id
        """
        template = next((t for t in self._state.templates if t.id == template_id), None)
        if template is None:
            raise NotFoundError("Template", template_id)
        return template

    def find_monthly_budget(self, budget_id: str) -> MonthlyBudget:
        """
        Raises:
            NotFoundError: If no monthly budget has that id
        """
        budget = next((b for b in self._state.monthly_budgets if b.id == budget_id), None)
        if budget is None:
            raise NotFoundError("Monthly budget", budget_id)
        return budget

    def _commit(self, state: BudgetState) -> None:
        self._state = state
        self.notifications.run(state)
        self._persist(state)

    def _persist(self, state: BudgetState) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None

        if loop is None:
            try:
                self.storage.save(self.user_id, state)
            except StorageError:
                logger.exception("Failed to save state for user %s", self.user_id)
            return

        task = loop.create_task(self._save_after(self._last_save, state))
        self._last_save = task
        self._pending_saves.add(task)
        task.add_done_callback(self._on_save_done)

    async def _save_after(self, previous: Optional[asyncio.Task], state: BudgetState) -> None:
        # Saves land in command order
        if previous is not None and not previous.done():
            await asyncio.gather(previous, return_exceptions=True)
        await asyncio.to_thread(self.storage.save, self.user_id, state)

    def _on_save_done(self, task: asyncio.Task) -> None:
        self._pending_saves.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Failed to save state for user %s: %s", self.user_id, error, exc_info=error
            )

    async def flush(self) -> None:
        """Wait for scheduled saves to finish."""
        while True:
            pending = [task for task in self._pending_saves if not task.done()]
            if not pending:
                return
            await asyncio.gather(*pending, return_exceptions=True)
