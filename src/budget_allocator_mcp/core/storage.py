"""
Storage collaborator for budget state.

The engine only needs ``load`` and ``save`` keyed by user id; ``JsonFileStorage``
keeps one JSON document per user under a data directory.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Protocol

from pydantic import ValidationError as PydanticValidationError

from budget_allocator_mcp.core.exceptions import StateDecodeError, StorageError
from budget_allocator_mcp.models.money import DEFAULT_CURRENCY
from budget_allocator_mcp.models.state import BudgetState

logger = logging.getLogger(__name__)

_USER_ID_PATTERN = re.compile(r"^[A-Za-z0-9_.-]{1,128}$")


class StateStorage(Protocol):
    """Anything that can load and save a user's state."""

    def load(self, user_id: str) -> BudgetState:
        ...

    def save(self, user_id: str, state: BudgetState) -> None:
        ...


class JsonFileStorage:
    """
    File-backed storage: ``<data_dir>/<user_id>.json``.

    Saves write a temporary file and atomically replace the target, so a
    crash mid-save leaves the previous state intact.
    """

    def __init__(self, data_dir: Path, default_currency: str = DEFAULT_CURRENCY):
        """
        Initialize storage.

        Args:
            data_dir: Directory for state files (created on first save)
            default_currency: Currency for users with no saved state
        """
        self.data_dir = Path(data_dir)
        self.default_currency = default_currency

    def is_available(self) -> bool:
        """Check whether the data directory exists or can be created."""
        if self.data_dir.exists():
            return self.data_dir.is_dir() and os.access(self.data_dir, os.W_OK)
        parent = self.data_dir.parent
        return parent.exists() and os.access(parent, os.W_OK)

    def path_for(self, user_id: str) -> Path:
        """
        Raises:
            StorageError: If user_id is not a simple file-safe token
        """
        if not _USER_ID_PATTERN.match(user_id) or user_id in (".", ".."):
            raise StorageError(f"Invalid user id: {user_id!r}")
        return self.data_dir / f"{user_id}.json"

    def load(self, user_id: str) -> BudgetState:
        """
        Load a user's state.

        Returns:
            Saved state, or a fresh default state when none exists

        Raises:
            StateDecodeError: If the stored document is corrupt
            StorageError: If the file cannot be read
        """
        path = self.path_for(user_id)
        if not path.exists():
            logger.info("No saved state for user %s, starting fresh", user_id)
            return BudgetState(selected_currency=self.default_currency)

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {path}: {e}") from e

        try:
            return BudgetState.model_validate_json(raw)
        except PydanticValidationError as e:
            raise StateDecodeError(f"Stored state at {path} is invalid: {e}") from e

    def save(self, user_id: str, state: BudgetState) -> None:
        """
        Persist a user's state.

        Raises:
            StorageError: If the state cannot be written
        """
        path = self.path_for(user_id)
        payload = state.model_dump_json(indent=2)

        tmp_name: Optional[str] = None
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{user_id}.", suffix=".tmp", dir=self.data_dir
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageError(f"Could not write {path}: {e}") from e
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.debug("Saved state for user %s to %s", user_id, path)

