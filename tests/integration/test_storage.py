"""
Integration tests for JSON file storage.
"""

import json

import pytest

from budget_allocator_mcp.core.exceptions import StateDecodeError, StorageError
from budget_allocator_mcp.core.snapshots import (
    create_monthly_budget,
    create_template_from_categories,
)
from budget_allocator_mcp.core.storage import JsonFileStorage
from budget_allocator_mcp.models.transaction import Transaction


@pytest.mark.integration
def test_load_missing_user_returns_default(storage, data_dir):
    """Test that an unknown user starts from a blank state."""
    state = storage.load("nobody")

    assert state.total_income == 0.0
    assert state.categories == []
    assert state.selected_currency == "USD"
    assert not data_dir.exists()


@pytest.mark.integration
def test_default_currency_for_new_users(data_dir):
    """Test that the configured currency applies to fresh state."""
    storage = JsonFileStorage(data_dir, default_currency="GBP")
    assert storage.load("nobody").selected_currency == "GBP"


@pytest.mark.integration
def test_save_and_load(storage, household_state, data_dir):
    """Test that a saved state loads back equal."""
    household_state.transactions.append(
        Transaction(amount=12.5, category_id="food", date="2026-03-01", tags=["weekly"])
    )
    household_state.monthly_budgets.append(
        create_monthly_budget("2026-04", 1000.0, household_state.categories)
    )
    household_state.templates.append(
        create_template_from_categories("Base", household_state.categories, 1000.0)
    )

    storage.save("tester", household_state)
    loaded = storage.load("tester")

    assert (data_dir / "tester.json").exists()
    assert loaded == household_state
    assert loaded.find_subcategory("food", "dining").is_complete is True


@pytest.mark.integration
def test_save_writes_readable_json(storage, household_state, data_dir):
    """Test the on-disk document shape."""
    storage.save("tester", household_state)

    document = json.loads((data_dir / "tester.json").read_text(encoding="utf-8"))

    assert document["total_income"] == 1000.0
    assert [cat["name"] for cat in document["categories"]] == ["Rent", "Food"]


@pytest.mark.integration
def test_save_overwrites_and_leaves_no_temp_files(storage, household_state, data_dir):
    """Test that repeated saves replace the file atomically."""
    storage.save("tester", household_state)
    household_state.total_income = 2000.0
    storage.save("tester", household_state)

    assert storage.load("tester").total_income == 2000.0
    assert [p.name for p in data_dir.iterdir()] == ["tester.json"]


@pytest.mark.integration
def test_users_are_isolated(storage, household_state):
    """Test that each user has their own document."""
    storage.save("alice", household_state)

    assert storage.path_for("alice").exists()
    assert not storage.path_for("bob").exists()
    assert storage.load("bob").categories == []


@pytest.mark.integration
def test_corrupt_document(storage, data_dir):
    """Test that an undecodable document raises StateDecodeError."""
    data_dir.mkdir(parents=True)
    (data_dir / "tester.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(StateDecodeError):
        storage.load("tester")


@pytest.mark.integration
def test_document_with_invalid_values(storage, data_dir):
    """Test that schema violations in stored state are decode errors."""
    data_dir.mkdir(parents=True)
    (data_dir / "tester.json").write_text(
        json.dumps({"total_income": -10.0}), encoding="utf-8"
    )

    with pytest.raises(StateDecodeError):
        storage.load("tester")


@pytest.mark.integration
@pytest.mark.parametrize("user_id", ["", "..", "../escape", "a/b", "x" * 129])
def test_invalid_user_ids(storage, user_id):
    """Test that user ids must be simple file-safe tokens."""
    with pytest.raises(StorageError, match="Invalid user id"):
        storage.path_for(user_id)


@pytest.mark.integration
def test_save_failure_raises_storage_error(tmp_path, household_state):
    """Test that an unwritable location raises StorageError."""
    blocker = tmp_path / "file"
    blocker.write_text("", encoding="utf-8")
    storage = JsonFileStorage(blocker / "data")

    with pytest.raises(StorageError, match="Could not write"):
        storage.save("tester", household_state)


@pytest.mark.integration
def test_is_available(storage, tmp_path):
    """Test data directory availability."""
    assert storage.is_available() is True
    assert JsonFileStorage(tmp_path / "missing" / "deeper").is_available() is False
