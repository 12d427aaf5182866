"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from sms_index.store import SqliteMessageStore


@pytest.fixture
def mock_settings(tmp_path: Path):
    """Provide mock settings for testing."""
    from sms_index.config import Settings

    return Settings(
        store_db_path=tmp_path / "mmssms.db",
        platform_api_level=19,
        log_level="DEBUG",
        debug=True,
    )


@pytest.fixture
def sample_sms_rows() -> list[dict]:
    """Provide raw SMS rows spread over two threads, oldest first."""
    return [
        {
            "thread_id": 1,
            "address": "+15550001",
            "person": 12,
            "date": 1700000000000,
            "read": 1,
            "type": 1,
            "body": "hi",
        },
        {
            "thread_id": 1,
            "address": "+15550001",
            "person": 12,
            "date": 1700000060000,
            "read": 0,
            "type": 2,
            "body": "there",
        },
        {
            "thread_id": 2,
            "address": "+15550002",
            "person": None,
            "date": 1700000030000,
            "read": 1,
            "type": 1,
            "body": "yo",
        },
    ]


@pytest.fixture
def empty_store(tmp_path: Path) -> SqliteMessageStore:
    """Provide an initialized message store with no rows."""
    store = SqliteMessageStore(tmp_path / "mmssms.db")
    store.initialize()
    return store


@pytest.fixture
def sample_store(empty_store: SqliteMessageStore, sample_sms_rows: list[dict]) -> SqliteMessageStore:
    """Provide a message store seeded with the sample rows."""
    empty_store.insert_many(sample_sms_rows)
    return empty_store
