"""End-to-end tests against an on-disk SMS message store."""

from __future__ import annotations

import random

import pytest

from sms_index.config import Settings
from sms_index.index import MessageStoreAccessor
from sms_index.models import SMS_PROJECTION, ThreadID
from sms_index.store import SqliteMessageStore


@pytest.mark.integration
class TestMessageStoreIntegration:
    """Integration tests across store, resolver and accessor."""

    @pytest.fixture
    def populated(self, tmp_path) -> tuple[Settings, list[dict]]:
        rng = random.Random(1234)
        rows = [
            {
                "thread_id": rng.randint(1, 12),
                "address": f"+1555{rng.randint(0, 9999):04d}",
                "date": 1700000000000 + i * 1000,
                "read": rng.randint(0, 1),
                "type": rng.choice([1, 2]),
                "body": f"message {i}",
            }
            for i in range(200)
        ]
        settings = Settings(store_db_path=tmp_path / "mmssms.db", platform_api_level=16)
        store = SqliteMessageStore(settings.store_db_path)
        store.initialize()
        store.insert_many(rows)
        return settings, rows

    def test_legacy_platform_reads_whole_store(self, populated) -> None:
        settings, rows = populated
        accessor = MessageStoreAccessor.from_settings(settings)

        conversations = accessor.get_conversations()
        threads = accessor.get_messages_by_thread()

        distinct = {row["thread_id"] for row in rows}
        assert set(conversations) == {ThreadID(t) for t in distinct}
        assert set(threads) == set(conversations)
        assert sum(len(messages) for messages in threads.values()) == len(rows)

        for thread_id, latest in conversations.items():
            in_thread = accessor.get_messages_in_thread(thread_id)
            assert [m.body for m in in_thread] == [m.body for m in threads[thread_id]]
            assert latest.body == in_thread[-1].body
            assert all(m.thread == thread_id for m in in_thread)
            assert all(set(m.columns()) == set(SMS_PROJECTION) for m in in_thread)
