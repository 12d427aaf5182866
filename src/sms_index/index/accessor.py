"""Thread-addressable queries over an SMS message store.

Every call runs a fresh query against the store; nothing is cached between
calls, so two calls separated by a store change may return different results.
Calls block on store I/O and are meant to be run off latency-sensitive paths
by the caller.
"""

from __future__ import annotations

from collections.abc import Iterator

import structlog

from sms_index.config import Settings, get_settings
from sms_index.models import SMS_PROJECTION, Message, ThreadID
from sms_index.models.message import THREAD_ID
from sms_index.store.addresses import AddressResolver, StoreAddress, resolver_for_api_level
from sms_index.store.base import MessageStore, StoreCursor
from sms_index.store.sqlite import SqliteMessageStore

logger = structlog.get_logger()

ThreadIndex = dict[ThreadID, Message]

_THREAD_SELECTION = f"{THREAD_ID} = ?"


class MessageStoreAccessor:
    """Reads messages and conversations from a message store."""

    def __init__(self, store: MessageStore, resolver: AddressResolver) -> None:
        """Create an accessor.

        Args:
            store: The store to query.
            resolver: Supplies the message and conversation store addresses.
        """

        self._store = store
        self._resolver = resolver

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> MessageStoreAccessor:
        """Build an accessor over the configured SQLite store."""
        settings = settings or get_settings()
        resolver = resolver_for_api_level(settings.platform_api_level)
        logger.info(
            "message_store_accessor_configured",
            db_path=str(settings.store_db_path),
            api_level=settings.platform_api_level,
            resolver=repr(resolver),
        )
        return cls(SqliteMessageStore(settings.store_db_path), resolver)

    def get_messages_in_thread(self, thread_id: ThreadID) -> list[Message]:
        """Return every message of one thread, in store order.

        Args:
            thread_id: The thread to read.

        Returns:
            The thread's messages; empty if the thread has none.

        Raises:
            StoreUnavailableError: If the store cannot be queried.
        """

        messages = self._query(
            self._resolver.message_store_address(),
            selection=_THREAD_SELECTION,
            selection_args=(str(thread_id),),
        )
        logger.debug("thread_messages_loaded", thread_id=thread_id.value, message_count=len(messages))
        return messages

    def get_conversations(self) -> ThreadIndex:
        """Return the latest message of every conversation, keyed by thread.

        The representative message of each thread is the one the store's
        conversation view returns; recency is not recomputed here. Rows without
        a thread key belong to no thread and are left out.

        Raises:
            StoreUnavailableError: If the store cannot be queried.
            MalformedRecordError: If a row's thread key is not an integer.
        """

        conversations: ThreadIndex = {}
        messages = self._query(self._resolver.conversation_store_address())
        for thread_id, message in _keyed_by_thread(messages):
            conversations[thread_id] = message

        logger.debug("conversations_loaded", thread_count=len(conversations))
        return conversations

    def get_messages_by_thread(self) -> dict[ThreadID, list[Message]]:
        """Return every message in the store grouped by thread.

        Messages keep their store order within each thread. Rows without a
        thread key belong to no thread and are left out.

        Raises:
            StoreUnavailableError: If the store cannot be queried.
            MalformedRecordError: If a row's thread key is not an integer.
        """

        threads: dict[ThreadID, list[Message]] = {}
        messages = self._query(self._resolver.message_store_address())
        for thread_id, message in _keyed_by_thread(messages):
            threads.setdefault(thread_id, []).append(message)

        logger.debug(
            "messages_grouped_by_thread",
            thread_count=len(threads),
            message_count=len(messages),
        )
        return threads

    def _query(
        self,
        address: StoreAddress,
        selection: str | None = None,
        selection_args: tuple[str, ...] = (),
    ) -> list[Message]:
        with self._store.query(address, SMS_PROJECTION, selection, selection_args) as cursor:
            return _materialize(cursor)


def _materialize(cursor: StoreCursor) -> list[Message]:
    # Fail before reading any row if the store dropped the thread key.
    cursor.column_index(THREAD_ID)
    names = cursor.column_names
    return [Message.from_columns(dict(zip(names, row))) for row in cursor]


def _keyed_by_thread(messages: list[Message]) -> Iterator[tuple[ThreadID, Message]]:
    skipped = 0
    for message in messages:
        if message.thread_id is None:
            skipped += 1
            continue
        yield ThreadID.parse(message.thread_id), message

    if skipped:
        logger.warning("messages_without_thread_skipped", skipped_count=skipped)
