"""SQLite-backed SMS message store.

The database mirrors the layout of a phone's SMS provider: one ``sms`` table
holding every message, plus a ``sms_conversations`` view surfacing the most
recent message of each thread. Queries are addressed with the same logical
addresses a device exposes, in both their modern and legacy forms.
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import structlog

from sms_index.exceptions import ConfigurationError, SmsIndexError, StoreUnavailableError
from sms_index.store.addresses import (
    LEGACY_CONVERSATION_ADDRESS,
    LEGACY_MESSAGE_ADDRESS,
    MODERN_CONVERSATION_ADDRESS,
    MODERN_MESSAGE_ADDRESS,
    StoreAddress,
)
from sms_index.store.base import Row, StoreCursor

logger = structlog.get_logger()


_SCHEMA_VERSION = 1

_MESSAGE_TABLE = "sms"
_CONVERSATION_VIEW = "sms_conversations"

_ADDRESS_TABLES: dict[str, str] = {
    MODERN_MESSAGE_ADDRESS: _MESSAGE_TABLE,
    LEGACY_MESSAGE_ADDRESS: _MESSAGE_TABLE,
    MODERN_CONVERSATION_ADDRESS: _CONVERSATION_VIEW,
    LEGACY_CONVERSATION_ADDRESS: _CONVERSATION_VIEW,
}

_INSERT_COLUMNS = ("thread_id", "address", "person", "date", "read", "type", "body")
_COLUMNS = ("_id", *_INSERT_COLUMNS)


def _decode_text(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return _decode_text(value)
    return str(value)


class SqliteCursor(StoreCursor):
    """Cursor over a finished SQLite query; owns its connection until closed."""

    def __init__(self, conn: sqlite3.Connection, cursor: sqlite3.Cursor) -> None:
        self._conn = conn
        self._cursor = cursor
        self._column_names = tuple(d[0] for d in cursor.description or ())
        self._rows: list[Row] = [tuple(_as_text(v) for v in row) for row in cursor.fetchall()]
        self._closed = False

    @property
    def column_names(self) -> tuple[str, ...]:
        return self._column_names

    @property
    def count(self) -> int:
        return len(self._rows)

    @property
    def closed(self) -> bool:
        return self._closed

    def __iter__(self) -> Iterator[Row]:
        if self._closed:
            raise SmsIndexError("Cursor is closed")
        return iter(self._rows)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._cursor.close()
        finally:
            self._conn.close()


class SqliteMessageStore:
    """Message store reading from (and seeding) a local SQLite database."""

    def __init__(self, db_path: Path) -> None:
        """Create a store.

        Args:
            db_path: Path to the SQLite database file.
        """

        self._db_path = db_path

    @property
    def db_path(self) -> Path:
        return self._db_path

    def initialize(self) -> None:
        """Create the store schema if it does not exist yet."""

        self._db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS _schema_meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );
                """
            )

            current_version = self._get_schema_version(conn)
            if current_version is None:
                self._create_schema_v1(conn)
                self._set_schema_version(conn, _SCHEMA_VERSION)
                conn.commit()
                logger.info("message_store_schema_created", version=_SCHEMA_VERSION)
                return

            if current_version != _SCHEMA_VERSION:
                raise RuntimeError(
                    f"Unsupported schema version {current_version}; expected {_SCHEMA_VERSION}"
                )

    def insert_many(self, rows: Iterable[Mapping[str, Any]]) -> int:
        """Insert raw SMS rows, in order.

        Missing columns are stored as NULL; ``_id`` is assigned by the store.

        Returns:
            Number of rows inserted.
        """

        params = [{column: row.get(column) for column in _INSERT_COLUMNS} for row in rows]
        if not params:
            return 0

        with self._connect() as conn:
            conn.executemany(
                """
                INSERT INTO sms (thread_id, address, person, date, read, type, body)
                VALUES (:thread_id, :address, :person, :date, :read, :type, :body)
                """,
                params,
            )
            conn.commit()

        logger.debug("message_store_rows_inserted", row_count=len(params))
        return len(params)

    def query(
        self,
        address: StoreAddress,
        projection: Sequence[str],
        selection: str | None = None,
        selection_args: Sequence[str] = (),
    ) -> SqliteCursor:
        """Run a read-only query against the table behind ``address``.

        Raises:
            StoreUnavailableError: If the database cannot be opened or read, or
                the address is unknown.
            ConfigurationError: If the projection names an unknown column.
        """

        table = _ADDRESS_TABLES.get(str(address))
        if table is None:
            raise StoreUnavailableError(f"No store is published at {address}")

        unknown = [column for column in projection if column not in _COLUMNS]
        if unknown or not projection:
            raise ConfigurationError(f"Invalid projection columns: {unknown or 'none requested'}")

        sql = f"SELECT {', '.join(projection)} FROM {table}"
        if selection:
            sql += f" WHERE {selection}"

        try:
            conn = sqlite3.connect(f"{self._db_path.resolve().as_uri()}?mode=ro", uri=True)
            # One badly encoded message must not fail the whole query.
            conn.text_factory = _decode_text
        except sqlite3.Error as exc:
            logger.exception("message_store_open_failed", db_path=str(self._db_path), error=str(exc))
            raise StoreUnavailableError(str(exc)) from exc

        try:
            return SqliteCursor(conn, conn.execute(sql, tuple(selection_args)))
        except sqlite3.Error as exc:
            conn.close()
            logger.exception(
                "message_store_query_failed",
                address=str(address),
                selection=selection,
                error=str(exc),
            )
            raise StoreUnavailableError(str(exc)) from exc

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path)
        try:
            yield conn
        finally:
            conn.close()

    def _get_schema_version(self, conn: sqlite3.Connection) -> int | None:
        row = conn.execute(
            "SELECT value FROM _schema_meta WHERE key = 'schema_version'"
        ).fetchone()
        if row is None:
            return None
        return int(row[0])

    def _set_schema_version(self, conn: sqlite3.Connection, version: int) -> None:
        conn.execute(
            "INSERT OR REPLACE INTO _schema_meta(key, value) VALUES('schema_version', ?) ",
            (str(version),),
        )

    def _create_schema_v1(self, conn: sqlite3.Connection) -> None:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS sms (
                _id INTEGER PRIMARY KEY,
                thread_id INTEGER,
                address TEXT,
                person INTEGER,
                date INTEGER,
                read INTEGER,
                type INTEGER,
                body TEXT
            );

            CREATE INDEX IF NOT EXISTS idx_sms_thread_id
                ON sms(thread_id);

            CREATE VIEW IF NOT EXISTS sms_conversations AS
            SELECT s.*
            FROM sms AS s
            WHERE s._id = (
                SELECT latest._id
                FROM sms AS latest
                WHERE latest.thread_id = s.thread_id
                ORDER BY latest.date DESC, latest._id DESC
                LIMIT 1
            )
            ORDER BY s.date DESC, s._id DESC;
            """
        )
