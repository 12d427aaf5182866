"""SMS message record.

A Message holds the columns read from the message store for one SMS. The seven
columns every query requests are exposed as named fields; any other column a
store returns is kept as an extra field so newer stores still materialize.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sms_index.models.thread import ThreadID

# Store column names, in the order they are requested.
ADDRESS = "address"
BODY = "body"
DATE = "date"
TYPE = "type"
PERSON = "person"
READ = "read"
THREAD_ID = "thread_id"

SMS_PROJECTION: tuple[str, ...] = (ADDRESS, BODY, DATE, TYPE, PERSON, READ, THREAD_ID)

NO_BODY_DISPLAY = "<no body>"

# Column name to model field name, where they differ.
_COLUMN_FIELDS = {TYPE: "message_type"}

_MISSING = object()


class Message(BaseModel):
    """A single SMS as read from the message store.

    Values are kept as the raw text the store returned. ``type`` and ``read``
    are opaque store codes and are not decoded.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    address: str | None = Field(default=None, description="Phone number of the remote party")
    body: str | None = Field(default=None, description="Body of the message")
    date: str | None = Field(default=None, description="Milliseconds since epoch, as text")
    message_type: str | None = Field(default=None, alias=TYPE, description="Raw type code")
    person: str | None = Field(default=None, description="Raw contact reference")
    read: str | None = Field(default=None, description="Raw read flag")
    thread_id: str | None = Field(default=None, description="Thread key, as text")

    @classmethod
    def from_columns(cls, columns: Mapping[str, str | None]) -> Message:
        """Build a message from a column name to value mapping."""

        return cls.model_validate(dict(columns))

    def columns(self) -> dict[str, Any]:
        """Return the columns this message was built with, keyed by column name."""

        return self.model_dump(by_alias=True, exclude_unset=True)

    def get(self, column: str, default: Any = None) -> Any:
        """Return a column value, or ``default`` if the column was not read."""

        value = self._lookup(column)
        return default if value is _MISSING else value

    def __getitem__(self, column: str) -> Any:
        """Return a column value; raise KeyError if the column was not read."""

        value = self._lookup(column)
        if value is _MISSING:
            raise KeyError(column)
        return value

    def __contains__(self, column: object) -> bool:
        """Whether the column was read from the store."""

        return isinstance(column, str) and self._lookup(column) is not _MISSING

    def _lookup(self, column: str) -> Any:
        extra = self.model_extra or {}
        if column in extra:
            return extra[column]

        if column in _COLUMN_FIELDS.values():
            return _MISSING
        field = _COLUMN_FIELDS.get(column, column)
        if field in type(self).model_fields and field in self.model_fields_set:
            return getattr(self, field)
        return _MISSING

    @property
    def thread(self) -> ThreadID | None:
        """The thread this message belongs to, if the thread key was read."""

        if self.thread_id is None:
            return None
        return ThreadID.parse(self.thread_id)

    @property
    def timestamp(self) -> datetime | None:
        """The ``date`` column as an aware UTC datetime, if it parses."""

        if not self.date:
            return None
        try:
            return datetime.fromtimestamp(int(self.date) / 1000, tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError):
            return None

    def __str__(self) -> str:
        if self.body is not None:
            return self.body
        return NO_BODY_DISPLAY
