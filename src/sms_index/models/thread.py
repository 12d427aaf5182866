"""Value identity for SMS threads."""

from __future__ import annotations

from dataclasses import dataclass

from sms_index.exceptions import MalformedRecordError


@dataclass(frozen=True)
class ThreadID:
    """Identifier of a message thread.

    Equality and hashing derive from the wrapped integer only, so two instances
    built from the same value are interchangeable as mapping keys. Comparing
    against any other type is simply unequal.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"ThreadID wraps an int, got {type(self.value).__name__}")

    @classmethod
    def parse(cls, raw: str | None) -> ThreadID:
        """Build a ThreadID from a thread key column value.

        Raises:
            MalformedRecordError: If the value is missing or not an integer.
        """

        if raw is None:
            raise MalformedRecordError("Row has no thread key")
        try:
            return cls(int(raw))
        except ValueError as exc:
            raise MalformedRecordError(f"Thread key is not an integer: {raw!r}") from exc

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
