"""Contract between the accessor and a queryable message store."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from types import TracebackType
from typing import Protocol

from sms_index.exceptions import ColumnNotFoundError
from sms_index.store.addresses import StoreAddress

Row = tuple[str | None, ...]


class StoreCursor(ABC):
    """Forward-only sequence of result rows holding a store resource.

    A cursor must be closed once read. Use it as a context manager so it is
    released on every exit path.
    """

    @property
    @abstractmethod
    def column_names(self) -> tuple[str, ...]:
        """Names of the result columns, in row order."""

    @property
    @abstractmethod
    def count(self) -> int:
        """Number of rows in the result."""

    @property
    @abstractmethod
    def closed(self) -> bool: ...

    @abstractmethod
    def __iter__(self) -> Iterator[Row]: ...

    @abstractmethod
    def close(self) -> None:
        """Release the store resource held by this cursor."""

    def column_index(self, name: str) -> int:
        """Return the position of a result column.

        Raises:
            ColumnNotFoundError: If the column is not part of the result.
        """

        try:
            return self.column_names.index(name)
        except ValueError as exc:
            raise ColumnNotFoundError(f"Column not in result: {name}") from exc

    def __enter__(self) -> StoreCursor:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class MessageStore(Protocol):
    """A read-only store queryable by address, projection and selection."""

    def query(
        self,
        address: StoreAddress,
        projection: Sequence[str],
        selection: str | None = None,
        selection_args: Sequence[str] = (),
    ) -> StoreCursor:
        """Run a query and return a cursor over its rows.

        Raises:
            StoreUnavailableError: If the query cannot be executed.
        """
        ...
