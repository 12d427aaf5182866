"""Thread indexing.

This package turns raw message store rows into per-thread message lists and a
per-conversation index of latest messages.
"""

from .accessor import MessageStoreAccessor, ThreadIndex

__all__ = ["MessageStoreAccessor", "ThreadIndex"]
