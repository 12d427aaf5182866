"""Message store access.

This package contains the store address resolvers, the contract a queryable
message store fulfils, and a SQLite implementation of that contract.
"""

from .addresses import (
    AddressResolver,
    LegacyAddressResolver,
    ModernAddressResolver,
    StoreAddress,
    resolver_for_api_level,
)
from .base import MessageStore, StoreCursor
from .sqlite import SqliteMessageStore

__all__ = [
    "AddressResolver",
    "LegacyAddressResolver",
    "MessageStore",
    "ModernAddressResolver",
    "SqliteMessageStore",
    "StoreAddress",
    "StoreCursor",
    "resolver_for_api_level",
]
