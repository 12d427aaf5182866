"""Message store address resolution.

Platforms at capability level 19 and above publish documented addresses for
the SMS store. Older platforms only answer on undocumented addresses, which
appear to work across vendors but are not guaranteed. The choice between the
two is made once, when a resolver is picked, and injected into the accessor.
"""

from __future__ import annotations

from typing import Protocol


class StoreAddress(str):
    """Logical address of a queryable store (a content URI)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"StoreAddress({str.__repr__(self)})"


MODERN_API_LEVEL = 19

MODERN_MESSAGE_ADDRESS = StoreAddress("content://sms")
MODERN_CONVERSATION_ADDRESS = StoreAddress("content://sms/conversations")

LEGACY_MESSAGE_ADDRESS = StoreAddress("content://sms/")
LEGACY_CONVERSATION_ADDRESS = StoreAddress("content://sms/conversations/")


class AddressResolver(Protocol):
    """Produces the addresses of the message and conversation stores."""

    def message_store_address(self) -> StoreAddress: ...

    def conversation_store_address(self) -> StoreAddress: ...


class ModernAddressResolver:
    """Documented addresses, available from capability level 19."""

    def message_store_address(self) -> StoreAddress:
        return MODERN_MESSAGE_ADDRESS

    def conversation_store_address(self) -> StoreAddress:
        return MODERN_CONVERSATION_ADDRESS

    def __repr__(self) -> str:
        return "ModernAddressResolver()"


class LegacyAddressResolver:
    """Undocumented fallback addresses for older platforms."""

    def message_store_address(self) -> StoreAddress:
        return LEGACY_MESSAGE_ADDRESS

    def conversation_store_address(self) -> StoreAddress:
        return LEGACY_CONVERSATION_ADDRESS

    def __repr__(self) -> str:
        return "LegacyAddressResolver()"


def resolver_for_api_level(api_level: int) -> AddressResolver:
    """Pick the address resolver for a platform capability level."""

    if api_level >= MODERN_API_LEVEL:
        return ModernAddressResolver()
    return LegacyAddressResolver()
