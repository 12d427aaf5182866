"""SMS Thread Index - thread-addressable access to an SMS message store.

This package reads raw SMS records from a message store and reorganizes them
into per-thread message lists and per-conversation latest-message indexes.
"""

__version__ = "0.1.0"
__author__ = "Trickl"

from sms_index.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__", "__author__"]
