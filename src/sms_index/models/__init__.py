"""Data models for SMS Thread Index."""

from sms_index.models.message import SMS_PROJECTION, Message
from sms_index.models.thread import ThreadID

__all__ = ["Message", "SMS_PROJECTION", "ThreadID"]
