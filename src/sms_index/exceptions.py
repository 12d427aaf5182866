"""Custom exceptions for SMS Thread Index."""


class SmsIndexError(Exception):
    """Base exception for all SMS Thread Index errors."""


class StoreUnavailableError(SmsIndexError):
    """Exception raised when a message store query cannot be executed."""


class ColumnNotFoundError(SmsIndexError):
    """Exception raised when a result column is looked up but not present."""


class MalformedRecordError(SmsIndexError):
    """Exception raised when a store row cannot be interpreted."""


class ConfigurationError(SmsIndexError):
    """Exception raised for configuration related errors."""
