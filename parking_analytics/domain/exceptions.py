"""
Errors raised by the analytics service.

Routers turn any of these into the failure envelope; nothing is retried.
"""


class AnalyticsError(Exception):
    """Base exception for analytics failures."""

    pass


class InvalidArgument(AnalyticsError):
    """
    Raised when an owner identifier is malformed, or missing where one is required.
    """

    pass


class DependencyError(AnalyticsError):
    """
    Raised when the record store fails (connection, query, timeout).

    The message carries the context of the failed operation followed by the
    underlying driver message.
    """

    pass
