"""
Exceptions raised by the inventory analytics engine.

Bad records never raise: they are skipped and counted. These exceptions only
signal caller misuse, such as an inverted reporting window.
"""


class AnalyticsError(Exception):
    """Base class for analytics engine errors."""


class AnalyticsConfigurationError(AnalyticsError, ValueError):
    """Raised when a request or configuration cannot be interpreted."""
