"""
Error taxonomy for catalog data access.

Every failure is terminal for the current request: no retry, no
partial results.  Messages carried by these exceptions are safe to
show to callers; driver detail is logged where the error is raised.
"""


class WidgetFinderError(Exception):
    """Base class for every error raised by widget_finder."""


class DatabaseConnectionError(WidgetFinderError):
    """The database connection could not be established."""


class ConnectionStateError(WidgetFinderError):
    """An operation needed an open connection and there was none."""


class QueryError(WidgetFinderError):
    """A statement failed to execute."""
