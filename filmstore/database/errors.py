"""
Error taxonomy for the data-access layer.

Every error raised by this package is a StoreError. The underlying
SQLAlchemy or DBAPI fault is attached as ``__cause__`` (``raise ... from``).
"""


class StoreError(Exception):
    """Base class for all data-access errors."""


class StoreConnectionError(StoreError):
    """The store could not be opened or did not answer the liveness check."""


class ReadError(StoreError):
    """A query or row-mapping fault on a read path."""


class WriteError(StoreError):
    """An insert or delete fault, including constraint violations."""


class NotFoundError(StoreError):
    """Zero rows matched where exactly one was expected."""
