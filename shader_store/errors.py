from __future__ import annotations


class StoreError(Exception):
    """Base class for every failure raised by the store."""


class StoreInitError(StoreError):
    """Directory, database file or schema could not be created. The store is unusable."""


class StoreClosedError(StoreError):
    pass


class StatementError(StoreError):
    """A single SQL statement failed."""


class RowDecodeError(StatementError):
    """A row read back from the database does not map onto its record type."""
