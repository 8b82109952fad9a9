from __future__ import annotations


class LedgerError(Exception):
    pass


class ValidationError(LedgerError, ValueError):
    """Input rejected before it reaches the store. Nothing was mutated."""


class PersistenceReadError(LedgerError):
    """Stored ledger data exists but could not be decoded."""


class PersistenceWriteError(LedgerError):
    """The ledger could not be written to its storage slot.

    In-memory state is still valid; the change may not survive a restart.
    """
