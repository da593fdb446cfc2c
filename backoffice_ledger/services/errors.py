"""
Service-level exceptions.

Validation and business-rule failures stay plain ValueError, as
everywhere else in the services; routes turn them into 400s.
"""


class NotFoundError(ValueError):
    """A referenced party, transaction or ledger entry does not exist."""


class PostingConflictError(Exception):
    """A posting kept losing the optimistic check on the party balance."""


class LedgerJournalUnavailable(Exception):
    """The ledger journal relation does not exist in this database."""
