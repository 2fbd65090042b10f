# ledger/services/exceptions.py

"""
LEDGER SERVICE ERRORS

Centralized domain errors for the ledger engine.

Only malformed input is a hard failure. Data-quality problems (unknown
account codes, missing due dates, unbalanced transactions) are reported
through Diagnostics instead of raising.
"""


class LedgerServiceError(Exception):
    """Base exception for all ledger engine failures."""


class MalformedRecordError(LedgerServiceError):
    """Raised when an input record does not have the expected shape."""


class InvalidPeriodError(LedgerServiceError):
    """Raised when explicit period bounds are unusable."""


class UnknownReportError(LedgerServiceError):
    """Raised when a batch asks for a report that does not exist."""
