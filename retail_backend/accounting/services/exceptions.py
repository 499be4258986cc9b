# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services.

Each error carries a stable `code` so the API layer can return it verbatim.
"""

from __future__ import annotations

from decimal import Decimal


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""

    code = "accounting_error"


class AccountResolutionError(AccountingServiceError):
    """Raised when an expected account cannot be resolved."""

    code = "account_resolution_failed"


class AccountNotFound(AccountResolutionError):
    """Raised when an account id/code does not exist."""

    code = "account_not_found"


class AccountDisabled(AccountResolutionError):
    """Raised when a posting targets a disabled account."""

    code = "account_disabled"


class AccountInUse(AccountingServiceError):
    """Raised when deleting an account that already has ledger history."""

    code = "account_in_use"


class JournalEntryCreationError(AccountingServiceError):
    """Raised when a journal entry cannot be created."""

    code = "journal_entry_invalid"


class MalformedEntry(JournalEntryCreationError):
    """Structural problem: too few lines, bad amounts, both/neither sides set."""

    code = "malformed_entry"


class Unbalanced(JournalEntryCreationError):
    """Debit and credit totals differ. Carries both totals for display."""

    code = "unbalanced"

    def __init__(self, total_debit: Decimal, total_credit: Decimal):
        self.total_debit = total_debit
        self.total_credit = total_credit
        super().__init__(
            f"Journal entry not balanced: debits={total_debit} credits={total_credit}"
        )


class PostingFailed(AccountingServiceError):
    """Storage failure during commit. Nothing was persisted; retry the whole entry."""

    code = "posting_failed"


class ImmutableEntry(AccountingServiceError):
    """Raised on attempts to delete or edit a posted entry."""

    code = "immutable_entry"


class ImbalanceDetected(AccountingServiceError):
    """Raised by integrity checks when the ledger or a statement does not balance."""

    code = "imbalance_detected"
