"""Domain layer for ledgerbook application."""

from ledgerbook.domain.account import AccountService
from ledgerbook.domain.category import CategoryService
from ledgerbook.domain.entry import EntryLedgerService
from ledgerbook.domain.loan import LoanService

__all__ = [
    "AccountService",
    "CategoryService",
    "EntryLedgerService",
    "LoanService",
]
