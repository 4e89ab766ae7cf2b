"""Entry ledger domain service.

Posts income, expense and transfer entries. Every write that touches an
account balance is handed to the database as one unit, so an entry and the
balance change it causes are always committed or rolled back together.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional, Sequence

from ledgerbook.domain.entities import (
    BulkPostFailure,
    BulkPostResult,
    Category,
    CategoryType,
    Entry,
    EntryType,
    EntryView,
)
from ledgerbook.domain.errors import (
    DomainError,
    InvalidOperationError,
    NotFoundError,
    ValidationError,
    account_not_found,
    category_not_found,
    entry_not_found,
    loan_not_found,
    transfer_not_editable,
)
from ledgerbook.domain.requests import (
    EntryCreateRequest,
    ImportCandidate,
    build_entry_request,
    build_transfer_request,
    require_text,
    to_date,
    to_enum,
    to_positive_amount,
)

if TYPE_CHECKING:
    from ledgerbook.database.base import Database

logger = logging.getLogger(__name__)


class EntryLedgerService:
    """Service for posting, editing, deleting and listing entries."""

    def __init__(self, db: Database):
        """Initialize entry ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_account_exists(self, account_id: int) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def _require_category_for(self, category_id: int, entry_type: EntryType) -> Category:
        category = self.db.get_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        if category.category_type != CategoryType(entry_type.value):
            raise ValidationError(
                f"Category '{category.name}' is an {category.category_type.value} category "
                f"and cannot tag an {entry_type.value} entry"
            )
        return category

    def create_income_or_expense(
        self,
        entry_type: EntryType | str,
        date: date | str,
        amount: Decimal | int | str,
        description: str,
        account_id: int,
        category_id: Optional[int] = None,
        linked_loan_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> Entry:
        """Post an income or expense entry and adjust its account balance.

        The stored amount is the magnitude of ``amount``; income adds it to
        the account balance and expense subtracts it.

        Args:
            entry_type: income or expense
            date: Entry date
            amount: Entry amount (sign is ignored)
            description: Description
            account_id: Account the money moves in or out of
            category_id: Optional category of the same type
            linked_loan_id: Optional loan this entry relates to
            notes: Optional notes

        Returns:
            The posted entry

        Raises:
            ValidationError: If a required field is missing, the amount is
                zero, the type is transfer, or the category type differs
            NotFoundError: If account, category or loan doesn't exist
        """
        request = build_entry_request(
            entry_type,
            date=date,
            amount=amount,
            description=description,
            account_id=account_id,
            category_id=category_id,
            linked_loan_id=linked_loan_id,
            notes=notes,
        )
        return self.post(request)

    def post(self, request: EntryCreateRequest) -> Entry:
        """Post a validated income or expense request.

        Raises:
            ValidationError: If the category type differs from the entry type
            NotFoundError: If account, category or loan doesn't exist
        """
        self._require_account_exists(request.account_id)
        if request.category_id is not None:
            self._require_category_for(request.category_id, request.entry_type)
        if request.linked_loan_id is not None and self.db.get_loan(request.linked_loan_id) is None:
            raise NotFoundError(loan_not_found(request.linked_loan_id))

        entry_id = self.db.create_entry(
            entry_type=request.entry_type,
            date=request.date,
            amount=request.amount,
            description=request.description,
            account_id=request.account_id,
            category_id=request.category_id,
            linked_loan_id=request.linked_loan_id,
            notes=request.notes,
        )
        return self.require_entry(entry_id)

    def create_transfer(
        self,
        date: date | str,
        amount: Decimal | int | str,
        description: Optional[str],
        from_account_id: int,
        to_account_id: int,
        notes: Optional[str] = None,
    ) -> str:
        """Move money between two accounts.

        Creates a debit leg on ``from_account_id`` and a credit leg on
        ``to_account_id`` sharing a new transfer group ID, and moves the
        balances, all in one unit.

        Returns:
            The transfer group ID

        Raises:
            ValidationError: If the accounts are the same or amount <= 0
            NotFoundError: If either account doesn't exist
        """
        request = build_transfer_request(
            date=date,
            amount=amount,
            description=description,
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            notes=notes,
        )
        self._require_account_exists(request.from_account_id)
        self._require_account_exists(request.to_account_id)

        return self.db.create_transfer(
            date=request.date,
            amount=request.amount,
            description=request.description,
            from_account_id=request.from_account_id,
            to_account_id=request.to_account_id,
            notes=request.notes,
        )

    def get_entry(self, entry_id: int) -> Optional[Entry]:
        """Get entry by ID.

        Returns:
            Entry entity or None if not found
        """
        return self.db.get_entry(entry_id)

    def require_entry(self, entry_id: int) -> Entry:
        """Get entry by ID or raise NotFoundError."""
        entry = self.db.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        return entry

    def get_transfer_legs(self, transfer_group_id: str) -> list[Entry]:
        """Get both legs of a transfer, debit leg first."""
        return self.db.get_transfer_legs(transfer_group_id)

    def update_entry(
        self,
        entry_id: int,
        date: date | str | None = None,
        description: Optional[str] = None,
        amount: Decimal | int | str | None = None,
        category_id: Optional[int] = None,
        notes: Optional[str] = None,
        clear_category: bool = False,
    ) -> Entry:
        """Update an income or expense entry.

        Only the fields that are provided change. A new amount replaces the
        old amount's balance effect within the same unit of work.

        Args:
            entry_id: Entry to update
            date: Optional new date
            description: Optional new description
            amount: Optional new amount (sign is ignored)
            category_id: Optional new category of the same type
            notes: Optional new notes
            clear_category: If True, clear the category (category_id must be None)

        Raises:
            NotFoundError: If the entry or category doesn't exist
            InvalidOperationError: If the entry is a transfer leg
            ValidationError: If a field is malformed
        """
        entry = self.require_entry(entry_id)
        if entry.is_transfer:
            raise InvalidOperationError(transfer_not_editable(entry_id))

        if clear_category and category_id is not None:
            raise ValidationError("Cannot set both category_id and clear_category")

        new_date = to_date(date) if date is not None else None
        new_amount = to_positive_amount(amount) if amount is not None else None
        new_description = require_text(description, "Description") if description is not None else None
        if category_id is not None:
            self._require_category_for(category_id, entry.entry_type)

        self.db.update_entry(
            entry_id=entry_id,
            date=new_date,
            description=new_description,
            amount=new_amount,
            category_id=category_id,
            notes=notes,
            clear_category=clear_category,
        )
        return self.require_entry(entry_id)

    def delete_entry(self, entry_id: int) -> list[int]:
        """Delete an entry and reverse its balance effect.

        Deleting either leg of a transfer deletes both legs and restores both
        account balances.

        Returns:
            IDs of every removed entry

        Raises:
            NotFoundError: If entry doesn't exist
        """
        self.require_entry(entry_id)
        return self.db.delete_entry(entry_id)

    def list_entries(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        entry_type: EntryType | str | None = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        uncategorized_only: bool = False,
        search_text: Optional[str] = None,
    ) -> list[EntryView]:
        """List entries with filters, newest first.

        Entries whose category has been removed read as uncategorized.

        Raises:
            ValidationError: If the type is unknown, start_date > end_date, or
                a category is combined with uncategorized_only
        """
        if uncategorized_only and category_id is not None:
            raise ValidationError("Cannot filter by category and uncategorized_only together")

        parsed_type = None
        if entry_type is not None:
            parsed_type = to_enum(EntryType, entry_type, "entry type")
        if start_date is not None and end_date is not None and start_date > end_date:
            raise ValidationError("Start date must be on or before end date")

        return self.db.list_entries(
            account_id=account_id,
            category_id=category_id,
            entry_type=parsed_type,
            start_date=start_date,
            end_date=end_date,
            uncategorized_only=uncategorized_only,
            search_text=search_text.strip() if search_text else None,
        )

    def post_candidates(self, candidates: Sequence[ImportCandidate]) -> BulkPostResult:
        """Post accepted statement rows one by one.

        Each candidate is posted in its own unit of work; a failing row is
        recorded and does not stop the rest of the batch.

        Returns:
            BulkPostResult with the posted entry IDs and per-row failures
        """
        posted: list[int] = []
        failures: list[BulkPostFailure] = []

        for index, candidate in enumerate(candidates):
            try:
                entry = self.create_income_or_expense(
                    entry_type=candidate.entry_type,
                    date=candidate.date,
                    amount=candidate.amount,
                    description=candidate.description,
                    account_id=candidate.account_id,
                    category_id=candidate.category_id,
                    notes=candidate.notes,
                )
            except DomainError as e:
                logger.warning("Import candidate %d rejected: %s", index, e)
                failures.append(BulkPostFailure(index=index, message=str(e)))
            else:
                posted.append(entry.id)

        logger.info("Posted %d of %d import candidates", len(posted), len(candidates))
        return BulkPostResult(
            total=len(candidates),
            posted_entry_ids=tuple(posted),
            failures=tuple(failures),
        )
