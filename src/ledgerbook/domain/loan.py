"""Loan domain service.

Loans are a side ledger: recording a repayment appends to the loan's log and
never touches account balances or the entry ledger. Entries may point at a
loan through ``linked_loan_id`` purely as a tag.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ledgerbook.domain.accrual import compute_accrual
from ledgerbook.domain.entities import (
    InterestMethod,
    Loan,
    LoanAccrual,
    LoanDirection,
    LoanRepayment,
    RepaymentType,
)
from ledgerbook.domain.errors import NotFoundError, ValidationError, loan_not_found
from ledgerbook.domain.requests import (
    require_text,
    to_date,
    to_decimal,
    to_enum,
    to_positive_amount,
)

if TYPE_CHECKING:
    from ledgerbook.database.base import Database


def _to_rate(value) -> Decimal:
    rate = to_decimal(value, "Interest rate")
    if rate < 0:
        raise ValidationError("Interest rate cannot be negative")
    return rate


class LoanService:
    """Service for managing peer loans and their repayment logs."""

    def __init__(self, db: Database):
        """Initialize loan service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_loan(
        self,
        counterparty: str,
        direction: LoanDirection | str,
        principal: Decimal | int | str,
        start_date: date | str,
        interest_rate: Decimal | int | str = Decimal("0"),
        interest_method: InterestMethod | str = InterestMethod.SIMPLE,
        notes: Optional[str] = None,
    ) -> Loan:
        """Create a loan.

        Args:
            counterparty: Person the money was lent to or borrowed from
            direction: GIVEN or TAKEN
            principal: Amount lent or borrowed
            start_date: Day interest starts accruing
            interest_rate: Percent per annum
            interest_method: SIMPLE or COMPOUND (monthly)
            notes: Optional notes

        Returns:
            The created loan

        Raises:
            ValidationError: If a field is missing or malformed
        """
        loan_id = self.db.create_loan(
            counterparty=require_text(counterparty, "Counterparty"),
            direction=to_enum(LoanDirection, direction, "loan direction"),
            principal=to_positive_amount(principal, "Principal"),
            interest_rate=_to_rate(interest_rate),
            interest_method=to_enum(InterestMethod, interest_method, "interest method"),
            start_date=to_date(start_date, "Start date"),
            notes=notes,
        )
        return self.require_loan(loan_id)

    def get_loan(self, loan_id: int) -> Optional[Loan]:
        """Get loan by ID with its repayment log.

        Returns:
            Loan entity or None if not found
        """
        return self.db.get_loan(loan_id)

    def require_loan(self, loan_id: int) -> Loan:
        """Get loan by ID or raise NotFoundError."""
        loan = self.db.get_loan(loan_id)
        if loan is None:
            raise NotFoundError(loan_not_found(loan_id))
        return loan

    def list_loans(self) -> list[Loan]:
        """List loans, newest first."""
        return self.db.list_loans()

    def update_loan(
        self,
        loan_id: int,
        counterparty: Optional[str] = None,
        direction: LoanDirection | str | None = None,
        principal: Decimal | int | str | None = None,
        interest_rate: Decimal | int | str | None = None,
        interest_method: InterestMethod | str | None = None,
        start_date: date | str | None = None,
        notes: Optional[str] = None,
    ) -> Loan:
        """Update loan terms. The repayment log is not editable here.

        Raises:
            NotFoundError: If loan doesn't exist
            ValidationError: If a provided field is malformed
        """
        self.require_loan(loan_id)
        self.db.update_loan(
            loan_id=loan_id,
            counterparty=require_text(counterparty, "Counterparty") if counterparty is not None else None,
            direction=to_enum(LoanDirection, direction, "loan direction") if direction is not None else None,
            principal=to_positive_amount(principal, "Principal") if principal is not None else None,
            interest_rate=_to_rate(interest_rate) if interest_rate is not None else None,
            interest_method=(
                to_enum(InterestMethod, interest_method, "interest method")
                if interest_method is not None
                else None
            ),
            start_date=to_date(start_date, "Start date") if start_date is not None else None,
            notes=notes,
        )
        return self.require_loan(loan_id)

    def delete_loan(self, loan_id: int) -> None:
        """Delete a loan and its repayments; tagged entries lose the tag.

        Raises:
            NotFoundError: If loan doesn't exist
        """
        self.require_loan(loan_id)
        self.db.delete_loan(loan_id)

    def record_repayment(
        self,
        loan_id: int,
        amount: Decimal | int | str,
        repayment_type: RepaymentType | str,
        date: date | str,
        notes: Optional[str] = None,
    ) -> LoanRepayment:
        """Append a repayment to a loan's log.

        Raises:
            NotFoundError: If loan doesn't exist
            ValidationError: If amount is zero or the type is unknown
        """
        self.require_loan(loan_id)
        repayment_id = self.db.add_repayment(
            loan_id=loan_id,
            amount=to_positive_amount(amount),
            repayment_type=to_enum(RepaymentType, repayment_type, "repayment type"),
            date=to_date(date),
            notes=notes,
        )
        repayment = self.db.get_repayment(repayment_id)
        if repayment is None:
            raise NotFoundError(f"Repayment {repayment_id} not found")
        return repayment

    def list_repayments(self, loan_id: int) -> list[LoanRepayment]:
        """List a loan's repayments, oldest first.

        Raises:
            NotFoundError: If loan doesn't exist
        """
        self.require_loan(loan_id)
        return self.db.list_repayments(loan_id)

    def calculate_accrual(self, loan_id: int, evaluation_date: Optional[date] = None) -> LoanAccrual:
        """Evaluate a loan's principal and interest as of ``evaluation_date`` (default today).

        Raises:
            NotFoundError: If loan doesn't exist
        """
        loan = self.require_loan(loan_id)
        return compute_accrual(loan, evaluation_date or date.today())

    def list_accruals(self, evaluation_date: Optional[date] = None) -> list[tuple[Loan, LoanAccrual]]:
        """Evaluate every loan as of ``evaluation_date`` (default today)."""
        as_of = evaluation_date or date.today()
        return [(loan, compute_accrual(loan, as_of)) for loan in self.db.list_loans()]
