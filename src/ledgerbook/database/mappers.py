"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic: enum columns are stored as their
string values and turned back into enum members here.
"""

from ledgerbook.domain import entities as domain
from ledgerbook.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    Entry as ORMEntry,
    Loan as ORMLoan,
    LoanRepayment as ORMLoanRepayment,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=domain.AccountType(orm_account.account_type),
        description=orm_account.description,
        opening_balance=orm_account.opening_balance,
        current_balance=orm_account.current_balance,
        created_at=orm_account.created_at,
        updated_at=orm_account.updated_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=domain.CategoryType(orm_category.category_type),
        parent_id=orm_category.parent_id,
        created_at=orm_category.created_at,
    )


def entry_to_domain(orm_entry: ORMEntry) -> domain.Entry:
    """Convert SQLAlchemy Entry model to domain Entry entity."""
    return domain.Entry(
        id=orm_entry.id,
        entry_type=domain.EntryType(orm_entry.entry_type),
        date=orm_entry.date,
        amount=orm_entry.amount,
        description=orm_entry.description,
        notes=orm_entry.notes,
        account_id=orm_entry.account_id,
        category_id=orm_entry.category_id,
        linked_loan_id=orm_entry.linked_loan_id,
        transfer_group_id=orm_entry.transfer_group_id,
        counter_account_id=orm_entry.counter_account_id,
        transfer_leg=(
            domain.TransferLeg(orm_entry.transfer_leg) if orm_entry.transfer_leg else None
        ),
        created_at=orm_entry.created_at,
        updated_at=orm_entry.updated_at,
    )


def entry_to_view(orm_entry: ORMEntry) -> domain.EntryView:
    """Convert an Entry with loaded relationships to a display view.

    A category that no longer resolves is shown as uncategorized.
    """
    return domain.EntryView(
        entry=entry_to_domain(orm_entry),
        account_name=orm_entry.account.name,
        category_name=orm_entry.category.name if orm_entry.category is not None else None,
        counter_account_name=(
            orm_entry.counter_account.name if orm_entry.counter_account is not None else None
        ),
    )


def repayment_to_domain(orm_repayment: ORMLoanRepayment) -> domain.LoanRepayment:
    """Convert SQLAlchemy LoanRepayment model to domain LoanRepayment entity."""
    return domain.LoanRepayment(
        id=orm_repayment.id,
        loan_id=orm_repayment.loan_id,
        amount=orm_repayment.amount,
        repayment_type=domain.RepaymentType(orm_repayment.repayment_type),
        date=orm_repayment.date,
        notes=orm_repayment.notes,
        created_at=orm_repayment.created_at,
    )


def loan_to_domain(orm_loan: ORMLoan) -> domain.Loan:
    """Convert SQLAlchemy Loan model (with its repayment log) to domain Loan entity."""
    return domain.Loan(
        id=orm_loan.id,
        counterparty=orm_loan.counterparty,
        direction=domain.LoanDirection(orm_loan.direction),
        principal=orm_loan.principal,
        interest_rate=orm_loan.interest_rate,
        interest_method=domain.InterestMethod(orm_loan.interest_method),
        start_date=orm_loan.start_date,
        notes=orm_loan.notes,
        created_at=orm_loan.created_at,
        updated_at=orm_loan.updated_at,
        repayments=tuple(repayment_to_domain(r) for r in orm_loan.repayments),
    )
