"""Interest accrual for peer loans.

Everything here is a pure function of a loan snapshot, its repayment log and
an evaluation date. Nothing is cached or persisted, so the same inputs always
produce the same ``LoanAccrual``.
"""

from datetime import date
from decimal import Decimal, localcontext
from typing import Iterable

from ledgerbook.domain.entities import (
    InterestMethod,
    Loan,
    LoanAccrual,
    LoanRepayment,
    RepaymentType,
)

DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30
ACCRUAL_PRECISION = 28

_ZERO = Decimal("0")


def days_elapsed(start_date: date, evaluation_date: date) -> int:
    """Whole calendar days from ``start_date`` to ``evaluation_date``.

    Evaluating before the start date counts as zero days.
    """
    return max((evaluation_date - start_date).days, 0)


def _sum_repayments(repayments: Iterable[LoanRepayment], repayment_type: RepaymentType) -> Decimal:
    return sum((r.amount for r in repayments if r.repayment_type == repayment_type), _ZERO)


def outstanding_principal(principal: Decimal, repayments: Iterable[LoanRepayment]) -> Decimal:
    """Principal minus every principal-type repayment in the log."""
    return principal - _sum_repayments(repayments, RepaymentType.PRINCIPAL)


def interest_paid(repayments: Iterable[LoanRepayment]) -> Decimal:
    """Every interest-type repayment in the log."""
    return _sum_repayments(repayments, RepaymentType.INTEREST)


def simple_interest(outstanding: Decimal, annual_rate: Decimal, days: int) -> Decimal:
    """outstanding * rate * days / (365 * 100)."""
    return outstanding * annual_rate * days / (DAYS_PER_YEAR * 100)


def compound_monthly_interest(outstanding: Decimal, annual_rate: Decimal, days: int) -> Decimal:
    """outstanding * ((1 + rate/1200) ** (days / 30) - 1), with fractional months."""
    months = Decimal(days) / DAYS_PER_MONTH
    growth = (1 + annual_rate / 1200) ** months
    return outstanding * (growth - 1)


def compute_accrual(loan: Loan, evaluation_date: date) -> LoanAccrual:
    """Evaluate a loan's outstanding principal and interest on ``evaluation_date``.

    The whole repayment log is counted regardless of repayment dates, so the
    result agrees with ``Loan.principal_repaid`` and ``Loan.interest_paid``.
    ``interest_due`` is not clamped, so an overpaid loan reports a negative
    amount. Days are clamped at zero so a future start date accrues nothing.

    Args:
        loan: Loan snapshot including its repayment log
        evaluation_date: Calendar day to evaluate at

    Returns:
        LoanAccrual breakdown
    """
    with localcontext() as ctx:
        ctx.prec = ACCRUAL_PRECISION

        days = days_elapsed(loan.start_date, evaluation_date)
        outstanding = outstanding_principal(loan.principal, loan.repayments)

        if loan.interest_method == InterestMethod.SIMPLE:
            accrued = simple_interest(outstanding, loan.interest_rate, days)
        else:
            accrued = compound_monthly_interest(outstanding, loan.interest_rate, days)

        paid = interest_paid(loan.repayments)
        interest_due = accrued - paid

        return LoanAccrual(
            loan_id=loan.id,
            evaluation_date=evaluation_date,
            days_elapsed=days,
            outstanding_principal=outstanding,
            accrued_interest=accrued,
            interest_paid=paid,
            interest_due=interest_due,
            total_due=outstanding + interest_due,
        )
