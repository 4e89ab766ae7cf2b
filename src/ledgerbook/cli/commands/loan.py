"""Loan management commands."""

import click
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.entities import InterestMethod, Loan, LoanAccrual, LoanDirection, RepaymentType
from ledgerbook.domain.errors import DomainError
from ledgerbook.domain.loan import LoanService
from ledgerbook.utils.amount_parser import parse_amount
from ledgerbook.utils.date_parser import parse_date

DIRECTIONS = [d.value for d in LoanDirection]
INTEREST_METHODS = [m.value for m in InterestMethod]
REPAYMENT_TYPES = [t.value for t in RepaymentType]


def _parse_optional_date(ctx, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _parse_optional_amount(ctx, value: str | None, label: str):
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def print_accrual(loan: Loan, accrual: LoanAccrual) -> None:
    """Print the principal and interest breakdown of a loan."""
    click.echo(f"  As of: {accrual.evaluation_date} ({accrual.days_elapsed} days)")
    click.echo(f"  Principal: {loan.principal:,.2f}")
    click.echo(f"  Principal repaid: {loan.principal_repaid:,.2f}")
    click.echo(f"  Outstanding principal: {accrual.outstanding_principal:,.2f}")
    click.echo(f"  Accrued interest: {accrual.accrued_interest:,.2f}")
    click.echo(f"  Interest paid: {accrual.interest_paid:,.2f}")
    click.echo(f"  Interest due: {accrual.interest_due:,.2f}")
    click.echo(f"  Total due: {accrual.total_due:,.2f}")


@click.group()
def loan_group():
    """Manage loans given to or taken from other people."""
    pass


@loan_group.command("create")
@click.argument("counterparty")
@click.option(
    "--direction",
    type=click.Choice(DIRECTIONS, case_sensitive=False),
    required=True,
    help="GIVEN if you lent the money, TAKEN if you borrowed it",
)
@click.option("--principal", required=True, help="Amount lent or borrowed")
@click.option("--rate", default="0", help="Interest rate, percent per annum (default: 0)")
@click.option(
    "--method",
    type=click.Choice(INTEREST_METHODS, case_sensitive=False),
    default="SIMPLE",
    help="Interest method (default: SIMPLE)",
)
@click.option("--start-date", default="today", help="Date interest starts accruing")
@click.option("--notes", help="Notes")
@click.pass_context
def create_loan(
    ctx,
    counterparty: str,
    direction: str,
    principal: str,
    rate: str,
    method: str,
    start_date: str,
    notes: str | None,
):
    """Record a new loan.

    Examples:
        ledgerbook loan create "Ravi" --direction GIVEN --principal 100000 --rate 12
        ledgerbook loan create "Bank" --direction TAKEN --principal 50000 --rate 9 --method COMPOUND
    """
    service = LoanService(ctx.obj["db"])
    principal_amount = _parse_optional_amount(ctx, principal, "principal")
    start = _parse_optional_date(ctx, start_date, "start date")

    try:
        loan = service.create_loan(
            counterparty=counterparty,
            direction=direction,
            principal=principal_amount,
            start_date=start,
            interest_rate=rate,
            interest_method=method,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created loan {loan.id}: {loan.direction.value} {loan.counterparty}")
    click.echo(f"  Principal: {loan.principal:,.2f} at {loan.interest_rate}% ({loan.interest_method.value})")


@loan_group.command("list")
@click.option("--as-of", help="Evaluation date (default: today)")
@click.pass_context
def list_loans(ctx, as_of: str | None):
    """List loans with what is currently due on each."""
    service = LoanService(ctx.obj["db"])
    evaluation_date = _parse_optional_date(ctx, as_of, "evaluation date")

    accruals = service.list_accruals(evaluation_date)
    if not accruals:
        click.echo("No loans found.")
        return

    click.echo("\nLoans:")
    click.echo("-" * 80)
    for loan, accrual in accruals:
        click.echo(
            f"ID: {loan.id:3d} | {loan.direction.value:5s} | {loan.counterparty:20s} | "
            f"outstanding {accrual.outstanding_principal:>12,.2f} | "
            f"due {accrual.total_due:>12,.2f}"
        )


@loan_group.command("show")
@click.argument("loan_id", type=int)
@click.option("--as-of", help="Evaluation date (default: today)")
@click.pass_context
def show_loan(ctx, loan_id: int, as_of: str | None):
    """Show a loan, its repayments and its interest breakdown."""
    service = LoanService(ctx.obj["db"])
    evaluation_date = _parse_optional_date(ctx, as_of, "evaluation date")

    try:
        loan = service.require_loan(loan_id)
        accrual = service.calculate_accrual(loan_id, evaluation_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Loan {loan.id}: {loan.direction.value} {loan.counterparty}")
    click.echo(
        f"  Started {loan.start_date} at {loan.interest_rate}% p.a. "
        f"({loan.interest_method.value})"
    )
    if loan.notes:
        click.echo(f"  Notes: {loan.notes}")
    print_accrual(loan, accrual)

    if loan.repayments:
        click.echo("\n  Repayments:")
        for repayment in loan.repayments:
            click.echo(
                f"    {repayment.date} | {repayment.repayment_type.value:9s} | "
                f"{repayment.amount:>12,.2f}"
            )


@loan_group.command("update")
@click.argument("loan_id", type=int)
@click.option("--counterparty", help="New counterparty")
@click.option("--direction", type=click.Choice(DIRECTIONS, case_sensitive=False))
@click.option("--principal", help="New principal")
@click.option("--rate", help="New interest rate, percent per annum")
@click.option("--method", type=click.Choice(INTEREST_METHODS, case_sensitive=False))
@click.option("--start-date", help="New start date")
@click.option("--notes", help="New notes")
@click.pass_context
def update_loan(
    ctx,
    loan_id: int,
    counterparty: str | None,
    direction: str | None,
    principal: str | None,
    rate: str | None,
    method: str | None,
    start_date: str | None,
    notes: str | None,
):
    """Update a loan's terms."""
    service = LoanService(ctx.obj["db"])
    principal_amount = _parse_optional_amount(ctx, principal, "principal")
    start = _parse_optional_date(ctx, start_date, "start date")

    try:
        loan = service.update_loan(
            loan_id=loan_id,
            counterparty=counterparty,
            direction=direction,
            principal=principal_amount,
            interest_rate=rate,
            interest_method=method,
            start_date=start,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated loan {loan.id}")


@loan_group.command("repay")
@click.argument("loan_id", type=int)
@click.option("--amount", required=True, help="Repayment amount")
@click.option(
    "--type",
    "repayment_type",
    type=click.Choice(REPAYMENT_TYPES, case_sensitive=False),
    default="PRINCIPAL",
    help="What the repayment covers (default: PRINCIPAL)",
)
@click.option("--date", "date_str", default="today", help="Repayment date")
@click.option("--notes", help="Notes")
@click.pass_context
def repay_loan(ctx, loan_id: int, amount: str, repayment_type: str, date_str: str, notes: str | None):
    """Record a repayment against a loan.

    Repayments only update the loan; post a matching entry if the money
    moved through one of your accounts.
    """
    service = LoanService(ctx.obj["db"])
    repayment_amount = _parse_optional_amount(ctx, amount, "amount")
    repayment_date = _parse_optional_date(ctx, date_str, "date")

    try:
        repayment = service.record_repayment(
            loan_id=loan_id,
            amount=repayment_amount,
            repayment_type=repayment_type,
            date=repayment_date,
            notes=notes,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Recorded {repayment.repayment_type.value.lower()} repayment of "
        f"{repayment.amount:,.2f} on loan {loan_id}"
    )


@loan_group.command("delete")
@click.argument("loan_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_loan(ctx, loan_id: int, yes: bool):
    """Delete a loan and its repayment log."""
    service = LoanService(ctx.obj["db"])

    try:
        loan = service.require_loan(loan_id)
        if not yes and not click.confirm(
            f"Delete loan {loan_id} with {loan.counterparty} and its repayments?"
        ):
            click.echo("Deletion cancelled.")
            return
        service.delete_loan(loan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted loan {loan_id}")


def register_commands(cli):
    """Register loan commands with main CLI."""
    cli.add_command(loan_group, name="loan")
