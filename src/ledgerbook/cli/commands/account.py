"""Account management commands."""

import click
from ledgerbook.cli.account_resolution import resolve_account_or_exit
from ledgerbook.cli.error_handling import handle_domain_error
from ledgerbook.domain.account import AccountService
from ledgerbook.domain.entities import AccountType
from ledgerbook.domain.errors import DomainError
from ledgerbook.utils.amount_parser import parse_amount

ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    default="bank",
    help="Account type (default: bank)",
)
@click.option("--opening-balance", default="0", help="Opening balance (e.g., 1500.00)")
@click.option("--description", help="Optional description")
@click.pass_context
def create_account(ctx, name: str, account_type: str, opening_balance: str, description: str | None):
    """Create a new account.

    Examples:
        ledgerbook account create "HDFC Savings" --opening-balance 25000
        ledgerbook account create "Wallet" --type cash
    """
    service = AccountService(ctx.obj["db"])

    try:
        balance = parse_amount(opening_balance)
        account = service.create_account(
            name=name,
            account_type=account_type,
            opening_balance=balance,
            description=description,
        )
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{account.name}' (ID: {account.id})")
    click.echo(f"  Balance: {account.current_balance:,.2f}")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all accounts with their balances."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:20s} | {acc.account_type.value:15s} | "
            f"{acc.current_balance:>14,.2f}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show details for an account.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    click.echo(f"Account {acc.id}: {acc.name}")
    click.echo(f"  Type: {acc.account_type.value}")
    if acc.description:
        click.echo(f"  Description: {acc.description}")
    click.echo(f"  Opening balance: {acc.opening_balance:,.2f}")
    click.echo(f"  Current balance: {acc.current_balance:,.2f}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option("--description", help="New description (empty string to clear)")
@click.pass_context
def update_account(
    ctx, account: str, name: str | None, account_type: str | None, description: str | None
) -> None:
    """Update an account's name, type or description.

    Balances cannot be changed here; they follow the account's entries.

    Examples:
        ledgerbook account update "Wallet" --name "Cash Wallet"
        ledgerbook account update 2 --type credit_card
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        updated = service.update_account(
            account_id=account_id,
            name=name,
            account_type=account_type,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account '{updated.name}' (ID: {updated.id})")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if no entries reference it. Use
    'entry delete' to remove them first.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.require_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("reconcile")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def reconcile_account(ctx, account: str) -> None:
    """Check an account's balance against the sum of its entries."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    stored, derived = service.reconcile_account(account_id)
    click.echo(f"Stored balance: {stored:,.2f}")
    click.echo(f"Ledger balance: {derived:,.2f}")
    if stored != derived:
        click.echo("Balances differ!", err=True)
        ctx.exit(1)
    click.echo("Balances match.")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
