"""
OKpay CLI.

Usage:
    okpay validate ACCOUNT
    okpay rates [--currency CODE]
    okpay convert AMOUNT FROM_CODE TO_CODE
    okpay pay ACCOUNT AMOUNT [--currency CODE] [--dry-run]
    okpay link ACCOUNT [--amount AMOUNT] [--currency CODE]
    okpay memo
"""

import asyncio
import sys

import click

from okpay.application.services import PaymentQuery
from okpay.config.settings import load_config
from okpay.di import Container
from okpay.domain.exceptions import OkpayError
from okpay.domain.results import Valid
from okpay.domain.value_objects import SUPPORTED_CURRENCIES
from okpay.infrastructure.hive import build_keychain_deep_link, build_signer_url


def _run(container: Container, coro):
    """Run a coroutine, closing the container's HTTP sessions afterwards."""

    async def _wrapped():
        try:
            return await coro
        finally:
            await container.close()

    return asyncio.run(_wrapped())


def _fail(message: str) -> None:
    click.echo(message, err=True)
    sys.exit(1)


@click.group()
@click.option("--env", "-e", default=None, help="Config environment")
@click.option("--verbose", "-v", count=True, help="Increase log verbosity")
@click.pass_context
def cli(ctx, env, verbose):
    """OKpay - Hive HBD payment requests."""
    if ctx.obj is None:
        ctx.obj = Container(load_config(env=env))
    if verbose:
        ctx.obj.reporter.set_verbose(ctx.obj.settings.verbose + verbose)


@cli.command()
@click.argument("account")
@click.pass_obj
def validate(container: Container, account):
    """Check that ACCOUNT exists on Hive."""
    use_case = container.get_validate_account_use_case()
    result = _run(container, use_case.execute(account))

    if not isinstance(result, Valid):
        _fail(result.status_text or "No account given")

    click.echo(f"{result.account.name}: {result.status_text}")
    click.echo(
        f"Avatar: {result.account.avatar_url(container.settings.avatar_url_template)}"
    )


@cli.command()
@click.option("--currency", "-c", default=None, help="Show only this currency")
@click.pass_obj
def rates(container: Container, currency):
    """Show today's exchange rates for supported currencies."""
    snapshot = _run(container, container.converter.fetch_snapshot())
    if snapshot is None:
        _fail("Exchange rates unavailable")

    codes = [currency.upper()] if currency else list(SUPPORTED_CURRENCIES)
    click.echo(f"Rates per 1 USD ({snapshot.fetched_on.isoformat()}):")
    for code in codes:
        rate = snapshot.rate_for(code)
        shown = f"{rate:.4f}" if rate is not None else "n/a"
        click.echo(f"  {code:<4} {shown}")


@cli.command()
@click.argument("amount", type=float)
@click.argument("from_code")
@click.argument("to_code")
@click.pass_obj
def convert(container: Container, amount, from_code, to_code):
    """Convert AMOUNT from FROM_CODE to TO_CODE."""
    for code in (from_code, to_code):
        if not container.converter.validate_currency(code):
            _fail(f"Unsupported currency: {code}")

    snapshot = _run(container, container.converter.fetch_snapshot())
    if snapshot is None:
        _fail("Exchange rates unavailable")

    result = container.converter.convert(amount, from_code, to_code, snapshot)
    if result is None:
        _fail(f"No rate for {from_code.upper()}/{to_code.upper()}")

    click.echo(f"{result:.2f} {to_code.upper()}")


async def _pay(container: Container, account, amount, currency, dry_run):
    session = container.create_session()
    await session.start(PaymentQuery(to=account, amount=amount, currency=currency))

    if currency and session.currency != currency.upper():
        return 1, f"Local currency {currency.upper()} unavailable"

    if not isinstance(session.validation, Valid):
        status = session.validation.status_text if session.validation else ""
        return 1, status or "No account given"

    if session.is_local_mode:
        click.echo(
            f"{session.local_amount:.2f} {session.currency} = "
            f"{session.settlement_amount:.2f} USD"
        )

    if dry_run:
        directive = container.get_build_directive_use_case().execute(
            session.validation, session.settlement_amount, session.memo
        )
        click.echo(f"Transfer: {directive.amount_with_unit} to {directive.to}")
        click.echo(f"Memo: {directive.memo}")
        click.echo(
            "Deep link: "
            + build_keychain_deep_link(directive, container.settings.keychain_scheme)
        )
        click.echo(
            "Fallback: "
            + build_signer_url(directive, container.settings.signer_transfer_url)
        )
        return 0, None

    outcome = await session.submit()
    outcome.raise_for_failure()
    click.echo(f"Delivered via {outcome.channel} (memo {session.memo})")
    return 0, None


@cli.command()
@click.argument("account")
@click.argument("amount", type=float)
@click.option("--currency", "-c", default=None, help="Amount is in this currency")
@click.option("--dry-run", is_flag=True, help="Print the transfer without sending")
@click.pass_obj
def pay(container: Container, account, amount, currency, dry_run):
    """Send AMOUNT (HBD, or --currency) to ACCOUNT."""
    try:
        code, message = _run(
            container, _pay(container, account, amount, currency, dry_run)
        )
    except OkpayError as e:
        _fail(str(e))

    if code:
        _fail(message)


@cli.command()
@click.argument("account")
@click.option("--amount", "-a", default=None, help="Prefilled amount")
@click.option("--currency", "-c", default=None, help="Prefilled currency")
@click.pass_obj
def link(container: Container, account, amount, currency):
    """Print the payment link for a scannable code."""
    try:
        url = container.get_payment_link_use_case().execute(account, amount, currency)
    except OkpayError as e:
        _fail(str(e))

    click.echo(url)


@cli.command()
@click.pass_obj
def memo(container: Container):
    """Print the memo for a new payment session."""
    click.echo(container.memo_provider.get_or_create().value)


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
