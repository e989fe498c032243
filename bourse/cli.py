"""
Command-line clients for the exchange ledger.

Every command reads a batch from standard input and prints a report.

Usage:
    bourse listings < listings.txt
    bourse quote NYSE < quotes.txt
    bourse session < session.txt
    bourse threshold NYSE 3 bob 1000 < orders.txt
    bourse --verbose session < session.txt
"""

import click

from .core import BourseError
from .operations import apply_listings, run_session, run_exchange_session
from .batch import split_sections, parse_listings, parse_local_listings
from .registry import Registry
from .reports import listing_report, quote_report, holdings_report, price_report


def _echo_lines(lines) -> None:
    for line in lines:
        click.echo(line)


@click.group()
@click.option("--verbose/--quiet", default=False, help="Trace listings and trades")
@click.pass_context
def cli(ctx: click.Context, verbose: bool):
    """Toy securities exchange: list shares, trade them, print reports."""
    ctx.obj = Registry(verbose=verbose)


@cli.command("listings")
@click.pass_obj
def listings(registry: Registry):
    """List `company exchange quantity price` lines; show who is listed where."""
    text = click.get_text_stream("stdin").read()
    try:
        companies, exchanges = apply_listings(registry, parse_listings(split_sections(text)[0]))
    except BourseError as e:
        raise click.ClickException(str(e))
    _echo_lines(listing_report(companies, exchanges))


@cli.command("quote")
@click.argument("exchange_name")
@click.pass_obj
def quote(registry: Registry, exchange_name: str):
    """List `company quantity price` lines on EXCHANGE_NAME; show its positions."""
    text = click.get_text_stream("stdin").read()
    try:
        exchange = registry.exchange(exchange_name)
        for request in parse_local_listings(split_sections(text)[0]):
            registry.company(request.company).list_on(exchange, request.quantity, request.price)
    except BourseError as e:
        raise click.ClickException(str(e))
    _echo_lines(quote_report(exchange))


@cli.command("session")
@click.pass_obj
def session(registry: Registry):
    """Run listings, operators and operations separated by `--` lines."""
    text = click.get_text_stream("stdin").read()
    try:
        exchanges = run_session(registry, text)
    except BourseError as e:
        raise click.ClickException(str(e))
    _echo_lines(holdings_report(exchanges))


@cli.command("threshold")
@click.argument("exchange_name")
@click.argument("threshold", type=int)
@click.argument("operator_name")
@click.argument("budget", type=int)
@click.pass_obj
def threshold(registry: Registry, exchange_name: str, threshold: int, operator_name: str, budget: int):
    """Trade on one exchange under a threshold pricing policy; show final prices."""
    text = click.get_text_stream("stdin").read()
    try:
        exchange = registry.exchange(exchange_name)
        exchange.use_threshold(threshold)
        operator = registry.operator(operator_name, budget)
        run_exchange_session(registry, exchange, operator, text)
    except BourseError as e:
        raise click.ClickException(str(e))
    _echo_lines(price_report(exchange))


def main():
    cli()


if __name__ == "__main__":
    main()
