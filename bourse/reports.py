"""
reports.py - Plain-text reports over exchange state

Every function returns a list of lines (no trailing newlines) built only from
the read-only, name-sorted accessors of companies and exchanges.
"""

from __future__ import annotations
from typing import Iterable, List

from .core import Company
from .exchange import Exchange


def listing_report(companies: Iterable[Company], exchanges: Iterable[Exchange]) -> List[str]:
    """
    Where each company is listed, then what each exchange lists.

    Example:
        Acme
        - NYSE
        NYSE
        - Acme
    """
    lines = []
    for company in companies:
        lines.append(company.name)
        lines.extend(f"- {exchange.name}" for exchange in company.exchanges)
    for exchange in exchanges:
        lines.append(exchange.name)
        lines.extend(f"- {company.name}" for company in exchange.companies)
    return lines


def quote_report(exchange: Exchange) -> List[str]:
    """One `company, price, quantity` line per available position."""
    return [position.describe() for position in exchange.positions]


def price_report(exchange: Exchange) -> List[str]:
    """One `company, price` line per available position."""
    return [f"{position.company_name}, {position.price}" for position in exchange.positions]


def holdings_report(exchanges: Iterable[Exchange]) -> List[str]:
    """
    Available shares and holders for every listed company of each exchange.

    Example:
        NYSE
        - Acme 8
        = Bob 2
    """
    lines = []
    for exchange in exchanges:
        lines.append(exchange.name)
        for company in exchange.companies:
            position = exchange.get_position(company)
            lines.append(f"- {company.name} {position.quantity}")
            for operator, held in exchange.holders(company):
                lines.append(f"= {operator.name} {held.quantity}")
    return lines
