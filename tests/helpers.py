"""
helpers.py - Share accounting helpers for exchange tests
"""

from bourse import Company, Exchange, Operator


def total_shares(exchange: Exchange, company: Company) -> int:
    """Available plus held shares of a company on an exchange."""
    return exchange.share_count(company)['total']


def held_quantity(exchange: Exchange, operator: Operator, company: Company) -> int:
    """Shares an operator holds, 0 when there is no holding."""
    holding = exchange.get_holding(operator, company)
    return 0 if holding is None else holding.quantity
