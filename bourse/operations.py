"""
operations.py - Applying parsed batches to a registry

Maps one-character opcodes onto operator calls and runs whole batches:

    b  buy       amount is the cash budget
    s  sell      amount is the number of shares
    w  withdraw  amount is cash
    d  deposit   amount is cash

Processing is strict: the first failing command raises and the rest of the
batch is not run. Commands already applied stay applied.
"""

from __future__ import annotations
from typing import Iterable, List, Optional, Tuple

from .batch import (
    ListingRequest, OperatorRequest, OperationRequest,
    LocalListingRequest, LocalOperationRequest,
    split_sections, parse_listings, parse_operators, parse_operations,
    parse_local_listings, parse_local_operations,
)
from .core import Company, UsageError, _require_amount
from .exchange import Exchange
from .operator import Operator
from .registry import Registry


OPCODES = {
    'b': "buy",
    's': "sell",
    'w': "withdraw",
    'd': "deposit",
}


def perform(
    operator: Operator,
    opcode: str,
    exchange: Optional[Exchange],
    company: Optional[Company],
    amount: int,
) -> int:
    """
    Run one operation for an operator.

    Args:
        operator: Acting operator
        opcode: One of OPCODES
        exchange: Exchange to trade on (unused for w/d)
        company: Company to trade (unused for w/d)
        amount: Budget, share count or cash amount (> 0)

    Returns:
        Shares traded for b/s, the new balance for w/d

    Raises:
        UsageError: If opcode is blank or unknown, amount is not a positive
                    integer, or a buy names a company with no available position
    """
    if opcode is None or not opcode.strip():
        raise UsageError("Operation code must be given")
    _require_amount(amount, "Operation amount")
    if amount <= 0:
        raise UsageError(f"Operation amount must be positive, got {amount}")
    if operator is None:
        raise UsageError("Operator must not be None")

    if opcode == 'b':
        if exchange is None or company is None:
            raise UsageError("Buy needs an exchange and a company")
        position = exchange.get_position(company)
        if position is None:
            raise UsageError(f"{company.name} is not listed on {exchange.name}")
        return operator.buy(exchange, amount, position)
    if opcode == 's':
        return operator.sell(exchange, company, amount)
    if opcode == 'w':
        return operator.withdraw(amount)
    if opcode == 'd':
        return operator.deposit(amount)
    raise UsageError(f"Unknown operation code {opcode!r}, expected one of {sorted(OPCODES)}")


def apply_listings(
    registry: Registry,
    requests: Iterable[ListingRequest],
) -> Tuple[List[Company], List[Exchange]]:
    """
    List every requested block of shares.

    Returns:
        (companies, exchanges) touched by the requests, each sorted by name
    """
    companies = {}
    exchanges = {}
    for request in requests:
        company = registry.company(request.company)
        exchange = registry.exchange(request.exchange)
        company.list_on(exchange, request.quantity, request.price)
        companies[company.name] = company
        exchanges[exchange.name] = exchange
    return (
        [companies[name] for name in sorted(companies)],
        [exchanges[name] for name in sorted(exchanges)],
    )


def create_operators(registry: Registry, requests: Iterable[OperatorRequest]) -> List[Operator]:
    """Create the requested operators; returns them sorted by name."""
    operators = {}
    for request in requests:
        operator = registry.operator(request.name, request.balance)
        operators[operator.name] = operator
    return [operators[name] for name in sorted(operators)]


def apply_operations(registry: Registry, requests: Iterable[OperationRequest]) -> None:
    for request in requests:
        perform(
            registry.operator(request.operator),
            request.opcode,
            registry.exchange(request.exchange),
            registry.company(request.company),
            request.amount,
        )


def apply_local_listings(
    registry: Registry,
    exchange: Exchange,
    requests: Iterable[LocalListingRequest],
) -> None:
    for request in requests:
        registry.company(request.company).list_on(exchange, request.quantity, request.price)


def apply_local_operations(
    registry: Registry,
    exchange: Exchange,
    operator: Operator,
    requests: Iterable[LocalOperationRequest],
) -> None:
    for request in requests:
        perform(operator, request.opcode, exchange, registry.company(request.company), request.amount)


def run_session(registry: Registry, text: str) -> List[Exchange]:
    """
    Run a three-section batch: listings, operators, operations.

    Missing trailing sections are treated as empty.

    Returns:
        Exchanges named in the listings section, sorted by name
    """
    sections = split_sections(text) + [[], [], []]
    _, exchanges = apply_listings(registry, parse_listings(sections[0]))
    create_operators(registry, parse_operators(sections[1]))
    apply_operations(registry, parse_operations(sections[2]))
    return exchanges


def run_exchange_session(
    registry: Registry,
    exchange: Exchange,
    operator: Operator,
    text: str,
) -> Exchange:
    """
    Run a two-section batch against one exchange for one operator:
    local listings, then local operations.
    """
    sections = split_sections(text) + [[], []]
    apply_local_listings(registry, exchange, parse_local_listings(sections[0]))
    apply_local_operations(registry, exchange, operator, parse_local_operations(sections[1]))
    return exchange
