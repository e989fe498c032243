"""
batch.py - Parsing of line-oriented command batches

A batch is plain text split into sections by a line holding only "--".
Each line of a section is a whitespace-separated record; the shape depends on
the section:

    listings     company exchange quantity price
    operators    name initial_balance
    operations   operator opcode exchange company amount

Single-exchange batches drop the exchange (and operator) columns:

    listings     company quantity price
    operations   opcode company amount

Parsing only produces typed records; nothing here touches an exchange.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List

from .core import SECTION_SEPARATOR, ParseError


@dataclass(frozen=True, slots=True)
class ListingRequest:
    company: str
    exchange: str
    quantity: int
    price: int


@dataclass(frozen=True, slots=True)
class OperatorRequest:
    name: str
    balance: int


@dataclass(frozen=True, slots=True)
class OperationRequest:
    """One operation line: who does what, where, on which company, how much."""
    operator: str
    opcode: str
    exchange: str
    company: str
    amount: int


@dataclass(frozen=True, slots=True)
class LocalListingRequest:
    company: str
    quantity: int
    price: int


@dataclass(frozen=True, slots=True)
class LocalOperationRequest:
    opcode: str
    company: str
    amount: int


def split_sections(text: str) -> List[List[str]]:
    """
    Split a batch into sections of non-blank, stripped lines.

    Args:
        text: Whole batch text

    Returns:
        List of sections, each a list of lines. Text without separators is a
        single section; an empty text yields one empty section.

    Example:
        split_sections("a X 1 2\\n--\\nbob 10\\n")
        # [['a X 1 2'], ['bob 10']]
    """
    sections: List[List[str]] = [[]]
    for raw in text.splitlines():
        line = raw.strip()
        if line == SECTION_SEPARATOR:
            sections.append([])
        elif line:
            sections[-1].append(line)
    return sections


def _tokens(line: str, expected: int, what: str) -> List[str]:
    tokens = line.split()
    if len(tokens) != expected:
        raise ParseError(
            f"{what} line needs {expected} fields, got {len(tokens)}: {line!r}"
        )
    return tokens


def _integer(token: str, field: str, line: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ParseError(f"{field} must be an integer, got {token!r} in {line!r}") from None


def parse_listing(line: str) -> ListingRequest:
    """Parse `company exchange quantity price`."""
    company, exchange, quantity, price = _tokens(line, 4, "Listing")
    return ListingRequest(
        company=company,
        exchange=exchange,
        quantity=_integer(quantity, "quantity", line),
        price=_integer(price, "price", line),
    )


def parse_operator(line: str) -> OperatorRequest:
    """Parse `name initial_balance`."""
    name, balance = _tokens(line, 2, "Operator")
    return OperatorRequest(name=name, balance=_integer(balance, "balance", line))


def parse_operation(line: str) -> OperationRequest:
    """Parse `operator opcode exchange company amount`."""
    operator, opcode, exchange, company, amount = _tokens(line, 5, "Operation")
    return OperationRequest(
        operator=operator,
        opcode=opcode,
        exchange=exchange,
        company=company,
        amount=_integer(amount, "amount", line),
    )


def parse_local_listing(line: str) -> LocalListingRequest:
    """Parse `company quantity price` (exchange given elsewhere)."""
    company, quantity, price = _tokens(line, 3, "Listing")
    return LocalListingRequest(
        company=company,
        quantity=_integer(quantity, "quantity", line),
        price=_integer(price, "price", line),
    )


def parse_local_operation(line: str) -> LocalOperationRequest:
    """Parse `opcode company amount` (operator and exchange given elsewhere)."""
    opcode, company, amount = _tokens(line, 3, "Operation")
    return LocalOperationRequest(
        opcode=opcode,
        company=company,
        amount=_integer(amount, "amount", line),
    )


def parse_listings(lines: Iterable[str]) -> List[ListingRequest]:
    return [parse_listing(line) for line in lines]


def parse_operators(lines: Iterable[str]) -> List[OperatorRequest]:
    return [parse_operator(line) for line in lines]


def parse_operations(lines: Iterable[str]) -> List[OperationRequest]:
    return [parse_operation(line) for line in lines]


def parse_local_listings(lines: Iterable[str]) -> List[LocalListingRequest]:
    return [parse_local_listing(line) for line in lines]


def parse_local_operations(lines: Iterable[str]) -> List[LocalOperationRequest]:
    return [parse_local_operation(line) for line in lines]
