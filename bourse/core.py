"""
Core types for the exchange ledger.

This module provides the foundational pieces shared by every other module:
1. Constants: price floor, vowel set, batch section separator
2. Exceptions: BourseError and the configuration/usage/state/invariant taxonomy
3. Identities: Company
4. Records: Position (available supply or operator holding) and Trade

Exchange and Operator live in their own modules; they are referenced here only
through type annotations.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, List, Set

if TYPE_CHECKING:
    from .exchange import Exchange
    from .operator import Operator


# ============================================================================
# CONSTANTS
# ============================================================================

# Lowest unit price a position can ever carry.
MIN_PRICE = 1

# Initial letters that make a position eligible under the initial-letter policy.
VOWELS = "aeiou"

# A line holding only this token separates the sections of a command batch.
SECTION_SEPARATOR = "--"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class BourseError(Exception):
    """Base exception for all exchange-related errors."""
    pass


class ConfigurationError(BourseError, ValueError):
    """Raised for invalid construction parameters (names, prices, policy settings)."""
    pass


class UsageError(BourseError):
    """Raised when a required reference is missing or a trade quantity is zero."""
    pass


class NegativeQuantityError(UsageError, ValueError):
    """Raised when a trade quantity or cash amount is negative."""
    pass


class NoHoldingError(BourseError):
    """Raised when an operator sells shares of a position they do not hold."""
    pass


class InvariantViolation(BourseError):
    """
    Raised when a balance or price would go negative.

    Trading never authorizes such a move on well-formed input, so this signals
    a defect upstream rather than a user mistake.
    """
    pass


class InsufficientFunds(InvariantViolation):
    """Raised when a debit would leave an operator with a negative balance."""
    pass


class ParseError(BourseError, ValueError):
    """Raised when a command line does not have the expected shape."""
    pass


# ============================================================================
# HELPERS
# ============================================================================

def validate_name(name: str, what: str) -> str:
    """
    Check that an identity name is a non-blank string.

    Args:
        name: Candidate name
        what: Kind of identity, used in the error message

    Returns:
        The name, unchanged

    Raises:
        ConfigurationError: If name is None, not a string, or blank
    """
    if name is None:
        raise ConfigurationError(f"{what} name must not be None")
    if not isinstance(name, str):
        raise ConfigurationError(f"{what} name must be a string, got {type(name).__name__}")
    if not name.strip():
        raise ConfigurationError(f"{what} name must not be empty")
    return name


def _require_int(value: int, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{what} must be an integer, got {value!r}")
    return value


def _require_amount(value: int, what: str) -> int:
    # Trade and cash amounts: a wrong type is a usage error, not configuration.
    if isinstance(value, bool) or not isinstance(value, int):
        raise UsageError(f"{what} must be an integer, got {value!r}")
    return value


# ============================================================================
# COMPANY
# ============================================================================

class Company:
    """
    A listed company, identified by name.

    Instances are handed out by a Registry so that one name maps to one object;
    equality is identity. The set of exchanges the company is listed on grows
    every time it is listed somewhere new.

    Example:
        acme = registry.company("Acme")
        acme.list_on(registry.exchange("NYSE"), quantity=10, price=5)
        [e.name for e in acme.exchanges]   # ['NYSE']
    """

    def __init__(self, name: str):
        self.name = validate_name(name, "Company")
        self._exchanges: Set[Exchange] = set()

    @property
    def exchanges(self) -> List[Exchange]:
        """Exchanges this company is listed on, sorted by name."""
        return sorted(self._exchanges, key=lambda e: e.name)

    def is_listed_on(self, exchange: Exchange) -> bool:
        return exchange in self._exchanges

    def list_on(self, exchange: Exchange, quantity: int, price: int) -> Position:
        """
        List a block of shares on an exchange.

        Args:
            exchange: Exchange to list on
            quantity: Number of shares offered (>= 1)
            price: Unit price (>= 1)

        Returns:
            The available position created on the exchange

        Raises:
            UsageError: If exchange is None
            ConfigurationError: If quantity or price is below 1
        """
        if exchange is None:
            raise UsageError("Exchange must not be None")
        return exchange.list_company(self, price, quantity)

    def _add_exchange(self, exchange: Exchange) -> None:
        self._exchanges.add(exchange)

    def __repr__(self) -> str:
        return f"Company({self.name})"


# ============================================================================
# POSITIONS
# ============================================================================

class PositionKind(Enum):
    """
    Who a position belongs to.

    AVAILABLE: unsold supply owned by the exchange.
    HELD: shares owned by an operator.
    """
    AVAILABLE = "available"
    HELD = "held"


class Position:
    """
    A quantity of one company's shares on one exchange at a unit price.

    The same record shape serves both as the exchange's available supply and as
    an operator's holding; `kind` tells them apart. Company, exchange and kind
    are fixed at construction. Price and quantity change only through the
    owning Exchange.

    Attributes:
        company: The company whose shares these are
        exchange: The exchange the shares are listed on
        kind: AVAILABLE or HELD
        price: Unit price, always >= MIN_PRICE
        quantity: Share count, always >= 0
    """

    __slots__ = ("_company", "_exchange", "_kind", "_price", "_quantity")

    def __init__(
        self,
        company: Company,
        exchange: Exchange,
        price: int,
        quantity: int,
        kind: PositionKind = PositionKind.AVAILABLE,
    ):
        if company is None or exchange is None:
            raise UsageError("Position needs both a company and an exchange")
        _require_int(price, "Price")
        _require_int(quantity, "Quantity")
        if price < MIN_PRICE or quantity < 1:
            raise ConfigurationError(
                f"Price and quantity must be at least 1, got price={price} quantity={quantity}"
            )
        self._company = company
        self._exchange = exchange
        self._kind = kind
        self._price = price
        self._quantity = quantity

    @property
    def company(self) -> Company:
        return self._company

    @property
    def exchange(self) -> Exchange:
        return self._exchange

    @property
    def kind(self) -> PositionKind:
        return self._kind

    @property
    def price(self) -> int:
        return self._price

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def company_name(self) -> str:
        return self._company.name

    @property
    def exchange_name(self) -> str:
        return self._exchange.name

    @property
    def value(self) -> int:
        """Quantity times unit price."""
        return self._quantity * self._price

    def _set_price(self, price: int) -> None:
        if price < MIN_PRICE:
            raise InvariantViolation(
                f"Price of {self.company_name}@{self.exchange_name} would drop to {price}"
            )
        self._price = price

    def _set_quantity(self, quantity: int) -> None:
        if quantity < 0:
            raise InvariantViolation(
                f"Quantity of {self.company_name}@{self.exchange_name} would drop to {quantity}"
            )
        self._quantity = quantity

    def describe(self) -> str:
        """One-line summary: company, price, quantity."""
        return f"{self.company_name}, {self._price}, {self._quantity}"

    def __repr__(self) -> str:
        return (
            f"Position({self.company_name}@{self.exchange_name} "
            f"{self._quantity}x{self._price} {self._kind.value})"
        )


# ============================================================================
# TRADE RECORD
# ============================================================================

class TradeSide(Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass(frozen=True, slots=True)
class Trade:
    """
    Immutable record of an executed buy or sell.

    Attributes:
        side: BUY or SELL
        exchange: Exchange name
        operator: Operator name
        company: Company name
        requested: Quantity the operator asked for
        executed: Quantity actually moved after clamping
        price_before: Unit price of the available position before repricing
        price_after: Unit price of the available position after repricing
        sequence: Position of the trade in its exchange's log
    """
    side: TradeSide
    exchange: str
    operator: str
    company: str
    requested: int
    executed: int
    price_before: int
    price_after: int
    sequence: int

    @property
    def notional(self) -> int:
        """Cash that changes hands for this trade (settled at the pre-trade price)."""
        return self.executed * self.price_before

    def __repr__(self) -> str:
        return (
            f"Trade(#{self.sequence} {self.side.value} {self.operator} "
            f"{self.executed}/{self.requested} {self.company}@{self.exchange} "
            f"{self.price_before}->{self.price_after})"
        )
