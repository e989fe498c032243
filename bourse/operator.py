"""
operator.py - Operator cash accounts

An Operator turns trading intents into ledger calls and settles the cash:
    - buy: spend at most a budget; the share count is budget // unit price
    - sell: give back a number of shares
    - deposit / withdraw: plain cash movements

Cash always settles at the unit price read BEFORE the trade, for the quantity
the exchange actually executed. The balance can never go negative: every debit
is checked before anything is mutated.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Set

from .core import (
    Company, Position,
    ConfigurationError, UsageError, NegativeQuantityError, NoHoldingError,
    InsufficientFunds,
    validate_name, _require_int, _require_amount,
)

if TYPE_CHECKING:
    from .exchange import Exchange


class Operator:
    """
    A trader with a cash balance.

    Attributes:
        name: Operator identifier (non-blank)
        balance: Cash available, always >= 0

    Example:
        bob = Operator("Bob", balance=12)
        bob.buy(nyse, 12, nyse.get_position(acme))   # returns shares bought
        bob.balance                                  # 12 - shares * price
    """

    def __init__(self, name: str, balance: int = 0):
        self.name = validate_name(name, "Operator")
        _require_int(balance, "Initial balance")
        if balance < 0:
            raise ConfigurationError(f"Initial balance cannot be negative, got {balance}")
        self._balance = balance
        self._exchanges: Set[Exchange] = set()

    @property
    def balance(self) -> int:
        return self._balance

    @property
    def exchanges(self) -> List[Exchange]:
        """Exchanges this operator has bought on, sorted by name."""
        return sorted(self._exchanges, key=lambda e: e.name)

    # ========================================================================
    # CASH
    # ========================================================================

    def deposit(self, amount: int) -> int:
        """
        Add cash to the balance.

        Returns:
            The new balance

        Raises:
            UsageError: If amount is not an integer
            NegativeQuantityError: If amount is negative
        """
        _require_amount(amount, "Deposit")
        if amount < 0:
            raise NegativeQuantityError(f"Deposit cannot be negative, got {amount}")
        self._balance += amount
        return self._balance

    def withdraw(self, amount: int) -> int:
        """
        Remove cash from the balance.

        Returns:
            The new balance

        Raises:
            UsageError: If amount is not an integer
            NegativeQuantityError: If amount is negative
            InsufficientFunds: If amount exceeds the balance (balance unchanged)
        """
        _require_amount(amount, "Withdrawal")
        if amount < 0:
            raise NegativeQuantityError(f"Withdrawal cannot be negative, got {amount}")
        self._check_funds(amount)
        self._balance -= amount
        return self._balance

    def _check_funds(self, amount: int) -> None:
        if self._balance - amount < 0:
            raise InsufficientFunds(
                f"{self.name}: debit of {amount} exceeds balance {self._balance}"
            )

    # ========================================================================
    # TRADING
    # ========================================================================

    def buy(self, exchange: Exchange, budget: int, position: Position) -> int:
        """
        Spend at most `budget` on shares of an available position.

        The requested share count is budget // price at call time. The exchange
        may execute fewer shares when supply is short; the operator pays only for
        executed shares at the pre-trade price and keeps the rest of the budget.

        Args:
            exchange: Exchange the position is listed on
            budget: Cash the operator is willing to spend (>= 0)
            position: Available position to buy from

        Returns:
            Number of shares bought

        Raises:
            UsageError: If exchange or position is None, budget is not an
                        integer, or the budget buys no share at the
                        current price
            NegativeQuantityError: If budget is negative
            InsufficientFunds: If the purchase would overdraw the balance
                               (raised before the exchange is touched)
        """
        if exchange is None or position is None:
            raise UsageError("Exchange and position must not be None")
        _require_amount(budget, "Budget")
        if budget < 0:
            raise NegativeQuantityError(f"Budget cannot be negative, got {budget}")

        price = position.price
        affordable = budget // price
        # The exchange clamps to supply, so the cost is known up front.
        self._check_funds(min(affordable, position.quantity) * price)

        executed = exchange.request_buy(self, affordable, position)
        self._exchanges.add(exchange)
        self._balance -= executed * price
        return executed

    def sell(self, exchange: Exchange, company: Company, quantity: int) -> int:
        """
        Sell up to `quantity` shares of a company held on an exchange.

        Args:
            exchange: Exchange the shares are held on
            company: Company whose shares are sold
            quantity: Shares to sell (>= 0; the exchange rejects 0)

        Returns:
            Number of shares sold

        Raises:
            UsageError: If exchange or company is None or quantity is not an integer
            NegativeQuantityError: If quantity is negative
            NoHoldingError: If the operator holds no such shares
        """
        if exchange is None or company is None:
            raise UsageError("Exchange and company must not be None")
        _require_amount(quantity, "Sell quantity")
        if quantity < 0:
            raise NegativeQuantityError(f"Sell quantity cannot be negative, got {quantity}")

        available = exchange.get_position(company)
        if available is None:
            raise NoHoldingError(f"{company.name} is not listed on {exchange.name}")
        price = available.price
        executed = exchange.request_sell(self, quantity, company)
        self._balance += executed * price
        return executed

    # ========================================================================
    # VALUATION
    # ========================================================================

    def holdings(self, exchange: Optional[Exchange] = None) -> List[Position]:
        """Held positions across traded exchanges (or on one exchange)."""
        exchanges = [exchange] if exchange is not None else self.exchanges
        held: List[Position] = []
        for ex in exchanges:
            held.extend(ex.holdings_of(self))
        return held

    def holdings_value(self) -> int:
        """Sum of quantity x unit price over every held position."""
        return sum(position.value for position in self.holdings())

    def total_capital(self) -> int:
        """Cash balance plus the value of held shares."""
        return self._balance + self.holdings_value()

    def __repr__(self) -> str:
        return f"Operator({self.name}, balance={self._balance})"
