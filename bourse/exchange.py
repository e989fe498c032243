"""
exchange.py - Stateful exchange ledger

The Exchange class owns the authoritative state of one exchange:
    - which companies are listed and how many of their shares are still for sale
    - how many shares each operator holds
    - the unit price of every available position and the active pricing policy

It is the only module that mutates positions, so every share-count invariant
is enforced here:
    - quantities never go negative and prices never drop below MIN_PRICE
    - at most one held position per (operator, company, exchange)
    - a held position disappears exactly when a sell empties it
    - all preconditions are checked before the first write
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple

from .core import (
    Company, Position, PositionKind, Trade, TradeSide,
    MIN_PRICE,
    ConfigurationError, UsageError, NegativeQuantityError, NoHoldingError,
    validate_name, _require_int, _require_amount,
)
from .operator import Operator
from .pricing import (
    PricingPolicy, ConstantDelta, Threshold, InitialLetter,
    constant_delta, reprice_buy, reprice_sell, describe_policy,
)


class Exchange:
    """
    Ledger of one exchange: listings, available supply, holdings and prices.

    Available positions are kept in listing order; listing the same company
    twice creates two independent records, and lookups by company return the
    first one. Held positions are indexed by operator and company.

    Thread Safety:
        Not thread-safe. Buy and sell are read-modify-write sequences on shared
        positions; concurrent callers must serialize per exchange.

    Example:
        nyse = Exchange("NYSE", verbose=False)
        acme = Company("Acme")
        position = nyse.list_company(acme, price=5, quantity=10)

        bob = Operator("Bob", balance=12)
        bob.buy(nyse, 12, position)      # 2 shares at 5
        nyse.get_holding(bob, acme)      # Position(Acme@NYSE 2x5 held)
    """

    def __init__(self, name: str, verbose: bool = True):
        """
        Create an exchange.

        Args:
            name: Exchange identifier (non-blank)
            verbose: Print a trace line for listings, trades and policy changes

        Raises:
            ConfigurationError: If name is blank
        """
        self.name = validate_name(name, "Exchange")
        self.verbose = verbose
        self.policy: Optional[PricingPolicy] = None
        self.trade_log: List[Trade] = []
        self._companies: Dict[str, Company] = {}
        self._available: List[Position] = []
        self._holdings: Dict[Operator, Dict[Company, Position]] = {}

    # ========================================================================
    # READ-ONLY ACCESSORS
    # ========================================================================

    @property
    def companies(self) -> List[Company]:
        """Listed companies, sorted by name."""
        return [self._companies[name] for name in sorted(self._companies)]

    @property
    def positions(self) -> List[Position]:
        """Available positions, sorted by company name (listing order among equals)."""
        return sorted(self._available, key=lambda p: p.company_name)

    @property
    def operators(self) -> List[Operator]:
        """Operators currently holding shares on this exchange, sorted by name."""
        return sorted(self._holdings, key=lambda op: op.name)

    def is_listed(self, company: Company) -> bool:
        return company is not None and self._companies.get(company.name) is company

    def get_position(self, company: Company) -> Optional[Position]:
        """
        Find the available position for a company on this exchange.

        Args:
            company: Company to look up

        Returns:
            The first available position listed for the company, or None

        Raises:
            UsageError: If company is None
        """
        if company is None:
            raise UsageError("Company must not be None")
        for position in self._available:
            if position.company is company:
                return position
        return None

    def get_holding(self, operator: Operator, company: Company) -> Optional[Position]:
        """
        Find the position an operator holds in a company on this exchange.

        Returns None when the operator holds no such shares.

        Raises:
            UsageError: If operator or company is None
        """
        if operator is None or company is None:
            raise UsageError("Operator and company must not be None")
        return self._holdings.get(operator, {}).get(company)

    def holdings_of(self, operator: Operator) -> List[Position]:
        """Positions held by an operator on this exchange, sorted by company name."""
        held = self._holdings.get(operator, {})
        return sorted(held.values(), key=lambda p: p.company_name)

    def holders(self, company: Company) -> List[Tuple[Operator, Position]]:
        """(operator, held position) pairs for a company, sorted by operator name."""
        pairs = []
        for operator in self.operators:
            position = self._holdings[operator].get(company)
            if position is not None:
                pairs.append((operator, position))
        return pairs

    # ========================================================================
    # CONSERVATION
    # ========================================================================

    def share_count(self, company: Company) -> Dict[str, int]:
        """
        Count a company's shares on this exchange.

        Returns:
            Dict with 'available' (sum over available records), 'held' (sum over
            all operators) and 'total'
        """
        available = sum(p.quantity for p in self._available if p.company is company)
        held = sum(
            held_positions[company].quantity
            for held_positions in self._holdings.values()
            if company in held_positions
        )
        return {'available': available, 'held': held, 'total': available + held}

    def verify_conservation(self, expected: Optional[Dict[str, int]] = None) -> Dict[str, Any]:
        """
        Check that each listed company's total share count matches expectations.

        Buys and sells move shares between available supply and holdings
        without changing the total; only listings (and over-requested sells)
        change it.

        Args:
            expected: Optional dict mapping company names to expected totals.

        Returns:
            Dict with keys:
            - 'valid': bool - True if every expected total matches
            - 'totals': Dict[str, int] - current total per company name
            - 'discrepancies': List[Dict] - company, expected, actual, difference

        Example:
            before = exchange.verify_conservation()['totals']
            bob.buy(exchange, 100, position)
            assert exchange.verify_conservation(before)['valid']
        """
        totals = {company.name: self.share_count(company)['total'] for company in self.companies}
        discrepancies = []

        if expected:
            for name, want in expected.items():
                actual = totals.get(name, 0)
                if actual != want:
                    discrepancies.append({
                        'company': name,
                        'expected': want,
                        'actual': actual,
                        'difference': actual - want,
                    })

        return {
            'valid': len(discrepancies) == 0,
            'totals': totals,
            'discrepancies': discrepancies,
        }

    # ========================================================================
    # PRICING POLICY
    # ========================================================================

    def set_policy(self, policy: Optional[PricingPolicy]) -> None:
        """Replace the active pricing policy (None switches repricing off)."""
        self.policy = policy
        if self.verbose:
            print(f"[{self.name}] policy: {describe_policy(policy)}")

    def clear_policy(self) -> None:
        self.set_policy(None)

    def use_constant_delta(self, delta: int) -> None:
        self.set_policy(constant_delta(delta))

    def use_constant_range(self, increment: int, decrement: int) -> None:
        self.set_policy(ConstantDelta(increment=increment, decrement=decrement))

    def use_threshold(self, threshold: int) -> None:
        self.set_policy(Threshold(threshold))

    def use_initial_letter(self, letter: str) -> None:
        self.set_policy(InitialLetter(letter))

    # ========================================================================
    # LISTING (Mutating)
    # ========================================================================

    def list_company(self, company: Company, price: int, quantity: int) -> Position:
        """
        List a block of a company's shares for sale on this exchange.

        A repeated listing of the same company adds a second, independent
        available position; it does not merge with or replace the first.

        Args:
            company: Company being listed
            price: Unit price (>= 1)
            quantity: Number of shares offered (>= 1)

        Returns:
            The newly created available position

        Raises:
            UsageError: If company is None
            ConfigurationError: If price or quantity is below 1 or not an integer
        """
        if company is None:
            raise UsageError("Company must not be None")
        _require_int(price, "Price")
        _require_int(quantity, "Quantity")
        if price < MIN_PRICE or quantity < 1:
            raise ConfigurationError(
                f"Listing {company.name} on {self.name}: price and quantity must be at least 1, "
                f"got price={price} quantity={quantity}"
            )

        position = Position(company, self, price, quantity, PositionKind.AVAILABLE)
        self._companies.setdefault(company.name, company)
        company._add_exchange(self)
        self._available.append(position)

        if self.verbose:
            print(f"[{self.name}] listed {company.name}: {quantity} @ {price}")
        return position

    # ========================================================================
    # TRADING (Mutating)
    # ========================================================================

    @staticmethod
    def _check_trade_operands(operator, quantity: int, target, target_name: str) -> None:
        # Missing operands, non-integer and zero quantities are checked before the sign.
        if operator is None or target is None:
            raise UsageError(f"Operator and {target_name} must not be None")
        _require_amount(quantity, "Trade quantity")
        if quantity == 0:
            raise UsageError("Trade quantity must not be zero")
        if quantity < 0:
            raise NegativeQuantityError(f"Trade quantity cannot be negative, got {quantity}")

    def request_buy(self, operator: Operator, quantity: int, position: Position) -> int:
        """
        Move up to `quantity` shares from an available position to an operator.

        Execution:
        1. If the position is sold out, return 0 without touching anything
        2. executed = min(quantity, available); decrement the available position
        3. Add executed shares to the operator's holding, creating it at the
           position's pre-trade price if the operator held none
        4. Reprice the available position with the executed quantity

        Cash settlement is the operator's job (see Operator.buy).

        Args:
            operator: Buying operator
            quantity: Requested number of shares (> 0)
            position: Available position on this exchange to buy from

        Returns:
            Number of shares actually bought

        Raises:
            UsageError: If operator or position is None, quantity is 0 or not an
                        integer, or the position is not an available position of this exchange
            NegativeQuantityError: If quantity is negative
        """
        self._check_trade_operands(operator, quantity, position, "position")
        if position.exchange is not self or position.kind is not PositionKind.AVAILABLE:
            raise UsageError(f"{position!r} is not available supply on {self.name}")

        if position.quantity == 0:
            return 0

        executed = min(quantity, position.quantity)
        price_before = position.price
        new_price = reprice_buy(self.policy, position, executed)

        position._set_quantity(position.quantity - executed)
        holding = self.get_holding(operator, position.company)
        if holding is not None:
            holding._set_quantity(holding.quantity + executed)
        else:
            holding = Position(position.company, self, price_before, executed, PositionKind.HELD)
            self._holdings.setdefault(operator, {})[position.company] = holding
        position._set_price(new_price)

        self._record(TradeSide.BUY, operator, position.company, quantity, executed,
                     price_before, new_price)
        return executed

    def request_sell(self, operator: Operator, quantity: int, company: Company) -> int:
        """
        Move up to `quantity` of an operator's shares back to available supply.

        Execution:
        1. The operator must hold the company on this exchange (checked first)
        2. executed = min(quantity, held); the holding is removed when emptied,
           decremented otherwise
        3. Reprice the available position with the executed quantity
        4. Add the REQUESTED quantity to the available position

        Step 4 means a sell larger than the holding still adds the full request
        to available supply.

        Args:
            operator: Selling operator
            quantity: Requested number of shares (> 0)
            company: Company whose shares are sold

        Returns:
            Number of shares actually sold

        Raises:
            UsageError: If operator or company is None or quantity is 0 or not an
                        integer
            NegativeQuantityError: If quantity is negative
            NoHoldingError: If the operator holds no shares of company here
        """
        self._check_trade_operands(operator, quantity, company, "company")
        holding = self.get_holding(operator, company)
        if holding is None:
            raise NoHoldingError(f"{operator.name} holds no {company.name} on {self.name}")
        available = self.get_position(company)
        if available is None:
            raise NoHoldingError(f"{company.name} has no available position on {self.name}")

        executed = min(quantity, holding.quantity)
        price_before = available.price
        new_price = reprice_sell(self.policy, available, executed)

        if executed == holding.quantity:
            held = self._holdings[operator]
            del held[company]
            if not held:
                del self._holdings[operator]
            holding._set_quantity(0)
        else:
            holding._set_quantity(holding.quantity - executed)
        available._set_price(new_price)
        available._set_quantity(available.quantity + quantity)

        self._record(TradeSide.SELL, operator, company, quantity, executed,
                     price_before, new_price)
        return executed

    def _record(
        self,
        side: TradeSide,
        operator: Operator,
        company: Company,
        requested: int,
        executed: int,
        price_before: int,
        price_after: int,
    ) -> Trade:
        trade = Trade(
            side=side,
            exchange=self.name,
            operator=operator.name,
            company=company.name,
            requested=requested,
            executed=executed,
            price_before=price_before,
            price_after=price_after,
            sequence=len(self.trade_log),
        )
        self.trade_log.append(trade)
        if self.verbose:
            print(f"[{self.name}] {trade.side.value} {trade.operator} {trade.company} "
                  f"{trade.executed}/{trade.requested} price {price_before} -> {price_after}")
        return trade

    def __repr__(self) -> str:
        return (
            f"Exchange({self.name}, {len(self._companies)} companies, "
            f"policy={describe_policy(self.policy)})"
        )
