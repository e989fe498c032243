"""
pricing.py - Pricing policies for exchange positions

A pricing policy recomputes the unit price of an available position after every
executed trade. Policies are immutable values; an exchange holds at most one.

Variants:
- None: prices never change (the default of a fresh exchange)
- ConstantDelta: add a fixed increment on buys, a fixed (non-positive) decrement on sells
- Threshold: double on buys larger than the threshold, halve on such sells
- InitialLetter: double/halve when the exchange or company name starts with the
  control letter or a vowel

Two dispatch functions, reprice_buy() and reprice_sell(), apply whichever variant
is active. Sells never push a price below MIN_PRICE; buys only add or multiply.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from .core import (
    Position,
    MIN_PRICE, VOWELS,
    ConfigurationError, UsageError, NegativeQuantityError,
    _require_int, _require_amount,
)


@dataclass(frozen=True, slots=True)
class ConstantDelta:
    """
    Move the price by a fixed amount on every trade.

    Attributes:
        increment: Added to the price on a buy (>= 0)
        decrement: Added to the price on a sell (<= 0), floored at MIN_PRICE
    """
    increment: int = 0
    decrement: int = 0

    def __post_init__(self):
        _require_int(self.increment, "increment")
        _require_int(self.decrement, "decrement")
        if self.increment < 0:
            raise ConfigurationError(f"increment must be non-negative, got {self.increment}")
        if self.decrement > 0:
            raise ConfigurationError(f"decrement must be non-positive, got {self.decrement}")


@dataclass(frozen=True, slots=True)
class Threshold:
    """Double the price on buys above the threshold, halve it on sells above it."""
    threshold: int

    def __post_init__(self):
        _require_int(self.threshold, "threshold")
        if self.threshold < 0:
            raise ConfigurationError(f"threshold must be non-negative, got {self.threshold}")


@dataclass(frozen=True, slots=True)
class InitialLetter:
    """
    Double/halve the price of positions whose exchange or company name starts
    with the control letter or with a vowel.

    The letter is matched case-insensitively and stored lower-cased.
    """
    letter: str

    def __post_init__(self):
        if not isinstance(self.letter, str):
            raise ConfigurationError(f"letter must be a string, got {self.letter!r}")
        if len(self.letter) != 1:
            raise ConfigurationError(f"letter must be exactly one character, got {self.letter!r}")
        if not self.letter.strip():
            raise ConfigurationError("letter must not be blank")
        object.__setattr__(self, 'letter', self.letter.lower())

    def is_eligible(self, position: Position) -> bool:
        exchange_initial = position.exchange_name[0].lower()
        company_initial = position.company_name[0].lower()
        for initial in (exchange_initial, company_initial):
            if initial == self.letter or initial in VOWELS:
                return True
        return False


PricingPolicy = Union[ConstantDelta, Threshold, InitialLetter]


def constant_delta(delta: int) -> ConstantDelta:
    """
    Build a ConstantDelta from a single signed amount.

    A positive delta raises prices on buys and leaves sells alone; a negative
    delta lowers prices on sells and leaves buys alone; zero does nothing.

    Example:
        constant_delta(3)    # ConstantDelta(increment=3, decrement=0)
        constant_delta(-2)   # ConstantDelta(increment=0, decrement=-2)
    """
    _require_int(delta, "delta")
    if delta > 0:
        return ConstantDelta(increment=delta)
    if delta < 0:
        return ConstantDelta(decrement=delta)
    return ConstantDelta()


def _check_operands(position: Optional[Position], quantity: int) -> None:
    if position is None:
        raise UsageError("Position must not be None")
    _require_amount(quantity, "Traded quantity")
    if quantity < 0:
        raise NegativeQuantityError(f"Traded quantity cannot be negative, got {quantity}")


def reprice_buy(policy: Optional[PricingPolicy], position: Position, quantity: int) -> int:
    """
    Compute the unit price of a position after a buy.

    Args:
        policy: Active policy, or None for fixed prices
        position: The available position that was traded
        quantity: Executed quantity of the buy

    Returns:
        The new unit price (never below the current one)

    Raises:
        UsageError: If position is None or quantity is not an integer
        NegativeQuantityError: If quantity is negative
    """
    _check_operands(position, quantity)
    price = position.price
    if policy is None:
        return price
    if isinstance(policy, ConstantDelta):
        return price + policy.increment
    if isinstance(policy, Threshold):
        return price * 2 if quantity > policy.threshold else price
    if isinstance(policy, InitialLetter):
        return price * 2 if policy.is_eligible(position) else price
    raise ConfigurationError(f"Unknown pricing policy: {policy!r}")


def reprice_sell(policy: Optional[PricingPolicy], position: Position, quantity: int) -> int:
    """
    Compute the unit price of a position after a sell.

    Args:
        policy: Active policy, or None for fixed prices
        position: The available position that was traded
        quantity: Executed quantity of the sell

    Returns:
        The new unit price, never below MIN_PRICE

    Raises:
        UsageError: If position is None or quantity is not an integer
        NegativeQuantityError: If quantity is negative
    """
    _check_operands(position, quantity)
    price = position.price
    if policy is None:
        return price
    if isinstance(policy, ConstantDelta):
        return max(price + policy.decrement, MIN_PRICE)
    if isinstance(policy, Threshold):
        return max(price // 2, MIN_PRICE) if quantity > policy.threshold else price
    if isinstance(policy, InitialLetter):
        return max(price // 2, MIN_PRICE) if policy.is_eligible(position) else price
    raise ConfigurationError(f"Unknown pricing policy: {policy!r}")


def describe_policy(policy: Optional[PricingPolicy]) -> str:
    """Short label for a policy, e.g. 'threshold(3)'."""
    if policy is None:
        return "none"
    if isinstance(policy, ConstantDelta):
        return f"constant(+{policy.increment}/{policy.decrement})"
    if isinstance(policy, Threshold):
        return f"threshold({policy.threshold})"
    if isinstance(policy, InitialLetter):
        return f"initial-letter({policy.letter!r})"
    return repr(policy)
