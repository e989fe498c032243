"""
registry.py - Identity tables for companies, exchanges and operators

A Registry hands out one shared instance per name. It replaces process-wide
singletons: whoever builds commands owns a Registry and passes it along, so
two registries never share identities.
"""

from __future__ import annotations
from typing import Dict, List

from .core import Company, ConfigurationError, validate_name, _require_int
from .exchange import Exchange
from .operator import Operator


class Registry:
    """
    Get-or-create lookup tables keyed by name.

    Example:
        registry = Registry(verbose=False)
        nyse = registry.exchange("NYSE")
        assert registry.exchange("NYSE") is nyse
        bob = registry.operator("Bob", 100)
        assert registry.operator("Bob", 5).balance == 100   # existing balance kept
    """

    def __init__(self, verbose: bool = False):
        """
        Args:
            verbose: Passed on to every Exchange this registry creates
        """
        self.verbose = verbose
        self._companies: Dict[str, Company] = {}
        self._exchanges: Dict[str, Exchange] = {}
        self._operators: Dict[str, Operator] = {}

    def company(self, name: str) -> Company:
        """Return the company called `name`, creating it on first use."""
        validate_name(name, "Company")
        if name not in self._companies:
            self._companies[name] = Company(name)
        return self._companies[name]

    def exchange(self, name: str) -> Exchange:
        """Return the exchange called `name`, creating it on first use."""
        validate_name(name, "Exchange")
        if name not in self._exchanges:
            self._exchanges[name] = Exchange(name, verbose=self.verbose)
        return self._exchanges[name]

    def operator(self, name: str, balance: int = 0) -> Operator:
        """
        Return the operator called `name`, creating it on first use.

        Args:
            name: Operator name (non-blank)
            balance: Initial balance for a new operator (>= 0); ignored when
                     the operator already exists

        Raises:
            ConfigurationError: If name is blank or balance is negative or not
                                an integer
        """
        validate_name(name, "Operator")
        _require_int(balance, "Initial balance")
        if balance < 0:
            raise ConfigurationError(f"Initial balance cannot be negative, got {balance}")
        if name not in self._operators:
            self._operators[name] = Operator(name, balance)
        return self._operators[name]

    def companies(self) -> List[Company]:
        return [self._companies[name] for name in sorted(self._companies)]

    def exchanges(self) -> List[Exchange]:
        return [self._exchanges[name] for name in sorted(self._exchanges)]

    def operators(self) -> List[Operator]:
        return [self._operators[name] for name in sorted(self._operators)]

    def __repr__(self) -> str:
        return (
            f"Registry({len(self._companies)} companies, {len(self._exchanges)} exchanges, "
            f"{len(self._operators)} operators)"
        )
