"""
conftest.py - Shared pytest fixtures for exchange tests

Provides common fixtures used across unit, conformance and functional tests:
- Registries and exchanges (empty, listed, policy-driven)
- Funded operators
"""

import pytest

from bourse import Registry, Position


# =============================================================================
# BASIC FIXTURES
# =============================================================================

@pytest.fixture
def registry():
    """Fresh quiet registry."""
    return Registry(verbose=False)


@pytest.fixture
def nyse(registry):
    """Exchange with no listings and no policy."""
    return registry.exchange("NYSE")


@pytest.fixture
def acme(registry):
    return registry.company("Acme")


@pytest.fixture
def acme_position(nyse, acme) -> Position:
    """Acme listed on NYSE: 10 shares at 5."""
    return nyse.list_company(acme, price=5, quantity=10)


@pytest.fixture
def bob(registry):
    """Operator with 1000 in cash."""
    return registry.operator("Bob", 1000)


@pytest.fixture
def alice(registry):
    """Operator with 500 in cash."""
    return registry.operator("Alice", 500)


# =============================================================================
# MARKET FIXTURES
# =============================================================================

@pytest.fixture
def market(registry):
    """
    Two exchanges, three companies:
        NYSE: Acme 100 @ 10, Globex 50 @ 20
        LSE:  Acme 30 @ 12, Umbrella 40 @ 7
    """
    nyse = registry.exchange("NYSE")
    lse = registry.exchange("LSE")
    acme = registry.company("Acme")
    globex = registry.company("Globex")
    umbrella = registry.company("Umbrella")
    acme.list_on(nyse, 100, 10)
    globex.list_on(nyse, 50, 20)
    acme.list_on(lse, 30, 12)
    umbrella.list_on(lse, 40, 7)
    return registry


@pytest.fixture
def threshold_exchange(registry):
    """Exchange "X" with threshold 3 and one company: Widget 10 @ 4."""
    exchange = registry.exchange("X")
    exchange.use_threshold(3)
    registry.company("Widget").list_on(exchange, quantity=10, price=4)
    return exchange
