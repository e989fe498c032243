"""
bourse - Toy Securities Exchange Ledger

Companies list blocks of shares on exchanges; operators buy them with a cash
budget and sell them back; each exchange may reprice positions after every
trade through a pricing policy.

Usage:
    from bourse import Registry

    registry = Registry(verbose=False)
    nyse = registry.exchange("NYSE")
    acme = registry.company("Acme")
    position = acme.list_on(nyse, quantity=10, price=5)

    nyse.use_threshold(3)
    bob = registry.operator("Bob", 12)
    bob.buy(nyse, 12, position)        # 2 shares, balance 2
    bob.sell(nyse, acme, 1)            # 1 share back at the current price
"""

# Core types
from .core import (
    Company,
    Position,
    PositionKind,
    Trade,
    TradeSide,
    BourseError,
    ConfigurationError,
    UsageError,
    NegativeQuantityError,
    NoHoldingError,
    InvariantViolation,
    InsufficientFunds,
    ParseError,
    MIN_PRICE,
    VOWELS,
    SECTION_SEPARATOR,
)

# Pricing policies
from .pricing import (
    PricingPolicy,
    ConstantDelta,
    Threshold,
    InitialLetter,
    constant_delta,
    reprice_buy,
    reprice_sell,
    describe_policy,
)

# Ledger and accounts
from .exchange import Exchange
from .operator import Operator
from .registry import Registry

# Batches
from .batch import (
    ListingRequest,
    OperatorRequest,
    OperationRequest,
    LocalListingRequest,
    LocalOperationRequest,
    split_sections,
    parse_listing,
    parse_operator,
    parse_operation,
    parse_local_listing,
    parse_local_operation,
    parse_listings,
    parse_operators,
    parse_operations,
    parse_local_listings,
    parse_local_operations,
)
from .operations import (
    OPCODES,
    perform,
    apply_listings,
    create_operators,
    apply_operations,
    apply_local_listings,
    apply_local_operations,
    run_session,
    run_exchange_session,
)

# Reports
from .reports import (
    listing_report,
    quote_report,
    price_report,
    holdings_report,
)

__all__ = [
    # Core
    'Company', 'Position', 'PositionKind', 'Trade', 'TradeSide',
    'BourseError', 'ConfigurationError', 'UsageError', 'NegativeQuantityError',
    'NoHoldingError', 'InvariantViolation', 'InsufficientFunds', 'ParseError',
    'MIN_PRICE', 'VOWELS', 'SECTION_SEPARATOR',
    # Pricing
    'PricingPolicy', 'ConstantDelta', 'Threshold', 'InitialLetter',
    'constant_delta', 'reprice_buy', 'reprice_sell', 'describe_policy',
    # Ledger
    'Exchange', 'Operator', 'Registry',
    # Batches
    'ListingRequest', 'OperatorRequest', 'OperationRequest',
    'LocalListingRequest', 'LocalOperationRequest',
    'split_sections', 'parse_listing', 'parse_operator', 'parse_operation',
    'parse_local_listing', 'parse_local_operation',
    'parse_listings', 'parse_operators', 'parse_operations',
    'parse_local_listings', 'parse_local_operations',
    'OPCODES', 'perform', 'apply_listings', 'create_operators', 'apply_operations',
    'apply_local_listings', 'apply_local_operations',
    'run_session', 'run_exchange_session',
    # Reports
    'listing_report', 'quote_report', 'price_report', 'holdings_report',
]

__version__ = '1.0.0'
