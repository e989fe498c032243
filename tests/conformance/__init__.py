"""
Conformance Test Suite

Property-based tests for the exchange ledger's invariants:
1. test_share_conservation.py - Buys and sells move shares without creating them
2. test_price_floor.py - Prices never drop below MIN_PRICE, quantities never below 0
3. test_cash.py - Balances never go negative; cash settles at pre-trade prices
4. test_determinism.py - Replaying a scenario gives the same market

These tests use hypothesis for property-based testing.
"""
