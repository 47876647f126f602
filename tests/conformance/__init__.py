"""
Conformance Test Suite

Normative behavior of the simulator ledger, checked with hypothesis:
1. test_conservation.py - Per-currency totals across operations
2. test_atomicity.py - Operations apply fully or not at all
3. test_determinism.py - Same inputs give the same state; reset is idempotent
"""
