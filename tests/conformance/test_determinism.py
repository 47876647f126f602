"""
Determinism Conformance Tests

INVARIANT: Given the same starting state, clock and operations, two ledgers
end in the same state with the same history.

Also covers reset():
    reset(); reset()  ≡  reset()  ≡  fresh ledger
"""

from hypothesis import given, settings
from hypothesis import strategies as st
from decimal import Decimal

from tests.helpers import make_ledger


operations = st.lists(
    st.tuples(
        st.sampled_from(["buy_stable", "sell_stable", "buy_crypto", "sell_crypto"]),
        st.decimals(min_value=Decimal("0.01"), max_value=Decimal("5000"), places=2),
    ),
    min_size=1,
    max_size=20,
)


def run(ledger, ops):
    for op, amount in ops:
        if op == "sell_crypto":
            amount = amount * Decimal("0.000001")
        getattr(ledger, op)(amount)


def history_view(ledger):
    return [(r.id, r.type, r.details, r.moves) for r in ledger.history]


class TestDeterminismProperties:

    @given(operations)
    @settings(max_examples=50, deadline=None)
    def test_identical_sequences_produce_identical_state(self, ops):
        first, second = make_ledger(), make_ledger()
        run(first, ops)
        run(second, ops)
        assert first.balances_snapshot() == second.balances_snapshot()
        assert history_view(first) == history_view(second)

    @given(operations)
    @settings(max_examples=50, deadline=None)
    def test_clone_then_same_ops_matches_original(self, ops):
        original = make_ledger()
        original.buy_stable(2000)
        cloned = original.clone()
        run(original, ops)
        run(cloned, ops)
        assert original.balances_snapshot() == cloned.balances_snapshot()


class TestResetProperties:

    @given(operations)
    @settings(max_examples=50, deadline=None)
    def test_reset_returns_to_initial_state(self, ops):
        ledger = make_ledger()
        run(ledger, ops)
        ledger.set_crypto_price(1)
        ledger.reset()
        assert ledger.balances_snapshot() == make_ledger().balances_snapshot()
        assert ledger.history == ()

    @given(operations)
    @settings(max_examples=50, deadline=None)
    def test_reset_is_idempotent(self, ops):
        ledger = make_ledger()
        run(ledger, ops)
        ledger.reset()
        once = ledger.balances_snapshot()
        ledger.reset()
        assert ledger.balances_snapshot() == once
        assert ledger.history == ()
        assert ledger.transaction_log == []
