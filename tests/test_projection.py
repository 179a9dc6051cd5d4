from __future__ import annotations

from math import isclose

import pytest

from fincalc.core.compounding import annuity_due_value
from fincalc.core.projection import StepUp, accumulate, decumulate
from fincalc.core.rates import monthly_rate


# -----------------------------
# accumulate
# -----------------------------


def test_sip_example_matches_closed_form():
    """10000 a month at 12% for 15 years."""
    projection = accumulate(0, 10000, monthly_rate(12), 180)

    assert isclose(projection.final_balance, annuity_due_value(10000, 0.01, 180), rel_tol=1e-9)
    # published example quotes 50,01,148; start-of-month deposits land within 1% of it
    assert projection.final_balance == pytest.approx(5001148, rel=0.01)
    assert projection.total_contributed == 1_800_000


def test_one_snapshot_per_year():
    projection = accumulate(0, 10000, monthly_rate(12), 180)

    assert [row.period for row in projection.snapshots] == list(range(1, 16))
    assert all(isclose(row.amount, 120000) for row in projection.snapshots)
    assert isclose(projection.snapshots[-1].cumulative_amount, 1_800_000)
    assert projection.snapshots[-1].ending_balance == projection.final_balance
    for previous, row in zip(projection.snapshots, projection.snapshots[1:]):
        assert row.opening_balance == previous.ending_balance


def test_trailing_partial_block_gets_its_own_snapshot():
    projection = accumulate(0, 1000, 0.0, 30)

    assert len(projection.snapshots) == 3
    assert projection.snapshots[-1].amount == 6000
    assert projection.final_balance == 30000


def test_final_balance_grows_with_more_periods():
    rate = monthly_rate(10)
    balances = [accumulate(5000, 2000, rate, periods).final_balance for periods in range(1, 61)]
    assert all(later > earlier for earlier, later in zip(balances, balances[1:]))


def test_zero_rate_still_grows_with_contributions():
    balances = [accumulate(0, 500, 0.0, periods).final_balance for periods in range(1, 25)]
    assert all(later > earlier for earlier, later in zip(balances, balances[1:]))


def test_growth_equals_sum_of_period_growth():
    projection = accumulate(25000, 3000, monthly_rate(9), 100)

    per_block_growth = sum(
        row.ending_balance - row.opening_balance - row.amount for row in projection.snapshots
    )
    assert projection.growth >= 0
    assert isclose(projection.growth, per_block_growth, rel_tol=1e-9)


def test_zero_rate_has_no_growth():
    projection = accumulate(10000, 1000, 0.0, 36)
    assert projection.final_balance == 46000
    assert projection.total_contributed == 46000
    assert projection.growth == 0


def test_percentage_step_up_raises_contribution_each_year():
    projection = accumulate(0, 1000, 0.0, 24, StepUp(value=10))

    assert [row.amount for row in projection.snapshots] == pytest.approx([12000, 13200])
    assert projection.final_balance == pytest.approx(25200)


def test_amount_step_up_adds_fixed_amount_each_year():
    projection = accumulate(0, 1000, 0.0, 36, StepUp(value=500, is_percentage=False))
    assert [row.amount for row in projection.snapshots] == [12000, 18000, 24000]


def test_step_up_every_period_for_yearly_steps():
    projection = accumulate(0, 100, 0.0, 3, StepUp(value=50, every=1), periods_per_snapshot=1)
    assert [row.amount for row in projection.snapshots] == [100, 150, 225]


def test_start_timing_earns_growth_on_the_new_contribution():
    start = accumulate(0, 100, 0.1, 1, periods_per_snapshot=1)
    end = accumulate(0, 100, 0.1, 1, periods_per_snapshot=1, timing="end")
    assert isclose(start.final_balance, 110)
    assert end.final_balance == 100


def test_unknown_timing_is_rejected():
    with pytest.raises(ValueError):
        accumulate(0, 100, 0.1, 12, timing="middle")


def test_no_periods_returns_the_lump_sum():
    projection = accumulate(5000, 100, 0.01, 0)
    assert projection.final_balance == 5000
    assert projection.snapshots == ()


# -----------------------------
# decumulate
# -----------------------------


def test_sustainable_withdrawal_never_exhausts():
    """5,000,000 earning 10% a year with 30,000 taken every month for 20 years."""
    drawdown = decumulate(5_000_000, 30000, monthly_rate(10), 240)

    assert drawdown.exhausted_at_period is None
    assert drawdown.remaining_balance > 0
    assert drawdown.total_withdrawn == 30000 * 240
    assert len(drawdown.snapshots) == 20


def test_exact_exhaustion_stops_the_loop():
    drawdown = decumulate(100000, 10000, 0.0, 24)

    assert drawdown.remaining_balance == 0
    assert drawdown.total_withdrawn == 100000
    assert drawdown.periods_elapsed == 10
    assert drawdown.exhausted_at_period == 1
    assert len(drawdown.snapshots) == 1


def test_partial_final_withdrawal():
    drawdown = decumulate(25000, 10000, 0.0, 12)

    assert drawdown.total_withdrawn == 25000
    assert drawdown.periods_elapsed == 3
    assert drawdown.snapshots[-1].amount == 25000
    assert drawdown.snapshots[-1].ending_balance == 0


def test_exhaustion_reported_in_year_blocks():
    drawdown = decumulate(150000, 10000, 0.0, 36)

    assert drawdown.exhausted_at_period == 2
    assert drawdown.periods_elapsed == 15
    assert drawdown.snapshots[0].ending_balance == 30000
    assert drawdown.snapshots[1].amount == 30000
    assert drawdown.snapshots[1].cumulative_amount == 150000


@pytest.mark.parametrize(
    "balance, withdrawal, annual_rate, months",
    [
        (500000, 10000, 8, 120),
        (100000, 3333.33, 12, 60),
        (1_000_000, 25000, 0, 60),
        (50000, 60000, 5, 12),
        (0, 1000, 10, 12),
    ],
)
def test_balance_never_negative_and_nothing_after_zero(balance, withdrawal, annual_rate, months):
    drawdown = decumulate(balance, withdrawal, monthly_rate(annual_rate), months)

    assert drawdown.remaining_balance >= 0
    assert all(row.ending_balance >= 0 for row in drawdown.snapshots)
    if drawdown.exhausted_at_period is not None:
        assert drawdown.remaining_balance == 0
        assert drawdown.snapshots[-1].period == drawdown.exhausted_at_period
        assert drawdown.snapshots[-1].ending_balance == 0
        assert drawdown.periods_elapsed <= months


def test_zero_rate_withdrawals_have_no_growth():
    drawdown = decumulate(120000, 1000, 0.0, 24)
    assert drawdown.remaining_balance == 96000
    assert drawdown.exhausted_at_period is None
