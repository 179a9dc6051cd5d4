"""Period-stepping projection engine.

Two loops cover every iterative calculator:

  - ``accumulate`` adds a (possibly stepped-up) contribution each period and
    applies growth. SIP, RD, PPF, EPF and NPS are configurations of it.
  - ``decumulate`` applies growth and then takes a withdrawal each period,
    stopping as soon as the balance is exhausted. SWP and EMI amortization
    use it.

Both walk single periods (usually months) and record one ``PeriodSnapshot``
per block of ``periods_per_snapshot`` periods (usually a year), plus one for
a trailing partial block. Balances are never rounded inside the loop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal, Optional

from fincalc.core.rates import MONTHS_PER_YEAR
from fincalc.schemas.results import Accumulation, Decumulation, PeriodSnapshot

Timing = Literal["start", "end"]


@dataclass(frozen=True)
class StepUp:
    """Scheduled raise of the recurring contribution.

    ``value`` is a percentage when ``is_percentage`` is set, otherwise a fixed
    amount added to the contribution. It is applied after every ``every``
    periods.
    """

    value: float
    is_percentage: bool = True
    every: int = MONTHS_PER_YEAR

    def apply(self, contribution: float) -> float:
        if self.is_percentage:
            return contribution * (1 + self.value / 100)
        return contribution + self.value


def accumulate(
    initial_lump_sum: float,
    periodic_contribution: float,
    periodic_rate: float,
    total_periods: int,
    step_up: Optional[StepUp] = None,
    periods_per_snapshot: int = MONTHS_PER_YEAR,
    timing: Timing = "start",
) -> Accumulation:
    """
    Walk ``total_periods`` periods forward from ``initial_lump_sum``.

    Order of operations (per period):
      1) timing "start": add the contribution, then grow the balance.
         timing "end": grow the balance, then add the contribution.
      2) Count the contribution towards the running total.
      3) On a step-up boundary, raise the contribution for later periods.
      4) On a snapshot boundary (or the last period), record the block.
    """
    if timing not in ("start", "end"):
        raise ValueError(f"unknown contribution timing {timing!r}")

    balance = float(initial_lump_sum)
    contributed = float(initial_lump_sum)
    contribution = float(periodic_contribution)

    snapshots: List[PeriodSnapshot] = []
    block_amount = 0.0
    block_opening = balance

    for period in range(1, total_periods + 1):
        if timing == "start":
            balance = (balance + contribution) * (1 + periodic_rate)
        else:
            balance = balance * (1 + periodic_rate) + contribution

        contributed += contribution
        block_amount += contribution

        if step_up is not None and period % step_up.every == 0:
            contribution = step_up.apply(contribution)

        if period % periods_per_snapshot == 0 or period == total_periods:
            snapshots.append(
                PeriodSnapshot(
                    period=len(snapshots) + 1,
                    amount=block_amount,
                    cumulative_amount=contributed,
                    ending_balance=balance,
                    opening_balance=block_opening,
                )
            )
            block_amount = 0.0
            block_opening = balance

    return Accumulation(
        final_balance=balance,
        total_contributed=contributed,
        snapshots=tuple(snapshots),
    )


def decumulate(
    initial_balance: float,
    periodic_withdrawal: float,
    periodic_rate: float,
    total_periods: int,
    periods_per_snapshot: int = MONTHS_PER_YEAR,
) -> Decumulation:
    """
    Grow then withdraw, period by period, until the horizon or exhaustion.

    A withdrawal larger than the balance takes whatever is left (a partial
    final withdrawal) and leaves the balance at exactly zero. Once the
    balance is zero the loop stops: the current block is recorded and its
    index becomes ``exhausted_at_period``.
    """
    balance = float(initial_balance)
    withdrawn = 0.0
    exhausted_at: Optional[int] = None
    elapsed = 0

    snapshots: List[PeriodSnapshot] = []
    block_amount = 0.0
    block_opening = balance

    for period in range(1, total_periods + 1):
        balance *= 1 + periodic_rate

        if balance >= periodic_withdrawal:
            taken = periodic_withdrawal
            balance -= periodic_withdrawal
        else:
            taken = balance
            balance = 0.0

        withdrawn += taken
        block_amount += taken
        elapsed = period
        exhausted = balance == 0

        if exhausted or period % periods_per_snapshot == 0 or period == total_periods:
            snapshots.append(
                PeriodSnapshot(
                    period=len(snapshots) + 1,
                    amount=block_amount,
                    cumulative_amount=withdrawn,
                    ending_balance=balance,
                    opening_balance=block_opening,
                )
            )
            block_amount = 0.0
            block_opening = balance

        if exhausted:
            exhausted_at = len(snapshots)
            break

    return Decumulation(
        total_withdrawn=withdrawn,
        remaining_balance=balance,
        exhausted_at_period=exhausted_at,
        periods_elapsed=elapsed,
        snapshots=tuple(snapshots),
    )
