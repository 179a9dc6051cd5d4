"""Annual-to-periodic rate conversion."""

from __future__ import annotations

from enum import IntEnum


class CompoundingFrequency(IntEnum):
    """Number of compounding periods in one year."""

    ANNUAL = 1
    SEMI_ANNUAL = 2
    QUARTERLY = 4
    MONTHLY = 12
    DAILY = 365


MONTHS_PER_YEAR = 12


def periodic_rate(annual_rate_percent: float, periods_per_year: int) -> float:
    """Return the per-period rate as a decimal, e.g. 12% monthly -> 0.01.

    ``periods_per_year`` must be at least 1; callers pass a
    ``CompoundingFrequency`` or ``MONTHS_PER_YEAR``.
    """
    return annual_rate_percent / 100 / periods_per_year


def monthly_rate(annual_rate_percent: float) -> float:
    return periodic_rate(annual_rate_percent, MONTHS_PER_YEAR)
