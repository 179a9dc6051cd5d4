"""Closed-form compounding helpers.

These are the single-shot formulas behind FD, RD, compound/simple interest,
inflation and CAGR. They do no input guarding of their own beyond the
zero-rate cases that would otherwise divide by zero; calculators decide
whether an input is complete enough to call them.
"""

from __future__ import annotations

from typing import Optional

from fincalc.core.rates import CompoundingFrequency, periodic_rate


def growth_factor(annual_rate_percent: float, years: float, compoundings_per_year: int) -> float:
    """(1 + r/n) ** (n * t)"""
    rate = periodic_rate(annual_rate_percent, compoundings_per_year)
    return (1 + rate) ** (compoundings_per_year * years)


def future_value(
    principal: float,
    annual_rate_percent: float,
    years: float,
    compoundings_per_year: int = CompoundingFrequency.ANNUAL,
) -> float:
    return principal * growth_factor(annual_rate_percent, years, compoundings_per_year)


def required_principal(
    target_future_value: float,
    annual_rate_percent: float,
    years: float,
    compoundings_per_year: int = CompoundingFrequency.ANNUAL,
) -> float:
    """Principal that grows into ``target_future_value`` (present value)."""
    return target_future_value / growth_factor(annual_rate_percent, years, compoundings_per_year)


def cagr(beginning_value: float, ending_value: float, years: float) -> Optional[float]:
    """Constant annual growth rate (as a decimal) turning beginning into ending.

    Undefined, and returned as ``None``, when the beginning value or the
    number of years is not positive.
    """
    if beginning_value <= 0 or years <= 0:
        return None
    return (ending_value / beginning_value) ** (1 / years) - 1


def simple_interest(principal: float, annual_rate_percent: float, years: float) -> float:
    return principal * annual_rate_percent * years / 100


def annuity_due_factor(rate: float, periods: int) -> float:
    """Value of 1 paid at the start of each period for ``periods`` periods."""
    if rate == 0:
        return float(periods)
    return ((1 + rate) ** periods - 1) / rate * (1 + rate)


def annuity_due_value(installment: float, rate: float, periods: int) -> float:
    """Maturity of a recurring deposit paid at the start of every period."""
    return installment * annuity_due_factor(rate, periods)


def required_installment(target_future_value: float, rate: float, periods: int) -> float:
    """Installment that reaches ``target_future_value`` as an annuity due."""
    factor = annuity_due_factor(rate, periods)
    if factor == 0:
        return 0.0
    return target_future_value / factor


def emi(principal: float, rate: float, periods: int) -> float:
    """Equated instalment for a loan: P * r * (1+r)^n / ((1+r)^n - 1)."""
    if periods <= 0:
        return 0.0
    if rate == 0:
        return principal / periods
    factor = (1 + rate) ** periods
    return principal * rate * factor / (factor - 1)
