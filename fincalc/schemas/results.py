"""Result contracts returned by the projection engine and the calculators.

All amounts are unrounded floats; rounding happens in ``fincalc.formatting``.
"""

from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PeriodSnapshot(_Record):
    """One breakdown row, usually one year of monthly steps."""

    period: int = Field(..., ge=1)
    amount: float = Field(..., description="Contribution or withdrawal made in this period.")
    cumulative_amount: float = Field(..., description="Running total of contributions or withdrawals.")
    ending_balance: float
    opening_balance: float = 0.0


class Accumulation(_Record):
    final_balance: float
    total_contributed: float
    snapshots: Tuple[PeriodSnapshot, ...] = ()

    @property
    def growth(self) -> float:
        return self.final_balance - self.total_contributed


class Decumulation(_Record):
    total_withdrawn: float
    remaining_balance: float = Field(..., ge=0)
    exhausted_at_period: Optional[int] = None
    periods_elapsed: int = 0
    snapshots: Tuple[PeriodSnapshot, ...] = ()


# -----------------------------
# Calculator results
# -----------------------------


class SIPResult(_Record):
    future_value: float
    total_invested: float
    total_gains: float
    monthly_investment: float
    snapshots: Tuple[PeriodSnapshot, ...]


class SWPResult(_Record):
    total_withdrawn: float
    remaining_balance: float
    balance_exhausted_year: Optional[int]
    monthly_withdrawal: float
    snapshots: Tuple[PeriodSnapshot, ...]


class PPFResult(_Record):
    maturity_amount: float
    total_investment: float
    total_interest: float
    snapshots: Tuple[PeriodSnapshot, ...]


class EPFResult(_Record):
    maturity_amount: float
    total_employee_contribution: float
    total_employer_contribution: float
    total_contribution: float
    total_interest: float
    years_to_retirement: int
    snapshots: Tuple[PeriodSnapshot, ...]


class NPSResult(_Record):
    maturity_amount: float
    total_investment: float
    total_gains: float
    lump_sum_withdrawal: float
    annuity_amount: float
    monthly_pension: float
    investment_period: int
    snapshots: Tuple[PeriodSnapshot, ...]


class DepositResult(_Record):
    """Shared by RD and FD: either side may have been solved for."""

    maturity_amount: float
    total_investment: float
    total_interest: float
    installment: float
    snapshots: Tuple[PeriodSnapshot, ...] = ()


class EMIResult(_Record):
    emi: float
    total_amount: float
    total_interest: float
    principal: float
    snapshots: Tuple[PeriodSnapshot, ...]


class CAGRResult(_Record):
    mode: str
    rate_percent: float
    total_returns: float
    total_return_percent: float


class InterestComparisonRow(_Record):
    period: int = Field(..., ge=1)
    compound_amount: float
    simple_amount: float

    @property
    def difference(self) -> float:
        return self.compound_amount - self.simple_amount


class CompoundInterestResult(_Record):
    amount: float
    compound_interest: float
    simple_interest: float
    simple_amount: float
    difference: float
    effective_rate_percent: float
    rows: Tuple[InterestComparisonRow, ...]


class SimpleInterestResult(_Record):
    simple_interest: float
    amount: float
    monthly_interest: float
    daily_interest: float
    snapshots: Tuple[PeriodSnapshot, ...]


class InflationRow(_Record):
    period: int = Field(..., ge=1)
    future_value: float
    real_value: float
    purchasing_power_percent: float


class InflationResult(_Record):
    future_value: float
    total_inflation: float
    purchasing_power_loss_percent: float
    real_value: float
    rows: Tuple[InflationRow, ...]


class GratuityResult(_Record):
    is_eligible: bool
    total_service_years: float
    gratuity_amount: Optional[float] = None
    tax_free_amount: float = 0.0
    taxable_amount: float = 0.0
    reason: Optional[str] = None


class DailyInterestResult(_Record):
    daily_rate_percent: float
    daily_interest: float
    total_interest: float
    final_amount: float
    effective_rate_percent: float
