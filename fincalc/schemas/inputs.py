"""Input contracts for every calculator.

Schema-level rules only reject values that can never be valid (negative
money, NaN or infinity, an unsupported compounding frequency) or that would
make a projection run for centuries. A zero where a calculator needs a
positive value is accepted here and makes the calculator return
``None`` instead of a misleading zero result.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from fincalc.core.rates import CompoundingFrequency

MAX_YEARS = 100
MAX_AGE = 120
MAX_DAYS = MAX_YEARS * 365
MAX_RATE = 1000.0


class CalculationInput(BaseModel):
    """Base for all calculator inputs: immutable, flat, no unknown keys."""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)


class SIPInput(CalculationInput):
    monthly_investment: float = Field(0.0, ge=0, description="Monthly SIP amount.")
    annual_return: float = Field(12.0, ge=0, le=MAX_RATE, description="Expected annual return (%).")
    years: int = Field(10, ge=0, le=MAX_YEARS)
    extra_months: int = Field(0, ge=0, le=11, description="Months on top of whole years.")
    lump_sum: float = Field(0.0, ge=0, description="One-off amount invested at the start.")
    step_up: float = Field(0.0, ge=0, description="Yearly raise of the monthly amount.")
    step_up_is_percentage: bool = True
    mode: Literal["monthly", "maturity"] = "monthly"
    target_amount: float = Field(0.0, ge=0, description="Target corpus in maturity mode.")


class SWPInput(CalculationInput):
    initial_investment: float = Field(0.0, ge=0)
    monthly_withdrawal: float = Field(0.0, ge=0)
    annual_return: float = Field(8.0, ge=0, le=MAX_RATE)
    years: int = Field(10, ge=0, le=MAX_YEARS)


class PPFInput(CalculationInput):
    annual_deposit: float = Field(0.0, ge=0)
    interest_rate: float = Field(7.1, ge=0, le=MAX_RATE)
    years: int = Field(15, ge=0, le=MAX_YEARS)
    deposit_at_start: bool = Field(True, description="Deposit before April 5 earns the full year.")


class EPFInput(CalculationInput):
    basic_salary: float = Field(0.0, ge=0, description="Monthly basic salary + DA.")
    current_age: int = Field(0, ge=0, le=MAX_AGE)
    retirement_age: int = Field(58, ge=0, le=MAX_AGE)
    employee_rate: float = Field(12.0, ge=0, le=100)
    employer_rate: float = Field(12.0, ge=0, le=100)
    salary_increment: float = Field(5.0, ge=0, le=MAX_RATE)
    interest_rate: float = Field(8.5, ge=0, le=MAX_RATE)


class NPSInput(CalculationInput):
    monthly_contribution: float = Field(0.0, ge=0)
    current_age: int = Field(0, ge=0, le=MAX_AGE)
    retirement_age: int = Field(60, ge=0, le=MAX_AGE)
    expected_return: float = Field(10.0, ge=0, le=MAX_RATE)
    annuity_return: float = Field(6.0, ge=0, le=MAX_RATE)
    lump_sum_share: float = Field(60.0, ge=0, le=100, description="Share withdrawn at retirement (%).")


class RDInput(CalculationInput):
    monthly_deposit: float = Field(0.0, ge=0)
    interest_rate: float = Field(0.0, ge=0, le=MAX_RATE)
    years: float = Field(0.0, ge=0, le=MAX_YEARS)
    mode: Literal["maturity", "reverse-maturity"] = "maturity"
    target_amount: float = Field(0.0, ge=0)


class FDInput(CalculationInput):
    principal: float = Field(0.0, ge=0)
    interest_rate: float = Field(0.0, ge=0, le=MAX_RATE)
    years: float = Field(0.0, ge=0, le=MAX_YEARS)
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.ANNUAL
    mode: Literal["maturity", "reverse-maturity"] = "maturity"
    target_amount: float = Field(0.0, ge=0)


class EMIInput(CalculationInput):
    principal: float = Field(0.0, ge=0)
    interest_rate: float = Field(0.0, ge=0, le=MAX_RATE)
    tenure_years: float = Field(0.0, ge=0, le=MAX_YEARS)


class CAGRInput(CalculationInput):
    beginning_value: float = Field(0.0, ge=0)
    ending_value: float = Field(0.0, ge=0)
    years: float = Field(0.0, ge=0, le=MAX_YEARS)
    mode: Literal["cagr", "roi"] = "cagr"


class CompoundInterestInput(CalculationInput):
    principal: float = Field(0.0, ge=0)
    interest_rate: float = Field(0.0, ge=0, le=MAX_RATE)
    years: float = Field(0.0, ge=0, le=MAX_YEARS)
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.ANNUAL


class SimpleInterestInput(CalculationInput):
    principal: float = Field(0.0, ge=0)
    interest_rate: float = Field(0.0, ge=0, le=MAX_RATE)
    years: float = Field(0.0, ge=0, le=MAX_YEARS)


class InflationInput(CalculationInput):
    current_amount: float = Field(0.0, ge=0)
    inflation_rate: float = Field(6.0, ge=0, le=MAX_RATE)
    years: float = Field(0.0, ge=0, le=MAX_YEARS)


class GratuityInput(CalculationInput):
    last_salary: float = Field(0.0, ge=0, description="Last drawn monthly basic + DA.")
    years_of_service: int = Field(0, ge=0, le=MAX_YEARS)
    months_of_service: int = Field(0, ge=0, le=11)
    covered: bool = Field(True, description="Employer covered under the Gratuity Act.")


class DailyInterestInput(CalculationInput):
    principal: float = Field(0.0, ge=0)
    annual_rate: float = Field(0.0, ge=0, le=MAX_RATE)
    days: int = Field(0, ge=0, le=MAX_DAYS)
    compound: bool = False
