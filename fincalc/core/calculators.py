"""Calculator functions.

Each calculator takes its immutable input model, plus optionally the
``Settings`` to apply, and returns a result model or ``None`` when a value
it needs to be positive is missing or zero. Nothing here raises for
incomplete input; schema violations are rejected earlier by pydantic.
"""

from __future__ import annotations

import functools
import math
from typing import Any, Callable, List, Optional, TypeVar

from loguru import logger

from fincalc.config import Settings, get_settings
from fincalc.core.compounding import (
    cagr as compound_annual_growth,
    emi as equated_instalment,
    future_value,
    required_installment,
    required_principal,
    simple_interest as simple_interest_amount,
)
from fincalc.core.projection import StepUp, accumulate, decumulate
from fincalc.core.rates import MONTHS_PER_YEAR, CompoundingFrequency, monthly_rate, periodic_rate
from fincalc.schemas.inputs import (
    CAGRInput,
    CompoundInterestInput,
    DailyInterestInput,
    EMIInput,
    EPFInput,
    FDInput,
    GratuityInput,
    InflationInput,
    NPSInput,
    PPFInput,
    RDInput,
    SIPInput,
    SimpleInterestInput,
    SWPInput,
)
from fincalc.schemas.results import (
    CAGRResult,
    CompoundInterestResult,
    DailyInterestResult,
    DepositResult,
    EMIResult,
    EPFResult,
    GratuityResult,
    InflationResult,
    InflationRow,
    InterestComparisonRow,
    NPSResult,
    PeriodSnapshot,
    PPFResult,
    SIPResult,
    SimpleInterestResult,
    SWPResult,
)

GRATUITY_MIN_SERVICE_YEARS = 5
GRATUITY_DAYS_PER_YEAR = 15


def _skip(calculator: str, reason: str) -> None:
    logger.debug("{} skipped: {}", calculator, reason)
    return None


def _display_years(years: float, settings: Settings) -> int:
    """Whole years shown in a closed-form breakdown table."""
    return int(min(years, settings.max_breakdown_years))


def _is_finite(value: Any) -> bool:
    if isinstance(value, float):
        return math.isfinite(value)
    if isinstance(value, dict):
        return all(_is_finite(item) for item in value.values())
    if isinstance(value, (list, tuple)):
        return all(_is_finite(item) for item in value)
    return True


CalculatorFn = TypeVar("CalculatorFn", bound=Callable[..., Any])


def calculator(func: CalculatorFn) -> CalculatorFn:
    """Fill in default settings and suppress results that left float range.

    Extreme but schema-valid inputs (a 1000% rate over decades, a CAGR over a
    few days) overflow the power functions or push balances to infinity. Both
    are treated like incomplete input: the calculator returns ``None``.
    """

    @functools.wraps(func)
    def wrapper(inputs: Any, settings: Optional[Settings] = None) -> Any:
        try:
            result = func(inputs, settings or get_settings())
        except OverflowError:
            return _skip(func.__name__, "result out of float range")
        if result is not None and not _is_finite(result.model_dump()):
            return _skip(func.__name__, "result out of float range")
        return result

    return wrapper  # type: ignore[return-value]


# -----------------------------
# Accumulation
# -----------------------------


@calculator
def sip(inputs: SIPInput, settings: Settings) -> Optional[SIPResult]:
    """Monthly SIP with optional lump sum and yearly step-up.

    In ``maturity`` mode the monthly amount needed for ``target_amount`` is
    solved for. The projection is affine in the monthly amount (for both
    percentage and fixed step-ups), so two engine runs pin it down exactly.
    """
    total_months = inputs.years * MONTHS_PER_YEAR + inputs.extra_months
    if total_months <= 0:
        return _skip("sip", "investment period is zero")

    rate = monthly_rate(inputs.annual_return)
    step_up = (
        StepUp(value=inputs.step_up, is_percentage=inputs.step_up_is_percentage)
        if inputs.step_up > 0
        else None
    )

    if inputs.mode == "maturity":
        if inputs.target_amount <= 0:
            return _skip("sip", "target amount is zero")
        base = accumulate(inputs.lump_sum, 0.0, rate, total_months, step_up)
        unit = accumulate(inputs.lump_sum, 1.0, rate, total_months, step_up)
        slope = unit.final_balance - base.final_balance
        monthly = max(0.0, (inputs.target_amount - base.final_balance) / slope)
    else:
        if inputs.monthly_investment <= 0 and inputs.lump_sum <= 0:
            return _skip("sip", "no monthly investment or lump sum")
        monthly = inputs.monthly_investment

    projection = accumulate(inputs.lump_sum, monthly, rate, total_months, step_up)
    return SIPResult(
        future_value=projection.final_balance,
        total_invested=projection.total_contributed,
        total_gains=projection.growth,
        monthly_investment=monthly,
        snapshots=projection.snapshots,
    )


@calculator
def ppf(inputs: PPFInput, settings: Settings) -> Optional[PPFResult]:
    if inputs.annual_deposit <= 0 or inputs.years <= 0:
        return _skip("ppf", "deposit or tenure is zero")

    projection = accumulate(
        0.0,
        inputs.annual_deposit,
        periodic_rate(inputs.interest_rate, CompoundingFrequency.ANNUAL),
        inputs.years,
        periods_per_snapshot=1,
        timing="start" if inputs.deposit_at_start else "end",
    )
    return PPFResult(
        maturity_amount=projection.final_balance,
        total_investment=projection.total_contributed,
        total_interest=projection.growth,
        snapshots=projection.snapshots,
    )


@calculator
def epf(inputs: EPFInput, settings: Settings) -> Optional[EPFResult]:
    """
    Year-by-year EPF corpus.

    Each year's employee + employer contribution is deposited and then earns
    a full year of interest; the salary (and so the contribution) rises by
    ``salary_increment`` percent after every year.
    """
    years = inputs.retirement_age - inputs.current_age
    if inputs.basic_salary <= 0 or inputs.current_age <= 0 or years <= 0:
        return _skip("epf", "salary or service horizon missing")

    combined_rate = inputs.employee_rate + inputs.employer_rate
    if combined_rate <= 0:
        return _skip("epf", "contribution rates are zero")

    yearly = inputs.basic_salary * MONTHS_PER_YEAR * combined_rate / 100
    step_up = StepUp(value=inputs.salary_increment, every=1) if inputs.salary_increment > 0 else None
    projection = accumulate(
        0.0,
        yearly,
        periodic_rate(inputs.interest_rate, CompoundingFrequency.ANNUAL),
        years,
        step_up=step_up,
        periods_per_snapshot=1,
    )

    # both shares are fixed percentages of the same salary
    employee_share = inputs.employee_rate / combined_rate
    total = projection.total_contributed
    return EPFResult(
        maturity_amount=projection.final_balance,
        total_employee_contribution=total * employee_share,
        total_employer_contribution=total * (1 - employee_share),
        total_contribution=total,
        total_interest=projection.growth,
        years_to_retirement=years,
        snapshots=projection.snapshots,
    )


@calculator
def nps(inputs: NPSInput, settings: Settings) -> Optional[NPSResult]:
    years = inputs.retirement_age - inputs.current_age
    if inputs.monthly_contribution <= 0 or inputs.current_age <= 0 or years <= 0:
        return _skip("nps", "contribution or horizon missing")

    projection = accumulate(
        0.0,
        inputs.monthly_contribution,
        monthly_rate(inputs.expected_return),
        years * MONTHS_PER_YEAR,
    )
    corpus = projection.final_balance
    lump_sum = corpus * inputs.lump_sum_share / 100
    annuity = corpus - lump_sum
    return NPSResult(
        maturity_amount=corpus,
        total_investment=projection.total_contributed,
        total_gains=projection.growth,
        lump_sum_withdrawal=lump_sum,
        annuity_amount=annuity,
        monthly_pension=annuity * inputs.annuity_return / 100 / MONTHS_PER_YEAR,
        investment_period=years,
        snapshots=projection.snapshots,
    )


@calculator
def rd(inputs: RDInput, settings: Settings) -> Optional[DepositResult]:
    """Recurring deposit: maturity for a deposit, or deposit for a maturity."""
    total_months = round(inputs.years * MONTHS_PER_YEAR)
    if inputs.interest_rate <= 0 or total_months <= 0:
        return _skip("rd", "rate or tenure is zero")

    rate = monthly_rate(inputs.interest_rate)
    if inputs.mode == "reverse-maturity":
        if inputs.target_amount <= 0:
            return _skip("rd", "target amount is zero")
        deposit = required_installment(inputs.target_amount, rate, total_months)
    else:
        if inputs.monthly_deposit <= 0:
            return _skip("rd", "monthly deposit is zero")
        deposit = inputs.monthly_deposit

    projection = accumulate(0.0, deposit, rate, total_months)
    return DepositResult(
        maturity_amount=projection.final_balance,
        total_investment=projection.total_contributed,
        total_interest=projection.growth,
        installment=deposit,
        snapshots=projection.snapshots,
    )


# -----------------------------
# Decumulation
# -----------------------------


@calculator
def swp(inputs: SWPInput, settings: Settings) -> Optional[SWPResult]:
    """Monthly withdrawals from a corpus that keeps earning ``annual_return``."""
    total_months = inputs.years * MONTHS_PER_YEAR
    if inputs.initial_investment <= 0 or inputs.monthly_withdrawal <= 0 or total_months <= 0:
        return _skip("swp", "corpus, withdrawal or period missing")

    drawdown = decumulate(
        inputs.initial_investment,
        inputs.monthly_withdrawal,
        monthly_rate(inputs.annual_return),
        total_months,
    )
    return SWPResult(
        total_withdrawn=drawdown.total_withdrawn,
        remaining_balance=drawdown.remaining_balance,
        balance_exhausted_year=drawdown.exhausted_at_period,
        monthly_withdrawal=inputs.monthly_withdrawal,
        snapshots=drawdown.snapshots,
    )


@calculator
def emi(inputs: EMIInput, settings: Settings) -> Optional[EMIResult]:
    """Loan EMI with a yearly amortization table.

    The outstanding loan is a decumulation: interest accrues monthly and the
    EMI is withdrawn, so each snapshot's ``ending_balance`` is the principal
    still owed.
    """
    total_months = round(inputs.tenure_years * MONTHS_PER_YEAR)
    if inputs.principal <= 0 or total_months <= 0:
        return _skip("emi", "principal or tenure is zero")

    rate = monthly_rate(inputs.interest_rate)
    instalment = equated_instalment(inputs.principal, rate, total_months)
    schedule = decumulate(inputs.principal, instalment, rate, total_months)
    total_amount = instalment * total_months
    return EMIResult(
        emi=instalment,
        total_amount=total_amount,
        total_interest=total_amount - inputs.principal,
        principal=inputs.principal,
        snapshots=schedule.snapshots,
    )


# -----------------------------
# Closed form
# -----------------------------


@calculator
def fd(inputs: FDInput, settings: Settings) -> Optional[DepositResult]:
    if inputs.interest_rate <= 0 or inputs.years <= 0:
        return _skip("fd", "rate or tenure is zero")

    frequency = int(inputs.compounding_frequency)
    if inputs.mode == "reverse-maturity":
        if inputs.target_amount <= 0:
            return _skip("fd", "target amount is zero")
        principal = required_principal(inputs.target_amount, inputs.interest_rate, inputs.years, frequency)
    else:
        if inputs.principal <= 0:
            return _skip("fd", "principal is zero")
        principal = inputs.principal

    maturity = future_value(principal, inputs.interest_rate, inputs.years, frequency)

    snapshots: List[PeriodSnapshot] = []
    opening = principal
    for year in range(1, _display_years(math.ceil(inputs.years), settings) + 1):
        balance = future_value(principal, inputs.interest_rate, min(year, inputs.years), frequency)
        snapshots.append(
            PeriodSnapshot(
                period=year,
                amount=balance - opening,
                cumulative_amount=balance - principal,
                ending_balance=balance,
                opening_balance=opening,
            )
        )
        opening = balance

    return DepositResult(
        maturity_amount=maturity,
        total_investment=principal,
        total_interest=maturity - principal,
        installment=principal,
        snapshots=tuple(snapshots),
    )


@calculator
def cagr(inputs: CAGRInput, settings: Settings) -> Optional[CAGRResult]:
    """CAGR, or plain ROI when ``mode`` is ``roi``."""
    if inputs.beginning_value <= 0:
        return _skip("cagr", "beginning value is not positive")

    total_returns = inputs.ending_value - inputs.beginning_value
    total_return_percent = total_returns / inputs.beginning_value * 100

    if inputs.mode == "roi":
        rate_percent = total_return_percent
    else:
        if inputs.ending_value <= 0 or inputs.years <= 0:
            return _skip("cagr", "ending value or years missing")
        rate_percent = compound_annual_growth(inputs.beginning_value, inputs.ending_value, inputs.years) * 100

    return CAGRResult(
        mode=inputs.mode,
        rate_percent=rate_percent,
        total_returns=total_returns,
        total_return_percent=total_return_percent,
    )


@calculator
def compound_interest(inputs: CompoundInterestInput, settings: Settings) -> Optional[CompoundInterestResult]:
    if inputs.principal <= 0 or inputs.interest_rate <= 0 or inputs.years <= 0:
        return _skip("compound_interest", "principal, rate or years missing")

    frequency = int(inputs.compounding_frequency)
    amount = future_value(inputs.principal, inputs.interest_rate, inputs.years, frequency)
    interest = amount - inputs.principal
    simple = simple_interest_amount(inputs.principal, inputs.interest_rate, inputs.years)

    rows = tuple(
        InterestComparisonRow(
            period=year,
            compound_amount=future_value(inputs.principal, inputs.interest_rate, year, frequency),
            simple_amount=inputs.principal
            + simple_interest_amount(inputs.principal, inputs.interest_rate, year),
        )
        for year in range(1, _display_years(inputs.years, settings) + 1)
    )
    return CompoundInterestResult(
        amount=amount,
        compound_interest=interest,
        simple_interest=simple,
        simple_amount=inputs.principal + simple,
        difference=interest - simple,
        effective_rate_percent=((amount / inputs.principal) ** (1 / inputs.years) - 1) * 100,
        rows=rows,
    )


@calculator
def simple_interest(inputs: SimpleInterestInput, settings: Settings) -> Optional[SimpleInterestResult]:
    if inputs.principal <= 0 or inputs.interest_rate <= 0 or inputs.years <= 0:
        return _skip("simple_interest", "principal, rate or years missing")

    interest = simple_interest_amount(inputs.principal, inputs.interest_rate, inputs.years)
    yearly = simple_interest_amount(inputs.principal, inputs.interest_rate, 1)

    snapshots = tuple(
        PeriodSnapshot(
            period=year,
            amount=yearly,
            cumulative_amount=yearly * year,
            ending_balance=inputs.principal + yearly * year,
            opening_balance=inputs.principal + yearly * (year - 1),
        )
        for year in range(1, _display_years(inputs.years, settings) + 1)
    )
    return SimpleInterestResult(
        simple_interest=interest,
        amount=inputs.principal + interest,
        monthly_interest=interest / (inputs.years * MONTHS_PER_YEAR),
        daily_interest=interest / (inputs.years * CompoundingFrequency.DAILY),
        snapshots=snapshots,
    )


@calculator
def inflation(inputs: InflationInput, settings: Settings) -> Optional[InflationResult]:
    """Future cost of today's amount, and today's value of that amount later."""
    if inputs.current_amount <= 0 or inputs.years <= 0:
        return _skip("inflation", "amount or years missing")

    amount = inputs.current_amount
    future = future_value(amount, inputs.inflation_rate, inputs.years)

    rows = []
    for year in range(1, _display_years(inputs.years, settings) + 1):
        year_future = future_value(amount, inputs.inflation_rate, year)
        rows.append(
            InflationRow(
                period=year,
                future_value=year_future,
                real_value=required_principal(amount, inputs.inflation_rate, year),
                purchasing_power_percent=amount / year_future * 100,
            )
        )

    return InflationResult(
        future_value=future,
        total_inflation=future - amount,
        purchasing_power_loss_percent=(future - amount) / amount * 100,
        real_value=required_principal(amount, inputs.inflation_rate, inputs.years),
        rows=tuple(rows),
    )


@calculator
def gratuity(inputs: GratuityInput, settings: Settings) -> Optional[GratuityResult]:
    """
    Gratuity = last salary x 15 x completed years / 26 (covered employers)
    or / 30 (not covered). Less than five years of service is ineligible.
    """
    if inputs.last_salary <= 0 or (inputs.years_of_service == 0 and inputs.months_of_service == 0):
        return _skip("gratuity", "salary or service missing")

    service_years = inputs.years_of_service + inputs.months_of_service / MONTHS_PER_YEAR

    if service_years < GRATUITY_MIN_SERVICE_YEARS:
        return GratuityResult(
            is_eligible=False,
            total_service_years=service_years,
            reason=f"Minimum {GRATUITY_MIN_SERVICE_YEARS} years of service required for gratuity eligibility",
        )

    divisor = 26 if inputs.covered else 30
    amount = inputs.last_salary * GRATUITY_DAYS_PER_YEAR * math.floor(service_years) / divisor
    if inputs.covered:
        amount = min(amount, settings.gratuity_cap)

    tax_free_limit = settings.gratuity_cap if inputs.covered else settings.gratuity_tax_free_uncovered
    return GratuityResult(
        is_eligible=True,
        total_service_years=service_years,
        gratuity_amount=amount,
        tax_free_amount=min(amount, tax_free_limit),
        taxable_amount=max(0.0, amount - tax_free_limit),
    )


@calculator
def daily_interest(inputs: DailyInterestInput, settings: Settings) -> Optional[DailyInterestResult]:
    if inputs.principal <= 0 or inputs.annual_rate <= 0 or inputs.days <= 0:
        return _skip("daily_interest", "principal, rate or days missing")

    rate = periodic_rate(inputs.annual_rate, CompoundingFrequency.DAILY)
    if inputs.compound:
        final_amount = inputs.principal * (1 + rate) ** inputs.days
        total_interest = final_amount - inputs.principal
    else:
        total_interest = inputs.principal * rate * inputs.days
        final_amount = inputs.principal + total_interest

    return DailyInterestResult(
        daily_rate_percent=rate * 100,
        daily_interest=inputs.principal * rate,
        total_interest=total_interest,
        final_amount=final_amount,
        effective_rate_percent=total_interest / inputs.principal * 100,
    )


__all__ = [
    "sip",
    "ppf",
    "epf",
    "nps",
    "rd",
    "swp",
    "emi",
    "fd",
    "cagr",
    "compound_interest",
    "simple_interest",
    "inflation",
    "gratuity",
    "daily_interest",
]
