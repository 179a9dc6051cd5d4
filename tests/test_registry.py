from __future__ import annotations

import pytest
from pydantic import ValidationError

from fincalc.config import Settings
from fincalc.core.registry import (
    CALCULATORS,
    CalculatorRegistry,
    UnknownCalculatorError,
    calculate,
    calculate_payload,
    get_calculator,
)
from fincalc.schemas.inputs import CompoundInterestInput, SIPInput, SWPInput


def test_every_calculator_runs_on_defaults():
    # defaults leave required amounts at zero, so nothing is computed
    for name, calc in CALCULATORS.items():
        assert calculate(name, calc.input_model()) is None, name


def test_repeated_inputs_are_served_from_cache():
    inputs = SIPInput(monthly_investment=2000, years=5)
    assert calculate("sip", inputs) is calculate("sip", SIPInput(monthly_investment=2000, years=5))


def test_wrong_input_model_is_a_type_error():
    with pytest.raises(TypeError):
        calculate("sip", SWPInput())


def test_unknown_calculator():
    with pytest.raises(UnknownCalculatorError):
        get_calculator("lottery")
    with pytest.raises(LookupError):
        calculate("lottery", SIPInput())


def test_calculate_payload_validates():
    result = calculate_payload("cagr", {"beginning_value": 100000, "ending_value": 250000, "years": 8})
    assert result.rate_percent == pytest.approx(12.13, abs=0.01)

    with pytest.raises(ValidationError):
        calculate_payload("fd", {"compounding_frequency": 3})


def test_inputs_are_immutable():
    inputs = SIPInput(monthly_investment=1000)
    with pytest.raises(ValidationError):
        inputs.years = 20


def test_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("FINCALC_MAX_BREAKDOWN_YEARS", "5")
    monkeypatch.setenv("FINCALC_CORS_ORIGINS", '["https://calc.example.com"]')

    settings = Settings()
    assert settings.max_breakdown_years == 5
    assert settings.cors_origins == ["https://calc.example.com"]
    assert settings.gratuity_cap == 2_000_000


def test_registry_runs_under_its_own_settings():
    registry = CalculatorRegistry(Settings(max_breakdown_years=3))
    inputs = CompoundInterestInput(principal=1000, interest_rate=5, years=10)

    assert len(registry.calculate("compound_interest", inputs).rows) == 3
    assert len(calculate("compound_interest", inputs).rows) == 10


def test_zero_cache_size_disables_caching():
    registry = CalculatorRegistry(Settings(result_cache_size=0))
    inputs = SIPInput(monthly_investment=2000, years=5)

    first = registry.calculate("sip", inputs)
    assert registry.calculate("sip", inputs) is not first
    assert registry.calculate("sip", inputs) == first
