from __future__ import annotations

from urllib.parse import parse_qs, urlparse

import pytest
from pydantic import ValidationError

from fincalc.adapters.query_params import from_query, parse_number, share_link, to_query
from fincalc.core import calculators
from fincalc.core.rates import CompoundingFrequency
from fincalc.schemas.inputs import FDInput, GratuityInput, SIPInput


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", 0.0),
        (None, 0.0),
        ("abc", 0.0),
        ("  7 ", 7.0),
        ("12.5%", 12.5),
        ("1,00,000", 100000.0),
        ("₹5,000", 5000.0),
        ("$1,250.75", 1250.75),
        (".5", 0.5),
        ("1e3", 1000.0),
        ("nan", 0.0),
        (3, 3.0),
        (True, 0.0),
    ],
)
def test_parse_number_is_forgiving(raw, expected):
    assert parse_number(raw) == expected


def test_from_query_parses_strings_and_ignores_unknown_keys():
    inputs = from_query(
        SIPInput,
        {
            "monthly_investment": "10,000",
            "annual_return": "12",
            "years": "15",
            "step_up": "5",
            "step_up_is_percentage": "false",
            "calculator": "sip",
        },
    )

    assert inputs.monthly_investment == 10000
    assert inputs.annual_return == 12
    assert inputs.years == 15
    assert inputs.step_up_is_percentage is False
    assert inputs.lump_sum == 0


def test_blank_fields_become_zero_and_skip_the_calculation():
    inputs = from_query(SIPInput, {"monthly_investment": "10000", "years": ""})
    assert inputs.years == 0
    assert calculators.sip(inputs) is None


def test_compounding_frequency_falls_back_to_default():
    assert from_query(FDInput, {"compounding_frequency": "4"}).compounding_frequency is CompoundingFrequency.QUARTERLY
    assert from_query(FDInput, {"compounding_frequency": "3"}).compounding_frequency is CompoundingFrequency.ANNUAL


def test_negative_amount_is_rejected():
    with pytest.raises(ValidationError):
        from_query(SIPInput, {"monthly_investment": "-500"})


def test_to_query_omits_defaults():
    assert to_query(SIPInput(monthly_investment=10000)) == {"monthly_investment": "10000"}
    assert to_query(GratuityInput(last_salary=50000.5, covered=False)) == {
        "last_salary": "50000.5",
        "covered": "false",
    }
    assert to_query(FDInput(compounding_frequency=CompoundingFrequency.MONTHLY)) == {
        "compounding_frequency": "12",
    }


def test_query_round_trip_restores_inputs():
    original = SIPInput(monthly_investment=7500, annual_return=11.5, years=12, step_up=500, step_up_is_percentage=False)
    assert from_query(SIPInput, to_query(original)) == original


def test_share_link_carries_calculator_and_inputs():
    link = share_link("https://example.com/calculators", "sip", SIPInput(monthly_investment=10000, years=15))
    parsed = urlparse(link)

    assert parsed.path == "/calculators"
    assert parse_qs(parsed.query) == {
        "calculator": ["sip"],
        "monthly_investment": ["10000"],
        "years": ["15"],
    }


def test_whole_number_fields_keep_the_integer_part():
    inputs = from_query(SIPInput, {"monthly_investment": "1000", "years": "2.7", "extra_months": "3.9"})
    assert inputs.years == 2
    assert inputs.extra_months == 3


def test_horizon_beyond_a_century_is_rejected():
    with pytest.raises(ValidationError):
        from_query(SIPInput, {"monthly_investment": "1000", "years": "200000"})
