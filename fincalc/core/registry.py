"""Name -> calculator lookup used by the API and the query-string adapter."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Dict, List, Mapping, Optional, Type

from loguru import logger
from pydantic import BaseModel

from fincalc.config import Settings, get_settings
from fincalc.core import calculators
from fincalc.schemas import inputs as schemas


class UnknownCalculatorError(LookupError):
    def __init__(self, name: str):
        super().__init__(f"unknown calculator {name!r}")
        self.name = name


@dataclass(frozen=True)
class Calculator:
    name: str
    title: str
    input_model: Type[schemas.CalculationInput]
    run: Callable[[Any, Settings], Optional[BaseModel]]


CALCULATORS: Dict[str, Calculator] = {
    calc.name: calc
    for calc in (
        Calculator("sip", "SIP Calculator", schemas.SIPInput, calculators.sip),
        Calculator("swp", "SWP Calculator", schemas.SWPInput, calculators.swp),
        Calculator("ppf", "PPF Calculator", schemas.PPFInput, calculators.ppf),
        Calculator("epf", "EPF Calculator", schemas.EPFInput, calculators.epf),
        Calculator("nps", "NPS Calculator", schemas.NPSInput, calculators.nps),
        Calculator("rd", "RD Calculator", schemas.RDInput, calculators.rd),
        Calculator("fd", "FD Calculator", schemas.FDInput, calculators.fd),
        Calculator("emi", "EMI Calculator", schemas.EMIInput, calculators.emi),
        Calculator("cagr", "CAGR Calculator", schemas.CAGRInput, calculators.cagr),
        Calculator(
            "compound_interest",
            "Compound Interest Calculator",
            schemas.CompoundInterestInput,
            calculators.compound_interest,
        ),
        Calculator(
            "simple_interest",
            "Simple Interest Calculator",
            schemas.SimpleInterestInput,
            calculators.simple_interest,
        ),
        Calculator("inflation", "Inflation Calculator", schemas.InflationInput, calculators.inflation),
        Calculator("gratuity", "Gratuity Calculator", schemas.GratuityInput, calculators.gratuity),
        Calculator(
            "daily_interest",
            "Daily Interest Calculator",
            schemas.DailyInterestInput,
            calculators.daily_interest,
        ),
    )
}


def get_calculator(name: str) -> Calculator:
    try:
        return CALCULATORS[name]
    except KeyError:
        raise UnknownCalculatorError(name) from None


def list_calculators() -> List[Calculator]:
    return list(CALCULATORS.values())


class CalculatorRegistry:
    """Runs calculators under one ``Settings`` and caches recent results.

    Inputs and results are frozen models, so cached values can be shared
    between callers.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self._cached_run = lru_cache(maxsize=settings.result_cache_size)(self._run)

    def _run(self, name: str, inputs: schemas.CalculationInput) -> Optional[BaseModel]:
        calculator = get_calculator(name)
        if not isinstance(inputs, calculator.input_model):
            raise TypeError(f"{name} expects {calculator.input_model.__name__}, got {type(inputs).__name__}")
        logger.debug("running {} with {}", name, inputs)
        return calculator.run(inputs, self.settings)

    def calculate(self, name: str, inputs: schemas.CalculationInput) -> Optional[BaseModel]:
        return self._cached_run(name, inputs)

    def calculate_payload(self, name: str, payload: Mapping[str, Any]) -> Optional[BaseModel]:
        """Validate a JSON-like payload with the calculator's model, then run it.

        Raises ``pydantic.ValidationError`` for schema violations.
        """
        model = get_calculator(name).input_model.model_validate(dict(payload))
        return self.calculate(name, model)

    def clear_cache(self) -> None:
        self._cached_run.cache_clear()


@lru_cache(maxsize=1)
def default_registry() -> CalculatorRegistry:
    return CalculatorRegistry(get_settings())


def calculate(name: str, inputs: schemas.CalculationInput) -> Optional[BaseModel]:
    """Run calculator ``name`` under the environment settings."""
    return default_registry().calculate(name, inputs)


def calculate_payload(name: str, payload: Mapping[str, Any]) -> Optional[BaseModel]:
    return default_registry().calculate_payload(name, payload)


def clear_cache() -> None:
    default_registry.cache_clear()
