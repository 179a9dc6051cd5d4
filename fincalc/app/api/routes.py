"""HTTP routes for the Flask API."""

from http import HTTPStatus
from typing import Any, Dict, Optional

from flask import Blueprint, current_app, jsonify, request
from loguru import logger
from pydantic import BaseModel, ValidationError

from fincalc.adapters.query_params import from_query, to_query
from fincalc.core.registry import (
    CalculatorRegistry,
    UnknownCalculatorError,
    get_calculator,
    list_calculators,
)
from fincalc.formatting import format_result
from fincalc.schemas.inputs import CalculationInput

api_bp = Blueprint("api", __name__)


@api_bp.errorhandler(ValidationError)
def _handle_validation_error(exc: ValidationError):
    """Convert Pydantic validation errors into JSON responses."""
    logger.info("rejected calculator input: {} error(s)", exc.error_count())
    return jsonify({"detail": exc.errors(include_url=False)}), HTTPStatus.UNPROCESSABLE_ENTITY


@api_bp.errorhandler(UnknownCalculatorError)
def _handle_unknown_calculator(exc: UnknownCalculatorError):
    return jsonify({"detail": str(exc)}), HTTPStatus.NOT_FOUND


def _registry() -> CalculatorRegistry:
    return current_app.extensions["fincalc"]


def _respond(name: str, inputs: CalculationInput) -> Any:
    registry = _registry()
    result: Optional[BaseModel] = registry.calculate(name, inputs)
    body: Dict[str, Any] = {
        "calculator": name,
        "result": result.model_dump(mode="json") if result is not None else None,
        "formatted": (
            format_result(result, registry.settings.currency_style) if result is not None else None
        ),
        "share_query": to_query(inputs),
    }
    return jsonify(body)


@api_bp.get("/calculators")
def calculators() -> Any:
    """List every calculator with its default inputs."""
    return jsonify(
        [
            {
                "name": calc.name,
                "title": calc.title,
                "defaults": calc.input_model().model_dump(mode="json"),
            }
            for calc in list_calculators()
        ]
    )


@api_bp.post("/calc/<name>")
def calculate_json(name: str) -> Any:
    """Run a calculator on a JSON body; ``result`` is null for incomplete input."""
    calculator = get_calculator(name)
    raw_payload: Dict[str, Any] = request.get_json(force=True, silent=False)
    inputs = calculator.input_model.model_validate(raw_payload)
    logger.debug("POST {}", name)
    return _respond(name, inputs)


@api_bp.get("/calc/<name>")
def calculate_query(name: str) -> Any:
    """Run a calculator from shareable-link query parameters."""
    calculator = get_calculator(name)
    inputs = from_query(calculator.input_model, request.args.to_dict())
    logger.debug("GET {} with {} parameter(s)", name, len(request.args))
    return _respond(name, inputs)
