"""Mirror calculator inputs to and from flat query-string parameters.

Shareable links carry every non-default input as ``key=value`` strings.
Parsing is forgiving the way a browser form is: blank or non-numeric text
becomes 0, and grouping separators or currency symbols are ignored.
"""

from __future__ import annotations

import enum
import math
import re
from typing import Any, Dict, Mapping, Optional, Type, TypeVar
from urllib.parse import urlencode

from fincalc.schemas.inputs import CalculationInput

InputT = TypeVar("InputT", bound=CalculationInput)

TRUE_VALUES = frozenset({"true", "1", "yes", "on"})

_NOISE = re.compile(r"[\s,_₹$€]")
_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def parse_number(raw: Any) -> float:
    """Parse user text as a float; anything unparseable is 0.0.

    Like a browser's ``parseFloat``, a numeric prefix is enough:
    ``"12.5%"`` -> 12.5, ``"₹1,00,000"`` -> 100000.0, ``"abc"`` -> 0.0.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_NUMBER.match(_NOISE.sub("", str(raw)))
        if match is None:
            return 0.0
        value = float(match.group())
    return value if math.isfinite(value) else 0.0


def parse_bool(raw: Any) -> bool:
    return str(raw).strip().lower() in TRUE_VALUES


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _coerce(annotation: Any, raw: Any) -> Optional[Any]:
    """Convert one raw string to the field's type; ``None`` means use the default."""
    if annotation is bool:
        return parse_bool(raw)
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        number = int(parse_number(raw))
        members = {member.value for member in annotation}
        return number if number in members else None
    if annotation is int:
        # whole counts keep the integer part, as parseInt would: "2.7" years is 2
        return int(parse_number(raw))
    if annotation is float:
        return parse_number(raw)
    return str(raw)


def from_query(model: Type[InputT], params: Mapping[str, Any]) -> InputT:
    """Build ``model`` from string parameters; unknown keys are ignored.

    Raises ``pydantic.ValidationError`` when a parsed value breaks the schema
    (e.g. a negative amount).
    """
    values: Dict[str, Any] = {}
    for name, field in model.model_fields.items():
        if name not in params:
            continue
        coerced = _coerce(field.annotation, params[name])
        if coerced is not None:
            values[name] = coerced
    return model.model_validate(values)


def to_query(inputs: CalculationInput) -> Dict[str, str]:
    """Flatten ``inputs`` to strings, dropping fields left at their default."""
    defaults = type(inputs)().model_dump(mode="json")
    return {
        name: _format_value(value)
        for name, value in inputs.model_dump(mode="json").items()
        if value != defaults[name]
    }


def share_link(base_url: str, calculator: str, inputs: CalculationInput) -> str:
    query = urlencode({"calculator": calculator, **to_query(inputs)})
    return f"{base_url}?{query}"
