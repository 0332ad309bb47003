"""Field coercion for AI-extracted financial records.

Extraction output is loosely typed: a metric may arrive as a number, a decorated
string (``"SAR 8,713.7M"``), a ``{"value": x, "unit": ...}`` wrapper or not at all.
``parse_field`` classifies a raw value once into a tagged field and ``coerce``
resolves every tag to a finite float.
"""
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Union


_NON_NUMERIC = re.compile(r"[^0-9.\-]")
_FLOAT_PREFIX = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


@dataclass(frozen=True)
class NumberField:
    value: float
    kind: Literal["number"] = "number"


@dataclass(frozen=True)
class WrappedField:
    value: Any
    kind: Literal["wrapped"] = "wrapped"


@dataclass(frozen=True)
class TextField:
    text: str
    kind: Literal["text"] = "text"


@dataclass(frozen=True)
class MissingField:
    kind: Literal["missing"] = "missing"


RawField = Union[NumberField, WrappedField, TextField, MissingField]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _to_float(value: Any) -> Optional[float]:
    # JSON integers are unbounded; anything past the float range is unusable.
    try:
        return float(value)
    except OverflowError:
        return None


def parse_field(raw: Any) -> RawField:
    if isinstance(raw, (NumberField, WrappedField, TextField, MissingField)):
        return raw
    if raw is None:
        return MissingField()
    if _is_number(raw):
        number = _to_float(raw)
        return MissingField() if number is None else NumberField(number)
    if isinstance(raw, dict):
        if "value" not in raw:
            return MissingField()
        return WrappedField(raw["value"])
    if isinstance(raw, str):
        return TextField(raw)
    return MissingField()


def _finite_or(value: float, default: Optional[float]) -> Optional[float]:
    if math.isfinite(value):
        return value
    return default


def parse_number_text(text: str) -> Optional[float]:
    cleaned = _NON_NUMERIC.sub("", text)
    match = _FLOAT_PREFIX.match(cleaned)
    if not match:
        return None
    return float(match.group(0))


def coerce(field: Any, default: Optional[float] = 0.0) -> Optional[float]:
    parsed = parse_field(field)
    if isinstance(parsed, NumberField):
        return _finite_or(parsed.value, default)
    if isinstance(parsed, WrappedField):
        number = _to_float(parsed.value) if _is_number(parsed.value) else None
        return default if number is None else _finite_or(number, default)
    if isinstance(parsed, TextField):
        number = parse_number_text(parsed.text)
        if number is None:
            return default
        return _finite_or(number, default)
    return default


def get_val(record: Dict[str, Any], key: str) -> Optional[float]:
    # Merge-side lookup: strings are not parsed here.
    parsed = parse_field((record or {}).get(key))
    if isinstance(parsed, NumberField):
        return _finite_or(parsed.value, None)
    if isinstance(parsed, WrappedField) and _is_number(parsed.value):
        number = _to_float(parsed.value)
        return None if number is None else _finite_or(number, None)
    return None


def is_reported(field: Any) -> bool:
    return coerce(field, None) is not None
