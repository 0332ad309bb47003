import math

import pytest

from reportdash.coercion import (
    MissingField,
    NumberField,
    TextField,
    WrappedField,
    coerce,
    get_val,
    parse_field,
)
from reportdash.units import to_millions


def test_parse_field_tags_each_input_shape():
    assert parse_field(None) == MissingField()
    assert parse_field(12) == NumberField(12.0)
    assert parse_field({"value": 3.5, "unit": "millions"}) == WrappedField(3.5)
    assert parse_field("SAR 1,200") == TextField("SAR 1,200")
    assert parse_field({"unit": "millions"}) == MissingField()
    assert parse_field(True).kind == "missing"


def test_coerce_returns_numbers_as_is():
    assert coerce(-12.5) == -12.5
    assert coerce(0) == 0
    assert coerce(8713.7) == 8713.7


def test_coerce_unwraps_value_objects():
    assert coerce({"value": 892.6, "currency": "SAR"}) == 892.6
    assert coerce({"value": "892.6"}) == 0
    assert coerce({"value": None}, 7) == 7


def test_coerce_parses_decorated_strings():
    assert coerce("SAR 8,713.7M") == 8713.7
    assert coerce("10.24%") == 10.24
    assert coerce("-384.5") == -384.5
    assert coerce("1.2.3") == 1.2
    assert coerce("n/a") == 0
    assert coerce("-", 5) == 5


def test_coerce_uses_default_for_missing():
    assert coerce(None) == 0
    assert coerce(None, None) is None
    assert coerce(None, 42) == 42


@pytest.mark.parametrize(
    "field",
    [
        None, 0, -1, 3.14, float("nan"), float("inf"), "abc", "12abc", "",
        {"value": 1}, {"value": "x"}, {}, [], True, 10 ** 400, {"value": -(10 ** 400)},
    ],
)
def test_coerce_is_total_and_finite(field):
    result = coerce(field)
    assert isinstance(result, float) or isinstance(result, int)
    assert math.isfinite(result)


def test_get_val_ignores_strings():
    record = {"revenue": 100, "netProfit": {"value": 8}, "grossMargin": "32%", "roe": None}
    assert get_val(record, "revenue") == 100
    assert get_val(record, "netProfit") == 8
    assert get_val(record, "grossMargin") is None
    assert get_val(record, "roe") is None
    assert get_val(record, "missing") is None


def test_out_of_range_integers_resolve_to_defaults():
    huge = 10 ** 400
    assert parse_field(huge) == MissingField()
    assert coerce(huge, 5) == 5
    assert get_val({"revenue": huge}, "revenue") is None
    assert get_val({"netProfit": {"value": huge}}, "netProfit") is None


def test_to_millions_threshold():
    assert to_millions(0) == 0
    assert to_millions(100000) == 100000
    assert to_millions(100001) != 100001
    assert to_millions(100001) == pytest.approx(0.100001)
    assert to_millions(-100001) == pytest.approx(-0.100001)
    assert to_millions(8713700000) == pytest.approx(8713.7)
    assert to_millions(8713.7) == 8713.7
