import json

import numpy
from primeunits import serialization
from primeunits.units import dimension
from primeunits.units.errors import DimensionMismatch, InvalidFormat
from primeunits.units.quantity import Quantity
from primeunits.units.scale import ScaleVector
import pytest  # type: ignore


def test_from_string() -> None:
    q = serialization.from_string("5.0 m")
    assert q.value == 5.0
    assert q.dimension == dimension.Length

    assert serialization.from_string("5.0m") == q
    assert serialization.from_string("  5 m ") == q

    q = serialization.from_string("-1.5e3 mm")
    assert q.value == -1500.0
    assert q.scale == ScaleVector.from_base10_exponent(-3)

    q = serialization.from_string("9.81 m/s2")
    assert q.dimension == dimension.DimensionVector(length=1, time=-2)
    assert serialization.from_string(".5 km").value == 0.5
    assert serialization.from_string("20 degC").value == pytest.approx(293.15)


def test_from_string_target() -> None:
    q = serialization.from_string("5.0 km", target="m")
    assert q.value == pytest.approx(5000.0)
    assert q.scale == ScaleVector()

    with pytest.raises(DimensionMismatch) as excinfo:
        serialization.from_string("5.0 m", target="kg")
    assert excinfo.value.expected == dimension.Mass
    assert excinfo.value.actual == dimension.Length


@pytest.mark.parametrize("text", ["5.0", "5.0   ", "m", "", "five m", "5.0 blarg", "5.0 m^", "5.0 7*m"])
def test_from_string_invalid(text: str) -> None:
    with pytest.raises(InvalidFormat):
        serialization.from_string(text)


def test_to_string() -> None:
    assert serialization.to_string(serialization.from_string("9.81 m/s2")) == "9.81 m/s^2"
    assert serialization.to_string(Quantity.of(1500.0, "m"), unit="km") == "1.5 km"
    assert serialization.to_string(Quantity.of(2.0, "in")) == "5.08 cm"
    assert serialization.to_string(Quantity.of(0.0, "degC"), unit="degC") == "0.0 degC"

    with pytest.raises(TypeError):
        serialization.to_string(Quantity.of([1.0, 2.0], "m"))


def test_dict() -> None:
    assert serialization.to_dict(serialization.from_string("2 h"), unit="min") == {"value": 120.0, "unit": "min"}
    assert serialization.to_dict(Quantity.of([1.0, 2.0], "km")) == {"value": [1.0, 2.0], "unit": "km"}

    q = serialization.from_dict({"value": 3, "unit": "kN"})
    assert q.value == 3.0
    assert str(q) == "3.0 kN"

    q = serialization.from_dict({"value": [1.0, 2.0], "unit": "m"}, target="cm")
    assert isinstance(q.value, numpy.ndarray)
    assert q.value.tolist() == pytest.approx([100.0, 200.0])

    for data in ({"value": 1.0}, {"unit": "m"}, {"value": "x", "unit": "m"},
                 {"value": True, "unit": "m"}, {"value": 1.0, "unit": 3}, [1.0, "m"],
                 {"value": 1.0, "unit": "blarg"}):
        with pytest.raises(InvalidFormat):
            serialization.from_dict(data)  # type: ignore

    with pytest.raises(DimensionMismatch):
        serialization.from_dict({"value": 1.0, "unit": "m"}, target="s")


def test_json() -> None:
    text = serialization.to_json(Quantity.of(2.5, "kg"))
    assert json.loads(text) == {"value": 2.5, "unit": "kg"}

    q = serialization.from_json('{"value": 2.5, "unit": "g"}', target="kg")
    assert q.value == pytest.approx(0.0025)

    with pytest.raises(InvalidFormat):
        serialization.from_json("not json")
    with pytest.raises(InvalidFormat):
        serialization.from_json('"5 m"')
