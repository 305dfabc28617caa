from primeunits.units.dimension import DimensionVector, Dimensionless
from primeunits.units.expression import evaluate
from primeunits.units.naming import base_units, unit_name
from primeunits.units.scale import ScaleVector
from primeunits.units.unit import ResolvedUnit
import pytest  # type: ignore


@pytest.mark.parametrize("expression, name", [
    ("kg*m^2/s^2", "J"),
    ("m", "m"),
    ("mm", "mm"),
    ("g", "g"),
    ("kg", "kg"),
    ("mg", "mg"),
    ("min", "min"),
    ("h", "h"),
    ("deg", "deg"),
    ("K", "K"),
    ("1/ms", "kHz"),
    ("kN*m", "kJ"),
    ("L", "L"),
    ("m/ms", "km/s"),
    ("mm/s", "mm/s"),
    ("m/s^2", "m/s^2"),
    ("m/min", "2^-2*3^-1*5^-1*m/s"),
    ("deg/s", "2^-2*3^-2*5^-1*pi*rad/s"),
    ("1", "1"),
    ("10^3", "10^3"),
    ("pi", "pi"),
    ("1/s^2", "1/s^2"),
])
def test_unit_name(expression: str, name: str) -> None:
    assert unit_name(evaluate(expression)) == name


def test_names_parse_back() -> None:
    for expression in ("kg*m^2/s^2", "m/ms", "deg/s", "m/min", "g/cm^3", "mol/L", "A*s/kg"):
        resolved = evaluate(expression)
        assert evaluate(unit_name(resolved)) == resolved.storage()


def test_nonstorage_units() -> None:
    # Names describe the storage unit, so inches are shown in centimetres.
    assert unit_name(evaluate("in")) == "cm"
    assert unit_name(evaluate("degC")) == "K"
    assert str(ResolvedUnit(DimensionVector(length=1), ScaleVector.from_base10_exponent(3))) == "km"
    assert str(evaluate("km/h")) == "km/h"


def test_base_units() -> None:
    assert base_units(evaluate("J").dimension) == "kg*m^2/s^2"
    assert base_units(evaluate("V").dimension) == "kg*m^2/s^3*A"
    assert base_units(Dimensionless) == "1"
    assert base_units(DimensionVector(time=-1)) == "1/s"
