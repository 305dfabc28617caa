import math

from primeunits import config
from primeunits.units.dimension import DimensionVector, Length, Time
from primeunits.units.errors import DimensionMismatch, ScaleMismatch
from primeunits.units.expression import evaluate
from primeunits.units.policy import (
    RescalePolicy, combine, erase, erase_angle, is_erasable, rescale, resolve_scale,
)
from primeunits.units.scale import ScaleVector, Identity
import pytest  # type: ignore


def test_rescale() -> None:
    assert rescale(1000.0, "m", "km") == pytest.approx(1.0)
    assert rescale(0.0, "degC", "K") == 273.15
    assert rescale(212.0, "degF", "degC") == pytest.approx(100.0)
    assert rescale(1.0, "in", "cm") == pytest.approx(2.54)
    assert rescale(1.0, "ft", "in") == pytest.approx(12.0)
    assert rescale(90.0, "km/h", "m/s") == pytest.approx(25.0)
    assert rescale(1.0, "kWh", "J") == pytest.approx(3.6e6)
    assert rescale(1.0, "turn", "deg") == pytest.approx(360.0)
    assert rescale(5.0, "N", evaluate("kg*m/s^2")) == 5.0


def test_rescale_mismatch() -> None:
    with pytest.raises(DimensionMismatch) as excinfo:
        rescale(1.0, "m", "s")
    assert excinfo.value.expected == Time
    assert excinfo.value.actual == Length
    assert "Length" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)

    with pytest.raises(TypeError):
        rescale(1.0, 3, "m")  # type: ignore


def test_resolve_scale() -> None:
    a = ScaleVector(two=2)
    b = ScaleVector(three=1)

    assert resolve_scale(a, b, RescalePolicy.SMALLER_WINS) == Identity
    assert resolve_scale(a, b, RescalePolicy.LARGER_WINS) == ScaleVector(2, 1, 0, 0)
    assert resolve_scale(a, b, RescalePolicy.LEFT_HAND_WINS) == a
    assert resolve_scale(b, a, RescalePolicy.LEFT_HAND_WINS) == b
    assert resolve_scale(a, a, RescalePolicy.STRICT) == a
    with pytest.raises(ScaleMismatch):
        resolve_scale(a, b, RescalePolicy.STRICT)


def test_policy_names() -> None:
    assert RescalePolicy.from_name("strict") is RescalePolicy.STRICT
    assert RescalePolicy.from_name("smaller_wins") is RescalePolicy.SMALLER_WINS
    assert RescalePolicy.from_name("SmallerWins") is RescalePolicy.SMALLER_WINS
    assert RescalePolicy.from_name("left-hand-wins") is RescalePolicy.LEFT_HAND_WINS
    assert RescalePolicy.from_name(RescalePolicy.LARGER_WINS) is RescalePolicy.LARGER_WINS
    assert str(RescalePolicy.LARGER_WINS) == "LargerWins"
    with pytest.raises(ValueError):
        RescalePolicy.from_name("biggest")
    with pytest.raises(TypeError):
        RescalePolicy.from_name(3)  # type: ignore


def test_combine_add() -> None:
    value, unit = combine((1.0, "m"), (500.0, "mm"), "+", policy=RescalePolicy.SMALLER_WINS)
    assert value == pytest.approx(1500.0)
    assert unit.scale == ScaleVector.from_base10_exponent(-3)
    assert str(unit) == "mm"

    value, unit = combine((1.0, "m"), (500.0, "mm"), "+", policy="larger_wins")
    assert value == pytest.approx(1.5)
    assert str(unit) == "m"

    value, unit = combine((500.0, "mm"), (1.0, "m"), "-", policy="left_hand_wins")
    assert value == pytest.approx(-500.0)
    assert str(unit) == "mm"

    # The configured default applies when no policy is passed.
    value, unit = combine((1.0, "km"), (1.0, "m"), "+")
    assert value == pytest.approx(1001.0)
    assert str(unit) == "m"


def test_combine_strict() -> None:
    with pytest.raises(ScaleMismatch) as excinfo:
        combine((1.0, "m"), (500.0, "mm"), "+", policy="strict")
    assert excinfo.value.operation == "add"
    assert excinfo.value.scale_a == Identity

    value, _ = combine((1.0, "m"), (2.0, "m"), "+", policy="strict")
    assert value == 3.0

    with config.using(policy="strict"):
        with pytest.raises(ScaleMismatch):
            combine((1.0, "m"), (500.0, "mm"), "-")
        value, _ = combine((1.0, "m"), (500.0, "mm"), "-", policy="smaller_wins")
        assert value == pytest.approx(500.0)


def test_combine_affine() -> None:
    # Affine values take part as absolute temperatures.
    value, unit = combine((20.0, "degC"), (1.0, "K"), "+")
    assert value == pytest.approx(294.15)
    assert str(unit) == "K"


def test_combine_mul_div() -> None:
    value, unit = combine((2.0, "kN"), (3.0, "m"), "*")
    assert value == 6.0
    assert unit.dimension == DimensionVector(1, 2, -2)
    assert str(unit) == "kJ"

    value, unit = combine((1.0, "in"), (2.0, "s"), "/")
    assert value == pytest.approx(1.27)
    assert str(unit) == "cm/s"

    with pytest.raises(DimensionMismatch) as excinfo:
        combine((1.0, "m"), (1.0, "s"), "+")
    assert excinfo.value.operation == "add"
    with pytest.raises(ValueError):
        combine((1.0, "m"), (1.0, "m"), "%")


def test_erase() -> None:
    assert is_erasable(DimensionVector())
    assert is_erasable(DimensionVector(angle=2))
    assert not is_erasable(Length)

    assert erase(1.0, "km/m") == pytest.approx(1000.0)
    assert erase(180.0, "deg") == pytest.approx(math.pi)
    assert erase(2.0, "rad") == 2.0
    assert erase(3.0, "1") == 3.0

    with pytest.raises(DimensionMismatch):
        erase(1.0, "m")


def test_erase_angle() -> None:
    value, unit = erase_angle(2.0, "deg/s")
    assert value == 2.0
    assert unit.dimension == DimensionVector(time=-1)
    assert unit.scale == evaluate("deg").scale

    value, unit = erase_angle(3.0, "m")
    assert value == 3.0
    assert unit.dimension == Length
