from primeunits.units import dimension
from primeunits.units.dimension import DimensionVector
from primeunits.units.errors import ExponentOverflow
import pytest  # type: ignore


def test_algebra() -> None:
    force = DimensionVector(mass=1, length=1, time=-2)
    length = dimension.Length

    assert force + length == DimensionVector(1, 2, -2)
    assert force - force == dimension.Dimensionless
    assert -length == DimensionVector(length=-1)
    assert length * 3 == DimensionVector(length=3)
    assert 2 * length == DimensionVector(length=2)
    assert DimensionVector(length=4, time=-2).root(2) == DimensionVector(length=2, time=-1)
    assert force.add(length).equals(DimensionVector.from_tuple((1, 2, -2, 0, 0, 0, 0, 0)))


def test_basis() -> None:
    assert DimensionVector.basis("angle") == dimension.Angle
    assert dimension.Angle.is_angle()
    assert not dimension.Dimensionless.is_angle()
    assert not DimensionVector(time=-1, angle=1).is_angle()
    assert DimensionVector(time=-1, angle=1).without_angle() == DimensionVector(time=-1)
    assert dimension.Dimensionless.is_zero()

    with pytest.raises(ValueError):
        DimensionVector.basis("charm")
    with pytest.raises(ValueError):
        DimensionVector.from_tuple((1, 2))


def test_roots() -> None:
    with pytest.raises(ValueError):
        dimension.Length.root(2)
    with pytest.raises(ValueError):
        DimensionVector(length=2).root(3)
    with pytest.raises(ValueError):
        dimension.Length.scale(0.5)  # type: ignore


def test_invalid() -> None:
    with pytest.raises(TypeError):
        DimensionVector(length=1.5)  # type: ignore
    with pytest.raises(TypeError):
        DimensionVector(length=True)  # type: ignore
    with pytest.raises(ExponentOverflow):
        DimensionVector(length=dimension.EXPONENT_LIMIT) + dimension.Length
    with pytest.raises(OverflowError):
        dimension.Length * (dimension.EXPONENT_LIMIT + 1)


def test_format() -> None:
    assert str(dimension.Dimensionless) == "1"
    assert str(dimension.Length) == "L"
    assert str(DimensionVector(1, 2, -2)) == "M·L²·T⁻²"
    assert str(DimensionVector(time=-1, angle=1)) == "T⁻¹·A"
    assert DimensionVector(1, 2, -2).describe() == "Energy (M·L²·T⁻²)"
    assert DimensionVector(length=7).describe() == "L⁷"
