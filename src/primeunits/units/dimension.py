from dataclasses import dataclass, astuple, fields
from typing import Iterator, Tuple

from .errors import ExponentOverflow


EXPONENT_LIMIT = 2**15 - 1

AXES = (
    "mass",
    "length",
    "time",
    "current",
    "temperature",
    "amount",
    "luminosity",
    "angle",
)

AXIS_SYMBOLS = ("M", "L", "T", "I", "θ", "N", "Cd", "A")

_SUPERSCRIPTS = str.maketrans("-0123456789", "⁻⁰¹²³⁴⁵⁶⁷⁸⁹")


def _checked(value: int, what: str) -> int:
    if not -EXPONENT_LIMIT <= value <= EXPONENT_LIMIT:
        raise ExponentOverflow(what)
    return value


def superscript(exponent: int) -> str:
    return str(exponent).translate(_SUPERSCRIPTS)


@dataclass(frozen=True)
class DimensionVector:
    """Exponents of the eight physical axes.

    Multiplying two units adds their dimension vectors, dividing subtracts
    them and raising a unit to an integer power scales the vector.
    """
    mass: int = 0
    length: int = 0
    time: int = 0
    current: int = 0
    temperature: int = 0
    amount: int = 0
    luminosity: int = 0
    angle: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(
                    "Invalid {} exponent: got {!r}, expected an integer".format(f.name, value)
                )
            _checked(value, "{} exponent of dimension".format(f.name))

    @classmethod
    def from_tuple(cls, exponents: Tuple[int, ...]) -> "DimensionVector":
        if len(exponents) != len(AXES):
            raise ValueError(
                "Dimension vector needs {} exponents, got {}".format(len(AXES), len(exponents))
            )
        return cls(*(int(e) for e in exponents))

    @classmethod
    def basis(cls, axis: str) -> "DimensionVector":
        if axis not in AXES:
            raise ValueError("Unknown dimension axis '{}'".format(axis))
        return cls(**{axis: 1})

    def as_tuple(self) -> Tuple[int, ...]:
        return astuple(self)

    def __iter__(self) -> Iterator[int]:
        return iter(astuple(self))

    def add(self, other: "DimensionVector") -> "DimensionVector":
        return DimensionVector(*(
            _checked(a + b, "product of {} and {}".format(self, other))
            for a, b in zip(self, other)
        ))

    def negate(self) -> "DimensionVector":
        return DimensionVector(*(-a for a in self))

    def scale(self, n: int) -> "DimensionVector":
        if int(n) != n:
            raise ValueError(
                "Can't raise {} to the power of {}: exponent is not an integer".format(self, n)
            )
        return DimensionVector(*(
            _checked(a * int(n), "{} to the power of {}".format(self, n))
            for a in self
        ))

    def root(self, n: int) -> "DimensionVector":
        if any(a % n != 0 for a in self):
            if n == 2:
                raise ValueError("Can't take square root of {}".format(self))
            if n == 3:
                raise ValueError("Can't take cube root of {}".format(self))
            raise ValueError("Can't take {}-th root of {}".format(n, self))
        return DimensionVector(*(a // n for a in self))

    def is_zero(self) -> bool:
        return not any(self)

    def is_angle(self) -> bool:
        """True for a nonzero vector whose only nonzero axis is angle."""
        return self.angle != 0 and not any(self.as_tuple()[:-1])

    def without_angle(self) -> "DimensionVector":
        return DimensionVector(*(self.as_tuple()[:-1] + (0,)))

    def equals(self, other: "DimensionVector") -> bool:
        return self == other

    def __add__(self, other: "DimensionVector") -> "DimensionVector":
        if not isinstance(other, DimensionVector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "DimensionVector") -> "DimensionVector":
        if not isinstance(other, DimensionVector):
            return NotImplemented
        return self.add(other.negate())

    def __neg__(self) -> "DimensionVector":
        return self.negate()

    def __mul__(self, n: int) -> "DimensionVector":
        if not isinstance(n, int):
            return NotImplemented
        return self.scale(n)

    __rmul__ = __mul__

    def __str__(self) -> str:
        if self.is_zero():
            return "1"
        return "·".join(
            symbol if exponent == 1 else symbol + superscript(exponent)
            for symbol, exponent in zip(AXIS_SYMBOLS, self)
            if exponent != 0
        )

    def describe(self) -> str:
        from .registry import default_registry

        dimension = default_registry().find_dimension_by_vector(self)
        if dimension is None:
            return str(self)
        return "{} ({})".format(dimension.name, self)


Dimensionless = DimensionVector()
Mass = DimensionVector(mass=1)
Length = DimensionVector(length=1)
Time = DimensionVector(time=1)
Current = DimensionVector(current=1)
Temperature = DimensionVector(temperature=1)
Amount = DimensionVector(amount=1)
Luminosity = DimensionVector(luminosity=1)
Angle = DimensionVector(angle=1)
