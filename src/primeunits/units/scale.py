from dataclasses import dataclass, astuple, fields
from fractions import Fraction
import math
from typing import Iterator, Optional, Tuple

from .dimension import EXPONENT_LIMIT, superscript
from .errors import ScaleOverflow


PRIMES = (2, 3, 5)


def _checked(value: int, what: str) -> int:
    if not -EXPONENT_LIMIT <= value <= EXPONENT_LIMIT:
        raise ScaleOverflow(what)
    return value


@dataclass(frozen=True)
class ScaleVector:
    """An exact scale factor ``2**two * 3**three * 5**five * pi**pi``.

    Scale vectors are composed exactly; they are only turned into floats by
    ``to_float`` and ``ratio``.

    Examples:
        >>> ScaleVector.from_base10_exponent(3)
        ScaleVector(two=3, three=0, five=3, pi=0)
        >>> ScaleVector.from_base10_exponent(3).to_float()
        1000.0
        >>> str(ScaleVector(two=-2, three=-2, five=-1, pi=1))
        '2⁻²·3⁻²·5⁻¹·π'
    """
    two: int = 0
    three: int = 0
    five: int = 0
    pi: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise TypeError(
                    "Invalid exponent of {}: got {!r}, expected an integer".format(f.name, value)
                )
            _checked(value, "exponent of {} in scale".format(f.name))

    @classmethod
    def from_base10_exponent(cls, exponent: int) -> "ScaleVector":
        return cls(two=exponent, five=exponent)

    @classmethod
    def from_tuple(cls, exponents: Tuple[int, ...]) -> "ScaleVector":
        if len(exponents) != 4:
            raise ValueError("Scale vector needs 4 exponents, got {}".format(len(exponents)))
        return cls(*(int(e) for e in exponents))

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return astuple(self)  # type: ignore

    def __iter__(self) -> Iterator[int]:
        return iter(astuple(self))

    def mul(self, other: "ScaleVector") -> "ScaleVector":
        return ScaleVector(*(
            _checked(a + b, "product of scales {} and {}".format(self, other))
            for a, b in zip(self, other)
        ))

    def neg(self) -> "ScaleVector":
        return ScaleVector(*(-a for a in self))

    def div(self, other: "ScaleVector") -> "ScaleVector":
        return self.mul(other.neg())

    def scalar_exp(self, n: int) -> "ScaleVector":
        return ScaleVector(*(
            _checked(a * n, "scale {} to the power of {}".format(self, n))
            for a in self
        ))

    def is_identity(self) -> bool:
        return not any(self)

    def rational(self) -> Fraction:
        """The exact ``2**two * 3**three * 5**five`` part of the factor."""
        return Fraction(2)**self.two * Fraction(3)**self.three * Fraction(5)**self.five

    def log10(self) -> Optional[int]:
        """The base-10 exponent, if this scale is a clean power of ten."""
        if self.two == self.five and self.three == 0 and self.pi == 0:
            return self.two
        return None

    def to_float(self) -> float:
        try:
            value = float(self.rational()) * math.pi**self.pi
        except OverflowError:
            raise ScaleOverflow("scale {}".format(self)) from None
        if math.isinf(value) or (value == 0.0 and not self.is_identity()):
            raise ScaleOverflow("scale {}".format(self))
        return value

    def ratio(self, other: "ScaleVector") -> float:
        """``self.to_float() / other.to_float()``, evaluated on the exponent difference."""
        return self.div(other).to_float()

    def __mul__(self, other: "ScaleVector") -> "ScaleVector":
        if not isinstance(other, ScaleVector):
            return NotImplemented
        return self.mul(other)

    def __truediv__(self, other: "ScaleVector") -> "ScaleVector":
        if not isinstance(other, ScaleVector):
            return NotImplemented
        return self.div(other)

    def __pow__(self, n: int) -> "ScaleVector":
        if not isinstance(n, int):
            return NotImplemented
        return self.scalar_exp(n)

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        if self.is_identity():
            return "1"
        exponent = self.log10()
        if exponent is not None:
            return "10" + superscript(exponent)
        return "·".join(
            base if e == 1 else base + superscript(e)
            for base, e in zip(("2", "3", "5", "π"), self)
            if e != 0
        )


Identity = ScaleVector()


def _2(p: int) -> ScaleVector:
    return ScaleVector(two=p)


def _3(p: int) -> ScaleVector:
    return ScaleVector(three=p)


def _5(p: int) -> ScaleVector:
    return ScaleVector(five=p)


def _6(p: int) -> ScaleVector:
    return ScaleVector(two=p, three=p)


def _10(p: int) -> ScaleVector:
    return ScaleVector.from_base10_exponent(p)


def _pi(p: int) -> ScaleVector:
    return ScaleVector(pi=p)
