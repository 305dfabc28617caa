from dataclasses import dataclass, field, replace
import enum
from typing import Any, Optional, Tuple

from .dimension import DimensionVector, Dimensionless
from .scale import ScaleVector, Identity


class System(enum.Enum):
    METRIC = "Metric"
    IMPERIAL = "Imperial"
    ASTRONOMICAL = "Astronomical"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Unit:
    """A named unit.

    ``scale`` is the scale of the unit's storage unit relative to SI. A value
    ``v`` in this unit is stored as ``v * conversion_factor + affine_offset``
    in that storage unit.
    """
    name: str
    symbols: Tuple[str, ...]
    scale: ScaleVector = Identity
    conversion_factor: float = 1.0
    affine_offset: float = 0.0
    system: System = System.METRIC

    def __post_init__(self) -> None:
        if not self.symbols:
            raise ValueError("Unit '{}' needs at least one symbol".format(self.name))
        if self.conversion_factor == 0.0:
            raise ValueError("Unit '{}' has a zero conversion factor".format(self.name))

    @property
    def symbol(self) -> str:
        return self.symbols[0]

    def has_conversion(self) -> bool:
        return self.conversion_factor != 1.0

    def has_affine_offset(self) -> bool:
        return self.affine_offset != 0.0

    def is_storage_exact(self) -> bool:
        return not self.has_conversion() and not self.has_affine_offset()

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class Dimension:
    name: str
    symbol: str
    vector: DimensionVector
    units: Tuple[Unit, ...] = ()

    @property
    def base_unit(self) -> Optional[Unit]:
        return self.units[0] if self.units else None

    def is_basis(self) -> bool:
        return sum(abs(e) for e in self.vector) == 1 and max(self.vector) == 1

    def is_prefixable(self, unit: Unit) -> bool:
        """Only the first unit of a dimension may carry an SI prefix, and only
        when it is a metric storage unit."""
        return (
            self.base_unit is unit
            and unit.system is System.METRIC
            and unit.is_storage_exact()
        )

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SiPrefix:
    name: str
    symbol: str
    exponent: int
    aliases: Tuple[str, ...] = ()

    @property
    def scale(self) -> ScaleVector:
        return ScaleVector.from_base10_exponent(self.exponent)

    @property
    def symbols(self) -> Tuple[str, ...]:
        return (self.symbol,) + self.aliases

    def strip_symbol(self, text: str) -> Optional[str]:
        for symbol in self.symbols:
            if text.startswith(symbol) and len(text) > len(symbol):
                return text[len(symbol):]
        return None

    def strip_name(self, text: str) -> Optional[str]:
        # The first letter may be capitalised ("Kilometer"), the rest may not.
        if len(text) <= len(self.name):
            return None
        if text[0] not in (self.name[0], self.name[0].upper()):
            return None
        if text[1:len(self.name)] != self.name[1:]:
            return None
        return text[len(self.name):]

    def __str__(self) -> str:
        return self.symbol


@dataclass(frozen=True)
class ResolvedUnit:
    """The result of evaluating a unit expression.

    ``dimension`` and ``scale`` identify the storage unit. Units that are not
    exact powers of 2, 3, 5 and pi also carry their empirical
    ``conversion_factor``, and lone affine units their ``affine_offset``.
    """
    dimension: DimensionVector = Dimensionless
    scale: ScaleVector = Identity
    conversion_factor: float = 1.0
    affine_offset: float = 0.0
    text: Optional[str] = field(default=None, compare=False)

    def is_storage_exact(self) -> bool:
        return self.conversion_factor == 1.0 and self.affine_offset == 0.0

    def storage(self) -> "ResolvedUnit":
        """The storage unit this unit converts through."""
        return ResolvedUnit(self.dimension, self.scale)

    def to_storage(self, value: Any) -> Any:
        if self.conversion_factor != 1.0:
            value = value * self.conversion_factor
        if self.affine_offset != 0.0:
            value = value + self.affine_offset
        return value

    def from_storage(self, value: Any) -> Any:
        if self.affine_offset != 0.0:
            value = value - self.affine_offset
        if self.conversion_factor != 1.0:
            value = value / self.conversion_factor
        return value

    def without_offset(self) -> "ResolvedUnit":
        return replace(self, affine_offset=0.0)

    def mul(self, other: "ResolvedUnit") -> "ResolvedUnit":
        return ResolvedUnit(
            self.dimension.add(other.dimension),
            self.scale.mul(other.scale),
            self.conversion_factor * other.conversion_factor,
        )

    def div(self, other: "ResolvedUnit") -> "ResolvedUnit":
        return ResolvedUnit(
            self.dimension.add(other.dimension.negate()),
            self.scale.mul(other.scale.neg()),
            self.conversion_factor / other.conversion_factor,
        )

    def pow(self, n: int) -> "ResolvedUnit":
        if n == 1:
            return self
        return ResolvedUnit(
            self.dimension.scale(n),
            self.scale.scalar_exp(n),
            self.conversion_factor**n,
        )

    def __str__(self) -> str:
        if self.text is not None:
            return self.text
        from .naming import unit_name

        return unit_name(self)
