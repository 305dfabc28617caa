"""Conversion between units and arithmetic on values with units.

Values are passed alongside their units; a unit may be a ``ResolvedUnit``
or any unit expression understood by ``evaluate``.

Examples:
    >>> rescale(1000.0, "m", "km")
    1.0
    >>> rescale(0.0, "degC", "K")
    273.15
    >>> value, unit = combine((1.0, "m"), (500.0, "mm"), "+", policy=RescalePolicy.SMALLER_WINS)
    >>> value, str(unit)
    (1500.0, 'mm')
"""

import enum
import logging
from typing import Any, Optional, Tuple, Union

from .dimension import DimensionVector
from .errors import DimensionMismatch, ScaleMismatch
from .expression import evaluate
from .registry import Registry
from .scale import ScaleVector
from .unit import ResolvedUnit


logger = logging.getLogger(__name__)

UnitLike = Union[str, ResolvedUnit]


class RescalePolicy(enum.Enum):
    """How the result scale of an addition of differently scaled values is chosen.

    ``STRICT`` refuses to choose. ``SMALLER_WINS`` and ``LARGER_WINS`` pick
    the smaller (larger) exponent of each of 2, 3, 5 and pi independently.
    ``LEFT_HAND_WINS`` keeps the left operand's scale.
    """
    STRICT = "Strict"
    SMALLER_WINS = "SmallerWins"
    LEFT_HAND_WINS = "LeftHandWins"
    LARGER_WINS = "LargerWins"

    @classmethod
    def from_name(cls, name: Union[str, "RescalePolicy"]) -> "RescalePolicy":
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise TypeError(
                "Rescale policy must be a RescalePolicy or a string, got {}".format(type(name).__name__)
            )
        key = name.replace("_", "").replace("-", "").replace(" ", "").lower()
        for policy in cls:
            if key == policy.value.lower():
                return policy
        raise ValueError(
            "Unknown rescale policy '{}': expected one of {}".format(
                name, ", ".join(p.value for p in cls)
            )
        )

    def __str__(self) -> str:
        return self.value


def _policy(policy: Optional[Union[str, RescalePolicy]]) -> RescalePolicy:
    if policy is None:
        from ..config import get_settings

        return get_settings().policy
    return RescalePolicy.from_name(policy)


def resolve_scale(a: ScaleVector, b: ScaleVector,
                  policy: Optional[Union[str, RescalePolicy]] = None) -> ScaleVector:
    """The scale a sum of values in scales ``a`` and ``b`` is expressed in."""
    policy = _policy(policy)
    if a == b:
        return a
    if policy is RescalePolicy.STRICT:
        raise ScaleMismatch(a, b)
    if policy is RescalePolicy.LEFT_HAND_WINS:
        return a
    if policy is RescalePolicy.SMALLER_WINS:
        return ScaleVector(*(min(x, y) for x, y in zip(a, b)))
    return ScaleVector(*(max(x, y) for x, y in zip(a, b)))


def _resolve(unit: UnitLike, registry: Optional[Registry]) -> ResolvedUnit:
    if not isinstance(unit, (str, ResolvedUnit)):
        raise TypeError(
            "Expected a unit expression or ResolvedUnit, got {}".format(type(unit).__name__)
        )
    return evaluate(unit, registry)


def rescale(value: Any, from_unit: UnitLike, to_unit: UnitLike, registry: Optional[Registry] = None) -> Any:
    """Convert ``value`` from one unit to another of the same dimension.

    The value is taken to its unit's storage scale (applying the conversion
    factor and affine offset), moved between the two storage scales by their
    exact ratio and then taken out of the target unit's storage scale.
    """
    source = _resolve(from_unit, registry)
    target = _resolve(to_unit, registry)
    if source.dimension != target.dimension:
        raise DimensionMismatch(target.dimension, source.dimension, "rescale")

    value = source.to_storage(value)
    if source.scale != target.scale:
        value = value * source.scale.ratio(target.scale)
    return target.from_storage(value)


def _to_scale(value: Any, scale: ScaleVector, target: ScaleVector, side: str) -> Any:
    if scale == target:
        return value
    logger.debug("Rescaling %s operand from scale %s to %s", side, scale, target)
    return value * scale.ratio(target)


def combine(left: Tuple[Any, UnitLike], right: Tuple[Any, UnitLike], operator: str,
            policy: Optional[Union[str, RescalePolicy]] = None,
            registry: Optional[Registry] = None) -> Tuple[Any, ResolvedUnit]:
    """Apply ``operator`` (one of ``+ - * /``) to two values with units.

    Both values are first taken to their storage units, so affine values
    take part as absolute temperatures. Addition and subtraction require
    equal dimensions; where the scales differ ``policy`` (or the configured
    default) chooses the result scale and the other operand is rescaled.
    Multiplication and division compose the units and never rescale.

    Returns the resulting value and its storage unit.
    """
    left_value, left_unit = left[0], _resolve(left[1], registry)
    right_value, right_unit = right[0], _resolve(right[1], registry)
    left_value = left_unit.to_storage(left_value)
    right_value = right_unit.to_storage(right_value)

    if operator in ("+", "-"):
        if left_unit.dimension != right_unit.dimension:
            raise DimensionMismatch(
                left_unit.dimension,
                right_unit.dimension,
                "add" if operator == "+" else "subtract",
            )
        try:
            scale = resolve_scale(left_unit.scale, right_unit.scale, policy)
        except ScaleMismatch as e:
            raise ScaleMismatch(e.scale_a, e.scale_b, "add" if operator == "+" else "subtract") from None
        left_value = _to_scale(left_value, left_unit.scale, scale, "left")
        right_value = _to_scale(right_value, right_unit.scale, scale, "right")
        if operator == "+":
            value = left_value + right_value
        else:
            value = left_value - right_value
        return value, ResolvedUnit(left_unit.dimension, scale)

    if operator == "*":
        return left_value * right_value, left_unit.storage().mul(right_unit.storage())
    if operator == "/":
        return left_value / right_value, left_unit.storage().div(right_unit.storage())

    raise ValueError("Unknown operator '{}': expected one of + - * /".format(operator))


def is_erasable(dimension: DimensionVector) -> bool:
    """Whether values of this dimension may leave the unit system as bare numbers."""
    return dimension.is_zero() or dimension.is_angle()


def erase(value: Any, unit: UnitLike, registry: Optional[Registry] = None) -> Any:
    """Turn a dimensionless or pure angle value into a bare number.

    Dimensionless values are rescaled to the identity scale and angles to
    radians.
    """
    resolved = _resolve(unit, registry)
    if not is_erasable(resolved.dimension):
        raise DimensionMismatch(DimensionVector(), resolved.dimension, "erase")
    value = resolved.to_storage(value)
    if resolved.scale.is_identity():
        return value
    return value * resolved.scale.to_float()


def erase_angle(value: Any, unit: UnitLike,
                registry: Optional[Registry] = None) -> Tuple[Any, ResolvedUnit]:
    """Drop the angle axis of a compound unit, e.g. ``rad/s`` becomes ``1/s``.

    The scale is kept, so ``deg/s`` becomes ``1/s`` scaled by pi/180.
    """
    resolved = _resolve(unit, registry)
    return resolved.to_storage(value), ResolvedUnit(resolved.dimension.without_angle(), resolved.scale)
