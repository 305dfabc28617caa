"""Display names for resolved units.

A resolved unit is named, in order of preference, by

1. a registered storage unit of its dimension with the same scale (``J``,
   ``min``, ``deg``),
2. an SI prefix applied to the dimension's base unit (``km``, ``µF``),
3. a composition of SI base symbols, with the leftover scale folded into a
   prefix where it fits (``mm/s``) and written out as a factor where it does
   not (``10^-3*kg*m^2/s^2``, ``2^-2*3^-2*5^-1*pi*rad/s``).

Every name produced here is itself a valid unit expression.

Examples:
    >>> from primeunits.units.expression import evaluate
    >>> unit_name(evaluate("kg*m^2/s^2"))
    'J'
    >>> unit_name(evaluate("m/ms"))
    'km/s'
    >>> base_units(evaluate("J").dimension)
    'kg*m^2/s^2'
"""

from typing import List, Optional, Tuple

from .dimension import DimensionVector, AXES
from .expression import current_registry
from .registry import Registry
from .scale import ScaleVector, Identity
from .unit import ResolvedUnit


# SI base symbol of each axis, with the scale of that symbol relative to the
# base-10 exponent a prefix would be applied to ("kg" is "k" applied to "g").
_BASE_SYMBOLS = {
    "mass": ("g", -3),
    "length": ("m", 0),
    "time": ("s", 0),
    "current": ("A", 0),
    "temperature": ("K", 0),
    "amount": ("mol", 0),
    "luminosity": ("cd", 0),
    "angle": ("rad", 0),
}


def _power(symbol: str, exponent: int) -> str:
    if exponent == 1:
        return symbol
    return "{}^{}".format(symbol, exponent)


def _prefix_symbol(registry: Registry, exponent: int) -> Optional[str]:
    if exponent == 0:
        return ""
    for prefix in registry.prefixes:
        if prefix.exponent == exponent:
            return prefix.symbol
    return None


def _join(numerator: List[str], denominator: List[str]) -> str:
    # Division binds loosest, so "a*b/c*d" reads as (a*b)/(c*d).
    text = "*".join(numerator) if numerator else "1"
    if denominator:
        text += "/" + "*".join(denominator)
    return text


def _factor_terms(scale: ScaleVector) -> List[str]:
    if scale.is_identity():
        return []
    exponent = scale.log10()
    if exponent is not None:
        return [_power("10", exponent)]
    return [
        _power(base, e)
        for base, e in zip(("2", "3", "5", "pi"), scale)
        if e != 0
    ]


def _compose(dimension: DimensionVector, scale: ScaleVector, registry: Registry) -> str:
    axes: List[Tuple[str, str, int]] = []
    for axis, exponent in zip(AXES, dimension):
        if exponent != 0:
            symbol, offset = _BASE_SYMBOLS[axis]
            prefix = _prefix_symbol(registry, -offset)
            axes.append((axis, prefix + symbol, exponent))  # type: ignore

    # Fold a decimal residual into the prefix of the first axis that can
    # carry it, trying numerator axes before denominator axes.
    residual = scale.log10()
    if residual is not None and residual != 0:
        for index, (axis, _, exponent) in sorted(enumerate(axes), key=lambda item: item[1][2] < 0):
            symbol, offset = _BASE_SYMBOLS[axis]
            current = -offset * exponent
            if (residual + current) % exponent != 0:
                continue
            prefix = _prefix_symbol(registry, (residual + current) // exponent)
            if prefix is None:
                continue
            axes[index] = (axis, prefix + symbol, exponent)
            scale = Identity
            break

    numerator = _factor_terms(scale)
    numerator += [_power(symbol, exponent) for _, symbol, exponent in axes if exponent > 0]
    denominator = [_power(symbol, -exponent) for _, symbol, exponent in axes if exponent < 0]
    return _join(numerator, denominator)


def base_units(dimension: DimensionVector, registry: Optional[Registry] = None) -> str:
    """Render a dimension vector in SI base units, e.g. ``kg*m^2/s^2``."""
    if registry is None:
        registry = current_registry()
    return _compose(dimension, Identity, registry)


def unit_name(unit: ResolvedUnit, registry: Optional[Registry] = None) -> str:
    """The preferred name of the storage unit of ``unit``."""
    if registry is None:
        registry = current_registry()

    dimension = registry.find_dimension_by_vector(unit.dimension)
    if dimension is not None and not unit.dimension.is_zero():
        for candidate in dimension.units:
            if candidate.is_storage_exact() and candidate.scale == unit.scale:
                return candidate.symbol
        base = dimension.base_unit
        if base is not None and dimension.is_prefixable(base):
            exponent = unit.scale.div(base.scale).log10()
            if exponent is not None:
                prefix = _prefix_symbol(registry, exponent)
                if prefix is not None:
                    return prefix + base.symbol

    return _compose(unit.dimension, unit.scale, registry)
