"""Units of measure with exact scales.

Every unit is reduced to a dimension (integer exponents of mass, length,
time, current, temperature, amount, luminosity and angle) and an exact
scale ``2**a * 3**b * 5**c * pi**d`` relative to the SI base units.
Units that are not exact in this form (inches, pounds, electronvolts) carry
an empirical conversion factor, and temperatures an affine offset; both are
applied once, when a value enters its storage unit.

Unit expressions are parsed into their dimension and scale.

Examples:
    >>> evaluate("km").scale
    ScaleVector(two=3, three=0, five=3, pi=0)
    >>> str(evaluate("kg*m/s^2").dimension)
    'M·L·T⁻²'
    >>> evaluate("N") == evaluate("kg*m/s2")
    True


New quantities are constructed by multiplying a float, numpy array, or other
raw value by a unit, or with ``Quantity.of`` for units that need an offset.

Examples:
    >>> str(5.0 * unit("km"))
    '5.0 km'
    >>> str(Quantity.of(2.0, "in"))
    '5.08 cm'
    >>> str(Quantity.of(0.0, "degC"))
    '273.15 K'
    >>> str(Quantity.of(2.0, "kN") * Quantity.of(3.0, "m"))
    '6.0 kJ'


Quantities of the same dimension can be added and compared even when their
scales differ; the result scale is chosen by the configured rescale policy,
which by default keeps the smaller exponent of each prime.

Examples:
    >>> str(1.0 * unit("m") + 500.0 * unit("mm"))
    '1500.0 mm'
    >>> 1.0 * unit("km") == 1000.0 * unit("m")
    True
    >>> Quantity.of(1.0, "m") + Quantity.of(1.0, "s")
    Traceback (most recent call last):
        ...
    primeunits.units.errors.DimensionMismatch: Can't apply add to second argument: incompatible dimensions Length (L) and Time (T)


Values are extracted in specific units using the ``in_unit`` method, and
dimensionless values and angles can be erased to bare numbers.

Examples:
    >>> Quantity.of(120.0, "m/min").in_unit("m/s")
    2.0
    >>> import numpy
    >>> float(numpy.sin(Quantity.of(90.0, "deg")))
    1.0
"""

from .dimension import (
    DimensionVector, Dimensionless, Mass, Length, Time, Current,
    Temperature, Amount, Luminosity, Angle,
)
from .errors import (
    UnitError, UnknownUnit, DimensionMismatch, ScaleMismatch, InvalidFormat,
    ExponentOverflow, ScaleOverflow,
)
from .expression import evaluate, parse
from .naming import base_units, unit_name
from .policy import RescalePolicy, combine, erase, erase_angle, is_erasable, rescale, resolve_scale
from .quantity import Quantity, UnitStrippedWarning, unit
from .registry import PREFIXES, Registry, RegistryConflict, default_registry
from .scale import ScaleVector, Identity
from .unit import Dimension, ResolvedUnit, SiPrefix, System, Unit

__all__ = [
    'DimensionVector', 'Dimensionless', 'Mass', 'Length', 'Time', 'Current',
    'Temperature', 'Amount', 'Luminosity', 'Angle',
    'UnitError', 'UnknownUnit', 'DimensionMismatch', 'ScaleMismatch', 'InvalidFormat',
    'ExponentOverflow', 'ScaleOverflow',
    'evaluate', 'parse', 'base_units', 'unit_name',
    'RescalePolicy', 'combine', 'erase', 'erase_angle', 'is_erasable', 'rescale', 'resolve_scale',
    'Quantity', 'UnitStrippedWarning', 'unit',
    'PREFIXES', 'Registry', 'RegistryConflict', 'default_registry',
    'ScaleVector', 'Identity',
    'Dimension', 'ResolvedUnit', 'SiPrefix', 'System', 'Unit',
]
