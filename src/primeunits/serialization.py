"""Text and structured formats for quantities.

The string format is ``"<number> <unit expression>"``; the space is
optional. The structured format is a mapping ``{"value": ..., "unit": ...}``
where ``value`` is a number or a (nested) list of numbers.

Examples:
    >>> q = from_string("9.81 m/s2")
    >>> to_string(q)
    '9.81 m/s^2'
    >>> from_string("5.0km", target="m").value
    5000.0
    >>> to_dict(from_string("2 h"), unit="min")
    {'value': 120.0, 'unit': 'min'}
"""

import json
import logging
import re
from typing import Any, Mapping, Optional, Dict

import numpy

from .units.errors import DimensionMismatch, InvalidFormat, UnitError
from .units.expression import evaluate
from .units.naming import unit_name
from .units.policy import UnitLike
from .units.quantity import Quantity


logger = logging.getLogger(__name__)

_NUMBER_RE = re.compile(
    r"""
    \s*
    (?P<number>
        [+-]?
        (?:
            (?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?
            |inf(?:inity)?
            |nan
        )
    )
    """,
    re.VERBOSE | re.IGNORECASE,
)


def _split(text: str) -> Any:
    match = _NUMBER_RE.match(text)
    if match is None:
        raise InvalidFormat("Quantity '{}' does not start with a number".format(text))
    unit = text[match.end():].strip()
    if not unit:
        raise InvalidFormat("Quantity '{}' has no unit".format(text))
    return float(match.group("number")), unit


def _retarget(quantity: Quantity, target: Optional[UnitLike]) -> Quantity:
    if target is None:
        return quantity
    expected = evaluate(target)
    if expected.dimension != quantity.dimension:
        logger.debug("Rejecting %s: target unit %s has a different dimension", quantity, expected)
        raise DimensionMismatch(expected.dimension, quantity.dimension)
    return quantity.rescale(expected.scale)


def to_string(quantity: Quantity, unit: Optional[UnitLike] = None) -> str:
    """Format a scalar quantity, in ``unit`` if given, else in its own unit."""
    if numpy.ndim(quantity.value) != 0:
        raise TypeError("Only scalar quantities have a string form; use to_dict for arrays")
    if unit is None:
        return "{} {}".format(float(quantity.value), unit_name(quantity.unit))
    return "{} {}".format(float(quantity.in_unit(unit)), str(evaluate(unit)))


def from_string(text: str, target: Optional[UnitLike] = None) -> Quantity:
    """Parse ``"<number> <unit>"``.

    With ``target`` the quantity is checked against the target's dimension
    and returned in the target's storage scale.
    """
    if not isinstance(text, str):
        raise TypeError("Expected a string, got {}".format(type(text).__name__))
    try:
        value, unit = _split(text)
        quantity = Quantity.of(value, unit)
    except UnitError as e:
        logger.debug("Failed to parse quantity '%s': %s", text, e)
        if isinstance(e, InvalidFormat):
            raise
        raise InvalidFormat("Invalid unit in quantity '{}': {}".format(text, e)) from e
    return _retarget(quantity, target)


def _plain(value: Any) -> Any:
    if isinstance(value, numpy.ndarray):
        return value.tolist()
    if isinstance(value, numpy.generic):
        return value.item()
    return value


def to_dict(quantity: Quantity, unit: Optional[UnitLike] = None) -> Dict[str, Any]:
    if unit is None:
        return {"value": _plain(quantity.value), "unit": unit_name(quantity.unit)}
    return {"value": _plain(quantity.in_unit(unit)), "unit": str(evaluate(unit))}


def from_dict(data: Mapping[str, Any], target: Optional[UnitLike] = None) -> Quantity:
    if not isinstance(data, Mapping):
        raise InvalidFormat("Expected a mapping with 'value' and 'unit', got {}".format(type(data).__name__))
    missing = [key for key in ("value", "unit") if key not in data]
    if missing:
        logger.debug("Quantity mapping %r is missing %s", data, missing)
        raise InvalidFormat("Quantity mapping is missing {}".format(", ".join(repr(k) for k in missing)))
    unit = data["unit"]
    if not isinstance(unit, str):
        raise InvalidFormat("Quantity unit must be a string, got {}".format(type(unit).__name__))
    value = data["value"]
    if isinstance(value, list):
        value = numpy.asarray(value, dtype=float)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        value = float(value)
    else:
        raise InvalidFormat("Quantity value must be a number or a list, got {!r}".format(value))
    try:
        quantity = Quantity.of(value, unit)
    except UnitError as e:
        logger.debug("Failed to read quantity mapping %r: %s", data, e)
        if isinstance(e, InvalidFormat):
            raise
        raise InvalidFormat("Invalid unit '{}': {}".format(unit, e)) from e
    return _retarget(quantity, target)


def to_json(quantity: Quantity, unit: Optional[UnitLike] = None, **kwargs: Any) -> str:
    return json.dumps(to_dict(quantity, unit), **kwargs)


def from_json(text: str, target: Optional[UnitLike] = None) -> Quantity:
    try:
        data = json.loads(text)
    except ValueError as e:
        logger.debug("Failed to decode quantity JSON: %s", e)
        raise InvalidFormat("Invalid quantity JSON: {}".format(e)) from e
    return from_dict(data, target)
