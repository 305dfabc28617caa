from typing import Tuple

from hypothesis import given
from hypothesis import strategies as st

from primeunits.units.dimension import DimensionVector
from primeunits.units.expression import evaluate
from primeunits.units.naming import unit_name
from primeunits.units.policy import RescalePolicy, rescale, resolve_scale
from primeunits.units.registry import default_registry
from primeunits.units.scale import ScaleVector
from primeunits.units.unit import ResolvedUnit, SiPrefix, Unit
import pytest  # type: ignore

exponents = st.integers(min_value=-4, max_value=4)
dimensions = st.builds(DimensionVector, exponents, exponents, exponents, exponents)
scales = st.builds(ScaleVector, exponents, exponents, exponents, st.integers(min_value=-2, max_value=2))
decimal_scales = st.integers(min_value=-9, max_value=9).map(ScaleVector.from_base10_exponent)
values = st.floats(min_value=-1e6, max_value=1e6, allow_nan=False, allow_infinity=False)
length_units = st.sampled_from(["m", "km", "mm", "µm", "in", "ft", "mi", "AU"])
temperature_units = st.sampled_from(["K", "degC", "degF", "R", "mK"])


@given(a=dimensions, b=dimensions)
def test_dimension_group(a: DimensionVector, b: DimensionVector) -> None:
    assert a + b == b + a
    assert (a + b) - b == a
    assert a + (-a) == DimensionVector()
    assert (a * 2).root(2) == a


@given(a=scales, b=scales)
def test_scale_group(a: ScaleVector, b: ScaleVector) -> None:
    assert a * b == b * a
    assert (a * b) / b == a
    assert a.ratio(b) == pytest.approx(a.to_float() / b.to_float())


@given(a=scales, b=scales)
def test_policies(a: ScaleVector, b: ScaleVector) -> None:
    smaller = resolve_scale(a, b, RescalePolicy.SMALLER_WINS)
    larger = resolve_scale(a, b, RescalePolicy.LARGER_WINS)

    assert smaller == resolve_scale(b, a, RescalePolicy.SMALLER_WINS)
    assert larger == resolve_scale(b, a, RescalePolicy.LARGER_WINS)
    assert all(s <= x and s <= y for s, x, y in zip(smaller, a, b))
    assert all(g >= x and g >= y for g, x, y in zip(larger, a, b))
    assert resolve_scale(a, b, RescalePolicy.LEFT_HAND_WINS) == a
    assert resolve_scale(a, a, RescalePolicy.STRICT) == a


@given(value=values, source=length_units, target=length_units)
def test_rescale_round_trip(value: float, source: str, target: str) -> None:
    there = rescale(value, source, target)
    assert rescale(there, target, source) == pytest.approx(value, rel=1e-9, abs=1e-9)


@given(value=values, source=temperature_units, target=temperature_units)
def test_temperature_round_trip(value: float, source: str, target: str) -> None:
    there = rescale(value, source, target)
    assert rescale(there, target, source) == pytest.approx(value, rel=1e-9, abs=1e-6)


@given(dimension=st.builds(DimensionVector, exponents, exponents, exponents, exponents), scale=decimal_scales)
def test_names_evaluate_back(dimension: DimensionVector, scale: ScaleVector) -> None:
    unit = ResolvedUnit(dimension, scale)
    assert evaluate(unit_name(unit)) == unit


@given(scale=scales)
def test_dimensionless_names_evaluate_back(scale: ScaleVector) -> None:
    unit = ResolvedUnit(DimensionVector(), scale)
    assert evaluate(unit_name(unit)) == unit


_registry = default_registry()
prefix_symbols = st.sampled_from([
    (symbol, prefix) for prefix in _registry.prefixes for symbol in prefix.symbols
])
prefixable_units = st.sampled_from([unit for unit, _ in _registry.units() if _registry.is_prefixable(unit)])


@given(prefix=prefix_symbols, unit=prefixable_units)
def test_prefix_transparency(prefix: Tuple[str, SiPrefix], unit: Unit) -> None:
    symbol, si_prefix = prefix
    plain = evaluate(unit.symbol)
    prefixed = evaluate(symbol + unit.symbol)

    assert prefixed.dimension == plain.dimension
    assert prefixed.scale == unit.scale * ScaleVector.from_base10_exponent(si_prefix.exponent)


atoms = st.sampled_from(["m", "km", "kg", "g", "s", "ms", "h", "A", "K", "degC", "mol", "cd",
                         "rad", "deg", "N", "J", "W", "Hz", "in", "L", "1000", "pi"])


def _compound(children: st.SearchStrategy) -> st.SearchStrategy:
    return st.one_of(
        st.tuples(children, children).map(lambda t: "({})*({})".format(*t)),
        st.tuples(children, children).map(lambda t: "({})/({})".format(*t)),
        st.tuples(children, st.integers(min_value=1, max_value=3)).map(lambda t: "({})^{}".format(*t)),
    )


expressions = st.recursive(atoms, _compound, max_leaves=6)


@given(e1=expressions, e2=expressions)
def test_dimension_homomorphism(e1: str, e2: str) -> None:
    product = evaluate("({})*({})".format(e1, e2))
    quotient = evaluate("({})/({})".format(e1, e2))

    assert product.dimension == evaluate(e1).dimension + evaluate(e2).dimension
    assert quotient.dimension == evaluate(e1).dimension - evaluate(e2).dimension
    assert product.scale == evaluate(e1).scale * evaluate(e2).scale
