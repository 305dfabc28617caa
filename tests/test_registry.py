from primeunits.units import registry
from primeunits.units.dimension import DimensionVector, Length, Time
from primeunits.units.registry import Registry, RegistryConflict, default_registry
from primeunits.units.unit import Dimension, System, Unit
import pytest  # type: ignore


def test_lookup() -> None:
    reg = default_registry()

    unit, dim = reg.find_unit("m")
    assert unit.name == "meter" and dim.name == "Length"
    assert reg.find_unit("meters")[0] is unit
    assert reg.find_unit("inches")[0].symbol == "in"
    assert reg.find_unit("feet")[0].symbol == "ft"
    assert reg.find_unit("Meter")[0] is unit
    assert reg.find_unit("parsnip") is None

    assert reg.find_dimension_by_vector(DimensionVector(1, 1, -2)).name == "Force"
    assert reg.find_dimension_by_vector(DimensionVector(length=9)) is None


def test_dimension_names() -> None:
    reg = default_registry()

    charge = reg.find_dimension_by_name("Electric Charge")
    assert charge is not None
    assert reg.find_dimension_by_name("electric_charge") is charge
    assert reg.find_dimension_by_name("ElectricCharge") is charge
    assert reg.find_dimension_by_name("charge") is charge
    assert reg.find_dimension_by_name("density").name == "Volume Mass Density"
    assert reg.find_dimension_by_name("Dynamic Viscosity").vector == DimensionVector(1, -1, -1)


def test_prefixes() -> None:
    reg = default_registry()

    prefix, unit, dim = reg.find_prefixed_unit("km")
    assert (prefix.name, unit.name, dim.name) == ("kilo", "meter", "Length")
    prefix, unit, _ = reg.find_prefixed_unit("Kilometers")
    assert (prefix.name, unit.name) == ("kilo", "meter")
    for text in ("µm", "μm", "um", "micrometer"):
        prefix, unit, _ = reg.find_prefixed_unit(text)
        assert (prefix.name, unit.name) == ("micro", "meter")
    prefix, unit, _ = reg.find_prefixed_unit("dam")
    assert prefix.name == "deca"

    # Only the first, metric, storage-exact unit of a dimension is prefixable.
    assert reg.find_prefixed_unit("kin") is None
    assert reg.find_prefixed_unit("kmin") is None
    assert reg.find_prefixed_unit("kdegC") is None
    assert reg.find_prefixed_unit("kK") is not None

    assert reg.strip_any_prefix("mg")[0].name == "milli"
    assert reg.strip_any_prefix("millisecond")[1] == "second"
    assert reg.strip_any_prefix("g") is None
    assert reg.find_prefix("µ") is reg.find_prefix("u")


def test_systems() -> None:
    reg = default_registry()

    assert reg.find_unit("mi")[0].system is System.IMPERIAL
    assert reg.find_unit("pc")[0].system is System.ASTRONOMICAL
    assert reg.find_unit("km") is None
    assert reg.is_prefixable(reg.find_unit("g")[0])
    assert not reg.is_prefixable(reg.find_unit("lb")[0])


def test_unique_symbols() -> None:
    reg = default_registry()
    seen = set()
    for unit, _ in reg.units():
        for symbol in unit.symbols:
            assert symbol not in seen
            seen.add(symbol)


def test_conflicts() -> None:
    meter = Unit("meter", ("m",))
    second = Unit("second", ("s",))

    with pytest.raises(RegistryConflict) as excinfo:
        Registry(
            [
                Dimension("Length", "L", Length, (meter,)),
                Dimension("Time", "T", Time, (second, Unit("moment", ("m",)))),
            ],
            dimension_aliases={},
        )
    assert any("'m'" in v for v in excinfo.value.violations)

    with pytest.raises(RegistryConflict) as excinfo:
        Registry(
            [
                Dimension("Length", "L", Length, (meter,)),
                Dimension("Time", "T", Time, (second, Unit("kilomoment", ("km",)))),
            ],
            dimension_aliases={},
        )
    assert any("kilo" in v for v in excinfo.value.violations)

    with pytest.raises(RegistryConflict):
        Registry([Dimension("Length", "L", Length, (meter,))])

    small = Registry([Dimension("Length", "L", Length, (meter,))], dimension_aliases={})
    assert small.find_unit("m")[0] is meter
    assert isinstance(excinfo.value, ValueError)


def test_frames() -> None:
    reg = default_registry()

    units = reg.units_frame()
    assert units.loc["inch", "dimension"] == "Length"
    assert units.loc["inch", "conversion_factor"] == 2.54
    assert units.loc["meter", "prefixable"]
    assert not units.loc["celsius", "prefixable"]
    assert units.loc["celsius", "affine_offset"] == 273.15

    dims = reg.dimensions_frame()
    assert list(dims.loc["Energy", ["mass", "length", "time"]]) == [1, 2, -2]
    assert dims.loc["Length", "symbol"] == "L"

    prefixes = reg.prefixes_frame()
    assert prefixes.loc["kilo", "exponent"] == 3
    assert len(prefixes) == len(registry.PREFIXES)
