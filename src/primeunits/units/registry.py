"""The static catalog of dimensions, units and SI prefixes.

The catalog is built once (see ``default_registry``) and never mutated, so
a ``Registry`` can be shared freely between threads.

Examples:
    >>> registry = default_registry()
    >>> unit, dimension = registry.find_unit_by_symbol("in")
    >>> unit.name, dimension.name
    ('inch', 'Length')
    >>> registry.find_dimension_by_vector(DimensionVector(1, 2, -2)).name
    'Energy'
    >>> prefix, remainder = registry.strip_any_prefix("km")
    >>> prefix.name, remainder
    ('kilo', 'm')
"""

import difflib
from functools import lru_cache
import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas  # type: ignore

from .dimension import DimensionVector, AXES
from .errors import UnitError
from .scale import ScaleVector, Identity, _2, _6, _10
from .unit import Dimension, SiPrefix, System, Unit


logger = logging.getLogger(__name__)


class RegistryConflict(UnitError):
    def __init__(self, violations: Sequence[str]) -> None:
        self.violations = tuple(violations)
        super().__init__(
            "Unit registry is ambiguous:\n" + "\n".join("  " + v for v in self.violations)
        )


# Symbols that read as a prefixed base unit but are accepted as written.
ALLOWED_AMBIGUITIES = frozenset({"ft"})

_IRREGULAR_PLURALS = {
    "inch": "inches",
    "foot": "feet",
    "henry": "henries",
    "stone": "stone",
    "lux": "lux",
    "candela": "candela",
    "fahrenheit": "fahrenheit",
    "rankine": "rankine",
    "psi": "psi",
    "horsepower": "horsepower",
    "torr": "torr",
    "bar": "bar",
    "celsius": "celsius",
    "kelvin": "kelvin",
    "siemens": "siemens",
    "hertz": "hertz",
    "stokes": "stokes",
}


def make_plural(singular: str) -> str:
    try:
        return _IRREGULAR_PLURALS[singular]
    except KeyError:
        return singular + "s"


def _normalize_name(name: str) -> str:
    return name.strip().lower().replace(" ", "_")


def _normalize_dimension_name(name: str) -> str:
    return "".join(c for c in name.lower() if c not in " _-")


PREFIXES = (
    SiPrefix("quecto", "q", -30),
    SiPrefix("ronto", "r", -27),
    SiPrefix("yocto", "y", -24),
    SiPrefix("zepto", "z", -21),
    SiPrefix("atto", "a", -18),
    SiPrefix("femto", "f", -15),
    SiPrefix("pico", "p", -12),
    SiPrefix("nano", "n", -9),
    SiPrefix("micro", "µ", -6, aliases=("μ", "u")),
    SiPrefix("milli", "m", -3),
    SiPrefix("centi", "c", -2),
    SiPrefix("deci", "d", -1),
    SiPrefix("deca", "da", 1),
    SiPrefix("hecto", "h", 2),
    SiPrefix("kilo", "k", 3),
    SiPrefix("mega", "M", 6),
    SiPrefix("giga", "G", 9),
    SiPrefix("tera", "T", 12),
    SiPrefix("peta", "P", 15),
    SiPrefix("exa", "E", 18),
    SiPrefix("zetta", "Z", 21),
    SiPrefix("yotta", "Y", 24),
    SiPrefix("ronna", "R", 27),
    SiPrefix("quetta", "Q", 30),
)

IMP = System.IMPERIAL
AST = System.ASTRONOMICAL

# Mass. The gram is a thousandth of the SI kilogram.
GRAM = Unit("gram", ("g",), _10(-3))
GRAIN = Unit("grain", ("gr",), _10(-4), 0.6479891, system=IMP)
CARAT = Unit("carat", ("ct",), _10(-4) * _2(1))
OUNCE = Unit("ounce", ("oz",), _10(-2), 2.8349523125, system=IMP)
TROY_OUNCE = Unit("troy_ounce", ("ozt",), _10(-2), 3.11034768, system=IMP)
TROY_POUND = Unit("troy_pound", ("lbt",), Identity, 0.3732417216, system=IMP)
POUND = Unit("pound", ("lb",), Identity, 0.45359237, system=IMP)
STONE = Unit("stone", ("st",), _10(1), 0.635029318, system=IMP)
SLUG = Unit("slug", ("slg",), _10(1), 1.4593902937206365, system=IMP)
TON = Unit("ton", ("t",), _10(3), 1.0160469088, system=IMP)

# Length
METER = Unit("meter", ("m",))
INCH = Unit("inch", ("in",), _10(-2), 2.54, system=IMP)
FOOT = Unit("foot", ("ft",), _10(-1), 3.048, system=IMP)
YARD = Unit("yard", ("yd",), Identity, 0.9144, system=IMP)
FATHOM = Unit("fathom", ("ftm",), Identity, 1.8288, system=IMP)
FURLONG = Unit("furlong", ("fur",), _10(2), 2.01168, system=IMP)
MILE = Unit("mile", ("mi",), _10(3), 1.609344, system=IMP)
NAUTICAL_MILE = Unit("nautical_mile", ("nmi",), _10(3), 1.852, system=IMP)
ASTRONOMICAL_UNIT = Unit("astronomical_unit", ("AU",), _10(11), 1.495978707, system=AST)
LIGHT_YEAR = Unit("light_year", ("ly",), _10(16), 0.94607304725808, system=AST)
PARSEC = Unit("parsec", ("pc",), _10(16), 3.08567758128, system=AST)

# Time
SECOND = Unit("second", ("s",))
MINUTE = Unit("minute", ("min",), _10(1) * _6(1))
HOUR = Unit("hour", ("h", "hr"), _10(2) * _6(2))
DAY = Unit("day", ("d",), _10(2) * _6(3) * _2(2))
WEEK = Unit("week", ("wk",), _10(3) * _6(3) * _2(2), 0.7)
MONTH = Unit("month", ("mo",), _10(3) * _6(4) * _2(1))
YEAR = Unit("year", ("yr",), _10(7), 3.1556926)

# Current, amount, luminosity
AMPERE = Unit("ampere", ("A",))
MOLE = Unit("mole", ("mol",))
CANDELA = Unit("candela", ("cd",))

# Temperature. Rankine and Fahrenheit degrees are 5/9 of a kelvin.
KELVIN = Unit("kelvin", ("K",))
CELSIUS = Unit("celsius", ("degC",), Identity, affine_offset=273.15)
RANKINE = Unit("rankine", ("R",), ScaleVector(0, -2, 1, 0))
FAHRENHEIT = Unit("fahrenheit", ("degF",), ScaleVector(0, -2, 1, 0), affine_offset=459.67, system=IMP)

# Angle
RADIAN = Unit("radian", ("rad",))
DEGREE = Unit("degree", ("deg",), ScaleVector(-2, -2, -1, 1))
GRADIAN = Unit("gradian", ("grad",), ScaleVector(-3, -1, -1, 1))
TURN = Unit("turn", ("rot", "turn"), ScaleVector(1, 0, 0, 1))
ARCMINUTE = Unit("arcminute", ("arcmin",), ScaleVector(-4, -2, -2, 1))
ARCSECOND = Unit("arcsecond", ("arcsec",), ScaleVector(-6, -2, -2, 1))

# Area and volume
HECTARE = Unit("hectare", ("hect",), _10(4))
ACRE = Unit("acre", ("acre",), _10(3), 0.40468564224, system=IMP)
LITER = Unit("liter", ("L", "l"), _10(-3))
GALLON = Unit("gallon", ("gal",), _10(-2), 0.3785411784, system=IMP)
UK_GALLON = Unit("uk_gallon", ("uk_gal",), _10(-2), 0.454609, system=IMP)
QUART = Unit("quart", ("qrt",), _10(-3), 0.946352946, system=IMP)
UK_QUART = Unit("uk_quart", ("uk_qrt",), _10(-3), 1.1365225, system=IMP)
PINT = Unit("pint", ("pnt",), _10(-3), 0.473176473, system=IMP)
UK_PINT = Unit("uk_pint", ("uk_pnt",), _10(-3), 0.56826125, system=IMP)
CUP = Unit("cup", ("cup",), _10(-4), 2.365882365, system=IMP)
UK_CUP = Unit("uk_cup", ("uk_cup",), _10(-4), 2.84130625, system=IMP)
FLUID_OUNCE = Unit("fluid_ounce", ("fl_oz",), _10(-5), 2.95735295625, system=IMP)
UK_FLUID_OUNCE = Unit("uk_fluid_ounce", ("uk_fl_oz",), _10(-5), 2.84130625, system=IMP)
TABLESPOON = Unit("tablespoon", ("tbsp",), _10(-5), 1.478676478125, system=IMP)
UK_TABLESPOON = Unit("uk_tablespoon", ("uk_tbsp",), _10(-5), 1.77581640625, system=IMP)
TEASPOON = Unit("teaspoon", ("tsp",), _10(-5), 0.492892159375, system=IMP)
UK_TEASPOON = Unit("uk_teaspoon", ("uk_tsp",), _10(-5), 0.59193880208333, system=IMP)
BUSHEL = Unit("bushel", ("bu",), _10(-1), 0.3523907016688, system=IMP)

# Mechanics
HERTZ = Unit("hertz", ("Hz",))
NEWTON = Unit("newton", ("N",))
JOULE = Unit("joule", ("J",))
NEWTON_METER = Unit("newton_meter", ("Nm",))
ELECTRON_VOLT = Unit("electron_volt", ("eV",), _10(-19), 1.602176634)
ERG = Unit("erg", ("erg",), _10(-7))
CALORIE = Unit("calorie", ("cal",), _10(1), 0.4184)
FOOT_POUND = Unit("foot_pound", ("ft_lb",), _10(1), 1.3558179483314004, system=IMP)
KILOWATT_HOUR = Unit("kilowatt_hour", ("kWh",), _10(5) * _6(2))
THERM = Unit("therm", ("thm",), _10(8), 1.05505585262, system=IMP)
WATT = Unit("watt", ("W",))
HORSEPOWER = Unit("horsepower", ("hp",), _10(3), 0.7456998715822702, system=IMP)
PASCAL = Unit("pascal", ("Pa",))
TORR = Unit("torr", ("Torr",), _10(2), 1.3332236842105263)
PSI = Unit("psi", ("psi",), _10(4), 0.6894757293168361, system=IMP)
BAR = Unit("bar", ("bar",), _10(5))
ATMOSPHERE = Unit("atmosphere", ("atm",), _10(5), 1.01325)
STOKES = Unit("stokes", ("St",), _10(-4))

# Electromagnetism
COULOMB = Unit("coulomb", ("C",))
VOLT = Unit("volt", ("V",))
FARAD = Unit("farad", ("F",))
OHM = Unit("ohm", ("Ω",))
SIEMENS = Unit("siemens", ("S",))
HENRY = Unit("henry", ("H",))
TESLA = Unit("tesla", ("T",))
GAUSS = Unit("gauss", ("G",), _10(-4))
WEBER = Unit("weber", ("Wb",))

# Photometry
LUX = Unit("lux", ("lx",))
LUMEN = Unit("lumen", ("lm",))


def _dimension(name: str, vector: DimensionVector, *units: Unit, symbol: Optional[str] = None) -> Dimension:
    return Dimension(name, str(vector) if symbol is None else symbol, vector, units)


def _v(*exponents: int) -> DimensionVector:
    return DimensionVector(*exponents)


BASIS_DIMENSIONS = (
    _dimension("Mass", _v(1), GRAM, GRAIN, CARAT, OUNCE, TROY_OUNCE, TROY_POUND, POUND, STONE, SLUG, TON,
               symbol="M"),
    _dimension("Length", _v(0, 1), METER, INCH, FOOT, YARD, FATHOM, FURLONG, MILE, NAUTICAL_MILE,
               ASTRONOMICAL_UNIT, LIGHT_YEAR, PARSEC, symbol="L"),
    _dimension("Time", _v(0, 0, 1), SECOND, MINUTE, HOUR, DAY, WEEK, MONTH, YEAR, symbol="T"),
    _dimension("Current", _v(0, 0, 0, 1), AMPERE, symbol="I"),
    _dimension("Temperature", _v(0, 0, 0, 0, 1), KELVIN, CELSIUS, RANKINE, FAHRENHEIT, symbol="θ"),
    _dimension("Amount", _v(0, 0, 0, 0, 0, 1), MOLE, symbol="N"),
    _dimension("Luminosity", _v(0, 0, 0, 0, 0, 0, 1), CANDELA, LUMEN, symbol="Cd"),
    _dimension("Angle", _v(0, 0, 0, 0, 0, 0, 0, 1), RADIAN, DEGREE, GRADIAN, TURN, ARCMINUTE, ARCSECOND,
               symbol="A"),
)

DERIVED_DIMENSIONS = (
    _dimension("Dimensionless", _v(), symbol="1"),
    _dimension("Area", _v(0, 2), ACRE, HECTARE),
    _dimension("Volume", _v(0, 3), LITER, GALLON, QUART, PINT, CUP, FLUID_OUNCE, TABLESPOON, TEASPOON,
               UK_GALLON, UK_QUART, UK_PINT, UK_CUP, UK_FLUID_OUNCE, UK_TABLESPOON, UK_TEASPOON, BUSHEL),
    _dimension("Wave Number", _v(0, -1)),
    _dimension("Frequency", _v(0, 0, -1), HERTZ),
    _dimension("Velocity", _v(0, 1, -1)),
    _dimension("Acceleration", _v(0, 1, -2)),
    _dimension("Jerk", _v(0, 1, -3)),
    _dimension("Momentum", _v(1, 1, -1)),
    _dimension("Force", _v(1, 1, -2), NEWTON),
    _dimension("Energy", _v(1, 2, -2), JOULE, NEWTON_METER, ELECTRON_VOLT, ERG, CALORIE, FOOT_POUND,
               KILOWATT_HOUR, THERM),
    _dimension("Power", _v(1, 2, -3), WATT, HORSEPOWER),
    _dimension("Action", _v(1, 2, -1)),
    _dimension("Pressure", _v(1, -1, -2), PASCAL, TORR, PSI, BAR, ATMOSPHERE),
    _dimension("Linear Mass Density", _v(1, -1)),
    _dimension("Surface Mass Density", _v(1, -2)),
    _dimension("Volume Mass Density", _v(1, -3)),
    _dimension("Dynamic Viscosity", _v(1, -1, -1)),
    _dimension("Kinematic Viscosity", _v(0, 2, -1), STOKES),
    _dimension("Surface Tension", _v(1, 0, -2)),
    _dimension("Specific Energy", _v(0, 2, -2)),
    _dimension("Specific Power", _v(0, 2, -3)),
    _dimension("Mass Flow Rate", _v(1, 0, -1)),
    _dimension("Volume Flow Rate", _v(0, 3, -1)),
    _dimension("Power Density", _v(1, -1, -3)),
    _dimension("Force Density", _v(1, -2, -2)),
    _dimension("Heat Flux", _v(1, 0, -3)),
    _dimension("Electric Charge", _v(0, 0, 1, 1), COULOMB),
    _dimension("Electric Potential", _v(1, 2, -3, -1), VOLT),
    _dimension("Capacitance", _v(-1, -2, 4, 2), FARAD),
    _dimension("Electric Resistance", _v(1, 2, -3, -2), OHM),
    _dimension("Electric Conductance", _v(-1, -2, 3, 2), SIEMENS),
    _dimension("Inductance", _v(1, 2, -2, -2), HENRY),
    _dimension("Electric Field", _v(1, 1, -3, -1)),
    _dimension("Magnetic Field", _v(1, 0, -2, -1), TESLA, GAUSS),
    _dimension("Magnetic Flux", _v(1, 2, -2, -1), WEBER),
    _dimension("Linear Charge Density", _v(0, -1, 1, 1)),
    _dimension("Surface Charge Density", _v(0, -2, 1, 1)),
    _dimension("Volume Charge Density", _v(0, -3, 1, 1)),
    _dimension("Magnetizing Field", _v(0, -1, 0, 1)),
    _dimension("Entropy", _v(1, 2, -2, 0, -1)),
    _dimension("Specific Heat Capacity", _v(0, 2, -2, 0, -1)),
    _dimension("Molar Heat Capacity", _v(1, 2, -2, 0, -1, -1)),
    _dimension("Thermal Conductivity", _v(1, 1, -3, 0, -1)),
    _dimension("Thermal Resistance", _v(-1, -2, 3, 0, 1)),
    _dimension("Thermal Expansion", _v(0, 0, 0, 0, -1)),
    _dimension("Molar Mass", _v(1, 0, 0, 0, 0, -1)),
    _dimension("Molar Volume", _v(0, 3, 0, 0, 0, -1)),
    _dimension("Molar Concentration", _v(0, -3, 0, 0, 0, 1)),
    _dimension("Molal Concentration", _v(-1, 0, 0, 0, 0, 1)),
    _dimension("Molar Flow Rate", _v(0, 0, -1, 0, 0, 1)),
    _dimension("Molar Flux", _v(0, -2, -1, 0, 0, 1)),
    _dimension("Molar Energy", _v(1, 2, -2, 0, 0, -1)),
    _dimension("Illuminance", _v(0, -2, 0, 0, 0, 0, 1), LUX),
    _dimension("Luminous Exposure", _v(0, -2, 1, 0, 0, 0, 1)),
    _dimension("Luminous Efficacy", _v(-1, -2, 3, 0, 0, 0, 1)),
    _dimension("Angular Velocity", _v(0, 0, -1, 0, 0, 0, 0, 1)),
    _dimension("Angular Acceleration", _v(0, 0, -2, 0, 0, 0, 0, 1)),
)

DIMENSION_ALIASES = {
    "density": "Volume Mass Density",
    "mass density": "Volume Mass Density",
    "viscosity": "Dynamic Viscosity",
    "charge": "Electric Charge",
    "potential": "Electric Potential",
    "voltage": "Electric Potential",
    "resistance": "Electric Resistance",
    "conductance": "Electric Conductance",
    "speed": "Velocity",
    "luminous intensity": "Luminosity",
    "scalar": "Dimensionless",
}


class Registry:
    """Read-only lookup tables over a set of dimensions and SI prefixes.

    Construction validates that no two units share a symbol and that no
    unit symbol can also be read as an SI prefix followed by a prefixable
    base unit (apart from ``allowed_ambiguities``).
    """

    def __init__(self, dimensions: Iterable[Dimension], prefixes: Iterable[SiPrefix] = PREFIXES,
                 allowed_ambiguities: Iterable[str] = ALLOWED_AMBIGUITIES,
                 dimension_aliases: Mapping[str, str] = DIMENSION_ALIASES) -> None:
        self._dimensions: Tuple[Dimension, ...] = tuple(dimensions)
        self._prefixes: Tuple[SiPrefix, ...] = tuple(prefixes)
        self._allowed_ambiguities = frozenset(allowed_ambiguities)

        violations: List[str] = []
        self._by_symbol: Dict[str, Tuple[Unit, Dimension]] = {}
        self._by_name: Dict[str, Tuple[Unit, Dimension]] = {}
        self._by_vector: Dict[DimensionVector, Dimension] = {}
        self._by_dimension_name: Dict[str, Dimension] = {}
        self._spellings: Optional[List[str]] = None

        for dimension in self._dimensions:
            if dimension.vector in self._by_vector:
                violations.append(
                    "dimensions '{}' and '{}' share the vector {}".format(
                        self._by_vector[dimension.vector].name, dimension.name, dimension.vector
                    )
                )
            else:
                self._by_vector[dimension.vector] = dimension
            self._by_dimension_name[_normalize_dimension_name(dimension.name)] = dimension
            self._by_dimension_name.setdefault(_normalize_dimension_name(dimension.symbol), dimension)
            for unit in dimension.units:
                for symbol in unit.symbols:
                    if symbol in self._by_symbol:
                        violations.append(
                            "symbol '{}' is used by both '{}' and '{}'".format(
                                symbol, self._by_symbol[symbol][0].name, unit.name
                            )
                        )
                    else:
                        self._by_symbol[symbol] = (unit, dimension)
                for name in (unit.name, make_plural(unit.name)):
                    self._by_name.setdefault(_normalize_name(name), (unit, dimension))

        for alias, target in dimension_aliases.items():
            dimension = self._by_dimension_name.get(_normalize_dimension_name(target))
            if dimension is None:
                violations.append("alias '{}' names unknown dimension '{}'".format(alias, target))
            else:
                self._by_dimension_name.setdefault(_normalize_dimension_name(alias), dimension)

        violations += self._prefix_ambiguities()

        if violations:
            for violation in violations:
                logger.error("Unit registry conflict: %s", violation)
            raise RegistryConflict(violations)

        logger.debug(
            "Built unit registry: %d dimensions, %d units, %d prefixes",
            len(self._dimensions), sum(len(d.units) for d in self._dimensions), len(self._prefixes),
        )

    def _prefix_ambiguities(self) -> List[str]:
        violations = []
        for symbol, (unit, _) in self._by_symbol.items():
            if symbol in self._allowed_ambiguities:
                continue
            for prefix in self._prefixes:
                remainder = prefix.strip_symbol(symbol)
                if remainder is None:
                    continue
                found = self._by_symbol.get(remainder)
                if found is not None and found[1].is_prefixable(found[0]):
                    violations.append(
                        "symbol '{}' of '{}' also reads as {} + '{}'".format(
                            symbol, unit.name, prefix.name, remainder
                        )
                    )
        return violations

    @property
    def dimensions(self) -> Tuple[Dimension, ...]:
        return self._dimensions

    @property
    def prefixes(self) -> Tuple[SiPrefix, ...]:
        return self._prefixes

    def units(self) -> Iterator[Tuple[Unit, Dimension]]:
        for dimension in self._dimensions:
            for unit in dimension.units:
                yield unit, dimension

    def find_unit_by_symbol(self, text: str) -> Optional[Tuple[Unit, Dimension]]:
        return self._by_symbol.get(text)

    def find_unit_by_name(self, text: str) -> Optional[Tuple[Unit, Dimension]]:
        return self._by_name.get(_normalize_name(text))

    def find_unit(self, text: str) -> Optional[Tuple[Unit, Dimension]]:
        found = self.find_unit_by_symbol(text)
        if found is None:
            found = self.find_unit_by_name(text)
        return found

    def find_dimension_by_vector(self, vector: DimensionVector) -> Optional[Dimension]:
        return self._by_vector.get(vector)

    def find_dimension_by_name(self, name: str) -> Optional[Dimension]:
        return self._by_dimension_name.get(_normalize_dimension_name(name))

    def find_prefix(self, symbol: str) -> Optional[SiPrefix]:
        for prefix in self._prefixes:
            if symbol in prefix.symbols or symbol == prefix.name:
                return prefix
        return None

    def is_prefixable(self, unit: Unit) -> bool:
        found = self.find_unit_by_symbol(unit.symbol)
        return found is not None and found[0] is unit and found[1].is_prefixable(unit)

    def find_prefixed_unit(self, text: str) -> Optional[Tuple[SiPrefix, Unit, Dimension]]:
        """Split ``text`` into an SI prefix and a prefixable unit.

        Every prefix is tried in order, by symbol and then by name; the first
        split whose remainder is a prefixable unit wins.
        """
        for prefix in self._prefixes:
            remainder = prefix.strip_symbol(text)
            if remainder is not None:
                found = self.find_unit_by_symbol(remainder)
                if found is not None and found[1].is_prefixable(found[0]):
                    return prefix, found[0], found[1]
            remainder = prefix.strip_name(text)
            if remainder is not None:
                found = self.find_unit_by_name(remainder)
                if found is not None and found[1].is_prefixable(found[0]):
                    return prefix, found[0], found[1]
        return None

    def strip_any_prefix(self, text: str) -> Optional[Tuple[SiPrefix, str]]:
        found = self.find_prefixed_unit(text)
        if found is None:
            return None
        prefix, _, _ = found
        remainder = prefix.strip_symbol(text)
        if remainder is None or self.find_unit_by_symbol(remainder) is None:
            remainder = prefix.strip_name(text)
        return prefix, remainder  # type: ignore

    def suggest(self, text: str, limit: int = 3) -> List[str]:
        """Registered spellings closest to an unknown unit ``text``.

        Candidates are every unit symbol and name, and every SI prefix
        applied to a prefixable unit.

        Example:
            >>> "kilometer" in default_registry().suggest("kilometr")
            True
        """
        if self._spellings is None:
            spellings = set()
            for unit, dimension in self.units():
                spellings.update(unit.symbols)
                spellings.add(unit.name)
                if dimension.is_prefixable(unit):
                    for prefix in self._prefixes:
                        spellings.add(prefix.symbol + unit.symbol)
                        spellings.add(prefix.name + unit.name)
            self._spellings = sorted(spellings)
        return difflib.get_close_matches(text, self._spellings, n=limit)

    def dimensions_frame(self) -> pandas.DataFrame:
        return pandas.DataFrame(
            [
                dict(
                    name=d.name,
                    symbol=d.symbol,
                    **dict(zip(AXES, d.vector)),
                    units=", ".join(u.symbol for u in d.units),
                )
                for d in self._dimensions
            ],
            columns=["name", "symbol", *AXES, "units"],
        ).set_index("name")

    def units_frame(self) -> pandas.DataFrame:
        return pandas.DataFrame(
            [
                dict(
                    name=u.name,
                    symbols=", ".join(u.symbols),
                    dimension=d.name,
                    two=u.scale.two,
                    three=u.scale.three,
                    five=u.scale.five,
                    pi=u.scale.pi,
                    conversion_factor=u.conversion_factor,
                    affine_offset=u.affine_offset,
                    system=str(u.system),
                    prefixable=d.is_prefixable(u),
                )
                for u, d in self.units()
            ],
            columns=["name", "symbols", "dimension", "two", "three", "five", "pi",
                     "conversion_factor", "affine_offset", "system", "prefixable"],
        ).set_index("name")

    def prefixes_frame(self) -> pandas.DataFrame:
        return pandas.DataFrame(
            [dict(name=p.name, symbol=p.symbol, exponent=p.exponent) for p in self._prefixes],
            columns=["name", "symbol", "exponent"],
        ).set_index("name")


@lru_cache(maxsize=None)
def default_registry() -> Registry:
    return Registry(BASIS_DIMENSIONS + DERIVED_DIMENSIONS)
