from collections import defaultdict
from dataclasses import dataclass
from fractions import Fraction
from functools import wraps
import inspect
from itertools import chain
import numpy
import re
from typing import (
    Any, Optional, Tuple, Iterator, Iterable, Sequence, List,
    Type, Callable, Mapping, MutableMapping, Union, TypeVar,
)
import warnings
import pandas  # type: ignore

from .dimension import DimensionVector, Dimensionless
from .errors import DimensionMismatch, ScaleMismatch
from .expression import current_registry, evaluate
from .naming import unit_name
from .policy import UnitLike, erase, erase_angle, rescale, resolve_scale
from .scale import ScaleVector, Identity
from .unit import ResolvedUnit


# Largest root taken exactly by ``power``; other exponents only apply to
# dimensionless values.
_MAX_ROOT = 12

# Float format specs; any other format string starts with a target unit.
_NUMBER_FORMAT = re.compile(r"(?:.?[<>=^])?[+\- ]?z?#?0?\d*[_,]?(?:\.\d+)?[eEfFgGn%]?\Z", re.DOTALL)


def _split_format(format_str: str) -> Tuple[Optional[str], str]:
    target, sep, spec = format_str.partition(":")
    if sep and target:
        # "km:2" asks for two decimals.
        if spec.isdigit():
            spec = "." + spec + "f"
        return target, spec
    if _NUMBER_FORMAT.match(format_str):
        return None, format_str
    return format_str, ""


def _display_symbol(text: str) -> str:
    registry = current_registry()
    found = registry.find_unit(text)
    if found is not None:
        return found[0].symbol
    prefixed = registry.find_prefixed_unit(text)
    if prefixed is not None:
        prefix, unit, _ = prefixed
        return prefix.symbol + unit.symbol
    return text


def _argument_name(index: int, labels: Mapping[int, str], offset: int, argument: str) -> str:
    position = {
        1: "first",
        2: "second",
        3: "third",
        4: "fourth",
        5: "fifth",
        6: "sixth",
    }
    if index in labels:
        return f"{labels[index]} {argument}"
    elif index + 1 + offset in position:
        return f"{position[index + 1 + offset]} {argument}"
    else:
        return f"{argument} {index + 1 + offset}"


def _is_zero_literal(x: "Quantity") -> bool:
    if not isinstance(x, _Literal):
        return False
    try:
        return not numpy.any(x.value != 0)
    except (TypeError, ValueError):
        return False


def _value_in(x: "Quantity", scale: ScaleVector) -> Any:
    if x.scale == scale:
        return x.value
    return x.value * x.scale.ratio(scale)


def _erased(x: "Quantity") -> Any:
    return _value_in(x, Identity)


def _erased_units(func: Callable, *inputs: "Quantity", labels: Mapping[int, str] = {},
                  offset: int = 0, argument: str = "argument") -> Tuple[DimensionVector, ScaleVector]:
    for i, x in enumerate(inputs):
        if not (x.dimension.is_zero() or x.dimension.is_angle()):
            raise DimensionMismatch(
                Dimensionless,
                x.dimension,
                f"apply {func.__name__} to {_argument_name(i, labels, offset, argument)}",
            )

    return Dimensionless, Identity


def _match_units(func: Callable, *inputs: "Quantity", labels: Mapping[int, str] = {},
                 offset: int = 0, argument: str = "argument") -> Tuple[DimensionVector, ScaleVector]:
    for x in inputs:
        if not _is_zero_literal(x):
            reference = x
            break
    else:
        reference = inputs[0]
    dimension = reference.dimension
    scale = reference.scale
    for i, x in enumerate(inputs):
        if x is not reference and _is_zero_literal(x):
            continue
        if x.dimension != dimension:
            raise DimensionMismatch(
                dimension,
                x.dimension,
                f"apply {func.__name__} to {_argument_name(i, labels, offset, argument)}",
            )
        if x.scale != scale:
            try:
                scale = resolve_scale(scale, x.scale)
            except ScaleMismatch:
                raise ScaleMismatch(
                    scale,
                    x.scale,
                    f"apply {func.__name__} to {_argument_name(i, labels, offset, argument)}",
                ) from None

    return dimension, scale


def _multiply_units(func: Callable, *inputs: "Quantity", labels: Mapping[int, str] = {},
                    offset: int = 0, argument: str = "argument") -> Tuple[DimensionVector, ScaleVector]:
    dimension = inputs[0].dimension
    scale = inputs[0].scale
    for x in inputs[1:]:
        dimension = dimension.add(x.dimension)
        scale = scale.mul(x.scale)

    return dimension, scale


def _divide_units(func: Callable, *inputs: "Quantity", labels: Mapping[int, str] = {},
                  offset: int = 0, argument: str = "argument") -> Tuple[DimensionVector, ScaleVector]:
    dimension = inputs[0].dimension
    scale = inputs[0].scale
    for x in inputs[1:]:
        dimension = dimension.add(x.dimension.negate())
        scale = scale.div(x.scale)

    return dimension, scale


def _exponent(func: Callable, p: "Quantity") -> Optional[Fraction]:
    if not p.dimension.is_zero():
        raise DimensionMismatch(Dimensionless, p.dimension, f"use the exponent of {func.__name__}")
    value = _erased(p)
    if numpy.ndim(value) != 0:
        return None
    exponent = Fraction(float(value)).limit_denominator(_MAX_ROOT)
    if float(exponent) != float(value):
        return None
    return exponent


def _raised(func: Callable, x: "Quantity", exponent: Optional[Fraction]) -> Tuple[DimensionVector, ScaleVector]:
    if exponent is None:
        if not x.dimension.is_zero():
            raise ValueError(
                f"Can't apply {func.__name__} to {x.dimension.describe()}: "
                "exponent must be a single small rational number"
            )
        return Dimensionless, Identity
    dimension = x.dimension.scale(exponent.numerator).root(exponent.denominator)
    scale = ScaleVector(*(exponent.numerator * (e // exponent.denominator) for e in x.scale))
    return dimension, scale


def _power_base(scale: ScaleVector, exponent: Optional[Fraction]) -> ScaleVector:
    # The scale a value must be in before an exact root can be taken.
    if exponent is None:
        return Identity
    return ScaleVector(*(exponent.denominator * (e // exponent.denominator) for e in scale))


def _power_units(func: Callable, x: "Quantity", p: "Quantity") -> Tuple[DimensionVector, ScaleVector]:
    return _raised(func, x, _exponent(func, p))


def _power_values(dimension: DimensionVector, scale: ScaleVector, x: "Quantity", p: "Quantity") -> Tuple[Any, ...]:
    return _value_in(x, _power_base(x.scale, _exponent(numpy.power, p))), _erased(p)


def _plain_values(dimension: DimensionVector, scale: ScaleVector, *inputs: "Quantity") -> Tuple[Any, ...]:
    return tuple(x.value for x in inputs)


def _aligned_values(dimension: DimensionVector, scale: ScaleVector, *inputs: "Quantity") -> Tuple[Any, ...]:
    return tuple(
        _value_in(x, scale) if x.dimension == dimension else x.value
        for x in inputs
    )


def _erased_values(dimension: DimensionVector, scale: ScaleVector, *inputs: "Quantity") -> Tuple[Any, ...]:
    return tuple(_erased(x) for x in inputs)


@dataclass(frozen=True)
class _UfuncUnits:
    unit_map: Callable[..., Tuple[DimensionVector, ScaleVector]] = _erased_units
    wrap_output: bool = True
    align: Callable[..., Tuple[Any, ...]] = _erased_values


_ufuncs: MutableMapping[numpy.ufunc, _UfuncUnits] = defaultdict(_UfuncUnits)
_arrayfuncs: MutableMapping[Callable, Callable] = {}

_upcast_types: List[Type] = []

# Pandas (Series)
try:
    from pandas import Series

    _upcast_types.append(Series)
except ImportError:
    pass

# xarray (DataArray, Dataset, Variable)
try:
    from xarray import DataArray, Dataset, Variable

    _upcast_types += [DataArray, Dataset, Variable]
except ImportError:
    pass


T_Callable = TypeVar("T_Callable", bound=Callable)


def _check_implemented(fn: T_Callable) -> T_Callable:
    @wraps(fn)
    def wrapped(self: Any, *args: Any, **kwargs: Any) -> Any:
        other = args[0]
        if type(other) in _upcast_types:
            return NotImplemented
        # pandas often gets to arrays of quantities [ Q_(1,"m"), Q_(2,"m")]
        # and expects Quantity * array[Quantity] should return NotImplemented
        elif isinstance(other, list) and other and isinstance(other[0], type(self)):
            return NotImplemented
        return fn(self, *args, **kwargs)

    return wrapped  # type: ignore


def _delegate_to(delegate: Any) -> Callable[[T_Callable], T_Callable]:
    def decorator(method: T_Callable) -> T_Callable:
        return getattr(delegate, method.__name__)  # type: ignore
    return decorator


def _op(method: Callable[["Quantity", Any], Any]) -> Callable[["Quantity", Any], "Quantity"]:
    return _check_implemented(_delegate_to(numpy.lib.mixins.NDArrayOperatorsMixin)(method))


def _iop(method: Callable[["Quantity", Any], Any]) -> Callable[["Quantity", Any], Any]:
    wrapped = _check_implemented(_delegate_to(numpy.lib.mixins.NDArrayOperatorsMixin)(method))

    @wraps(method)
    def fn(self: "Quantity", other: Any) -> Any:
        if isinstance(self.value, numpy.ndarray):
            return wrapped(self, other)
        else:
            return NotImplemented
    return fn


ArrayLike = Any
Dtype = Any


class UnitStrippedWarning(UserWarning):
    pass


@dataclass(frozen=True, eq=False, order=False)
class Quantity(numpy.lib.mixins.NDArrayOperatorsMixin, pandas.api.extensions.ExtensionArray):
    """A value, or numpy array of values, stored in the unit given by
    ``dimension`` and ``scale``.

    Arithmetic checks dimensions; sums of differently scaled quantities are
    expressed in the scale chosen by the configured rescale policy.
    """
    value: Any
    dimension: DimensionVector
    scale: ScaleVector

    def __post_init__(self) -> None:
        if not isinstance(self.dimension, DimensionVector):
            raise TypeError(
                f"Invalid dimension: got {type(self.dimension).__name__}, expected DimensionVector"
            )
        if not isinstance(self.scale, ScaleVector):
            raise TypeError(
                f"Invalid scale: got {type(self.scale).__name__}, expected ScaleVector"
            )

    @classmethod
    def of(cls, value: Any, unit: UnitLike) -> "Quantity":
        """A quantity of ``value`` in ``unit``, converted to the unit's storage form.

        Example:
            >>> str(Quantity.of(0.0, "degC"))
            '273.15 K'
            >>> Quantity.of(3.0, "km").value
            3.0
        """
        resolved = evaluate(unit)
        if isinstance(value, (list, tuple)):
            value = numpy.asarray(value, dtype=float)
        return cls(resolved.to_storage(value), resolved.dimension, resolved.scale)

    @property
    def unit(self) -> ResolvedUnit:
        return ResolvedUnit(self.dimension, self.scale)

    def __eq__(self, other: Any) -> Any:
        if type(other) in _upcast_types:
            return NotImplemented

        other = _wrap(other)

        dimension, scale = _match_units(self.__eq__, self, other)
        left, right = _aligned_values(dimension, scale, self, other)

        result = left == right
        if isinstance(result, numpy.bool_):
            return bool(result)
        return result

    def __hash__(self) -> Any:
        return hash((self.dimension, _erased(self)))

    def in_unit(self, unit: Union[UnitLike, "Quantity"]) -> Any:
        """The bare value of this quantity expressed in ``unit``.

        ``unit`` may be a unit expression or another quantity, in which case
        the result is the dimensionless ratio of the two.
        """
        if isinstance(unit, Quantity):
            ratio = self / unit
            if not ratio.dimension.is_zero():
                raise DimensionMismatch(unit.dimension, self.dimension, "convert units")
            return ratio.erase()
        return rescale(self.value, self.unit, unit)

    def to(self, unit: UnitLike) -> "Quantity":
        """The same quantity stored in the storage unit of ``unit``."""
        target = evaluate(unit)
        if target.dimension != self.dimension:
            raise DimensionMismatch(target.dimension, self.dimension, "convert units")
        return self.rescale(target.scale)

    def rescale(self, scale: ScaleVector) -> "Quantity":
        return Quantity(_value_in(self, scale), self.dimension, scale)

    def erase(self) -> Any:
        """The bare number of a dimensionless or pure angle quantity, in
        identity scale or radians."""
        return erase(self.value, self.unit)

    def erase_angle(self) -> "Quantity":
        value, unit = erase_angle(self.value, self.unit)
        return Quantity(value, unit.dimension, unit.scale)

    def __float__(self) -> float:
        return float(self.erase())

    def _suffix(self) -> str:
        if self.dimension.is_zero() and self.scale.is_identity():
            return ""
        return unit_name(self.unit)

    def __str__(self) -> str:
        suffix = self._suffix()
        if suffix != "":
            return str(self.value) + " " + suffix
        else:
            return str(self.value)

    def __format__(self, format_str: str) -> str:
        """Format the value in the quantity's own unit, or in the unit that
        starts ``format_str``.

        Example:
            >>> "{:km}".format(Quantity.of(1500.0, "m"))
            '1.5 km'
            >>> "{:degC:.1f}".format(Quantity.of(300.0, "K"))
            '26.9 degC'
            >>> "{:.2f}".format(Quantity.of(1500.0, "m"))
            '1500.00 m'

        A unit spelled like a float presentation type (``g``, ``G``) needs
        a trailing colon: ``"{:g:}"``.
        """
        target, spec = _split_format(format_str)
        if target is not None:
            return ("{:" + spec + "} {}").format(self.in_unit(target), _display_symbol(target))
        suffix = self._suffix()
        if suffix != "":
            return ("{:" + format_str + "} {}").format(self.value, suffix)
        else:
            return ("{:" + format_str + "}").format(self.value)

    def __len__(self) -> int:
        return len(self.value)

    def __getitem__(self, key: Any) -> "Quantity":
        return Quantity(
            self.value[key],
            self.dimension,
            self.scale,
        )

    def __setitem__(self, key: Any, value: Any) -> None:
        value = _wrap(value)
        dimension, _ = _match_units(self.__setitem__, self, value)
        if value.dimension == dimension:
            self.value[key] = _value_in(value, self.scale)
        else:
            self.value[key] = value.value

    def __iter__(self) -> "Iterator[Quantity]":
        for value in iter(self.value):
            yield Quantity(
                value,
                self.dimension,
                self.scale,
            )

    def __array__(self, dtype: Optional[Dtype] = None, copy: Optional[bool] = None) -> numpy.ndarray:
        warnings.warn(
            "The unit of the quantity is stripped when downcasting to ndarray.",
            UnitStrippedWarning,
            stacklevel=2,
        )
        return numpy.asarray(self.value, dtype=dtype)

    def __array_function__(self, func: Callable, types: Iterable[Type],
                           args: Iterable[Any], kwargs: Mapping[str, Any]) -> Any:
        if any((t in _upcast_types) for t in types):
            return NotImplemented
        func_units = _arrayfuncs.get(func)
        if func_units is None:
            return NotImplemented

        return func_units(args, kwargs)

    def __array_ufunc__(self, ufunc: numpy.ufunc, method: str, *inputs: Any, **kwargs: Any) -> Any:
        if any((type(arg) in _upcast_types) for arg in chain(inputs, kwargs.values())):
            return NotImplemented

        ufunc_units = _ufuncs[ufunc]
        wrapped = tuple(_wrap(i) for i in inputs)
        result_dimension, result_scale = ufunc_units.unit_map(ufunc, *wrapped)
        inputs = ufunc_units.align(result_dimension, result_scale, *wrapped)

        out = kwargs.get('out', ())
        if out:
            if ufunc_units.wrap_output:
                for x in out:
                    if not isinstance(x, Quantity):
                        raise TypeError(
                            f"Invalid type for '{ufunc.__name__}' output: should be Quantity"
                        )
                    if x.dimension != result_dimension:
                        raise DimensionMismatch(
                            result_dimension, x.dimension, f"write '{ufunc.__name__}' output"
                        )
                    if x.scale != result_scale:
                        raise ScaleMismatch(
                            result_scale, x.scale, f"write '{ufunc.__name__}' output"
                        )
            else:
                for x in out:
                    if isinstance(x, Quantity):
                        raise TypeError(
                            f"Invalid type for '{ufunc.__name__}' output: should not be Quantity"
                        )
            kwargs['out'] = tuple(
                x.value if isinstance(x, Quantity) else x
                for x in out)

        return self._wrap_ufunc_output(
            getattr(ufunc, method)(*inputs, **kwargs),
            ufunc_units,
            result_dimension,
            result_scale,
            method,
        )

    def _wrap_ufunc_output(self, result: Any, ufunc_units: _UfuncUnits,
                           result_dimension: DimensionVector, result_scale: ScaleVector,
                           method: str) -> Any:
        if type(result) is tuple:
            if ufunc_units.wrap_output:
                return tuple(type(self)(x, result_dimension, result_scale) for x in result)
            else:
                return result
        elif method == 'at':
            return None
        else:
            if ufunc_units.wrap_output:
                return type(self)(result, result_dimension, result_scale)
            else:
                return result

    @property
    def shape(self) -> Tuple[int, ...]:
        try:
            return self.value.shape  # type: ignore
        except AttributeError:
            return ()

    @property
    def ndim(self) -> int:
        try:
            return self.value.ndim  # type: ignore
        except AttributeError:
            return 0

    @property
    def size(self) -> int:
        return numpy.size(self.value)  # type: ignore

    @property
    def T(self) -> "Quantity":
        return Quantity(
            self.value.T,
            self.dimension,
            self.scale,
        )

    @property
    def dtype(self) -> Dtype:
        return numpy.asarray(self.value).dtype

    @property
    def nbytes(self) -> int:
        return numpy.asarray(self.value).nbytes  # type: ignore

    @_delegate_to(numpy)
    def copy(self) -> "Quantity": ...

    def __copy__(self) -> "Quantity":
        return self.copy()

    def __deepcopy__(self, memo: Any = None) -> "Quantity":
        return self.copy()

    @_delegate_to(numpy)
    def cumsum(self, axis: Optional[int] = None, dtype: Optional[Dtype] = None,
               out: Optional["Quantity"] = None) -> "Quantity": ...

    @_delegate_to(numpy)
    def max(self, axis: Optional[Union[int, Sequence[int]]] = None,
            out: Optional["Quantity"] = None, keepdims: Optional[bool] = None,
            initial: Optional["Quantity"] = None, where: Optional[ArrayLike] = None) -> "Quantity": ...

    @_delegate_to(numpy)
    def mean(self, axis: Optional[Union[int, Sequence[int]]] = None, dtype: Optional[Dtype] = None,
             out: Optional["Quantity"] = None, keepdims: Optional[bool] = None) -> "Quantity": ...

    @_delegate_to(numpy)
    def min(self, axis: Optional[Union[int, Sequence[int]]] = None,
            out: Optional["Quantity"] = None, keepdims: Optional[bool] = None,
            initial: Optional["Quantity"] = None, where: Optional[ArrayLike] = None) -> "Quantity": ...

    @_delegate_to(numpy)
    def ravel(self, order: str = 'C') -> "Quantity": ...

    @_delegate_to(numpy)
    def reshape(self, shape: Union[int, Sequence[int]], order: str = 'C') -> "Quantity": ...

    @_delegate_to(numpy)
    def round(self, decimals: int = 0, out: Optional["Quantity"] = None) -> "Quantity": ...

    def sqrt(self) -> "Quantity":
        return numpy.sqrt(self)  # type: ignore

    @_delegate_to(numpy)
    def squeeze(self, axis: Optional[int] = None) -> "Quantity": ...

    @_delegate_to(numpy)
    def std(self, axis: Optional[Union[int, Sequence[int]]] = None,
            dtype: Optional[Dtype] = None, out: Optional["Quantity"] = None,
            ddof: int = 0, keepdims: bool = False) -> "Quantity": ...

    @_delegate_to(numpy)
    def sum(self, axis: Optional[Union[int, Sequence[int]]] = None,
            dtype: Optional[Dtype] = None, out: Optional["Quantity"] = None,
            keepdims: Optional[bool] = None, initial: Optional["Quantity"] = None,
            where: ArrayLike = True) -> "Quantity": ...

    @_delegate_to(numpy)
    def var(self, axis: Optional[Union[int, Sequence[int]]] = None,
            dtype: Optional[Dtype] = None, out: Optional["Quantity"] = None,
            ddof: int = 0, keepdims: bool = False) -> "Quantity": ...

    def take(self, indices: Sequence[int], allow_fill: bool = False, fill_value: Any = None) -> "Quantity":
        if allow_fill and isinstance(fill_value, Quantity):
            dimension, _ = _match_units(self.take, self, fill_value, labels={1: "'fill_value'"})
            fill_value = _value_in(fill_value, self.scale) if fill_value.dimension == dimension else fill_value.value
        return Quantity(
            pandas.api.extensions.take(self.value, indices, allow_fill=allow_fill, fill_value=fill_value),
            self.dimension,
            self.scale,
        )

    def tolist(self) -> List["Quantity"]:
        return list(self)

    def transpose(self, *axes: int) -> "Quantity":
        return Quantity(
            self.value.transpose(*axes),
            self.dimension,
            self.scale,
        )

    @_op
    def __add__(self, other: Any) -> "Quantity": ...

    @_op
    def __sub__(self, other: Any) -> "Quantity": ...

    @_op
    def __mul__(self, other: Any) -> "Quantity": ...

    @_op
    def __matmul__(self, other: Any) -> "Quantity": ...

    @_op
    def __truediv__(self, other: Any) -> "Quantity": ...

    @_op
    def __mod__(self, other: Any) -> "Quantity": ...

    @_op
    def __pow__(self, other: Any) -> "Quantity": ...

    @_op
    def __radd__(self, other: Any) -> "Quantity": ...

    @_op
    def __rsub__(self, other: Any) -> "Quantity": ...

    @_op
    def __rmul__(self, other: Any) -> "Quantity": ...

    @_op
    def __rmatmul__(self, other: Any) -> "Quantity": ...

    @_op
    def __rtruediv__(self, other: Any) -> "Quantity": ...

    @_op
    def __rpow__(self, other: Any) -> "Quantity": ...

    @_iop
    def __iadd__(self, other: Any) -> Any: ...

    @_iop
    def __isub__(self, other: Any) -> Any: ...

    @_iop
    def __imul__(self, other: Any) -> Any: ...

    @_iop
    def __itruediv__(self, other: Any) -> Any: ...

    def isna(self) -> numpy.ndarray:
        return numpy.isnan(self.value)

    @classmethod
    def _from_sequence(cls, scalars: Sequence[Any], dtype: Optional[Dtype] = None, copy: bool = False) -> "Quantity":
        wrapped = [_wrap(q) for q in scalars]
        dimension, scale = _match_units(cls._from_sequence, *wrapped, argument="scalar")
        value = numpy.asarray(_aligned_values(dimension, scale, *wrapped), dtype=dtype)
        return cls(value, dimension, scale)

    @classmethod
    def _from_factorized(cls, values: numpy.ndarray, original: "Quantity") -> "Quantity":
        return cls(values, original.dimension, original.scale)

    def _values_for_factorize(self) -> Tuple[numpy.ndarray, Any]:
        return self.value, numpy.nan

    @classmethod
    def _concat_same_type(cls, to_concat: Sequence["Quantity"]) -> "Quantity":
        return numpy.concatenate(to_concat)  # type: ignore


class _Literal(Quantity):
    """A bare number taking part in a quantity operation as a dimensionless
    operand. A literal zero is compatible with every dimension."""


def _wrap(x: Any) -> Quantity:
    if isinstance(x, Quantity):
        return x
    return _Literal(x, Dimensionless, Identity)


def unit(expression: UnitLike) -> Quantity:
    """One of ``expression``, for building quantities by multiplication.

    Affine units act as differences here: ``5.0 * unit("degC")`` is a
    difference of five kelvin. Use ``Quantity.of`` for absolute values.

    Example:
        >>> str(5.0 * unit("km"))
        '5.0 km'
    """
    resolved = evaluate(expression).without_offset()
    return Quantity(resolved.to_storage(1.0), resolved.dimension, resolved.scale)


def _fixed_power(exponent: Fraction) -> _UfuncUnits:
    return _UfuncUnits(
        unit_map=lambda f, x: _raised(f, x, exponent),
        align=lambda d, s, x: (_value_in(x, _power_base(x.scale, exponent)),),
    )


_ufuncs[numpy.add] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.subtract] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.multiply] = _UfuncUnits(unit_map=_multiply_units, align=_plain_values)
_ufuncs[numpy.matmul] = _UfuncUnits(unit_map=_multiply_units, align=_plain_values)
_ufuncs[numpy.divide] = _UfuncUnits(unit_map=_divide_units, align=_plain_values)
_ufuncs[numpy.true_divide] = _UfuncUnits(unit_map=_divide_units, align=_plain_values)
_ufuncs[numpy.negative] = _UfuncUnits(unit_map=_match_units, align=_plain_values)
_ufuncs[numpy.positive] = _UfuncUnits(unit_map=_match_units, align=_plain_values)
_ufuncs[numpy.absolute] = _UfuncUnits(unit_map=_match_units, align=_plain_values)
_ufuncs[numpy.fabs] = _UfuncUnits(unit_map=_match_units, align=_plain_values)
_ufuncs[numpy.power] = _UfuncUnits(unit_map=_power_units, align=_power_values)
_ufuncs[numpy.float_power] = _UfuncUnits(unit_map=_power_units, align=_power_values)
_ufuncs[numpy.sqrt] = _fixed_power(Fraction(1, 2))
_ufuncs[numpy.cbrt] = _fixed_power(Fraction(1, 3))
_ufuncs[numpy.square] = _fixed_power(Fraction(2))
_ufuncs[numpy.reciprocal] = _fixed_power(Fraction(-1))
_ufuncs[numpy.remainder] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.fmod] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.sign] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_plain_values)
_ufuncs[numpy.greater] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_aligned_values)
_ufuncs[numpy.greater_equal] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_aligned_values)
_ufuncs[numpy.less] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_aligned_values)
_ufuncs[numpy.less_equal] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_aligned_values)
_ufuncs[numpy.not_equal] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_aligned_values)
_ufuncs[numpy.equal] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_aligned_values)
_ufuncs[numpy.maximum] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.minimum] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.fmax] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.fmin] = _UfuncUnits(unit_map=_match_units, align=_aligned_values)
_ufuncs[numpy.isfinite] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_plain_values)
_ufuncs[numpy.isinf] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_plain_values)
_ufuncs[numpy.isnan] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_plain_values)
_ufuncs[numpy.signbit] = _UfuncUnits(unit_map=_match_units, wrap_output=False, align=_plain_values)


def _unwrap_annotation(parameter: inspect.Parameter) -> Type:
    if parameter.kind == inspect.Parameter.VAR_POSITIONAL:
        return Sequence[parameter.annotation]  # type: ignore
    else:
        return parameter.annotation  # type: ignore


def _array_func(func: Callable, align: bool = False,
                wrap_output: bool = True) -> Callable[[T_Callable], T_Callable]:
    """Register ``unit_map`` as the unit rule of the numpy function ``func``.

    Arguments annotated as ``Quantity`` (or optional or sequences of them)
    are unwrapped before calling ``func``; bare values passed there are
    treated as dimensionless. With ``align`` those of the result dimension
    are first rescaled to the result scale. ``out`` is never rescaled and
    must already be in the result unit.
    """
    def decorator(unit_map: T_Callable) -> T_Callable:
        signature = inspect.signature(unit_map)
        annotation: Mapping[str, Type] = {
            name: _unwrap_annotation(param)
            for name, param in signature.parameters.items()
        }

        def wrapper(args: Iterable[Any], kwargs: Mapping[str, Any]) -> Any:
            bound = signature.bind(*args, **kwargs)
            wrapped_arguments: MutableMapping[str, Any] = {}
            for name, arg in bound.arguments.items():
                ann = annotation[name]
                if ann == Quantity or (ann == Optional[Quantity] and arg is not None):
                    wrapped_arguments[name] = _wrap(arg)
                elif ann == Sequence[Quantity]:
                    wrapped_arguments[name] = tuple(_wrap(a) for a in arg)
                else:
                    if isinstance(arg, Quantity):
                        raise TypeError(f"Unexpected Quantity passed to argument '{name}' of {func.__name__}")
                    wrapped_arguments[name] = arg
            wrapped = inspect.BoundArguments(signature, wrapped_arguments)  # type: ignore
            output = unit_map(*wrapped.args, **wrapped.kwargs)

            def unwrap(name: str, arg: Any) -> Any:
                if not isinstance(arg, Quantity):
                    return arg
                if name == "out":
                    if arg.dimension != output[0]:
                        raise DimensionMismatch(output[0], arg.dimension, f"write {func.__name__} output")
                    if arg.scale != output[1]:
                        raise ScaleMismatch(output[1], arg.scale, f"write {func.__name__} output")
                    return arg.value
                if align and arg.dimension == output[0]:
                    return _value_in(arg, output[1])
                return arg.value

            unwrapped_arguments: MutableMapping[str, Any] = {}
            for name, arg in wrapped_arguments.items():
                if isinstance(arg, tuple) and annotation[name] == Sequence[Quantity]:
                    unwrapped_arguments[name] = tuple(unwrap(name, a) for a in arg)
                else:
                    unwrapped_arguments[name] = unwrap(name, arg)
            unwrapped = inspect.BoundArguments(signature, unwrapped_arguments)  # type: ignore
            result = func(*unwrapped.args, **unwrapped.kwargs)
            if output is None or not wrap_output:
                return result
            return Quantity(result, *output)

        _arrayfuncs[func] = wrapper
        return unit_map

    return decorator


@_array_func(numpy.sum, align=True)
def _sum(a: Quantity, axis: Optional[Union[int, Sequence[int]]] = None, dtype: Optional[Dtype] = None,
         out: Optional[Quantity] = None, keepdims: Optional[bool] = None,
         initial: Optional[Quantity] = None, where: Optional[ArrayLike] = None) -> Tuple[DimensionVector, ScaleVector]:
    if initial is None:
        return a.dimension, a.scale
    return _match_units(numpy.sum, a, initial, labels={1: "'initial'"})


@_array_func(numpy.cumsum)
def _cumsum(a: Quantity, axis: Optional[int] = None, dtype: Optional[Dtype] = None,
            out: Optional[Quantity] = None) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.max, align=True)
@_array_func(numpy.amax, align=True)
def _amax(a: Quantity, axis: Optional[Union[int, Sequence[int]]] = None,
          out: Optional[Quantity] = None, keepdims: Optional[bool] = None,
          initial: Optional[Quantity] = None, where: Optional[ArrayLike] = None) -> Tuple[DimensionVector, ScaleVector]:
    if initial is None:
        return a.dimension, a.scale
    return _match_units(numpy.amax, a, initial, labels={1: "'initial'"})


@_array_func(numpy.min, align=True)
@_array_func(numpy.amin, align=True)
def _amin(a: Quantity, axis: Optional[Union[int, Sequence[int]]] = None,
          out: Optional[Quantity] = None, keepdims: Optional[bool] = None,
          initial: Optional[Quantity] = None, where: Optional[ArrayLike] = None) -> Tuple[DimensionVector, ScaleVector]:
    if initial is None:
        return a.dimension, a.scale
    return _match_units(numpy.amin, a, initial, labels={1: "'initial'"})


@_array_func(numpy.mean)
def _mean(a: Quantity, axis: Optional[Union[int, Sequence[int]]] = None,
          dtype: Optional[Dtype] = None, out: Optional[Quantity] = None,
          keepdims: Optional[bool] = None) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.std)
def _std(a: Quantity, axis: Optional[Union[int, Sequence[int]]] = None,
         dtype: Optional[Dtype] = None, out: Optional[Quantity] = None,
         ddof: int = 0, keepdims: Optional[bool] = None) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.var)
def _var(a: Quantity, axis: Optional[Union[int, Sequence[int]]] = None,
         dtype: Optional[Dtype] = None, out: Optional[Quantity] = None,
         ddof: int = 0, keepdims: Optional[bool] = None) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension * 2, a.scale ** 2


@_array_func(numpy.round)
def _round(a: Quantity, decimals: int = 0, out: Optional[Quantity] = None) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.concatenate, align=True)
def _concatenate(arrays: Sequence[Quantity], axis: Optional[int] = 0,
                 out: Optional[Quantity] = None) -> Tuple[DimensionVector, ScaleVector]:
    return _match_units(numpy.concatenate, *arrays, argument="array")


@_array_func(numpy.stack, align=True)
def _stack(arrays: Sequence[Quantity], axis: int = 0,
           out: Optional[Quantity] = None) -> Tuple[DimensionVector, ScaleVector]:
    return _match_units(numpy.stack, *arrays, argument="array")


@_array_func(numpy.copy)
def _copy(a: Quantity, order: str = 'K', subok: bool = False) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.reshape)
def _reshape(a: Quantity, *args: Any, **kwargs: Any) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.ravel)
def _ravel(a: Quantity, order: str = 'C') -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.squeeze)
def _squeeze(a: Quantity, axis: Optional[int] = None) -> Tuple[DimensionVector, ScaleVector]:
    return a.dimension, a.scale


@_array_func(numpy.dot)
def _dot(a: Quantity, b: Quantity, out: Optional[Quantity] = None) -> Tuple[DimensionVector, ScaleVector]:
    return _multiply_units(numpy.dot, a, b)


@_array_func(numpy.isclose, align=True, wrap_output=False)
def _isclose(a: Quantity, b: Quantity, rtol: float = 1e-05, atol: Optional[Quantity] = None,
             equal_nan: bool = False) -> Tuple[DimensionVector, ScaleVector]:
    if atol is None:
        return _match_units(numpy.isclose, a, b)
    return _match_units(numpy.isclose, a, b, atol, labels={2: "'atol'"})


@_array_func(numpy.allclose, align=True, wrap_output=False)
def _allclose(a: Quantity, b: Quantity, rtol: float = 1e-05, atol: Optional[Quantity] = None,
              equal_nan: bool = False) -> Tuple[DimensionVector, ScaleVector]:
    if atol is None:
        return _match_units(numpy.allclose, a, b)
    return _match_units(numpy.allclose, a, b, atol, labels={2: "'atol'"})


@_array_func(numpy.shape)
def _shape(a: Quantity) -> None:
    return None


@_array_func(numpy.ndim)
def _ndim(a: Quantity) -> None:
    return None
