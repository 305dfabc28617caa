"""Parsing and evaluation of textual unit expressions.

Grammar (division binds loosest and associates to the left)::

    expr   := factor ('/' factor)*
    factor := power (('*' | '.') power)*
    power  := atom ('^' signed-int)?
    atom   := identifier | identifier digits | '(' expr ')' | integer

``s2`` is shorthand for ``s^2``. Integers stand for exact scale factors:
``1`` is dimensionless and ``10^3`` contributes a factor of a thousand.
An integer literal must be a positive product of the primes 2, 3 and 5
(``60``, ``1000``, ``3600``); any other integer, such as the ``7`` in
``7*m``, cannot be held exactly and raises ``InvalidFormat``. Integers are
never silently treated as dimensionless ones.
``pi`` (or ``π``) is the exact factor pi, unless a unit of that name exists.

Examples:
    >>> evaluate("km").scale
    ScaleVector(two=3, three=0, five=3, pi=0)
    >>> str(evaluate("kg*m/s^2").dimension)
    'M·L·T⁻²'
    >>> evaluate("m/s2") == evaluate("m/s^2")
    True
    >>> evaluate("60*s") == evaluate("min")
    True
"""

from dataclasses import dataclass
from functools import lru_cache
import logging
import re
from typing import Iterator, List, Optional, Tuple, Union

from .dimension import Dimensionless
from .errors import InvalidFormat, UnknownUnit
from .registry import Registry
from .scale import ScaleVector, PRIMES
from .unit import ResolvedUnit


logger = logging.getLogger(__name__)

PI_NAMES = ("pi", "π")


def current_registry() -> Registry:
    """The registry configured for the current context."""
    from .. import config

    return config.current_registry()


class Node:
    def identifiers(self) -> Iterator[str]:
        return iter(())


@dataclass(frozen=True)
class Identifier(Node):
    name: str

    def identifiers(self) -> Iterator[str]:
        yield self.name

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Integer(Node):
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Mul(Node):
    left: Node
    right: Node

    def identifiers(self) -> Iterator[str]:
        yield from self.left.identifiers()
        yield from self.right.identifiers()

    def __str__(self) -> str:
        return "{}*{}".format(_wrap(self.left, Div), _wrap(self.right, (Mul, Div)))


@dataclass(frozen=True)
class Div(Node):
    left: Node
    right: Node

    def identifiers(self) -> Iterator[str]:
        yield from self.left.identifiers()
        yield from self.right.identifiers()

    def __str__(self) -> str:
        return "{}/{}".format(self.left, _wrap(self.right, Div))


@dataclass(frozen=True)
class Pow(Node):
    base: Node
    exponent: int

    def identifiers(self) -> Iterator[str]:
        return self.base.identifiers()

    def __str__(self) -> str:
        return "{}^{}".format(_wrap(self.base, (Mul, Div, Pow)), self.exponent)


def _wrap(node: Node, kinds: Union[type, Tuple[type, ...]]) -> str:
    if isinstance(node, kinds):
        return "({})".format(node)
    return str(node)


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
    |(?P<lpar>\()
    |(?P<rpar>\))
    |(?P<mul>[*.·])
    |(?P<div>/)
    |(?P<pow>\^)
    |(?P<int>[+-]?\d+)
    |(?P<ident>[^\W\d]+)(?P<suffix>[+-]?\d+)?
    """,
    re.VERBOSE,
)

_Token = Tuple[str, str, int]


def _tokenize(text: str) -> List[_Token]:
    tokens: List[_Token] = []
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise InvalidFormat(
                "Unexpected character '{}' at position {} of unit expression '{}'".format(
                    text[pos], pos, text
                )
            )
        kind = match.lastgroup
        if kind == "suffix":
            # An identifier with a trailing exponent, e.g. "s2" or "s-1".
            tokens.append(("ident", match.group("ident"), match.start()))
            tokens.append(("pow", "^", match.start("suffix")))
            tokens.append(("int", match.group("suffix"), match.start("suffix")))
        elif kind != "space":
            tokens.append((kind, match.group(0), match.start()))  # type: ignore
        pos = match.end()
    return tokens


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = _tokenize(text)
        self.index = 0

    def peek(self) -> Optional[_Token]:
        if self.index < len(self.tokens):
            return self.tokens[self.index]
        return None

    def pop(self, expected: Optional[str] = None) -> _Token:
        token = self.peek()
        if token is None:
            raise InvalidFormat("Unexpected end of unit expression '{}'".format(self.text))
        if expected is not None and token[0] != expected:
            raise InvalidFormat(
                "Expected {} but found '{}' at position {} of unit expression '{}'".format(
                    expected, token[1], token[2], self.text
                )
            )
        self.index += 1
        return token

    def parse(self) -> Node:
        if not self.tokens:
            raise InvalidFormat("Unit expression is empty")
        node = self.expr()
        token = self.peek()
        if token is not None:
            raise InvalidFormat(
                "Unexpected '{}' at position {} of unit expression '{}'".format(
                    token[1], token[2], self.text
                )
            )
        return node

    def expr(self) -> Node:
        node = self.factor()
        while self.peek() is not None and self.peek()[0] == "div":  # type: ignore
            self.pop()
            node = Div(node, self.factor())
        return node

    def factor(self) -> Node:
        node = self.power()
        while self.peek() is not None and self.peek()[0] == "mul":  # type: ignore
            self.pop()
            node = Mul(node, self.power())
        return node

    def power(self) -> Node:
        node = self.atom()
        token = self.peek()
        if token is not None and token[0] == "pow":
            self.pop()
            _, exponent, _ = self.pop("int")
            node = Pow(node, int(exponent))
        return node

    def atom(self) -> Node:
        kind, value, position = self.pop()
        if kind == "lpar":
            node = self.expr()
            self.pop("rpar")
            return node
        if kind == "ident":
            return Identifier(value)
        if kind == "int":
            if value[0] in "+-":
                raise InvalidFormat(
                    "Unexpected signed number '{}' at position {} of unit expression '{}'".format(
                        value, position, self.text
                    )
                )
            return Integer(int(value))
        raise InvalidFormat(
            "Unexpected '{}' at position {} of unit expression '{}'".format(value, position, self.text)
        )


def parse(text: str) -> Node:
    return _Parser(text.strip()).parse()


def integer_scale(value: int) -> ScaleVector:
    """The exact scale of a positive integer built from the primes 2, 3 and 5."""
    if value <= 0:
        raise InvalidFormat("Numeric factor must be positive, got {}".format(value))
    exponents = []
    for prime in PRIMES:
        exponent = 0
        while value % prime == 0:
            value //= prime
            exponent += 1
        exponents.append(exponent)
    if value != 1:
        raise InvalidFormat(
            "Numeric factor has a prime factor other than 2, 3 or 5: {}".format(value)
        )
    return ScaleVector(*exponents)


def resolve_identifier(name: str, registry: Optional[Registry] = None, strict: bool = False) -> ResolvedUnit:
    """Resolve a single unit identifier: by symbol, then by name, then as an
    SI prefix applied to a prefixable unit."""
    if registry is None:
        registry = current_registry()

    found = registry.find_unit(name)
    if found is not None:
        unit, dimension = found
        scale = unit.scale
    else:
        prefixed = registry.find_prefixed_unit(name)
        if prefixed is None:
            if name in PI_NAMES:
                return ResolvedUnit(Dimensionless, ScaleVector(pi=1), text=name)
            raise UnknownUnit(name, suggestions=registry.suggest(name))
        prefix, unit, dimension = prefixed
        scale = unit.scale.mul(prefix.scale)

    if strict and not unit.is_storage_exact():
        raise InvalidFormat(
            "Nonstorage unit '{}' is not allowed here; use a storage unit".format(name)
        )

    return ResolvedUnit(
        dimension.vector,
        scale,
        unit.conversion_factor,
        unit.affine_offset,
        text=name,
    )


def _evaluate(node: Node, registry: Registry, strict: bool) -> ResolvedUnit:
    if isinstance(node, Identifier):
        return resolve_identifier(node.name, registry, strict)
    if isinstance(node, Integer):
        return ResolvedUnit(Dimensionless, integer_scale(node.value))
    if isinstance(node, Mul):
        left, right = _evaluate(node.left, registry, strict), _evaluate(node.right, registry, strict)
        _check_offsets(node, left, right)
        return left.mul(right)
    if isinstance(node, Div):
        left, right = _evaluate(node.left, registry, strict), _evaluate(node.right, registry, strict)
        _check_offsets(node, left, right)
        return left.div(right)
    if isinstance(node, Pow):
        base = _evaluate(node.base, registry, strict)
        if node.exponent != 1:
            _check_offsets(node, base)
        return base.pow(node.exponent)
    raise TypeError("Unexpected unit expression node {!r}".format(node))


def _check_offsets(node: Node, *operands: ResolvedUnit) -> None:
    for operand in operands:
        if operand.affine_offset != 0.0:
            logger.debug("Dropping affine offset of '%s' inside '%s'", operand.text, node)


@lru_cache(maxsize=1024)
def _evaluate_text(text: str, registry: Registry, strict: bool) -> ResolvedUnit:
    node = parse(text)
    try:
        result = _evaluate(node, registry, strict)
    except UnknownUnit as e:
        raise UnknownUnit(e.text, text, e.suggestions) from None
    if isinstance(node, Identifier):
        return result
    return ResolvedUnit(
        result.dimension,
        result.scale,
        result.conversion_factor,
        result.affine_offset,
        text=text,
    )


def evaluate(expression: Union[str, Node, ResolvedUnit], registry: Optional[Registry] = None,
             strict: bool = False) -> ResolvedUnit:
    """Reduce a unit expression to its dimension and scale vectors.

    With ``strict=True`` units that need an empirical conversion factor or
    an affine offset are rejected.
    """
    if isinstance(expression, ResolvedUnit):
        return expression
    if registry is None:
        registry = current_registry()
    if isinstance(expression, Node):
        return _evaluate(expression, registry, strict)
    if not isinstance(expression, str):
        raise TypeError(
            "Unit expression must be a string, got {}".format(type(expression).__name__)
        )
    return _evaluate_text(expression.strip(), registry, strict)
