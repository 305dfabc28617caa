from typing import Any, Optional, Sequence


class UnitError(ValueError):
    """Base class for every error raised by the unit engine."""


class UnknownUnit(UnitError):
    def __init__(self, text: str, expression: Optional[str] = None,
                 suggestions: Sequence[str] = ()) -> None:
        self.text = text
        self.expression = expression
        self.suggestions = tuple(suggestions)
        if expression is not None and expression != text:
            message = "Unknown unit '{}' in '{}'".format(text, expression)
        else:
            message = "Unknown unit '{}'".format(text)
        if self.suggestions:
            message += "; did you mean {}?".format(", ".join(repr(s) for s in self.suggestions))
        super().__init__(message)


class DimensionMismatch(UnitError):
    def __init__(self, expected: Any, actual: Any, operation: Optional[str] = None) -> None:
        self.expected = expected
        self.actual = actual
        self.operation = operation
        if operation is not None:
            message = "Can't {}: incompatible dimensions {} and {}".format(
                operation, _describe(expected), _describe(actual)
            )
        else:
            message = "Dimension mismatch: expected {}, got {}".format(
                _describe(expected), _describe(actual)
            )
        super().__init__(message)


class ScaleMismatch(UnitError):
    def __init__(self, scale_a: Any, scale_b: Any, operation: Optional[str] = None) -> None:
        self.scale_a = scale_a
        self.scale_b = scale_b
        self.operation = operation
        message = "{}: incompatible scales {} and {} under the strict rescale policy".format(
            "Can't {}".format(operation) if operation is not None else "Scale mismatch",
            scale_a,
            scale_b,
        )
        super().__init__(message)


class InvalidFormat(UnitError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class ExponentOverflow(UnitError, OverflowError):
    def __init__(self, what: str) -> None:
        self.what = what
        super().__init__("Exponent overflow evaluating {}".format(what))


class ScaleOverflow(ExponentOverflow):
    pass


def _describe(dimension: Any) -> str:
    # Dimension vectors know how to name themselves through the registry;
    # anything else is shown as-is.
    describe = getattr(dimension, "describe", None)
    if describe is not None:
        return describe()
    return str(dimension)
