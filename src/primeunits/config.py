"""Library-wide settings with scoped overrides.

Examples:
    >>> get_settings().policy
    <RescalePolicy.SMALLER_WINS: 'SmallerWins'>
    >>> with using(policy="strict"):
    ...     get_settings().policy
    <RescalePolicy.STRICT: 'Strict'>
    >>> get_settings().policy
    <RescalePolicy.SMALLER_WINS: 'SmallerWins'>
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, fields, replace
import logging
from typing import Any, Iterator, Optional

from .units.policy import RescalePolicy
from .units.registry import Registry, default_registry


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """``policy`` is the rescale policy used when an operation is not given
    one explicitly; ``registry`` replaces the built-in unit catalog when set."""
    policy: RescalePolicy = RescalePolicy.SMALLER_WINS
    registry: Optional[Registry] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "policy", RescalePolicy.from_name(self.policy))
        if self.registry is not None and not isinstance(self.registry, Registry):
            raise TypeError(
                "Invalid registry: got {}, expected Registry".format(type(self.registry).__name__)
            )


_defaults = Settings()
_scoped = ContextVar("primeunits_settings", default=None)  # type: ContextVar[Optional[Settings]]


def _changed(settings: Settings, changes: Any) -> Settings:
    names = {f.name for f in fields(Settings)}
    for name in changes:
        if name not in names:
            raise TypeError("Unknown setting '{}'".format(name))
    return replace(settings, **changes)


def get_settings() -> Settings:
    settings = _scoped.get()
    if settings is None:
        return _defaults
    return settings


def configure(**changes: Any) -> Settings:
    """Change the process-wide defaults. Scoped overrides made with ``using``
    still take precedence inside their blocks."""
    global _defaults
    _defaults = _changed(_defaults, changes)
    logger.debug("Configured defaults: %s", _defaults)
    return _defaults


@contextmanager
def using(**changes: Any) -> Iterator[Settings]:
    """Override settings for the current thread or task until the block exits."""
    settings = _changed(get_settings(), changes)
    token = _scoped.set(settings)
    try:
        yield settings
    finally:
        _scoped.reset(token)


def current_registry() -> Registry:
    registry = get_settings().registry
    if registry is None:
        return default_registry()
    return registry
