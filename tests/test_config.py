from primeunits import config
from primeunits.units.dimension import Length
from primeunits.units.errors import UnknownUnit
from primeunits.units.expression import evaluate
from primeunits.units.policy import RescalePolicy
from primeunits.units.registry import Registry, default_registry
from primeunits.units.unit import Dimension, Unit
import pytest  # type: ignore


def test_defaults() -> None:
    settings = config.get_settings()
    assert settings.policy is RescalePolicy.SMALLER_WINS
    assert settings.registry is None
    assert config.current_registry() is default_registry()


def test_using() -> None:
    with config.using(policy="strict") as settings:
        assert settings.policy is RescalePolicy.STRICT
        assert config.get_settings().policy is RescalePolicy.STRICT
        with config.using(policy=RescalePolicy.LARGER_WINS):
            assert config.get_settings().policy is RescalePolicy.LARGER_WINS
        assert config.get_settings().policy is RescalePolicy.STRICT
    assert config.get_settings().policy is RescalePolicy.SMALLER_WINS


def test_using_restores_on_error() -> None:
    with pytest.raises(RuntimeError):
        with config.using(policy="strict"):
            raise RuntimeError("boom")
    assert config.get_settings().policy is RescalePolicy.SMALLER_WINS


def test_configure() -> None:
    try:
        config.configure(policy="left_hand_wins")
        assert config.get_settings().policy is RescalePolicy.LEFT_HAND_WINS
        with config.using(policy="strict"):
            assert config.get_settings().policy is RescalePolicy.STRICT
        assert config.get_settings().policy is RescalePolicy.LEFT_HAND_WINS
    finally:
        config.configure(policy=RescalePolicy.SMALLER_WINS)
    assert config.get_settings().policy is RescalePolicy.SMALLER_WINS


def test_invalid_settings() -> None:
    with pytest.raises(TypeError):
        with config.using(colour="red"):
            pass
    with pytest.raises(ValueError):
        with config.using(policy="loudest"):
            pass
    with pytest.raises(TypeError):
        config.Settings(registry="metric")  # type: ignore
    assert config.get_settings().policy is RescalePolicy.SMALLER_WINS


def test_registry_override() -> None:
    small = Registry(
        [Dimension("Length", "L", Length, (Unit("meter", ("m",)),))],
        dimension_aliases={},
    )
    with config.using(registry=small):
        assert config.current_registry() is small
        assert evaluate("km").dimension == Length
        with pytest.raises(UnknownUnit):
            evaluate("s")
    assert evaluate("s") is not None
