from . import units
from . import config
from . import serialization
from .units import Quantity, evaluate, unit

__version__ = "0.1.0"

__all__ = [
    'units', 'config', 'serialization',
    'Quantity', 'evaluate', 'unit',
]
