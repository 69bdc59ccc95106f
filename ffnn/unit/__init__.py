# flake8: noqa

from .hidden_unit import HiddenUnit
from .input_unit import InputUnit
from .output_unit import OutputUnit
from .unit_base import (
    DEFAULT_LEARNING_RATE,
    UnitBase,
    WeightedUnitBase,
)
