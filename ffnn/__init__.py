# flake8: noqa

from .activation import sigmoid, sigmoid_derivative
from .core.exception import (
    DimensionMismatch,
    UnitAlreadyInitialized,
    UnitNotInitialized,
)
from .network import LayeredNetwork, UnitNetwork
from .storage import TrainingRuleSet, TrainingSample
from .unit import HiddenUnit, InputUnit, OutputUnit
