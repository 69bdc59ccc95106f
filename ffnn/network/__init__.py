# flake8: noqa

from .layered_network import LayeredNetwork
from .unit_network import UnitNetwork
