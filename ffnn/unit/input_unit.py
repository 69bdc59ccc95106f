from .unit_base import UnitBase


class InputUnit(UnitBase):
    """ A leaf unit holding one component of a sample's input vector.
    It has no weights; its activation is set by the training driver.
    """
    def __init__(self, activation=0.0):
        super().__init__(activation=activation)

    def set_activation(self, activation):
        self._activation = float(activation)
