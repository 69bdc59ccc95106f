import numpy

from ffnn.activation import sigmoid_derivative
from ffnn.core.exception import UnitNotInitialized
from .unit_base import DEFAULT_LEARNING_RATE, WeightedUnitBase


class HiddenUnit(WeightedUnitBase):
    """ A unit of the hidden layer.

    Besides its own weights, a hidden unit keeps two kinds of information
    contributed by the output units it feeds:

    * the downstream weight bookkeeping: for every connected output unit,
      the weight that output unit currently applies to this hidden unit.
      Output units register here when they are randomized and refresh the
      entry after every update.

    * the backward buffers: one (delta, weight) pair per connected output
      unit, pushed during the backward pass of the current sample. They
      are emptied whenever a new sample begins (see :meth:`forward` and
      :meth:`reset_backward`), so they never hold more than one pair per
      output unit.
    """
    def __init__(self, learning_rate=DEFAULT_LEARNING_RATE):
        super().__init__(learning_rate=learning_rate)

        self._downstream_weights = {}
        self._incoming_deltas = []
        self._incoming_weights = []

    @property
    def n_downstream(self):
        return len(self._downstream_weights)

    @property
    def downstream_weights(self):
        """ The current downstream weights, in output unit registration
        order
        """
        return list(self._downstream_weights.values())

    @property
    def backward_buffers(self):
        """ Copies of the (deltas, weights) pushed during the current
        backward pass
        """
        return list(self._incoming_deltas), list(self._incoming_weights)

    def record_downstream_weight(self, output_unit, weight):
        self._downstream_weights[output_unit] = float(weight)

    def reset_backward(self):
        self._incoming_deltas = []
        self._incoming_weights = []

    def forward(self):
        """ Compute the activation for a new sample. Any backward buffers
        left over from the previous sample are discarded.
        """
        self.reset_backward()
        return super().forward()

    def receive_backward(self, delta, weight):
        """ Called once per connected output unit during a backward pass
        """
        self._incoming_deltas.append(float(delta))
        self._incoming_weights.append(float(weight))

    def compute_delta(self):
        """ delta = a * (1 - a) * sum_k(delta_k * weight_k) over the
        pairs received in the current backward pass
        """
        self._check_initialized('delta')

        n_received = len(self._incoming_deltas)
        if n_received != self.n_downstream:
            msg = ("{!r} received {} backward pair(s) but feeds {} output "
                   "unit(s); run every output unit's `compute_delta` first")
            raise UnitNotInitialized(
                msg.format(self, n_received, self.n_downstream))

        backpropagated = numpy.dot(self._incoming_deltas,
                                   self._incoming_weights)
        self._delta = float(
            sigmoid_derivative(self._activation) * backpropagated)
        return self._delta
