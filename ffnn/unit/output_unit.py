from ffnn.activation import sigmoid_derivative
from .hidden_unit import HiddenUnit
from .unit_base import DEFAULT_LEARNING_RATE, WeightedUnitBase


class OutputUnit(WeightedUnitBase):
    """ A unit of the output layer, fed by hidden units.

    Its activation is the network output for that component. Given a
    desired value, it computes its error and delta and pushes the delta
    (with the weight it applies) back to every hidden unit it reads from.
    Every weight it creates or changes is also recorded with the matching
    hidden unit's downstream weight bookkeeping.
    """
    def __init__(self, learning_rate=DEFAULT_LEARNING_RATE):
        super().__init__(learning_rate=learning_rate)
        self.desired_output = 0.0

    @property
    def output(self):
        return self._activation

    def set_desired_output(self, desired_output):
        self.desired_output = float(desired_output)

    def _validate_upstream(self, upstream):
        if not isinstance(upstream, HiddenUnit):
            msg = "Output units read from hidden units only, got {}"
            raise TypeError(msg.format(type(upstream)))

    def _publish_weights(self):
        for hidden, weight in zip(self._upstream, self._weights):
            hidden.record_downstream_weight(self, weight)

    def randomize(self, random_state=None):
        super().randomize(random_state=random_state)
        self._publish_weights()

    def compute_error(self):
        """ The signed error, desired - output
        """
        return self.desired_output - self._activation

    def compute_delta(self):
        """ delta = o * (1 - o) * (desired - o), which is then pushed to
        every connected hidden unit together with the weight applied to it
        """
        self._check_initialized('delta')

        self._delta = float(
            sigmoid_derivative(self._activation) * self.compute_error())

        for hidden, weight in zip(self._upstream, self._weights):
            hidden.receive_backward(self._delta, weight)

        return self._delta

    def update(self):
        super().update()
        self._publish_weights()

    def set_weight(self, pos, weight):
        super().set_weight(pos, weight)
        self._upstream[pos].record_downstream_weight(self, weight)
