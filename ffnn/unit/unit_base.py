import abc
import logging
import numbers

import numpy

from ffnn.activation import sigmoid
from ffnn.core.exception import UnitAlreadyInitialized, UnitNotInitialized


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)

# Weights and biases are drawn uniformly from [low, high)
WEIGHT_INIT_LOW = -0.5
WEIGHT_INIT_HIGH = 0.5

DEFAULT_LEARNING_RATE = 0.5


def validate_random_state(random_state):
    """ Return a usable RandomState, creating an unseeded one (with a
    warning) when `random_state` is None
    """
    if random_state is None:
        random_state = numpy.random.RandomState()
        msg = ("RandomState not provided; results will "
               "not be reproducible")
        logger.warning(msg)
    elif not isinstance(random_state, numpy.random.RandomState):
        msg = "`random_state` ({}) not instance numpy.random.RandomState"
        raise TypeError(msg.format(type(random_state)))

    return random_state


def validate_learning_rate(learning_rate):
    if (isinstance(learning_rate, bool) or
            not isinstance(learning_rate, numbers.Real)):
        msg = "`learning_rate` must be a real number, got {}"
        raise TypeError(msg.format(type(learning_rate)))

    if not learning_rate > 0:
        msg = "`learning_rate` ({}) must be positive"
        raise ValueError(msg.format(learning_rate))

    return float(learning_rate)


class UnitBase(abc.ABC):
    """ The abstract base class of every unit: something with a scalar
    activation that downstream units can read.
    """

    def __init__(self, activation=0.0):
        self._activation = float(activation)

    @property
    def activation(self):
        return self._activation

    def get_activation(self):
        return self._activation

    def __repr__(self):
        return "<{} activation={:.5f}>".format(
            type(self).__name__, self._activation)


class WeightedUnitBase(UnitBase):
    """ State and computations shared by hidden and output units.

    A weighted unit owns an ordered list of upstream units, one weight per
    upstream unit (same order), a bias, and a learning rate. Its activation
    is the sigmoid of the weighted sum of upstream activations plus bias::

        activation = sigmoid(dot(weights, upstream_activations) + bias)

    The wiring is fixed by :meth:`randomize`, which also creates the
    weights; afterwards :meth:`connect` is refused.
    """
    def __init__(self, learning_rate=DEFAULT_LEARNING_RATE):
        """
        Parameters
        ----------
        learning_rate: float, default=0.5
            Step size of the weight and bias updates. Must be positive.
        """
        super().__init__()
        self.learning_rate = validate_learning_rate(learning_rate)

        self._upstream = []
        self._weights = None
        self._bias = 0.0
        self._delta = 0.0

    def __repr__(self):
        return "<{} n_upstream={:d}, learning_rate={:g}>".format(
            type(self).__name__, self.n_upstream, self.learning_rate)

    @property
    def is_initialized(self):
        return self._weights is not None

    @property
    def n_upstream(self):
        return len(self._upstream)

    @property
    def weights(self):
        self._check_initialized('weights')
        return self._weights.copy()

    @property
    def bias(self):
        return self._bias

    @property
    def delta(self):
        return self._delta

    def _check_initialized(self, action):
        if not self.is_initialized:
            msg = "Cannot access {} of {!r} before `randomize` is called"
            raise UnitNotInitialized(msg.format(action, self))

    def _check_position(self, pos):
        if not 0 <= pos < self.n_upstream:
            msg = "Position {} out of range for {} upstream unit(s)"
            raise IndexError(msg.format(pos, self.n_upstream))

    def _validate_upstream(self, upstream):
        if not isinstance(upstream, UnitBase):
            msg = "Upstream unit ({}) is not a unit"
            raise TypeError(msg.format(type(upstream)))

    def connect(self, upstream):
        """ Append `upstream` to the ordered list of units feeding this one
        """
        if self.is_initialized:
            msg = "Cannot connect to {!r}; its weights already exist"
            raise UnitAlreadyInitialized(msg.format(self))

        self._validate_upstream(upstream)
        self._upstream.append(upstream)

    def get_upstream(self, pos):
        """ Return the `pos`'th upstream unit (starting at 0)
        """
        self._check_position(pos)
        return self._upstream[pos]

    def randomize(self, random_state=None):
        """ Draw one weight per upstream unit, then the bias, uniformly
        from [-0.5, 0.5). Must be called exactly once, after wiring.

        Parameters
        ----------
        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results.
        """
        if self.is_initialized:
            msg = "{!r} has already been randomized"
            raise UnitAlreadyInitialized(msg.format(self))

        random_state = validate_random_state(random_state)

        self._weights = random_state.uniform(
            WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH, size=self.n_upstream)
        self._bias = random_state.uniform(WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH)

    def upstream_activations(self):
        return numpy.array([unit.activation for unit in self._upstream])

    def net_input(self):
        """ The weighted sum of upstream activations plus the bias
        """
        self._check_initialized('net input')
        return numpy.dot(self._weights, self.upstream_activations()) + \
            self._bias

    def forward(self):
        self._activation = float(sigmoid(self.net_input()))
        return self._activation

    def update(self):
        """ Gradient step using the current delta and the upstream
        activations of the last forward pass
        """
        self._check_initialized('update')

        step = self.learning_rate * self._delta
        self._weights += step * self.upstream_activations()
        self._bias += step

    @abc.abstractmethod
    def compute_delta(self):
        raise NotImplementedError

    def get_weight(self, pos):
        """ Weight applied to the `pos`'th upstream unit
        """
        self._check_position(pos)
        self._check_initialized('weights')
        return float(self._weights[pos])

    def set_weight(self, pos, weight):
        self._check_position(pos)
        self._check_initialized('weights')
        self._weights[pos] = weight

    def get_bias(self):
        return self._bias

    def set_bias(self, bias):
        self._bias = float(bias)
