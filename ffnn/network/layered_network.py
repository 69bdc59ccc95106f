"""
The same single hidden layer sigmoid network as
:class:`ffnn.network.unit_network.UnitNetwork`, held as weight matrices
and bias vectors addressed by index instead of unit objects.

Input (R^n) => Hidden (R^h) => Output (R^m)

For a single input vector x, the computation chain is:

    h = sigmoid( dot(W_hidden, x) + b_hidden )
    o = sigmoid( dot(W_output, h) + b_output )

and one online backpropagation step with desired output y is:

    delta_o = o * (1 - o) * (y - o)
    delta_h = h * (1 - h) * dot(W_output.T, delta_o)

    W_output += rate * outer(delta_o, h);  b_output += rate * delta_o
    W_hidden += rate * outer(delta_h, x);  b_hidden += rate * delta_h

The hidden deltas are computed directly from the output weights, so there
is no per-unit backward state to reset between samples.
"""
import logging

import numpy

from ffnn.activation import sigmoid, sigmoid_derivative
from ffnn.unit.unit_base import (
    DEFAULT_LEARNING_RATE, WEIGHT_INIT_HIGH, WEIGHT_INIT_LOW,
    validate_learning_rate, validate_random_state)
from .network_base import NetworkBase, validate_vector


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


class LayeredNetwork(NetworkBase):
    """
    params: W_hidden, where W_hidden[j,i] = weight from input i to hidden
                unit j.
            b_hidden, where b_hidden[j] = bias into hidden unit j.
            W_output, where W_output[k,j] = weight from hidden unit j to
                output unit k.
            b_output, where b_output[k] = bias into output unit k.
    """
    def __init__(self, n_input, n_hidden, n_output,
                 learning_rate=DEFAULT_LEARNING_RATE, random_state=None,
                 params=None):
        """
        Parameters
        ----------
        n_input, n_hidden, n_output: int
            Number of units in each layer.

        learning_rate: float, default=0.5
            Step size of the online updates.

        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results.

        params: list of ndarray, default=None
            Initial [W_hidden, b_hidden, W_output, b_output]. When given,
            no randomization takes place and `random_state` must be None.
        """
        super().__init__(n_input, n_hidden, n_output)
        self.learning_rate = validate_learning_rate(learning_rate)

        if params is not None and random_state is not None:
            msg = "Provide either `params` or `random_state`, not both"
            raise ValueError(msg)

        if params is None:
            self.randomize_params(validate_random_state(random_state))
        else:
            self.set_params(*params)

    @classmethod
    def from_unit_network(cls, network):
        """ Copy the sizes, learning rate and current parameters of a
        :class:`ffnn.network.unit_network.UnitNetwork`
        """
        return cls(network.n_input, network.n_hidden, network.n_output,
                   learning_rate=network.learning_rate,
                   params=network.get_params())

    def randomize_params(self, random_state):
        """ Draw every weight and bias uniformly from [-0.5, 0.5).

        Draws happen unit by unit (hidden layer first, each unit's weights
        then its bias), so a given seed yields the same parameters as a
        :class:`ffnn.network.unit_network.UnitNetwork`.
        """
        def draw_layer(n_units, n_upstream):
            W = numpy.empty((n_units, n_upstream))
            b = numpy.empty(n_units)
            for j in range(n_units):
                W[j] = random_state.uniform(
                    WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH, size=n_upstream)
                b[j] = random_state.uniform(WEIGHT_INIT_LOW, WEIGHT_INIT_HIGH)
            return W, b

        self.W_hidden, self.b_hidden = draw_layer(self.n_hidden, self.n_input)
        self.W_output, self.b_output = draw_layer(self.n_output, self.n_hidden)

    def get_params(self):
        """
        Returns
        -------
        params: list of ndarray
            Copies of [W_hidden, b_hidden, W_output, b_output].
        """
        return [self.W_hidden.copy(), self.b_hidden.copy(),
                self.W_output.copy(), self.b_output.copy()]

    def set_params(self, W_hidden, b_hidden, W_output, b_output):
        (self.W_hidden, self.b_hidden,
         self.W_output, self.b_output) = self._validate_params(
            W_hidden, b_hidden, W_output, b_output)

    def hidden_activations(self, X):
        return sigmoid(numpy.dot(X, self.W_hidden.T) + self.b_hidden)

    def predict(self, x):
        """
        Parameters
        ----------
        x: array-like, shape=(n_input,)

        Returns
        -------
        output: ndarray, shape=(n_output,)
        """
        x = validate_vector(x, self.n_input, 'x')
        return self.predict_many(x[numpy.newaxis])[0]

    def predict_many(self, inputs):
        """
        Parameters
        ----------
        inputs: ndarray, shape=(n_samples, n_input)
            Each row of `inputs` is an observation.

        Returns
        -------
        outputs: ndarray, shape=(n_samples, n_output)
        """
        H = self.hidden_activations(inputs)
        return sigmoid(numpy.dot(H, self.W_output.T) + self.b_output)

    def train_sample(self, x, expected):
        """ One online backpropagation step on a single sample.

        Returns
        -------
        errors: ndarray, shape=(n_output,)
            The signed errors (desired - output) before the update.
        """
        x = validate_vector(x, self.n_input, 'x')
        y = validate_vector(expected, self.n_output, 'expected')

        h = self.hidden_activations(x)
        o = sigmoid(numpy.dot(self.W_output, h) + self.b_output)

        errors = y - o
        delta_o = sigmoid_derivative(o) * errors
        delta_h = sigmoid_derivative(h) * numpy.dot(self.W_output.T, delta_o)

        rate = self.learning_rate
        self.W_output += rate * numpy.outer(delta_o, h)
        self.b_output += rate * delta_o
        self.W_hidden += rate * numpy.outer(delta_h, x)
        self.b_hidden += rate * delta_h

        return errors
