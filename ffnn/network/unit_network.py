import logging

import numpy

from ffnn.unit import DEFAULT_LEARNING_RATE, HiddenUnit, InputUnit, OutputUnit
from ffnn.unit.unit_base import validate_learning_rate, validate_random_state
from .network_base import NetworkBase, validate_vector


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


class UnitNetwork(NetworkBase):
    """ A fully connected input => hidden => output network assembled from
    individually addressable unit objects.

    Every hidden unit reads every input unit and every output unit reads
    every hidden unit. Weights are randomized once at construction, hidden
    units first and then output units, each drawing its weights in
    upstream order followed by its bias.
    """
    def __init__(self, n_input, n_hidden, n_output,
                 learning_rate=DEFAULT_LEARNING_RATE, random_state=None):
        """
        Parameters
        ----------
        n_input, n_hidden, n_output: int
            Number of units in each layer.

        learning_rate: float, default=0.5
            The learning rate given to every hidden and output unit.

        random_state: numpy.random.RandomState, default=None
            Provide a RandomState object for reproducible results.
        """
        super().__init__(n_input, n_hidden, n_output)
        self.learning_rate = validate_learning_rate(learning_rate)
        random_state = validate_random_state(random_state)

        self.input_units = [InputUnit() for _ in range(self.n_input)]
        self.hidden_units = [HiddenUnit(learning_rate=self.learning_rate)
                             for _ in range(self.n_hidden)]
        self.output_units = [OutputUnit(learning_rate=self.learning_rate)
                             for _ in range(self.n_output)]

        # Wiring is fixed from here on.
        for hidden in self.hidden_units:
            for input_unit in self.input_units:
                hidden.connect(input_unit)

        for output in self.output_units:
            for hidden in self.hidden_units:
                output.connect(hidden)

        for hidden in self.hidden_units:
            hidden.randomize(random_state)

        for output in self.output_units:
            output.randomize(random_state)

        logger.debug("Assembled {!r}".format(self))

    @staticmethod
    def _get_unit(units, pos, layer):
        if not 0 <= pos < len(units):
            msg = "No {} unit at position {}; the layer has {} unit(s)"
            raise IndexError(msg.format(layer, pos, len(units)))
        return units[pos]

    def get_input_unit(self, pos):
        return self._get_unit(self.input_units, pos, 'input')

    def get_hidden_unit(self, pos):
        return self._get_unit(self.hidden_units, pos, 'hidden')

    def get_output_unit(self, pos):
        return self._get_unit(self.output_units, pos, 'output')

    def set_inputs(self, x):
        x = validate_vector(x, self.n_input, 'x')
        for input_unit, value in zip(self.input_units, x):
            input_unit.set_activation(value)

    def forward(self):
        """ Forward the hidden layer, then the output layer, from the
        current input unit activations
        """
        for hidden in self.hidden_units:
            hidden.forward()

        return numpy.array([output.forward() for output in self.output_units])

    def predict(self, x):
        """
        Parameters
        ----------
        x: array-like, shape=(n_input,)

        Returns
        -------
        output: ndarray, shape=(n_output,)
        """
        self.set_inputs(x)
        return self.forward()

    def train_sample(self, x, expected):
        """ One online backpropagation step on a single sample.

        Returns
        -------
        errors: ndarray, shape=(n_output,)
            The signed errors (desired - output) before the update.
        """
        expected = validate_vector(expected, self.n_output, 'expected')

        # The previous sample's backward pass must not leak into this one.
        for hidden in self.hidden_units:
            hidden.reset_backward()

        self.predict(x)

        errors = numpy.empty(self.n_output)
        for i, (output, desired) in enumerate(
                zip(self.output_units, expected)):
            output.set_desired_output(desired)
            errors[i] = output.compute_error()
            output.compute_delta()

        for hidden in self.hidden_units:
            hidden.compute_delta()

        # Output weights first; hidden deltas already hold the old weights.
        for output in self.output_units:
            output.update()

        for hidden in self.hidden_units:
            hidden.update()

        return errors

    def get_params(self):
        """
        Returns
        -------
        params: list of ndarray
            [W_hidden, b_hidden, W_output, b_output], where
            W_hidden[j, i] is the weight from input i to hidden unit j and
            W_output[k, j] is the weight from hidden unit j to output k.
        """
        return [
            numpy.vstack([hidden.weights for hidden in self.hidden_units]),
            numpy.array([hidden.bias for hidden in self.hidden_units]),
            numpy.vstack([output.weights for output in self.output_units]),
            numpy.array([output.bias for output in self.output_units]),
        ]

    def set_params(self, W_hidden, b_hidden, W_output, b_output):
        """ Inject parameter values into every unit (shapes as returned by
        :meth:`get_params`)
        """
        W_hidden, b_hidden, W_output, b_output = self._validate_params(
            W_hidden, b_hidden, W_output, b_output)

        for hidden, weights, bias in zip(
                self.hidden_units, W_hidden, b_hidden):
            for pos, weight in enumerate(weights):
                hidden.set_weight(pos, weight)
            hidden.set_bias(bias)

        for output, weights, bias in zip(
                self.output_units, W_output, b_output):
            for pos, weight in enumerate(weights):
                output.set_weight(pos, weight)
            output.set_bias(bias)
