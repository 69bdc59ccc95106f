from collections import namedtuple
import logging

import numpy

from ffnn.core.exception import DimensionMismatch


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


# Yielded when iterating over a rule set
TrainingSample = namedtuple('TrainingSample', ['index', 'input', 'expected'])


def _as_vector(values, name):
    vector = numpy.array(values, dtype=float)

    if vector.ndim != 1:
        msg = "`{}` must be one dimensional but had shape {}"
        raise DimensionMismatch(msg.format(name, vector.shape))

    return vector


class TrainingRuleSet:
    """ Ordered storage of (input vector, expected output vector) pairs,
    the training rules that drive each epoch.
    """

    def __init__(self, n_input=None, n_output=None):
        """
        Parameters
        ----------
        n_input, n_output: int, default=None
            The required lengths of the input and expected output vectors.
            When not provided, they are fixed by the first added rule (and
            forgotten again by :meth:`clear`).
        """
        self._fixed_n_input = n_input is not None
        self._fixed_n_output = n_output is not None
        self.n_input = n_input
        self.n_output = n_output

        self._inputs = []
        self._expected = []

    def __repr__(self):
        return "<TrainingRuleSet count={:d}>".format(self.count)

    def __len__(self):
        return self.count

    def __iter__(self):
        for index in range(self.count):
            yield TrainingSample(
                index=index,
                input=self.get_input(index),
                expected=self.get_expected(index))

    @property
    def count(self):
        """ The number of rules added since the last :meth:`clear`
        """
        return len(self._inputs)

    @classmethod
    def from_arrays(cls, inputs, expected):
        """ Build a rule set from 2d arrays with one rule per row
        """
        inputs = numpy.atleast_2d(numpy.array(inputs, dtype=float))
        expected = numpy.atleast_2d(numpy.array(expected, dtype=float))

        if inputs.shape[0] != expected.shape[0]:
            msg = "Mismatch in number of rules: inputs ({}), expected ({})"
            raise DimensionMismatch(
                msg.format(inputs.shape[0], expected.shape[0]))

        rules = cls(n_input=inputs.shape[1], n_output=expected.shape[1])
        for x, y in zip(inputs, expected):
            rules.add(x, y)

        return rules

    def as_arrays(self):
        """ Returns
        -------
        inputs, expected: ndarray, shapes=(count, n_input), (count, n_output)
        """
        if self.count == 0:
            return (numpy.empty((0, self.n_input or 0)),
                    numpy.empty((0, self.n_output or 0)))

        return numpy.vstack(self._inputs), numpy.vstack(self._expected)

    def add(self, input, expected):
        """ Append an input / expected output pair

        Parameters
        ----------
        input: array-like, shape=(n_input,)

        expected: array-like, shape=(n_output,)
        """
        input = _as_vector(input, 'input')
        expected = _as_vector(expected, 'expected')

        n_input = len(input) if self.n_input is None else self.n_input
        n_output = len(expected) if self.n_output is None else self.n_output

        if len(input) != n_input:
            msg = "Input has length {} but rules require length {}"
            raise DimensionMismatch(msg.format(len(input), n_input))

        if len(expected) != n_output:
            msg = "Expected output has length {} but rules require length {}"
            raise DimensionMismatch(msg.format(len(expected), n_output))

        # Inferred dimensions are only recorded once the rule is accepted.
        self.n_input = n_input
        self.n_output = n_output

        self._inputs.append(input)
        self._expected.append(expected)

    def clear(self):
        """ Remove every rule. All indices become invalid.
        """
        logger.debug("Clearing {} training rule(s)".format(self.count))

        self._inputs = []
        self._expected = []

        if not self._fixed_n_input:
            self.n_input = None
        if not self._fixed_n_output:
            self.n_output = None

    def _check_index(self, index):
        if not 0 <= index < self.count:
            msg = "Rule number {} out of range for {} rule(s)"
            raise IndexError(msg.format(index, self.count))

    def get_input(self, index):
        """ The input vector of rule number `index` (the first is 0)
        """
        self._check_index(index)
        return self._inputs[index].copy()

    def get_expected(self, index):
        """ The expected output vector of rule number `index`
        """
        self._check_index(index)
        return self._expected[index].copy()
