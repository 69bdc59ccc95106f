import abc
import logging
import numbers

import numpy
from sklearn.metrics import mean_absolute_error

from ffnn.core.exception import DimensionMismatch
from ffnn.core.logger import progress_message
from ffnn.storage import TrainingRuleSet
from ffnn.util.early_stopping import stop_early


_logger_name = __name__.rsplit('.', 1)[-1]
logger = logging.getLogger(_logger_name)


def validate_count(count, name):
    if (isinstance(count, bool) or not isinstance(count, numbers.Integral)
            or count < 1):
        msg = "`{}` ({}) must be a positive integer"
        raise ValueError(msg.format(name, count))
    return int(count)


def validate_vector(values, length, name):
    vector = numpy.array(values, dtype=float)

    if vector.shape != (length,):
        msg = "`{}` was shape {} but should be shape {}"
        raise DimensionMismatch(msg.format(name, vector.shape, (length,)))

    return vector


class NetworkBase(abc.ABC):
    """ The epoch loop and evaluation shared by both representations of
    an input => hidden => output sigmoid network trained online.

    Subclasses implement a single-sample forward pass (:meth:`predict`),
    a single-sample backpropagation step (:meth:`train_sample`), and
    parameter access.
    """

    def __init__(self, n_input, n_hidden, n_output):
        self.n_input = validate_count(n_input, 'n_input')
        self.n_hidden = validate_count(n_hidden, 'n_hidden')
        self.n_output = validate_count(n_output, 'n_output')

    def __repr__(self):
        return "<{} n_input={:d}, n_hidden={:d}, n_output={:d}>".format(
            type(self).__name__, self.n_input, self.n_hidden, self.n_output)

    @abc.abstractmethod
    def predict(self, x):
        raise NotImplementedError

    @abc.abstractmethod
    def train_sample(self, x, expected):
        raise NotImplementedError

    @abc.abstractmethod
    def get_params(self):
        raise NotImplementedError

    @abc.abstractmethod
    def set_params(self, W_hidden, b_hidden, W_output, b_output):
        raise NotImplementedError

    def _validate_params(self, W_hidden, b_hidden, W_output, b_output):
        expected_shapes = (
            ('W_hidden', W_hidden, (self.n_hidden, self.n_input)),
            ('b_hidden', b_hidden, (self.n_hidden,)),
            ('W_output', W_output, (self.n_output, self.n_hidden)),
            ('b_output', b_output, (self.n_output,)),
        )

        params = []
        for name, param, shape in expected_shapes:
            param = numpy.array(param, dtype=float)
            if param.shape != shape:
                msg = "`{}` was shape {} but should be shape {}"
                raise DimensionMismatch(msg.format(name, param.shape, shape))
            params.append(param)

        return params

    def _validate_rules(self, rules):
        if not isinstance(rules, TrainingRuleSet):
            msg = "`rules` ({}) not instance of TrainingRuleSet"
            raise TypeError(msg.format(type(rules)))

        if rules.count == 0:
            raise ValueError("The training rule set is empty")

        if rules.n_input != self.n_input or rules.n_output != self.n_output:
            msg = ("Rules map {} input(s) to {} output(s) but the network "
                   "maps {} to {}")
            raise DimensionMismatch(msg.format(
                rules.n_input, rules.n_output, self.n_input, self.n_output))

    def predict_many(self, inputs):
        """ Forward each row of `inputs`, shape=(n_samples, n_input)
        """
        return numpy.vstack([self.predict(x) for x in inputs])

    def train_epoch(self, rules):
        """ Run :meth:`train_sample` on every rule, in order

        Returns
        -------
        errors: ndarray, shape=(count, n_output)
            The signed errors of each sample, measured before its update.
        """
        self._validate_rules(rules)
        return numpy.vstack([
            self.train_sample(sample.input, sample.expected)
            for sample in rules
        ])

    def error(self, rules):
        """ Mean absolute error over all rules and output units
        """
        self._validate_rules(rules)
        inputs, expected = rules.as_arrays()
        return float(mean_absolute_error(expected,
                                         self.predict_many(inputs)))

    def train(self, rules, max_epochs, tol=None, history_len=None,
              history_tol=0, logger=None, log_every=100):
        """ Run training epochs over `rules`.

        Parameters
        ----------
        rules: TrainingRuleSet
            The training rules, with dimensions matching the network.

        max_epochs: int
            Maximum number of epochs to run.

        tol: float, default=None
            If given, training stops as soon as the mean absolute error
            drops below `tol`.

        history_len: int, default=None
            If given, training stops when the linear trend of the last
            `history_len` epoch errors is not decreasing (see
            :func:`ffnn.util.early_stopping.stop_early`).

        history_tol: float, default=0
            Slope tolerance used with `history_len`.

        logger: logging.Logger, default=None
            Where progress is written; defaults to the module logger.

        log_every: int, default=100
            Log the error every `log_every` epochs. Zero disables it.

        Returns
        -------
        errors: ndarray, shape=(n_epochs_run,)
            The mean absolute error measured after each epoch.
        """
        max_epochs = validate_count(max_epochs, 'max_epochs')
        self._validate_rules(rules)

        if tol is not None and tol <= 0:
            msg = "`tol` ({}) must be positive"
            raise ValueError(msg.format(tol))

        # Every argument is checked before the first epoch touches a weight.
        if history_len is not None and validate_count(
                history_len, 'history_len') < 2:
            msg = "`history_len` ({}) must be at least 2 to fit a trend"
            raise ValueError(msg.format(history_len))

        if (isinstance(log_every, bool) or
                not isinstance(log_every, numbers.Integral) or log_every < 0):
            msg = "`log_every` ({}) must be a non-negative integer"
            raise ValueError(msg.format(log_every))

        if logger is None:
            logger = logging.getLogger(_logger_name)

        errors = []

        for epoch in range(1, max_epochs + 1):
            self.train_epoch(rules)
            errors.append(self.error(rules))

            if log_every and epoch % log_every == 0:
                msg = "Mean absolute error: {:.5f}".format(errors[-1])
                logger.info(progress_message(msg, epoch, max_epochs))

            if tol is not None and errors[-1] < tol:
                msg = "Converged after {} epoch(s); error {:.5f} < {:g}"
                logger.info(msg.format(epoch, errors[-1], tol))
                break

            if history_len is not None and stop_early(
                    errors, hist_len=history_len, tol=history_tol):
                msg = "Stopping early after {} epoch(s); error trend flat"
                logger.info(msg.format(epoch))
                break
        else:
            msg = "Reached {} epoch(s); final error {:.5f}"
            logger.info(msg.format(max_epochs, errors[-1]))

        return numpy.array(errors)
