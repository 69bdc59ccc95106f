import logging
import unittest

import numpy as np

from ffnn.activation import sigmoid
from ffnn.core.exception import DimensionMismatch
from ffnn.network import UnitNetwork
from ffnn.storage import TrainingRuleSet
from ffnn.util.early_stopping import stop_early


def make_xor_rules():
    rules = TrainingRuleSet(n_input=2, n_output=1)
    rules.add([0, 0], [0])
    rules.add([0, 1], [1])
    rules.add([1, 0], [1])
    rules.add([1, 1], [0])
    return rules


class TestUnitNetwork(unittest.TestCase):

    def setUp(self):
        self.random_state = np.random.RandomState(1234)
        self.network = UnitNetwork(n_input=3, n_hidden=4, n_output=2,
                                   learning_rate=0.5,
                                   random_state=self.random_state)

    def test_wiring(self):
        for hidden in self.network.hidden_units:
            self.assertEqual(hidden.n_upstream, 3)
            self.assertEqual(hidden.n_downstream, 2)
            for pos in range(3):
                self.assertIs(hidden.get_upstream(pos),
                              self.network.get_input_unit(pos))

        for output in self.network.output_units:
            self.assertEqual(output.n_upstream, 4)

    def test_param_shapes(self):
        W_hidden, b_hidden, W_output, b_output = self.network.get_params()

        self.assertEqual(W_hidden.shape, (4, 3))
        self.assertEqual(b_hidden.shape, (4,))
        self.assertEqual(W_output.shape, (2, 4))
        self.assertEqual(b_output.shape, (2,))

        for param in (W_hidden, b_hidden, W_output, b_output):
            self.assertTrue(((param >= -0.5) & (param < 0.5)).all())

    def test_same_seed_same_params(self):
        other = UnitNetwork(n_input=3, n_hidden=4, n_output=2,
                            random_state=np.random.RandomState(1234))

        for p1, p2 in zip(self.network.get_params(), other.get_params()):
            np.testing.assert_array_equal(p1, p2)

    def test_bad_sizes(self):
        for sizes in [(0, 2, 1), (2, -1, 1), (2, 2, 1.5)]:
            with self.assertRaises(ValueError):
                UnitNetwork(*sizes, random_state=self.random_state)

    def test_unit_lookup_out_of_range(self):
        with self.assertRaises(IndexError):
            self.network.get_input_unit(3)
        with self.assertRaises(IndexError):
            self.network.get_hidden_unit(4)
        with self.assertRaises(IndexError):
            self.network.get_output_unit(-1)

    def test_predict(self):
        x = np.array([0.1, -0.3, 0.8])
        W_hidden, b_hidden, W_output, b_output = self.network.get_params()

        h = sigmoid(np.dot(W_hidden, x) + b_hidden)
        expected = sigmoid(np.dot(W_output, h) + b_output)

        np.testing.assert_allclose(self.network.predict(x), expected)

    def test_predict_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            self.network.predict([0.1, 0.2])

        with self.assertRaises(DimensionMismatch):
            self.network.train_sample([0.1, 0.2, 0.3], [1.0])

    def test_train_sample_update_rule(self):
        x = np.array([0.1, -0.3, 0.8])
        y = np.array([1.0, 0.0])
        W_hidden, b_hidden, W_output, b_output = self.network.get_params()

        h = sigmoid(np.dot(W_hidden, x) + b_hidden)
        o = sigmoid(np.dot(W_output, h) + b_output)
        delta_o = o * (1 - o) * (y - o)
        delta_h = h * (1 - h) * np.dot(W_output.T, delta_o)

        errors = self.network.train_sample(x, y)
        np.testing.assert_allclose(errors, y - o)

        W_hidden2, b_hidden2, W_output2, b_output2 = self.network.get_params()
        np.testing.assert_allclose(
            W_output2 - W_output, 0.5 * np.outer(delta_o, h), atol=1e-14)
        np.testing.assert_allclose(
            b_output2 - b_output, 0.5 * delta_o, atol=1e-14)
        np.testing.assert_allclose(
            W_hidden2 - W_hidden, 0.5 * np.outer(delta_h, x), atol=1e-14)
        np.testing.assert_allclose(
            b_hidden2 - b_hidden, 0.5 * delta_h, atol=1e-14)

    def test_backward_buffers_one_pair_per_output(self):
        random_state = np.random.RandomState(4321)
        rules = TrainingRuleSet.from_arrays(
            random_state.rand(5, 3), random_state.rand(5, 2))

        for _ in range(3):
            for sample in rules:
                self.network.train_sample(sample.input, sample.expected)

                for hidden in self.network.hidden_units:
                    deltas, weights = hidden.backward_buffers
                    self.assertEqual(len(deltas), 2)
                    self.assertEqual(len(weights), 2)
                    self.assertEqual(hidden.n_downstream, 2)

    def test_set_params(self):
        params = [
            np.full((4, 3), 0.1), np.full(4, 0.2),
            np.full((2, 4), -0.3), np.full(2, 0.4),
        ]
        self.network.set_params(*params)

        for p1, p2 in zip(self.network.get_params(), params):
            np.testing.assert_array_equal(p1, p2)

        for hidden in self.network.hidden_units:
            self.assertEqual(hidden.downstream_weights, [-0.3, -0.3])

    def test_set_params_wrong_shape(self):
        W_hidden, b_hidden, W_output, b_output = self.network.get_params()

        with self.assertRaises(DimensionMismatch):
            self.network.set_params(W_hidden.T, b_hidden, W_output, b_output)

    def test_train_rules_dimension_mismatch(self):
        with self.assertRaises(DimensionMismatch):
            self.network.train(make_xor_rules(), max_epochs=1)

    def test_train_empty_rules(self):
        with self.assertRaises(ValueError):
            self.network.train(TrainingRuleSet(), max_epochs=1)

    def test_train_not_a_rule_set(self):
        with self.assertRaises(TypeError):
            self.network.train([([0, 0, 0], [0, 0])], max_epochs=1)

    def test_train_early_stop(self):
        network = UnitNetwork(2, 2, 1, random_state=self.random_state)

        # With a hugely negative slope tolerance every trend "stalls".
        errors = network.train(make_xor_rules(), max_epochs=50,
                               history_len=2, history_tol=-1e9)
        self.assertEqual(len(errors), 2)

    def test_train_bad_arguments_leave_params_unchanged(self):
        network = UnitNetwork(2, 2, 1, random_state=self.random_state)
        params = network.get_params()

        bad_arguments = [
            dict(history_len=1),
            dict(history_len=0),
            dict(history_len=2.5),
            dict(log_every=-1),
            dict(log_every=1.5),
            dict(tol=-0.1),
        ]

        for kwargs in bad_arguments:
            with self.assertRaises(ValueError):
                network.train(make_xor_rules(), max_epochs=10, **kwargs)

        for p1, p2 in zip(network.get_params(), params):
            np.testing.assert_array_equal(p1, p2)

    def test_train_logs_progress(self):
        network = UnitNetwork(2, 2, 1, random_state=self.random_state)
        logger = logging.getLogger('test-unit-network')

        with self.assertLogs(logger, level='INFO') as logs:
            errors = network.train(make_xor_rules(), max_epochs=20,
                                   logger=logger, log_every=10)

        self.assertEqual(len(errors), 20)
        self.assertIn("(10 / 20) Mean absolute error", logs.output[0])
        self.assertIn("Reached 20 epoch(s)", logs.output[-1])

    def test_xor(self):
        rules = make_xor_rules()
        network = UnitNetwork(2, 2, 1, learning_rate=1.0,
                              random_state=np.random.RandomState(1234))

        errors = network.train(rules, max_epochs=5000, tol=0.1, log_every=0)

        self.assertLess(errors[-1], 0.1)
        self.assertFalse(stop_early(errors, hist_len=len(errors)))

        for sample in rules:
            output = network.predict(sample.input)
            self.assertLess(abs(output[0] - sample.expected[0]), 0.5)
