import unittest

import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from ffnn.visualize import plot_error_history  # noqa: E402


class TestPlotErrorHistory(unittest.TestCase):

    def tearDown(self):
        plt.close('all')

    def test_plot_with_tolerance(self):
        errors = np.linspace(0.5, 0.05, 20)
        ax = plot_error_history(errors, tol=0.1)

        self.assertEqual(len(ax.lines), 2)
        np.testing.assert_allclose(ax.lines[0].get_ydata(), errors)
        np.testing.assert_allclose(ax.lines[0].get_xdata(),
                                   np.arange(1, 21))

    def test_plot_on_given_axes(self):
        fig, ax = plt.subplots()
        returned = plot_error_history([0.3, 0.2, 0.1], ax=ax)

        self.assertIs(returned, ax)
        self.assertEqual(len(ax.lines), 1)

    def test_2d_errors_raise(self):
        with self.assertRaises(TypeError):
            plot_error_history(np.ones((3, 2)))
