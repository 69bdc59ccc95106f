""" The logistic activation shared by every hidden and output unit
"""
from scipy.special import expit


def sigmoid(v):
    """ Logistic squashing function, 1 / (1 + exp(-v))

    Parameters
    ----------
    v: float or ndarray
        The net input(s) of a unit.

    Returns
    -------
    activation: float or ndarray
        Value(s) strictly inside (0, 1) for moderate inputs; saturates
        without overflow warnings for large magnitudes.
    """
    return expit(v)


def sigmoid_derivative(activation):
    """ Derivative of the sigmoid expressed through its output value
    """
    return activation * (1.0 - activation)
