import matplotlib.pyplot as plt
import numpy as np


def plot_error_history(
        errors, ax=None, tol=None,
        line_kwargs=dict(c='b', ls='-', lw=2),
        tol_kwargs=dict(c='r', ls='--', lw=1)):
    """ Plot the per-epoch training error

    Parameters
    ----------
    errors: ndarray, shape=(n_epochs,)
        The error after each epoch, as returned by a network's `train`.

    ax: matplotlib.axes.Axes, default=None
        Axes to draw on; a new figure is created when None.

    tol: float, default=None
        If given, draw a horizontal line at the convergence tolerance.

    line_kwargs: args
        Any keyword arguments that can be passed to `matplotlib.pyplot.plot`.

    tol_kwargs: args
        Any keyword arguments that can be passed to `matplotlib.pyplot.axhline`.

    Returns
    -------
    ax: matplotlib.axes.Axes
    """
    errors = np.asarray(errors, dtype=float)
    if errors.ndim != 1:
        raise TypeError("`errors` must be 1d.")

    if ax is None:
        fig = plt.figure(figsize=(6, 4))
        ax = fig.add_subplot(111)

    epochs = np.arange(1, len(errors) + 1)
    ax.plot(epochs, errors, **line_kwargs)

    if tol is not None:
        ax.axhline(tol, **tol_kwargs)

    ax.set_xlabel('Epoch')
    ax.set_ylabel('Mean absolute error')
    ax.grid(True)

    return ax
