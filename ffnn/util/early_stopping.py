import numpy


def stop_early(loss_hist, hist_len=100, tol=0, dec=True):
    """ Returns True when the linear trend over the `hist_len` most recent
    components of `loss_hist` is greater (or lesser if dec=False) than `tol`.

    Parameters
    ----------
    loss_hist: list or ndarray
        The loss values recorded so far, oldest first.

    hist_len: int, default=100
        Number of trailing values used to fit the trend. Nothing is decided
        until at least this many values exist.

    tol: float, default=0
        Slope threshold.

    dec: bool, default=True
        If True, the loss is expected to decrease, and a slope >= `tol`
        signals that training should stop.
    """
    if hist_len < 2:
        msg = "`hist_len` ({}) must be at least 2 to fit a trend"
        raise ValueError(msg.format(hist_len))

    if len(loss_hist) < hist_len:
        return False

    x = numpy.c_[numpy.ones(hist_len), numpy.arange(hist_len) + 1]
    L = numpy.array(loss_hist[-hist_len:], dtype=float)
    (_, m), _, _, _ = numpy.linalg.lstsq(x, L, rcond=None)

    return bool((dec and m >= tol) or (not dec and m <= tol))
