"""
Conversion between phase (time-error) and fractional frequency series.
"""

import numpy as np


def _check_tau0(tau0: float) -> float:
    if tau0 <= 0:
        raise ValueError("tau0 must be positive")
    return float(tau0)


def phase_to_freq(x, tau0: float = 1.0) -> np.ndarray:
    """
    Convert sequential time-error values into fractional frequency values.

    y[i] = (x[i+1] - x[i]) / tau0

    Parameters:
    -----------
    x : array_like
        Phase samples
    tau0 : float
        Sampling interval (default: 1.0)

    Returns:
    --------
    np.ndarray
        Frequency samples, one shorter than ``x``
    """
    tau0 = _check_tau0(tau0)
    x = np.asarray(x, dtype=float)
    if x.size < 2:
        return np.empty(0, dtype=float)
    return np.diff(x) / tau0


def freq_to_phase(y, tau0: float = 1.0) -> np.ndarray:
    """
    Convert fractional frequency values into sequential time-error values.

    x[0] = 0, x[i] = x[i-1] + y[i-1] * tau0

    Parameters:
    -----------
    y : array_like
        Frequency samples
    tau0 : float
        Sampling interval (default: 1.0)

    Returns:
    --------
    np.ndarray
        Phase samples, one longer than ``y``, starting at 0
    """
    tau0 = _check_tau0(tau0)
    y = np.asarray(y, dtype=float)
    x = np.zeros(y.size + 1, dtype=float)
    np.cumsum(y * tau0, out=x[1:])
    return x
