"""
Total-variance family estimators.

These extend the data at the edges (mirror reflection for TOTDEV, reversed
copies of each detrended window for the modified and Hadamard forms) so that
more terms contribute at large averaging factors.
"""

from typing import Tuple

import numpy as np

from .conversion import _check_tau0
from .estimators import (
    MIN_SAMPLES,
    DerivedEstimator,
    DeviationEstimator,
    DeviationResult,
    _gate,
)
from .windowed import check_factor


# Bias factor for white FM noise applied to MTOTDEV
MTOTDEV_BIAS = 0.73


def reflect_extend(x: np.ndarray) -> np.ndarray:
    """
    Mirror-extend a phase sequence by N-2 samples at each end.

    x*(-i) = 2x(0) - x(i), x*(N-1+i) = 2x(N-1) - x(N-1-i), for i = 1..N-2.
    The original samples start at offset N-2 of the result.
    """
    n = len(x)
    if n < 3:
        return np.array(x, dtype=float)
    inner = x[n - 2 : 0 : -1]
    return np.concatenate((2.0 * x[0] - inner, x, 2.0 * x[-1] - inner))


def _window_second_difference_sum(segment: np.ndarray, m: int) -> float:
    """
    Detrend a 3m-sample segment, extend it to 9m samples and sum the squared
    second differences of its m-sample block means.
    """
    length = 3 * m
    half = (length + 1) // 2
    h = length // 2

    slope = np.sum((segment[half : half + h] - segment[:h]) / half) / h
    detrended = segment - slope * np.arange(length)
    reflected = detrended[::-1]
    extended = np.concatenate((reflected, detrended, reflected))

    csum = np.concatenate(([0.0], np.cumsum(extended)))
    means = (csum[m:] - csum[:-m]) / m
    v = means[: 6 * m] - 2.0 * means[m : 7 * m] + means[2 * m : 8 * m]
    return float(np.sum(v * v))


def windowed_total_sum(data: np.ndarray, m: int) -> Tuple[float, int]:
    """
    Accumulate per-window sums over every 3m-sample window of ``data``.

    Returns:
    --------
    (d, count) : tuple
        Accumulated sum (each window contributes sum / 6 * m) and the number
        of windows, N - 3m + 1 (zero when no window fits)
    """
    count = len(data) - 3 * m + 1
    if count <= 0:
        return 0.0, 0

    d = 0.0
    for start in range(count):
        d += _window_second_difference_sum(data[start : start + 3 * m], m) / 6 * m
    return d, count


class TotalDeviation(DeviationEstimator):
    """
    Total deviation.

                     1     N-1
    s²total(t) = --------   Σ   [ x*(i-m) - 2x*(i) + x*(i+m) ]²
                 2t²(N-2)  i=2

    x* is the phase sequence reflected about both end points.
    """

    name = "totdev"

    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        m = check_factor(m)
        tau = m * _check_tau0(tau0)
        length = len(data)
        n = 0
        total = 0.0

        if length >= 3:
            offset = length - 2
            extended = reflect_extend(data)
            # Skip entirely when the reflection does not reach i +/- m
            if offset + length + m - 1 <= 3 * length - 4:
                centre = offset + np.arange(1, length - 1)
                v = extended[centre - m] - 2.0 * extended[centre] + extended[centre + m]
                total = np.sum(v * v) / 2
                n = len(v)

        value = np.sqrt(total / n) / tau if n > MIN_SAMPLES else 0.0
        return _gate(self.name, m, tau, n, value)


class ModifiedTotalDeviation(DeviationEstimator):
    """
    Modified total deviation.

                             1        N-3m+1    1   n+3m-1
    Mod s²total(t) = ---------------    Σ    { ---    Σ    [0zi*(m)]² }
                     2m²t0²(N-3m+1)    n=1     6m   i=n-3m

    Each 3m window is detrended and extended with reversed copies on both
    sides before taking block-mean second differences. The result is divided
    by MTOTDEV_BIAS.
    """

    name = "mtotdev"

    def __init__(self, bias: float = MTOTDEV_BIAS):
        """
        Parameters:
        -----------
        bias : float
            Bias correction divisor (default: 0.73, white FM noise)
        """
        if bias <= 0:
            raise ValueError("bias must be positive")
        self.bias = float(bias)

    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        m = check_factor(m)
        tau = m * _check_tau0(tau0)
        d, count = windowed_total_sum(data, m)

        if count > MIN_SAMPLES:
            d /= 2 * count
            value = np.sqrt(d / self.bias) / (m * tau)
        else:
            value = 0.0
        return _gate(self.name, m, tau, count, value)


class TimeTotalDeviation(DerivedEstimator):
    """
    Time total deviation.

    Total s²x(t) = (t²/3) · Mod s²total(t)
    """

    name = "ttotdev"
    base = "mtotdev"
    _estimator = ModifiedTotalDeviation()

    def from_base(self, result: DeviationResult) -> DeviationResult:
        return DeviationResult(
            name=self.name,
            m=result.m,
            tau=result.tau,
            value=result.value * result.tau / np.sqrt(3),
            n_terms=result.n_terms,
        )


class HadamardTotalDeviation(DeviationEstimator):
    """
    Hadamard total deviation on frequency data.

                        1      N-3m+1    1   n+3m-1
    Total Hs²y(t) = ---------    Σ    { ---    Σ    [Hi(m)]² }
                    6(N-3m+1)   n=1     6m   i=n-3m

    Uses the same windowing as MTOTDEV on the frequency array; no tau
    divisor and no bias correction.
    """

    name = "htotdev"
    source = "frequency"

    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        m = check_factor(m)
        tau = m * _check_tau0(tau0)
        d, count = windowed_total_sum(data, m)

        if count > MIN_SAMPLES:
            d /= 6 * count
            value = np.sqrt(d)
        else:
            value = 0.0
        return _gate(self.name, m, tau, count, value)
