"""
Classical Allan-variance family estimators on phase data.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .conversion import _check_tau0
from .windowed import check_factor

logger = logging.getLogger(__name__)

# Minimum number of accumulated terms for a deviation to be reported
MIN_SAMPLES = 3


@dataclass(frozen=True)
class DeviationResult:
    """
    Outcome of a single deviation computation.

    ``value`` is 0.0 when fewer than MIN_SAMPLES + 1 terms were accumulated;
    ``defined`` tells that case apart from a true zero deviation.
    """

    name: str
    m: int
    tau: float
    value: float
    n_terms: int

    @property
    def defined(self) -> bool:
        return self.n_terms > MIN_SAMPLES


def _gate(name: str, m: int, tau: float, n: int, value: float) -> DeviationResult:
    """Apply the MIN_SAMPLES threshold, reporting 0.0 below it."""
    if n > MIN_SAMPLES:
        return DeviationResult(name=name, m=m, tau=tau, value=float(value), n_terms=n)

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "insufficient_data",
            extra={
                "event": "insufficient_data",
                "statistic": name,
                "m": m,
                "n_terms": n,
            },
        )
    return DeviationResult(name=name, m=m, tau=tau, value=0.0, n_terms=n)


def second_differences(x: np.ndarray, m: int, step: int = 1) -> np.ndarray:
    """x[i+2m] - 2x[i+m] + x[i] for i = 0, step, 2*step, ... < N-2m."""
    n = len(x) - 2 * m
    if n <= 0:
        return np.empty(0, dtype=float)
    v = x[2 * m :] - 2.0 * x[m : len(x) - m] + x[:n]
    return v[::step]


def third_differences(x: np.ndarray, m: int, step: int = 1) -> np.ndarray:
    """x[i+3m] - 3x[i+2m] + 3x[i+m] - x[i] for i = 0, step, ... < N-3m."""
    n = len(x) - 3 * m
    if n <= 0:
        return np.empty(0, dtype=float)
    v = x[3 * m :] - 3.0 * x[2 * m : len(x) - m] + 3.0 * x[m : len(x) - 2 * m] - x[:n]
    return v[::step]


class DeviationEstimator(ABC):
    """Base class for deviation estimators."""

    #: Lower-case statistic name used as cache key
    name: str = ""
    #: Which sample array the estimator consumes: "phase" or "frequency"
    source: str = "phase"
    #: Name of the estimator this one is derived from, if any
    base: Optional[str] = None

    @abstractmethod
    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        """
        Compute the deviation at averaging factor m.

        Parameters:
        -----------
        data : np.ndarray
            Phase samples (or frequency samples when ``source`` is "frequency")
        m : int
            Averaging factor
        tau0 : float
            Sampling interval (default: 1.0)

        Returns:
        --------
        DeviationResult
            Value and number of accumulated terms
        """
        pass

    def __call__(self, data, m: int = 1, tau0: float = 1.0) -> float:
        return self.compute(np.asarray(data, dtype=float), m, tau0).value

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class DerivedEstimator(DeviationEstimator):
    """
    Estimator defined as a rescaling of another estimator's result.

    Subclasses set ``base`` and ``_estimator`` and implement ``from_base``.
    """

    _estimator: DeviationEstimator

    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        return self.from_base(self._estimator.compute(data, m, tau0))

    @abstractmethod
    def from_base(self, result: DeviationResult) -> DeviationResult:
        pass


class AllanDeviation(DeviationEstimator):
    """
    Allan deviation from second differences of phase.

                 1      N-2m
    s²y(t) = ---------   Σ   [ x(i+2m) - 2x(i+m) + x(i) ]²
             2t²(N-2m)  i=1

    The window advances one sample per term, so consecutive terms overlap.
    ``OverlappingAllanDeviation`` advances by m instead. The names are kept
    for compatibility with existing "adev"/"oadev" result tables, although
    the usual convention calls the step-1 form overlapping.
    """

    name = "adev"
    _advance_by_m = False

    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        m = check_factor(m)
        tau = m * _check_tau0(tau0)
        v = second_differences(data, m, step=m if self._advance_by_m else 1)
        n = len(v)
        value = np.sqrt(np.sum(v * v) / (2 * n)) / tau if n > MIN_SAMPLES else 0.0
        return _gate(self.name, m, tau, n, value)


class OverlappingAllanDeviation(AllanDeviation):
    """Allan deviation with the window advanced by m samples per term."""

    name = "oadev"
    _advance_by_m = True


class ModifiedAllanDeviation(DeviationEstimator):
    """
    Modified Allan deviation.

                        1        N-3m+1   j+m-1
    Mod s²y(t) = --------------    Σ    {  Σ   [x(i+2m) - 2x(i+m) + x(i)] }²
                 2m²t²(N-3m+1)    j=1      i=j

    The inner sums are kept as a running total updated with third
    differences (Tom Van Baak's unnested form).
    """

    name = "mdev"

    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        m = check_factor(m)
        tau = m * _check_tau0(tau0)

        seed = second_differences(data, m)[:m]
        third = third_differences(data, m)
        # Sequential running sum: seed first, then each third difference
        running = np.cumsum(np.concatenate(([np.sum(seed)], third)))
        n = len(running)
        total = np.sum(running * running)

        value = np.sqrt(total / (2 * m * m * n)) / tau if n > MIN_SAMPLES else 0.0
        return _gate(self.name, m, tau, n, value)


class TimeDeviation(DerivedEstimator):
    """
    Time deviation.

    s²x(t) = (t²/3) · Mod s²y(t)
    """

    name = "tdev"
    base = "mdev"
    _estimator = ModifiedAllanDeviation()

    def from_base(self, result: DeviationResult) -> DeviationResult:
        return DeviationResult(
            name=self.name,
            m=result.m,
            tau=result.tau,
            value=result.value * result.tau / np.sqrt(3),
            n_terms=result.n_terms,
        )


class HadamardDeviation(DeviationEstimator):
    """
    Hadamard deviation from third differences of phase.

                1       N-3m
    Hs²y(t) = ---------  Σ   [ x(i+3m) - 3x(i+2m) + 3x(i+m) - x(i) ]²
              6t²(N-3m) i=1

    Advances one sample per term; see ``OverlappingHadamardDeviation``.
    """

    name = "hdev"
    _advance_by_m = False

    def compute(self, data: np.ndarray, m: int, tau0: float = 1.0) -> DeviationResult:
        m = check_factor(m)
        tau = m * _check_tau0(tau0)
        v = third_differences(data, m, step=m if self._advance_by_m else 1)
        n = len(v)
        value = np.sqrt(np.sum(v * v) / (6 * n)) / tau if n > MIN_SAMPLES else 0.0
        return _gate(self.name, m, tau, n, value)


class OverlappingHadamardDeviation(HadamardDeviation):
    """Hadamard deviation with the window advanced by m samples per term."""

    name = "ohdev"
    _advance_by_m = True
