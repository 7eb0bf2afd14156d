"""
Compatibility layer with a stateless function-based API.

Each function runs its estimator directly on the given samples, without a
Dataset and without caching.
"""

import numpy as np

from .registry import get_estimator
from .windowed import windowed_stdev


def _deviation(name: str, data, m: int, tau0: float) -> float:
    return get_estimator(name).compute(np.asarray(data, dtype=float), m, tau0).value


def adev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Allan deviation of a phase record.

    This is a compatibility wrapper around AllanDeviation.
    """
    return _deviation("adev", phase, m, tau0)


def oadev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Allan deviation advancing by m samples per term.

    This is a compatibility wrapper around OverlappingAllanDeviation.
    """
    return _deviation("oadev", phase, m, tau0)


def mdev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Modified Allan deviation of a phase record.

    This is a compatibility wrapper around ModifiedAllanDeviation.
    """
    return _deviation("mdev", phase, m, tau0)


def tdev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Time deviation of a phase record.

    This is a compatibility wrapper around TimeDeviation.
    """
    return _deviation("tdev", phase, m, tau0)


def hdev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Hadamard deviation of a phase record.

    This is a compatibility wrapper around HadamardDeviation.
    """
    return _deviation("hdev", phase, m, tau0)


def ohdev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Hadamard deviation advancing by m samples per term.

    This is a compatibility wrapper around OverlappingHadamardDeviation.
    """
    return _deviation("ohdev", phase, m, tau0)


def totdev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Total deviation of a phase record.

    This is a compatibility wrapper around TotalDeviation.
    """
    return _deviation("totdev", phase, m, tau0)


def mtotdev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Modified total deviation of a phase record.

    This is a compatibility wrapper around ModifiedTotalDeviation.
    """
    return _deviation("mtotdev", phase, m, tau0)


def ttotdev(phase, m: int = 1, tau0: float = 1.0) -> float:
    """
    Time total deviation of a phase record.

    This is a compatibility wrapper around TimeTotalDeviation.
    """
    return _deviation("ttotdev", phase, m, tau0)


def htotdev(freq, m: int = 1, tau0: float = 1.0) -> float:
    """
    Hadamard total deviation of a frequency record.

    This is a compatibility wrapper around HadamardTotalDeviation.
    """
    return _deviation("htotdev", freq, m, tau0)


def stdev(freq, m: int = 1) -> float:
    """Standard deviation of m-sample frequency block means."""
    return windowed_stdev(np.asarray(freq, dtype=float), m)
