"""
Descriptive statistics over consecutive blocks of m samples.
"""

from typing import List, Tuple

import numpy as np


def check_factor(m) -> int:
    """Validate an averaging factor and return it as int."""
    if isinstance(m, (bool, np.bool_)) or not isinstance(m, (int, np.integer)):
        raise ValueError("m must be a positive integer")
    if m < 1:
        raise ValueError("m must be a positive integer")
    return int(m)


def block_averages(a: np.ndarray, m: int) -> np.ndarray:
    """
    Means of the blocks starting at 0, m, 2m, ...

    The trailing block is averaged over the samples it actually holds.

    Parameters:
    -----------
    a : np.ndarray
        Sample array
    m : int
        Averaging factor

    Returns:
    --------
    np.ndarray
        One mean per block
    """
    m = check_factor(m)
    n = len(a)
    if n == 0:
        raise ValueError("Cannot average an empty array")
    if m > n:
        raise ValueError(f"m={m} exceeds the number of samples ({n})")

    starts = np.arange(0, n, m)
    sums = np.add.reduceat(a, starts)
    counts = np.diff(np.append(starts, n))
    return sums / counts


def windowed_average(a: np.ndarray, m: int) -> float:
    """
    Average of the block means, weighted as sum(block means) * m / len(a).

    For lengths divisible by m this is the plain mean of ``a``.
    """
    means = block_averages(a, m)
    return float(np.sum(means) * m / len(a))


def _complete_block_averages(a: np.ndarray, m: int) -> np.ndarray:
    """Block means without the trailing partial block."""
    return block_averages(a, m)[: len(a) // m]


def windowed_max(a: np.ndarray, m: int) -> float:
    """Largest mean over the complete blocks."""
    return float(np.max(_complete_block_averages(a, m)))


def windowed_min(a: np.ndarray, m: int) -> float:
    """Smallest mean over the complete blocks."""
    return float(np.min(_complete_block_averages(a, m)))


def windowed_stdev(a: np.ndarray, m: int) -> float:
    """
    Standard deviation of the block means around ``windowed_average``.

    Uses the divisor len(a)/m - 1. Returns 0.0 when that divisor is not
    positive (fewer than two full blocks).
    """
    means = block_averages(a, m)
    divisor = len(a) / m - 1
    if divisor <= 0:
        return 0.0
    avg = float(np.sum(means) * m / len(a))
    return float(np.sqrt(np.sum((means - avg) ** 2) / divisor))


def block_series(a: np.ndarray, m: int) -> List[Tuple[int, float]]:
    """Pairs of (block start index, block mean) for time-series plots."""
    means = block_averages(a, m)
    return [(int(i), float(v)) for i, v in zip(range(0, len(a), m), means)]
