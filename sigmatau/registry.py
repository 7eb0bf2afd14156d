"""
Lookup of deviation estimators by statistic name.
"""

from typing import Dict, Tuple

from .estimators import (
    AllanDeviation,
    DeviationEstimator,
    HadamardDeviation,
    ModifiedAllanDeviation,
    OverlappingAllanDeviation,
    OverlappingHadamardDeviation,
    TimeDeviation,
)
from .total import (
    HadamardTotalDeviation,
    ModifiedTotalDeviation,
    TimeTotalDeviation,
    TotalDeviation,
)

ESTIMATORS: Dict[str, DeviationEstimator] = {
    est.name: est
    for est in (
        AllanDeviation(),
        OverlappingAllanDeviation(),
        ModifiedAllanDeviation(),
        TimeDeviation(),
        HadamardDeviation(),
        OverlappingHadamardDeviation(),
        TotalDeviation(),
        ModifiedTotalDeviation(),
        TimeTotalDeviation(),
        HadamardTotalDeviation(),
    )
}

# Windowed descriptive statistics cached alongside the deviations
WINDOWED_STATISTICS: Tuple[str, ...] = (
    "xavg",
    "xmax",
    "xmin",
    "yavg",
    "ymax",
    "ymin",
    "stdev",
)

STATISTICS: Tuple[str, ...] = WINDOWED_STATISTICS + tuple(ESTIMATORS)


def normalize_name(name: str) -> str:
    """Lower-case a statistic name and check that it is known."""
    key = str(name).lower()
    if key not in STATISTICS:
        raise ValueError(f"Unknown statistic: {name}")
    return key


def get_estimator(name: str) -> DeviationEstimator:
    key = normalize_name(name)
    if key not in ESTIMATORS:
        raise ValueError(f"{name} is not a deviation estimator")
    return ESTIMATORS[key]
