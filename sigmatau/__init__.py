"""
Frequency-stability analysis of phase and frequency records.

This package provides both object-oriented and function-based APIs for:
- Phase/frequency conversion
- Allan-family deviations (ADEV, OADEV, MDEV, TDEV, HDEV, OHDEV)
- Total-variance family (TOTDEV, MTOTDEV, TTOTDEV, HTOTDEV)
- Windowed descriptive statistics
- Sigma-tau plot projections and tables
- Power-law noise generation
"""

import logging

from .analyzer import DEFAULT_STATISTICS, StabilityAnalyzer, octave_factors
from .conversion import freq_to_phase, phase_to_freq
from .data_loader import SampleDataLoader
from .dataset import Dataset
from .estimators import (
    MIN_SAMPLES,
    AllanDeviation,
    DeviationEstimator,
    DeviationResult,
    HadamardDeviation,
    ModifiedAllanDeviation,
    OverlappingAllanDeviation,
    OverlappingHadamardDeviation,
    TimeDeviation,
)
from .exceptions import (
    DatasetNotLoadedError,
    DataSourceError,
    DataSourceUnavailable,
    FetchTimeout,
    InvalidResponse,
    StabilityError,
)
from .noise import PowerLawNoise
from .projection import AxisRange, AxisRanges, SigmaTauPlot, SigmaTauSeries
from .registry import ESTIMATORS, get_estimator
from .total import (
    MTOTDEV_BIAS,
    HadamardTotalDeviation,
    ModifiedTotalDeviation,
    TimeTotalDeviation,
    TotalDeviation,
)

# Configure package logger
_logger = logging.getLogger(__name__)
_logger.addHandler(logging.NullHandler())  # Default: no output unless configured

# Compatibility layer (function-based API)
from .compat import (
    adev,
    hdev,
    htotdev,
    mdev,
    mtotdev,
    oadev,
    ohdev,
    stdev,
    tdev,
    totdev,
    ttotdev,
)

# Plotting functions
from .plots import plot_block_series, plot_sigma_tau

__all__ = [
    # Classes
    "Dataset",
    "DeviationEstimator",
    "DeviationResult",
    "AllanDeviation",
    "OverlappingAllanDeviation",
    "ModifiedAllanDeviation",
    "TimeDeviation",
    "HadamardDeviation",
    "OverlappingHadamardDeviation",
    "TotalDeviation",
    "ModifiedTotalDeviation",
    "TimeTotalDeviation",
    "HadamardTotalDeviation",
    "SampleDataLoader",
    "StabilityAnalyzer",
    "PowerLawNoise",
    "SigmaTauPlot",
    "SigmaTauSeries",
    "AxisRange",
    "AxisRanges",
    # Exceptions
    "StabilityError",
    "DatasetNotLoadedError",
    "DataSourceError",
    "DataSourceUnavailable",
    "FetchTimeout",
    "InvalidResponse",
    # Constants and helpers
    "MIN_SAMPLES",
    "MTOTDEV_BIAS",
    "DEFAULT_STATISTICS",
    "ESTIMATORS",
    "get_estimator",
    "octave_factors",
    "phase_to_freq",
    "freq_to_phase",
    # Compatibility functions
    "adev",
    "oadev",
    "mdev",
    "tdev",
    "hdev",
    "ohdev",
    "totdev",
    "mtotdev",
    "ttotdev",
    "htotdev",
    "stdev",
    # Plotting functions
    "plot_sigma_tau",
    "plot_block_series",
]
