"""
Sigma-tau tables over octave-spaced averaging factors.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

import pandas as pd

from .dataset import Dataset
from .registry import get_estimator

logger = logging.getLogger(__name__)

DEFAULT_STATISTICS = ("adev", "mdev", "tdev", "hdev", "totdev")


def octave_factors(n: int) -> List[int]:
    """Averaging factors 1, 2, 4, ... strictly below n."""
    factors = []
    m = 1
    while m < n:
        factors.append(m)
        m *= 2
    return factors


class StabilityAnalyzer:
    """
    Evaluates a fixed set of deviations over a range of averaging factors.

    Performs the following pipeline:
    1. Load data from file (or take an already loaded Dataset)
    2. Choose octave averaging factors from the phase record length
    3. Compute every statistic at every factor (results stay cached on
       the dataset, ready for plotting)
    4. Collect one row per factor
    """

    def __init__(self, names: Sequence[str] = DEFAULT_STATISTICS):
        """
        Initialize analyzer.

        Parameters:
        -----------
        names : sequence of str
            Deviation names to evaluate (default: ADEV, MDEV, TDEV, HDEV, TOTDEV)
        """
        self.names = [get_estimator(name).name for name in names]

    def analyze(self, dataset: Dataset, factors: Optional[Iterable[int]] = None) -> Dict:
        """
        Compute the sigma-tau table of a loaded dataset.

        Parameters:
        -----------
        dataset : Dataset
            Dataset with samples loaded
        factors : iterable of int, optional
            Averaging factors. If None, octave factors up to the record length.

        Returns:
        --------
        dict
            {"data": rows, "columns": column names}. Each row holds m, tau,
            one value per statistic (0.0 where undefined) and "n_<name>"
            term counts.
        """
        if factors is None:
            factors = octave_factors(len(dataset.phase))
        factors = list(factors)

        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "analysis_start",
                extra={
                    "event": "analysis_start",
                    "dataset": dataset.name,
                    "statistics": list(self.names),
                    "n_factors": len(factors),
                },
            )

        rows = []
        for m in factors:
            row = {"m": m, "tau": m * dataset.tau0}
            for name in self.names:
                result = dataset.compute(name, m)
                row[name.upper()] = result.value
                row[f"n_{name}"] = result.n_terms
            rows.append(row)

        columns = ["m", "tau"] + [name.upper() for name in self.names]
        columns += [f"n_{name}" for name in self.names]

        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "analysis_complete",
                extra={
                    "event": "analysis_complete",
                    "dataset": dataset.name,
                    "n_rows": len(rows),
                },
            )

        return {"data": rows, "columns": columns}

    def analyze_file(
        self,
        filepath: str,
        data_type: str = "phase",
        tau0: float = 1.0,
        factors: Optional[Iterable[int]] = None,
    ) -> Dict:
        """
        Load a text data file and compute its sigma-tau table.

        Parameters:
        -----------
        filepath : str
            Path to the data file (one value per line)
        data_type : str
            "phase" or "frequency" (default: "phase")
        tau0 : float
            Sampling interval (default: 1.0)
        factors : iterable of int, optional
            Averaging factors. If None, octave factors.

        Returns:
        --------
        dict
            Table from ``analyze`` plus "filename", "dataset" and "skipped_lines"
        """
        dataset = Dataset(name=Path(filepath).name, tau0=tau0)
        if data_type == "phase":
            dataset.load_phase_from_file(filepath)
        elif data_type == "frequency":
            dataset.load_freq_from_file(filepath)
        else:
            raise ValueError(f"Unknown data type: {data_type}. Expected 'phase' or 'frequency'")

        summary = self.analyze(dataset, factors=factors)
        summary["filename"] = Path(filepath).name
        summary["dataset"] = dataset
        summary["skipped_lines"] = dataset.skipped_lines
        return summary

    @staticmethod
    def to_dataframe(summary: Dict) -> pd.DataFrame:
        """Table rows as a DataFrame indexed by m."""
        return pd.DataFrame(summary["data"], columns=summary["columns"]).set_index("m")
