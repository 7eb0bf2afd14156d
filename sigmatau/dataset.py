"""
Dataset holding phase/frequency samples and memoized stability statistics.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np

from . import windowed
from .conversion import freq_to_phase, phase_to_freq
from .data_loader import DEFAULT_FETCH_TIMEOUT, SampleDataLoader
from .estimators import DeviationResult
from .exceptions import DatasetNotLoadedError
from .projection import SigmaTauPlot, build_sigma_tau_plot, is_plottable
from .registry import ESTIMATORS, get_estimator, normalize_name
from .windowed import check_factor

logger = logging.getLogger(__name__)

CacheValue = Union[DeviationResult, float]


def _frozen(a: np.ndarray) -> np.ndarray:
    a = np.array(a, dtype=float)
    a.setflags(write=False)
    return a


class Dataset:
    """
    A phase or frequency record and the statistics computed from it.

    Samples are loaded once per load call (phase and frequency are kept in
    sync by conversion) and then queried at any averaging factor m. Each
    result is computed on first request and cached until the next load.

    Attributes:
    -----------
    name : str
        Free-form description; defaults to the creation time
    dataset_id : int or None
        Identifier supplied by the caller
    tau0 : float
        Sampling interval; tau = m * tau0
    skipped_lines : int
        Unparsable lines dropped by the last text load
    """

    def __init__(
        self,
        name: Optional[str] = None,
        tau0: float = 1.0,
        dataset_id: Optional[int] = None,
    ):
        """
        Initialize an empty dataset.

        Parameters:
        -----------
        name : str, optional
            Description of the dataset. If None, the current time is used.
        tau0 : float
            Sampling interval (default: 1.0)
        dataset_id : int, optional
            Identifier, e.g. drawn from a caller-owned ``itertools.count()``
        """
        if tau0 <= 0:
            raise ValueError("tau0 must be positive")

        self.name = name or datetime.now().isoformat(timespec="seconds")
        self.dataset_id = dataset_id
        self.tau0 = float(tau0)
        self.skipped_lines = 0

        self._phase = _frozen(np.empty(0))
        self._freq = _frozen(np.empty(0))
        self._loaded = False
        self._cache: Dict[Tuple[str, int], CacheValue] = {}

    def __repr__(self) -> str:
        return (
            f"Dataset(name={self.name!r}, dataset_id={self.dataset_id!r}, "
            f"tau0={self.tau0!r}, n_phase={len(self._phase)})"
        )

    @property
    def phase(self) -> np.ndarray:
        """Phase (time-error) samples, read-only."""
        return self._phase

    @property
    def frequency(self) -> np.ndarray:
        """Fractional frequency samples, read-only."""
        return self._freq

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _store(self, phase: np.ndarray, freq: np.ndarray, skipped: int = 0) -> None:
        self._phase = _frozen(phase)
        self._freq = _frozen(freq)
        self._cache = {}
        self._loaded = True
        self.skipped_lines = skipped

        if logger.isEnabledFor(logging.INFO):
            logger.info(
                "dataset_loaded",
                extra={
                    "event": "dataset_loaded",
                    "dataset": self.name,
                    "n_phase": len(self._phase),
                    "n_freq": len(self._freq),
                    "n_skipped": skipped,
                },
            )

    def _load_phase(self, phase: Iterable[float], skipped: int) -> None:
        phase = np.asarray(phase if isinstance(phase, np.ndarray) else list(phase), dtype=float)
        self._store(phase, phase_to_freq(phase, self.tau0), skipped)

    def _load_freq(self, freq: Iterable[float], skipped: int) -> None:
        freq = np.asarray(freq if isinstance(freq, np.ndarray) else list(freq), dtype=float)
        self._store(freq_to_phase(freq, self.tau0), freq, skipped)

    def load_phase(self, phase: Iterable[float]) -> None:
        """Load phase samples and derive the frequency record."""
        self._load_phase(phase, 0)

    def load_freq(self, freq: Iterable[float]) -> None:
        """Load frequency samples and rebuild phase by integration (x[0] = 0)."""
        self._load_freq(freq, 0)

    def load_phase_from_file(self, filepath: str) -> None:
        samples, skipped = SampleDataLoader.load_file(filepath)
        self._load_phase(samples, skipped)

    def load_freq_from_file(self, filepath: str) -> None:
        samples, skipped = SampleDataLoader.load_file(filepath)
        self._load_freq(samples, skipped)

    async def load_phase_from_url(self, url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> None:
        """Fetch phase samples from a URL; arrays are populated once the fetch completes."""
        samples, skipped = await SampleDataLoader.fetch_url(url, timeout=timeout)
        self._load_phase(samples, skipped)

    async def load_freq_from_url(self, url: str, timeout: float = DEFAULT_FETCH_TIMEOUT) -> None:
        """Fetch frequency samples from a URL; arrays are populated once the fetch completes."""
        samples, skipped = await SampleDataLoader.fetch_url(url, timeout=timeout)
        self._load_freq(samples, skipped)

    # ------------------------------------------------------------------
    # Cache
    # ------------------------------------------------------------------

    def _require_loaded(self) -> None:
        if not self._loaded:
            raise DatasetNotLoadedError(f"Dataset {self.name!r} has no samples loaded")

    def is_cached(self, name: str, m: int) -> bool:
        return (normalize_name(name), check_factor(m)) in self._cache

    def cached(self, name: str) -> Dict[int, CacheValue]:
        """Cached entries of one statistic keyed by m, in increasing m."""
        key = normalize_name(name)
        entries = [(m, v) for (n, m), v in self._cache.items() if n == key]
        return dict(sorted(entries, key=lambda e: e[0]))

    def _memoize(self, key: Tuple[str, int], compute: Callable[[], CacheValue]) -> CacheValue:
        if key in self._cache:
            return self._cache[key]

        value = compute()
        self._cache[key] = value

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "statistic_computed",
                extra={
                    "event": "statistic_computed",
                    "dataset": self.name,
                    "statistic": key[0],
                    "m": key[1],
                },
            )
        return value

    # ------------------------------------------------------------------
    # Deviations
    # ------------------------------------------------------------------

    def compute(self, name: str, m: int = 1) -> DeviationResult:
        """
        Compute (or fetch from cache) a deviation at averaging factor m.

        Parameters:
        -----------
        name : str
            Statistic name, case-insensitive (e.g. "ADEV", "mtotdev")
        m : int
            Averaging factor (default: 1)

        Returns:
        --------
        DeviationResult
            Value, tau and number of accumulated terms
        """
        self._require_loaded()
        estimator = get_estimator(name)
        m = check_factor(m)

        def run() -> DeviationResult:
            if estimator.base is not None:
                return estimator.from_base(self.compute(estimator.base, m))
            data = self._freq if estimator.source == "frequency" else self._phase
            return estimator.compute(data, m, self.tau0)

        return self._memoize((estimator.name, m), run)

    def recompute(self, name: str, m: int = 1) -> DeviationResult:
        """Run an estimator on the stored samples without touching the cache."""
        self._require_loaded()
        estimator = get_estimator(name)
        data = self._freq if estimator.source == "frequency" else self._phase
        return estimator.compute(data, check_factor(m), self.tau0)

    def get_adev(self, m: int = 1) -> float:
        return self.compute("adev", m).value

    def get_oadev(self, m: int = 1) -> float:
        return self.compute("oadev", m).value

    def get_mdev(self, m: int = 1) -> float:
        return self.compute("mdev", m).value

    def get_tdev(self, m: int = 1) -> float:
        return self.compute("tdev", m).value

    def get_hdev(self, m: int = 1) -> float:
        return self.compute("hdev", m).value

    def get_ohdev(self, m: int = 1) -> float:
        return self.compute("ohdev", m).value

    def get_totdev(self, m: int = 1) -> float:
        return self.compute("totdev", m).value

    def get_mtotdev(self, m: int = 1) -> float:
        return self.compute("mtotdev", m).value

    def get_ttotdev(self, m: int = 1) -> float:
        return self.compute("ttotdev", m).value

    def get_htotdev(self, m: int = 1) -> float:
        return self.compute("htotdev", m).value

    # ------------------------------------------------------------------
    # Windowed descriptive statistics
    # ------------------------------------------------------------------

    def _windowed(self, name: str, a: np.ndarray, func: Callable[[np.ndarray, int], float], m: int) -> float:
        self._require_loaded()
        m = check_factor(m)
        return self._memoize((name, m), lambda: func(a, m))

    def get_phase_avg(self, m: int = 1) -> float:
        return self._windowed("xavg", self._phase, windowed.windowed_average, m)

    def get_phase_max(self, m: int = 1) -> float:
        return self._windowed("xmax", self._phase, windowed.windowed_max, m)

    def get_phase_min(self, m: int = 1) -> float:
        return self._windowed("xmin", self._phase, windowed.windowed_min, m)

    def get_freq_avg(self, m: int = 1) -> float:
        return self._windowed("yavg", self._freq, windowed.windowed_average, m)

    def get_freq_max(self, m: int = 1) -> float:
        return self._windowed("ymax", self._freq, windowed.windowed_max, m)

    def get_freq_min(self, m: int = 1) -> float:
        return self._windowed("ymin", self._freq, windowed.windowed_min, m)

    def get_stdev(self, m: int = 1) -> float:
        """Standard deviation of m-sample frequency block means."""
        return self._windowed("stdev", self._freq, windowed.windowed_stdev, m)

    # ------------------------------------------------------------------
    # Plot series
    # ------------------------------------------------------------------

    def get_phase_series(self, m: int = 1) -> List[Tuple[int, float]]:
        """(index, block mean) pairs of the phase record."""
        self._require_loaded()
        return windowed.block_series(self._phase, m)

    def get_freq_series(self, m: int = 1) -> List[Tuple[int, float]]:
        """(index, block mean) pairs of the frequency record."""
        self._require_loaded()
        return windowed.block_series(self._freq, m)

    def iter_points(self, name: str) -> Iterator[Tuple[float, float]]:
        """
        Lazily yield (tau, value) for every cached result of a statistic.

        Values failing ``is_plottable`` (zero, negative, non-finite) are skipped.
        """
        for m, entry in self.cached(name).items():
            if isinstance(entry, DeviationResult):
                tau, value = entry.tau, entry.value
            else:
                tau, value = m * self.tau0, entry
            if is_plottable(value):
                yield tau, value

    def get_sigma_tau_plot(self, names: Iterable[str]) -> SigmaTauPlot:
        """
        Project cached deviations into plot series.

        Only results computed by earlier calls are included.

        Parameters:
        -----------
        names : iterable of str
            Statistic names, case-insensitive (e.g. ["ADEV", "MDEV"])

        Returns:
        --------
        SigmaTauPlot
            One series per name, labelled as given, plus axis ranges
        """
        if isinstance(names, str):
            names = [names]
        return build_sigma_tau_plot((name, self.iter_points(name)) for name in names)

    def compute_all(
        self,
        names: Optional[Iterable[str]] = None,
        factors: Iterable[int] = (1,),
    ) -> Dict[str, Dict[int, DeviationResult]]:
        """Compute several deviations over several averaging factors."""
        names = list(names) if names is not None else list(ESTIMATORS)
        factors = list(factors)
        return {
            normalize_name(name): {m: self.compute(name, m) for m in factors}
            for name in names
        }
