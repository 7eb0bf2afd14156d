"""
Unit tests for Dataset loading and memoization.
"""

import inspect
import types

import numpy as np
import pytest

from sigmatau.dataset import Dataset
from sigmatau.estimators import DeviationResult
from sigmatau.exceptions import DatasetNotLoadedError
from sigmatau.registry import ESTIMATORS

from conftest import NBS_FREQ, NBS_PHASE


class TestLoading:
    """Test load_phase, load_freq and file loading."""

    def test_load_freq_rebuilds_phase(self, nbs_dataset):
        assert np.array_equal(nbs_dataset.phase, NBS_PHASE)
        assert np.array_equal(nbs_dataset.frequency, NBS_FREQ)
        assert nbs_dataset.is_loaded

    def test_load_phase_derives_freq(self):
        dataset = Dataset(tau0=2.0)
        dataset.load_phase(NBS_PHASE)
        assert np.allclose(dataset.frequency, np.array(NBS_FREQ) / 2.0)

    def test_load_accepts_generator(self):
        dataset = Dataset()
        dataset.load_phase(float(v) for v in NBS_PHASE)
        assert len(dataset.phase) == 10

    def test_arrays_read_only(self, nbs_dataset):
        with pytest.raises(ValueError):
            nbs_dataset.phase[0] = 1.0
        with pytest.raises(ValueError):
            nbs_dataset.frequency[0] = 1.0

    def test_loaded_copy_is_independent(self):
        samples = np.array(NBS_FREQ, dtype=float)
        dataset = Dataset()
        dataset.load_freq(samples)
        samples[0] = 0.0
        assert dataset.frequency[0] == 892.0

    def test_load_file_counts_skipped(self, tmp_path):
        path = tmp_path / "freq.txt"
        path.write_text("# NBS record\n" + "\n".join(str(v) for v in NBS_FREQ) + "\n\nend\n")
        dataset = Dataset()
        dataset.load_freq_from_file(str(path))
        assert dataset.skipped_lines == 2
        assert np.array_equal(dataset.frequency, NBS_FREQ)

    def test_load_phase_file(self, tmp_path):
        path = tmp_path / "phase.txt"
        path.write_text("\n".join(str(v) for v in NBS_PHASE))
        dataset = Dataset()
        dataset.load_phase_from_file(str(path))
        assert dataset.skipped_lines == 0
        assert np.array_equal(dataset.frequency, NBS_FREQ)

    def test_array_load_resets_skipped_lines(self, tmp_path):
        path = tmp_path / "freq.txt"
        path.write_text("header\n" + "\n".join(str(v) for v in NBS_FREQ))
        dataset = Dataset()
        dataset.load_freq_from_file(str(path))
        assert dataset.skipped_lines == 1
        dataset.load_freq(NBS_FREQ)
        assert dataset.skipped_lines == 0

    def test_array_loads_take_samples_only(self):
        assert list(inspect.signature(Dataset.load_phase).parameters) == ["self", "phase"]
        assert list(inspect.signature(Dataset.load_freq).parameters) == ["self", "freq"]
        with pytest.raises(TypeError):
            Dataset().load_freq(NBS_FREQ, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Dataset().load_phase_from_file(str(tmp_path / "missing.txt"))

    def test_invalid_tau0(self):
        with pytest.raises(ValueError, match="tau0 must be positive"):
            Dataset(tau0=0.0)


class TestIdentity:
    """Test dataset naming and identity."""

    def test_default_name(self):
        assert Dataset().name

    def test_given_name_and_id(self, nbs_dataset):
        assert nbs_dataset.name == "nbs"
        assert nbs_dataset.dataset_id == 1

    def test_instances_are_independent(self):
        a = Dataset(name="a")
        b = Dataset(name="b")
        a.load_freq(NBS_FREQ)
        a.get_adev(1)
        assert not b.is_loaded
        assert not b.is_cached("adev", 1)


class TestNotLoaded:
    def test_statistics_require_samples(self):
        dataset = Dataset()
        with pytest.raises(DatasetNotLoadedError):
            dataset.get_adev(1)
        with pytest.raises(DatasetNotLoadedError):
            dataset.get_freq_avg(1)
        with pytest.raises(DatasetNotLoadedError):
            dataset.get_phase_series(1)


class TestMemoization:
    """Test that every statistic is computed once per load."""

    def test_same_result_object(self, nbs_dataset):
        first = nbs_dataset.compute("adev", 1)
        assert nbs_dataset.compute("ADEV", 1) is first
        assert nbs_dataset.is_cached("Adev", 1)

    def test_values(self, nbs_dataset):
        assert nbs_dataset.get_adev(1) == pytest.approx(91.22945, rel=1e-6)
        assert nbs_dataset.get_mdev(2) == pytest.approx(74.78849, rel=1e-6)
        assert nbs_dataset.get_htotdev(1) == pytest.approx(np.sqrt(210567 / 84))

    def test_derived_caches_base(self, nbs_dataset):
        tdev = nbs_dataset.get_tdev(2)
        assert nbs_dataset.is_cached("mdev", 2)
        assert tdev == pytest.approx(nbs_dataset.get_mdev(2) * 2 / np.sqrt(3))

        nbs_dataset.get_ttotdev(1)
        assert nbs_dataset.is_cached("mtotdev", 1)

    def test_reload_clears_cache(self, nbs_dataset):
        nbs_dataset.get_adev(1)
        nbs_dataset.get_freq_avg(1)
        nbs_dataset.load_phase(np.arange(10.0))
        assert not nbs_dataset.is_cached("adev", 1)
        assert not nbs_dataset.is_cached("yavg", 1)
        assert nbs_dataset.get_adev(1) == 0.0

    def test_recompute_bypasses_cache(self, nbs_dataset):
        result = nbs_dataset.recompute("hdev", 1)
        assert isinstance(result, DeviationResult)
        assert not nbs_dataset.is_cached("hdev", 1)

    def test_recompute_matches_cached(self, nbs_dataset):
        for name in ESTIMATORS:
            for m in (1, 2, 4):
                assert nbs_dataset.recompute(name, m) == nbs_dataset.compute(name, m)

    def test_m4_has_too_few_terms(self, nbs_dataset):
        assert nbs_dataset.get_adev(4) == 0.0
        assert nbs_dataset.get_hdev(4) == 0.0
        assert not nbs_dataset.compute("adev", 4).defined

    def test_cached_sorted_by_m(self, nbs_dataset):
        for m in (4, 1, 2):
            nbs_dataset.get_adev(m)
        assert list(nbs_dataset.cached("adev")) == [1, 2, 4]

    def test_unknown_statistic(self, nbs_dataset):
        with pytest.raises(ValueError, match="Unknown statistic"):
            nbs_dataset.compute("fdev", 1)

    def test_windowed_name_is_not_an_estimator(self, nbs_dataset):
        with pytest.raises(ValueError, match="not a deviation estimator"):
            nbs_dataset.compute("xavg", 1)

    def test_invalid_m(self, nbs_dataset):
        with pytest.raises(ValueError, match="m must be a positive integer"):
            nbs_dataset.get_adev(0)

    def test_compute_all(self, nbs_dataset):
        results = nbs_dataset.compute_all(["ADEV", "hdev"], factors=(1, 2))
        assert set(results) == {"adev", "hdev"}
        assert results["adev"][2].value == pytest.approx(85.95287, rel=1e-6)
        assert nbs_dataset.is_cached("hdev", 2)


class TestWindowedGetters:
    """Test windowed statistics through the dataset."""

    def test_freq(self, nbs_dataset):
        assert nbs_dataset.get_freq_avg(3) == pytest.approx(7100 / 9)
        assert nbs_dataset.get_freq_max(3) == pytest.approx(2524 / 3)
        assert nbs_dataset.get_freq_min(3) == pytest.approx(2113 / 3)
        assert nbs_dataset.get_stdev(1) == pytest.approx(np.std(NBS_FREQ, ddof=1))
        assert nbs_dataset.is_cached("stdev", 1)

    def test_phase(self, nbs_dataset):
        assert nbs_dataset.get_phase_max(1) == 7100.0
        assert nbs_dataset.get_phase_min(1) == 0.0
        assert nbs_dataset.get_phase_avg(1) == pytest.approx(np.mean(NBS_PHASE))
        assert nbs_dataset.is_cached("xavg", 1)

    def test_extremes_over_complete_blocks(self):
        dataset = Dataset()
        dataset.load_freq([1.0, 2.0, 3.0, 4.0, 100.0])
        assert dataset.get_freq_max(2) == 3.5
        dataset.load_freq([10.0, 20.0, 30.0, 40.0, -5.0])
        assert dataset.get_freq_min(2) == 15.0

    def test_m_exceeds_length(self, nbs_dataset):
        with pytest.raises(ValueError, match="exceeds"):
            nbs_dataset.get_freq_avg(10)

    def test_series(self, nbs_dataset):
        series = nbs_dataset.get_freq_series(3)
        assert [i for i, _ in series] == [0, 3, 6]
        assert series[0][1] == pytest.approx(2524 / 3)


class TestSigmaTauPlot:
    """Test projection of cached results."""

    def test_iter_points_is_lazy(self, nbs_dataset):
        assert isinstance(nbs_dataset.iter_points("adev"), types.GeneratorType)

    def test_uncomputed_series_is_empty(self, nbs_dataset):
        plot = nbs_dataset.get_sigma_tau_plot(["ADEV"])
        assert plot.series[0].points == []
        assert plot.axis_ranges.x is None

    def test_zero_values_excluded(self, nbs_dataset):
        for m in (1, 2, 4):
            nbs_dataset.get_adev(m)
        plot = nbs_dataset.get_sigma_tau_plot("ADEV")
        series = plot.series[0]
        assert series.label == "ADEV"
        assert series.taus == [1.0, 2.0]
        assert series.values[0] == pytest.approx(91.22945, rel=1e-6)

    def test_axis_ranges(self, nbs_dataset):
        nbs_dataset.get_adev(1)
        nbs_dataset.get_adev(2)
        ranges = nbs_dataset.get_sigma_tau_plot(["ADEV"]).axis_ranges
        assert ranges.x.min == 1.0
        assert ranges.x.max == 100.0
        assert ranges.y.min == 10.0
        assert ranges.y.max == 1000.0

    def test_tau_axis_uses_tau0(self):
        dataset = Dataset(tau0=0.5)
        dataset.load_phase(NBS_PHASE)
        dataset.get_adev(2)
        assert dataset.get_sigma_tau_plot(["adev"]).series[0].taus == [1.0]

    def test_windowed_series(self, nbs_dataset):
        nbs_dataset.get_stdev(1)
        plot = nbs_dataset.get_sigma_tau_plot(["stdev"])
        assert plot.series[0].taus == [1.0]

    def test_negative_windowed_values_excluded(self):
        dataset = Dataset()
        dataset.load_freq([-1.0, -2.0, -3.0, -4.0])
        dataset.get_freq_avg(1)
        dataset.get_freq_max(2)
        plot = dataset.get_sigma_tau_plot(["yavg", "ymax"])
        assert all(s.points == [] for s in plot.series)
        assert plot.axis_ranges.y is None
