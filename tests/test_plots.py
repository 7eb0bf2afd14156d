"""
Unit tests for plotting helpers.
"""

import matplotlib.pyplot as plt
import pytest

from sigmatau.plots import apply_legend, get_default_rc, plot_block_series, plot_sigma_tau
from sigmatau.projection import build_sigma_tau_plot


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


class TestStyle:
    def test_default_rc(self):
        rc = get_default_rc()
        assert rc["font.size"] == 8
        assert "axes.prop_cycle" in rc

    def test_legend_without_labels(self):
        _, ax = plt.subplots()
        ax.plot([1, 2], [3, 4])
        assert apply_legend(ax) is None


class TestPlotSigmaTau:
    """Test sigma-tau rendering."""

    def test_log_axes_and_limits(self, nbs_dataset):
        nbs_dataset.get_adev(1)
        nbs_dataset.get_adev(2)
        nbs_dataset.get_mdev(1)
        plot = nbs_dataset.get_sigma_tau_plot(["ADEV", "MDEV"])

        ax = plot_sigma_tau(plot, title="NBS")
        assert ax.get_xscale() == "log"
        assert ax.get_yscale() == "log"
        assert ax.get_xlim() == pytest.approx((1.0, 100.0))
        assert ax.get_ylim() == pytest.approx((10.0, 1000.0))
        assert len(ax.get_lines()) == 2
        labels = [t.get_text() for t in ax.get_legend().get_texts()]
        assert labels == ["ADEV", "MDEV"]

    def test_axis_ticks(self, nbs_dataset):
        """Test decade ticks with a padded tau decade and named end ticks."""
        nbs_dataset.get_adev(1)
        nbs_dataset.get_adev(2)
        ax = plot_sigma_tau(nbs_dataset.get_sigma_tau_plot(["ADEV"]))
        xticks = list(ax.get_xticks())
        assert xticks[0] == pytest.approx(0.1)
        assert xticks[-1] == pytest.approx(100.0)
        assert ax.get_xticklabels()[-1].get_text() == r"$\tau$"
        assert ax.get_yticklabels()[-1].get_text() == r"$\sigma(\tau)$"
        assert ax.get_xlim() == pytest.approx((1.0, 100.0))

    def test_empty_plot(self):
        plot = build_sigma_tau_plot([("ADEV", [])])
        _, ax = plt.subplots()
        assert plot_sigma_tau(plot, ax=ax) is ax
        assert len(ax.get_lines()) == 0
        assert ax.get_legend() is None


class TestPlotBlockSeries:
    def test_points(self, nbs_dataset):
        ax = plot_block_series(nbs_dataset.get_freq_series(3), label="y")
        line = ax.get_lines()[0]
        assert list(line.get_xdata()) == [0, 3, 6]
        assert ax.get_ylabel() == "y"

    def test_no_points(self):
        ax = plot_block_series([])
        assert len(ax.get_lines()) == 0
