"""
Plotting utilities and style configuration for stability analysis.

This module provides consistent matplotlib styling across all plots in the codebase,
as well as functions rendering sigma-tau projections and block-averaged records.
"""

from typing import Optional, Sequence, Tuple

import matplotlib.pyplot as plt

from .projection import SigmaTauPlot, decade_ticks


def get_default_rc():
    """
    Get the default matplotlib rcParams for consistent plotting style.

    Returns:
        dict: Dictionary of rcParams to apply for consistent plotting style.
    """
    return {
        "figure.dpi": 150,
        "font.size": 8,
        "axes.labelsize": 8,
        "axes.titlesize": 8,
        "xtick.labelsize": 8,
        "ytick.labelsize": 8,
        "axes.prop_cycle": plt.cycler(
            "color",
            [
                "#000000",
                "#DC143C",
                "#00BFFF",
                "#FFD700",
                "#32CD32",
                "#FF69B4",
                "#FF4500",
                "#1E90FF",
                "#8A2BE2",
                "#FFA07A",
            ],
        )
        + plt.cycler("marker", ["o", "s", "^", "v", "D", "<", ">", "p", "h", "*"]),
    }


# Legend styling parameters
legend_params = {
    "loc": "best",
    "fontsize": 8,
    "frameon": True,
}


def apply_legend(ax):
    """Apply a consistent legend style to a Matplotlib Axes object.

    Parameters
    ----------
    ax : Axes | list[Axes]
        The Axes object(s) to which the legend will be applied.
        If a list is provided, the legend is applied to the last Axes.

    Returns
    -------
    Legend | None
        The created Legend object, or None when the axes carry no labels.
    """
    if isinstance(ax, list):
        ax = ax[-1]

    handles, _ = ax.get_legend_handles_labels()
    if not handles:
        return None

    legend = ax.legend(**legend_params)
    frame = legend.get_frame()
    frame.set_alpha(1.0)
    frame.set_edgecolor("black")
    frame.set_linewidth(0.7)
    return legend


def apply_plotting_style():
    """
    Apply the default plotting style to matplotlib rcParams.

    Called automatically when this module is imported.
    """
    plt.rcParams.update(get_default_rc())


apply_plotting_style()


def _tick_positions(ticks: Sequence[Tuple[float, str]]):
    return [t[0] for t in ticks], [t[1] for t in ticks]


def plot_sigma_tau(plot: SigmaTauPlot, ax=None, figsize=None, dpi=None, title: Optional[str] = None, **kwargs):
    """
    Draw a sigma-tau projection on log-log axes.

    Parameters:
    -----------
    plot : SigmaTauPlot
        Projection from ``Dataset.get_sigma_tau_plot``
    ax : Axes, optional
        Axes to draw on. If None, a new figure is created.
    figsize, dpi : optional
        Figure options used when ``ax`` is None
    title : str, optional
        Axes title
    **kwargs
        Passed to ``Axes.plot`` for every series

    Returns:
    --------
    Axes
    """
    if ax is None:
        if figsize is None:
            figsize = (6.5, 4.66)
        _, ax = plt.subplots(figsize=figsize, dpi=dpi)

    for series in plot.series:
        if series.points:
            ax.plot(series.taus, series.values, label=series.label, linewidth=1.0, **kwargs)

    ax.set_xscale("log")
    ax.set_yscale("log")

    # Ticks first: the padded tau decade would otherwise widen the limits
    ranges = plot.axis_ranges
    if ranges.x is not None:
        ticks = decade_ticks(ranges.x.min, ranges.x.max, pad_below=True, end_label=r"$\tau$")
        ax.set_xticks(*_tick_positions(ticks))
        ax.set_xlim(ranges.x.min, ranges.x.max)
    if ranges.y is not None:
        ticks = decade_ticks(ranges.y.min, ranges.y.max, end_label=r"$\sigma(\tau)$")
        ax.set_yticks(*_tick_positions(ticks))
        ax.set_ylim(ranges.y.min, ranges.y.max)

    ax.set_xlabel(r"$\tau$ (s)")
    ax.set_ylabel(r"$\sigma(\tau)$")
    if title:
        ax.set_title(title)
    apply_legend(ax)
    ax.grid(True, which="both", alpha=0.3)
    return ax


def plot_block_series(points: Sequence[Tuple[int, float]], label: str = "", ax=None, figsize=None, dpi=None, **kwargs):
    """
    Draw (index, block mean) pairs from ``Dataset.get_phase_series`` or
    ``Dataset.get_freq_series``.
    """
    if ax is None:
        if figsize is None:
            figsize = (6.5, 3.0)
        _, ax = plt.subplots(figsize=figsize, dpi=dpi)

    if points:
        idx, values = zip(*points)
        ax.plot(idx, values, label=label or None, linewidth=1.0, marker=".", **kwargs)

    ax.set_xlabel("Sample index")
    if label:
        ax.set_ylabel(label)
        apply_legend(ax)
    ax.grid(True, alpha=0.3)
    return ax
