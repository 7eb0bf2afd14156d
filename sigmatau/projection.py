"""
Projection of cached deviations into sigma-tau plot series.

This is pure data: (tau, value) points per statistic plus decade-aligned
axis ranges. Rendering lives in ``sigmatau.plots``.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

Point = Tuple[float, float]


@dataclass(frozen=True)
class AxisRange:
    min: float
    max: float

    def to_dict(self) -> Dict[str, float]:
        return {"min": self.min, "max": self.max}


@dataclass(frozen=True)
class AxisRanges:
    x: Optional[AxisRange] = None
    y: Optional[AxisRange] = None

    def to_dict(self) -> Dict[str, Optional[Dict[str, float]]]:
        return {
            "x": self.x.to_dict() if self.x is not None else None,
            "y": self.y.to_dict() if self.y is not None else None,
        }


@dataclass(frozen=True)
class SigmaTauSeries:
    label: str
    points: List[Point] = field(default_factory=list)

    @property
    def taus(self) -> List[float]:
        return [p[0] for p in self.points]

    @property
    def values(self) -> List[float]:
        return [p[1] for p in self.points]


@dataclass(frozen=True)
class SigmaTauPlot:
    series: List[SigmaTauSeries]
    axis_ranges: AxisRanges

    def to_dict(self) -> Dict:
        return {
            "series": [{"label": s.label, "points": list(s.points)} for s in self.series],
            "axisRanges": self.axis_ranges.to_dict(),
        }


def is_plottable(value: Optional[float]) -> bool:
    """Zero, negative, missing and non-finite values are left out of log plots."""
    return value is not None and math.isfinite(value) and value > 0


def decade_exponent(value: float) -> int:
    # Tolerate log10 rounding for values that are exact powers of ten
    return int(math.floor(math.log10(value) + 1e-12))


def axis_ranges(series: Iterable[SigmaTauSeries]) -> AxisRanges:
    """
    Decade-aligned axis ranges covering every point of every series.

    x spans [10^floor(log10 tau_min), 10^(floor(log10 tau_max) + 2)] and y
    spans [10^expmin, 10^(expmax + 2)] over the value exponents.
    """
    taus = []
    values = []
    for s in series:
        taus.extend(s.taus)
        values.extend(s.values)

    if not taus:
        return AxisRanges()

    exponents = [decade_exponent(v) for v in values]
    return AxisRanges(
        x=AxisRange(
            min=10.0 ** decade_exponent(min(taus)),
            max=10.0 ** (decade_exponent(max(taus)) + 2),
        ),
        y=AxisRange(
            min=10.0 ** min(exponents),
            max=10.0 ** (max(exponents) + 2),
        ),
    )


def decade_ticks(
    lo: float,
    hi: float,
    pad_below: bool = False,
    end_label: Optional[str] = None,
) -> List[Tuple[float, str]]:
    """
    Log-scale ticks for an axis spanning lo to hi.

    Each decade from floor(log10 lo) up to, but excluding, floor(log10 hi)
    contributes a labelled major tick followed by eight unlabelled minor
    ticks (2..9 times the decade).

    Parameters:
    -----------
    lo, hi : float
        Axis limits, 0 < lo < hi
    pad_below : bool
        Start one decade below lo (the tau axis does this)
    end_label : str, optional
        If given, a final tick at hi carrying this label (axis name)

    Returns:
    --------
    list of (position, label)
    """
    if lo <= 0 or hi <= lo:
        raise ValueError("decade_ticks requires 0 < lo < hi")

    ticks = []
    first = decade_exponent(lo) - (1 if pad_below else 0)
    last = decade_exponent(hi)
    for k in range(first, last):
        base = 10.0**k
        ticks.append((base, f"$10^{{{k}}}$"))
        ticks.extend((base * i, "") for i in range(2, 10))
    if end_label is not None:
        ticks.append((hi, end_label))
    return ticks


def build_sigma_tau_plot(named_points: Iterable[Tuple[str, Iterable[Point]]]) -> SigmaTauPlot:
    """
    Build a plot projection from (label, points) pairs.

    Points failing ``is_plottable`` are dropped.
    """
    series = [
        SigmaTauSeries(
            label=label,
            points=[(float(tau), float(v)) for tau, v in points if is_plottable(v)],
        )
        for label, points in named_points
    ]
    return SigmaTauPlot(series=series, axis_ranges=axis_ranges(series))
