"""Diagnostic figures with matplotlib.

All functions return ``matplotlib.figure.Figure`` objects for saving or
display.

Functions
---------
plot_vertical_peaks
    Normalized vertical acceleration with detected step peaks.
plot_daily_scores
    Daily stability, rhythm and overall scores.
"""

import logging
from typing import List, Optional, Union

import numpy as np
import matplotlib
if matplotlib.get_backend() == "":
    matplotlib.use("Agg")
import matplotlib.pyplot as plt

from .constants import DEFAULT_SAMPLING_RATE_HZ, PEAK_MIN_DISTANCE_S, PEAK_MIN_HEIGHT
from .errors import InvalidInput
from .models import DailyGaitScore
from .peaks import find_peaks, min_distance_samples
from .preprocess import acceleration_array, normalize_axis

logger = logging.getLogger(__name__)

_COLORS = {
    "signal": "#2171b5",     # blue
    "peak": "#cb181d",       # red
    "threshold": "#969696",  # grey
    "stability": "#2171b5",
    "rhythm": "#1a9850",     # green
    "overall": "#252525",
}


def plot_vertical_peaks(
    session,
    sampling_rate_hz: float = DEFAULT_SAMPLING_RATE_HZ,
    axis: Union[str, int] = "z",
    min_height: float = PEAK_MIN_HEIGHT,
    min_distance_s: float = PEAK_MIN_DISTANCE_S,
    figsize: Optional[tuple] = None,
) -> plt.Figure:
    """Plot the z-scored step axis with the peaks used for rhythm analysis.

    Parameters
    ----------
    session : RecordingSession, sequence of SensorSample, or (n, 3) array
        Recording to plot.
    sampling_rate_hz : float
        Sampling rate used for the time axis and peak spacing.
    axis : {'x', 'y', 'z'}
        Axis to plot (default vertical).
    min_height, min_distance_s : float
        Peak detection parameters, as in :func:`gaitscore.rhythm.evaluate_rhythm`.
    figsize : tuple, optional
        Figure size ``(width, height)`` in inches.

    Returns
    -------
    matplotlib.figure.Figure
    """
    if figsize is None:
        figsize = (12, 4)

    fig, ax = plt.subplots(figsize=figsize)
    try:
        normalized = normalize_axis(acceleration_array(session), axis)
    except InvalidInput as exc:
        ax.text(
            0.5, 0.5, f"No signal to plot: {exc}",
            ha="center", va="center", transform=ax.transAxes,
        )
        fig.tight_layout()
        return fig

    t = np.arange(len(normalized)) / sampling_rate_hz
    peaks = find_peaks(
        normalized,
        min_height=min_height,
        min_distance=min_distance_samples(sampling_rate_hz, min_distance_s),
    )

    ax.plot(t, normalized, color=_COLORS["signal"], linewidth=1, label=f"acc_{axis} (z-score)")
    ax.axhline(min_height, color=_COLORS["threshold"], linestyle="--", linewidth=0.8,
               label="min height")
    if peaks:
        ax.plot(t[peaks], normalized[peaks], "v", color=_COLORS["peak"],
                markersize=7, label=f"steps (n={len(peaks)})")

    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Normalized acceleration")
    ax.set_title("Step detection")
    ax.legend(loc="upper right", fontsize=8)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig


def plot_daily_scores(
    daily: List[DailyGaitScore],
    figsize: Optional[tuple] = None,
) -> plt.Figure:
    """Plot daily scores as lines over dates.

    Parameters
    ----------
    daily : list of DailyGaitScore
        Output of :func:`gaitscore.history.daily_scores`.
    figsize : tuple, optional
        Figure size ``(width, height)`` in inches.

    Returns
    -------
    matplotlib.figure.Figure
    """
    if figsize is None:
        figsize = (10, 5)

    fig, ax = plt.subplots(figsize=figsize)

    if not daily:
        ax.text(
            0.5, 0.5, "No gait scores to plot",
            ha="center", va="center", transform=ax.transAxes,
        )
        fig.tight_layout()
        return fig

    labels = [d.date.isoformat() for d in daily]
    x = np.arange(len(daily))
    for key in ("stability", "rhythm", "overall"):
        values = [getattr(d, f"{key}_score") for d in daily]
        ax.plot(x, values, marker="o", linewidth=2, color=_COLORS[key],
                label=key.capitalize())

    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylim(0, 100)
    ax.set_ylabel("Score")
    ax.set_title("Daily gait scores")
    ax.legend(loc="lower right")
    ax.grid(True, alpha=0.3)
    fig.tight_layout()
    return fig
