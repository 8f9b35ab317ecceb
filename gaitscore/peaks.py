"""Local-maximum detection with a minimum-spacing constraint.

Functions
---------
find_peaks
    Greedy peak picking on a 1-D signal.
min_distance_samples
    Convert a spacing in seconds to a spacing in samples.
peak_intervals
    Time between consecutive peaks, in seconds.
"""

from typing import List, Sequence

import numpy as np


def find_peaks(signal: Sequence[float], min_height: float = 0.0, min_distance: int = 1) -> List[int]:
    """Find local maxima separated by at least *min_distance* samples.

    A candidate is any interior index ``i`` with
    ``signal[i-1] < signal[i] > signal[i+1]`` and
    ``signal[i] >= min_height``.  Candidates are scanned left to right
    against the last kept peak:

    - if ``i - last >= min_distance`` the candidate is kept;
    - otherwise, if ``signal[i] > signal[last]`` the candidate replaces
      the last kept peak and becomes the new reference;
    - otherwise it is dropped.  An equal-height candidate never replaces.

    The reference starts at ``-min_distance`` so the first candidate is
    always kept.

    Parameters
    ----------
    signal : sequence of float
        1-D signal.
    min_height : float
        Minimum peak value (inclusive).
    min_distance : int
        Minimum index spacing between kept peaks.

    Returns
    -------
    list of int
        Ascending peak indices, possibly empty.
    """
    x = np.asarray(signal, dtype=float)
    if x.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {x.shape}")
    if x.size < 3:
        return []

    mid = x[1:-1]
    is_candidate = (mid > x[:-2]) & (mid > x[2:]) & (mid >= min_height)
    candidates = np.flatnonzero(is_candidate) + 1

    kept: List[int] = []
    last = -min_distance
    for idx in candidates:
        idx = int(idx)
        if idx - last >= min_distance:
            kept.append(idx)
            last = idx
        elif x[idx] > x[last]:
            kept[-1] = idx
            last = idx
    return kept


def min_distance_samples(sampling_rate_hz: float, seconds: float) -> int:
    """Spacing of *seconds* expressed in samples (nearest, at least 1)."""
    return max(1, int(round(sampling_rate_hz * seconds)))


def peak_intervals(peaks: Sequence[int], sampling_rate_hz: float) -> np.ndarray:
    """Seconds between consecutive peak indices."""
    return np.diff(np.asarray(peaks, dtype=float)) / sampling_rate_hz
