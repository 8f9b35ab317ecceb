"""Gait rhythm from step timing on the vertical axis.

Each footstep shows up as a peak in vertical acceleration.  Peaks are
picked on the z-scored vertical axis, converted to step intervals, and
intervals outside ``mean +/- 2 SD`` are dropped before the statistics
are computed.  The rhythm score decays exponentially with the
stride-time coefficient of variation:

    rhythm_score = 100 * exp(-CV% / 50)

Ref: Hausdorff JM. Gait variability: methods, modeling and meaning.
J Neuroeng Rehabil. 2005;2:19. doi:10.1186/1743-0003-2-19

Functions
---------
evaluate_rhythm
    Tagged result (:class:`~gaitscore.errors.Outcome`).
calculate_rhythm
    Metrics, or the all-zero record when fewer than two steps are found.
detect_steps
    Peak indices on the normalized vertical axis.
"""

import logging
import math
from typing import List, Union

import numpy as np

from .constants import (
    DEFAULT_SAMPLING_RATE_HZ,
    MAX_ACCEPTABLE_CV,
    OUTLIER_SIGMA,
    PEAK_MIN_DISTANCE_S,
    PEAK_MIN_HEIGHT,
    REPORT_DECIMALS,
    SCORE_MAX,
    SCORE_MIN,
)
from .errors import GaitAnalysisError, InsufficientPeaks, InvalidInput, Outcome
from .models import RhythmMetrics
from .peaks import find_peaks, min_distance_samples, peak_intervals
from .preprocess import acceleration_array, normalize_axis, round_half_even, std

logger = logging.getLogger(__name__)


def _check_rate(sampling_rate_hz: float) -> float:
    rate = float(sampling_rate_hz)
    if not math.isfinite(rate) or rate <= 0:
        raise InvalidInput(f"Sampling rate must be positive, got {sampling_rate_hz!r}")
    return rate


def detect_steps(
    samples,
    sampling_rate_hz: float = DEFAULT_SAMPLING_RATE_HZ,
    axis: Union[str, int] = "z",
    min_height: float = PEAK_MIN_HEIGHT,
    min_distance_s: float = PEAK_MIN_DISTANCE_S,
) -> List[int]:
    """Indices of step peaks on the z-scored *axis*.

    Raises
    ------
    InvalidInput
        If the recording is empty, the axis is flat, or the sampling
        rate is not positive.
    """
    rate = _check_rate(sampling_rate_hz)
    acc = acceleration_array(samples)
    normalized = normalize_axis(acc, axis)
    distance = min_distance_samples(rate, min_distance_s)
    peaks = find_peaks(normalized, min_height=min_height, min_distance=distance)
    logger.debug("Detected %d peaks (min_distance=%d samples)", len(peaks), distance)
    return peaks


def _compute(
    samples,
    sampling_rate_hz: float,
    axis: Union[str, int],
    min_height: float,
    min_distance_s: float,
    outlier_sigma: float,
    max_acceptable_cv: float,
) -> RhythmMetrics:
    rate = _check_rate(sampling_rate_hz)
    peaks = detect_steps(samples, rate, axis, min_height, min_distance_s)
    if len(peaks) < 2:
        raise InsufficientPeaks(len(peaks))

    intervals = peak_intervals(peaks, rate)
    mean_interval = float(np.mean(intervals))
    sd_interval = std(intervals)
    lo = mean_interval - outlier_sigma * sd_interval
    hi = mean_interval + outlier_sigma * sd_interval
    valid = intervals[(intervals >= lo) & (intervals <= hi)]
    if valid.size == 0:
        raise InvalidInput("No step interval falls inside the outlier window")

    mean_stride_time = float(np.mean(valid))
    stride_time_variability = std(valid) / mean_stride_time * 100.0
    rhythm_score = 100.0 * math.exp(-stride_time_variability / max_acceptable_cv)
    cadence = 60.0 / mean_stride_time
    if valid.size >= 2:
        stride_consistency = float(np.mean(np.abs(np.diff(valid))))
    else:
        stride_consistency = 0.0

    logger.debug(
        "Step intervals: mean %.3f s, CV %.2f%%, %d/%d kept",
        mean_stride_time, stride_time_variability, valid.size, intervals.size,
    )

    return RhythmMetrics(
        rhythm_score=min(SCORE_MAX, max(SCORE_MIN, round_half_even(rhythm_score, REPORT_DECIMALS["rhythm_score"]))),
        mean_stride_time=round_half_even(mean_stride_time, REPORT_DECIMALS["mean_stride_time"]),
        stride_time_variability=round_half_even(
            stride_time_variability, REPORT_DECIMALS["stride_time_variability"]
        ),
        cadence=round_half_even(cadence, REPORT_DECIMALS["cadence"]),
        stride_consistency=round_half_even(stride_consistency, REPORT_DECIMALS["stride_consistency"]),
        step_count=float(len(peaks)),
        valid_step_count=float(valid.size + 1),
    )


def evaluate_rhythm(
    samples,
    sampling_rate_hz: float = DEFAULT_SAMPLING_RATE_HZ,
    axis: Union[str, int] = "z",
    min_height: float = PEAK_MIN_HEIGHT,
    min_distance_s: float = PEAK_MIN_DISTANCE_S,
    outlier_sigma: float = OUTLIER_SIGMA,
    max_acceptable_cv: float = MAX_ACCEPTABLE_CV,
) -> Outcome:
    """Compute rhythm metrics as a tagged outcome.

    Parameters
    ----------
    samples : RecordingSession, sequence of SensorSample, or (n, 3) array
        Acceleration recording.
    sampling_rate_hz : float
        Sampling rate (default 100 Hz).
    axis : {'x', 'y', 'z'}
        Axis carrying the step impacts (default vertical ``'z'``).
    min_height : float
        Minimum peak height on the z-scored axis (default 0.3).
    min_distance_s : float
        Minimum time between steps in seconds (default 0.3).
    outlier_sigma : float
        Width of the interval outlier window in SDs (default 2).
    max_acceptable_cv : float
        CV (%) at which the score falls to 100/e (default 50).

    Returns
    -------
    Outcome
        ``value`` holds :class:`RhythmMetrics` on success.  ``error`` is
        :class:`InsufficientPeaks` when fewer than two steps are found and
        :class:`InvalidInput` for empty or flat recordings; the fallback
        is :meth:`RhythmMetrics.zero`.
    """
    if max_acceptable_cv <= 0:
        raise ValueError(f"max_acceptable_cv must be positive, got {max_acceptable_cv}")
    try:
        metrics = _compute(
            samples, sampling_rate_hz, axis, min_height,
            min_distance_s, outlier_sigma, max_acceptable_cv,
        )
    except GaitAnalysisError as exc:
        logger.debug("Rhythm analysis skipped: %s", exc)
        return Outcome.failure(exc, fallback=RhythmMetrics.zero())
    return Outcome.success(metrics)


def calculate_rhythm(samples, sampling_rate_hz: float = DEFAULT_SAMPLING_RATE_HZ, **kwargs) -> RhythmMetrics:
    """Rhythm metrics for a recording, zero-filled when steps are missing.

    Keyword arguments are forwarded to :func:`evaluate_rhythm`.
    """
    return evaluate_rhythm(samples, sampling_rate_hz, **kwargs).value_or_zero()
