"""Gait stability from acceleration dispersion, smoothness and symmetry.

Four raw metrics are normalized to [0, 1] by dividing by a cap and
clipping, then averaged:

    stability_score = 100 * (1 - mean(n_variability, n_lateral,
                                      n_smoothness, n_symmetry))

- movement variability: coefficient of variation of the magnitude
  (std / mean), a scale-free dispersion measure.
- lateral stability: SD of the lateral (y) axis.
- vertical stability: SD of the vertical (z) axis, reported only.
- smoothness: mean absolute sample-to-sample change in magnitude.
- symmetry: mean absolute lateral acceleration.

Functions
---------
evaluate_stability
    Tagged result (:class:`~gaitscore.errors.Outcome`).
calculate_stability
    Metrics, or the all-zero record when the input is degenerate.
"""

import logging
from typing import Dict, Optional

import numpy as np

from .constants import MIN_MEAN_MAGNITUDE, REPORT_DECIMALS, SCORE_MAX, SCORE_MIN, STABILITY_CAPS
from .errors import GaitAnalysisError, InvalidInput, Outcome
from .models import StabilityMetrics
from .preprocess import acceleration_array, axis_series, magnitude, round_half_even, std

logger = logging.getLogger(__name__)


def _normalized(value: float, cap: float) -> float:
    return min(value / cap, 1.0)


def _compute(samples, caps: Dict[str, float]) -> StabilityMetrics:
    acc = acceleration_array(samples)
    if acc.shape[0] < 2:
        raise InvalidInput(f"Need at least 2 samples for stability, got {acc.shape[0]}")
    if not np.all(np.isfinite(acc)):
        raise InvalidInput("Acceleration data contains NaN or infinite values")

    with np.errstate(over="ignore"):
        mag = magnitude(acc)
        mean_mag = float(np.mean(mag))
    if not (np.all(np.isfinite(mag)) and np.isfinite(mean_mag)):
        raise InvalidInput("Acceleration magnitude overflows")
    if mean_mag < MIN_MEAN_MAGNITUDE:
        raise InvalidInput("Mean acceleration magnitude is zero")

    lateral = axis_series(acc, "y")
    vertical = axis_series(acc, "z")

    with np.errstate(over="ignore", invalid="ignore"):
        raw = {
            "movement_variability": std(mag) / mean_mag,
            "lateral_stability": std(lateral),
            "vertical_stability": std(vertical),
            "smoothness": float(np.mean(np.abs(np.diff(mag)))),
            "symmetry": float(np.mean(np.abs(lateral))),
        }
    if not all(np.isfinite(v) for v in raw.values()):
        raise InvalidInput("Stability metrics overflow for this acceleration range")

    norms = [_normalized(raw[k], caps[k]) for k in
             ("movement_variability", "lateral_stability", "smoothness", "symmetry")]
    score = 100.0 * (1.0 - float(np.mean(norms)))
    score = min(SCORE_MAX, max(SCORE_MIN, round_half_even(score, REPORT_DECIMALS["stability_score"])))

    return StabilityMetrics(
        stability_score=score,
        **{k: round_half_even(v, REPORT_DECIMALS[k]) for k, v in raw.items()},
    )


def evaluate_stability(samples, caps: Optional[Dict[str, float]] = None) -> Outcome:
    """Compute stability metrics as a tagged outcome.

    Parameters
    ----------
    samples : RecordingSession, sequence of SensorSample, or (n, 3) array
        Acceleration recording.
    caps : dict, optional
        Normalization caps keyed by metric name; missing keys use the
        defaults (2, 2, 1, 1).

    Returns
    -------
    Outcome
        ``value`` holds :class:`StabilityMetrics` on success; on failure
        ``error`` is an :class:`InvalidInput` and the fallback is
        :meth:`StabilityMetrics.zero`.
    """
    merged = dict(STABILITY_CAPS)
    if caps:
        merged.update(caps)
    bad = {k: v for k, v in merged.items() if not v > 0}
    if bad:
        raise ValueError(f"Stability caps must be positive, got {bad}")
    try:
        return Outcome.success(_compute(samples, merged))
    except GaitAnalysisError as exc:
        logger.debug("Stability analysis skipped: %s", exc)
        return Outcome.failure(exc, fallback=StabilityMetrics.zero())


def calculate_stability(samples, caps: Optional[Dict[str, float]] = None) -> StabilityMetrics:
    """Stability metrics for a recording, zero-filled on degenerate input."""
    return evaluate_stability(samples, caps).value_or_zero()
