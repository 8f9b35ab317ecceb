"""Composite gait score and the end-to-end session pipeline.

Functions
---------
overall_score
    Truncating mean of the stability and rhythm scores.
score
    Package stability and rhythm metrics into a :class:`GaitScore`.
analyze_session
    Run stability and rhythm analysis on a recording and score it.
"""

import logging
import math
from datetime import datetime
from typing import Optional

from .config import merge_config
from .errors import Outcome
from .models import GaitScore, RecordingMode, RecordingSession, RhythmMetrics, StabilityMetrics
from .rhythm import evaluate_rhythm
from .stability import evaluate_stability

logger = logging.getLogger(__name__)


def _as_int_score(value: float) -> int:
    """Truncate a float score to an int in [0, 100]."""
    return min(100, max(0, int(value)))


def overall_score(stability_score: float, rhythm_score: float) -> int:
    """``floor((stability + rhythm) / 2)``.

    The mean is truncated, not rounded: 78 and 85 give 81.
    """
    return min(100, max(0, math.floor((stability_score + rhythm_score) / 2)))


def score(
    stability: StabilityMetrics,
    rhythm: RhythmMetrics,
    session_id: str = "",
    recording_mode: Optional[RecordingMode] = None,
    analysis_timestamp: Optional[datetime] = None,
    errors: Optional[dict] = None,
) -> GaitScore:
    """Combine stage metrics into a :class:`GaitScore`.

    The stage scores are truncated to ints before averaging, so the
    overall score is always consistent with the two reported integers.

    Parameters
    ----------
    stability : StabilityMetrics
    rhythm : RhythmMetrics
    session_id : str
        Identifier of the analyzed recording.
    recording_mode : RecordingMode, optional
    analysis_timestamp : datetime, optional
        Defaults to now.  Pass a fixed value for reproducible records.
    errors : dict, optional
        Stage name to error code for stages that fell back to zero.

    Returns
    -------
    GaitScore
    """
    stability_int = _as_int_score(stability.stability_score)
    rhythm_int = _as_int_score(rhythm.rhythm_score)
    return GaitScore(
        stability_score=stability_int,
        rhythm_score=rhythm_int,
        overall_score=overall_score(stability_int, rhythm_int),
        analysis_timestamp=analysis_timestamp if analysis_timestamp is not None else datetime.now(),
        stability_details=stability.to_dict(),
        rhythm_details=rhythm.to_dict(),
        recording_mode=RecordingMode.parse(recording_mode),
        session_id=session_id,
        errors=dict(errors or {}),
    )


def analyze_session(
    session,
    sampling_rate_hz: Optional[float] = None,
    config: Optional[dict] = None,
    analysis_timestamp: Optional[datetime] = None,
) -> GaitScore:
    """Analyze a recording and return its :class:`GaitScore`.

    Stages that cannot run (empty or flat signal, fewer than two steps)
    contribute all-zero metrics and are listed in ``GaitScore.errors``.

    Parameters
    ----------
    session : RecordingSession, sequence of SensorSample, or (n, 3) array
        Recording to analyze.  Session id and mode are taken from a
        :class:`RecordingSession`; plain sequences get empty metadata.
    sampling_rate_hz : float, optional
        Overrides ``config["sampling_rate_hz"]`` (default 100 Hz).
    config : dict, optional
        Partial or full analysis config (see :mod:`gaitscore.config`).
    analysis_timestamp : datetime, optional
        Timestamp stored on the result (default now).

    Returns
    -------
    GaitScore
    """
    cfg = merge_config(config)
    rate = sampling_rate_hz if sampling_rate_hz is not None else cfg["sampling_rate_hz"]
    rhythm_cfg = cfg["rhythm"]

    stability_outcome = evaluate_stability(session, caps=cfg["stability"]["caps"])
    rhythm_outcome = evaluate_rhythm(
        session,
        rate,
        axis=rhythm_cfg["axis"],
        min_height=rhythm_cfg["min_height"],
        min_distance_s=rhythm_cfg["min_distance_s"],
        outlier_sigma=rhythm_cfg["outlier_sigma"],
        max_acceptable_cv=rhythm_cfg["max_acceptable_cv"],
    )

    errors = _collect_errors(stability=stability_outcome, rhythm=rhythm_outcome)

    if isinstance(session, RecordingSession):
        session_id, mode = session.session_id, session.mode
    else:
        session_id, mode = "", None

    result = score(
        stability_outcome.value_or_zero(),
        rhythm_outcome.value_or_zero(),
        session_id=session_id,
        recording_mode=mode,
        analysis_timestamp=analysis_timestamp,
        errors=errors,
    )
    logger.debug("Scored session %r: %r", session_id, result)
    return result


def _collect_errors(**outcomes: Outcome) -> dict:
    return {stage: o.error_code for stage, o in outcomes.items() if not o.ok}
