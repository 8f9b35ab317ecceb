"""gaitscore -- Gait stability and rhythm scoring from phone accelerometers.

Quick start::

    from gaitscore import analyze_session, RecordingSession, SensorSample
    session = RecordingSession(samples=[SensorSample(t, ax, ay, az), ...],
                               session_id="abc", mode="POCKET")
    result = analyze_session(session, sampling_rate_hz=100)
    result.stability_score, result.rhythm_score, result.overall_score

Individual stages::

    from gaitscore import calculate_stability, calculate_rhythm, score
    stability = calculate_stability(session)
    rhythm = calculate_rhythm(session, sampling_rate_hz=100)
    result = score(stability, rhythm, session_id="abc")

Tagged outcomes instead of zero fallbacks::

    from gaitscore import evaluate_rhythm, InsufficientPeaks
    outcome = evaluate_rhythm(session)
    if isinstance(outcome.error, InsufficientPeaks):
        ...

History and figures::

    from gaitscore import daily_scores, plot_daily_scores
    fig = plot_daily_scores(daily_scores(results))
"""

__version__ = "0.1.0"

from .models import (
    RecordingMode,
    SensorSample,
    RecordingSession,
    StabilityMetrics,
    RhythmMetrics,
    GaitScore,
    DailyGaitScore,
)
from .errors import GaitAnalysisError, InvalidInput, InsufficientPeaks, Outcome
from .preprocess import (
    acceleration_array,
    magnitude,
    axis_series,
    zscore,
    normalize_axis,
)
from .peaks import find_peaks, min_distance_samples, peak_intervals
from .stability import calculate_stability, evaluate_stability
from .rhythm import calculate_rhythm, evaluate_rhythm, detect_steps
from .scoring import overall_score, score, analyze_session
from .schema import (
    score_to_dict,
    score_from_dict,
    save_json,
    load_json,
    session_to_dataframe,
    session_from_dataframe,
)
from .interpret import describe_stability, describe_rhythm, improvement_suggestions
from .history import scores_to_dataframe, daily_scores
from .plotting import plot_vertical_peaks, plot_daily_scores
from .config import load_config, save_config, merge_config, DEFAULT_CONFIG

__all__ = [
    # Records
    "RecordingMode",
    "SensorSample",
    "RecordingSession",
    "StabilityMetrics",
    "RhythmMetrics",
    "GaitScore",
    "DailyGaitScore",
    # Errors
    "GaitAnalysisError",
    "InvalidInput",
    "InsufficientPeaks",
    "Outcome",
    # Preprocessing
    "acceleration_array",
    "magnitude",
    "axis_series",
    "zscore",
    "normalize_axis",
    # Peaks
    "find_peaks",
    "min_distance_samples",
    "peak_intervals",
    # Analysis
    "calculate_stability",
    "evaluate_stability",
    "calculate_rhythm",
    "evaluate_rhythm",
    "detect_steps",
    "overall_score",
    "score",
    "analyze_session",
    # Schema
    "score_to_dict",
    "score_from_dict",
    "save_json",
    "load_json",
    "session_to_dataframe",
    "session_from_dataframe",
    # Interpretation & history
    "describe_stability",
    "describe_rhythm",
    "improvement_suggestions",
    "scores_to_dataframe",
    "daily_scores",
    # Visualization
    "plot_vertical_peaks",
    "plot_daily_scores",
    # Config
    "load_config",
    "save_config",
    "merge_config",
    "DEFAULT_CONFIG",
    # Meta
    "__version__",
]
