"""Numeric defaults and record key names for the gait engine."""

# ── Sampling ─────────────────────────────────────────────────────────

DEFAULT_SAMPLING_RATE_HZ = 100.0

# Axis names accepted wherever a single accelerometer axis is selected.
AXIS_INDEX = {"x": 0, "y": 1, "z": 2}

# ── Stability ────────────────────────────────────────────────────────

# Each raw metric is divided by its cap and clipped to 1 before averaging.
STABILITY_CAPS = {
    "movement_variability": 2.0,
    "lateral_stability": 2.0,
    "smoothness": 1.0,
    "symmetry": 1.0,
}

# Below this mean magnitude (m/s^2) the coefficient of variation is undefined.
MIN_MEAN_MAGNITUDE = 1e-9

STABILITY_KEYS = (
    "stability_score",
    "movement_variability",
    "lateral_stability",
    "vertical_stability",
    "smoothness",
    "symmetry",
)

# ── Rhythm ───────────────────────────────────────────────────────────

# Peak height on the z-scored vertical axis.
PEAK_MIN_HEIGHT = 0.3
# Minimum spacing between steps, seconds.
PEAK_MIN_DISTANCE_S = 0.3
# Step intervals further than this many SDs from the mean are dropped.
OUTLIER_SIGMA = 2.0
# Stride-time CV (%) at which the rhythm score falls to 100/e.
MAX_ACCEPTABLE_CV = 50.0

RHYTHM_KEYS = (
    "rhythm_score",
    "mean_stride_time",
    "stride_time_variability",
    "cadence",
    "stride_consistency",
    "step_count",
    "valid_step_count",
)

# Decimals used when reporting each metric.
REPORT_DECIMALS = {
    "stability_score": 2,
    "movement_variability": 4,
    "lateral_stability": 4,
    "vertical_stability": 4,
    "smoothness": 4,
    "symmetry": 4,
    "rhythm_score": 2,
    "mean_stride_time": 3,
    "stride_time_variability": 2,
    "cadence": 1,
    "stride_consistency": 4,
}

SCORE_MIN = 0.0
SCORE_MAX = 100.0
