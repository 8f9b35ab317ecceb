"""Records flowing through the gait engine.

Sensor samples and recording sessions come from the capture layer and are
read-only here.  Metrics records are produced by the analyzers and packaged
into a :class:`GaitScore` by :mod:`gaitscore.scoring`.
"""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from enum import Enum
from typing import Dict, Optional, Sequence


class RecordingMode(str, Enum):
    """How the phone was carried while recording."""

    VIDEO = "VIDEO"
    POCKET = "POCKET"
    TEXT = "TEXT"

    @classmethod
    def parse(cls, value) -> Optional["RecordingMode"]:
        """Return the member named *value*, or None for unknown names."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).upper())
        except ValueError:
            return None


# ── Input records ────────────────────────────────────────────────────

@dataclass(frozen=True)
class SensorSample:
    """One accelerometer reading.

    Attributes
    ----------
    timestamp : int
        Monotonic timestamp in milliseconds.
    acc_x, acc_y, acc_z : float
        Acceleration in m/s^2.  ``acc_y`` is the lateral axis and
        ``acc_z`` the vertical axis when the phone is held screen-up.

    The gyroscope, magnetometer and location fields are carried for the
    capture layer and ignored by the engine.
    """

    timestamp: int
    acc_x: float
    acc_y: float
    acc_z: float
    time_s: float = 0.0
    gyro_x: float = 0.0
    gyro_y: float = 0.0
    gyro_z: float = 0.0
    mag_x: float = 0.0
    mag_y: float = 0.0
    mag_z: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0

    @property
    def acceleration(self) -> tuple:
        return (self.acc_x, self.acc_y, self.acc_z)


@dataclass
class RecordingSession:
    """An ordered capture of sensor samples."""

    samples: Sequence[SensorSample] = field(default_factory=list)
    mode: Optional[RecordingMode] = None
    session_id: str = ""
    user_id: str = ""
    start_time: int = 0
    end_time: Optional[int] = None

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration_s(self) -> float:
        """Span between first and last sample timestamps, in seconds."""
        if len(self.samples) < 2:
            return 0.0
        return (self.samples[-1].timestamp - self.samples[0].timestamp) / 1000.0


# ── Metrics ──────────────────────────────────────────────────────────

class _MetricsMixin:
    """Shared helpers for the flat float metrics records."""

    @classmethod
    def zero(cls):
        """All-zero record returned when the analysis cannot run."""
        return cls(**{f.name: 0.0 for f in fields(cls)})

    def to_dict(self) -> Dict[str, float]:
        return {f.name: float(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_dict(cls, values: Dict[str, float]):
        """Build a record from a details map; missing keys read as 0."""
        return cls(**{f.name: float(values.get(f.name, 0.0)) for f in fields(cls)})

    def is_zero(self) -> bool:
        return all(v == 0.0 for v in self.to_dict().values())


@dataclass(frozen=True)
class StabilityMetrics(_MetricsMixin):
    """Dispersion, smoothness and symmetry of the acceleration signal."""

    stability_score: float
    movement_variability: float
    lateral_stability: float
    vertical_stability: float
    smoothness: float
    symmetry: float


@dataclass(frozen=True)
class RhythmMetrics(_MetricsMixin):
    """Stride timing statistics from detected vertical peaks.

    ``step_count`` and ``valid_step_count`` are whole numbers stored as
    floats so the record serializes as a uniform numeric map.
    """

    rhythm_score: float
    mean_stride_time: float
    stride_time_variability: float
    cadence: float
    stride_consistency: float
    step_count: float
    valid_step_count: float


# ── Results ──────────────────────────────────────────────────────────

@dataclass
class GaitScore:
    """Composite gait result for one recording session.

    Attributes
    ----------
    stability_score, rhythm_score, overall_score : int
        Scores in [0, 100].
    analysis_timestamp : datetime
        When the analysis ran (caller supplied).
    stability_details, rhythm_details : dict
        Flat ``{name: float}`` maps of the underlying metrics.
    recording_mode : RecordingMode or None
    session_id : str
    errors : dict
        Stage name (``"stability"`` / ``"rhythm"``) to the error code that
        forced a zero fallback.  Empty when both stages succeeded.
    """

    stability_score: int = 0
    rhythm_score: int = 0
    overall_score: int = 0
    analysis_timestamp: datetime = field(default_factory=datetime.now)
    stability_details: Dict[str, float] = field(default_factory=dict)
    rhythm_details: Dict[str, float] = field(default_factory=dict)
    recording_mode: Optional[RecordingMode] = None
    session_id: str = ""
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def has_sufficient_data(self) -> bool:
        return not self.errors

    @property
    def stability(self) -> StabilityMetrics:
        return StabilityMetrics.from_dict(self.stability_details)

    @property
    def rhythm(self) -> RhythmMetrics:
        return RhythmMetrics.from_dict(self.rhythm_details)

    def to_dict(self) -> dict:
        """Serializable dict; see :func:`gaitscore.schema.score_to_dict`."""
        from .schema import score_to_dict
        return score_to_dict(self)

    def __repr__(self) -> str:
        return (
            f"GaitScore(session_id={self.session_id!r}, "
            f"stability={self.stability_score}, rhythm={self.rhythm_score}, "
            f"overall={self.overall_score})"
        )


@dataclass(frozen=True)
class DailyGaitScore:
    """Per-day mean scores, truncated to integers."""

    date: date
    stability_score: int
    rhythm_score: int
    overall_score: int
