"""Serialization of gait results and recordings.

GaitScore records are converted to plain JSON-compatible dicts for the
persistence and display layers.  Recordings convert to and from pandas
DataFrames with one row per sample.

Functions
---------
score_to_dict
    GaitScore -> JSON-compatible dict.
score_from_dict
    Dict (as produced by ``score_to_dict`` or a stored row) -> GaitScore.
save_json
    Save one or more GaitScore records to a JSON file.
load_json
    Load GaitScore records from a JSON file.
session_to_dataframe
    RecordingSession -> DataFrame.
session_from_dataframe
    DataFrame -> RecordingSession.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np
import pandas as pd

from .models import GaitScore, RecordingMode, RecordingSession, SensorSample

logger = logging.getLogger(__name__)

_SAMPLE_COLUMNS = [
    "timestamp", "time_s",
    "acc_x", "acc_y", "acc_z",
    "gyro_x", "gyro_y", "gyro_z",
    "mag_x", "mag_y", "mag_z",
    "latitude", "longitude",
]
_REQUIRED_COLUMNS = ("timestamp", "acc_x", "acc_y", "acc_z")


def _convert_numpy(obj: Any) -> Any:
    """Recursively convert numpy types to Python types for JSON serialization."""
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, dict):
        return {k: _convert_numpy(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_convert_numpy(v) for v in obj]
    if isinstance(obj, np.bool_):
        return bool(obj)
    return obj


def _parse_details(value) -> Dict[str, float]:
    """Details map from a dict or a JSON string; malformed input gives {}."""
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            logger.warning("Discarding malformed details string")
            return {}
    if not isinstance(value, dict):
        return {}
    try:
        return {str(k): float(v) for k, v in value.items()}
    except (TypeError, ValueError):
        logger.warning("Discarding details map with non-numeric values")
        return {}


def _parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float, np.integer, np.floating)):
        return datetime.fromtimestamp(float(value) / 1000.0)
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    raise ValueError(f"Unsupported analysis timestamp: {value!r}")


# ── GaitScore ────────────────────────────────────────────────────────

def score_to_dict(result: GaitScore) -> dict:
    """Convert a :class:`GaitScore` to a JSON-compatible dict.

    The recording mode is stored by name (``None`` when unknown) and the
    timestamp in ISO 8601 format.
    """
    mode = result.recording_mode
    return _convert_numpy({
        "session_id": result.session_id,
        "stability_score": int(result.stability_score),
        "rhythm_score": int(result.rhythm_score),
        "overall_score": int(result.overall_score),
        "analysis_timestamp": result.analysis_timestamp.isoformat(),
        "stability_details": dict(result.stability_details),
        "rhythm_details": dict(result.rhythm_details),
        "recording_mode": mode.value if mode is not None else None,
        "errors": dict(result.errors),
    })


def score_from_dict(data: dict) -> GaitScore:
    """Rebuild a :class:`GaitScore` from a dict.

    Accepts the output of :func:`score_to_dict` as well as stored rows
    where the details are JSON strings and the timestamp is epoch
    milliseconds.  Unknown recording modes map to ``None`` and malformed
    details to an empty map.

    Raises
    ------
    TypeError
        If *data* is not a dict.
    ValueError
        If the timestamp cannot be parsed.
    """
    if not isinstance(data, dict):
        raise TypeError("data must be a dict")
    ts = data.get("analysis_timestamp")
    return GaitScore(
        stability_score=int(data.get("stability_score", 0)),
        rhythm_score=int(data.get("rhythm_score", 0)),
        overall_score=int(data.get("overall_score", 0)),
        analysis_timestamp=_parse_timestamp(ts) if ts is not None else datetime.now(),
        stability_details=_parse_details(data.get("stability_details")),
        rhythm_details=_parse_details(data.get("rhythm_details")),
        recording_mode=RecordingMode.parse(data.get("recording_mode")),
        session_id=str(data.get("session_id") or ""),
        errors=dict(data.get("errors") or {}),
    )


def save_json(
    results: Union[GaitScore, List[GaitScore]],
    path: Union[str, Path],
    indent: int = 2,
) -> None:
    """Save GaitScore record(s) to a JSON file.

    A single record is written as an object, a list as an array.
    Parent directories are created if needed.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(results, GaitScore):
        payload = score_to_dict(results)
    else:
        payload = [score_to_dict(r) for r in results]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=indent, ensure_ascii=False)


def load_json(path: Union[str, Path]) -> Union[GaitScore, List[GaitScore]]:
    """Load GaitScore record(s) saved by :func:`save_json`.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the JSON root is neither an object nor an array.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        return score_from_dict(data)
    if isinstance(data, list):
        return [score_from_dict(d) for d in data]
    raise ValueError("JSON root must be a dict or a list")


# ── Recordings ───────────────────────────────────────────────────────

def session_to_dataframe(session: RecordingSession) -> pd.DataFrame:
    """One row per sample, columns as in :class:`SensorSample`."""
    rows = [{c: getattr(s, c) for c in _SAMPLE_COLUMNS} for s in session.samples]
    if not rows:
        return pd.DataFrame(columns=_SAMPLE_COLUMNS)
    return pd.DataFrame(rows, columns=_SAMPLE_COLUMNS)


def session_from_dataframe(
    df: pd.DataFrame,
    session_id: str = "",
    mode: Optional[Union[RecordingMode, str]] = None,
    user_id: str = "",
) -> RecordingSession:
    """Build a :class:`RecordingSession` from a sample table.

    Rows are sorted by ``timestamp``.  Optional sensor columns that are
    missing or NaN read as 0.

    Raises
    ------
    ValueError
        If a required column (timestamp, acc_x, acc_y, acc_z) is missing
        or holds NaN.
    """
    missing = [c for c in _REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    if df[list(_REQUIRED_COLUMNS)].isna().any().any():
        raise ValueError("Required columns contain NaN values")

    df = df.sort_values("timestamp", kind="stable").reset_index(drop=True)
    optional = [c for c in _SAMPLE_COLUMNS if c not in _REQUIRED_COLUMNS and c in df.columns]
    filled = df[optional].apply(pd.to_numeric, errors="coerce").fillna(0.0)

    samples = []
    for i in range(len(df)):
        kwargs = {c: float(filled.at[i, c]) for c in optional}
        samples.append(SensorSample(
            timestamp=int(df.at[i, "timestamp"]),
            acc_x=float(df.at[i, "acc_x"]),
            acc_y=float(df.at[i, "acc_y"]),
            acc_z=float(df.at[i, "acc_z"]),
            **kwargs,
        ))

    start = samples[0].timestamp if samples else 0
    end = samples[-1].timestamp if samples else None
    return RecordingSession(
        samples=samples,
        mode=RecordingMode.parse(mode),
        session_id=session_id,
        user_id=user_id,
        start_time=start,
        end_time=end,
    )
