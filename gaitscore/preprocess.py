"""Signal preprocessing for accelerometer recordings.

Turns a recording into an ``(n, 3)`` acceleration array and derives the
series the analyzers work on.

Functions
---------
acceleration_array
    Stack samples into an ``(n, 3)`` float array.
magnitude
    Euclidean norm of each acceleration vector.
axis_series
    Extract one axis as a 1-D array.
zscore
    Standardize a 1-D signal to zero mean, unit SD.
normalize_axis
    Z-score one axis of an acceleration array.
std
    Population standard deviation (0 for empty input).
round_half_even
    Round a float for reporting.
"""

import logging
from typing import Sequence, Union

import numpy as np

from .constants import AXIS_INDEX
from .errors import InvalidInput
from .models import RecordingSession, SensorSample

logger = logging.getLogger(__name__)


def std(values) -> float:
    """Population standard deviation; 0.0 for an empty sequence."""
    arr = np.asarray(values, dtype=float)
    if arr.size == 0:
        return 0.0
    return float(np.std(arr))


def round_half_even(value: float, decimals: int) -> float:
    """Round *value* to *decimals* places, ties to even."""
    return float(round(float(value), decimals))


def acceleration_array(
    samples: Union[RecordingSession, Sequence[SensorSample], np.ndarray],
) -> np.ndarray:
    """Stack a recording into an ``(n, 3)`` float array of acc_x/y/z.

    Parameters
    ----------
    samples : RecordingSession, sequence of SensorSample, or array-like
        Either sensor records or anything convertible to an ``(n, 3)``
        numeric array (e.g. a list of ``(ax, ay, az)`` tuples).

    Returns
    -------
    np.ndarray
        Array of shape ``(n, 3)``.

    Raises
    ------
    InvalidInput
        If the sequence is empty or not three-column.
    """
    if isinstance(samples, RecordingSession):
        samples = samples.samples

    if isinstance(samples, np.ndarray):
        acc = samples.astype(float, copy=False)
    else:
        rows = list(samples)
        if not rows:
            raise InvalidInput("Acceleration data is empty")
        if isinstance(rows[0], SensorSample):
            acc = np.array([s.acceleration for s in rows], dtype=float)
        else:
            try:
                acc = np.asarray(rows, dtype=float)
            except (TypeError, ValueError) as exc:
                raise InvalidInput(f"Acceleration data is not numeric: {exc}") from exc

    if acc.ndim != 2 or acc.shape[1] != 3:
        raise InvalidInput(f"Acceleration data must have shape (n, 3), got {acc.shape}")
    if acc.shape[0] == 0:
        raise InvalidInput("Acceleration data is empty")
    return acc


def magnitude(acc: np.ndarray) -> np.ndarray:
    """Per-sample magnitude ``sqrt(ax^2 + ay^2 + az^2)``."""
    acc = np.asarray(acc, dtype=float)
    return np.sqrt(np.sum(acc ** 2, axis=1))


def axis_series(acc: np.ndarray, axis: Union[str, int]) -> np.ndarray:
    """Return one column of *acc*.

    Parameters
    ----------
    acc : np.ndarray
        ``(n, 3)`` acceleration array.
    axis : {'x', 'y', 'z'} or {0, 1, 2}
        Axis to extract.

    Raises
    ------
    ValueError
        If *axis* is not a known axis.
    """
    if isinstance(axis, str):
        key = axis.lower()
        if key not in AXIS_INDEX:
            raise ValueError(f"axis must be one of {sorted(AXIS_INDEX)}, got {axis!r}")
        idx = AXIS_INDEX[key]
    else:
        idx = int(axis)
        if idx not in AXIS_INDEX.values():
            raise ValueError(f"axis index must be 0, 1 or 2, got {axis!r}")
    return np.asarray(acc, dtype=float)[:, idx].copy()


def zscore(signal) -> np.ndarray:
    """Standardize a 1-D signal: ``(x - mean) / std``.

    Raises
    ------
    InvalidInput
        If the signal is empty, non-finite, or flat (zero SD).
    """
    x = np.asarray(signal, dtype=float)
    if x.size == 0:
        raise InvalidInput("Cannot normalize an empty signal")
    if not np.all(np.isfinite(x)):
        raise InvalidInput("Signal contains NaN or infinite values")
    sd = std(x)
    if sd == 0.0:
        raise InvalidInput("Signal is flat (zero standard deviation)")
    return (x - x.mean()) / sd


def normalize_axis(acc: np.ndarray, axis: Union[str, int] = "z") -> np.ndarray:
    """Z-score one axis of an acceleration array (see :func:`zscore`)."""
    series = axis_series(acc, axis)
    logger.debug(
        "Axis %s range: %.3f .. %.3f", axis, float(series.min()), float(series.max())
    )
    return zscore(series)
