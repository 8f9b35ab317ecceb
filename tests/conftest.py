"""Shared test fixtures for the gaitscore test suite.

Provides synthetic accelerometer recordings with known step timing.
"""

import numpy as np
import pytest

GRAVITY = 9.81


def make_samples(acc, sampling_rate_hz=100.0, t0_ms=0):
    """Wrap an ``(n, 3)`` array into a list of SensorSample."""
    from gaitscore.models import SensorSample
    acc = np.asarray(acc, dtype=float)
    samples = []
    for i, (ax, ay, az) in enumerate(acc):
        t = i / sampling_rate_hz
        samples.append(SensorSample(
            timestamp=t0_ms + int(round(t * 1000)),
            acc_x=float(ax), acc_y=float(ay), acc_z=float(az),
            time_s=round(t, 4),
        ))
    return samples


def make_session(acc, sampling_rate_hz=100.0, session_id="test-session", mode=None):
    from gaitscore.models import RecordingMode, RecordingSession
    samples = make_samples(acc, sampling_rate_hz)
    return RecordingSession(
        samples=samples,
        mode=mode if mode is not None else RecordingMode.POCKET,
        session_id=session_id,
        user_id="user-1",
        start_time=samples[0].timestamp if samples else 0,
        end_time=samples[-1].timestamp if samples else None,
    )


def walking_acc(duration_s=10.0, sampling_rate_hz=100.0, step_hz=2.0,
                amplitude=2.0, lateral_amp=0.0, noise=0.0, seed=0):
    """Vertical cosine at *step_hz* on top of gravity.

    Peaks fall exactly on samples ``k * rate / step_hz`` when that ratio
    is an integer, so step timing is known exactly.  A sine of the same
    frequency crests between two samples instead (see ``TestSineCrests``
    in test_rhythm.py).
    """
    n = int(round(duration_s * sampling_rate_hz))
    t = np.arange(n) / sampling_rate_hz
    az = GRAVITY + amplitude * np.cos(2 * np.pi * step_hz * t)
    ay = lateral_amp * np.sin(np.pi * step_hz * t)
    ax = np.zeros(n)
    acc = np.column_stack([ax, ay, az])
    if noise > 0:
        rng = np.random.RandomState(seed)
        acc = acc + rng.normal(0.0, noise, size=acc.shape)
    return acc


def spike_acc(peak_indices, n_samples, height=10.0):
    """Flat gravity signal with one-sample vertical spikes at *peak_indices*."""
    acc = np.zeros((n_samples, 3))
    acc[:, 2] = GRAVITY
    for idx in peak_indices:
        acc[idx, 2] += height
    return acc


def make_walking_session(**kwargs):
    """2 Hz steps at 100 Hz for 10 s unless overridden."""
    rate = kwargs.get("sampling_rate_hz", 100.0)
    return make_session(walking_acc(**kwargs), sampling_rate_hz=rate)


@pytest.fixture
def walking_session():
    return make_walking_session()


@pytest.fixture
def still_session():
    """Phone lying flat: constant gravity on z."""
    acc = np.tile([0.0, 0.0, GRAVITY], (500, 1))
    return make_session(acc)
