"""Aggregation of gait results over time.

Functions
---------
scores_to_dataframe
    Tabulate GaitScore records, one row per analysis.
daily_scores
    Per-day mean scores, truncated to integers.
"""

import logging
from typing import Iterable, List

import numpy as np
import pandas as pd

from .models import DailyGaitScore, GaitScore

logger = logging.getLogger(__name__)

_SCORE_COLUMNS = ["stability_score", "rhythm_score", "overall_score"]
_TABLE_COLUMNS = ["session_id", "analysis_timestamp", "recording_mode"] + _SCORE_COLUMNS


def scores_to_dataframe(scores: Iterable[GaitScore]) -> pd.DataFrame:
    """One row per GaitScore, sorted by analysis timestamp."""
    rows = []
    for s in scores:
        rows.append({
            "session_id": s.session_id,
            "analysis_timestamp": pd.Timestamp(s.analysis_timestamp),
            "recording_mode": s.recording_mode.value if s.recording_mode is not None else None,
            "stability_score": s.stability_score,
            "rhythm_score": s.rhythm_score,
            "overall_score": s.overall_score,
        })
    if not rows:
        return pd.DataFrame(columns=_TABLE_COLUMNS)
    df = pd.DataFrame(rows, columns=_TABLE_COLUMNS)
    return df.sort_values("analysis_timestamp", kind="stable").reset_index(drop=True)


def daily_scores(scores: Iterable[GaitScore]) -> List[DailyGaitScore]:
    """Group results by calendar day and average their scores.

    Each daily mean is truncated toward zero, matching how the overall
    score is derived.  Days are returned in ascending order.

    Parameters
    ----------
    scores : iterable of GaitScore

    Returns
    -------
    list of DailyGaitScore
    """
    df = scores_to_dataframe(scores)
    if df.empty:
        return []

    df["day"] = pd.to_datetime(df["analysis_timestamp"]).dt.normalize()
    means = df.groupby("day", sort=True)[_SCORE_COLUMNS].mean()

    daily = []
    for day, row in means.iterrows():
        daily.append(DailyGaitScore(
            date=day.date(),
            stability_score=int(np.trunc(row["stability_score"])),
            rhythm_score=int(np.trunc(row["rhythm_score"])),
            overall_score=int(np.trunc(row["overall_score"])),
        ))
    logger.debug("Aggregated %d results into %d days", len(df), len(daily))
    return daily
