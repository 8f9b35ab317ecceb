"""Tests for gaitscore.schema -- JSON and DataFrame conversion."""

import json
from datetime import datetime

import numpy as np
import pandas as pd
import pytest

from conftest import make_walking_session

from gaitscore.models import GaitScore, RecordingMode
from gaitscore.schema import (
    load_json,
    save_json,
    score_from_dict,
    score_to_dict,
    session_from_dataframe,
    session_to_dataframe,
)
from gaitscore.scoring import analyze_session

FIXED_TS = datetime(2024, 3, 5, 14, 30, 0)


@pytest.fixture
def result():
    return analyze_session(make_walking_session(), analysis_timestamp=FIXED_TS)


class TestScoreDict:

    def test_json_compatible(self, result):
        d = score_to_dict(result)
        json.dumps(d)
        assert d["recording_mode"] == "POCKET"
        assert d["analysis_timestamp"] == "2024-03-05T14:30:00"
        assert d["stability_details"] == result.stability_details

    def test_method_delegates(self, result):
        assert result.to_dict() == score_to_dict(result)

    def test_round_trip(self, result):
        assert score_from_dict(score_to_dict(result)) == result

    def test_numpy_scalars_converted(self):
        s = GaitScore(
            stability_score=np.int64(70), rhythm_score=np.int32(80), overall_score=75,
            analysis_timestamp=FIXED_TS,
            stability_details={"stability_score": np.float64(70.5)},
        )
        d = score_to_dict(s)
        assert type(d["stability_details"]["stability_score"]) is float
        assert type(d["stability_score"]) is int

    def test_stored_row_format(self):
        row = {
            "session_id": None,
            "stability_score": 78,
            "rhythm_score": 85,
            "overall_score": 81,
            "recording_mode": "HANDHELD",
            "analysis_timestamp": 1709649000000,
            "stability_details": '{"stability_score": 78.4}',
            "rhythm_details": "not json",
        }
        s = score_from_dict(row)
        assert s.recording_mode is None
        assert s.session_id == ""
        assert s.stability_details == {"stability_score": 78.4}
        assert s.rhythm_details == {}
        assert s.analysis_timestamp == datetime.fromtimestamp(1709649000.0)

    def test_non_numeric_details_discarded(self):
        s = score_from_dict({"stability_details": {"a": "x"}, "analysis_timestamp": FIXED_TS})
        assert s.stability_details == {}

    def test_rejects_non_dict(self):
        with pytest.raises(TypeError):
            score_from_dict([1, 2])

    def test_bad_timestamp(self):
        with pytest.raises(ValueError):
            score_from_dict({"analysis_timestamp": [2024]})


class TestJsonFiles:

    def test_single_record(self, tmp_path, result):
        path = tmp_path / "out" / "score.json"
        save_json(result, path)
        assert load_json(path) == result

    def test_list_of_records(self, tmp_path, result):
        path = tmp_path / "scores.json"
        save_json([result, result], path)
        loaded = load_json(path)
        assert isinstance(loaded, list)
        assert loaded == [result, result]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / "missing.json")

    def test_bad_root(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("42", encoding="utf-8")
        with pytest.raises(ValueError, match="JSON root"):
            load_json(path)


class TestSessionFrames:

    def test_round_trip(self):
        session = make_walking_session(duration_s=1.0)
        df = session_to_dataframe(session)
        assert len(df) == 100
        assert list(df.columns[:5]) == ["timestamp", "time_s", "acc_x", "acc_y", "acc_z"]
        back = session_from_dataframe(df, session_id="s", mode="POCKET")
        assert list(back.samples) == list(session.samples)
        assert back.mode is RecordingMode.POCKET
        assert back.start_time == 0
        assert back.end_time == 990

    def test_sorted_and_defaults(self):
        df = pd.DataFrame({
            "timestamp": [20, 0, 10],
            "acc_x": [0.0, 0.0, 0.0],
            "acc_y": [0.0, 0.0, 0.0],
            "acc_z": [3.0, 1.0, 2.0],
            "gyro_x": [np.nan, 0.5, 0.5],
        })
        session = session_from_dataframe(df)
        assert [s.timestamp for s in session.samples] == [0, 10, 20]
        assert [s.acc_z for s in session.samples] == [1.0, 2.0, 3.0]
        assert session.samples[2].gyro_x == 0.0
        assert session.samples[0].mag_x == 0.0
        assert session.duration_s == pytest.approx(0.02)

    def test_missing_column(self):
        with pytest.raises(ValueError, match="acc_z"):
            session_from_dataframe(pd.DataFrame({"timestamp": [0], "acc_x": [0], "acc_y": [0]}))

    def test_nan_in_required_column(self):
        df = pd.DataFrame({"timestamp": [0, 10], "acc_x": [0, 0], "acc_y": [0, 0], "acc_z": [1.0, np.nan]})
        with pytest.raises(ValueError, match="NaN"):
            session_from_dataframe(df)

    def test_empty_session_frame(self):
        from gaitscore.models import RecordingSession
        df = session_to_dataframe(RecordingSession())
        assert df.empty
        assert "acc_z" in df.columns
