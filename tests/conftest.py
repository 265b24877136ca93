from datetime import datetime

import pytest

from vocaplan.domain.models import ReviewRecord


@pytest.fixture
def now():
    return datetime(2024, 3, 1, 9, 0)


@pytest.fixture
def make_record():
    """Factory for records with a given dwell history and swipe counts."""

    def _make(word_id, dwell=(), right=0, left=0, **kwargs):
        history = list(dwell)
        kwargs.setdefault("total_exposures", max(len(history), right + left))
        return ReviewRecord(
            word_id=word_id,
            dwell_history=history,
            right_count=right,
            left_count=left,
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_home(tmp_path, monkeypatch):
    """Mocks Path.home() to point to a temp dir."""
    home = tmp_path / "home"
    home.mkdir()

    # Mocking HOME to a temp directory to isolate config files
    monkeypatch.setenv("HOME", str(home))
    for key in [
        "VOCAPLAN_MIN_EXPOSURES",
        "VOCAPLAN_MAX_EXPOSURES",
        "VOCAPLAN_EXPOSURE_POLICY",
        "VOCAPLAN_RECORDS_PATH",
    ]:
        monkeypatch.delenv(key, raising=False)
    return home
