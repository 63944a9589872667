"""Tests for application timezone helpers."""

from datetime import datetime, timedelta, timezone

import pytest

from eventlink.utils import datetime as dt_utils


@pytest.fixture(autouse=True)
def clear_timezone_cache():
    dt_utils.get_app_timezone.cache_clear()
    yield
    dt_utils.get_app_timezone.cache_clear()


@pytest.mark.parametrize(
    ("name", "offset"),
    [
        ("UTC+01:00", timedelta(hours=1)),
        ("GMT-0530", timedelta(hours=-5, minutes=-30)),
        ("utc+2", timedelta(hours=2)),
    ],
)
def test_fixed_offsets_are_understood(name, offset):
    assert dt_utils._resolve_timezone(name).utcoffset(None) == offset


def test_unknown_names_fall_back_to_london():
    assert str(dt_utils._resolve_timezone("Mars/Olympus")) == "Europe/London"


def test_aware_values_are_stored_as_naive_app_time(monkeypatch):
    monkeypatch.setattr(dt_utils, "get_app_timezone", lambda: timezone(timedelta(hours=2)))
    value = datetime(2025, 6, 14, 10, 0, tzinfo=timezone.utc)

    assert dt_utils.ensure_app_naive_datetime(value) == datetime(2025, 6, 14, 12, 0)
    assert dt_utils.ensure_app_naive_datetime(None) is None
    assert dt_utils.now_in_app_naive_datetime().tzinfo is None
