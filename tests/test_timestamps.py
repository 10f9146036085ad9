"""
Timestamp helper tests.
"""

from datetime import datetime, timezone, timedelta

import pytest

from utils.timestamps import from_iso, new_user_id, to_iso, utc_now


def test_to_iso_matches_browser_format():
    assert to_iso(datetime(2025, 3, 16, 14, 5, 9, 123456)) == "2025-03-16T14:05:09.123Z"
    assert to_iso(None) is None


def test_to_iso_converts_aware_datetimes():
    value = datetime(2025, 3, 16, 11, 5, 9, tzinfo=timezone(timedelta(hours=-3)))

    assert to_iso(value) == "2025-03-16T14:05:09.000Z"


def test_from_iso():
    assert from_iso("2025-03-16T14:05:09.123Z") == datetime(2025, 3, 16, 14, 5, 9, 123000)
    assert from_iso(None) is None

    with pytest.raises(ValueError):
        from_iso("16/03/2025")


def test_utc_now_is_naive():
    assert utc_now().tzinfo is None


def test_new_user_id_is_millisecond_timestamp():
    user_id = new_user_id()

    assert user_id.isdigit()
    assert len(user_id) == 13
