from datetime import datetime, timezone, timedelta

from linkcollector.utils.datetime_utils import to_iso_z, utc_now


def test_none_returns_empty_string():
    assert to_iso_z(None) == ""


def test_utc_datetime_has_z_suffix_and_milliseconds():
    dt = datetime(2020, 1, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)
    assert to_iso_z(dt) == "2020-01-01T12:00:00.123Z"


def test_aware_datetime_converted_to_utc():
    dt = datetime(2020, 1, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    # 12:00+02:00 -> 10:00 UTC
    assert to_iso_z(dt) == "2020-01-01T10:00:00.000Z"


def test_naive_datetime_assumed_utc():
    assert to_iso_z(datetime(2020, 1, 1, 12, 0, 0)) == "2020-01-01T12:00:00.000Z"


def test_utc_now_is_aware():
    assert utc_now().tzinfo is not None
