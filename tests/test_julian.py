from datetime import datetime, timedelta, timezone

import pytest

from measave.julian import UNIX_JULIAN_DELTA, from_julian_seconds, to_julian_seconds

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_epoch_maps_to_delta():
    assert to_julian_seconds(EPOCH) == 210866803200


def test_none_maps_to_delta():
    assert to_julian_seconds(None) == UNIX_JULIAN_DELTA


def test_delta_maps_back_to_epoch():
    assert from_julian_seconds(UNIX_JULIAN_DELTA) == EPOCH


def test_result_is_timezone_aware():
    assert from_julian_seconds(UNIX_JULIAN_DELTA).utcoffset() == timedelta(0)


@pytest.mark.parametrize(
    "moment",
    [
        datetime(2017, 3, 21, 12, 30, 45, tzinfo=timezone.utc),
        datetime(2000, 2, 29, 23, 59, 59, tzinfo=timezone.utc),
        datetime(1999, 12, 31, tzinfo=timezone(timedelta(hours=7))),
    ],
)
def test_round_trip(moment):
    assert from_julian_seconds(to_julian_seconds(moment)) == moment


def test_naive_datetime_is_local_time():
    naive = datetime(2020, 6, 1, 8, 0, 0)
    aware = naive.astimezone()
    assert to_julian_seconds(naive) == to_julian_seconds(aware)


def test_seconds_and_days_add_up():
    later = from_julian_seconds(UNIX_JULIAN_DELTA + 86400 * 3 + 5)
    assert later - EPOCH == timedelta(days=3, seconds=5)


def test_before_epoch_is_rejected():
    with pytest.raises(ValueError):
        from_julian_seconds(UNIX_JULIAN_DELTA - 1)


def test_far_future_is_rejected():
    with pytest.raises(ValueError):
        from_julian_seconds(2**64 - 1)