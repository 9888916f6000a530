"""PrayerTimes record helpers."""

from datetime import date, datetime, timedelta, timezone

import pytest

from prayer_times._types import ALL_TIMES, PrayerTimes


def _times(**overrides):
    values = dict(
        imsak=4.5,
        fajr=4.7,
        sunrise=6.2,
        dhuhr=12.9,
        asr=16.4,
        sunset=19.6,
        maghrib=19.6,
        isha=21.0,
        midnight=24.9,
    )
    values.update(overrides)
    return PrayerTimes(date=date(2021, 4, 12), utc_offset=3.0, **values)


class TestAsDict:
    def test_keys_in_day_order(self):
        assert list(_times().as_dict()) == list(ALL_TIMES)


class TestAsDatetimes:
    def test_rounds_to_minute(self):
        dts = _times(fajr=4.7 + 0.4 / 60.0).as_datetimes()
        tz = timezone(timedelta(hours=3))
        assert dts["fajr"] == datetime(2021, 4, 12, 4, 42, tzinfo=tz)

    def test_crosses_midnight(self):
        dts = _times().as_datetimes()
        assert dts["midnight"].date() == date(2021, 4, 13)
        assert (dts["midnight"].hour, dts["midnight"].minute) == (0, 54)

    def test_before_midnight(self):
        dts = _times(fajr=-0.25).as_datetimes()
        assert dts["fajr"].date() == date(2021, 4, 11)
        assert (dts["fajr"].hour, dts["fajr"].minute) == (23, 45)

    def test_undefined_stays_none(self):
        assert _times(isha=None).as_datetimes()["isha"] is None


class TestOrdering:
    def test_ordered(self):
        assert _times().is_ordered()

    def test_out_of_order(self):
        assert not _times(asr=12.0).is_ordered()

    def test_ties_not_strict(self):
        assert not _times(sunrise=4.7).is_ordered()

    def test_skips_undefined(self):
        assert _times(fajr=None, isha=None).is_ordered()


class TestUndefined:
    def test_none(self):
        assert _times().undefined() == ()

    def test_names(self):
        assert _times(isha=None, fajr=None).undefined() == ("fajr", "isha")


def test_frozen():
    with pytest.raises(AttributeError):
        _times().fajr = 5.0
