"""Daily prayer time computation.

Solves every time in local solar hours, fills undefined times with the
method's high latitude rule, then shifts the result to local clock time
using the caller's UTC offset.
"""

import logging
import math
from datetime import date as Date, datetime as DateTime, timedelta

from ._types import (
    ALL_TIMES,
    Angle,
    CalculationMethod,
    Coordinates,
    HighLatitudeRule,
    MidnightMethod,
    Minutes,
    PrayerTimes,
)
from .astronomy import (
    DEGREES_PER_HOUR,
    MAX_YEAR,
    MIN_YEAR,
    Direction,
    asr_time,
    horizon_angle,
    julian_day,
    max_altitude,
    mid_day,
    solar_position,
    sun_angle_time,
)
from .exceptions import InvalidInputError
from .high_latitude import (
    adjust_time,
    asr_fallback,
    horizon_fallback,
    night_length,
)
from .methods import Method, get_method

log = logging.getLogger(__name__)

# Initial estimates of each event, local solar hours.
DAY_PORTIONS = {
    "imsak": 5.0,
    "fajr": 5.0,
    "sunrise": 6.0,
    "dhuhr": 12.0,
    "asr": 13.0,
    "sunset": 18.0,
    "maghrib": 18.0,
    "isha": 18.0,
}
REFINEMENT_PASSES = 1
MAX_UTC_OFFSET = 24.0


def minutes_to_time(total_minutes: int) -> tuple[int, int]:
    """Convert minutes since midnight to (hour, minute)."""
    return (total_minutes // 60, total_minutes % 60)


def to_clock(hours: float) -> tuple[int, int, int]:
    """Round fractional hours to the minute.

    Returns (day_offset, hour, minute), where day_offset is -1 for the
    previous calendar day and 1 for the next.
    """
    day_offset, minutes = divmod(round(hours * 60.0), 1440)
    return (day_offset, *minutes_to_time(minutes))


def hours_to_hhmm(hours: float | None) -> str:
    """Format fractional hours as HH:MM (24h), "--:--" if undefined."""
    if hours is None:
        return "--:--"
    _, hour, minute = to_clock(hours)
    return f"{hour:02d}:{minute:02d}"


def _offset_hours(utc_offset: float | timedelta) -> float:
    if isinstance(utc_offset, timedelta):
        return utc_offset.total_seconds() / 3600.0
    return float(utc_offset)


def _validate(day: Date, coordinates: Coordinates, utc_offset: float) -> None:
    if not isinstance(day, Date):
        raise InvalidInputError(f"day must be a date, got {day!r}")
    if not MIN_YEAR <= day.year <= MAX_YEAR:
        raise InvalidInputError(
            f"Year {day.year} outside supported range {MIN_YEAR}-{MAX_YEAR}"
        )
    lat, lon = coordinates.latitude, coordinates.longitude
    if not all(math.isfinite(v) for v in (lat, lon, coordinates.elevation)):
        raise InvalidInputError(f"Coordinates must be finite: {coordinates}")
    if not -90.0 < lat < 90.0:
        raise InvalidInputError(
            f"Invalid latitude: {lat}. Must be strictly between -90 and 90."
        )
    if not -180.0 <= lon <= 180.0:
        raise InvalidInputError(
            f"Invalid longitude: {lon}. Must be between -180 and 180."
        )
    if not (math.isfinite(utc_offset) and abs(utc_offset) < MAX_UTC_OFFSET):
        raise InvalidInputError(f"Invalid UTC offset: {utc_offset} hours")


def _twilight_angle(value: Angle | Minutes) -> float | None:
    match value:
        case Angle(degrees=deg):
            return deg
        case _:
            return None


def _solve(
    jd: float,
    latitude: float,
    horizon: float,
    method: CalculationMethod,
    estimates: dict[str, float],
) -> dict[str, float | None]:
    """Solve each event near its estimate. Minutes-based events stay None."""
    times = {
        "fajr": sun_angle_time(
            jd, latitude, method.fajr_angle, estimates["fajr"], Direction.CCW
        ),
        "sunrise": sun_angle_time(
            jd, latitude, horizon, estimates["sunrise"], Direction.CCW
        ),
        "dhuhr": mid_day(jd, estimates["dhuhr"]),
        "asr": asr_time(jd, latitude, method.asr_factor, estimates["asr"]),
        "sunset": sun_angle_time(
            jd, latitude, horizon, estimates["sunset"], Direction.CW
        ),
    }
    for name, direction in (
        ("imsak", Direction.CCW),
        ("maghrib", Direction.CW),
        ("isha", Direction.CW),
    ):
        angle = _twilight_angle(getattr(method, name))
        times[name] = (
            None
            if angle is None
            else sun_angle_time(jd, latitude, angle, estimates[name], direction)
        )
    return times


def _is_polar_night(jd: float, latitude: float, horizon: float) -> bool:
    decl = solar_position(jd + 0.5).declination
    return max_altitude(latitude, decl) < -horizon


def _fill_undefined(
    times: dict[str, float | None],
    next_sunrise: float,
    jd: float,
    latitude: float,
    horizon: float,
    method: CalculationMethod,
) -> list[str]:
    """Apply the high latitude rule in place. Returns the names it filled."""
    rule = method.high_latitude_rule
    filled = []
    if times["sunrise"] is None or times["sunset"] is None:
        sunrise, sunset = horizon_fallback(
            times["dhuhr"], _is_polar_night(jd, latitude, horizon)
        )
        for name, value in (("sunrise", sunrise), ("sunset", sunset)):
            if times[name] is None:
                times[name] = value
                filled.append(name)

    night = night_length(times["sunset"], next_sunrise)
    match method.maghrib:
        case Minutes(minutes=m):
            times["maghrib"] = times["sunset"] + m / 60.0
    # Isha follows Maghrib except at the middle of the night. An angle
    # Maghrib takes its own angle share of the night so it stays before Isha.
    isha_base = "sunset" if rule is HighLatitudeRule.NIGHT_MIDDLE else "maghrib"
    for name, base, direction, name_rule in (
        ("imsak", "sunrise", Direction.CCW, rule),
        ("fajr", "sunrise", Direction.CCW, rule),
        ("maghrib", "sunset", Direction.CW, HighLatitudeRule.ANGLE_BASED),
        ("isha", isha_base, Direction.CW, rule),
    ):
        angle = (
            method.fajr_angle
            if name == "fajr"
            else _twilight_angle(getattr(method, name))
        )
        if angle is None or times[name] is not None:
            continue
        times[name] = adjust_time(
            times[name], times[base], angle, night, name_rule, direction
        )
        filled.append(name)

    if times["asr"] is None:
        times["asr"] = asr_fallback(times["dhuhr"], times["sunset"])
        filled.append("asr")
    return filled


def _next_sunrise(
    jd: float, latitude: float, horizon: float, estimate: float, rule: HighLatitudeRule
) -> float | None:
    """Sunrise of the following calendar day, local solar hours from its midnight."""
    sunrise = sun_angle_time(jd + 1.0, latitude, horizon, estimate, Direction.CCW)
    if sunrise is None and rule is not HighLatitudeRule.NONE:
        noon = mid_day(jd + 1.0, 12.0)
        polar_night = _is_polar_night(jd + 1.0, latitude, horizon)
        sunrise, _ = horizon_fallback(noon, polar_night)
    return sunrise


def _midnight(
    times: dict[str, float | None],
    next_sunrise: float | None,
    method: CalculationMethod,
) -> float | None:
    sunset = times["sunset"]
    match method.midnight:
        case MidnightMethod.JAFARI:
            night_end = times["fajr"]
        case _:
            night_end = next_sunrise
    if sunset is None or night_end is None:
        return None
    return sunset + night_length(sunset, night_end) / 2.0


def compute_prayer_times(
    day: Date,
    coordinates: Coordinates,
    method: CalculationMethod | Method | str,
    utc_offset: float | timedelta = 0.0,
) -> PrayerTimes:
    """Compute prayer times for one calendar day.

    Args:
        day: Gregorian calendar date at the location
        coordinates: Observer's latitude, longitude (negative for West)
            and elevation in meters
        method: A CalculationMethod, or the name of a predefined one
        utc_offset: Local clock offset from UTC in hours (or a timedelta),
            already resolved for daylight saving time

    Returns:
        PrayerTimes in local clock hours from midnight of `day`; a field is
        None when the sun never reaches its angle and the method's high
        latitude rule is NONE.

    Raises:
        InvalidInputError: coordinates, year or offset outside the domain
        ConfigurationError: method is neither a CalculationMethod nor a
            predefined method name
    """
    if not isinstance(method, CalculationMethod):
        method = get_method(method)
    offset = _offset_hours(utc_offset)
    _validate(day, coordinates, offset)

    latitude, longitude = coordinates.latitude, coordinates.longitude
    jd = julian_day(day.year, day.month, day.day)
    jd -= longitude / (DEGREES_PER_HOUR * 24.0)
    horizon = horizon_angle(coordinates.elevation)
    log.debug(
        "Computing %s times for %s at %s, horizon %.3f deg",
        method.name,
        day,
        coordinates,
        horizon,
    )

    estimates = dict(DAY_PORTIONS)
    for _ in range(REFINEMENT_PASSES):
        solved = _solve(jd, latitude, horizon, method, estimates)
        estimates = {
            name: estimates[name] if solved[name] is None else solved[name]
            for name in estimates
        }
    times = _solve(jd, latitude, horizon, method, estimates)
    next_sunrise = _next_sunrise(
        jd, latitude, horizon, estimates["sunrise"], method.high_latitude_rule
    )

    filled = []
    if method.high_latitude_rule is not HighLatitudeRule.NONE:
        filled = _fill_undefined(times, next_sunrise, jd, latitude, horizon, method)
        if filled:
            log.debug("Filled %s with %s rule", filled, method.high_latitude_rule)

    match method.imsak:
        case Minutes(minutes=m):
            times["imsak"] = None if times["fajr"] is None else times["fajr"] - m / 60.0
    match method.maghrib:
        case Minutes(minutes=m):
            times["maghrib"] = (
                None if times["sunset"] is None else times["sunset"] + m / 60.0
            )
    match method.isha:
        case Minutes(minutes=m):
            times["isha"] = (
                None if times["maghrib"] is None else times["maghrib"] + m / 60.0
            )
    times["dhuhr"] += method.dhuhr_offset_minutes / 60.0
    times["midnight"] = _midnight(times, next_sunrise, method)

    adjust = offset - longitude / DEGREES_PER_HOUR
    result = PrayerTimes(
        date=day,
        utc_offset=offset,
        **{
            name: None if times[name] is None else times[name] + adjust
            for name in ALL_TIMES
        },
    )
    polar = "sunrise" in filled or "sunset" in filled
    if not polar and not result.is_ordered():
        log.warning(
            "Prayer times out of order for %s at %s with %s: %s",
            day,
            coordinates,
            method.name,
            result.as_dict(),
        )
    return result


def prayer_times_for(
    when: DateTime,
    coordinates: Coordinates,
    method: CalculationMethod | Method | str,
) -> PrayerTimes:
    """Compute prayer times for the local date of a timezone-aware datetime.

    The UTC offset is taken from `when`, so a ZoneInfo tzinfo resolves
    daylight saving time for that date.
    """
    if when.tzinfo is None or when.utcoffset() is None:
        raise InvalidInputError("when must be timezone-aware")
    return compute_prayer_times(when.date(), coordinates, method, when.utcoffset())
