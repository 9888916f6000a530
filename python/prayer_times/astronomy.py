"""Solar ephemeris and hour angle calculations for prayer times.

All angles in degrees and all times in fractional hours unless otherwise noted.
Times are local solar time: 12.0 is mean noon at the observer's meridian.
"""

import math
from enum import StrEnum

from ._types import SUNRISE_ANGLE, SolarPosition

DEGREES_PER_HOUR = 15.0
J2000 = 2451545.0

# Horizon dip in degrees per square root of meters of elevation.
ELEVATION_DIP_FACTOR = 0.0347

# Accuracy of the truncated series degrades outside this range.
MIN_YEAR = 1901
MAX_YEAR = 2099


class Direction(StrEnum):
    CCW = "ccw"  # before solar noon
    CW = "cw"  # after solar noon


def deg_to_rad(deg: float) -> float:
    """Convert degrees to radians."""
    return deg * (math.pi / 180.0)


def rad_to_deg(rad: float) -> float:
    """Convert radians to degrees."""
    return rad * (180.0 / math.pi)


def dsin(deg: float) -> float:
    return math.sin(deg_to_rad(deg))


def dcos(deg: float) -> float:
    return math.cos(deg_to_rad(deg))


def dtan(deg: float) -> float:
    return math.tan(deg_to_rad(deg))


def normalize_angle(angle: float) -> float:
    """Normalize angle to 0-360 degree range."""
    return angle % 360.0


def normalize_hour(hour: float) -> float:
    """Normalize hour to 0-24 range."""
    return hour % 24.0


def julian_day(year: int, month: int, day: int) -> float:
    """Julian day at 0h UT of a Gregorian calendar date (Meeus, ch. 7)."""
    if month <= 2:
        year -= 1
        month += 12
    a = math.floor(year / 100)
    b = 2 - a + math.floor(a / 4)
    return (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + b
        - 1524.5
    )


def solar_position(jd: float) -> SolarPosition:
    """Calculate solar declination and equation of time.

    Uses the U.S. Naval Observatory low-precision formulas, good to about
    one arcminute between 1901 and 2099.

    Input: jd = Julian day (fractional)
    Output: SolarPosition with declination in degrees and
        equation of time in minutes
    """
    d = jd - J2000
    g = normalize_angle(357.529 + 0.98560028 * d)
    q = normalize_angle(280.459 + 0.98564736 * d)
    ecliptic_lon = normalize_angle(q + 1.915 * dsin(g) + 0.020 * dsin(2 * g))
    obliquity = 23.439 - 0.00000036 * d

    declination = rad_to_deg(math.asin(dsin(obliquity) * dsin(ecliptic_lon)))
    right_ascension = normalize_hour(
        rad_to_deg(
            math.atan2(dcos(obliquity) * dsin(ecliptic_lon), dcos(ecliptic_lon))
        )
        / DEGREES_PER_HOUR
    )
    # q/15 and RA can sit on opposite sides of 0h
    eqt_hours = (q / DEGREES_PER_HOUR - right_ascension + 12.0) % 24.0 - 12.0
    return SolarPosition(
        julian_day=jd,
        declination=declination,
        equation_of_time=eqt_hours * 60.0,
    )


def hour_angle(latitude: float, declination: float, altitude: float) -> float | None:
    """Solve the hour angle at which the sun reaches a given altitude.

    cos(H) = (sin(alt) - sin(lat) * sin(decl)) / (cos(lat) * cos(decl))

    Returns H in degrees, or None when the sun never reaches the altitude
    that day (polar day or polar night).
    """
    cos_h = (dsin(altitude) - dsin(latitude) * dsin(declination)) / (
        dcos(latitude) * dcos(declination)
    )
    if not -1.0 <= cos_h <= 1.0:
        return None
    return rad_to_deg(math.acos(cos_h))


def max_altitude(latitude: float, declination: float) -> float:
    """Altitude of the sun at solar noon."""
    return 90.0 - abs(latitude - declination)


def mid_day(jd: float, time: float) -> float:
    """Local solar time of solar noon, evaluated near the given time."""
    eqt = solar_position(jd + time / 24.0).equation_of_time
    return normalize_hour(12.0 - eqt / 60.0)


def sun_angle_time(
    jd: float, latitude: float, angle: float, time: float, direction: Direction
) -> float | None:
    """Local solar time at which the sun is `angle` degrees below the horizon.

    Args:
        jd: Julian day of local noon's date, shifted by longitude
        latitude: Observer's latitude (degrees)
        angle: Depression below the horizon (negative for above)
        time: Current estimate of the event, local solar hours
        direction: CCW for morning events, CW for evening events

    Returns:
        Local solar hours, or None if there is no solution
    """
    pos = solar_position(jd + time / 24.0)
    h = hour_angle(latitude, pos.declination, -angle)
    if h is None:
        return None
    noon = normalize_hour(12.0 - pos.equation_of_time / 60.0)
    t = h / DEGREES_PER_HOUR
    return noon - t if direction is Direction.CCW else noon + t


def asr_altitude(latitude: float, declination: float, factor: float) -> float | None:
    """Altitude of the sun when an object's shadow is `factor` times its
    length plus its noon shadow.

    Returns None if the sun stays below the horizon all day.
    """
    zenith_at_noon = abs(latitude - declination)
    if zenith_at_noon >= 90.0:
        return None
    return rad_to_deg(math.atan(1.0 / (factor + dtan(zenith_at_noon))))


def asr_time(jd: float, latitude: float, factor: float, time: float) -> float | None:
    """Local solar time of Asr for the given shadow factor."""
    decl = solar_position(jd + time / 24.0).declination
    altitude = asr_altitude(latitude, decl, factor)
    if altitude is None:
        return None
    return sun_angle_time(jd, latitude, -altitude, time, Direction.CW)


def horizon_angle(elevation: float) -> float:
    """Depression of the apparent horizon for sunrise and sunset.

    An observer above sea level sees the sun earlier and later by the dip
    of the horizon, approximated as 0.0347 * sqrt(h) degrees.
    """
    if elevation > 0.0:
        return SUNRISE_ANGLE + ELEVATION_DIP_FACTOR * math.sqrt(elevation)
    return SUNRISE_ANGLE
