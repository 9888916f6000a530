"""Fallbacks for times the sun never reaches at high latitudes.

Above roughly 48 degrees the sun may not sink far enough for Fajr and Isha
around the summer solstice, and beyond the polar circles it may not rise or
set at all. Each rule fills such a time from a portion of the night.
All times are local solar hours.
"""

import logging

from ._types import HighLatitudeRule
from .astronomy import Direction

log = logging.getLogger(__name__)


def night_length(sunset: float, next_sunrise: float) -> float:
    """Hours from this day's sunset to the next day's sunrise.

    `next_sunrise` is measured from the next day's midnight.
    """
    return max(0.0, next_sunrise + 24.0 - sunset)


def night_portion(rule: HighLatitudeRule, angle: float, night: float) -> float:
    """Portion of the night, in hours, separating a twilight time from
    sunrise or sunset."""
    match rule:
        case HighLatitudeRule.NIGHT_MIDDLE:
            return night / 2.0
        case HighLatitudeRule.ONE_SEVENTH:
            return night / 7.0
        case HighLatitudeRule.ANGLE_BASED:
            return night * angle / 60.0
        case _:
            raise ValueError(f"No night portion for rule: {rule}")


def adjust_time(
    time: float | None,
    base: float,
    angle: float,
    night: float,
    rule: HighLatitudeRule,
    direction: Direction,
) -> float | None:
    """Fill an undefined twilight time from its base time.

    Morning times (CCW) count back from sunrise, evening times (CW) forward
    from sunset or Maghrib.

    Defined times and the NONE rule pass through unchanged.
    """
    if time is not None or rule is HighLatitudeRule.NONE:
        return time
    portion = night_portion(rule, angle, night)
    log.debug(
        "High latitude %s fallback: %.3fh %s base %.3f", rule, portion, direction, base
    )
    return base - portion if direction is Direction.CCW else base + portion


def horizon_fallback(noon: float, polar_night: bool) -> tuple[float, float]:
    """Sunrise and sunset for a day on which the sun does not cross the horizon.

    Polar day pins both to the solar midnights around `noon`, leaving no
    night; polar night pins both to solar noon, leaving a 24 hour night.
    """
    if polar_night:
        return noon, noon
    return noon - 12.0, noon + 12.0


def asr_fallback(dhuhr: float, sunset: float) -> float:
    """Midpoint of Dhuhr and sunset."""
    return (dhuhr + sunset) / 2.0
