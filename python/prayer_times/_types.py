"""Frozen dataclasses for all structured inputs and return types."""

import math
from dataclasses import dataclass
from datetime import date as Date, datetime as DateTime, time, timedelta, timezone
from enum import StrEnum

from .exceptions import ConfigurationError

PRAYERS = ("fajr", "sunrise", "dhuhr", "asr", "maghrib", "isha")
ALL_TIMES = (
    "imsak",
    "fajr",
    "sunrise",
    "dhuhr",
    "asr",
    "sunset",
    "maghrib",
    "isha",
    "midnight",
)

# Refraction plus the sun's apparent radius, degrees below the horizon.
SUNRISE_ANGLE = 0.833


class HighLatitudeRule(StrEnum):
    NONE = "none"
    NIGHT_MIDDLE = "night_middle"
    ONE_SEVENTH = "one_seventh"
    ANGLE_BASED = "angle_based"


class MidnightMethod(StrEnum):
    STANDARD = "standard"  # sunset to sunrise
    JAFARI = "jafari"  # sunset to fajr


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float
    elevation: float = 0.0


@dataclass(frozen=True)
class Angle:
    """Sun this many degrees below the horizon."""

    degrees: float


@dataclass(frozen=True)
class Minutes:
    """Fixed offset in minutes from the reference event."""

    minutes: float


def _check_twilight(field_name: str, value) -> None:
    match value:
        case Angle(degrees=deg):
            if not (math.isfinite(deg) and SUNRISE_ANGLE <= deg < 90.0):
                raise ConfigurationError(
                    f"{field_name} angle must be in [{SUNRISE_ANGLE}, 90), got {deg}"
                )
        case Minutes(minutes=mins):
            if not (math.isfinite(mins) and mins >= 0.0):
                raise ConfigurationError(
                    f"{field_name} minutes must be >= 0, got {mins}"
                )
        case _:
            raise ConfigurationError(
                f"{field_name} must be Angle or Minutes, got {value!r}"
            )


@dataclass(frozen=True)
class CalculationMethod:
    """A named set of calculation parameters.

    Isha, Maghrib and Imsak are either an ``Angle`` below the horizon or a
    fixed number of ``Minutes`` after Maghrib, after Sunset and before Fajr
    respectively.
    """

    name: str
    fajr_angle: float
    isha: Angle | Minutes
    maghrib: Angle | Minutes = Minutes(0.0)
    imsak: Angle | Minutes = Minutes(10.0)
    dhuhr_offset_minutes: float = 0.0
    asr_factor: float = 1.0
    high_latitude_rule: HighLatitudeRule = HighLatitudeRule.NIGHT_MIDDLE
    midnight: MidnightMethod = MidnightMethod.STANDARD

    def __post_init__(self):
        _check_twilight("fajr", Angle(self.fajr_angle))
        _check_twilight("isha", self.isha)
        _check_twilight("maghrib", self.maghrib)
        _check_twilight("imsak", self.imsak)
        match (self.imsak, self.maghrib, self.isha):
            case (Angle(degrees=imsak), _, _) if imsak < self.fajr_angle:
                raise ConfigurationError(
                    f"imsak angle {imsak} is after fajr angle {self.fajr_angle}"
                )
            case (_, Angle(degrees=maghrib), Angle(degrees=isha)) if isha <= maghrib:
                raise ConfigurationError(
                    f"isha angle {isha} is not past maghrib angle {maghrib}"
                )
        if not (math.isfinite(self.asr_factor) and self.asr_factor > 0.0):
            raise ConfigurationError(
                f"asr_factor must be positive, got {self.asr_factor}"
            )
        if not (
            math.isfinite(self.dhuhr_offset_minutes)
            and self.dhuhr_offset_minutes >= 0.0
        ):
            raise ConfigurationError(
                f"dhuhr_offset_minutes must be >= 0, got {self.dhuhr_offset_minutes}"
            )
        try:
            object.__setattr__(
                self, "high_latitude_rule", HighLatitudeRule(self.high_latitude_rule)
            )
            object.__setattr__(self, "midnight", MidnightMethod(self.midnight))
        except ValueError as e:
            raise ConfigurationError(str(e)) from e


@dataclass(frozen=True)
class SolarPosition:
    julian_day: float
    declination: float  # degrees
    equation_of_time: float  # minutes


@dataclass(frozen=True)
class PrayerTimes:
    """Local clock times as fractional hours from local midnight of ``date``.

    Values below 0 or at/above 24 fall on the previous or next calendar day.
    ``None`` marks a time with no solution and no high latitude fallback.
    """

    date: Date
    utc_offset: float
    imsak: float | None
    fajr: float | None
    sunrise: float | None
    dhuhr: float | None
    asr: float | None
    sunset: float | None
    maghrib: float | None
    isha: float | None
    midnight: float | None

    def as_dict(self) -> dict[str, float | None]:
        return {name: getattr(self, name) for name in ALL_TIMES}

    def as_datetimes(self) -> dict[str, DateTime | None]:
        """Timezone-aware datetimes rounded to the minute."""
        tz = timezone(timedelta(hours=self.utc_offset))
        start = DateTime.combine(self.date, time(0, 0), tzinfo=tz)
        return {
            name: (
                None if value is None else start + timedelta(minutes=round(value * 60.0))
            )
            for name, value in self.as_dict().items()
        }

    def is_ordered(self) -> bool:
        """True if the defined prayer times strictly increase through the day."""
        defined = [getattr(self, name) for name in PRAYERS]
        defined = [t for t in defined if t is not None]
        return all(a < b for a, b in zip(defined, defined[1:]))

    def undefined(self) -> tuple[str, ...]:
        """Names of the times left without a value."""
        return tuple(name for name in ALL_TIMES if getattr(self, name) is None)
