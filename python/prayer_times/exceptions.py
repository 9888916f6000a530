"""Errors raised by prayer time calculations.

Undefined times (polar day/night) are not errors; they are reported as
``None`` fields on :class:`prayer_times._types.PrayerTimes`.
"""


class PrayerTimesError(ValueError):
    """Base class for all prayer time errors."""


class InvalidInputError(PrayerTimesError):
    """Coordinates, date or UTC offset outside the supported domain."""


class ConfigurationError(PrayerTimesError):
    """A calculation method with contradictory or unknown parameters."""
