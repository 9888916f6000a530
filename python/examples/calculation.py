"""Demonstrate prayer time calculations for Washington, DC on April 12, 2021."""

import logging
from datetime import datetime
from zoneinfo import ZoneInfo

from prayer_times._types import ALL_TIMES, Coordinates, HighLatitudeRule
from prayer_times.engine import hours_to_hhmm, prayer_times_for
from prayer_times.methods import ASR_HANAFI, METHODS, Method, custom_method


def main():
    logging.basicConfig(level=logging.INFO)

    coords = Coordinates(latitude=38.8977, longitude=-77.0365, elevation=18.0)
    when = datetime(2021, 4, 12, 12, 0, tzinfo=ZoneInfo("America/New_York"))

    standard = prayer_times_for(when, coords, Method.MWL)
    hanafi = prayer_times_for(
        when, coords, custom_method(METHODS[Method.MWL], asr_factor=ASR_HANAFI)
    )

    print("=== Prayer Times Example ===")
    print(f"Location: Washington, DC ({coords.latitude:.4f}°N, {-coords.longitude:.4f}°W)")
    print(f"Date: {when.date()} (UTC{standard.utc_offset:+.1f})")
    print(f"Method: {METHODS[Method.MWL].name}")
    print()
    for name in ALL_TIMES:
        print(f"{name.capitalize():>9}: {hours_to_hhmm(getattr(standard, name))}")
    print(f"{'Asr (H)':>9}: {hours_to_hhmm(hanafi.asr)}")
    print()

    oslo = Coordinates(latitude=59.9139, longitude=10.7522)
    summer = datetime(2021, 6, 21, 12, 0, tzinfo=ZoneInfo("Europe/Oslo"))
    print("--- Oslo, summer solstice ---")
    for rule in HighLatitudeRule:
        method = custom_method(METHODS[Method.MWL], high_latitude_rule=rule)
        times = prayer_times_for(summer, oslo, method)
        print(
            f"{rule.value:>12}: Fajr {hours_to_hhmm(times.fajr)}  "
            f"Isha {hours_to_hhmm(times.isha)}"
        )


if __name__ == "__main__":
    main()
