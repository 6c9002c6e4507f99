"""Turn a raw provider payload into a display-ready row - pure functions for testability."""
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Optional

from openweather_schema import RawWeatherResponse
from weather_data import DisplayWeather
from weather_provider import IncompleteDataError, TimeFormatError

UNKNOWN_TIME = "Unknown time"
INVALID_TIME = "Invalid time"
NOT_AVAILABLE = "N/A"
MISSING_VALUE = "--"

COMPASS_POINTS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

# units -> (temperature suffix, wind speed suffix)
UNIT_SUFFIXES = {
    "metric": ("°C", "m/s"),
    "imperial": ("°F", "mph"),
    "standard": ("K", "m/s"),
}


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves toward positive infinity.

    24.5 -> 25, -0.5 -> 0, -1.5 -> -1. Python's round() uses banker's
    rounding, which would turn 24.5 into 24.
    """
    return math.floor(value + 0.5)


def format_temperature(value: Optional[float]) -> str:
    """Rounded integer string, or the missing-value token."""
    if value is None:
        return MISSING_VALUE
    return str(round_half_up(value))


def capitalize_first(text: Optional[str]) -> str:
    """Upper-case only the first character; "N/A" when there is no text."""
    if text is None:
        return NOT_AVAILABLE
    return text[:1].upper() + text[1:]


def wind_direction(degrees: float) -> str:
    """
    Map a bearing in degrees to one of 16 compass points.

    Any finite value is accepted: negative and >= 360 bearings wrap around.

    Raises:
        ValueError: If degrees is NaN or infinite
    """
    if not math.isfinite(degrees):
        raise ValueError(f"Wind direction must be finite, got {degrees}")
    index = round_half_up(degrees / 22.5) % len(COMPASS_POINTS)
    return COMPASS_POINTS[index]


def _format_instant(epoch_seconds: int, timezone_shift_seconds: Optional[int]) -> str:
    try:
        if timezone_shift_seconds is not None:
            tz = timezone(timedelta(seconds=timezone_shift_seconds))
            moment = datetime.fromtimestamp(epoch_seconds, tz=tz)
        else:
            moment = datetime.fromtimestamp(epoch_seconds).astimezone()
    except (OverflowError, OSError, ValueError, TypeError) as e:
        raise TimeFormatError(
            f"Cannot format dt={epoch_seconds} timezone={timezone_shift_seconds}: {e}"
        ) from e

    # h:mm a, MMM d
    hour = moment.strftime("%I").lstrip("0")
    return f"{hour}:{moment:%M %p, %b} {moment.day}"


def format_observation_time(
    epoch_seconds: Optional[int],
    timezone_shift_seconds: Optional[int]
) -> str:
    """
    Format an observation instant as "h:mm a, MMM d" (e.g. "3:43 AM, Nov 15").

    Args:
        epoch_seconds: UNIX timestamp (UTC)
        timezone_shift_seconds: Offset added to UTC; local system time when None

    Returns:
        Formatted time, "Unknown time" when there is no timestamp, or
        "Invalid time" when the values cannot be formatted
    """
    if epoch_seconds is None:
        return UNKNOWN_TIME
    try:
        return _format_instant(epoch_seconds, timezone_shift_seconds)
    except TimeFormatError as e:
        logging.warning(f"Observation time fallback: {e}")
        return INVALID_TIME


def transform(raw: RawWeatherResponse, units: str = "metric") -> DisplayWeather:
    """
    Build the display row for a provider response.

    Args:
        raw: Provider payload
        units: Unit system the payload was requested in

    Returns:
        DisplayWeather: Fully populated row

    Raises:
        IncompleteDataError: If the condition list, main block or city name is absent
        ValueError: If units is not a known unit system
    """
    if units not in UNIT_SUFFIXES:
        raise ValueError(f"Unknown unit system: {units!r}")

    missing = [
        name for name, value in (
            ("weather", raw.weather),
            ("main", raw.main),
            ("name", raw.city_name),
        )
        if value is None
    ]
    if missing:
        logging.warning(f"OpenWeatherMap data incomplete, missing: {missing}. Full response: {raw}")
        raise IncompleteDataError(missing)

    temp_unit, speed_unit = UNIT_SUFFIXES[units]
    main = raw.main
    condition = raw.first_condition

    observation_time = format_observation_time(raw.date_time, raw.timezone)
    description = capitalize_first(condition.description if condition else None)
    humidity = str(main.humidity) if main.humidity is not None else MISSING_VALUE

    summary = (
        f"{description}. Feels like {format_temperature(main.feels_like)}{temp_unit}. "
        f"Humidity: {humidity}%."
    )
    wind = raw.wind
    if wind is not None and wind.speed is not None:
        summary += f" Wind: {round_half_up(wind.speed)} {speed_unit}"
        if wind.direction_degrees is not None:
            summary += f" {wind_direction(wind.direction_degrees)}"
        summary += "."

    icon_code = condition.icon if condition else None

    display = DisplayWeather(
        label=f"{raw.city_name} ({observation_time})",
        condition_main=(condition.main_condition if condition else None) or NOT_AVAILABLE,
        high_temp=f"{format_temperature(main.temperature)}{temp_unit}",
        temp_range=(
            f"{format_temperature(main.temp_min)}{temp_unit} / "
            f"{format_temperature(main.temp_max)}{temp_unit}"
        ),
        summary=summary,
        icon_code=icon_code or None,
    )
    logging.debug(f"Transformed UI data: {display}")
    return display
