"""Layout logic for the weather list - pure functions for testability."""
import re
from typing import List, Optional, Tuple

from transform import round_half_up
from weather_data import DisplayWeather

OWM_ICON_BASE_URL = "https://openweathermap.org/img/wn/"

DEFAULT_TEXT_COLOR = "#000000"

_CONDITION_EMOJI = {
    "thunderstorm": "⛈️",
    "drizzle": "🌧️",
    "rain": "🌧️",
    "snow": "❄️",
    "clear": "☀️",
    "clouds": "☁️",
}
_ATMOSPHERE = {"mist", "smoke", "haze", "dust", "fog", "sand", "ash", "squall", "tornado"}

_NUMBER = re.compile(r"-?\d+(?:\.\d+)?")


class RowLayout:
    """Resolved presentation of one list row (for testing/rendering)."""
    def __init__(self, **kwargs):
        self.kwargs = kwargs

    def __getitem__(self, key):
        return self.kwargs[key]


def icon_url(icon_code: Optional[str], size: str = "@2x") -> Optional[str]:
    """
    Resolve a provider icon code into an image URL.

    Args:
        icon_code: Icon code such as "04d", or None
        size: Size suffix appended to the code

    Returns:
        URL like "https://openweathermap.org/img/wn/04d@2x.png", or None without a code
    """
    if not icon_code:
        return None
    return f"{OWM_ICON_BASE_URL}{icon_code}{size}.png"


def parse_temperature(temp_text: str) -> Optional[float]:
    """Extract the number from a formatted temperature such as "26°C"."""
    match = _NUMBER.search(temp_text or "")
    if match is None:
        return None
    return float(match.group())


def to_celsius(value: float, units: str = "metric") -> float:
    """Convert a temperature in the given unit system to Celsius."""
    if units == "imperial":
        return (value - 32) * 5 / 9
    elif units == "standard":
        return value - 273.15
    elif units == "metric":
        return value
    raise ValueError(f"Unknown unit system: {units!r}")


def temperature_color(temp_text: str, units: str = "metric") -> str:
    """
    Pick a text color for a formatted temperature.

    Breakpoints are in Celsius, so the value is converted from ``units`` first:
    >=30 dark red, >=25 coral, >=15 teal, <=5 blue, otherwise light blue.
    Text without a number (e.g. "--°C") gets the default black.
    """
    value = parse_temperature(temp_text)
    if value is None:
        return DEFAULT_TEXT_COLOR
    temp = round_half_up(to_celsius(value, units))
    if temp >= 30:
        return "#D32F2F"
    elif temp >= 25:
        return "#FF6B6B"
    elif temp >= 15:
        return "#4ECDC4"
    elif temp <= 5:
        return "#1976D2"
    else:
        return "#45B7D1"


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Convert "#RRGGBB" to an (r, g, b) tuple."""
    value = color.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def condition_emoji(condition_main: str) -> str:
    """Emoji for a condition category; a sun-behind-cloud for anything unknown."""
    main = (condition_main or "").lower()
    if main in _ATMOSPHERE:
        return "🌫️"
    return _CONDITION_EMOJI.get(main, "🌤️")


def build_rows(items: List[DisplayWeather], units: str = "metric") -> List[RowLayout]:
    """
    Calculate the row layout for each list item.

    Args:
        items: Display rows, in list order
        units: Unit system the temperatures are displayed in

    Returns:
        One RowLayout per item with resolved texts, color and icon URL
    """
    rows = []
    for weather in items:
        rows.append(RowLayout(
            title=weather.label,
            condition=weather.condition_main,
            temp=weather.high_temp,
            temp_range=weather.temp_range,
            summary=weather.summary,
            temp_color=temperature_color(weather.high_temp, units),
            icon_url=icon_url(weather.icon_code) if weather.has_icon else None,
            emoji=condition_emoji(weather.condition_main),
        ))
    return rows


def render_text(items: List[DisplayWeather], units: str = "metric") -> str:
    """Plain-text rendering of the list for a terminal."""
    blocks = []
    for row in build_rows(items, units):
        blocks.append("\n".join([
            row["title"],
            f"  {row['emoji']} {row['condition']}  {row['temp']}  ({row['temp_range']})",
            f"  {row['summary']}",
        ]))
    return "\n\n".join(blocks)
