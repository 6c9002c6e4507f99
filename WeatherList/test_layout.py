"""Tests for layout logic."""
import pytest
from openweather_schema import RawWeatherResponse
from transform import transform
from weather_data import DisplayWeather
from layout import (
    build_rows,
    condition_emoji,
    hex_to_rgb,
    icon_url,
    parse_temperature,
    render_text,
    temperature_color,
    to_celsius,
)


@pytest.fixture
def sample_weather():
    """Sample display row."""
    return DisplayWeather(
        label="Bengaluru (3:43 AM, Nov 15)",
        condition_main="Clouds",
        high_temp="26°C",
        temp_range="24°C / 28°C",
        summary="Overcast clouds. Feels like 27°C. Humidity: 70%. Wind: 3 m/s E.",
        icon_code="04n"
    )


def test_icon_url():
    assert icon_url("04d") == "https://openweathermap.org/img/wn/04d@2x.png"
    assert icon_url("10n", size="") == "https://openweathermap.org/img/wn/10n.png"


@pytest.mark.parametrize("code", [None, ""])
def test_icon_url_without_code(code):
    assert icon_url(code) is None


@pytest.mark.parametrize("temp_text,expected", [
    ("35°C", "#D32F2F"),
    ("30°C", "#D32F2F"),
    ("29°C", "#FF6B6B"),
    ("25°C", "#FF6B6B"),
    ("24°C", "#4ECDC4"),
    ("15°C", "#4ECDC4"),
    ("14°C", "#45B7D1"),
    ("6°C", "#45B7D1"),
    ("5°C", "#1976D2"),
    ("-12°C", "#1976D2"),
])
def test_temperature_color_breakpoints(temp_text, expected):
    assert temperature_color(temp_text) == expected


@pytest.mark.parametrize("temp_text", ["--°C", "", "N/A"])
def test_temperature_color_without_number(temp_text):
    """Test that unparseable temperatures fall back to black."""
    assert temperature_color(temp_text) == "#000000"


@pytest.mark.parametrize("temp_text,units,expected", [
    ("68°F", "imperial", "#4ECDC4"),
    ("86°F", "imperial", "#D32F2F"),
    ("32°F", "imperial", "#1976D2"),
    ("50°F", "imperial", "#45B7D1"),
    ("273K", "standard", "#1976D2"),
    ("303K", "standard", "#D32F2F"),
    ("290K", "standard", "#4ECDC4"),
])
def test_temperature_color_converts_units(temp_text, units, expected):
    """Test that Fahrenheit and Kelvin values use the Celsius breakpoints."""
    assert temperature_color(temp_text, units) == expected


def test_to_celsius():
    assert to_celsius(68.0, "imperial") == pytest.approx(20.0)
    assert to_celsius(273.15, "standard") == pytest.approx(0.0)
    assert to_celsius(21.5) == 21.5
    with pytest.raises(ValueError):
        to_celsius(10.0, "kelvin")


@pytest.mark.parametrize("units,temp,expected", [
    ("imperial", 68.0, "#4ECDC4"),
    ("standard", 273.15, "#1976D2"),
    ("metric", 20.0, "#4ECDC4"),
])
def test_build_rows_colors_follow_units(units, temp, expected):
    """Test that a transformed row keeps its color meaning in every unit system."""
    raw = RawWeatherResponse.from_dict({
        "weather": [{"main": "Clear", "description": "clear sky", "icon": "01d"}],
        "main": {"temp": temp, "feels_like": temp, "temp_min": temp, "temp_max": temp, "humidity": 50},
        "dt": 1700000000,
        "timezone": 0,
        "name": "Testville"
    })

    row = build_rows([transform(raw, units=units)], units=units)[0]

    assert row["temp_color"] == expected


def test_parse_temperature():
    assert parse_temperature("26°C") == 26
    assert parse_temperature("-3°F") == -3
    assert parse_temperature("24.5") == 24.5
    assert parse_temperature("--°C") is None


def test_hex_to_rgb():
    assert hex_to_rgb("#D32F2F") == (211, 47, 47)
    assert hex_to_rgb("000000") == (0, 0, 0)


@pytest.mark.parametrize("condition,expected", [
    ("Clouds", "☁️"),
    ("Rain", "🌧️"),
    ("drizzle", "🌧️"),
    ("Thunderstorm", "⛈️"),
    ("Snow", "❄️"),
    ("Clear", "☀️"),
    ("Haze", "🌫️"),
    ("Tornado", "🌫️"),
    ("N/A", "🌤️"),
])
def test_condition_emoji(condition, expected):
    assert condition_emoji(condition) == expected


def test_build_rows(sample_weather):
    """Test that rows carry resolved text, color and icon."""
    rows = build_rows([sample_weather])

    assert len(rows) == 1
    row = rows[0]
    assert row["title"] == "Bengaluru (3:43 AM, Nov 15)"
    assert row["temp"] == "26°C"
    assert row["temp_color"] == "#FF6B6B"
    assert row["icon_url"] == "https://openweathermap.org/img/wn/04n@2x.png"
    assert row["emoji"] == "☁️"


def test_build_rows_without_icon(sample_weather):
    weather = DisplayWeather(
        label=sample_weather.label,
        condition_main="N/A",
        high_temp="--°C",
        temp_range="--°C / --°C",
        summary="N/A. Feels like --°C. Humidity: --%.",
    )

    row = build_rows([weather])[0]

    assert row["icon_url"] is None
    assert row["temp_color"] == "#000000"


def test_render_text(sample_weather):
    text = render_text([sample_weather])
    lines = text.split("\n")

    assert lines[0] == "Bengaluru (3:43 AM, Nov 15)"
    assert "Clouds" in lines[1]
    assert "26°C" in lines[1]
    assert "(24°C / 28°C)" in lines[1]
    assert lines[2].strip() == sample_weather.summary


def test_render_text_empty_list():
    assert render_text([]) == ""
