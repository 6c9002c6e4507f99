"""Tests for the display model and the raw payload records."""
import pytest

from openweather_schema import RawWeatherResponse, WeatherCondition
from weather_data import DisplayWeather


def test_display_weather_creation():
    """Test creating DisplayWeather with all fields."""
    weather = DisplayWeather(
        label="Bengaluru (3:43 AM, Nov 15)",
        condition_main="Clouds",
        high_temp="26°C",
        temp_range="24°C / 28°C",
        summary="Overcast clouds. Feels like 27°C. Humidity: 70%.",
        icon_code="04n"
    )

    assert weather.label == "Bengaluru (3:43 AM, Nov 15)"
    assert weather.condition_main == "Clouds"
    assert weather.high_temp == "26°C"
    assert weather.icon_code == "04n"
    assert weather.has_icon is True


def test_display_weather_icon_defaults_to_absent():
    weather = DisplayWeather(
        label="X (Unknown time)",
        condition_main="N/A",
        high_temp="--°C",
        temp_range="--°C / --°C",
        summary="N/A. Feels like --°C. Humidity: --%."
    )

    assert weather.icon_code is None
    assert weather.has_icon is False


def test_raw_response_full_payload():
    raw = RawWeatherResponse.from_dict({
        "coord": {"lon": -94.04, "lat": 33.44},
        "weather": [{"id": 803, "main": "Clouds", "description": "broken clouds", "icon": "04d"}],
        "main": {
            "temp": 292.55,
            "feels_like": 292.87,
            "temp_min": 290.0,
            "temp_max": 295,
            "pressure": 1014,
            "humidity": 89,
            "sea_level": 1014,
            "grnd_level": 990
        },
        "visibility": 10000,
        "wind": {"speed": 3.13, "deg": 93, "gust": 6.1},
        "rain": {"1h": 2.93},
        "clouds": {"all": 53},
        "dt": 1684929490,
        "sys": {"type": 2, "id": 7, "country": "US", "sunrise": 1684900000, "sunset": 1684950000},
        "timezone": -18000,
        "name": "Testville",
        "id": 123,
        "cod": 200
    })

    assert raw.coordinates.latitude == 33.44
    assert raw.weather == [WeatherCondition(803, "Clouds", "broken clouds", "04d")]
    assert raw.main.temperature == 292.55
    assert raw.main.temp_max == 295.0
    assert raw.main.ground_level_pressure == 990
    assert raw.wind.direction_degrees == 93.0
    assert raw.wind.gust == 6.1
    assert raw.rain.last_1h == 2.93
    assert raw.rain.last_3h is None
    assert raw.snow is None
    assert raw.clouds.all == 53
    assert raw.system.country_code == "US"
    assert raw.date_time == 1684929490
    assert raw.timezone == -18000
    assert raw.city_name == "Testville"
    assert raw.city_id == 123
    assert raw.response_code == 200


def test_raw_response_empty_payload():
    """Test that every field may be absent."""
    raw = RawWeatherResponse.from_dict({})

    assert raw.weather is None
    assert raw.main is None
    assert raw.city_name is None
    assert raw.first_condition is None


def test_raw_response_empty_weather_list_is_present():
    raw = RawWeatherResponse.from_dict({"weather": []})

    assert raw.weather == []
    assert raw.first_condition is None


def test_raw_response_wrong_types_are_absent():
    raw = RawWeatherResponse.from_dict({
        "weather": [{"main": 5, "description": None, "icon": "01d"}, "junk"],
        "main": {"temp": "hot", "humidity": True, "feels_like": float("nan")},
        "wind": [],
        "dt": "yesterday",
        "name": 42,
    })

    assert raw.weather == [WeatherCondition(icon="01d")]
    assert raw.main.temperature is None
    assert raw.main.humidity is None
    assert raw.main.feels_like is None
    assert raw.wind is None
    assert raw.date_time is None
    assert raw.city_name is None


def test_raw_response_string_response_code():
    raw = RawWeatherResponse.from_dict({"cod": "404", "message": "city not found"})

    assert raw.response_code == 404


@pytest.mark.parametrize("payload", [[], "text", None, 3])
def test_raw_response_rejects_non_object(payload):
    with pytest.raises(ValueError):
        RawWeatherResponse.from_dict(payload)
