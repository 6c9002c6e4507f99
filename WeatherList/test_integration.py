"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from openweather_provider import OpenWeatherProvider
from transform import transform
from weather_service import WeatherService


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_openweather_integration():
    """
    Integration test that hits the real OpenWeather API.

    Set OPENWEATHER_API_KEY environment variable to run this test.
    """
    api_key = os.environ.get("OPENWEATHER_API_KEY")

    provider = OpenWeatherProvider(api_key=api_key, units="metric")

    raw = provider.get_current("Bengaluru,IN")
    weather = transform(raw)

    assert raw.city_name
    assert weather.high_temp.endswith("°C")
    assert weather.label.startswith(raw.city_name)


@pytest.mark.skipif(
    not os.environ.get("OPENWEATHER_API_KEY"),
    reason="OPENWEATHER_API_KEY not set - skipping integration test"
)
def test_weather_service_integration():
    """Integration test for WeatherService with real API."""
    api_key = os.environ.get("OPENWEATHER_API_KEY")

    provider = OpenWeatherProvider(api_key=api_key, units="metric")

    with WeatherService(provider, city="London,GB") as service:
        result = service.submit_refresh().result(timeout=30)

    assert result.ok, result.error
    assert service.latest is result
