"""OpenWeather Current Weather payload as optional-field records.

Every field of the provider schema may be missing, so every attribute here is
Optional. Presence checks happen once, in the transform, instead of being
scattered through the rendering code.
"""
import math
from dataclasses import dataclass
from typing import Any, List, Optional


def _get_float(data: dict, key: str) -> Optional[float]:
    value = data.get(key)
    # bool is an int subclass, json true/false is never a measurement
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _get_int(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _get_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _get_dict(data: dict, key: str) -> Optional[dict]:
    value = data.get(key)
    return value if isinstance(value, dict) else None


@dataclass(frozen=True)
class Coordinates:
    longitude: Optional[float] = None
    latitude: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Coordinates":
        return cls(longitude=_get_float(data, "lon"), latitude=_get_float(data, "lat"))


@dataclass(frozen=True)
class WeatherCondition:
    """One condition entry, e.g. Clouds / "overcast clouds" / 04d."""
    id: Optional[int] = None
    main_condition: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "WeatherCondition":
        return cls(
            id=_get_int(data, "id"),
            main_condition=_get_str(data, "main"),
            description=_get_str(data, "description"),
            icon=_get_str(data, "icon"),
        )


@dataclass(frozen=True)
class MainWeather:
    temperature: Optional[float] = None
    feels_like: Optional[float] = None
    temp_min: Optional[float] = None
    temp_max: Optional[float] = None
    pressure: Optional[int] = None
    humidity: Optional[int] = None
    sea_level_pressure: Optional[int] = None
    ground_level_pressure: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "MainWeather":
        return cls(
            temperature=_get_float(data, "temp"),
            feels_like=_get_float(data, "feels_like"),
            temp_min=_get_float(data, "temp_min"),
            temp_max=_get_float(data, "temp_max"),
            pressure=_get_int(data, "pressure"),
            humidity=_get_int(data, "humidity"),
            sea_level_pressure=_get_int(data, "sea_level"),
            ground_level_pressure=_get_int(data, "grnd_level"),
        )


@dataclass(frozen=True)
class Wind:
    speed: Optional[float] = None
    direction_degrees: Optional[float] = None
    gust: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Wind":
        return cls(
            speed=_get_float(data, "speed"),
            direction_degrees=_get_float(data, "deg"),
            gust=_get_float(data, "gust"),
        )


@dataclass(frozen=True)
class Clouds:
    all: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Clouds":
        return cls(all=_get_int(data, "all"))


@dataclass(frozen=True)
class Precipitation:
    """Rain or snow volume in mm."""
    last_1h: Optional[float] = None
    last_3h: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Precipitation":
        return cls(last_1h=_get_float(data, "1h"), last_3h=_get_float(data, "3h"))


@dataclass(frozen=True)
class SystemInfo:
    type: Optional[int] = None
    id: Optional[int] = None
    country_code: Optional[str] = None
    sunrise_time: Optional[int] = None
    sunset_time: Optional[int] = None

    @classmethod
    def from_dict(cls, data: dict) -> "SystemInfo":
        return cls(
            type=_get_int(data, "type"),
            id=_get_int(data, "id"),
            country_code=_get_str(data, "country"),
            sunrise_time=_get_int(data, "sunrise"),
            sunset_time=_get_int(data, "sunset"),
        )


def _nested(cls, data: dict, key: str):
    block = _get_dict(data, key)
    return cls.from_dict(block) if block is not None else None


@dataclass(frozen=True)
class RawWeatherResponse:
    """
    Current Weather API response as received from the provider.

    ``weather`` is None when the key is missing (or null) and an empty list when
    the provider sent ``[]``; the transform treats those two cases differently.
    """
    coordinates: Optional[Coordinates] = None
    weather: Optional[List[WeatherCondition]] = None
    base: Optional[str] = None
    main: Optional[MainWeather] = None
    visibility: Optional[int] = None
    wind: Optional[Wind] = None
    clouds: Optional[Clouds] = None
    rain: Optional[Precipitation] = None
    snow: Optional[Precipitation] = None
    date_time: Optional[int] = None
    system: Optional[SystemInfo] = None
    timezone: Optional[int] = None
    city_id: Optional[int] = None
    city_name: Optional[str] = None
    response_code: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Any) -> "RawWeatherResponse":
        """
        Build a response from decoded JSON.

        Args:
            data: Decoded JSON document

        Returns:
            RawWeatherResponse with wrong-typed fields treated as absent

        Raises:
            ValueError: If the document is not a JSON object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

        weather = None
        weather_array = data.get("weather")
        if isinstance(weather_array, list):
            weather = [
                WeatherCondition.from_dict(entry)
                for entry in weather_array
                if isinstance(entry, dict)
            ]

        # "cod" is an int on success but a string on some error bodies
        response_code = _get_int(data, "cod")
        if response_code is None and isinstance(data.get("cod"), str) and data["cod"].isdigit():
            response_code = int(data["cod"])

        return cls(
            coordinates=_nested(Coordinates, data, "coord"),
            weather=weather,
            base=_get_str(data, "base"),
            main=_nested(MainWeather, data, "main"),
            visibility=_get_int(data, "visibility"),
            wind=_nested(Wind, data, "wind"),
            clouds=_nested(Clouds, data, "clouds"),
            rain=_nested(Precipitation, data, "rain"),
            snow=_nested(Precipitation, data, "snow"),
            date_time=_get_int(data, "dt"),
            system=_nested(SystemInfo, data, "sys"),
            timezone=_get_int(data, "timezone"),
            city_id=_get_int(data, "id"),
            city_name=_get_str(data, "name"),
            response_code=response_code,
        )

    @property
    def first_condition(self) -> Optional[WeatherCondition]:
        """First condition entry, or None when the list is missing or empty."""
        if self.weather:
            return self.weather[0]
        return None
