"""Weather provider abstraction and the errors a refresh can end with."""
from abc import ABC, abstractmethod
from typing import Optional

from openweather_schema import RawWeatherResponse


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, city: str) -> RawWeatherResponse:
        """
        Fetch current weather for a city.

        Args:
            city: Free-form "City,CountryCode" query (e.g. "Bengaluru,IN")

        Returns:
            RawWeatherResponse: The provider payload, unmodified

        Raises:
            ProviderError: If the provider answers with a non-success status
            TransportError: If no structured response could be obtained
        """
        pass


class WeatherError(Exception):
    """Base class for every failure that ends a refresh."""

    @property
    def user_message(self) -> str:
        """Single line suitable for a transient user notification."""
        return str(self)


class ProviderError(WeatherError):
    """The provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, body: str, reason: str = ""):
        self.status_code = status_code
        self.body = body
        self.reason = reason
        super().__init__(f"HTTP {status_code}: {body[:200]}")

    @property
    def user_message(self) -> str:
        return (
            f"API Error (OpenWeatherMap): {self.status_code} - {self.reason}. "
            f"Details: {self.body}"
        )


class TransportError(WeatherError):
    """Network or payload failure before a structured response existed."""

    def __init__(self, cause: Exception):
        self.cause = cause
        super().__init__(f"Network error: {cause}")

    @property
    def user_message(self) -> str:
        return f"Network or Parsing Error (OpenWeatherMap): {self.cause}"


class IncompleteDataError(WeatherError):
    """A successful response lacked the condition list, main block or city name."""

    def __init__(self, missing: Optional[list] = None):
        self.missing = list(missing or [])
        detail = f" (missing: {', '.join(self.missing)})" if self.missing else ""
        super().__init__(f"Incomplete weather data{detail}")

    @property
    def user_message(self) -> str:
        return "Incomplete weather data received from OpenWeatherMap."


class TimeFormatError(WeatherError):
    """Observation time could not be formatted. Always recovered by the transform."""
    pass
