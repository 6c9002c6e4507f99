"""OpenWeather Current Weather API provider implementation."""
import logging
import requests
from weather_provider import WeatherProviderBase, ProviderError, TransportError
from openweather_schema import RawWeatherResponse

VALID_UNITS = ("metric", "imperial", "standard")


class OpenWeatherProvider(WeatherProviderBase):
    """
    Weather provider using OpenWeather Current Weather API.

    Uses the free Current Weather API: https://openweathermap.org/current
    and queries it by city name ("City,CountryCode").
    """

    BASE_URL = "https://api.openweathermap.org/data/2.5/weather"

    def __init__(
        self,
        api_key: str,
        units: str = "metric",
        timeout: int = 10,
        session=None,
        base_url: str = BASE_URL
    ):
        """
        Initialize OpenWeather provider.

        Args:
            api_key: OpenWeather API key
            units: Temperature units ("metric", "imperial", or "standard")
            timeout: HTTP request timeout in seconds
            session: HTTP client with a requests-style ``get`` (e.g. a
                requests.Session); defaults to the requests module
            base_url: Endpoint override, mostly for tests
        """
        if not api_key or not api_key.strip():
            raise ValueError("api_key must be a non-empty string")
        if units not in VALID_UNITS:
            raise ValueError(f"units must be one of {', '.join(VALID_UNITS)}, got {units!r}")

        self.api_key = api_key
        self.units = units
        self.timeout = timeout
        self.base_url = base_url
        self._http = session if session is not None else requests

    def get_current(self, city: str) -> RawWeatherResponse:
        """
        Fetch current weather from OpenWeather Current Weather API.

        One request per call, never retried here.

        Args:
            city: "City,CountryCode" query string

        Returns:
            RawWeatherResponse: Provider payload

        Raises:
            ValueError: If city is empty
            ProviderError: If the API answers with a non-2xx status
            TransportError: On network failures or an undecodable body
        """
        if not city or not city.strip():
            raise ValueError("city must be a non-empty string")

        params = {
            "q": city,
            "appid": self.api_key,
            "units": self.units,
        }

        try:
            logging.info(f"Making OpenWeather API request: {self.base_url}")
            logging.debug(f"Request parameters: q={city}, appid=***, units={self.units}")

            response = self._http.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise TransportError(e) from e

        logging.info(f"API response status: {response.status_code}")

        if not 200 <= response.status_code < 300:
            logging.error(f"API request failed with status {response.status_code}")
            self._handle_error_response(response)

        try:
            data = response.json()
            raw = RawWeatherResponse.from_dict(data)
        except ValueError as e:
            # requests' JSONDecodeError is a ValueError subclass
            logging.error(f"Failed to parse API response: {e}", exc_info=True)
            raise TransportError(e) from e

        logging.debug(f"API response data keys: {list(data.keys())}")
        logging.debug(f"API response (truncated): {str(data)[:500]}...")
        return raw

    def _handle_error_response(self, response: requests.Response) -> None:
        """Raise ProviderError carrying the status code and the raw body text."""
        body = response.text or ""
        reason = getattr(response, "reason", None) or ""
        try:
            error_data = response.json()
        except ValueError:
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {body[:500]}")
        else:
            if isinstance(error_data, dict):
                logging.error(
                    f"OpenWeather API error {error_data.get('cod', response.status_code)}: "
                    f"{error_data.get('message', 'Unknown error')}"
                )
                if not reason:
                    reason = str(error_data.get("message", ""))
        raise ProviderError(response.status_code, body or "Unknown error", reason)
