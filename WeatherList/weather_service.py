"""Weather service: fetch, transform and publish the latest result."""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from transform import transform
from weather_data import DisplayWeather
from weather_provider import WeatherError, WeatherProviderBase

DEFAULT_CITY = "Bengaluru,IN"


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of one refresh: exactly one of ``weather`` or ``error`` is set."""
    weather: Optional[DisplayWeather] = None
    error: Optional[WeatherError] = None

    def __post_init__(self):
        if (self.weather is None) == (self.error is None):
            raise ValueError("RefreshResult needs exactly one of weather or error")

    @property
    def ok(self) -> bool:
        return self.weather is not None


class WeatherService:
    """
    Service that runs one fetch-then-transform per refresh and keeps the latest result.

    No caching and no retries: each refresh issues exactly one provider
    request and the caller decides whether to refresh again.

    Overlapping refreshes are coalesced: while a refresh is in flight a new
    request does not hit the provider. ``submit_refresh`` hands back the
    in-flight future and a blocking ``refresh`` returns None.
    """

    def __init__(
        self,
        provider: WeatherProviderBase,
        city: str = DEFAULT_CITY,
        units: str = "metric"
    ):
        """
        Initialize weather service.

        Args:
            provider: Weather provider to fetch from
            city: "City,CountryCode" query
            units: Unit system the provider was configured with
        """
        if not city or not city.strip():
            raise ValueError("city must be a non-empty string")

        self.provider = provider
        self.city = city
        self.units = units

        self._lock = threading.Lock()
        self._in_flight = False
        self._pending: Optional[Future] = None
        self._latest: Optional[RefreshResult] = None
        self._executor: Optional[ThreadPoolExecutor] = None

    @property
    def latest(self) -> Optional[RefreshResult]:
        """Most recent refresh outcome (last write wins), None before the first one."""
        with self._lock:
            return self._latest

    @property
    def is_loading(self) -> bool:
        with self._lock:
            return self._in_flight

    def refresh(self) -> Optional[RefreshResult]:
        """
        Fetch and transform the current weather, then publish it as the latest result.

        Returns:
            RefreshResult, or None if another refresh was already in flight
        """
        with self._lock:
            if self._in_flight:
                logging.info("Refresh already in flight, dropping this request")
                return None
            self._in_flight = True
        try:
            result = self._run_refresh()
            with self._lock:
                self._latest = result
            return result
        finally:
            with self._lock:
                self._in_flight = False
            logging.debug("Loading cleared")

    def submit_refresh(self) -> Future:
        """
        Run a refresh on the background worker.

        Returns:
            Future resolving to the RefreshResult (None if a blocking refresh
            was running when the worker started). While a submitted refresh is
            pending the same future is returned and no new request is made.
        """
        with self._lock:
            if self._pending is not None and not self._pending.done():
                logging.info("Refresh already in flight, reusing pending result")
                return self._pending
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1, thread_name_prefix="weather-refresh"
                )
            future = self._executor.submit(self.refresh)
            self._pending = future
            return future

    def _run_refresh(self) -> RefreshResult:
        logging.info(f"Fetching weather data for {self.city}...")
        try:
            raw = self.provider.get_current(self.city)
            weather = transform(raw, units=self.units)
        except WeatherError as e:
            logging.error(f"Weather refresh failed: {e}")
            return RefreshResult(error=e)
        logging.info(f"Weather refresh successful: {weather.high_temp}, {weather.condition_main}")
        return RefreshResult(weather=weather)

    def close(self) -> None:
        """Stop the background worker, waiting for a pending refresh."""
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "WeatherService":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
