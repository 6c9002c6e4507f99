"""Current-weather list for one city."""
import argparse
import logging
import os
import sys
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from layout import render_text
from list_canvas import IconLoader, render_list
from openweather_provider import OpenWeatherProvider, VALID_UNITS
from weather_service import DEFAULT_CITY, RefreshResult, WeatherService

BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DEFAULT_LOG_FILE = os.path.join(BASE_DIR, "weather-list.log")

EXIT_WEATHER_ERROR = 1


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Current weather list")
    parser.add_argument("--city", default=None, help="City query, e.g. 'Bengaluru,IN'")
    parser.add_argument("--units", choices=list(VALID_UNITS), default=None)
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--output", default=None, help="Write the list as a PNG image")
    parser.add_argument("--no-icons", action="store_true", help="Skip icon downloads for --output")
    parser.add_argument("--log-file", default=DEFAULT_LOG_FILE)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: str, verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def load_config(city: Optional[str], units: Optional[str]) -> Tuple[str, str, str]:
    """
    Resolve API key, city and units from flags, the environment and .env.

    Flags win over WEATHER_CITY / WEATHER_UNITS.
    """
    load_dotenv()
    api_key = os.getenv("WEATHER_API_KEY")
    city = city or os.getenv("WEATHER_CITY", DEFAULT_CITY)
    units = units or os.getenv("WEATHER_UNITS", "metric")

    if not api_key:
        raise SystemExit("Missing WEATHER_API_KEY in environment")
    if not city.strip():
        raise SystemExit("WEATHER_CITY must not be empty")
    if units not in VALID_UNITS:
        raise SystemExit(f"Invalid WEATHER_UNITS {units!r}, expected one of {', '.join(VALID_UNITS)}")

    logging.info("Configuration loaded: city=%s units=%s", city, units)
    return api_key, city, units


def build_weather_service(api_key: str, city: str, units: str, args: argparse.Namespace) -> WeatherService:
    provider = OpenWeatherProvider(
        api_key=api_key,
        units=units,
        timeout=args.timeout,
    )
    service = WeatherService(provider=provider, city=city, units=units)
    logging.info("Weather service ready for %s", city)
    return service


def show_result(result: RefreshResult, args: argparse.Namespace) -> int:
    """Print the list, or the error notification. Returns the process exit code."""
    if not result.ok:
        print(result.error.user_message, file=sys.stderr)
        return EXIT_WEATHER_ERROR

    items = [result.weather]
    print(render_text(items, units=args.units))

    if args.output:
        icon_loader = None if args.no_icons else IconLoader(timeout=args.timeout)
        canvas = render_list(items, icon_loader=icon_loader, units=args.units)
        canvas.save(args.output)
        logging.info("List image written to %s", args.output)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)
    api_key, city, units = load_config(args.city, args.units)
    args.units = units

    with build_weather_service(api_key, city, units, args) as service:
        logging.info("Loading...")
        result = service.submit_refresh().result()
        logging.info("Loading finished")

    return show_result(result, args)


if __name__ == "__main__":
    sys.exit(main())
