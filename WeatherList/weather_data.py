"""Display model - what the list renderer shows for one city."""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class DisplayWeather:
    """One fully-populated list row, created fresh per successful refresh."""
    label: str  # e.g., "Bengaluru (3:43 AM, Nov 15)"
    condition_main: str  # e.g., "Clouds", "N/A" when missing
    high_temp: str  # e.g., "26°C"
    temp_range: str  # e.g., "24°C / 28°C"
    summary: str  # e.g., "Overcast clouds. Feels like 27°C. Humidity: 70%."

    # Provider icon code (e.g., "04d"); None when the provider sent none
    icon_code: Optional[str] = None

    @property
    def has_icon(self) -> bool:
        return self.icon_code is not None
