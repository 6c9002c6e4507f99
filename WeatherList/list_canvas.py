"""Pillow-based rendering of the weather list to an image."""
import logging
import textwrap
from io import BytesIO
from typing import Dict, List, Optional, Tuple

import requests
from PIL import Image, ImageDraw, ImageFont

from layout import build_rows, hex_to_rgb
from weather_data import DisplayWeather

ICON_SIZE = 64
ROW_HEIGHT = 120
PADDING = 8
SUMMARY_WRAP = 52

BACKGROUND = (255, 255, 255)
TITLE_COLOR = (33, 33, 33)
SECONDARY_COLOR = (117, 117, 117)
DIVIDER_COLOR = (224, 224, 224)
PLACEHOLDER_COLOR = (200, 200, 200)


class IconLoader:
    """
    Fetches provider icons over HTTP and decodes them with Pillow.

    Results are memoized per URL for the lifetime of the loader, failures
    included, so one render never requests the same icon twice.
    """

    def __init__(self, session=None, timeout: int = 10):
        """
        Args:
            session: HTTP client with a requests-style ``get``; defaults to requests
            timeout: HTTP request timeout in seconds
        """
        self._http = session if session is not None else requests
        self.timeout = timeout
        self._icons: Dict[str, Optional[Image.Image]] = {}

    def load(self, url: Optional[str]) -> Optional[Image.Image]:
        """
        Load an icon.

        Returns:
            RGBA image, or None when there is no URL or the icon is unavailable
        """
        if url is None:
            return None
        if url in self._icons:
            return self._icons[url]

        icon = None
        try:
            logging.debug(f"Loading icon: {url}")
            response = self._http.get(url, timeout=self.timeout)
            response.raise_for_status()
            icon = Image.open(BytesIO(response.content)).convert("RGBA")
        except requests.exceptions.RequestException as e:
            logging.warning(f"Icon download failed for {url}: {e}")
        except OSError as e:
            # PIL.UnidentifiedImageError is an OSError
            logging.warning(f"Icon decode failed for {url}: {e}")

        self._icons[url] = icon
        return icon


class ListCanvas:
    """
    PIL-based canvas holding one image row per list item.

    Useful for previewing the list and for tests.
    """

    def __init__(self, width: int = 480, rows: int = 1, row_height: int = ROW_HEIGHT, scale: int = 1):
        """
        Initialize list canvas.

        Args:
            width: Canvas width in pixels
            rows: Number of list rows to make room for
            row_height: Height of one row in pixels
            scale: Scale factor for the saved image
        """
        self._width = width
        self._row_height = row_height
        self._height = max(rows, 1) * row_height
        self._scale = scale
        self._font = ImageFont.load_default()
        self.clear()

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def row_height(self) -> int:
        return self._row_height

    def clear(self) -> None:
        self._image = Image.new("RGB", (self._width, self._height), BACKGROUND)
        self._draw = ImageDraw.Draw(self._image)

    def draw_text(self, x: int, y: int, text: str, color: Tuple[int, int, int]) -> None:
        self._draw.text((x, y), text, fill=color, font=self._font)

    def draw_divider(self, y: int) -> None:
        self._draw.line([(0, y), (self._width, y)], fill=DIVIDER_COLOR)

    def draw_icon(self, x: int, y: int, icon: Optional[Image.Image]) -> None:
        """Paste an icon scaled to ICON_SIZE, or a placeholder box when there is none."""
        if icon is None:
            self._draw.rectangle(
                [x, y, x + ICON_SIZE - 1, y + ICON_SIZE - 1],
                outline=PLACEHOLDER_COLOR,
            )
            return
        icon = icon.resize((ICON_SIZE, ICON_SIZE))
        self._image.paste(icon, (x, y), icon)

    def get_pixel(self, x: int, y: int) -> Tuple[int, int, int]:
        return self._image.getpixel((x, y))

    def save(self, filename: str) -> None:
        """
        Save canvas to a PNG file.

        Args:
            filename: Output filename (e.g., "weather.png")
        """
        if self._scale > 1:
            scaled = self._image.resize(
                (self._width * self._scale, self._height * self._scale),
                Image.NEAREST
            )
            scaled.save(filename)
        else:
            self._image.save(filename)

    def get_image(self):
        """Get the PIL Image object (for advanced usage)."""
        return self._image


def render_list(
    items: List[DisplayWeather],
    icon_loader: Optional[IconLoader] = None,
    width: int = 480,
    units: str = "metric"
) -> ListCanvas:
    """
    Render list rows onto a new canvas.

    Args:
        items: Display rows, in list order
        icon_loader: Icon source; without one every row gets the placeholder
        width: Canvas width in pixels
        units: Unit system the temperatures are displayed in

    Returns:
        ListCanvas with one row per item
    """
    canvas = ListCanvas(width=width, rows=len(items))
    text_x = PADDING * 2 + ICON_SIZE

    for index, row in enumerate(build_rows(items, units)):
        top = index * canvas.row_height
        icon = icon_loader.load(row["icon_url"]) if icon_loader else None
        canvas.draw_icon(PADDING, top + PADDING, icon)

        canvas.draw_text(text_x, top + PADDING, row["title"], TITLE_COLOR)
        canvas.draw_text(text_x, top + PADDING + 16, row["condition"], SECONDARY_COLOR)
        canvas.draw_text(
            text_x, top + PADDING + 32,
            f"{row['temp']}  ({row['temp_range']})",
            hex_to_rgb(row["temp_color"])
        )
        for line_no, line in enumerate(textwrap.wrap(row["summary"], SUMMARY_WRAP)[:3]):
            canvas.draw_text(text_x, top + PADDING + 52 + line_no * 14, line, SECONDARY_COLOR)

        if index:
            canvas.draw_divider(top)

    logging.info(f"Rendered {len(items)} row(s) onto {canvas.width}x{canvas.height} canvas")
    return canvas
