"""
Default settings for rendering, exporting and the live controller.
"""

from dataclasses import dataclass, replace
from typing import Tuple, Union

Color = Union[str, Tuple[int, int, int]]


@dataclass(frozen=True)
class Settings:
    """Tunable values shared by the renderer, exporter and controller."""

    # Encoding
    level: str = 'M'

    # Rendering
    border: int = 4              # quiet zone, in modules
    raster_size: int = 512       # pixels per side of PNG/JPEG output
    dark: Color = 'black'
    light: Color = 'white'

    # Exporting
    jpeg_quality: int = 92
    page_size_mm: Tuple[float, float] = (210.0, 297.0)  # A4 portrait
    page_dpi: int = 150
    base_filename: str = 'qr-code'

    # Live controller
    debounce_ms: int = 300

    def replace(self, **changes) -> 'Settings':
        return replace(self, **changes)

    @property
    def page_size_px(self) -> Tuple[int, int]:
        width_mm, height_mm = self.page_size_mm
        return (round(width_mm / 25.4 * self.page_dpi),
                round(height_mm / 25.4 * self.page_dpi))


DEFAULT_SETTINGS = Settings()
