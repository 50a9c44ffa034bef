"""
Exporter: turns renderer output into downloadable file contents.
"""

import asyncio
import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Union

from PIL import Image

from qrlive.config import DEFAULT_SETTINGS, Settings
from qrlive.errors import PageOverflow, UnsupportedFormat
from qrlive.render import rasterize, to_svg
from qrlive.symbol import QrSymbol

logger = logging.getLogger(__name__)


class ExportFormat(Enum):
    VECTOR = 'vector'
    RASTER_LOSSLESS = 'raster-lossless'
    RASTER_LOSSY = 'raster-lossy'
    DOCUMENT = 'document'

    @classmethod
    def parse(cls, token: Union[str, 'ExportFormat']) -> 'ExportFormat':
        """Accept a format token or a file extension such as 'png'."""
        if isinstance(token, cls):
            return token
        if not isinstance(token, str):
            raise UnsupportedFormat(token)
        key = token.strip().lower().lstrip('.')
        key = FORMAT_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedFormat(token) from None

    @property
    def extension(self) -> str:
        return FILE_TYPES[self][0]

    @property
    def mime_type(self) -> str:
        return FILE_TYPES[self][1]


FORMAT_ALIASES = {
    'svg': 'vector',
    'png': 'raster-lossless',
    'jpg': 'raster-lossy',
    'jpeg': 'raster-lossy',
    'pdf': 'document',
}

FILE_TYPES = {
    ExportFormat.VECTOR: ('svg', 'image/svg+xml'),
    ExportFormat.RASTER_LOSSLESS: ('png', 'image/png'),
    ExportFormat.RASTER_LOSSY: ('jpg', 'image/jpeg'),
    ExportFormat.DOCUMENT: ('pdf', 'application/pdf'),
}


@dataclass(frozen=True)
class ExportResult:
    """File contents handed to a download sink."""
    data: bytes
    filename: str
    mime_type: str


def _raster(symbol: QrSymbol, settings: Settings) -> Image.Image:
    return rasterize(symbol, settings.raster_size, settings.border,
                     settings.dark, settings.light)


def _encode_image(img: Image.Image, fmt: str, **params) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format=fmt, **params)
    return buf.getvalue()


def _document(symbol: QrSymbol, settings: Settings) -> bytes:
    """
    Single PDF page with the raster centered on it.

    The page is saved in palette mode, which Pillow embeds losslessly
    (ASCIIHexDecode) rather than as a JPEG.
    """
    page = Image.new('RGB', settings.page_size_px, 'white')
    img = _raster(symbol, settings)
    if img.width > page.width or img.height > page.height:
        raise PageOverflow(f"Raster of {img.width}px does not fit on a "
                           f"{page.width}x{page.height}px page")
    page.paste(img, ((page.width - img.width) // 2, (page.height - img.height) // 2))
    # At most three colors: page, light and dark
    page = page.convert('P', palette=Image.Palette.ADAPTIVE, colors=4)
    return _encode_image(page, 'PDF', resolution=float(settings.page_dpi))


def export(symbol: QrSymbol, fmt: Union[str, ExportFormat],
           settings: Settings = None) -> ExportResult:
    """
    Produce file contents for ``fmt``.

    Raises:
        UnsupportedFormat: ``fmt`` is not a known format token
        PageOverflow: the raster is larger than the document page
    """
    fmt = ExportFormat.parse(fmt)
    settings = settings or DEFAULT_SETTINGS

    if fmt is ExportFormat.VECTOR:
        data = to_svg(symbol, settings.border, settings.dark, settings.light).encode('utf-8')
    elif fmt is ExportFormat.RASTER_LOSSLESS:
        data = _encode_image(_raster(symbol, settings), 'PNG')
    elif fmt is ExportFormat.RASTER_LOSSY:
        data = _encode_image(_raster(symbol, settings), 'JPEG',
                             quality=settings.jpeg_quality)
    else:
        data = _document(symbol, settings)

    logger.debug("Exported %s: %d bytes", fmt.value, len(data))
    return ExportResult(
        data=data,
        filename=f"{settings.base_filename}.{fmt.extension}",
        mime_type=fmt.mime_type,
    )


async def export_async(symbol: QrSymbol, fmt: Union[str, ExportFormat],
                       settings: Settings = None) -> ExportResult:
    """Run ``export`` in a worker thread so the event loop stays responsive."""
    fmt = ExportFormat.parse(fmt)
    return await asyncio.to_thread(export, symbol, fmt, settings)
