"""
qrlive: QR code generation from scratch with live preview and export.

The encode pipeline follows ISO/IEC 18004 for byte-mode symbols, versions
1-40, error correction levels L, M, Q and H:

- Codeword packing and version selection (``packer``)
- Reed-Solomon error correction over GF(256) (``galois``, ``ecc``)
- Matrix construction with function patterns (``matrix``)
- Data masking with penalty scoring (``masking``)
- Vector, raster and document output (``render``, ``export``)
- Debounced live regeneration (``controller``)
"""

from qrlive.capacity import ErrorCorrectionLevel
from qrlive.config import DEFAULT_SETTINGS, Settings
from qrlive.controller import LiveController, State
from qrlive.errors import (
    AssemblyOverflow, ClipboardUnavailable, DownloadFailed, EncodeError,
    InvalidPayload, NotReady, PageOverflow, PayloadTooLarge, QrError,
    UnsupportedFormat,
)
from qrlive.export import ExportFormat, ExportResult, export, export_async
from qrlive.render import Rect, rasterize, to_svg, vector_rects
from qrlive.symbol import QrSymbol, encode

__version__ = "1.0.0"
__all__ = [
    'encode', 'QrSymbol', 'ErrorCorrectionLevel',
    'export', 'export_async', 'ExportFormat', 'ExportResult',
    'rasterize', 'to_svg', 'vector_rects', 'Rect',
    'LiveController', 'State', 'Settings', 'DEFAULT_SETTINGS',
    'QrError', 'EncodeError', 'PayloadTooLarge', 'InvalidPayload',
    'AssemblyOverflow', 'PageOverflow',
    'UnsupportedFormat', 'NotReady', 'ClipboardUnavailable', 'DownloadFailed',
]
