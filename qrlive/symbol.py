"""
The complete encode pipeline: packer -> coder -> assembler -> mask selector.
"""

import logging
from dataclasses import dataclass
from typing import Tuple, Union

from qrlive.capacity import ErrorCorrectionLevel
from qrlive.ecc import build_codewords
from qrlive.masking import choose_best_mask, masked_symbol
from qrlive.matrix import QRMatrix, to_string
from qrlive.packer import bits_to_bytes, pack

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QrSymbol:
    """A finished symbol. ``modules[row][col]`` is True for dark modules."""

    text: str
    version: int
    level: ErrorCorrectionLevel
    mask: int
    modules: Tuple[Tuple[bool, ...], ...]

    @property
    def size(self) -> int:
        return len(self.modules)

    def is_dark(self, row: int, col: int) -> bool:
        return self.modules[row][col]

    def to_string(self, border: int = 4) -> str:
        return to_string(self.modules, border)


def encode(text: Union[str, bytes], level: Union[str, ErrorCorrectionLevel] = 'M',
           mask: int = None, version: int = None) -> QrSymbol:
    """
    Encode ``text`` into a new QR symbol.

    Args:
        text: Payload; strings are encoded as UTF-8 in byte mode
        level: 'L', 'M', 'Q' or 'H'
        mask: Force a mask pattern (0-7) instead of the lowest-penalty one
        version: Force a version instead of the smallest that fits

    Raises:
        InvalidPayload: the text has no UTF-8 encoding
        PayloadTooLarge: the payload does not fit in any allowed version
        AssemblyOverflow: internal codeword/capacity mismatch
    """
    level = ErrorCorrectionLevel.parse(level)
    if mask is not None and not 0 <= mask <= 7:
        raise ValueError(f"Mask pattern must be in range 0-7, got {mask}")

    bits, version = pack(text, level, version)
    logger.debug("Generating Version %d QR Code with EC Level %s", version, level.value)

    codewords = build_codewords(bits_to_bytes(bits), version, level)

    qr = QRMatrix(version)
    qr.place_data(codewords)

    if mask is None:
        mask, penalty, _ = choose_best_mask(qr.matrix, qr.reserved, level)
        logger.debug("Applied mask pattern %d (penalty: %d)", mask, penalty)
    grid = masked_symbol(qr.matrix, qr.reserved, level, mask)

    if isinstance(text, bytes):
        text = text.decode('utf-8', errors='replace')
    return QrSymbol(
        text=text,
        version=version,
        level=level,
        mask=mask,
        modules=tuple(tuple(bool(cell) for cell in row) for row in grid),
    )
